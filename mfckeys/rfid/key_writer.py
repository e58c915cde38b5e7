"""
Key file building: converts decoded sector keys to downstream key formats.

Supported output formats:
- mfocGUI: two files, a<uid>.dump (all A keys) and b<uid>.dump (all B keys)
- Proxmark: one file, <uid>.bin (all A keys followed by all B keys)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from .dump_reader import SectorKeyPair
from .mifare import KEY_LENGTH, SECTOR_COUNTS, UID_LENGTH


class OutputFormat(str, Enum):
    MFOC_DUMP = "mfoc"
    PROXMARK_BIN = "proxmark"


@dataclass(frozen=True)
class NamedBuffer:
    """Bytes to persist, with the file name the tools expect."""

    filename: str
    data: bytes


def uid_to_name(uid: bytes) -> str:
    """Format the 4-byte UID as 8 lowercase hex digits."""
    return uid[:UID_LENGTH].hex().rjust(2 * UID_LENGTH, "0")


def _check_key_set(keys: list[SectorKeyPair]) -> None:
    """Reject key sets that could not have come out of the decoder."""
    if len(keys) not in SECTOR_COUNTS:
        raise ValueError(
            f"Key set must hold one of {sorted(SECTOR_COUNTS)} sectors, got {len(keys)}"
        )
    for index, pair in enumerate(keys):
        if pair.sector != index:
            raise ValueError(f"Sector {pair.sector} found at position {index}")
        if len(pair.key_a) != KEY_LENGTH or len(pair.key_b) != KEY_LENGTH:
            raise ValueError(f"Sector {index} keys must be {KEY_LENGTH} bytes each")


def join_a_keys(keys: list[SectorKeyPair]) -> bytes:
    """All Key A values concatenated in sector order."""
    return b"".join(pair.key_a for pair in keys)


def join_b_keys(keys: list[SectorKeyPair]) -> bytes:
    """All Key B values concatenated in sector order."""
    return b"".join(pair.key_b for pair in keys)


def build_mfoc_dumps(uid: bytes, keys: list[SectorKeyPair]) -> list[NamedBuffer]:
    """Build the mfocGUI A and B key dumps."""
    name = uid_to_name(uid)
    return [
        NamedBuffer(filename=f"a{name}.dump", data=join_a_keys(keys)),
        NamedBuffer(filename=f"b{name}.dump", data=join_b_keys(keys)),
    ]


def build_proxmark_bin(uid: bytes, keys: list[SectorKeyPair]) -> list[NamedBuffer]:
    """Build the Proxmark dumpkeys.bin equivalent."""
    return [NamedBuffer(
        filename=f"{uid_to_name(uid)}.bin",
        data=join_a_keys(keys) + join_b_keys(keys),
    )]


_BUILDERS = {
    OutputFormat.MFOC_DUMP: build_mfoc_dumps,
    OutputFormat.PROXMARK_BIN: build_proxmark_bin,
}


def encode(uid: bytes, keys: list[SectorKeyPair], fmt: OutputFormat) -> list[NamedBuffer]:
    """
    Serialize decoded keys into the buffers of one output format.

    Args:
        uid: Card UID; only the first 4 bytes are used for naming.
        keys: One SectorKeyPair per sector, in sector order.
        fmt: Target key file format.

    Returns:
        The buffers to write, in the order they should be written.
    """
    _check_key_set(keys)
    return _BUILDERS[OutputFormat(fmt)](uid, keys)


def encode_all(uid: bytes, keys: list[SectorKeyPair],
               formats: Iterable[OutputFormat]) -> list[NamedBuffer]:
    """Encode into several formats, keeping the order of ``formats``."""
    buffers = []
    for fmt in formats:
        buffers.extend(encode(uid, keys, fmt))
    return buffers
