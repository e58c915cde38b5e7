"""
Raw MIFARE Classic dump decoding: extracts the UID and per-sector keys.

Trailers are visited with a read cursor rather than by block number: the
cursor starts at the first trailer (0x30), reads Key A, skips the access
bits, reads Key B, and then advances by the stride that follows the sector
just read (0x30 after sectors 0-30, 0xF0 from sector 31 onward).
"""

import logging
from dataclasses import dataclass, field

from mfckeys.errors import TruncatedReadError
from .mifare import (
    ACCESS_BITS_LENGTH, FIRST_TRAILER_OFFSET, KEY_LENGTH, UID_LENGTH,
    UID_REGION_LENGTH, CardGeometry, geometry_for_size, trailer_stride_after,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SectorKeyPair:
    """Key A / Key B taken from one sector trailer."""

    sector: int
    key_a: bytes
    key_b: bytes

    @property
    def key_a_hex(self) -> str:
        return self.key_a.hex()

    @property
    def key_b_hex(self) -> str:
        return self.key_b.hex()

    def to_dict(self) -> dict:
        return {
            "sector": self.sector,
            "key_a": self.key_a_hex,
            "key_b": self.key_b_hex,
        }


@dataclass
class CardKeys:
    """Everything decoded from one dump."""

    geometry: CardGeometry
    uid: bytes
    keys: list[SectorKeyPair] = field(default_factory=list)

    @property
    def uid_hex(self) -> str:
        """UID as 8 lowercase hex digits."""
        return self.uid[:UID_LENGTH].hex()

    def to_dict(self) -> dict:
        """Serialize to a JSON-compatible dict."""
        return {
            "card": self.geometry.label,
            "uid": self.uid_hex,
            "sectors": len(self.keys),
            "keys": [pair.to_dict() for pair in self.keys],
        }


class ByteCursor:
    """Sequential, bounds-checked reader over an immutable byte string."""

    def __init__(self, data: bytes, position: int = 0):
        self._data = bytes(data)
        self._position = 0
        self.seek(position)

    @property
    def position(self) -> int:
        return self._position

    @property
    def remaining(self) -> int:
        return len(self._data) - self._position

    def seek(self, position: int) -> None:
        """Move to an absolute offset."""
        if position < 0 or position > len(self._data):
            raise TruncatedReadError(position, 0, 0)
        self._position = position

    def skip(self, count: int) -> None:
        """Advance ``count`` bytes without reading them."""
        if count > self.remaining:
            raise TruncatedReadError(self._position, count, self.remaining)
        self._position += count

    def read(self, count: int) -> bytes:
        """Read exactly ``count`` bytes and advance past them."""
        if count > self.remaining:
            raise TruncatedReadError(self._position, count, self.remaining)
        chunk = self._data[self._position:self._position + count]
        self._position += count
        return chunk


def decode(buffer: bytes, geometry: CardGeometry) -> tuple[bytes, list[SectorKeyPair]]:
    """
    Decode a raw 1K/4K dump into its UID and per-sector key pairs.

    Args:
        buffer: The complete dump, 1024 or 4096 bytes.
        geometry: Card variant to decode as. Determines how many
            trailers are read.

    Returns:
        ``(uid, keys)`` where ``uid`` is 4 bytes and ``keys`` holds one
        SectorKeyPair per sector in ascending sector order.

    Raises:
        InvalidSizeError: buffer is neither 1024 nor 4096 bytes.
        TruncatedReadError: a trailer lies past the end of the buffer.
    """
    geometry_for_size(len(buffer))

    cursor = ByteCursor(buffer)
    uid = cursor.read(UID_REGION_LENGTH)[:UID_LENGTH]

    cursor.seek(FIRST_TRAILER_OFFSET)
    keys = []
    for sector in range(geometry.sector_count):
        if sector > 0:
            cursor.skip(trailer_stride_after(sector - 1))
        key_a = cursor.read(KEY_LENGTH)
        cursor.skip(ACCESS_BITS_LENGTH)
        key_b = cursor.read(KEY_LENGTH)
        keys.append(SectorKeyPair(sector=sector, key_a=key_a, key_b=key_b))

    logger.debug("Decoded %s dump, UID %s, %d sectors",
                 geometry.label, uid.hex(), len(keys))
    return uid, keys


def extract_keys(buffer: bytes) -> CardKeys:
    """Decode a dump, taking the card geometry from its length."""
    geometry = geometry_for_size(len(buffer))
    uid, keys = decode(buffer, geometry)
    return CardKeys(geometry=geometry, uid=uid, keys=keys)
