"""Extraction pipeline: read a dump file, decode its keys, write key files."""

import logging
import os
from pathlib import Path
from typing import Iterable, Union

from mfckeys.errors import DumpIOError, InvalidSizeError
from mfckeys.rfid.dump_reader import CardKeys, extract_keys
from mfckeys.rfid.key_writer import NamedBuffer, OutputFormat, encode_all
from mfckeys.rfid.mifare import CardGeometry

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]

VALID_SIZES = {g.dump_size for g in CardGeometry}


def read_dump(path: PathLike) -> bytes:
    """
    Read a raw dump file, rejecting wrong sizes before reading its contents.

    Raises:
        DumpIOError: the file cannot be opened or read.
        InvalidSizeError: the file is neither 1024 nor 4096 bytes.
    """
    path = Path(path)
    try:
        with path.open("rb") as f:
            size = f.seek(0, os.SEEK_END)
            if size not in VALID_SIZES:
                raise InvalidSizeError(size, source=str(path))
            f.seek(0)
            data = f.read()
    except OSError as e:
        raise DumpIOError(f"Can not open file '{path}'", path=str(path)) from e

    if len(data) != size:
        raise InvalidSizeError(len(data), source=str(path))
    logger.debug("Read %d bytes from %s", size, path)
    return data


def write_key_files(buffers: Iterable[NamedBuffer], directory: PathLike) -> list[Path]:
    """
    Write each buffer to ``directory``, overwriting existing files.

    Files written before a failure are left in place.
    """
    directory = Path(directory)
    written = []
    for buf in buffers:
        target = directory / buf.filename
        try:
            with target.open("wb") as f:
                f.write(buf.data)
        except OSError as e:
            raise DumpIOError(f"Can not write the file '{target}'", path=str(target)) from e
        logger.info("Wrote keys to: %s", target)
        written.append(target)
    return written


def extract_key_files(path: PathLike, formats: Iterable[OutputFormat],
                      directory: PathLike) -> tuple[CardKeys, list[Path]]:
    """Run the full pipeline and return the decoded card and written paths."""
    card = extract_keys(read_dump(path))
    buffers = encode_all(card.uid, card.keys, formats)
    return card, write_key_files(buffers, directory)
