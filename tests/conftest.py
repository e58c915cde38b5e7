"""Synthetic MIFARE Classic dumps shared by the test modules."""

import pytest

from mfckeys.rfid.mifare import (
    ACCESS_BITS_OFFSET, KEY_A_OFFSET, KEY_B_OFFSET, CardGeometry,
    block_to_byte_offset, sector_trailer_block,
)

UID = bytes.fromhex("DEADBEEF")
ACCESS_BITS = bytes.fromhex("FF078069")


def sector_key(prefix: int, sector: int) -> bytes:
    """A0A1A2A3A4A5 for sector 0 Key A, last byte incremented per sector."""
    return bytes([prefix + i for i in range(5)]) + bytes([prefix + 5 + sector])


def build_dump(geometry: CardGeometry, uid: bytes = UID, filler: int = 0x00) -> bytes:
    """Build a dump with known keys in every sector trailer."""
    data = bytearray([filler] * geometry.dump_size)
    data[0:4] = uid
    for sector in range(geometry.sector_count):
        base = block_to_byte_offset(sector_trailer_block(sector))
        data[base + KEY_A_OFFSET:base + KEY_A_OFFSET + 6] = sector_key(0xA0, sector)
        data[base + ACCESS_BITS_OFFSET:base + ACCESS_BITS_OFFSET + 4] = ACCESS_BITS
        data[base + KEY_B_OFFSET:base + KEY_B_OFFSET + 6] = sector_key(0xB0, sector)
    return bytes(data)


@pytest.fixture
def dump_1k() -> bytes:
    return build_dump(CardGeometry.ONE_K)


@pytest.fixture
def dump_4k() -> bytes:
    return build_dump(CardGeometry.FOUR_K)


@pytest.fixture
def make_dump():
    return build_dump


@pytest.fixture
def key_for():
    return sector_key
