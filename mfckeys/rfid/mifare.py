"""
MIFARE Classic 1K / 4K constants and structure definitions.

A MIFARE Classic 1K tag has:
- 16 sectors (0-15) of 4 blocks each (64 blocks, 1024 bytes)

A MIFARE Classic 4K tag has:
- 32 sectors (0-31) of 4 blocks each, followed by
- 8 sectors (32-39) of 16 blocks each (256 blocks, 4096 bytes)

Every block is 16 bytes. Block 0 holds the UID and manufacturer data.
The last block of each sector is its trailer (Key A + access bits + Key B).
"""

from enum import Enum

from mfckeys.errors import InvalidSizeError

BYTES_PER_BLOCK = 16

# Small sectors (all of 1K, sectors 0-31 of 4K)
SMALL_SECTOR_BLOCKS = 4
SMALL_SECTOR_COUNT = 32

# Large sectors (sectors 32-39 of 4K)
LARGE_SECTOR_BLOCKS = 16

# UID region at the start of block 0; only the first 4 bytes are the UID
UID_REGION_LENGTH = 8
UID_LENGTH = 4

# Sector trailer layout within a 16-byte block
KEY_A_OFFSET = 0
ACCESS_BITS_OFFSET = 6
ACCESS_BITS_LENGTH = 4
KEY_B_OFFSET = 10
KEY_LENGTH = 6

# Absolute offset of sector 0 Key A
FIRST_TRAILER_OFFSET = 0x30

# Distance from the end of one trailer's Key B to the next trailer's Key A
SMALL_TRAILER_STRIDE = 0x30
LARGE_TRAILER_STRIDE = 0xF0

# Sector index after which the large stride applies
LARGE_STRIDE_AFTER = 31


class CardGeometry(Enum):
    """Card variant, identified by the size of a full dump."""

    ONE_K = (1024, 16, "1K")
    FOUR_K = (4096, 40, "4K")

    def __init__(self, dump_size: int, sector_count: int, label: str):
        self.dump_size = dump_size
        self.sector_count = sector_count
        self.label = label

    @property
    def block_count(self) -> int:
        return self.dump_size // BYTES_PER_BLOCK


SECTOR_COUNTS = {g.sector_count for g in CardGeometry}


def geometry_for_size(size: int) -> CardGeometry:
    """Return the geometry matching a dump of ``size`` bytes."""
    for geometry in CardGeometry:
        if geometry.dump_size == size:
            return geometry
    raise InvalidSizeError(size)


def blocks_in_sector(sector: int) -> int:
    """Return the number of blocks in a given sector."""
    if sector < SMALL_SECTOR_COUNT:
        return SMALL_SECTOR_BLOCKS
    return LARGE_SECTOR_BLOCKS


def sector_to_block(sector: int) -> int:
    """Return the first block number for a given sector."""
    if sector < SMALL_SECTOR_COUNT:
        return sector * SMALL_SECTOR_BLOCKS
    return (SMALL_SECTOR_COUNT * SMALL_SECTOR_BLOCKS
            + (sector - SMALL_SECTOR_COUNT) * LARGE_SECTOR_BLOCKS)


def block_to_sector(block: int) -> int:
    """Return the sector number for a given block."""
    small_blocks = SMALL_SECTOR_COUNT * SMALL_SECTOR_BLOCKS
    if block < small_blocks:
        return block // SMALL_SECTOR_BLOCKS
    return SMALL_SECTOR_COUNT + (block - small_blocks) // LARGE_SECTOR_BLOCKS


def sector_trailer_block(sector: int) -> int:
    """Return the sector trailer block number for a given sector."""
    return sector_to_block(sector) + blocks_in_sector(sector) - 1


def is_sector_trailer(block: int) -> bool:
    """Check if a block number is a sector trailer."""
    return sector_trailer_block(block_to_sector(block)) == block


def block_to_byte_offset(block: int) -> int:
    """Return the byte offset in a full dump for a given block."""
    return block * BYTES_PER_BLOCK


def trailer_stride_after(sector: int) -> int:
    """
    Return the number of bytes between the end of ``sector``'s trailer keys
    and the start of the next sector's trailer.

    Sectors 0-30 are followed by three 16-byte data blocks; from sector 31
    onward the next sector is a 16-block sector, so fifteen data blocks
    intervene.
    """
    if sector < LARGE_STRIDE_AFTER:
        return SMALL_TRAILER_STRIDE
    return LARGE_TRAILER_STRIDE

