"""Exception hierarchy for dump decoding, key encoding and file handling."""

from typing import Optional


class KeyExtractError(Exception):
    """Base class for all key extraction errors."""


class InvalidSizeError(KeyExtractError, ValueError):
    """Dump length is neither 1024 (1K) nor 4096 (4K) bytes."""

    def __init__(self, size: int, source: Optional[str] = None):
        self.size = size
        self.source = source
        if source:
            msg = f"File '{source}' is not the correct size! ({size} bytes)"
        else:
            msg = f"Dump is not the correct size! ({size} bytes, expected 1024 or 4096)"
        super().__init__(msg)


class TruncatedReadError(KeyExtractError, ValueError):
    """Fewer bytes remain at an expected offset than a read requires."""

    def __init__(self, offset: int, wanted: int, available: int):
        self.offset = offset
        self.wanted = wanted
        self.available = available
        super().__init__(
            f"Truncated dump: wanted {wanted} bytes at offset 0x{offset:04X}, "
            f"only {available} available"
        )


class DumpIOError(KeyExtractError, OSError):
    """Input dump unreadable or output key file unwritable."""

    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path
        super().__init__(message)


class UsageError(KeyExtractError):
    """Missing or invalid command-line flags or arguments."""
