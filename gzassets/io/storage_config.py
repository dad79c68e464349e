"""
Storage configuration for gzassets.

This module provides the configuration the overlay filesystem is built with.
"""

from dataclasses import dataclass

from gzassets.io.constants import DEFAULT_CHUNK_SIZE, GZIP_SUFFIX
from gzassets.io.decompressed_file import EOFMode


@dataclass(frozen=True)
class StorageConfig:
    """
    Configuration for overlay lookups and reads.

    suffix is appended to a logical path to find its compressed sibling,
    eof_mode selects how decompressed handles treat the final read and
    chunk_size is the destination size used when a file is read in full.
    """

    suffix: str = GZIP_SUFFIX
    eof_mode: EOFMode = EOFMode.HOLD_CURSOR
    chunk_size: int = DEFAULT_CHUNK_SIZE

    def __post_init__(self):
        if not self.suffix:
            raise ValueError("suffix must not be empty")
        if self.chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {self.chunk_size}")
