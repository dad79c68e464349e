# gzassets/io/types.py
"""
File and metadata interfaces shared by content stores and the overlay.

Native store objects and the decompressing wrappers both implement these,
so callers never need to know which kind of handle they were given.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, NamedTuple, TypeAlias, Union

# Anything a read can copy into
WritableBuffer: TypeAlias = Union[bytearray, memoryview]


class ReadResult(NamedTuple):
    """Outcome of a single read: bytes copied and the end-of-data signal."""
    count: int
    eof: bool


class FileInfo(ABC):
    """Metadata describing an opened file or directory."""

    @abstractmethod
    def name(self) -> str:
        """Return the base name of the file."""
        pass

    @abstractmethod
    def size(self) -> int:
        """Return the content length in bytes."""
        pass

    @abstractmethod
    def mode(self) -> int:
        """Return stat-style mode bits (type and permissions)."""
        pass

    @abstractmethod
    def mod_time(self) -> datetime:
        """Return the modification time."""
        pass

    @abstractmethod
    def is_dir(self) -> bool:
        """Return True if this describes a directory."""
        pass

    @abstractmethod
    def sys(self) -> Any:
        """Return the underlying store-specific metadata, if any."""
        pass


class File(ABC):
    """
    A readable, statable handle returned by a content store or the overlay.

    Handles are context managers; leaving the block closes them.
    """

    @abstractmethod
    def stat(self) -> FileInfo:
        """Return metadata for this handle."""
        pass

    @abstractmethod
    def read(self, buf: WritableBuffer) -> ReadResult:
        """
        Copy the next bytes into buf.

        Args:
            buf: Writable destination; at most len(buf) bytes are copied

        Returns:
            ReadResult with the number of bytes copied and whether the end
            of the data has been reached
        """
        pass

    @abstractmethod
    def close(self) -> None:
        """Release the handle."""
        pass

    def __enter__(self) -> 'File':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
