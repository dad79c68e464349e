"""
Metadata adapter for decompressed content.

Reports the decompressed length and the logical name of a file whose bytes
live in a compressed sibling, passing every other field through unchanged.
"""

from datetime import datetime
from typing import Any

from gzassets.io.constants import GZIP_SUFFIX
from gzassets.io.types import FileInfo


class DecompressedFileInfo(FileInfo):
    """
    FileInfo for a compressed sibling, as seen through the overlay.

    The wrapped metadata must come from a path that had the suffix appended;
    the name is trimmed by the suffix length without checking that it ends
    with it.
    """

    def __init__(self, native: FileInfo, actual_size: int, suffix: str = GZIP_SUFFIX):
        """
        Initialize the adapter.

        Args:
            native: Metadata of the compressed sibling
            actual_size: Length of the decompressed content
            suffix: Compression suffix to strip from the native name
        """
        self._native = native
        self._actual_size = actual_size
        self._suffix = suffix

    def name(self) -> str:
        name = self._native.name()
        return name[:len(name) - len(self._suffix)]

    def size(self) -> int:
        return self._actual_size

    def mode(self) -> int:
        return self._native.mode()

    def mod_time(self) -> datetime:
        return self._native.mod_time()

    def is_dir(self) -> bool:
        return self._native.is_dir()

    def sys(self) -> Any:
        return self._native.sys()

    @property
    def native(self) -> FileInfo:
        """The wrapped metadata of the compressed sibling."""
        return self._native

    def __repr__(self):
        return f"DecompressedFileInfo(name={self.name()}, size={self._actual_size}, native={self._native!r})"
