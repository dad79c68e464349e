"""
File handle over fully decompressed content.

The compressed sibling is decompressed once, up front, by the overlay. This
handle then serves sequential reads from the in-memory result while keeping
the compressed sibling's native handle open for stat and close.
"""

from enum import Enum, auto

from gzassets.io.constants import GZIP_SUFFIX
from gzassets.io.file_info import DecompressedFileInfo
from gzassets.io.types import File, FileInfo, ReadResult, WritableBuffer


class EOFMode(Enum):
    """How the read cursor behaves on the read that reaches the end."""
    HOLD_CURSOR = auto()     # Final read leaves the cursor in place; it repeats
    ADVANCE_CURSOR = auto()  # Final read consumes its bytes; later reads return (0, eof)


class DecompressedFile(File):
    """
    Sequential reader over a decompressed buffer.

    A read that delivers the last remaining bytes signals end-of-data along
    with them. Under EOFMode.HOLD_CURSOR, the default, that read does not
    advance the cursor, so every following read delivers the same final bytes
    and the same signal again. EOFMode.ADVANCE_CURSOR consumes them instead.

    There is no seeking, and handles are never shared: each open of a path
    produces its own buffer and cursor.
    """

    def __init__(self, native: File, content: bytes,
                 eof_mode: EOFMode = EOFMode.HOLD_CURSOR, suffix: str = GZIP_SUFFIX):
        """
        Initialize the handle.

        Args:
            native: Open handle of the compressed sibling, used for stat and close
            content: The complete decompressed content
            eof_mode: Cursor behaviour on the final read
            suffix: Compression suffix stripped from reported names
        """
        self._native = native
        self._content = bytes(content)
        self._offset = 0
        self._eof_mode = eof_mode
        self._suffix = suffix
        self._closed = False

    @property
    def offset(self) -> int:
        """Number of bytes consumed by reads so far."""
        return self._offset

    @property
    def content_length(self) -> int:
        return len(self._content)

    @property
    def eof_mode(self) -> EOFMode:
        return self._eof_mode

    @property
    def closed(self) -> bool:
        return self._closed

    def stat(self) -> FileInfo:
        native_info = self._native.stat()
        return DecompressedFileInfo(native_info, len(self._content), self._suffix)

    def read(self, buf: WritableBuffer) -> ReadResult:
        view = memoryview(buf).cast('B')
        remaining = len(self._content) - self._offset
        if len(view) > remaining:
            view = view[:remaining]

        n = len(view)
        view[:] = self._content[self._offset:self._offset + n]

        if n == remaining:
            if self._eof_mode is EOFMode.ADVANCE_CURSOR:
                self._offset += n
            return ReadResult(n, True)

        self._offset += n
        return ReadResult(n, False)

    def close(self) -> None:
        self._native.close()
        self._closed = True

    def __repr__(self):
        return (f"DecompressedFile(native={self._native!r}, length={len(self._content)}, "
                f"offset={self._offset}, eof_mode={self._eof_mode.name})")
