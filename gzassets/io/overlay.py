"""
Transparent gzip overlay over a read-only content store.

A logical path is served from the store as-is when it exists there. Otherwise
the overlay looks for the compressed sibling (path plus ".gz"), decompresses it
in full and hands back a handle over the decompressed bytes, so callers never
need to know which form the store holds.
"""

from typing import TYPE_CHECKING, Optional
import gzip
import io
import logging

from gzassets.io.constants import DEFAULT_CHUNK_SIZE
from gzassets.io.decompressed_file import DecompressedFile
from gzassets.io.storage_backend import ContentStore
from gzassets.io.storage_config import StorageConfig
from gzassets.io.types import File, FileInfo

if TYPE_CHECKING:
    from gzassets.core.pydantic_config import OverlayConfig

logger = logging.getLogger(__name__)

GZIP_MAGIC = b'\x1f\x8b'


def read_all(file: File, chunk_size: int = DEFAULT_CHUNK_SIZE) -> bytes:
    """
    Read a file until it signals end-of-data.

    The bytes delivered together with the end-of-data signal are kept, and
    reading stops there, so this terminates for handles whose final read does
    not advance the cursor as well as for plain sequential handles.

    Args:
        file: An open file
        chunk_size: Size of the destination buffer for each read

    Returns:
        The content read
    """
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")

    chunks = []
    buf = bytearray(chunk_size)
    while True:
        n, eof = file.read(buf)
        chunks.append(bytes(buf[:n]))
        if eof:
            return b''.join(chunks)


class _FileReader(io.RawIOBase):
    """Presents a File as a raw binary stream for the gzip module."""

    def __init__(self, file: File):
        super().__init__()
        self._file = file
        self._eof = False

    def readable(self) -> bool:
        return True

    def readinto(self, b) -> int:
        if self._eof:
            return 0
        n, eof = self._file.read(b)
        if eof or n == 0:
            self._eof = True
        return n


class GzipOverlayFS:
    """
    Read-only filesystem that decompresses gzip siblings on open.

    Holds nothing but the backing store and a frozen configuration, so one
    instance can serve any number of concurrent opens. Each open of a
    compressed path decompresses it again into a buffer owned by the
    returned handle alone.
    """

    def __init__(self, store: ContentStore, config: Optional[StorageConfig] = None):
        """
        Initialize the overlay.

        Args:
            store: The backing content store
            config: Lookup and read configuration; defaults to StorageConfig()
        """
        self._store = store
        self._config = config if config is not None else StorageConfig()

    @classmethod
    def from_config(cls, store: ContentStore, config: 'OverlayConfig') -> 'GzipOverlayFS':
        """Create an overlay from a validated OverlayConfig."""
        return cls(store, config.to_storage_config())

    @property
    def store(self) -> ContentStore:
        return self._store

    @property
    def config(self) -> StorageConfig:
        return self._config

    def open(self, path: str) -> File:
        """
        Open a logical path.

        If the store has path itself, the store's own handle is returned
        untouched; this is also how directories are opened. Otherwise the
        compressed sibling is opened and decompressed in full.

        Args:
            path: Logical path

        Returns:
            The store's handle for path, or a DecompressedFile

        Raises:
            FileNotFoundError: From the compressed sibling lookup, when neither
                form exists. The error from the raw lookup is discarded.
            gzip.BadGzipFile, zlib.error, EOFError: If the compressed sibling
                does not decompress. Its handle is closed first.
        """
        try:
            raw = self._store.open(path)
        except Exception as e:
            logger.debug(f"GzipOverlayFS: Raw lookup of {path} failed ({e}), trying compressed sibling")
        else:
            return raw

        gz_path = path + self._config.suffix
        compressed = self._store.open(gz_path)

        try:
            content = self._decompress(compressed, gz_path)
        except Exception:
            self._release(compressed, gz_path)
            raise

        logger.debug(f"GzipOverlayFS: Decompressed {gz_path} to {len(content)} bytes")
        return DecompressedFile(compressed, content, eof_mode=self._config.eof_mode,
                                suffix=self._config.suffix)

    def _decompress(self, compressed: File, gz_path: str) -> bytes:
        """Decompress the whole of an open compressed file."""
        # BufferedReader.read keeps reading through short reads until EOF
        data = io.BufferedReader(_FileReader(compressed)).read()

        # GzipFile reads an empty stream as empty content; require a header.
        magic = data[:len(GZIP_MAGIC)]
        if len(magic) < len(GZIP_MAGIC):
            raise EOFError(f"{gz_path}: compressed stream ended before the gzip header")
        if magic != GZIP_MAGIC:
            raise gzip.BadGzipFile(f"Not a gzipped file ({magic!r}): {gz_path}")

        with gzip.GzipFile(fileobj=io.BytesIO(data), mode='rb') as stream:
            return stream.read()

    @staticmethod
    def _release(file: File, path: str) -> None:
        """Close a handle whose open is being abandoned."""
        try:
            file.close()
        except Exception as e:
            logger.warning(f"GzipOverlayFS: Failed to close {path} after decompression error: {e}")

    def stat(self, path: str) -> FileInfo:
        """Return metadata for a logical path, as an opened handle reports it."""
        with self.open(path) as file:
            return file.stat()

    def read_file(self, path: str) -> bytes:
        """Return the full content of a logical path."""
        with self.open(path) as file:
            return read_all(file, self._config.chunk_size)

    def exists(self, path: str) -> bool:
        """
        Check whether a logical path exists in either form.

        Lookups follow open: any raw lookup failure falls through to the
        compressed sibling, and only FileNotFoundError from that lookup means
        the path is absent. Nothing is decompressed, so a compressed sibling
        that would fail to decompress still counts as existing.
        """
        try:
            raw = self._store.open(path)
        except Exception as e:
            logger.debug(f"GzipOverlayFS: Raw lookup of {path} failed ({e}), checking compressed sibling")
        else:
            raw.close()
            return True

        try:
            compressed = self._store.open(path + self._config.suffix)
        except FileNotFoundError:
            return False
        compressed.close()
        return True

    def __repr__(self):
        return f"GzipOverlayFS(store={self._store!r}, suffix={self._config.suffix!r})"
