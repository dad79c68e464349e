# gzassets/io/storage_backend.py
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path, PurePosixPath
from typing import Any, BinaryIO, Dict, Mapping, Optional, Set, Union

import errno
import logging
import os
import stat

from .types import File, FileInfo, ReadResult, WritableBuffer

logger = logging.getLogger(__name__)

# Modification time reported by stores that have no real timestamps
ZERO_TIME = datetime.fromtimestamp(0, tz=timezone.utc)

FILE_MODE = stat.S_IFREG | 0o444
DIRECTORY_MODE = stat.S_IFDIR | 0o555


def _not_found(path: Union[str, Path]) -> FileNotFoundError:
    return FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path))


class StoreFileInfo(FileInfo):
    """Native metadata produced by the content stores in this module."""

    def __init__(self, name: str, size: int, mode: int, mod_time: datetime,
                 is_dir: bool = False, sys: Any = None):
        self._name = name
        self._size = size
        self._mode = mode
        self._mod_time = mod_time
        self._is_dir = is_dir
        self._sys = sys

    def name(self) -> str:
        return self._name

    def size(self) -> int:
        return self._size

    def mode(self) -> int:
        return self._mode

    def mod_time(self) -> datetime:
        return self._mod_time

    def is_dir(self) -> bool:
        return self._is_dir

    def sys(self) -> Any:
        return self._sys

    def __repr__(self):
        return f"StoreFileInfo(name={self._name}, size={self._size}, mode={oct(self._mode)}, is_dir={self._is_dir})"


class StoreFile(File):
    """
    Handle over bytes already held in memory.

    Reads are plain sequential reads: the cursor always advances, and once
    the content is exhausted every read returns (0, eof=True). Directory
    handles carry no content and refuse to be read.
    """

    def __init__(self, info: StoreFileInfo, content: bytes = b''):
        self._info = info
        self._content = content
        self._offset = 0
        self._closed = False

    def _check_open(self) -> None:
        if self._closed:
            raise ValueError(f"I/O operation on closed file: {self._info.name()}")

    def stat(self) -> FileInfo:
        self._check_open()
        return self._info

    def read(self, buf: WritableBuffer) -> ReadResult:
        self._check_open()
        if self._info.is_dir():
            raise IsADirectoryError(errno.EISDIR, os.strerror(errno.EISDIR), self._info.name())

        view = memoryview(buf).cast('B')
        remaining = len(self._content) - self._offset
        if remaining == 0:
            return ReadResult(0, True)

        n = min(len(view), remaining)
        view[:n] = self._content[self._offset:self._offset + n]
        self._offset += n
        return ReadResult(n, False)

    def close(self) -> None:
        self._closed = True

    @property
    def closed(self) -> bool:
        return self._closed

    def __repr__(self):
        return f"StoreFile(name={self._info.name()}, offset={self._offset}, closed={self._closed})"


class DiskFile(File):
    """Handle over a regular file opened read-only from disk."""

    def __init__(self, fileobj: BinaryIO, name: str):
        self._fileobj = fileobj
        self._name = name

    def stat(self) -> FileInfo:
        # fileno() raises ValueError once the file is closed
        st = os.fstat(self._fileobj.fileno())
        return StoreFileInfo(
            self._name,
            st.st_size,
            st.st_mode,
            datetime.fromtimestamp(st.st_mtime, tz=timezone.utc),
            is_dir=False,
            sys=st,
        )

    def read(self, buf: WritableBuffer) -> ReadResult:
        view = memoryview(buf).cast('B')
        if len(view) == 0:
            return ReadResult(0, False)
        n = self._fileobj.readinto(view)
        if not n:
            return ReadResult(0, True)
        return ReadResult(n, False)

    def close(self) -> None:
        self._fileobj.close()

    @property
    def closed(self) -> bool:
        return self._fileobj.closed

    def __repr__(self):
        return f"DiskFile(name={self._name}, closed={self._fileobj.closed})"


class ContentStore(ABC):
    """
    Abstract base class for read-only, path-addressable content stores.

    Paths are slash-separated and relative to the store root, the way an
    embedded asset tree is addressed. A leading slash is ignored, backslashes
    are treated as separators, and "" or "." name the root itself.
    """

    @abstractmethod
    def open(self, path: str) -> File:
        """
        Open a file or directory.

        Args:
            path: Slash-separated path relative to the store root

        Returns:
            An open handle

        Raises:
            FileNotFoundError: If nothing exists at path
        """
        pass

    def normalize_path(self, path: Union[str, PurePosixPath]) -> str:
        """
        Normalize a path to the store's canonical key form.

        Args:
            path: The path to normalize

        Returns:
            Canonical key, "." for the root

        Raises:
            FileNotFoundError: If the path tries to climb above the root
        """
        normalized = str(path).replace('\\', '/')
        parts = [part for part in normalized.split('/') if part not in ('', '.')]
        if '..' in parts:
            raise _not_found(path)
        return '/'.join(parts) or '.'

    @staticmethod
    def base_name(key: str) -> str:
        """Return the last component of a canonical key ("." for the root)."""
        return PurePosixPath(key).name or '.'


class MemoryContentStore(ContentStore):
    """
    Immutable in-memory content store.

    Holds a fixed mapping of file paths to bytes. Directories are implied by
    the parents of the stored files and the root always exists. Nothing can
    be added or removed after construction, so one instance can be shared
    freely between threads.
    """

    def __init__(self, files: Mapping[str, bytes], mod_time: Optional[datetime] = None):
        """
        Initialize the store.

        Args:
            files: Mapping of slash-separated paths to file content
            mod_time: Modification time reported for every entry; defaults
                to the Unix epoch, as stores with no real timestamps do
        """
        self._files: Dict[str, bytes] = {}
        self._directories: Set[str] = {'.'}
        self._mod_time = mod_time if mod_time is not None else ZERO_TIME

        for path, content in files.items():
            key = self.normalize_path(path)
            if key == '.':
                raise ValueError(f"Cannot store file content at the root: {path!r}")
            self._files[key] = bytes(content)
            self._add_parents(key)

        clashes = self._directories.intersection(self._files)
        if clashes:
            raise ValueError(f"Paths used both as file and directory: {sorted(clashes)}")

        logger.debug(f"MemoryContentStore: Initialized with {len(self._files)} files "
                     f"in {len(self._directories)} directories")

    def _add_parents(self, key: str) -> None:
        """Record every ancestor directory of key."""
        parent = PurePosixPath(key).parent
        while str(parent) != '.' and str(parent) not in self._directories:
            self._directories.add(str(parent))
            parent = parent.parent

    @classmethod
    def from_directory(cls, root: Union[str, Path], mod_time: Optional[datetime] = None) -> 'MemoryContentStore':
        """
        Snapshot every regular file below a directory on disk.

        Args:
            root: Directory to read
            mod_time: Modification time to report for all entries

        Returns:
            A new MemoryContentStore keyed by paths relative to root
        """
        root = Path(root)
        if not root.is_dir():
            raise NotADirectoryError(errno.ENOTDIR, os.strerror(errno.ENOTDIR), str(root))

        files: Dict[str, bytes] = {}
        for dirpath, _dirnames, filenames in os.walk(root):
            for filename in filenames:
                full_path = Path(dirpath) / filename
                files[full_path.relative_to(root).as_posix()] = full_path.read_bytes()

        logger.debug(f"MemoryContentStore: Loaded {len(files)} files from {root}")
        return cls(files, mod_time=mod_time)

    def open(self, path: str) -> File:
        key = self.normalize_path(path)
        if key in self._files:
            content = self._files[key]
            info = StoreFileInfo(self.base_name(key), len(content), FILE_MODE, self._mod_time)
            return StoreFile(info, content)
        if key in self._directories:
            info = StoreFileInfo(self.base_name(key), 0, DIRECTORY_MODE, self._mod_time, is_dir=True)
            return StoreFile(info)
        raise _not_found(path)

    def __contains__(self, path: str) -> bool:
        try:
            key = self.normalize_path(path)
        except FileNotFoundError:
            return False
        return key in self._files or key in self._directories

    def __len__(self) -> int:
        return len(self._files)


class DiskContentStore(ContentStore):
    """
    Read-only view of a directory on disk.

    Nothing is cached: every open goes to the filesystem, and metadata comes
    straight from os.stat.
    """

    def __init__(self, root: Union[str, Path]):
        self._root = Path(root)
        if not self._root.is_dir():
            raise NotADirectoryError(errno.ENOTDIR, os.strerror(errno.ENOTDIR), str(root))
        logger.debug(f"DiskContentStore: Serving {self._root}")

    @property
    def root(self) -> Path:
        return self._root

    def open(self, path: str) -> File:
        key = self.normalize_path(path)
        full_path = self._root if key == '.' else self._root.joinpath(*key.split('/'))

        st = os.stat(full_path)
        if stat.S_ISDIR(st.st_mode):
            info = StoreFileInfo(
                self.base_name(key),
                0,
                st.st_mode,
                datetime.fromtimestamp(st.st_mtime, tz=timezone.utc),
                is_dir=True,
                sys=st,
            )
            return StoreFile(info)
        return DiskFile(open(full_path, 'rb'), self.base_name(key))

    def __repr__(self):
        return f"DiskContentStore(root={self._root})"
