# gzassets/io/__init__.py
"""
I/O module for gzassets.

Provides the content store interfaces and implementations, and the overlay
that serves gzip-compressed entries as if they were stored raw.
"""

# Direct imports - ImportError will propagate if components are missing
from .constants import GZIP_SUFFIX, DEFAULT_CHUNK_SIZE
from .types import File, FileInfo, ReadResult, WritableBuffer
from .storage_backend import (
    ContentStore,
    MemoryContentStore,
    DiskContentStore,
    StoreFile,
    StoreFileInfo,
    DiskFile
)
from .file_info import DecompressedFileInfo
from .decompressed_file import DecompressedFile, EOFMode
from .storage_config import StorageConfig
from .overlay import GzipOverlayFS, read_all

__all__ = [
    # Constants
    'GZIP_SUFFIX',
    'DEFAULT_CHUNK_SIZE',
    # Interfaces
    'File',
    'FileInfo',
    'ReadResult',
    'WritableBuffer',
    'ContentStore',
    # Stores
    'MemoryContentStore',
    'DiskContentStore',
    'StoreFile',
    'StoreFileInfo',
    'DiskFile',
    # Decompressed content
    'DecompressedFile',
    'DecompressedFileInfo',
    'EOFMode',
    # Overlay
    'StorageConfig',
    'GzipOverlayFS',
    'read_all',
]
