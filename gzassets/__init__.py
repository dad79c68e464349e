"""gzassets: Transparent gzip decompression over read-only content stores."""

__version__ = "0.1.0"

from gzassets.io import (
    ContentStore,
    MemoryContentStore,
    DiskContentStore,
    GzipOverlayFS,
    EOFMode,
    StorageConfig,
    read_all,
)
from gzassets.core.pydantic_config import OverlayConfig, ConfigPresets

__all__ = [
    'ContentStore',
    'MemoryContentStore',
    'DiskContentStore',
    'GzipOverlayFS',
    'EOFMode',
    'StorageConfig',
    'read_all',
    'OverlayConfig',
    'ConfigPresets',
]
