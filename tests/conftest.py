"""
Pytest configuration file for gzassets tests.
"""
import gzip
import sys
import pytest
from pathlib import Path

# Add the parent directory to sys.path to allow importing from gzassets
sys.path.insert(0, str(Path(__file__).parent.parent))

from gzassets.io.storage_backend import MemoryContentStore
from gzassets.io.overlay import GzipOverlayFS
from tests.helpers.test_utils import HELLO, STYLE


@pytest.fixture
def asset_files():
    """
    Raw and compressed entries as an embedded asset tree would hold them.

    - static/index.html: raw only
    - static/hello.txt: compressed only
    - static/css/style.css: compressed only, large enough to need several reads
    - static/both.txt: raw and compressed, with different content
    - static/broken.txt: compressed sibling that is not gzip data
    - static/truncated.txt: compressed sibling cut short
    - static/empty.txt: compressed sibling with no bytes at all
    """
    truncated = gzip.compress(STYLE)
    return {
        "static/index.html": b"<html></html>",
        "static/hello.txt.gz": gzip.compress(HELLO),
        "static/css/style.css.gz": gzip.compress(STYLE),
        "static/both.txt": b"raw form",
        "static/both.txt.gz": gzip.compress(b"compressed form"),
        "static/broken.txt.gz": b"this is not gzip",
        "static/truncated.txt.gz": truncated[:len(truncated) // 2],
        "static/empty.txt.gz": b"",
    }


@pytest.fixture
def memory_store(asset_files) -> MemoryContentStore:
    """Provides an in-memory store holding asset_files."""
    return MemoryContentStore(asset_files)


@pytest.fixture
def overlay(memory_store) -> GzipOverlayFS:
    """Provides an overlay with default configuration over memory_store."""
    return GzipOverlayFS(memory_store)
