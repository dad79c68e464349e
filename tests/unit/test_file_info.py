"""
Tests for the DecompressedFileInfo metadata adapter.
"""

from datetime import datetime, timezone
import stat

from gzassets.io.file_info import DecompressedFileInfo
from gzassets.io.storage_backend import StoreFileInfo

MODIFIED = datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)


def native_info(name="report.csv.gz", size=120, sys=None) -> StoreFileInfo:
    return StoreFileInfo(name, size, stat.S_IFREG | 0o640, MODIFIED, is_dir=False, sys=sys)


def test_name_strips_suffix():
    assert DecompressedFileInfo(native_info(), 4096).name() == "report.csv"


def test_name_strips_only_one_suffix():
    assert DecompressedFileInfo(native_info("archive.gz.gz"), 1).name() == "archive.gz"


def test_name_strips_custom_suffix_length():
    info = DecompressedFileInfo(native_info("report.csv.zz"), 1, suffix=".zz")
    assert info.name() == "report.csv"


def test_size_is_decompressed_length():
    info = DecompressedFileInfo(native_info(size=120), 4096)
    assert info.size() == 4096
    assert info.native.size() == 120


def test_other_fields_pass_through():
    marker = object()
    native = native_info(sys=marker)
    info = DecompressedFileInfo(native, 4096)

    assert info.mode() == stat.S_IFREG | 0o640
    assert info.mod_time() == MODIFIED
    assert info.is_dir() is False
    assert info.sys() is marker


def test_zero_length_content():
    assert DecompressedFileInfo(native_info(), 0).size() == 0
