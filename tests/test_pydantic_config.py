"""
Unit tests for the Pydantic configuration models.
"""

import gzip
import unittest
import tempfile
import os

from gzassets.core.pydantic_config import OverlayConfig, ConfigPresets
from gzassets.io.decompressed_file import EOFMode
from gzassets.io.overlay import GzipOverlayFS
from gzassets.io.storage_backend import MemoryContentStore
from gzassets.io.storage_config import StorageConfig


class TestPydanticConfig(unittest.TestCase):
    """Test the Pydantic configuration models."""

    def test_overlay_config_defaults(self):
        """Test the OverlayConfig defaults."""
        config = OverlayConfig()
        self.assertEqual(config.suffix, ".gz")
        self.assertEqual(config.eof_mode, "hold_cursor")
        self.assertEqual(config.chunk_size, 32 * 1024)

    def test_overlay_config_validation(self):
        """Test the OverlayConfig validators."""
        with self.assertRaises(ValueError):
            OverlayConfig(suffix="gz")  # Must start with a dot
        with self.assertRaises(ValueError):
            OverlayConfig(suffix=".")
        with self.assertRaises(ValueError):
            OverlayConfig(suffix="./gz")
        with self.assertRaises(ValueError):
            OverlayConfig(eof_mode="rewind")
        with self.assertRaises(ValueError):
            OverlayConfig(chunk_size=0)

    def test_to_storage_config(self):
        """Test conversion to the frozen StorageConfig."""
        storage_config = OverlayConfig(suffix=".gzip", eof_mode="advance_cursor", chunk_size=512).to_storage_config()
        self.assertEqual(storage_config, StorageConfig(".gzip", EOFMode.ADVANCE_CURSOR, 512))

        default = OverlayConfig().to_storage_config()
        self.assertEqual(default, StorageConfig())
        self.assertIs(default.eof_mode, EOFMode.HOLD_CURSOR)

    def test_storage_config_validation(self):
        """Test the StorageConfig post-init checks."""
        with self.assertRaises(ValueError):
            StorageConfig(suffix="")
        with self.assertRaises(ValueError):
            StorageConfig(chunk_size=-1)

    def test_serialization(self):
        """Test serialization to and from JSON and YAML."""
        config = OverlayConfig(suffix=".gzip", eof_mode="advance_cursor", chunk_size=4096)

        with tempfile.TemporaryDirectory() as temp_dir:
            json_path = os.path.join(temp_dir, "config.json")
            config.to_json(json_path)
            self.assertEqual(OverlayConfig.from_json(json_path), config)

            yaml_path = os.path.join(temp_dir, "config.yaml")
            config.to_yaml(yaml_path)
            self.assertEqual(OverlayConfig.from_yaml(yaml_path), config)

    def test_empty_yaml_uses_defaults(self):
        """Test that an empty YAML file yields the default configuration."""
        with tempfile.TemporaryDirectory() as temp_dir:
            yaml_path = os.path.join(temp_dir, "empty.yaml")
            with open(yaml_path, 'w') as f:
                f.write("")
            self.assertEqual(OverlayConfig.from_yaml(yaml_path), OverlayConfig())

    def test_presets(self):
        """Test the configuration presets."""
        self.assertEqual(ConfigPresets.default(), OverlayConfig())
        self.assertEqual(ConfigPresets.advancing_reads().eof_mode, "advance_cursor")

    def test_overlay_from_config(self):
        """Test building an overlay from an OverlayConfig."""
        store = MemoryContentStore({"a.txt.gz": gzip.compress(b"abc")})
        fs = GzipOverlayFS.from_config(store, ConfigPresets.advancing_reads())

        self.assertIs(fs.store, store)
        self.assertIs(fs.config.eof_mode, EOFMode.ADVANCE_CURSOR)
        f = fs.open("a.txt")
        self.assertEqual(f.read(bytearray(8)), (3, True))
        self.assertEqual(f.read(bytearray(8)), (0, True))


if __name__ == '__main__':
    unittest.main()
