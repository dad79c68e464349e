"""
Pydantic configuration models for gzassets.

This module contains the user-facing configuration for the overlay, providing
validation and JSON/YAML serialization on top of the plain StorageConfig the
overlay itself consumes.
"""

from typing import Literal, Union
from pathlib import Path
import json
import yaml
from pydantic import BaseModel, Field, validator

from gzassets.io.constants import DEFAULT_CHUNK_SIZE, GZIP_SUFFIX
from gzassets.io.decompressed_file import EOFMode
from gzassets.io.storage_config import StorageConfig


class OverlayConfig(BaseModel):
    """
    Configuration for GzipOverlayFS.

    Attributes:
        suffix: Suffix appended to a logical path to find its compressed sibling
        eof_mode: Cursor behaviour on the final read of a decompressed file;
            "hold_cursor" repeats the final chunk, "advance_cursor" consumes it
        chunk_size: Destination size used when reading a file in full
    """
    suffix: str = Field(GZIP_SUFFIX, description="Compressed sibling suffix")
    eof_mode: Literal["hold_cursor", "advance_cursor"] = Field(
        "hold_cursor", description="Cursor behaviour on the final read")
    chunk_size: int = Field(DEFAULT_CHUNK_SIZE, description="Read size used by read_file")

    @validator('suffix')
    def validate_suffix(cls, v):
        """Validate that the suffix looks like a file extension."""
        if not v.startswith('.') or len(v) < 2:
            raise ValueError(f"suffix must start with '.' and name an extension, got {v!r}")
        if '/' in v or '\\' in v:
            raise ValueError(f"suffix must not contain path separators, got {v!r}")
        return v

    @validator('chunk_size')
    def validate_chunk_size(cls, v):
        """Validate that the chunk size is positive."""
        if v <= 0:
            raise ValueError(f"chunk_size must be positive, got {v}")
        return v

    def to_storage_config(self) -> StorageConfig:
        """
        Convert to the StorageConfig consumed by GzipOverlayFS.

        Returns:
            StorageConfig: Equivalent frozen configuration
        """
        return StorageConfig(
            suffix=self.suffix,
            eof_mode=EOFMode[self.eof_mode.upper()],
            chunk_size=self.chunk_size,
        )

    def to_json(self, path: Union[str, Path]) -> None:
        """
        Save the configuration to a JSON file.

        Args:
            path: Path to save the JSON file
        """
        with open(path, 'w') as f:
            json.dump(self.model_dump(), f, indent=2)

    def to_yaml(self, path: Union[str, Path]) -> None:
        """
        Save the configuration to a YAML file.

        Args:
            path: Path to save the YAML file
        """
        with open(path, 'w') as f:
            yaml.dump(self.model_dump(), f, default_flow_style=False)

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> 'OverlayConfig':
        """
        Load the configuration from a JSON file.

        Args:
            path: Path to the JSON file

        Returns:
            OverlayConfig: Loaded configuration
        """
        with open(path, 'r') as f:
            config_dict = json.load(f)

        return cls(**config_dict)

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> 'OverlayConfig':
        """
        Load the configuration from a YAML file.

        Args:
            path: Path to the YAML file

        Returns:
            OverlayConfig: Loaded configuration
        """
        with open(path, 'r') as f:
            config_dict = yaml.safe_load(f) or {}

        return cls(**config_dict)


class ConfigPresets:
    """Predefined configuration presets."""

    @staticmethod
    def default() -> OverlayConfig:
        """Default configuration: '.gz' siblings, final reads repeat."""
        return OverlayConfig()

    @staticmethod
    def advancing_reads() -> OverlayConfig:
        """Configuration whose final reads consume their bytes."""
        return OverlayConfig(eof_mode="advance_cursor")
