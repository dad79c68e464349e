"""Core configuration for gzassets."""
