"""Configuration loading and sample generation."""

from nuch.config.loader import (
    SAMPLE_CONFIG,
    config_file_path,
    load_config,
    parse_config,
    write_sample_config,
)

__all__ = [
    "SAMPLE_CONFIG",
    "config_file_path",
    "load_config",
    "parse_config",
    "write_sample_config",
]
