"""Configuration module: exports Settings and load_config."""

from hotzenplotz.config.loader import load_config
from hotzenplotz.config.settings import Settings

__all__ = ["Settings", "load_config"]
