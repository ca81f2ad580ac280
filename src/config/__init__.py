"""Configuration module -- exports Settings and load_config."""

from src.config.loader import load_config
from src.config.settings import PROVIDER_NAMES, Settings

__all__ = ["PROVIDER_NAMES", "Settings", "load_config"]
