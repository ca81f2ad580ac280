"""YAML configuration loader with environment variable overrides.

# ─── CONFIGURATION HIERARCHY ──────────────────────────────────────────
#
#   1. config/config.yaml  -- static defaults checked into the repo
#                             (cache sizing, upload limits)
#   2. .env file           -- local developer overrides
#   3. Environment vars    -- deploy-time values
#
# load_config() reads the YAML file, fills in built-in defaults for any
# section the file omits, then deep-merges the env-derived values from
# Settings on top.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any

import yaml

from src.config.settings import Settings

# Used when config.yaml is absent or leaves a section out.  TTLs are seconds.
_DEFAULTS: dict[str, Any] = {
    "cache": {
        "insights": {"ttl": 1800, "max_size": 1000},
        "summaries": {"ttl": 3600, "max_size": 500},
        "topics": {"ttl": 3600, "max_size": 500},
    },
    "api": {
        "content_preview_length": 500,
    },
}


def load_config(path: str = "config/config.yaml", settings: Settings | None = None) -> dict:
    """Load YAML config and merge with environment-based Settings.

    Args:
        path: Path to the YAML configuration file.
        settings: Settings to overlay; a fresh ``Settings()`` when omitted.

    Returns:
        Fully resolved configuration dictionary.
    """
    config = copy.deepcopy(_DEFAULTS)

    config_path = Path(path)
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            yaml_config = yaml.safe_load(f) or {}
        _deep_merge(config, yaml_config)

    settings = settings or Settings()
    env_overrides = {
        "app": {
            "host": settings.app_host,
            "port": settings.app_port,
            "env": settings.app_env,
        },
        "ai": {
            "provider": settings.ai_provider,
            "available_providers": settings.get_available_providers(),
        },
        "upload": {
            "max_size": settings.upload_max_size,
        },
        "logging": {
            "level": settings.log_level,
        },
    }

    _deep_merge(config, env_overrides)
    return config


def _deep_merge(base: dict, overrides: dict) -> None:
    """Recursively merge overrides into base dict, mutating base in place."""
    for key, value in overrides.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
