"""
Settings resolution for the appmanifest CLI.

Provides:
- environment variable expansion for YAML configs
- layering of defaults <- config file <- APPMANIFEST_* env vars <- CLI flags
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from appmanifest.errors import InvalidChunkSize
from appmanifest.manifest import DEFAULT_MD5_SIZE

logger = logging.getLogger(__name__)

DEFAULTS: Dict[str, Any] = {
    "url": "",
    "md5size": DEFAULT_MD5_SIZE,
    "format": "xml",
    "log_level": "WARNING",
}

ENV_PREFIX = "APPMANIFEST_"


@dataclass(frozen=True)
class Settings:
    url: str
    md5size: int
    format: str
    log_level: str


def _expand_env(obj: Any) -> Any:
    if isinstance(obj, str):
        return os.path.expandvars(obj)
    if isinstance(obj, list):
        return [_expand_env(v) for v in obj]
    if isinstance(obj, dict):
        return {k: _expand_env(v) for k, v in obj.items()}
    return obj


def load_config(config_path: str) -> Dict[str, Any]:
    """Load a YAML config file, expanding $VARS in string values. Unknown keys are dropped."""
    with open(Path(config_path), "r", encoding="utf-8") as f:
        try:
            cfg = _expand_env(yaml.safe_load(f) or {})
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {config_path}: {e}") from e

    if not isinstance(cfg, dict):
        raise ValueError(f"Config {config_path} must be a mapping, got {type(cfg).__name__}")

    for key in sorted(set(cfg) - set(DEFAULTS)):
        logger.warning(f"Ignoring unknown config key: {key}")
    return {k: v for k, v in cfg.items() if k in DEFAULTS}


def env_overrides(env: Mapping[str, str]) -> Dict[str, Any]:
    """Collect APPMANIFEST_URL / _MD5SIZE / _FORMAT / _LOG_LEVEL values."""
    return {
        key: env[ENV_PREFIX + key.upper()]
        for key in DEFAULTS
        if ENV_PREFIX + key.upper() in env
    }


def _to_chunk_size(value: Any) -> int:
    if isinstance(value, bool):
        raise InvalidChunkSize(f"md5size must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise InvalidChunkSize(f"md5size must be an integer, got {value!r}") from e


def resolve_settings(
    config: Optional[Dict[str, Any]] = None,
    env: Optional[Mapping[str, str]] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> Settings:
    """
    Merge settings sources; later sources win.

    `overrides` entries that are None (flags the user did not pass) are ignored.
    """
    merged = dict(DEFAULTS)
    merged.update(config or {})
    merged.update(env_overrides(env if env is not None else os.environ))
    merged.update({k: v for k, v in (overrides or {}).items() if v is not None})

    return Settings(
        url=str(merged["url"]),
        md5size=_to_chunk_size(merged["md5size"]),
        format=str(merged["format"]).lower(),
        log_level=str(merged["log_level"]).upper(),
    )
