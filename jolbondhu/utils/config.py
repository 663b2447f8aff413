"""Helpers for loading YAML configuration."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config/jolbondhu.yml"


def load_yaml(path: str) -> Dict[str, Any]:
    """Load a YAML file into a dictionary."""
    cfg_path = Path(path)
    if not cfg_path.exists():
        raise FileNotFoundError(f"Config not found at {path}")
    with cfg_path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config at {path} is not a mapping")
    return data


def load_station_columns(cfg: Dict[str, Any]) -> Optional[Dict[str, int]]:
    """
    Extract the positional station column mapping from a loaded config.

    Returns None when the config has no `station_columns` section, letting
    callers fall back to the built-in mapping. A mapping that is present
    replaces the built-in one entirely, so it must name every field to read.
    """
    columns = cfg.get("station_columns")
    if columns is None:
        return None
    if not isinstance(columns, dict):
        raise ValueError("Invalid station_columns mapping in config")
    try:
        return {str(field): int(index) for field, index in columns.items()}
    except (TypeError, ValueError) as exc:
        logger.error("Non-integer column index in station_columns: %s", exc)
        raise ValueError("station_columns indices must be integers") from exc
