"""Load JSON configs from configs/ and read VNA_* environment overrides."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Callable, TypeVar

_CONFIGS_DIR = Path(__file__).resolve().parents[2] / "configs"

_CONFIG_CACHE: dict[str, dict] = {}

T = TypeVar("T")


def load_config(config_name: str) -> dict:
    """Load a JSON config file from the configs/ directory.

    Results are cached per file name after first load.
    """
    if config_name in _CONFIG_CACHE:
        return _CONFIG_CACHE[config_name]

    config_path = _CONFIGS_DIR / config_name
    with open(config_path, encoding="utf-8") as f:
        data = json.load(f)

    _CONFIG_CACHE[config_name] = data
    return data


def env_setting(name: str, default: T, cast: Callable[[str], Any] = str) -> T:
    """Read ``VNA_<NAME>`` from the environment, falling back to *default*.

    Raises:
        ValueError: If the variable is set but cannot be cast.
    """
    raw = os.environ.get(f"VNA_{name.upper()}")
    if raw is None or raw == "":
        return default
    try:
        return cast(raw)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid value for VNA_{name.upper()}: {raw!r}") from exc
