from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml

CONFIG_ENV_VAR = "PROJECT_STRUCTURE_CONFIG"
DEFAULT_CONFIG_FILE = "project_structure.yaml"

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass
class AnalyzerSettings:
    sort_children: bool = False
    max_depth: Optional[int] = None
    log_level: str = "INFO"


def load_yaml(path: str | Path) -> dict[str, Any]:
    p = Path(path)
    if not p.exists():
        return {}
    raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"{p} must contain a mapping at the top level")
    return raw


def settings_from_dict(raw: dict[str, Any]) -> AnalyzerSettings:
    sort_children = raw.get("sort_children", False)
    if not isinstance(sort_children, bool):
        raise ValueError("sort_children must be true or false")

    max_depth = raw.get("max_depth")
    if max_depth is not None:
        if isinstance(max_depth, bool) or not isinstance(max_depth, int) or max_depth < 1:
            raise ValueError("max_depth must be a positive integer or null")

    log_level = str(raw.get("log_level", "INFO")).upper()
    if log_level not in _LOG_LEVELS:
        raise ValueError(f"Unknown log_level: {log_level}")

    return AnalyzerSettings(sort_children=sort_children, max_depth=max_depth, log_level=log_level)


def load_settings(path: str | Path | None = None) -> AnalyzerSettings:
    """
    Read analyzer settings from YAML. Without an explicit path the file named by
    $PROJECT_STRUCTURE_CONFIG is used, falling back to ./project_structure.yaml.
    A missing file gives the defaults.
    """
    if path is None:
        path = os.environ.get(CONFIG_ENV_VAR, DEFAULT_CONFIG_FILE)
    return settings_from_dict(load_yaml(path))
