from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

_ANALYSIS_CONFIG_CACHE: dict[str, Any] | None = None
_DEFAULT_ANALYSIS_CONFIG_PATH = Path(__file__).resolve().parents[1] / "config" / "analysis.yaml"


def _config_path() -> Path:
    override = os.getenv("ANALYSIS_CONFIG_PATH")
    return Path(override) if override else _DEFAULT_ANALYSIS_CONFIG_PATH


def get_analysis_config() -> dict[str, Any]:
    """Load analysis thresholds from rejection_analyzer/config/analysis.yaml and cache them.

    A missing file leaves every lookup on its call-site default. Unreadable or
    malformed files still raise.
    """
    global _ANALYSIS_CONFIG_CACHE

    if _ANALYSIS_CONFIG_CACHE is not None:
        return _ANALYSIS_CONFIG_CACHE

    path = _config_path()
    if not path.exists():
        logger.warning("analysis_config_missing path=%s using_defaults=true", path)
        _ANALYSIS_CONFIG_CACHE = {}
        return _ANALYSIS_CONFIG_CACHE

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise RuntimeError(f"Failed to read analysis config '{path}': {exc}") from exc

    try:
        parsed = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise RuntimeError(f"Invalid YAML in analysis config '{path}': {exc}") from exc

    if not isinstance(parsed, dict):
        raise RuntimeError(
            f"Invalid analysis config '{path}': expected a top-level mapping."
        )

    _ANALYSIS_CONFIG_CACHE = parsed
    return _ANALYSIS_CONFIG_CACHE


def get_analysis_value(path: str, default: Any = None) -> Any:
    """Get nested config value using dot path notation, e.g. 'documents.min_readable_chars'."""
    if not path:
        return default

    current: Any = get_analysis_config()
    for key in path.split("."):
        if not isinstance(current, dict):
            return default
        if key not in current:
            return default
        current = current[key]
    return current
