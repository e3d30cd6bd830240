"""Load and expose column configuration from YAML (with fallbacks)."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from .config import ISSUE_LIST_COLUMNS, WEEKLY_CLOSURE_COLUMNS, WEEKLY_COUNT_COLUMNS, WEEKLY_RATIO_COLUMNS

_CACHE: dict[str, list[str]] | None = None

_DEFAULTS: dict[str, tuple[str, ...]] = {
    "issue_list": tuple(ISSUE_LIST_COLUMNS),
    "weekly_counts": tuple(WEEKLY_COUNT_COLUMNS),
    "weekly_ratio": tuple(WEEKLY_RATIO_COLUMNS),
    "weekly_closure": tuple(WEEKLY_CLOSURE_COLUMNS),
}


def _fallback() -> dict[str, list[str]]:
    return {name: list(cols) for name, cols in _DEFAULTS.items()}


def load_column_sets(base_path: str | Path | None = None, *, reload: bool = False):
    global _CACHE
    if _CACHE is not None and not reload:
        return _CACHE
    base = Path(base_path or Path(__file__).resolve().parent.parent)
    yaml_path = base / "columns.yaml"
    if not yaml_path.exists():
        _CACHE = _fallback()
        return _CACHE
    try:
        data = yaml.safe_load(yaml_path.read_text()) or {}
    except (OSError, yaml.YAMLError) as exc:
        logging.getLogger(__name__).warning("Ignoring unreadable %s: %s", yaml_path, exc)
        _CACHE = _fallback()
        return _CACHE
    sets = data.get("sets", {}) or {}
    _CACHE = {name: list(sets.get(name) or defaults) for name, defaults in _DEFAULTS.items()}
    return _CACHE


def get_columns(set_name: str) -> list[str]:
    sets = load_column_sets()
    return sets.get(set_name, [])
