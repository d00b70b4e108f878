"""Utility helpers shared by the blog configuration loader."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from .models import SiteConfigError


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _require_mapping(
    value: object | None, section: str
) -> typ.Mapping[str, typ.Any]:
    """Return ``value`` as a mapping, treating ``None`` as an empty section."""
    match value:
        case None:
            return {}
        case dict():
            return value
        case _:
            msg = f"Section '{section}' must be a mapping."
            raise SiteConfigError(msg)


def _resolve_path(value: object | None, base_dir: Path, default: Path) -> Path:
    """Resolve ``value`` relative to ``base_dir``, falling back to ``default``."""
    text = _optional_str(value)
    path = Path(text) if text else default
    if path.is_absolute():
        return path
    return base_dir / path


def _parse_bool(value: object, key: str) -> bool:
    """Return a boolean for YAML booleans and ``true``/``false`` strings."""
    match value:
        case bool():
            return value
        case str() as text if text.strip().lower() in {"true", "false"}:
            return text.strip().lower() == "true"
        case _:
            msg = f"'{key}' must be a boolean, got {value!r}."
            raise SiteConfigError(msg)


def _normalize_base_url(value: object | None, default: str = "") -> str:
    """Strip trailing slashes so URLs can be joined with ``/`` safely."""
    text = _optional_str(value)
    if text is None:
        return default
    return text.rstrip("/")


__all__ = [
    "_normalize_base_url",
    "_optional_str",
    "_parse_bool",
    "_require_mapping",
    "_resolve_path",
]
