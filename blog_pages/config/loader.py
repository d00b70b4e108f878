"""Load site configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .helpers import (
    _normalize_base_url,
    _optional_str,
    _parse_bool,
    _require_mapping,
    _resolve_path,
)
from .models import BuildConfig, SiteConfig, SiteConfigError, SiteMetadata


def load_site_config(path: Path) -> SiteConfig:
    """Load the YAML configuration describing the site and its build.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration file (for example,
        ``config/site.yaml``). Relative paths inside the file are resolved
        against the directory containing it.

    Returns
    -------
    SiteConfig
        Parsed site configuration, including site metadata and build options.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    SiteConfigError
        If the YAML cannot be parsed, the top-level structure is not a mapping,
        or required fields are missing or invalid (for example, no
        ``site.title``).

    Examples
    --------
    >>> from pathlib import Path
    >>> from blog_pages.config import load_site_config
    >>> config = load_site_config(Path("config/site.yaml"))  # doctest: +SKIP
    >>> config.site.title  # doctest: +SKIP
    'Notes'
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    try:
        with path.open("r", encoding="utf-8") as handle:
            loaded = loader.load(handle) or {}
    except YAMLError as exc:
        msg = f"Configuration file '{path}' is not valid YAML: {exc}"
        raise SiteConfigError(msg) from exc
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise SiteConfigError(msg)
    raw: dict[str, typ.Any] = dict(loaded)
    base_dir = path.parent

    site = _build_site_metadata(_require_mapping(raw.get("site"), "site"))
    build = _build_build_config(_require_mapping(raw.get("build"), "build"), base_dir)
    return SiteConfig(site=site, build=build)


def _build_site_metadata(payload: typ.Mapping[str, typ.Any]) -> SiteMetadata:
    """Build the SiteMetadata block, requiring a non-empty title."""
    title = _optional_str(payload.get("title"))
    if not title:
        msg = "Site configuration is missing 'site.title'."
        raise SiteConfigError(msg)
    return SiteMetadata(
        title=title,
        description=_optional_str(payload.get("description")) or "",
        author=_optional_str(payload.get("author")) or "",
        base_url=_normalize_base_url(payload.get("base_url")),
    )


def _build_build_config(
    payload: typ.Mapping[str, typ.Any], base_dir: Path
) -> BuildConfig:
    """Build the BuildConfig block using defaults for absent keys."""
    defaults = BuildConfig()
    include_drafts = payload.get("include_drafts", defaults.include_drafts)
    return BuildConfig(
        content_dir=_resolve_path(
            payload.get("content_dir"), base_dir, defaults.content_dir
        ),
        output_dir=_resolve_path(payload.get("output_dir"), base_dir, defaults.output_dir),
        assets_base_url=_normalize_base_url(
            payload.get("assets_base_url"), defaults.assets_base_url
        ),
        pygments_style=_optional_str(payload.get("pygments_style"))
        or defaults.pygments_style,
        include_drafts=_parse_bool(include_drafts, "build.include_drafts"),
    )


__all__ = ["load_site_config"]
