"""Typed dataclasses describing blog site configuration structures."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path


class SiteConfigError(ValueError):
    """Raised when the site configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class SiteMetadata:
    """Site-wide copy rendered into every page."""

    title: str
    description: str = ""
    author: str = ""
    base_url: str = ""


@dc.dataclass(slots=True)
class BuildConfig:
    """Locations and rendering options for a single build."""

    content_dir: Path = Path("content/posts")
    output_dir: Path = Path("public")
    assets_base_url: str = "/assets"
    pygments_style: str = "monokai"
    include_drafts: bool = False


@dc.dataclass(slots=True)
class SiteConfig:
    """A fully resolved site definition sourced from YAML config."""

    site: SiteMetadata
    build: BuildConfig = dc.field(default_factory=BuildConfig)

    def with_overrides(
        self,
        *,
        output_dir: Path | None = None,
        include_drafts: bool | None = None,
    ) -> SiteConfig:
        """Return a copy with CLI-level build overrides applied."""
        build = self.build
        if output_dir is not None:
            build = dc.replace(build, output_dir=output_dir)
        if include_drafts is not None:
            build = dc.replace(build, include_drafts=include_drafts)
        return dc.replace(self, build=build)


__all__ = ["BuildConfig", "SiteConfig", "SiteConfigError", "SiteMetadata"]
