"""Load and validate site configuration YAML for blog builds.

This subpackage parses the project's ``site.yaml`` file, applies defaults, and
produces typed dataclasses (:class:`SiteConfig`, :class:`BuildConfig`,
:class:`SiteMetadata`) that the content store, renderer, and site builder
consume. The primary entry point is :func:`load_site_config`.

Examples
--------
>>> from pathlib import Path
>>> from blog_pages.config import load_site_config
>>> site = load_site_config(Path("config/site.yaml"))  # doctest: +SKIP
>>> site.build.output_dir  # doctest: +SKIP
PosixPath('config/public')
"""

from .loader import load_site_config
from .models import BuildConfig, SiteConfig, SiteConfigError, SiteMetadata

__all__ = [
    "BuildConfig",
    "SiteConfig",
    "SiteConfigError",
    "SiteMetadata",
    "load_site_config",
]
