"""Cyclopts CLI entrypoint for building the blog and inspecting its listing.

The ``pages`` console script defined here renders the static site from the
content directory named in ``config/site.yaml`` and prints the date-ordered
article listing. Typical usage involves running ``pages build`` locally or in
CI, and ``pages list --drafts`` to check what a build would publish.

Examples
--------
Build the site for the default configuration:

>>> from blog_pages.cli import main
>>> main()  # doctest: +SKIP

Build into a custom directory, drafts included:

>>> from blog_pages.cli import app
>>> app(["build", "--output-dir", "dist", "--drafts"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .config import load_site_config
from .content import ContentStore, MetadataIndex, ParseError
from .site_builder import SiteBuilder

DEFAULT_CONFIG = Path("config/site.yaml")

app = App(name="pages", config=cyclopts.config.Env("INPUT_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _configure_logging(*, verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command(help="Render every published article into static HTML.")
def build(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to site config", env_var="INPUT_CONFIG")
    ] = DEFAULT_CONFIG,
    output_dir: typ.Annotated[
        Path | None,
        Parameter(help="Override the output folder", env_var="INPUT_OUTPUT_DIR"),
    ] = None,
    drafts: typ.Annotated[
        bool, Parameter(help="Publish draft articles too", env_var="INPUT_DRAFTS")
    ] = False,
    verbose: typ.Annotated[bool, Parameter(help="Log debug output")] = False,
) -> None:
    """Build the site described by ``config``.

    Parameters
    ----------
    config : Path, optional
        Path to the ``site.yaml`` configuration file (overridable via
        ``INPUT_CONFIG``).
    output_dir : Path or None, optional
        Override the configured output directory.
    drafts : bool, optional
        Include documents flagged ``draft: true`` in the build.
    verbose : bool, optional
        Emit debug logging for discovery and rendering.

    Raises
    ------
    SystemExit
        With status ``1`` when sources fail to load or any document fails to
        render; every failure is printed before exiting.
    """
    _configure_logging(verbose=verbose)
    site_config = load_site_config(config).with_overrides(
        output_dir=output_dir, include_drafts=drafts or None
    )
    try:
        result = SiteBuilder(site_config).run()
    except ParseError as exc:
        print(f"error: {exc}")
        raise SystemExit(1) from exc

    for path in result.written:
        print(f"wrote {_format_path(path)}")
    for failure in result.failures:
        print(f"failed {failure.slug}: {failure.error}")
    if not result.ok:
        raise SystemExit(1)


@app.command(name="list", help="Print the date-ordered article listing.")
def list_posts(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to site config", env_var="INPUT_CONFIG")
    ] = DEFAULT_CONFIG,
    drafts: typ.Annotated[
        bool, Parameter(help="Include draft articles", env_var="INPUT_DRAFTS")
    ] = False,
) -> None:
    """Print one ``date  slug  title`` row per article, newest first."""
    site_config = load_site_config(config)
    store = ContentStore(site_config.build.content_dir)
    try:
        store.load()
    except ParseError as exc:
        print(f"error: {exc}")
        raise SystemExit(1) from exc
    for entry in MetadataIndex(store).list(include_drafts=drafts):
        marker = " (draft)" if entry.draft else ""
        print(f"{entry.date.isoformat()}  {entry.slug}  {entry.title}{marker}")


def main() -> None:
    """Invoke the Cyclopts application that powers the `pages` console command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
