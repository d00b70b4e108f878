"""Build orchestration for the blog: load, index, render, and write.

:class:`SiteBuilder` consumes a :class:`~blog_pages.config.SiteConfig`, loads the
content store, renders each listed document with
:class:`~blog_pages.renderer.HtmlContentRenderer`, and writes the article pages,
the index page, the JSON summary listing, and the stylesheet into the output
directory. A document whose body fails to render is reported in the
:class:`BuildResult` and left out of the listing; the rest of the batch is
still written.

Example
-------
>>> from pathlib import Path
>>> from blog_pages.config import load_site_config
>>> from blog_pages.site_builder import SiteBuilder
>>> config = load_site_config(Path("config/site.yaml"))  # doctest: +SKIP
>>> result = SiteBuilder(config).run()  # doctest: +SKIP
>>> result.failures  # doctest: +SKIP
[]
"""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as typ
from pathlib import Path

import msgspec.json as msgspec_json
from jinja2 import Environment, FileSystemLoader, select_autoescape

from ._constants import (
    INDEX_FILENAME,
    LISTING_FILENAME,
    POST_FILENAME_TEMPLATE,
    STYLESHEET_FILENAME,
)
from .content import ContentStore, MetadataIndex
from .renderer import HtmlContentRenderer, RenderError
from .styles import stylesheet

if typ.TYPE_CHECKING:
    from .config import SiteConfig
    from .content import DocumentSummary
    from .renderer import RenderedDocument

logger = logging.getLogger(__name__)


@dc.dataclass(frozen=True, slots=True)
class BuildFailure:
    """A document that could not be rendered and why."""

    slug: str
    error: RenderError


@dc.dataclass(slots=True)
class BuildResult:
    """Outcome of a build: files written and documents that failed."""

    written: list[Path] = dc.field(default_factory=list)
    failures: list[BuildFailure] = dc.field(default_factory=list)

    @property
    def ok(self) -> bool:
        """Return ``True`` when every document rendered."""
        return not self.failures


class SiteBuilder:
    """Render the configured content directory into a static site."""

    def __init__(
        self, site_config: SiteConfig, *, templates_dir: Path | None = None
    ) -> None:
        """Initialize the builder, its content store, and Jinja environment.

        Parameters
        ----------
        site_config : SiteConfig
            Parsed configuration (see :func:`blog_pages.config.load_site_config`).
        templates_dir : Path, optional
            Directory containing the Jinja templates. Defaults to the
            ``blog_pages/templates`` directory when ``None``.
        """
        self.config = site_config
        self.store = ContentStore(site_config.build.content_dir)
        self.index = MetadataIndex(self.store)
        self.renderer = HtmlContentRenderer(
            site_config.build.pygments_style,
            assets_base_url=site_config.build.assets_base_url,
        )
        self.templates_dir = templates_dir or Path(__file__).parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml", "jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.post_template = self.env.get_template("post.jinja")
        self.index_template = self.env.get_template("index.jinja")

    def run(self) -> BuildResult:
        """Load the content store and write every output artefact.

        Returns
        -------
        BuildResult
            Paths written (pages first, then index, listing, and stylesheet) and
            the documents whose bodies failed to render.

        Raises
        ------
        ParseError
            Raised by the content store when any source's metadata is malformed
            or two sources share a slug; nothing is written in that case.
        """
        self.store.load()
        include_drafts = self.config.build.include_drafts
        listed = self.index.list(include_drafts=include_drafts)

        result = BuildResult()
        rendered: list[RenderedDocument] = []
        for summary in listed:
            document = self.store.get(summary.slug)
            if document is None:  # pragma: no cover - index derives from store
                continue
            try:
                rendered.append(self.renderer.render(document))
            except RenderError as exc:
                logger.warning("Skipping %s: %s", summary.slug, exc)
                result.failures.append(BuildFailure(slug=summary.slug, error=exc))

        out_dir = self.config.build.output_dir
        out_dir.mkdir(parents=True, exist_ok=True)
        self._remove_stale_posts(out_dir, {post.slug for post in rendered})
        for post in rendered:
            result.written.append(self._write_post(post, out_dir))

        failed = {failure.slug for failure in result.failures}
        published = [entry for entry in listed if entry.slug not in failed]
        result.written.append(self._write_index(published, out_dir))
        result.written.append(self._write_listing(published, out_dir))
        result.written.append(self._write_stylesheet(out_dir))
        return result

    @staticmethod
    def _remove_stale_posts(out_dir: Path, keep: set[str]) -> None:
        """Delete article pages left by earlier builds that are not rebuilt now."""
        expected = {out_dir / POST_FILENAME_TEMPLATE.format(slug=slug) for slug in keep}
        posts_dir = out_dir / Path(POST_FILENAME_TEMPLATE).parent
        if not posts_dir.is_dir():
            return
        for page in sorted(posts_dir.glob("*.html")):
            if page not in expected:
                page.unlink()
                logger.info("Removed stale page %s", page)

    def _base_context(self, root: str) -> dict[str, typ.Any]:
        return {
            "site": self.config.site,
            "root": root,
            "stylesheet_path": STYLESHEET_FILENAME,
        }

    def _write_post(self, post: RenderedDocument, out_dir: Path) -> Path:
        """Render and persist a single article page."""
        output_path = out_dir / POST_FILENAME_TEMPLATE.format(slug=post.slug)
        root = "../" * POST_FILENAME_TEMPLATE.count("/")
        context = self._base_context(root)
        context["post"] = post
        return self._write(output_path, self.post_template.render(**context))

    def _write_index(self, entries: list[DocumentSummary], out_dir: Path) -> Path:
        """Render the landing page listing published articles, newest first."""
        context = self._base_context("")
        context["entries"] = entries
        context["post_href"] = _post_href
        return self._write(out_dir / INDEX_FILENAME, self.index_template.render(**context))

    def _write_listing(self, entries: list[DocumentSummary], out_dir: Path) -> Path:
        """Persist the date-ordered summary listing as JSON."""
        payload = {
            "site": self.config.site.title,
            "posts": [
                {**dc.asdict(entry), "href": _post_href(entry.slug)}
                for entry in entries
            ],
        }
        output_path = out_dir / LISTING_FILENAME
        output_path.write_bytes(msgspec_json.format(msgspec_json.encode(payload)) + b"\n")
        logger.info("Wrote %s", output_path)
        return output_path

    def _write_stylesheet(self, out_dir: Path) -> Path:
        css = stylesheet(self.config.build.assets_base_url, self.renderer.stylesheet)
        output_path = out_dir / STYLESHEET_FILENAME
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(css, encoding="utf-8")
        logger.info("Wrote %s", output_path)
        return output_path

    @staticmethod
    def _write(output_path: Path, html: str) -> Path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        if not html.endswith("\n"):
            html += "\n"
        output_path.write_text(html, encoding="utf-8")
        logger.info("Wrote %s", output_path)
        return output_path


def _post_href(slug: str) -> str:
    """Return the output-relative URL of the page for ``slug``."""
    return POST_FILENAME_TEMPLATE.format(slug=slug)


__all__ = ["BuildFailure", "BuildResult", "SiteBuilder"]
