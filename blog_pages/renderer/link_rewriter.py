"""Helpers for rewriting relative article links and image sources."""

from __future__ import annotations

import posixpath
import typing as typ
from pathlib import PurePosixPath
from urllib.parse import SplitResult, urlsplit

from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor

from blog_pages._constants import SOURCE_SUFFIXES
from blog_pages.content.store import slug_for_source

if typ.TYPE_CHECKING:
    from xml.etree.ElementTree import Element

    from markdown import Markdown
else:  # pragma: no cover - type-checking fallback
    Markdown = typ.Any
    Element = typ.Any


class RelativeLinkExtension(Extension):
    """Point relative links at built pages and relative images at the assets.

    Links to sibling sources (``./trpc-tutorial.mdx#setup``) become links to the
    generated page (``trpc-tutorial.html#setup``); relative image sources
    (``gol/glider.png``) are served from ``assets_base_url``.
    """

    def __init__(self, assets_base_url: str) -> None:
        super().__init__()
        self.assets_base_url = assets_base_url.rstrip("/")

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the relative-link treeprocessor on the Markdown instance."""
        processor = RelativeLinkTreeprocessor(md, self.assets_base_url)
        md.treeprocessors.register(processor, "blog_relative_links", 15)


class RelativeLinkTreeprocessor(Treeprocessor):
    """Rewrite ``a[href]`` and ``img[src]`` values that are relative paths."""

    def __init__(self, md: Markdown, assets_base_url: str) -> None:
        super().__init__(md)
        self.assets_base_url = assets_base_url

    def run(self, root: Element) -> Element:
        """Rewrite relative targets in the parsed markdown tree."""
        for element in root.iter():
            if element.tag == "a":
                rewritten = self._rewrite_link(element.get("href"))
                if rewritten:
                    element.set("href", rewritten)
            elif element.tag == "img":
                rewritten = self._rewrite_image(element.get("src"))
                if rewritten:
                    element.set("src", rewritten)
        return root

    def _rewrite_link(self, target: str | None) -> str | None:
        """Return the built page URL for links to other article sources."""
        parsed = _relative_target(target)
        if parsed is None:
            return None
        path = PurePosixPath(parsed.path)
        if path.suffix.lower() not in SOURCE_SUFFIXES:
            return None
        url = f"{slug_for_source(path)}.html"
        if parsed.fragment:
            url = f"{url}#{parsed.fragment}"
        return url

    def _rewrite_image(self, target: str | None) -> str | None:
        """Return the asset URL for a relative image source."""
        parsed = _relative_target(target)
        if parsed is None:
            return None
        joined = posixpath.normpath(parsed.path)
        while joined.startswith("../"):
            joined = joined[3:]
        if joined in (".", "", ".."):
            return None
        url = f"{self.assets_base_url}/{joined}"
        if parsed.query:
            url = f"{url}?{parsed.query}"
        return url


def _relative_target(target: str | None) -> SplitResult | None:
    """Return the split URL when ``target`` is a relative path, else ``None``."""
    if not target:
        return None
    lower = target.lower()
    if lower.startswith(("mailto:", "tel:", "data:", "javascript:")):
        return None
    if target.startswith(("#", "//")) or "://" in target:
        return None
    parsed = urlsplit(target)
    if parsed.scheme or parsed.netloc or not parsed.path:
        return None
    if parsed.path.startswith("/"):
        return None
    return parsed


__all__ = ["RelativeLinkExtension", "RelativeLinkTreeprocessor"]
