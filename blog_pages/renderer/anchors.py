"""Heading anchors and inline code decoration for rendered articles."""

from __future__ import annotations

import re
import typing as typ
import xml.etree.ElementTree as etree

from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor, UnescapeTreeprocessor
from markdown.util import HTML_PLACEHOLDER_RE

from blog_pages._constants import ANCHOR_GLYPH

from .models import Heading, RenderError

if typ.TYPE_CHECKING:
    from xml.etree.ElementTree import Element

    from markdown import Markdown

    from .models import RenderCollector
else:  # pragma: no cover - type-checking fallback
    Markdown = typ.Any
    Element = typ.Any

HEADING_TAGS = {f"h{level}": level for level in range(1, 7)}


def slugify(text: str) -> str:
    """Convert heading text into a lowercase hyphen-separated anchor.

    >>> slugify("Walk-through")
    'walk-through'
    >>> slugify("What's `tRPC`?")
    'what-s-trpc'
    """
    slug = re.sub(r"[^a-z0-9]+", "-", text.lower()).strip("-")
    return slug or "section"


def unique_anchor(base: str, used: set[str]) -> str:
    """Return ``base`` or the first free ``base-N`` and record it in ``used``."""
    candidate = base
    suffix = 1
    while candidate in used:
        candidate = f"{base}-{suffix}"
        suffix += 1
    used.add(candidate)
    return candidate


class ProseExtension(Extension):
    """Attach heading anchors and mark inline code spans."""

    def __init__(self, collector: RenderCollector) -> None:
        super().__init__()
        self.collector = collector

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the prose treeprocessors after inline parsing."""
        md.treeprocessors.register(
            HeadingAnchorTreeprocessor(md, self.collector), "blog_heading_anchors", 5
        )
        md.treeprocessors.register(
            InlineCodeTreeprocessor(md), "blog_inline_code", 4
        )


class HeadingAnchorTreeprocessor(Treeprocessor):
    """Give every heading a unique ``id`` and a ``#`` self-link.

    Headings may only nest one level deeper than the heading before them;
    skipping a level (``##`` followed by ``####``) cannot be placed in the
    document outline and raises :class:`RenderError`. An id set by the author
    with ``{: #custom }`` is used as the anchor base instead of the slug.
    """

    def __init__(self, md: Markdown, collector: RenderCollector) -> None:
        super().__init__(md)
        self.collector = collector
        self._unescape = UnescapeTreeprocessor(md)

    def run(self, root: Element) -> None:
        """Annotate headings in document order."""
        used: set[str] = set()
        previous_level: int | None = None
        headings = [element for element in root.iter() if element.tag in HEADING_TAGS]
        for element in headings:
            level = HEADING_TAGS[element.tag]
            text = self._heading_text(element)
            if previous_level is not None and level > previous_level + 1:
                msg = (
                    f"heading '{text}' (h{level}) cannot follow an "
                    f"h{previous_level} heading"
                )
                raise RenderError(msg)
            previous_level = level

            anchor = unique_anchor(element.get("id") or slugify(text), used)
            element.set("id", anchor)
            link = etree.SubElement(
                element,
                "a",
                {
                    "class": "heading-anchor",
                    "href": f"#{anchor}",
                    "aria-label": f"Link to section: {text}",
                },
            )
            link.text = ANCHOR_GLYPH
            self.collector.headings.append(Heading(text=text, level=level, anchor=anchor))

    def _heading_text(self, element: Element) -> str:
        raw = "".join(element.itertext())
        raw = HTML_PLACEHOLDER_RE.sub("", raw)
        return " ".join(self._unescape.unescape(raw).split())


class InlineCodeTreeprocessor(Treeprocessor):
    """Tag ``<code>`` spans outside ``<pre>`` blocks as inline code."""

    def run(self, root: Element) -> None:
        """Add the ``inline-code`` class to inline code spans."""
        for parent in root.iter():
            if parent.tag == "pre":
                continue
            for child in parent:
                if child.tag != "code":
                    continue
                classes = (child.get("class") or "").split()
                if "inline-code" not in classes:
                    classes.append("inline-code")
                child.set("class", " ".join(classes))


__all__ = [
    "HeadingAnchorTreeprocessor",
    "InlineCodeTreeprocessor",
    "ProseExtension",
    "slugify",
    "unique_anchor",
]
