"""Shared dataclasses and errors used by the rendering pipeline."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

if typ.TYPE_CHECKING:
    from blog_pages.content import DocumentSummary


class RenderError(ValueError):
    """Raised when a document body cannot be rendered.

    Attributes
    ----------
    detail : str
        Description of the malformed construct.
    slug : str or None
        Document being rendered, when known.
    line : int or None
        1-based body line where the construct starts, when known.
    """

    def __init__(
        self, detail: str, *, slug: str | None = None, line: int | None = None
    ) -> None:
        self.detail = detail
        self.slug = slug
        self.line = line
        prefix = [part for part in (slug, f"line {line}" if line else None) if part]
        message = ": ".join([*prefix, detail])
        super().__init__(message)


@dc.dataclass(frozen=True, slots=True)
class Heading:
    """Section heading emitted into the rendered body.

    Attributes
    ----------
    text : str
        Plain-text heading content.
    level : int
        Nesting level from 1 to 6.
    anchor : str
        Identifier unique within the document.
    """

    text: str
    level: int
    anchor: str


@dc.dataclass(frozen=True, slots=True)
class CodeBlock:
    """Fenced code region with its optional language and filename labels."""

    content: str
    language: str | None = None
    filename: str | None = None

    @property
    def is_labelled(self) -> bool:
        """Return ``True`` when the block carries a language or filename."""
        return bool(self.language or self.filename)


@dc.dataclass(slots=True)
class RenderCollector:
    """Nodes gathered by the markdown extensions during one conversion."""

    headings: list[Heading] = dc.field(default_factory=list)
    code_blocks: list[CodeBlock] = dc.field(default_factory=list)


@dc.dataclass(frozen=True, slots=True)
class RenderedDocument:
    """Styled output tree for one document.

    Attributes
    ----------
    summary : DocumentSummary
        Listing metadata of the rendered document.
    html : str
        Rendered body markup.
    headings : tuple[Heading, ...]
        Headings in document order; drives the table of contents.
    code_blocks : tuple[CodeBlock, ...]
        Fenced code blocks in document order.
    """

    summary: DocumentSummary
    html: str
    headings: tuple[Heading, ...]
    code_blocks: tuple[CodeBlock, ...]

    @property
    def slug(self) -> str:
        """Return the slug of the rendered document."""
        return self.summary.slug

    @property
    def toc(self) -> list[dict[str, str]]:
        """Return table-of-contents entries with ``label``, ``anchor``, ``level``."""
        return [
            {"label": heading.text, "anchor": heading.anchor, "level": str(heading.level)}
            for heading in self.headings
        ]


__all__ = [
    "CodeBlock",
    "Heading",
    "RenderCollector",
    "RenderError",
    "RenderedDocument",
]
