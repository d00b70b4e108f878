"""Dataclasses and errors shared by the content store and metadata index."""

from __future__ import annotations

import dataclasses as dc
import datetime as dt  # noqa: TC003 - used for runtime type metadata
from pathlib import Path  # noqa: TC003 - used for runtime type metadata


class ParseError(ValueError):
    """Raised when a source document's metadata cannot be loaded.

    Attributes
    ----------
    source : Path
        Source file that failed to load.
    field : str or None
        Metadata field at fault, or ``None`` when the problem concerns the
        document as a whole (missing block, duplicate slug).
    """

    def __init__(self, source: Path, detail: str, *, field: str | None = None) -> None:
        self.source = source
        self.field = field
        self.detail = detail
        where = f"{source}" if field is None else f"{source} [{field}]"
        super().__init__(f"{where}: {detail}")


@dc.dataclass(frozen=True, slots=True)
class DocumentSummary:
    """Listing entry for a document; carries everything but the body."""

    slug: str
    title: str
    description: str
    date: dt.date
    draft: bool


@dc.dataclass(frozen=True, slots=True)
class Document:
    """A single article loaded from the content directory.

    Attributes
    ----------
    slug : str
        URL-safe identifier derived from the source path; unique per store.
    title : str
        Article title from the metadata block.
    description : str
        Short description used by listings.
    date : datetime.date
        Publish date.
    draft : bool
        Drafts never appear in public listings.
    body : str
        Markup following the metadata block.
    source : Path
        File the document was read from.
    """

    slug: str
    title: str
    description: str
    date: dt.date
    draft: bool
    body: str
    source: Path

    @property
    def summary(self) -> DocumentSummary:
        """Return the listing entry for this document."""
        return DocumentSummary(
            slug=self.slug,
            title=self.title,
            description=self.description,
            date=self.date,
            draft=self.draft,
        )


__all__ = ["Document", "DocumentSummary", "ParseError"]
