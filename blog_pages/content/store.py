"""Load article sources from disk into immutable :class:`Document` sets.

The :class:`ContentStore` walks the configured content directory, parses each
``*.md``/``*.mdx`` source with :func:`~blog_pages.content.front_matter.parse_source`,
derives slugs from file names, and publishes the resulting set atomically: a
failed load leaves the previously published documents in place.

Example
-------
>>> from pathlib import Path
>>> from blog_pages.content import ContentStore
>>> store = ContentStore(Path("content/posts"))  # doctest: +SKIP
>>> sorted(doc.slug for doc in store.load())  # doctest: +SKIP
['go-game-of-life', 'trpc-tutorial']
"""

from __future__ import annotations

import logging
import re
import typing as typ

from blog_pages._constants import INDEX_STEM, SOURCE_SUFFIXES

from .front_matter import parse_source
from .models import Document, ParseError

if typ.TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)


def slug_for_source(path: Path) -> str:
    """Derive the slug for a source file.

    ``posts/go-game-of-life.mdx`` becomes ``go-game-of-life``; index files take
    the name of their directory, so ``posts/trpc/index.md`` becomes ``trpc``.
    """
    stem = path.stem
    if stem.lower() == INDEX_STEM and path.parent.name:
        stem = path.parent.name
    slug = re.sub(r"[^a-z0-9]+", "-", stem.lower()).strip("-")
    return slug or "post"


class ContentStore:
    """Own the documents of a build, loaded from ``source_dir``."""

    def __init__(
        self, source_dir: Path, *, suffixes: tuple[str, ...] = SOURCE_SUFFIXES
    ) -> None:
        self.source_dir = source_dir
        self.suffixes = suffixes
        self._documents: frozenset[Document] = frozenset()

    @property
    def documents(self) -> frozenset[Document]:
        """Return the documents published by the last successful load."""
        return self._documents

    def get(self, slug: str) -> Document | None:
        """Return the document with ``slug`` or ``None`` when unknown."""
        return next((doc for doc in self._documents if doc.slug == slug), None)

    def load(self) -> frozenset[Document]:
        """Read every source and replace the store's contents.

        Returns
        -------
        frozenset[Document]
            The freshly loaded documents.

        Raises
        ------
        ParseError
            If the source directory is missing, any metadata block is
            malformed, or two sources resolve to the same slug. The store keeps
            its previous contents in that case.
        """
        if not self.source_dir.is_dir():
            msg = "content directory does not exist"
            raise ParseError(self.source_dir, msg)

        loaded: dict[str, Document] = {}
        for path in self._discover():
            document = self._load_one(path)
            existing = loaded.get(document.slug)
            if existing is not None:
                msg = (
                    f"slug '{document.slug}' is already used by {existing.source}"
                )
                raise ParseError(path, msg)
            loaded[document.slug] = document

        self._documents = frozenset(loaded.values())
        logger.debug(
            "Loaded %d documents from %s", len(self._documents), self.source_dir
        )
        return self._documents

    def _discover(self) -> list[Path]:
        """Return source files below ``source_dir`` in stable path order."""
        return sorted(
            path
            for path in self.source_dir.rglob("*")
            if path.is_file() and path.suffix.lower() in self.suffixes
        )

    def _load_one(self, path: Path) -> Document:
        try:
            text = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise ParseError(path, "source is not valid UTF-8") from exc
        meta, body = parse_source(text, path)
        slug = slug_for_source(path)
        logger.debug("Parsed %s as '%s'", path, slug)
        return Document(
            slug=slug,
            title=meta.title,
            description=meta.description,
            date=meta.date,
            draft=meta.draft,
            body=body,
            source=path,
        )


__all__ = ["ContentStore", "slug_for_source"]
