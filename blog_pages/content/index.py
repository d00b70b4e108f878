"""Date-ordered listings derived from a :class:`ContentStore`."""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    from .models import DocumentSummary
    from .store import ContentStore


class MetadataIndex:
    """Summarize a store's documents, newest first.

    The index keeps no copy of the store's contents, so every call reflects
    the most recent :meth:`ContentStore.load`.
    """

    def __init__(self, store: ContentStore) -> None:
        self.store = store

    def list(self, *, include_drafts: bool = False) -> list[DocumentSummary]:
        """Return document summaries ordered by date descending.

        Parameters
        ----------
        include_drafts : bool, optional
            Include documents flagged as drafts. Defaults to ``False``.

        Returns
        -------
        list[DocumentSummary]
            Summaries sorted by publish date (latest first); documents sharing
            a date are ordered by slug ascending.
        """
        summaries = [
            doc.summary
            for doc in self.store.documents
            if include_drafts or not doc.draft
        ]
        summaries.sort(key=lambda summary: summary.slug)
        summaries.sort(key=lambda summary: summary.date, reverse=True)
        return summaries


__all__ = ["MetadataIndex"]
