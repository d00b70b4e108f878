"""Article sources: loading, validation, and date-ordered listings."""

from .index import MetadataIndex
from .models import Document, DocumentSummary, ParseError
from .store import ContentStore, slug_for_source

__all__ = [
    "ContentStore",
    "Document",
    "DocumentSummary",
    "MetadataIndex",
    "ParseError",
    "slug_for_source",
]
