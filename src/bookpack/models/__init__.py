"""Data models for bookpack."""

from bookpack.models.archive import DEFLATED, STORED, ArchiveEntry
from bookpack.models.document import (
    Book,
    BookMetadata,
    Chapter,
    Document,
    TextDecodeResult,
)

__all__ = [
    "ArchiveEntry",
    "Book",
    "BookMetadata",
    "Chapter",
    "DEFLATED",
    "Document",
    "STORED",
    "TextDecodeResult",
]
