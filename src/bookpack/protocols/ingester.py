"""Protocol for e-book source handlers."""

from pathlib import Path
from typing import Protocol, runtime_checkable

from bookpack.models import Book


@runtime_checkable
class Ingester(Protocol):
    """Protocol for e-book source handlers.

    Implementations handle different input formats (plain text, EPUB).
    Uses structural subtyping - no inheritance required.
    """

    @property
    def source_type(self) -> str:
        """Return identifier for this source type (e.g., 'txt', 'epub')."""
        ...

    def can_handle(self, source: Path) -> bool:
        """Check if this ingester can process the given source."""
        ...

    def ingest(self, source: Path) -> Book:
        """Read the source into a Book with metadata and chapters."""
        ...
