"""E-book source handlers (ingesters) for bookpack."""

from pathlib import Path
from typing import Optional

from bookpack.ingesters.epub_ingester import EpubIngester
from bookpack.ingesters.txt_ingester import TxtIngester
from bookpack.protocols import Ingester

# Registry of available ingesters
_INGESTERS: list[Ingester] = [
    EpubIngester(),
    TxtIngester(),
]


def get_ingester(source: Path | str) -> Optional[Ingester]:
    """Find an ingester that can handle the given source.

    Args:
        source: Path to the book file (.txt or .epub)

    Returns:
        An Ingester instance that can handle the source, or None
    """
    source_path = Path(source)
    for ingester in _INGESTERS:
        if ingester.can_handle(source_path):
            return ingester
    return None


def register_ingester(ingester: Ingester) -> None:
    """Register a custom ingester (for plugins/extensions).

    Args:
        ingester: An object implementing the Ingester protocol
    """
    _INGESTERS.append(ingester)


def count_book_chapters(source: Path | str) -> int:
    """Number of chapters in a book file, 0 if no ingester handles it."""
    ingester = get_ingester(source)
    if ingester is None:
        return 0
    return len(ingester.ingest(Path(source)).document)


__all__ = [
    "EpubIngester",
    "TxtIngester",
    "count_book_chapters",
    "get_ingester",
    "register_ingester",
]
