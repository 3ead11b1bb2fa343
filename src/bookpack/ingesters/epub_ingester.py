"""Ingester for EPUB books."""

import logging
from pathlib import Path

from bookpack.archive import open_archive
from bookpack.epub import EpubPackage
from bookpack.models import Book, Document

logger = logging.getLogger(__name__)


class EpubIngester:
    """Ingester for EPUB containers."""

    source_type = "epub"

    def can_handle(self, source: Path) -> bool:
        """Check if this is an EPUB file."""
        return source.suffix.lower() == ".epub" and source.is_file()

    def ingest(self, source: Path) -> Book:
        """Read an EPUB into a Book.

        Args:
            source: Path to the .epub file

        Returns:
            Book with package metadata and one chapter per spine document
        """
        with open_archive(source) as archive:
            package = EpubPackage(archive)
            chapters = package.chapters()
            metadata = package.metadata

        logger.debug("Ingested %s: %d spine chapters", source, len(chapters))
        return Book(
            source=str(source),
            source_type=self.source_type,
            metadata=metadata,
            document=Document(tuple(chapters)),
        )
