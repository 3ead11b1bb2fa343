"""Ingester for plain-text books."""

import logging
from pathlib import Path
from typing import Optional

from bookpack.chunkers import ChapterSegmenter
from bookpack.models import Book
from bookpack.protocols import SegmentationStrategy
from bookpack.text import MetadataExtractor, TextDecoder, load_text

logger = logging.getLogger(__name__)


class TxtIngester:
    """Ingester for .txt files: decode, segment into chapters, infer metadata."""

    source_type = "txt"

    def __init__(
        self,
        decoder: Optional[TextDecoder] = None,
        segmenter: Optional[SegmentationStrategy] = None,
    ):
        self.decoder = decoder or TextDecoder()
        self.segmenter = segmenter or ChapterSegmenter()
        self.extractor = MetadataExtractor()

    def can_handle(self, source: Path) -> bool:
        """Check if this is a text file."""
        return source.suffix.lower() == ".txt" and source.is_file()

    def ingest(self, source: Path) -> Book:
        """Read a text file into a Book.

        Args:
            source: Path to the .txt file

        Returns:
            Book with inferred metadata and segmented chapters
        """
        decoded = load_text(source, self.decoder)
        document = self.segmenter.segment(decoded.text)
        metadata = self.extractor.infer(source.name, decoded.text)

        logger.debug(
            "Ingested %s: %s encoding, %d chapters", source, decoded.encoding, len(document)
        )
        return Book(
            source=str(source),
            source_type=self.source_type,
            metadata=metadata,
            document=document,
            encoding=decoded.encoding,
        )
