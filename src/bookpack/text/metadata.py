"""Heuristic title/author inference for plain-text books."""

import logging
from itertools import islice
from pathlib import PurePath
from typing import Optional

from bookpack.models import BookMetadata

logger = logging.getLogger(__name__)


class MetadataExtractor:
    """Guess a book's title and author from its filename and opening lines.

    The title defaults to the filename stem. The first non-empty line
    among the first ``TITLE_SCAN_LINES`` lines overrides it. The author
    comes from the first of the leading ``AUTHOR_SCAN_LINES`` non-empty
    lines that carries an explicit marker.
    """

    TITLE_SCAN_LINES = 3
    AUTHOR_SCAN_LINES = 10
    AUTHOR_PREFIXES = ("作者：", "作者:")
    BYLINE_PREFIXES = ("by ", "By ")

    def infer(self, path: str, text: str) -> BookMetadata:
        title = PurePath(path).stem
        lines = text.splitlines()

        for line in lines[: self.TITLE_SCAN_LINES]:
            trimmed = line.strip()
            if trimmed:
                title = trimmed
                break

        author = self._find_author(lines)
        logger.debug("Inferred title=%r author=%r from %s", title, author, path)
        return BookMetadata(title=title, author=author)

    def _find_author(self, lines: list[str]) -> Optional[str]:
        non_empty = (line.strip() for line in lines if line.strip())
        for line in islice(non_empty, self.AUTHOR_SCAN_LINES):
            value = self._marker_value(line)
            if value is not None:
                # First marker line decides, even when it names nobody
                return value or None
        return None

    def _marker_value(self, line: str) -> Optional[str]:
        for prefix in self.AUTHOR_PREFIXES:
            if line.startswith(prefix):
                return line[len(prefix) :].strip()
        if line.startswith(self.BYLINE_PREFIXES):
            return line[3:].strip()
        return None


def infer_metadata(path: str, text: str) -> BookMetadata:
    """Infer title and author for a plain-text book."""
    return MetadataExtractor().infer(path, text)
