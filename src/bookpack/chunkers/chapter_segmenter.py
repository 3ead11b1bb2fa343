"""Heading-based chapter segmentation for plain-text books."""

import logging
import re
from typing import Optional, Pattern, Sequence

from bookpack.models import Chapter, Document

logger = logging.getLogger(__name__)

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


class ChapterSegmenter:
    """Split text into chapters at recognized heading lines.

    Each line is trimmed and tested against HEADING_PATTERNS, all anchored
    at the start of the line. A heading closes the chapter being collected
    and opens a new one; every other line (blank lines included) belongs to
    the open chapter. A chapter is only emitted once it has a title and at
    least one line of content, so text before the first heading and
    headings followed directly by another heading are dropped.

    When nothing is emitted the whole text becomes a single chapter titled
    FALLBACK_TITLE.
    """

    HEADING_PATTERNS: Sequence[Pattern[str]] = (
        re.compile(r"^第[零一二三四五六七八九十百千万\d]+[章节回]"),  # 第X章
        re.compile(r"^Chapter\s+\d+"),
        re.compile(r"^CHAPTER\s+\d+"),
        re.compile(r"^卷[零一二三四五六七八九十\d]+"),  # 卷X
        re.compile(r"^第[零一二三四五六七八九十百千万\d]+部分"),  # 第X部分
    )
    FALLBACK_TITLE = "全文"

    def __init__(
        self,
        heading_patterns: Optional[Sequence[Pattern[str]]] = None,
        fallback_title: Optional[str] = None,
    ):
        if heading_patterns is not None:
            self.HEADING_PATTERNS = tuple(heading_patterns)
        if fallback_title is not None:
            self.FALLBACK_TITLE = fallback_title

    def is_heading(self, line: str) -> bool:
        """Check if a line (trimmed) is a chapter heading."""
        trimmed = line.strip()
        if not trimmed:
            return False
        return any(pattern.match(trimmed) for pattern in self.HEADING_PATTERNS)

    def segment(self, text: str) -> Document:
        """Split text into chapters.

        Args:
            text: Decoded book text

        Returns:
            Document whose chapters are in source order
        """
        chapters: list[Chapter] = []
        heading: Optional[str] = None
        heading_index = 0
        buffer: list[str] = []

        def flush() -> None:
            if heading is not None and buffer:
                chapters.append(
                    Chapter(
                        title=heading.strip(),
                        content="\n".join(buffer),
                        start_line_index=heading_index,
                        heading=heading,
                    )
                )

        for index, line in enumerate(_LINE_BREAK.split(text)):
            if self.is_heading(line):
                flush()
                heading = line
                heading_index = index
                buffer = []
            else:
                buffer.append(line)

        flush()

        if not chapters:
            logger.debug("No chapter headings found, using whole text")
            return Document(
                (Chapter(title=self.FALLBACK_TITLE, content=text, start_line_index=0),)
            )

        logger.debug("Segmented text into %d chapters", len(chapters))
        return Document(tuple(chapters))


def segment(text: str) -> Document:
    """Split text into chapters with the default heading patterns."""
    return ChapterSegmenter().segment(text)


def count_chapters(text: str) -> int:
    """Number of chapters the default segmenter finds in ``text``."""
    return len(segment(text))
