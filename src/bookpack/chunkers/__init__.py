"""Text segmentation strategies for bookpack."""

from bookpack.chunkers.chapter_segmenter import ChapterSegmenter, count_chapters, segment

__all__ = ["ChapterSegmenter", "count_chapters", "segment"]
