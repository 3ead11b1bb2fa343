"""bookpack - read e-book containers and split plain text into chapters."""

from bookpack.archive import ZipArchive, open_archive
from bookpack.chunkers import ChapterSegmenter, count_chapters, segment
from bookpack.errors import (
    BookPackError,
    CorruptEntryError,
    DecompressionError,
    EpubStructureError,
    FormatError,
    OpenError,
    UnreadableTextError,
    UnsupportedCompressionError,
)
from bookpack.models import (
    ArchiveEntry,
    Book,
    BookMetadata,
    Chapter,
    Document,
    TextDecodeResult,
)
from bookpack.text import TextDecoder, decode, infer_metadata, load_text

__all__ = [
    "ArchiveEntry",
    "Book",
    "BookMetadata",
    "BookPackError",
    "Chapter",
    "ChapterSegmenter",
    "CorruptEntryError",
    "DecompressionError",
    "Document",
    "EpubStructureError",
    "FormatError",
    "OpenError",
    "TextDecodeResult",
    "TextDecoder",
    "UnreadableTextError",
    "UnsupportedCompressionError",
    "ZipArchive",
    "count_chapters",
    "decode",
    "infer_metadata",
    "load_text",
    "open_archive",
    "segment",
]
