"""Core data models for books, chapters and decoded text."""

from dataclasses import dataclass, field
from typing import Iterator, Optional


@dataclass(frozen=True)
class TextDecodeResult:
    """Decoded text plus the encoding that produced it."""

    text: str
    encoding: str


@dataclass(frozen=True)
class Chapter:
    """A titled slice of a book's text."""

    title: str
    content: str
    start_line_index: int = 0
    heading: str = ""  # raw heading line, empty when the title is synthesized
    source: str = ""  # archive entry path for EPUB chapters


@dataclass(frozen=True)
class Document:
    """Chapters of one book in source order."""

    chapters: tuple[Chapter, ...] = ()

    def __iter__(self) -> Iterator[Chapter]:
        return iter(self.chapters)

    def __len__(self) -> int:
        return len(self.chapters)

    def __getitem__(self, index: int) -> Chapter:
        return self.chapters[index]

    @property
    def titles(self) -> list[str]:
        return [chapter.title for chapter in self.chapters]


@dataclass(frozen=True)
class BookMetadata:
    """Title and author, plus package fields for EPUB sources."""

    title: str
    author: Optional[str] = None
    publisher: Optional[str] = None
    language: Optional[str] = None
    description: Optional[str] = None
    cover_path: Optional[str] = None


@dataclass(frozen=True)
class Book:
    """Everything an ingester extracts from one source file."""

    source: str
    source_type: str
    metadata: BookMetadata
    document: Document = field(default_factory=Document)
    encoding: Optional[str] = None  # None for EPUB sources
