"""Read-only view of one book, shared by the MCP tools."""

import logging
from pathlib import Path
from typing import Optional

from bookpack.archive import ZipArchive, open_archive
from bookpack.errors import BookPackError
from bookpack.ingesters import get_ingester
from bookpack.models import Book
from bookpack.text import TextDecoder
from bookpack.utils.binary import detect_binary, is_binary_extension

logger = logging.getLogger(__name__)


def format_size(size: int) -> str:
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.1f} MB"


class BookSession:
    """A parsed book plus, for container formats, its open archive."""

    def __init__(self, book_path: Path):
        ingester = get_ingester(book_path)
        if ingester is None:
            raise ValueError(f"Unsupported book file: {book_path}")

        self.book: Book = ingester.ingest(book_path)
        self.archive: Optional[ZipArchive] = None
        if self.book.source_type == "epub":
            self.archive = open_archive(book_path)
        self._decoder = TextDecoder()

    def close(self) -> None:
        if self.archive is not None:
            self.archive.close()

    def ls(self, path: str = "") -> str:
        if self.archive is None:
            return f"{self.book.source} is a plain-text book and has no entries"

        lines = []
        for entry in self.archive:
            if entry.is_dir or not entry.path.startswith(path):
                continue
            binary = "[binary]" if is_binary_extension(entry.path) else ""
            lines.append(
                f"{entry.path:<60} {format_size(entry.uncompressed_size):>10} {binary}"
            )

        if not lines:
            return f"No entries found matching '{path}'"
        return "\n".join(lines)

    def read(self, path: str) -> str:
        if self.archive is None:
            return f"Error: {self.book.source} has no entries"

        entry = self.archive.get(path)
        if entry is None:
            return f"Error: Entry not found: {path}"

        try:
            data = self.archive.read(entry)
            if detect_binary(entry.path, data):
                return (
                    f"[Binary entry]\n"
                    f"  Path: {entry.path}\n"
                    f"  Size: {entry.uncompressed_size} bytes\n"
                    f"  Compression method: {entry.compression_method}"
                )
            return self._decoder.decode(data).text
        except BookPackError as exc:
            logger.warning("Cannot read %s: %s", path, exc)
            return f"Error: {exc}"

    def chapters(self) -> str:
        metadata = self.book.metadata
        lines = [metadata.title]
        if metadata.author:
            lines.append(f"by {metadata.author}")
        lines.append("")
        for number, chapter in enumerate(self.book.document, 1):
            lines.append(f"{number}. {chapter.title}")
        return "\n".join(lines)

    def chapter(self, number: int) -> str:
        count = len(self.book.document)
        if not 1 <= number <= count:
            return f"Error: Chapter {number} out of range (1-{count})"
        chapter = self.book.document[number - 1]
        return f"{chapter.title}\n\n{chapter.content}"
