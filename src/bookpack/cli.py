"""CLI entry point for bookpack."""

import argparse
import logging
import sys
from pathlib import Path

from bookpack.archive import open_archive
from bookpack.errors import BookPackError
from bookpack.ingesters import get_ingester
from bookpack.models import Book, DEFLATED, STORED
from bookpack.utils.binary import is_binary_extension

logging.basicConfig(
    level=logging.INFO,
    format="%(message)s",
)
logger = logging.getLogger(__name__)

METHOD_NAMES = {STORED: "stored", DEFLATED: "deflate"}


def _load_book(source: str) -> Book:
    source_path = Path(source)
    ingester = get_ingester(source_path)
    if ingester is None:
        logger.error(f"Cannot process: {source}")
        logger.error("Supported inputs: .txt and .epub files")
        sys.exit(1)
    return ingester.ingest(source_path)


def ls(archive: str) -> None:
    """List the entries of a ZIP container.

    Args:
        archive: Path to the .epub/.zip file
    """
    with open_archive(archive) as zf:
        for entry in zf:
            method = METHOD_NAMES.get(entry.compression_method, str(entry.compression_method))
            binary = "  [binary]" if is_binary_extension(entry.path) else ""
            print(
                f"{method:<8} {entry.compressed_size:>10} {entry.uncompressed_size:>10}  {entry.path}{binary}"
            )
        total = sum(entry.uncompressed_size for entry in zf)
        print(f"")
        print(f"{len(zf)} entries, {total} bytes uncompressed")


def extract(archive: str, names: list[str], output: str) -> None:
    """Extract entries from a ZIP container.

    Args:
        archive: Path to the .epub/.zip file
        names: Entry paths to extract; every file entry when empty
        output: Destination directory
    """
    output_path = Path(output)

    with open_archive(archive) as zf:
        if not names:
            written = zf.extract_all(output_path)
        else:
            written = []
            for name in names:
                entry = zf.get(name)
                if entry is None:
                    logger.error(f"No entry named {name} in {archive}")
                    sys.exit(1)
                target = zf.target_path(output_path, entry)
                zf.extract(entry, target)
                written.append(target)

    for path in written:
        logger.info(f"  {path}")
    logger.info(f"Extracted {len(written)} entries -> {output_path}")


def chapters(source: str) -> None:
    """Print the chapter list of a book.

    Args:
        source: Path to a .txt or .epub file
    """
    book = _load_book(source)

    for number, chapter in enumerate(book.document, 1):
        where = chapter.source or f"line {chapter.start_line_index + 1}"
        print(f"{number:>4}. {chapter.title}  ({where})")


def info(source: str) -> None:
    """Show metadata about a book.

    Args:
        source: Path to a .txt or .epub file
    """
    book = _load_book(source)
    metadata = book.metadata

    print(f"Book: {Path(book.source).name}")
    print(f"  Title: {metadata.title}")
    print(f"  Author: {metadata.author or 'unknown'}")
    for label, value in (
        ("Publisher", metadata.publisher),
        ("Language", metadata.language),
        ("Cover", metadata.cover_path),
    ):
        if value:
            print(f"  {label}: {value}")
    print(f"")
    print(f"Contents:")
    print(f"  Type: {book.source_type}")
    if book.encoding:
        print(f"  Encoding: {book.encoding}")
    print(f"  Chapters: {len(book.document)}")


def serve(source: str, transport: str = "stdio") -> None:
    """Start MCP server for a book.

    Args:
        source: Path to a .txt or .epub file
        transport: Transport protocol (stdio or sse)
    """
    source_path = Path(source)
    if get_ingester(source_path) is None:
        logger.error(f"Cannot serve: {source}")
        sys.exit(1)

    # Import here to avoid loading MCP unless needed
    from bookpack.server import create_mcp_server

    from typing import cast, Literal

    logger.info(f"Serving {source} via {transport}")
    mcp = create_mcp_server(source_path)
    mcp.run(transport=cast(Literal["stdio", "sse", "streamable-http"], transport))


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="bookpack",
        description="bookpack - e-book container and text ingestion",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # ls command
    ls_parser = subparsers.add_parser(
        "ls",
        help="List the entries of an .epub or .zip container",
    )
    ls_parser.add_argument("archive", help="Container file path")

    # extract command
    extract_parser = subparsers.add_parser(
        "extract",
        help="Extract entries from an .epub or .zip container",
    )
    extract_parser.add_argument("archive", help="Container file path")
    extract_parser.add_argument(
        "entries",
        nargs="*",
        help="Entry paths to extract (default: all)",
    )
    extract_parser.add_argument(
        "-o",
        "--output",
        default=".",
        help="Output directory (default: current directory)",
    )

    # chapters command
    chapters_parser = subparsers.add_parser(
        "chapters",
        help="List the chapters of a .txt or .epub book",
    )
    chapters_parser.add_argument("source", help="Book file path")

    # info command
    info_parser = subparsers.add_parser(
        "info",
        help="Show title, author and chapter count of a book",
    )
    info_parser.add_argument("source", help="Book file path")

    # serve command
    serve_parser = subparsers.add_parser(
        "serve",
        help="Start MCP server for a book",
    )
    serve_parser.add_argument("source", help="Book file path")
    serve_parser.add_argument(
        "--transport",
        choices=["stdio", "sse"],
        default="stdio",
        help="Transport protocol (default: stdio)",
    )

    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        if args.command == "ls":
            ls(args.archive)
        elif args.command == "extract":
            extract(args.archive, args.entries, args.output)
        elif args.command == "chapters":
            chapters(args.source)
        elif args.command == "info":
            info(args.source)
        elif args.command == "serve":
            serve(args.source, args.transport)
    except BookPackError as exc:
        logger.error(f"Error: {exc}")
        sys.exit(1)


if __name__ == "__main__":
    main()
