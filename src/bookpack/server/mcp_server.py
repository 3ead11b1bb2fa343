"""FastMCP server implementation for bookpack."""

from pathlib import Path

from mcp.server.fastmcp import FastMCP

from bookpack.server.session import BookSession


def create_mcp_server(book_path: Path) -> FastMCP:
    """Create an MCP server for a single book.

    Design: 1 process = 1 book. The book is parsed once at startup and,
    for EPUB sources, its archive stays open for the life of the process.

    Args:
        book_path: Path to the .txt or .epub file to serve

    Returns:
        Configured FastMCP server instance
    """
    mcp = FastMCP(
        name="bookpack",
    )

    session = BookSession(book_path)

    @mcp.tool()
    def ls(path: str = "") -> str:
        """List entries in the book's container.

        Args:
            path: Optional path prefix to filter results (e.g., "OEBPS/")

        Returns:
            Formatted list of entries with size and type information
        """
        return session.ls(path)

    @mcp.tool()
    def read(path: str) -> str:
        """Read one container entry.

        Args:
            path: Full entry path (as shown in ls output)

        Returns:
            Decoded text for text entries, or a summary for binary entries
        """
        return session.read(path)

    @mcp.tool()
    def chapters() -> str:
        """List the book's title, author and numbered chapter titles."""
        return session.chapters()

    @mcp.tool()
    def chapter(number: int) -> str:
        """Read one chapter.

        Args:
            number: 1-based chapter number (as shown in chapters output)

        Returns:
            The chapter title followed by its text
        """
        return session.chapter(number)

    return mcp
