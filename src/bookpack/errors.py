"""Exception hierarchy for bookpack."""


class BookPackError(Exception):
    """Base class for every error raised by bookpack."""


class OpenError(BookPackError):
    """The source file could not be opened or read."""


class FormatError(BookPackError):
    """The file is not a ZIP archive (no End-Of-Central-Directory record)."""


class CorruptEntryError(BookPackError):
    """An archive entry has a bad local header or truncated payload."""


class UnsupportedCompressionError(BookPackError):
    """An archive entry uses a compression method other than stored/deflate."""

    def __init__(self, path: str, method: int):
        super().__init__(f"Unsupported compression method {method} for {path}")
        self.path = path
        self.method = method


class DecompressionError(BookPackError):
    """A deflate payload is invalid or shorter than its declared size."""


class UnreadableTextError(BookPackError):
    """No candidate encoding could decode the given bytes."""


class EpubStructureError(BookPackError):
    """An EPUB has no locatable or parseable OPF package document."""
