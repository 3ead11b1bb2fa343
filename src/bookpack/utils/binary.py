"""Binary resource detection for e-book containers."""

from pathlib import PurePosixPath

# Resource types found inside EPUB and similar containers
BINARY_EXTENSIONS = {
    # Images
    ".png", ".jpg", ".jpeg", ".gif", ".bmp", ".webp", ".tif", ".tiff",
    # Fonts
    ".ttf", ".otf", ".woff", ".woff2",
    # Audio / video overlays
    ".mp3", ".mp4", ".m4a", ".aac", ".ogg", ".wav", ".webm",
    # Nested containers
    ".zip", ".epub", ".gz",
    # Other
    ".pdf", ".bin",
}

# Printable ASCII + tab, LF, CR
_TEXT_BYTES = frozenset(range(32, 127)) | {9, 10, 13}


def is_binary_extension(path: str) -> bool:
    """Check if an entry's extension indicates binary content."""
    return PurePosixPath(path).suffix.lower() in BINARY_EXTENSIONS


def is_binary_content(content: bytes, sample_size: int = 8192) -> bool:
    """Detect if content is binary by checking for null bytes and non-text chars.

    Bytes at or above 0x80 count as text so that UTF-8 and legacy CJK
    encodings are not mistaken for binary data.

    Args:
        content: Raw entry bytes
        sample_size: Number of bytes to sample from the start

    Returns:
        True if content appears to be binary
    """
    if not content:
        return False

    sample = content[:sample_size]

    # Null bytes are a strong binary indicator
    if b"\x00" in sample:
        return True

    non_text = sum(1 for byte in sample if byte < 128 and byte not in _TEXT_BYTES)

    # If more than 30% control characters, treat as binary
    return (non_text / len(sample)) > 0.30


def detect_binary(path: str, content: bytes) -> bool:
    """Detect if an entry is binary using both extension and content analysis.

    Args:
        path: Entry path (for extension check)
        content: Raw entry bytes

    Returns:
        True if the entry is binary
    """
    # Fast path: check extension first
    if is_binary_extension(path):
        return True

    return is_binary_content(content)
