"""Utility functions for bookpack."""

from bookpack.utils.binary import detect_binary, is_binary_content, is_binary_extension
from bookpack.utils.cursor import ByteCursor, TruncatedDataError

__all__ = [
    "ByteCursor",
    "TruncatedDataError",
    "detect_binary",
    "is_binary_content",
    "is_binary_extension",
]
