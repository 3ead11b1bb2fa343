"""Decode raw text bytes by trying encodings in a fixed priority order."""

import codecs
import logging
import os
from typing import Iterable, Union

from bookpack.errors import OpenError, UnreadableTextError
from bookpack.models import TextDecodeResult

logger = logging.getLogger(__name__)

# Wide Unicode encodings are only attempted behind their byte-order mark;
# without one they would "decode" almost any even-length input.
_REQUIRED_BOMS = {
    "utf-16": (codecs.BOM_UTF16_LE, codecs.BOM_UTF16_BE),
    "utf-32": (codecs.BOM_UTF32_LE, codecs.BOM_UTF32_BE),
}


def _has_bom(data: bytes, encoding: str) -> bool:
    boms = _REQUIRED_BOMS.get(encoding)
    if boms is None:
        return True
    if encoding == "utf-16" and data.startswith(codecs.BOM_UTF32_LE):
        return False
    return data.startswith(boms)


class TextDecoder:
    """Try each candidate encoding in order; the first clean decode wins.

    ``latin-1`` maps every byte, so with the default candidates decoding
    only fails when the list has been narrowed.
    """

    CANDIDATES = ("utf-8", "utf-16", "utf-32", "ascii", "latin-1", "shift_jis")

    def __init__(self, candidates: Iterable[str] = CANDIDATES):
        self.candidates = tuple(candidates)

    def decode(self, data: bytes) -> TextDecodeResult:
        """Decode ``data`` with the first candidate that accepts it.

        Raises:
            UnreadableTextError: Every candidate failed
        """
        for encoding in self.candidates:
            if not _has_bom(data, encoding):
                continue
            try:
                text = data.decode(encoding)
            except UnicodeDecodeError:
                continue
            logger.debug("Decoded %d bytes as %s", len(data), encoding)
            return TextDecodeResult(text=text, encoding=encoding)

        raise UnreadableTextError(
            f"None of {', '.join(self.candidates)} could decode the input"
        )


_default_decoder = TextDecoder()


def decode(data: bytes) -> TextDecodeResult:
    """Decode bytes using the default candidate list."""
    return _default_decoder.decode(data)


def load_text(
    path: Union[str, "os.PathLike[str]"], decoder: TextDecoder = _default_decoder
) -> TextDecodeResult:
    """Read a text file and decode it.

    Raises:
        OpenError: The file cannot be read
        UnreadableTextError: No candidate encoding decodes it
    """
    try:
        with open(path, "rb") as f:
            data = f.read()
    except OSError as exc:
        raise OpenError(f"Cannot read {path}: {exc}") from exc
    return decoder.decode(data)
