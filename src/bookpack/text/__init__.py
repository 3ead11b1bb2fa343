"""Plain-text decoding and metadata inference."""

from bookpack.text.decoder import TextDecoder, decode, load_text
from bookpack.text.metadata import MetadataExtractor, infer_metadata

__all__ = ["MetadataExtractor", "TextDecoder", "decode", "infer_metadata", "load_text"]
