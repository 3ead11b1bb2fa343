"""EPUB package reading on top of the ZIP archive reader."""

from bookpack.epub.html_text import html_to_text
from bookpack.epub.package import EpubPackage, ManifestItem, resolve_href

__all__ = ["EpubPackage", "ManifestItem", "html_to_text", "resolve_href"]
