"""ZIP container reading for bookpack."""

from bookpack.archive.zip_archive import ZipArchive, open_archive

__all__ = ["ZipArchive", "open_archive"]
