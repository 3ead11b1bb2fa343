"""Data model for ZIP archive entries."""

from dataclasses import dataclass

STORED = 0
DEFLATED = 8


@dataclass(frozen=True)
class ArchiveEntry:
    """One Central Directory record."""

    path: str
    compressed_size: int
    uncompressed_size: int
    local_header_offset: int
    compression_method: int

    @property
    def is_dir(self) -> bool:
        return self.path.endswith("/")

    @property
    def is_compressed(self) -> bool:
        return self.compression_method != STORED
