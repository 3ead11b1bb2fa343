"""Reader for ZIP containers (EPUB and friends).

Only the subset of the format needed to read e-book containers is
supported: a single-disk archive whose entries are stored (method 0) or
deflated (method 8). The reader never relies on ``zipfile``; it locates the
End-Of-Central-Directory record itself, walks the Central Directory and
reads payloads through the Local File Header of each entry.
"""

import logging
import os
import zlib
from pathlib import Path, PurePosixPath
from typing import BinaryIO, Iterator, Optional, Union

from bookpack.errors import (
    CorruptEntryError,
    DecompressionError,
    FormatError,
    OpenError,
    UnsupportedCompressionError,
)
from bookpack.models import DEFLATED, STORED, ArchiveEntry
from bookpack.utils.cursor import ByteCursor, TruncatedDataError

logger = logging.getLogger(__name__)

EOCD_SIGNATURE = 0x06054B50
CENTRAL_DIRECTORY_SIGNATURE = 0x02014B50
LOCAL_FILE_HEADER_SIGNATURE = 0x04034B50

# Sizes below exclude the 4-byte signature, except EOCD_MIN_SIZE
EOCD_MIN_SIZE = 22
CENTRAL_HEADER_SIZE = 42
LOCAL_HEADER_SIZE = 26

Destination = Union[str, "os.PathLike[str]", BinaryIO]


def _inflate(payload: bytes, size: int, path: str) -> bytes:
    """Decompress a raw deflate stream to exactly ``size`` bytes."""
    if size == 0:
        return b""

    decompressor = zlib.decompressobj(-zlib.MAX_WBITS)
    try:
        data = decompressor.decompress(payload, size)
    except zlib.error as exc:
        raise DecompressionError(f"Invalid deflate stream in {path}: {exc}") from exc

    if len(data) < size:
        raise DecompressionError(
            f"{path} inflated to {len(data)} bytes, expected {size}"
        )
    return data


class ZipArchive:
    """An open ZIP archive and its ordered Central Directory entries.

    The whole index is parsed when the archive is opened. The file handle
    stays open until ``close()`` is called or the ``with`` block exits.
    Reads seek to absolute offsets, but they share one handle: callers
    extracting from several threads must serialize access or open one
    archive per thread.
    """

    MAX_COMMENT_LENGTH = 65535

    def __init__(self, path: Union[str, "os.PathLike[str]"]):
        self.path = Path(path)
        self._handle: Optional[BinaryIO] = None

        try:
            self._handle = open(self.path, "rb")
        except OSError as exc:
            raise OpenError(f"Cannot open {self.path}: {exc}") from exc

        try:
            self._entries = tuple(self._read_index())
        except BaseException:
            self.close()
            raise

        logger.debug("Read %d entries from %s", len(self._entries), self.path)

    # Lifecycle

    def close(self) -> None:
        """Release the file handle. Safe to call more than once."""
        handle, self._handle = self._handle, None
        if handle is not None:
            handle.close()

    @property
    def closed(self) -> bool:
        return self._handle is None

    def __enter__(self) -> "ZipArchive":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self.closed else f"{len(self._entries)} entries"
        return f"<ZipArchive {self.path} ({state})>"

    # Entries

    @property
    def entries(self) -> tuple[ArchiveEntry, ...]:
        return self._entries

    def __iter__(self) -> Iterator[ArchiveEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def names(self) -> list[str]:
        return [entry.path for entry in self._entries]

    def get(self, path: str) -> Optional[ArchiveEntry]:
        """Return the first entry whose path is exactly ``path``."""
        for entry in self._entries:
            if entry.path == path:
                return entry
        return None

    # Extraction

    def read(self, entry: ArchiveEntry) -> bytes:
        """Return the uncompressed bytes of an entry.

        Raises:
            CorruptEntryError: Bad local header signature or truncated data
            UnsupportedCompressionError: Method other than stored/deflate
            DecompressionError: Invalid or short deflate stream
        """
        header = ByteCursor(
            self._read_at(entry.local_header_offset, 4 + LOCAL_HEADER_SIZE)
        )
        try:
            signature = header.read_u32()
            if signature != LOCAL_FILE_HEADER_SIGNATURE:
                raise CorruptEntryError(
                    f"Invalid local file header for {entry.path} "
                    f"at offset {entry.local_header_offset}"
                )
            header.skip(22)
            name_length = header.read_u16()
            extra_length = header.read_u16()
        except TruncatedDataError as exc:
            raise CorruptEntryError(
                f"Truncated local file header for {entry.path}"
            ) from exc

        data_offset = (
            entry.local_header_offset
            + 4
            + LOCAL_HEADER_SIZE
            + name_length
            + extra_length
        )
        payload = self._read_at(data_offset, entry.compressed_size)
        if len(payload) != entry.compressed_size:
            raise CorruptEntryError(
                f"Truncated payload for {entry.path}: expected "
                f"{entry.compressed_size} bytes, got {len(payload)}"
            )

        if entry.compression_method == STORED:
            data = payload
        elif entry.compression_method == DEFLATED:
            data = _inflate(payload, entry.uncompressed_size, entry.path)
        else:
            raise UnsupportedCompressionError(entry.path, entry.compression_method)

        logger.debug("Extracted %s (%d bytes)", entry.path, len(data))
        return data

    def read_path(self, path: str) -> bytes:
        """Read the first entry named ``path``; KeyError if there is none."""
        entry = self.get(path)
        if entry is None:
            raise KeyError(f"No entry named {path!r} in {self.path}")
        return self.read(entry)

    def extract(self, entry: ArchiveEntry, destination: Destination) -> None:
        """Write an entry's bytes to a file path or a writable binary stream."""
        data = self.read(entry)

        if hasattr(destination, "write"):
            destination.write(data)
            return

        target = Path(destination)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)

    def extract_all(self, directory: Union[str, "os.PathLike[str]"]) -> list[Path]:
        """Extract every file entry beneath ``directory``.

        Returns:
            Paths written, in Central Directory order
        """
        root = Path(directory)
        written: list[Path] = []
        for entry in self._entries:
            if entry.is_dir:
                continue
            target = self.target_path(root, entry)
            self.extract(entry, target)
            written.append(target)
        return written

    @staticmethod
    def target_path(root: Path, entry: ArchiveEntry) -> Path:
        """Where an entry lands beneath ``root``; refuses paths escaping it."""
        relative = PurePosixPath(entry.path)
        if relative.is_absolute() or ".." in relative.parts:
            raise CorruptEntryError(
                f"Entry path escapes the extraction directory: {entry.path}"
            )
        return root.joinpath(*relative.parts)

    # Internals

    def _read_at(self, offset: int, size: int) -> bytes:
        if self._handle is None:
            raise ValueError(f"Attempt to read from closed archive {self.path}")
        try:
            self._handle.seek(offset)
            return self._handle.read(size)
        except OSError as exc:
            raise OpenError(f"Cannot read {self.path}: {exc}") from exc

    def _file_size(self) -> int:
        if self._handle is None:
            raise ValueError(f"Attempt to read from closed archive {self.path}")
        try:
            return self._handle.seek(0, os.SEEK_END)
        except OSError as exc:
            raise OpenError(f"Cannot read {self.path}: {exc}") from exc

    @staticmethod
    def _find_eocd(window: bytes) -> Optional[int]:
        """Offset of the last EOCD signature with room for a full record."""
        if len(window) < EOCD_MIN_SIZE:
            return None
        signature = EOCD_SIGNATURE.to_bytes(4, "little")
        position = window.rfind(signature, 0, len(window) - EOCD_MIN_SIZE + 4)
        return position if position >= 0 else None

    def _read_index(self) -> list[ArchiveEntry]:
        file_size = self._file_size()
        window_size = min(file_size, EOCD_MIN_SIZE + self.MAX_COMMENT_LENGTH)
        window = self._read_at(file_size - window_size, window_size)

        eocd = self._find_eocd(window)
        if eocd is None:
            raise FormatError(
                f"{self.path} is not a ZIP archive "
                "(no end of central directory record)"
            )

        directory_offset = ByteCursor(window, eocd + 16).read_u32()
        directory = self._read_at(
            directory_offset, max(file_size - directory_offset, 0)
        )
        return self._parse_central_directory(directory)

    def _parse_central_directory(self, data: bytes) -> list[ArchiveEntry]:
        cursor = ByteCursor(data)
        entries: list[ArchiveEntry] = []

        while cursor.remaining >= 4:
            # Anything but a file header marks the end of the index
            if cursor.read_u32() != CENTRAL_DIRECTORY_SIGNATURE:
                break
            try:
                entries.append(self._read_central_header(cursor))
            except TruncatedDataError:
                logger.warning(
                    "Central directory of %s is truncated after %d entries",
                    self.path,
                    len(entries),
                )
                break

        return entries

    @staticmethod
    def _read_central_header(cursor: ByteCursor) -> ArchiveEntry:
        header = ByteCursor(cursor.read_bytes(CENTRAL_HEADER_SIZE))

        header.seek(6)
        compression_method = header.read_u16()
        header.seek(16)
        compressed_size = header.read_u32()
        uncompressed_size = header.read_u32()
        name_length = header.read_u16()
        extra_length = header.read_u16()
        comment_length = header.read_u16()
        header.seek(38)
        local_header_offset = header.read_u32()

        path = cursor.read_bytes(name_length).decode("utf-8", errors="replace")
        cursor.skip(extra_length + comment_length)

        return ArchiveEntry(
            path=path,
            compressed_size=compressed_size,
            uncompressed_size=uncompressed_size,
            local_header_offset=local_header_offset,
            compression_method=compression_method,
        )


def open_archive(path: Union[str, "os.PathLike[str]"]) -> ZipArchive:
    """Open a ZIP archive and parse its index.

    Raises:
        OpenError: The file cannot be opened or read
        FormatError: No End-Of-Central-Directory record was found
    """
    return ZipArchive(path)
