"""EPUB package resolution over an open ZIP archive.

META-INF/container.xml names the OPF package document; the OPF carries
Dublin Core metadata, the manifest (id -> resource) and the spine (reading
order). Chapter titles come from the NCX (EPUB 2) and nav (EPUB 3) tables
of contents.
"""

import logging
import posixpath
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import Iterator, Optional
from urllib.parse import unquote

from bs4 import BeautifulSoup

from bookpack.archive import ZipArchive
from bookpack.epub.html_text import html_to_text
from bookpack.errors import EpubStructureError
from bookpack.models import BookMetadata, Chapter
from bookpack.text.decoder import TextDecoder

logger = logging.getLogger(__name__)

CONTAINER_PATH = "META-INF/container.xml"
NCX_MEDIA_TYPE = "application/x-dtbncx+xml"


def _local_name(tag: str) -> str:
    return tag.split("}", 1)[-1] if "}" in tag else tag


def _iter_local(root: ET.Element, name: str) -> Iterator[ET.Element]:
    """Iterate descendants by local name, whatever their namespace."""
    for element in root.iter():
        if isinstance(element.tag, str) and _local_name(element.tag) == name:
            yield element


def _child(element: ET.Element, name: str) -> Optional[ET.Element]:
    for child in element:
        if isinstance(child.tag, str) and _local_name(child.tag) == name:
            return child
    return None


def _text(element: ET.Element) -> str:
    return "".join(element.itertext()).strip()


def resolve_href(base_file: str, href: str) -> str:
    """Resolve an href relative to the archive path of the referring file."""
    href = unquote(href.split("#", 1)[0])
    if not href:
        return ""
    base = posixpath.dirname(base_file)
    return posixpath.normpath(posixpath.join(base, href))


@dataclass(frozen=True)
class ManifestItem:
    """One <item> of the OPF manifest."""

    id: str
    href: str
    path: str  # archive path, resolved against the OPF directory
    media_type: str = ""
    properties: tuple[str, ...] = ()


class EpubPackage:
    """The package document of an EPUB and the resources it points at."""

    def __init__(self, archive: ZipArchive, decoder: Optional[TextDecoder] = None):
        self.archive = archive
        self._decoder = decoder or TextDecoder()

        self.opf_path = self._find_opf_path()
        root = self._load_xml(self.opf_path)
        if root is None:
            raise EpubStructureError(
                f"Cannot parse package document {self.opf_path} in {archive.path}"
            )

        self.manifest = self._read_manifest(root)
        self.spine, toc_id = self._read_spine(root)
        self.metadata = self._read_metadata(root)
        self.toc = self._read_toc(toc_id)

    def spine_items(self) -> list[ManifestItem]:
        """Manifest items in reading order (unknown idrefs are skipped)."""
        return [self.manifest[idref] for idref in self.spine if idref in self.manifest]

    def chapters(self) -> list[Chapter]:
        """One plain-text chapter per spine document present in the archive."""
        chapters: list[Chapter] = []
        for order, item in enumerate(self.spine_items()):
            entry = self.archive.get(item.path)
            if entry is None:
                logger.warning("Spine item %s is missing from %s", item.path, self.archive.path)
                continue

            markup = self._decoder.decode(self.archive.read(entry)).text
            chapters.append(
                Chapter(
                    title=self.toc.get(item.path) or f"第 {order + 1} 章",
                    content=html_to_text(markup),
                    source=item.path,
                )
            )
        return chapters

    # Package document

    def _find_opf_path(self) -> str:
        container = self._load_xml(CONTAINER_PATH)
        if container is not None:
            for rootfile in _iter_local(container, "rootfile"):
                full_path = rootfile.get("full-path")
                if full_path:
                    return full_path

        # Fallback: first *.opf in the archive
        for name in self.archive.names():
            if name.lower().endswith(".opf"):
                return name
        raise EpubStructureError(f"No OPF package document in {self.archive.path}")

    def _read_manifest(self, root: ET.Element) -> dict[str, ManifestItem]:
        manifest: dict[str, ManifestItem] = {}
        for item in _iter_local(root, "item"):
            item_id = item.get("id")
            href = item.get("href")
            if not item_id or not href or item_id in manifest:
                continue
            manifest[item_id] = ManifestItem(
                id=item_id,
                href=href,
                path=resolve_href(self.opf_path, href),
                media_type=item.get("media-type", ""),
                properties=tuple((item.get("properties") or "").split()),
            )
        return manifest

    def _read_spine(self, root: ET.Element) -> tuple[list[str], Optional[str]]:
        spine = next(_iter_local(root, "spine"), None)
        if spine is None:
            return [], None
        idrefs = [ref.get("idref", "") for ref in _iter_local(spine, "itemref")]
        return [idref for idref in idrefs if idref], spine.get("toc")

    def _read_metadata(self, root: ET.Element) -> BookMetadata:
        block = next(_iter_local(root, "metadata"), root)

        def first(name: str) -> Optional[str]:
            for element in _iter_local(block, name):
                value = _text(element)
                if value:
                    return value
            return None

        return BookMetadata(
            title=first("title") or self.archive.path.stem,
            author=first("creator"),
            publisher=first("publisher"),
            language=first("language"),
            description=first("description"),
            cover_path=self._find_cover(block),
        )

    def _find_cover(self, metadata: ET.Element) -> Optional[str]:
        for meta in _iter_local(metadata, "meta"):
            if meta.get("name") == "cover":
                item = self.manifest.get(meta.get("content", ""))
                if item is not None:
                    return item.path
        for item in self.manifest.values():
            if "cover-image" in item.properties:
                return item.path
        return None

    # Table of contents

    def _read_toc(self, toc_id: Optional[str]) -> dict[str, str]:
        toc: dict[str, str] = {}

        ncx = self.manifest.get(toc_id) if toc_id else None
        if ncx is None:
            ncx = next(
                (i for i in self.manifest.values() if i.media_type == NCX_MEDIA_TYPE),
                None,
            )
        if ncx is not None:
            toc.update(self._read_ncx(ncx.path))

        nav = next((i for i in self.manifest.values() if "nav" in i.properties), None)
        if nav is not None:
            for path, title in self._read_nav(nav.path).items():
                toc.setdefault(path, title)

        return toc

    def _read_ncx(self, ncx_path: str) -> dict[str, str]:
        root = self._load_xml(ncx_path)
        if root is None:
            return {}

        toc: dict[str, str] = {}
        for nav_point in _iter_local(root, "navPoint"):
            label = _child(nav_point, "navLabel")
            content = _child(nav_point, "content")
            if label is None or content is None:
                continue
            text_element = _child(label, "text")
            title = _text(text_element) if text_element is not None else ""
            path = resolve_href(ncx_path, content.get("src", ""))
            if title and path:
                toc.setdefault(path, title)
        return toc

    def _read_nav(self, nav_path: str) -> dict[str, str]:
        entry = self.archive.get(nav_path)
        if entry is None:
            logger.warning("Navigation document %s is missing", nav_path)
            return {}

        soup = BeautifulSoup(self._decoder.decode(self.archive.read(entry)).text, "html.parser")
        navs = [
            nav
            for nav in soup.find_all("nav")
            if "toc" in (nav.get("epub:type") or "").lower()
        ] or soup.find_all("nav")

        toc: dict[str, str] = {}
        for nav in navs:
            for anchor in nav.find_all("a"):
                href = anchor.get("href")
                title = anchor.get_text(strip=True)
                path = resolve_href(nav_path, href) if href else ""
                if title and path:
                    toc.setdefault(path, title)
        return toc

    # Helpers

    def _load_xml(self, path: str) -> Optional[ET.Element]:
        entry = self.archive.get(path)
        if entry is None:
            return None
        try:
            return ET.fromstring(self.archive.read(entry))
        except ET.ParseError as exc:
            logger.warning("Malformed XML in %s: %s", path, exc)
            return None
