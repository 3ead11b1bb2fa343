from __future__ import annotations

import zipfile
from pathlib import Path
from typing import Callable

import pytest

ZipEntries = list[tuple[str, bytes, int]]

CONTAINER_XML = """<?xml version="1.0" encoding="UTF-8"?>
<container version="1.0" xmlns="urn:oasis:names:tc:opendocument:xmlns:container">
  <rootfiles>
    <rootfile full-path="OEBPS/content.opf" media-type="application/oebps-package+xml"/>
  </rootfiles>
</container>
"""

OPF_XML = """<?xml version="1.0" encoding="UTF-8"?>
<package version="3.0" unique-identifier="BookId" xmlns="http://www.idpf.org/2007/opf">
  <metadata xmlns:dc="http://purl.org/dc/elements/1.1/">
    <dc:title>旅の記録</dc:title>
    <dc:creator>Sample Author</dc:creator>
    <dc:publisher>Sample Press</dc:publisher>
    <dc:language>ja</dc:language>
    <meta name="cover" content="cover"/>
  </metadata>
  <manifest>
    <item id="ncx" href="toc.ncx" media-type="application/x-dtbncx+xml"/>
    <item id="nav" href="nav.xhtml" media-type="application/xhtml+xml" properties="nav"/>
    <item id="cover" href="images/cover.jpg" media-type="image/jpeg"/>
    <item id="ch1" href="Text/ch1.xhtml" media-type="application/xhtml+xml"/>
    <item id="ch2" href="Text/ch2.xhtml" media-type="application/xhtml+xml"/>
  </manifest>
  <spine toc="ncx">
    <itemref idref="ch1"/>
    <itemref idref="ch2"/>
  </spine>
</package>
"""

NCX_XML = """<?xml version="1.0" encoding="UTF-8"?>
<ncx xmlns="http://www.daisy.org/z3986/2005/ncx/" version="2005-1">
  <navMap>
    <navPoint id="np1" playOrder="1">
      <navLabel><text>第一章 出発</text></navLabel>
      <content src="Text/ch1.xhtml#start"/>
    </navPoint>
  </navMap>
</ncx>
"""

NAV_XHTML = """<?xml version="1.0" encoding="utf-8"?>
<html xmlns="http://www.w3.org/1999/xhtml" xmlns:epub="http://www.idpf.org/2007/ops">
  <head><title>Contents</title></head>
  <body>
    <nav epub:type="toc">
      <ol>
        <li><a href="Text/ch1.xhtml">Ignored Title</a></li>
        <li><a href="Text/ch2.xhtml">Chapter Two</a></li>
      </ol>
    </nav>
  </body>
</html>
"""

CH1_XHTML = """<?xml version="1.0" encoding="utf-8"?>
<html xmlns="http://www.w3.org/1999/xhtml">
<head><title>Ch1</title><style>p { margin: 0; }</style></head>
<body>
<h1>第一章 出発</h1>
<p>Hello &amp; welcome.</p>
<p>Second<br/>line</p>
</body>
</html>
"""

CH2_XHTML = """<?xml version="1.0" encoding="utf-8"?>
<html xmlns="http://www.w3.org/1999/xhtml">
<head><title>Ch2</title></head>
<body>
<p>The road goes on.</p>
<script>alert("x")</script>
</body>
</html>
"""

COVER_BYTES = b"\xff\xd8\xff\xe0" + b"\x00" * 64


def write_zip(path: Path, entries: ZipEntries, comment: bytes = b"") -> Path:
    with zipfile.ZipFile(path, "w") as zf:
        for name, data, method in entries:
            zf.writestr(name, data, compress_type=method)
        zf.comment = comment
    return path


@pytest.fixture
def make_zip(tmp_path: Path) -> Callable[..., Path]:
    def _make(name: str, entries: ZipEntries, comment: bytes = b"") -> Path:
        return write_zip(tmp_path / name, entries, comment)

    return _make


@pytest.fixture
def sample_epub(tmp_path: Path) -> Path:
    stored, deflated = zipfile.ZIP_STORED, zipfile.ZIP_DEFLATED
    return write_zip(
        tmp_path / "sample.epub",
        [
            ("mimetype", b"application/epub+zip", stored),
            ("META-INF/container.xml", CONTAINER_XML.encode(), deflated),
            ("OEBPS/content.opf", OPF_XML.encode(), deflated),
            ("OEBPS/toc.ncx", NCX_XML.encode(), deflated),
            ("OEBPS/nav.xhtml", NAV_XHTML.encode(), deflated),
            ("OEBPS/images/cover.jpg", COVER_BYTES, stored),
            ("OEBPS/Text/ch1.xhtml", CH1_XHTML.encode(), deflated),
            ("OEBPS/Text/ch2.xhtml", CH2_XHTML.encode(), deflated),
        ],
    )


@pytest.fixture
def sample_txt(tmp_path: Path) -> Path:
    path = tmp_path / "my-novel.txt"
    path.write_text(
        "My Novel\nby Jane Doe\n\nChapter 1\nIt began.\n\nChapter 2\nIt ended.\n",
        encoding="utf-8",
    )
    return path
