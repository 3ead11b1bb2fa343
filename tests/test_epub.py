import zipfile

import pytest

from bookpack import EpubStructureError, open_archive
from bookpack.epub import EpubPackage, html_to_text, resolve_href
from tests.conftest import CH1_XHTML, OPF_XML, write_zip

DEFLATED = zipfile.ZIP_DEFLATED


def test_package_metadata(sample_epub):
    with open_archive(sample_epub) as archive:
        package = EpubPackage(archive)

    assert package.opf_path == "OEBPS/content.opf"
    metadata = package.metadata
    assert metadata.title == "旅の記録"
    assert metadata.author == "Sample Author"
    assert metadata.publisher == "Sample Press"
    assert metadata.language == "ja"
    assert metadata.description is None
    assert metadata.cover_path == "OEBPS/images/cover.jpg"


def test_manifest_and_spine(sample_epub):
    with open_archive(sample_epub) as archive:
        package = EpubPackage(archive)

    assert package.spine == ["ch1", "ch2"]
    assert [item.path for item in package.spine_items()] == [
        "OEBPS/Text/ch1.xhtml",
        "OEBPS/Text/ch2.xhtml",
    ]
    assert package.manifest["nav"].properties == ("nav",)
    assert package.manifest["ncx"].media_type == "application/x-dtbncx+xml"


def test_toc_prefers_ncx_titles_then_nav(sample_epub):
    with open_archive(sample_epub) as archive:
        package = EpubPackage(archive)

    assert package.toc["OEBPS/Text/ch1.xhtml"] == "第一章 出発"
    assert package.toc["OEBPS/Text/ch2.xhtml"] == "Chapter Two"


def test_chapters_in_spine_order(sample_epub):
    with open_archive(sample_epub) as archive:
        chapters = EpubPackage(archive).chapters()

    assert [c.title for c in chapters] == ["第一章 出発", "Chapter Two"]
    assert [c.source for c in chapters] == ["OEBPS/Text/ch1.xhtml", "OEBPS/Text/ch2.xhtml"]
    assert chapters[0].content == "第一章 出発\n\nHello & welcome.\n\nSecond\nline"
    assert chapters[1].content == "The road goes on."


def test_opf_fallback_without_container(tmp_path):
    opf = OPF_XML.replace('href="Text/ch1.xhtml"', 'href="ch1.xhtml"')
    path = write_zip(
        tmp_path / "bare.epub",
        [
            ("content.opf", opf.encode(), DEFLATED),
            ("ch1.xhtml", CH1_XHTML.encode(), DEFLATED),
        ],
    )

    with open_archive(path) as archive:
        package = EpubPackage(archive)
        chapters = package.chapters()

    assert package.opf_path == "content.opf"
    assert package.toc == {}
    assert [c.title for c in chapters] == ["第 1 章"]


def test_missing_package_document(tmp_path):
    path = write_zip(tmp_path / "empty.epub", [("mimetype", b"application/epub+zip", 0)])

    with open_archive(path) as archive:
        with pytest.raises(EpubStructureError):
            EpubPackage(archive)


def test_malformed_package_document(tmp_path):
    path = write_zip(tmp_path / "broken.epub", [("book.opf", b"<package><metadata>", DEFLATED)])

    with open_archive(path) as archive:
        with pytest.raises(EpubStructureError):
            EpubPackage(archive)


def test_title_falls_back_to_filename(tmp_path):
    opf = '<package xmlns="http://www.idpf.org/2007/opf"><metadata/><manifest/><spine/></package>'
    path = write_zip(tmp_path / "untitled-book.epub", [("content.opf", opf.encode(), DEFLATED)])

    with open_archive(path) as archive:
        package = EpubPackage(archive)

    assert package.metadata.title == "untitled-book"
    assert package.metadata.author is None
    assert package.chapters() == []


def test_resolve_href():
    assert resolve_href("OEBPS/content.opf", "Text/ch%201.xhtml#frag") == "OEBPS/Text/ch 1.xhtml"
    assert resolve_href("OEBPS/nav/nav.xhtml", "../Text/a.xhtml") == "OEBPS/Text/a.xhtml"
    assert resolve_href("content.opf", "a.xhtml") == "a.xhtml"
    assert resolve_href("content.opf", "#only-fragment") == ""


def test_html_to_text_drops_scripts_and_styles():
    markup = "<html><head><style>b{}</style></head><body><div>One</div><div>Two</div><script>x()</script></body></html>"

    assert html_to_text(markup) == "One\nTwo"
