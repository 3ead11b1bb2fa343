"""Plain-text extraction from XHTML spine documents."""

import re

from bs4 import BeautifulSoup, Comment, Declaration, Doctype, ProcessingInstruction

# Tags followed by a paragraph break / a line break in the extracted text
PARAGRAPH_TAGS = ("p", "h1", "h2", "h3", "h4", "h5", "h6")
LINE_TAGS = ("div", "li", "tr", "blockquote", "section")

_MARKUP_NODES = (Comment, Declaration, Doctype, ProcessingInstruction)
_EXTRA_BREAKS = re.compile(r"\n{3,}")


def html_to_text(markup: str) -> str:
    """Convert an XHTML document into plain text with paragraph breaks.

    Args:
        markup: XHTML/HTML source

    Returns:
        Text with one blank line between paragraphs and headings, no
        surrounding whitespace on any line
    """
    soup = BeautifulSoup(markup, "html.parser")

    for node in soup.find_all(string=lambda s: isinstance(s, _MARKUP_NODES)):
        node.extract()
    for tag in soup.find_all(["script", "style", "title"]):
        tag.decompose()

    for br in soup.find_all("br"):
        br.replace_with("\n")
    for tag in soup.find_all(PARAGRAPH_TAGS):
        tag.insert_after("\n\n")
    for tag in soup.find_all(LINE_TAGS):
        tag.insert_after("\n")

    text = soup.get_text()
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = "\n".join(line.strip() for line in text.split("\n"))
    text = _EXTRA_BREAKS.sub("\n\n", text)
    return text.strip()
