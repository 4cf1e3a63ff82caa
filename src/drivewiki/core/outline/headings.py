"""Extract headings from exported document HTML."""

from bs4 import BeautifulSoup
from bs4.element import Tag

from drivewiki.models.node import Heading

HEADING_TAGS = ("h1", "h2", "h3", "h4", "h5", "h6")


def extract_headings(html: str) -> list[Heading]:
    """Return the h1-h6 elements of an HTML document, in document order."""
    soup = BeautifulSoup(html, "html.parser")
    body = soup.body or soup
    headings: list[Heading] = []
    for el in body.find_all(HEADING_TAGS):
        if not isinstance(el, Tag):
            continue
        text = el.get_text(" ", strip=True)
        if not text:
            continue
        heading_id = el.get("id") or ""
        if isinstance(heading_id, list):
            heading_id = " ".join(heading_id)
        headings.append(Heading(level=int(el.name[1]), id=heading_id, text=text))
    return headings
