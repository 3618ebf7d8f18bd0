"""Repository link extraction from a rendered list document."""

import logging
from collections.abc import Iterator
from pathlib import Path

from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

# Leading anchor of each list item
LINK_SELECTOR = "li > a:first-child"


def load_document(path: Path) -> str:
    """Read a rendered HTML document.

    Raises:
        OSError: If the file cannot be read
    """
    return path.read_text(encoding="utf-8")


def extract_links(html: str) -> Iterator[str]:
    """Yield the href of the leading anchor of every list item.

    Links are produced lazily in document order. Anchors without an href are
    skipped with a warning. Call again to restart.

    Args:
        html: Rendered HTML document

    Yields:
        Raw href values
    """
    soup = BeautifulSoup(html, "html.parser")
    for anchor in soup.select(LINK_SELECTOR):
        href = anchor.get("href")
        if not href:
            logger.warning(f"Expected anchor to have href: {anchor.get_text()!r}")
            continue
        yield str(href)
