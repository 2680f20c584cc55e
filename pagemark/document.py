"""Queryable view of a parsed HTML page.

Every lookup returns ``None`` when the element or attribute is missing or
when its trimmed value is empty; nothing here raises for absent data.
"""

from __future__ import annotations

import logging
from typing import Any

from bs4 import BeautifulSoup, Tag

logger = logging.getLogger(__name__)


def _safe_str(val: Any, default: str = "") -> str:
    """Safely convert a BeautifulSoup attribute value (str | list | None) to str."""
    if val is None:
        return default
    if isinstance(val, list):
        return " ".join(str(v) for v in val)
    return str(val)


class Document:
    """An HTML page parsed with lxml and bound to the URL it came from.

    Args:
        html:     Raw HTML string.
        base_url: URL the page was fetched from; used to resolve relative
                  links during content isolation.
    """

    def __init__(self, html: str, base_url: str = "") -> None:
        self.html = html
        self.base_url = base_url
        self.soup = BeautifulSoup(html, "lxml")

    def select_one(self, selector: str) -> Tag | None:
        """Return the first element matching *selector* in document order."""
        try:
            el = self.soup.select_one(selector)
        except Exception as exc:
            logger.debug("CSS selector %r failed: %s", selector, exc)
            return None
        return el if isinstance(el, Tag) else None

    def attribute(self, selector: str, name: str) -> str | None:
        """Return attribute *name* of the first element matching *selector*."""
        el = self.select_one(selector)
        if el is None:
            return None
        return _safe_str(el.get(name)).strip() or None

    def text(self, selector: str) -> str | None:
        """Return the text content of the first element matching *selector*."""
        el = self.select_one(selector)
        if el is None:
            return None
        return el.get_text().strip() or None

    @property
    def language(self) -> str | None:
        """The ``lang`` attribute of the root ``<html>`` element."""
        html_tag = self.soup.find("html")
        if not isinstance(html_tag, Tag):
            return None
        return _safe_str(html_tag.get("lang")).strip() or None

    def __repr__(self) -> str:
        return f"Document(base_url={self.base_url!r}, size={len(self.html)})"
