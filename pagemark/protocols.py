"""Capability contracts consumed by the extraction pipeline.

The orchestrator in :mod:`pagemark.query` only talks to these three
protocols, so any of them can be swapped for a stand-in::

    class StaticProvider:
        def __init__(self, html: str) -> None:
            self.html = html

        def fetch(self, url: str) -> str:
            return self.html

    result = extract("https://example.com/", provider=StaticProvider("<html>…</html>"))

All of them are ``runtime_checkable`` so ``isinstance()`` works in tests
without inheriting from a base class.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from pagemark.document import Document
    from pagemark.extractors.main_content import IsolatedContent


@runtime_checkable
class DocumentProvider(Protocol):
    """Resolves a URL to the HTML text of the page."""

    def fetch(self, url: str) -> str:
        """Return the page body, or raise :class:`~pagemark.query.FetchError`."""
        ...


@runtime_checkable
class ContentIsolator(Protocol):
    """Finds the primary readable subtree of a parsed page."""

    def isolate(self, document: Document) -> IsolatedContent | None:
        """Return the content fragment and its title, or None if nothing article-like exists."""
        ...


@runtime_checkable
class MarkupConverter(Protocol):
    """Renders an HTML fragment to Markdown. Must never raise."""

    def render(self, html: str) -> str:
        ...
