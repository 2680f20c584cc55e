"""Shared pytest fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from pagemark.extractors.main_content import IsolatedContent

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def _read_fixture(name: str) -> str:
    return (FIXTURES_DIR / name).read_text(encoding="utf-8")


@pytest.fixture
def article_html() -> str:
    return _read_fixture("article.html")


@pytest.fixture
def minimal_html() -> str:
    return _read_fixture("minimal.html")


# ---------------------------------------------------------------------------
# Stand-in capabilities
# ---------------------------------------------------------------------------

class StaticProvider:
    """Returns the same HTML for every URL and records the calls."""

    def __init__(self, html: str) -> None:
        self.html = html
        self.calls: list[str] = []

    def fetch(self, url: str) -> str:
        self.calls.append(url)
        return self.html


class FailingProvider:
    def __init__(self, exc: Exception) -> None:
        self.exc = exc

    def fetch(self, url: str) -> str:
        raise self.exc


class StubIsolator:
    """Returns a fixed fragment and title, or None to simulate a non-article page."""

    def __init__(self, html: str | None, title: str | None = None) -> None:
        self.html = html
        self.title = title
        self.documents: list = []

    def isolate(self, document):
        self.documents.append(document)
        if self.html is None:
            return None
        return IsolatedContent(self.html, self.title, "stub")


class TextConverter:
    """Deterministic converter: the fragment's visible text."""

    def render(self, html: str) -> str:
        from bs4 import BeautifulSoup

        return BeautifulSoup(html, "lxml").get_text().strip()


@pytest.fixture
def text_converter() -> TextConverter:
    return TextConverter()
