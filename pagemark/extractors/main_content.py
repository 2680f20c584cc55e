"""Main content isolation with a two-tier cascade.

Tier 1: readability-lxml  (Mozilla Readability algorithm)
Tier 2: trafilatura       (second-opinion extractor)

When neither tier finds enough article-like text the page is reported as
having no content (``None``) instead of falling back to the whole body.
"""

from __future__ import annotations

import contextlib
import logging
import re
from typing import NamedTuple

from bs4 import BeautifulSoup, Tag

from pagemark import settings
from pagemark.document import Document

logger = logging.getLogger(__name__)

_TEMPLATE_RE = re.compile(r"<template\b[^>]*>.*?</template>", re.DOTALL | re.IGNORECASE)

# ---------------------------------------------------------------------------
# Cookie-consent / GDPR overlay removal
# ---------------------------------------------------------------------------

# CSS selectors for known cookie-consent widgets
_COOKIE_CONSENT_SELECTORS: tuple[str, ...] = (
    # CookieYes / CookieLawInfo
    ".cky-consent-container", ".cookieyes-modal", "#cookie-law-info-bar",
    # Cookiebot
    "#CybotCookiebotDialog",
    # OneTrust
    "#onetrust-consent-sdk", "#onetrust-banner-sdk",
    # Complianz
    "#cmplz-cookiebanner-container",
    # Generic
    ".cookie-banner", ".cookie-notice", ".cookie-consent",
    "#cookie-notice", "#cookie-banner", ".gdpr-banner",
)


class IsolatedContent(NamedTuple):
    html: str
    title: str | None
    method: str


def _count_words(html: str) -> int:
    try:
        soup = BeautifulSoup(html, "lxml")
        return len(soup.get_text(separator=" ").split())
    except Exception:
        return 0


def _preprocess_html(html: str) -> str:
    """Strip ``<template>`` blocks and cookie-consent overlays from *html*.

    lxml re-parents ``<template>`` children into the body, so templates are
    removed with a regex before parsing.
    """
    html = _TEMPLATE_RE.sub("", html)
    try:
        soup = BeautifulSoup(html, "lxml")
    except Exception as exc:
        logger.debug("HTML pre-processing failed: %s", exc)
        return html
    for selector in _COOKIE_CONSENT_SELECTORS:
        with contextlib.suppress(Exception):
            for el in soup.select(selector):
                if isinstance(el, Tag):
                    el.decompose()
    return str(soup)


# ---------------------------------------------------------------------------
# Tier 1: readability-lxml
# ---------------------------------------------------------------------------

def _try_readability(html: str, url: str = "") -> tuple[str | None, str | None]:
    """Return ``(content_html, title)``; content is None below the word threshold."""
    try:
        from readability import Document as ReadabilityDocument  # type: ignore[import-untyped]

        doc = ReadabilityDocument(html, url=url or None)
        title = doc.short_title() or None
        content = doc.summary(html_partial=True)
    except Exception as exc:
        logger.debug("readability failed: %s", exc)
        return None, None
    if _count_words(content) >= settings.READABILITY_MIN_WORDS:
        return content, title
    return None, title


# ---------------------------------------------------------------------------
# Tier 2: trafilatura
# ---------------------------------------------------------------------------

def _try_trafilatura(html: str, url: str = "") -> str | None:
    try:
        import trafilatura  # type: ignore[import-untyped]

        content = trafilatura.extract(
            html,
            url=url or None,
            output_format="html",
            include_links=True,
            include_images=True,
            include_tables=True,
            favor_recall=True,
        )
    except Exception as exc:
        logger.debug("trafilatura failed: %s", exc)
        return None
    if content and _count_words(content) >= settings.TRAFILATURA_MIN_WORDS:
        return content
    return None


def _trafilatura_title(html: str, url: str = "") -> str | None:
    try:
        import trafilatura  # type: ignore[import-untyped]

        meta = trafilatura.extract_metadata(html, default_url=url or None)
    except Exception as exc:
        logger.debug("trafilatura metadata failed: %s", exc)
        return None
    if meta is None or not meta.title:
        return None
    return meta.title.strip() or None


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def extract_main_content(html: str, url: str = "") -> IsolatedContent | None:
    """Isolate the primary readable content of *html*.

    Strategy:
      1. Run readability-lxml and trafilatura independently.
      2. If both pass their word thresholds, prefer trafilatura only when it
         yields at least ``TRAFILATURA_PREFERENCE_RATIO`` times more words.
      3. Otherwise use whichever one passed.
      4. Neither passed: return None.

    The title always comes from readability when it has one, since it is
    derived from the page heading rather than the extracted fragment.
    """
    html = _preprocess_html(html)

    r_content, r_title = _try_readability(html, url)
    r_wc = _count_words(r_content) if r_content else 0

    t_content = _try_trafilatura(html, url)
    t_wc = _count_words(t_content) if t_content else 0

    logger.debug("readability=%d words  trafilatura=%d words  url=%s", r_wc, t_wc, url)

    if r_content and t_content and t_wc >= r_wc * settings.TRAFILATURA_PREFERENCE_RATIO:
        logger.debug("trafilatura wins (%d vs %d words) for %s", t_wc, r_wc, url)
        return IsolatedContent(t_content, r_title or _trafilatura_title(html, url), "trafilatura")
    if r_content:
        return IsolatedContent(r_content, r_title, "readability")
    if t_content:
        return IsolatedContent(t_content, r_title or _trafilatura_title(html, url), "trafilatura")

    logger.info("no article-like content found for %s", url or "<no url>")
    return None


class ReadabilityIsolator:
    """Default :class:`~pagemark.protocols.ContentIsolator`."""

    def isolate(self, document: Document) -> IsolatedContent | None:
        return extract_main_content(document.html, url=document.base_url)
