"""Deterministic SEO metadata extraction.

Each field is described by an ordered chain of lookups.  The first lookup
that yields a non-empty (trimmed) value wins; when the whole chain comes up
empty the field stays ``None``.

Priority chains (highest → lowest):
    title           <title> → og:title → twitter:title
    description     meta description → og:description → twitter:description
    keywords        meta keywords
    author          microdata author/name → microdata author → meta author
                    → article:author → rel="author" link text
    published_time  microdata datePublished → article:published_time
                    → publish_date → og:article:published_time → <time datetime>
    site_name       og:site_name → microdata publisher
    language        <html lang> → og:locale
"""

from __future__ import annotations

import logging
from typing import NamedTuple

from pagemark.document import Document
from pagemark.items import Metadata, OpenGraph

logger = logging.getLogger(__name__)


class Lookup(NamedTuple):
    """One step of a fallback chain.

    ``attribute=None`` reads the element's text instead of an attribute.
    ``selector=None`` reads *attribute* from the root ``<html>`` element.
    """

    selector: str | None
    attribute: str | None = None


Chain = tuple[Lookup, ...]


def _meta(name: str) -> Lookup:
    return Lookup(f'meta[name="{name}"]', "content")


def _prop(prop: str) -> Lookup:
    return Lookup(f'meta[property="{prop}"]', "content")


def _itemprop(prop: str, attribute: str = "content") -> Lookup:
    return Lookup(f'[itemprop="{prop}"]', attribute)


# ---------------------------------------------------------------------------
# Chain tables
# ---------------------------------------------------------------------------

FIELD_CHAINS: dict[str, Chain] = {
    "title": (
        Lookup("title"),
        _prop("og:title"),
        _meta("twitter:title"),
    ),
    "description": (
        _meta("description"),
        _prop("og:description"),
        _meta("twitter:description"),
    ),
    "keywords": (
        _meta("keywords"),
    ),
    "author": (
        Lookup('[itemprop="author"] [itemprop="name"]', "content"),
        _itemprop("author"),
        _meta("author"),
        _prop("article:author"),
        Lookup('a[rel~="author"]'),
    ),
    "published_time": (
        _itemprop("datePublished"),
        _prop("article:published_time"),
        _meta("publish_date"),
        _prop("og:article:published_time"),
        Lookup("time", "datetime"),
    ),
    "site_name": (
        _prop("og:site_name"),
        _itemprop("publisher"),
    ),
    "language": (
        Lookup(None, "lang"),
        _prop("og:locale"),
    ),
}

OPEN_GRAPH_CHAINS: dict[str, Chain] = {
    "title": (_prop("og:title"),),
    "type": (_prop("og:type"),),
    "image": (_prop("og:image"), _itemprop("thumbnailUrl", "href")),
    "url": (_prop("og:url"), _itemprop("url", "href")),
    "description": (_prop("og:description"),),
    "site_name": (_prop("og:site_name"),),
    "locale": (_prop("og:locale"),),
}


# ---------------------------------------------------------------------------
# Chain interpreter
# ---------------------------------------------------------------------------

def _lookup(document: Document, step: Lookup) -> str | None:
    if step.selector is None:
        return document.language
    if step.attribute is None:
        return document.text(step.selector)
    return document.attribute(step.selector, step.attribute)


def resolve_chain(document: Document, chain: Chain) -> str | None:
    """Return the first non-empty value produced by *chain*, or None."""
    for step in chain:
        value = _lookup(document, step)
        if value:
            return value
    return None


def _resolve_all(document: Document, chains: dict[str, Chain]) -> dict[str, str | None]:
    return {name: resolve_chain(document, chain) for name, chain in chains.items()}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def extract_open_graph(document: Document) -> OpenGraph | None:
    """Return the page's Open Graph record, or None when it has none."""
    og = OpenGraph(**_resolve_all(document, OPEN_GRAPH_CHAINS))
    return None if og.is_empty() else og


def extract_metadata(document: Document) -> Metadata:
    """Harvest SEO metadata from *document*.

    Pure function of the document: absent sources are normal and never
    raise.  Fields with no value are ``None``; the nested Open Graph
    record is dropped entirely when every one of its properties is absent.
    """
    fields = _resolve_all(document, FIELD_CHAINS)
    meta = Metadata(**fields, open_graph=extract_open_graph(document))
    logger.debug(
        "metadata for %s: %d/%d fields, open_graph=%s",
        document.base_url or "<no url>",
        sum(1 for v in fields.values() if v),
        len(fields),
        meta.open_graph is not None,
    )
    return meta
