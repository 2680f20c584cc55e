"""pagemark - turn a web page into clean Markdown plus SEO metadata.

Quick single-URL usage::

    from pagemark import extract

    result = extract("https://example.com/blog/some-post")
    print(result.title)
    print(result.content)

With metadata::

    result = extract("https://example.com/blog/some-post", include_metadata=True)
    print(result.metadata.author)
    print(result.to_json())

Pre-fetched HTML::

    from pagemark import parse

    result = parse(html, url="https://example.com/blog/some-post")
"""

from pagemark.document import Document
from pagemark.extractors.metadata import extract_metadata
from pagemark.items import ExtractionResult, Metadata, OpenGraph
from pagemark.query import FetchError, extract, fetch_html, parse

__version__ = "0.1.0"
__all__ = [
    "Document",
    "ExtractionResult",
    "FetchError",
    "Metadata",
    "OpenGraph",
    "extract",
    "extract_metadata",
    "fetch_html",
    "parse",
]
