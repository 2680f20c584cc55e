"""Extraction sub-package: metadata harvesting, content isolation, Markdown rendering."""

from .main_content import IsolatedContent, ReadabilityIsolator, extract_main_content
from .markdown import MarkdownifyConverter, html_to_markdown
from .metadata import extract_metadata, extract_open_graph, resolve_chain

__all__ = [
    "IsolatedContent",
    "MarkdownifyConverter",
    "ReadabilityIsolator",
    "extract_main_content",
    "extract_metadata",
    "extract_open_graph",
    "html_to_markdown",
    "resolve_chain",
]
