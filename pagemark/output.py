"""Render an :class:`~pagemark.items.ExtractionResult` for humans or tools."""

from __future__ import annotations

import json
from pathlib import Path

from pagemark.items import ExtractionResult, Metadata

# Front-matter key order; keys are the serialized (camelCase) names
_METADATA_KEYS: tuple[tuple[str, str], ...] = (
    ("description", "description"),
    ("keywords", "keywords"),
    ("author", "author"),
    ("published_time", "publishedTime"),
    ("site_name", "siteName"),
    ("language", "language"),
)

_OPEN_GRAPH_KEYS: tuple[tuple[str, str], ...] = (
    ("title", "title"),
    ("type", "type"),
    ("image", "image"),
    ("url", "url"),
    ("description", "description"),
    ("site_name", "siteName"),
    ("locale", "locale"),
)


def _quote(value: str) -> str:
    # JSON string syntax doubles as a YAML double-quoted scalar
    return json.dumps(value, ensure_ascii=False)


def format_front_matter(title: str | None, metadata: Metadata) -> str:
    """Return a ``---`` delimited block of ``key: "value"`` lines.

    Only present fields are written; the Open Graph record becomes a
    nested ``openGraph:`` block.
    """
    lines = ["---"]
    if title:
        lines.append(f"title: {_quote(title)}")
    for attr, key in _METADATA_KEYS:
        value = getattr(metadata, attr)
        if value:
            lines.append(f"{key}: {_quote(value)}")

    og = metadata.open_graph
    if og is not None:
        lines.append("openGraph:")
        for attr, key in _OPEN_GRAPH_KEYS:
            value = getattr(og, attr)
            if value:
                lines.append(f"  {key}: {_quote(value)}")

    lines.append("---")
    return "\n".join(lines) + "\n\n"


def format_markdown(result: ExtractionResult) -> str:
    """Return the Markdown body, prefixed with front matter when metadata is present."""
    if result.metadata is None:
        return result.content
    return format_front_matter(result.title, result.metadata) + result.content


def format_json(result: ExtractionResult) -> str:
    return result.to_json(indent=2)


def write_output(text: str, output_path: str | Path | None = None) -> None:
    """Write *text* to *output_path*, or print it to stdout when no path is given.

    Raises:
        OSError: If the file cannot be written.
    """
    if output_path is None:
        print(text)
        return
    Path(output_path).write_text(text, encoding="utf-8")
    print(f"Content successfully written to {output_path}")
