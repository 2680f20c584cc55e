"""Pydantic models for extraction output."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

_MODEL_CONFIG = ConfigDict(
    frozen=True,
    populate_by_name=True,
    alias_generator=to_camel,
)


def _blank_to_none(v: Any) -> Any:
    """Trim strings and map empty ones to None."""
    if isinstance(v, str):
        return v.strip() or None
    return v


class OpenGraph(BaseModel):
    """Open Graph properties of a page."""

    model_config = _MODEL_CONFIG

    title: str | None = None
    type: str | None = None
    image: str | None = None
    url: str | None = None
    description: str | None = None
    site_name: str | None = None
    locale: str | None = None

    @field_validator("*", mode="before")
    @classmethod
    def strip_values(cls, v: Any) -> Any:
        return _blank_to_none(v)

    def is_empty(self) -> bool:
        return all(value is None for value in self.model_dump().values())


class Metadata(BaseModel):
    """SEO metadata harvested from the page head and microdata.

    Every field is ``None`` when nothing in its fallback chain produced a
    value, and ``open_graph`` is ``None`` rather than an empty record.
    """

    model_config = _MODEL_CONFIG

    title: str | None = None
    description: str | None = None
    keywords: str | None = None
    author: str | None = None
    published_time: str | None = None
    site_name: str | None = None
    language: str | None = None
    open_graph: OpenGraph | None = None

    @field_validator(
        "title",
        "description",
        "keywords",
        "author",
        "published_time",
        "site_name",
        "language",
        mode="before",
    )
    @classmethod
    def strip_values(cls, v: Any) -> Any:
        return _blank_to_none(v)

    @field_validator("open_graph", mode="after")
    @classmethod
    def drop_empty_open_graph(cls, v: OpenGraph | None) -> OpenGraph | None:
        if v is not None and v.is_empty():
            return None
        return v


class ExtractionResult(BaseModel):
    """Canonical output of :func:`pagemark.extract`.

    ``content`` is an empty string, not an error, when no readable content
    could be isolated.
    """

    model_config = _MODEL_CONFIG

    content: str = ""
    title: str | None = None
    metadata: Metadata | None = None

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, v: Any) -> Any:
        return _blank_to_none(v)

    def to_json(self, indent: int | None = 2) -> str:
        """Serialize with camelCase keys, leaving out absent fields."""
        return self.model_dump_json(by_alias=True, exclude_none=True, indent=indent)
