"""Markdown rendering of isolated content fragments.

:class:`MarkdownifyConverter` is the default
:class:`~pagemark.protocols.MarkupConverter`.  Rendering is total: tags
markdownify has no rule for keep only their visible text, and a
converter failure degrades to the fragment's plain text.
"""

from __future__ import annotations

import logging
import re

from bs4 import BeautifulSoup
from markdownify import markdownify

logger = logging.getLogger(__name__)

_LANGUAGE_CLASS_PREFIX = "language-"

# (pattern, replacement) pairs applied in order to the rendered text
_CLEANUPS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"[ \t]+$", re.MULTILINE), ""),
    (re.compile(r"\n{3,}"), "\n\n"),
)


def _code_language(el: object) -> str:
    """Fence language for a ``<pre>``/``<code>`` element, from its ``language-*`` class."""
    getter = getattr(el, "get", None)
    for cls in (getter("class") if getter else None) or []:
        if isinstance(cls, str) and cls.startswith(_LANGUAGE_CLASS_PREFIX):
            return cls.removeprefix(_LANGUAGE_CLASS_PREFIX)
    return ""


def _visible_text(fragment: str) -> str:
    return BeautifulSoup(fragment, "lxml").get_text(separator="\n")


def html_to_markdown(fragment: str) -> str:
    """Render *fragment* as Markdown with ATX headings and ``-`` bullets.

    Returns ``""`` for blank input and never raises.  Output has no
    trailing spaces and at most one blank line between blocks.
    """
    if not fragment or not fragment.strip():
        return ""

    try:
        text = markdownify(
            fragment,
            heading_style="ATX",
            bullets="-",
            code_language_callback=_code_language,
        )
    except Exception as exc:
        logger.warning("markdownify failed, rendering visible text only: %s", exc)
        text = _visible_text(fragment)

    for pattern, replacement in _CLEANUPS:
        text = pattern.sub(replacement, text)
    return text.strip()


class MarkdownifyConverter:
    """Default :class:`~pagemark.protocols.MarkupConverter`."""

    def render(self, html: str) -> str:
        return html_to_markdown(html)
