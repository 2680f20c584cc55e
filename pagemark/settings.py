"""Default settings for pagemark.

Network values can be overridden through ``PAGEMARK_*`` environment
variables; the CLI flags override both.
"""

from __future__ import annotations

import os

# ---------------------------------------------------------------------------
# HTTP fetch
# ---------------------------------------------------------------------------
DEFAULT_TIMEOUT = int(os.getenv("PAGEMARK_TIMEOUT", "10"))
MAX_RETRIES = int(os.getenv("PAGEMARK_MAX_RETRIES", "3"))

USER_AGENT = os.getenv(
    "PAGEMARK_USER_AGENT",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/138.0.0.0 Safari/537.36",
)

ACCEPT_LANGUAGE = "zh-CN,zh;q=0.9,en;q=0.8"

DEFAULT_REQUEST_HEADERS = {
    "Accept": (
        "text/html,application/xhtml+xml,application/xml;q=0.9,"
        "image/avif,image/webp,image/apng,*/*;q=0.8"
    ),
    "Accept-Language": ACCEPT_LANGUAGE,
    "Accept-Encoding": "gzip, deflate",
    "Cache-Control": "max-age=0",
    "Sec-Fetch-Dest": "document",
    "Sec-Fetch-Mode": "navigate",
    "Sec-Fetch-Site": "none",
    "Sec-Fetch-User": "?1",
    "Upgrade-Insecure-Requests": "1",
}

# Status codes worth another attempt
RETRY_CODES: frozenset[int] = frozenset({429, 500, 502, 503, 504})

# ---------------------------------------------------------------------------
# Content isolation
# ---------------------------------------------------------------------------
READABILITY_MIN_WORDS = 50
TRAFILATURA_MIN_WORDS = 30

# trafilatura replaces readability only when it finds this many times more words
TRAFILATURA_PREFERENCE_RATIO = 1.4
