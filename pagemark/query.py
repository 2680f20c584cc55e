"""pagemark.query - single-URL fetch and extraction API.

Basic usage::

    from pagemark import extract

    result = extract("https://example.com/blog/some-post")
    print(result.title)
    print(result.content)

    # With SEO / Open Graph metadata
    result = extract("https://example.com/blog/some-post", include_metadata=True)
    print(result.metadata.description)

Low-level access::

    from pagemark.query import fetch_html, parse

    html = fetch_html("https://example.com/blog/post")
    result = parse(html, url="https://example.com/blog/post")
"""

from __future__ import annotations

import gzip
import http.client
import logging
import random
import time
import urllib.error
import urllib.request
import zlib
from typing import TYPE_CHECKING
from urllib.parse import urlparse

from pagemark import settings
from pagemark.document import Document
from pagemark.extractors.main_content import ReadabilityIsolator
from pagemark.extractors.markdown import MarkdownifyConverter
from pagemark.extractors.metadata import extract_metadata
from pagemark.items import ExtractionResult, Metadata

if TYPE_CHECKING:
    from pagemark.protocols import ContentIsolator, DocumentProvider, MarkupConverter

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Public exception
# ---------------------------------------------------------------------------

class FetchError(RuntimeError):
    """Raised when a URL cannot be fetched.

    Attributes:
        url    -- the URL that failed
        status -- HTTP status code (0 if no response was received)
        reason -- text of the underlying cause
    """

    def __init__(
        self,
        message: str,
        url: str = "",
        status: int = 0,
        reason: str = "",
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status = status
        self.reason = reason


def _decode_response_body(raw: bytes, headers: object | None, url: str) -> str:
    encoding = ""
    charset = "utf-8"
    if headers is not None:
        try:
            encoding = str(headers.get("Content-Encoding", "")).lower().strip()
            charset = headers.get_content_charset("utf-8") or "utf-8"
        except Exception:
            encoding, charset = "", "utf-8"

    try:
        if encoding == "gzip":
            raw = gzip.decompress(raw)
        elif encoding in ("deflate", "zlib"):
            raw = zlib.decompress(raw)
    except (OSError, zlib.error) as exc:
        raise FetchError(
            f"{encoding} decompression failed for {url}: {exc}", url=url, reason=str(exc),
        ) from exc

    try:
        return raw.decode(charset, errors="replace")
    except (LookupError, ValueError):
        return raw.decode("utf-8", errors="replace")


def _retry_after(exc: urllib.error.HTTPError) -> int:
    """Seconds requested by a ``Retry-After`` header, or 0."""
    try:
        header = exc.headers.get("Retry-After", "") if exc.headers else ""
    except Exception:
        return 0
    return int(header) if header and header.strip().isdigit() else 0


def _backoff(attempt: int, floor: int = 0) -> float:
    return max(floor, 2 ** attempt) + random.uniform(0, 1)


# ---------------------------------------------------------------------------
# Low-level HTTP fetch
# ---------------------------------------------------------------------------

def fetch_html(
    url: str,
    *,
    timeout: int | None = None,
    user_agent: str | None = None,
    max_retries: int | None = None,
    proxy: str | None = None,
) -> str:
    """Fetch *url* and return the response body as a decoded string.

    Retries up to *max_retries* times with jittered exponential backoff on
    transient errors (429, 500, 502, 503, 504, and network-level failures).

    Args:
        url:         Fully-qualified HTTP/HTTPS URL.
        timeout:     Request timeout in seconds (default ``settings.DEFAULT_TIMEOUT``).
        user_agent:  Override the default browser User-Agent string.
        max_retries: Maximum number of retry attempts (default ``settings.MAX_RETRIES``).
        proxy:       Optional proxy URL (e.g. ``"http://host:port"``).

    Returns:
        Response body decoded to ``str``.

    Raises:
        FetchError: On HTTP errors, timeouts, connection failures, or invalid URLs.
    """
    timeout = settings.DEFAULT_TIMEOUT if timeout is None else timeout
    max_retries = settings.MAX_RETRIES if max_retries is None else max_retries

    try:
        parsed = urlparse(url)
        req = urllib.request.Request(
            url,
            headers={"User-Agent": user_agent or settings.USER_AGENT, **settings.DEFAULT_REQUEST_HEADERS},
        )
    except ValueError as exc:
        raise FetchError(f"Failed to fetch {url}: {exc}", url=url, reason="invalid URL") from exc
    if parsed.scheme not in ("http", "https"):
        raise FetchError(
            f"Unsupported URL scheme: {parsed.scheme!r}", url=url, reason="unsupported scheme",
        )

    if proxy:
        proxy_handler = urllib.request.ProxyHandler({"http": proxy, "https": proxy})
        _open = urllib.request.build_opener(proxy_handler).open
    else:
        _open = urllib.request.urlopen

    last_exc: FetchError | None = None
    for attempt in range(max_retries + 1):
        try:
            with _open(req, timeout=timeout) as resp:
                return _decode_response_body(resp.read(), resp.headers, url)

        except urllib.error.HTTPError as exc:
            last_exc = FetchError(
                f"Failed to fetch {url}: HTTP {exc.code} {exc.reason}",
                url=url,
                status=exc.code,
                reason=str(exc.reason),
            )
            if exc.code in settings.RETRY_CODES and attempt < max_retries:
                retry_after = _retry_after(exc)
                delay = _backoff(attempt, retry_after)
                logger.debug(
                    "HTTP %d for %s - retrying in %.1fs (attempt %d/%d)%s",
                    exc.code, url, delay, attempt + 1, max_retries,
                    f" [Retry-After={retry_after}s]" if retry_after else "",
                )
                time.sleep(delay)
                continue
            raise last_exc from exc

        except TimeoutError as exc:
            last_exc = FetchError(
                f"Request timeout: Failed to fetch {url} within {timeout} seconds.",
                url=url,
                reason="timeout",
            )
            cause: Exception = exc

        except urllib.error.URLError as exc:
            if isinstance(exc.reason, TimeoutError):
                last_exc = FetchError(
                    f"Request timeout: Failed to fetch {url} within {timeout} seconds.",
                    url=url,
                    reason="timeout",
                )
            else:
                last_exc = FetchError(
                    f"Failed to fetch {url}: {exc.reason}", url=url, reason=str(exc.reason),
                )
            cause = exc

        except OSError as exc:
            last_exc = FetchError(f"Failed to fetch {url}: {exc}", url=url, reason=str(exc))
            cause = exc

        except http.client.HTTPException as exc:
            # connection dropped mid-response: IncompleteRead, LineTooLong, ...
            last_exc = FetchError(
                f"Failed to fetch {url}: {exc!r}", url=url, reason=type(exc).__name__,
            )
            cause = exc

        except ValueError as exc:
            # http.client.InvalidURL for spaces or control characters
            raise FetchError(
                f"Failed to fetch {url}: {exc}", url=url, reason="invalid URL",
            ) from exc

        if attempt < max_retries:
            delay = _backoff(attempt)
            logger.debug(
                "Network error for %s - retrying in %.1fs (attempt %d/%d): %s",
                url, delay, attempt + 1, max_retries, last_exc.reason,
            )
            time.sleep(delay)
            continue
        raise last_exc from cause

    raise last_exc or FetchError(f"All retries exhausted for {url}", url=url)


class HttpDocumentProvider:
    """Default :class:`~pagemark.protocols.DocumentProvider` backed by :func:`fetch_html`."""

    def __init__(
        self,
        *,
        timeout: int | None = None,
        user_agent: str | None = None,
        max_retries: int | None = None,
        proxy: str | None = None,
    ) -> None:
        self.timeout = timeout
        self.user_agent = user_agent
        self.max_retries = max_retries
        self.proxy = proxy

    def fetch(self, url: str) -> str:
        return fetch_html(
            url,
            timeout=self.timeout,
            user_agent=self.user_agent,
            max_retries=self.max_retries,
            proxy=self.proxy,
        )


# ---------------------------------------------------------------------------
# Extraction (pure HTML → ExtractionResult, no network)
# ---------------------------------------------------------------------------

def parse(
    html: str,
    *,
    url: str = "",
    include_metadata: bool = False,
    isolator: ContentIsolator | None = None,
    converter: MarkupConverter | None = None,
) -> ExtractionResult:
    """Extract content (and optionally metadata) from pre-fetched *html*.

    Title precedence: when content isolation succeeds its title wins over
    the harvested ``<title>``; when it fails (or renders to nothing) the
    harvested title is used, which is only available with
    ``include_metadata=True``.

    Args:
        html:             Raw HTML string of the page.
        url:              Original URL; relative links resolve against it.
        include_metadata: Harvest SEO / Open Graph metadata as well.
        isolator:         Content isolator (default :class:`ReadabilityIsolator`).
        converter:        Markup converter (default :class:`MarkdownifyConverter`).
    """
    isolator = isolator or ReadabilityIsolator()
    converter = converter or MarkdownifyConverter()

    document = Document(html, base_url=url)

    metadata: Metadata | None = None
    if include_metadata:
        metadata = extract_metadata(document)

    content = ""
    title = metadata.title if metadata else None

    isolated = isolator.isolate(document)
    if isolated is None:
        logger.info("content isolation found nothing for %s", url or "<no url>")
    else:
        content = converter.render(isolated.html)
        if not content:
            logger.info("isolated content for %s rendered empty", url or "<no url>")
        elif isolated.title:
            title = isolated.title

    return ExtractionResult(content=content, title=title, metadata=metadata)


# ---------------------------------------------------------------------------
# Main public API
# ---------------------------------------------------------------------------

def extract(
    url: str,
    include_metadata: bool = False,
    *,
    provider: DocumentProvider | None = None,
    isolator: ContentIsolator | None = None,
    converter: MarkupConverter | None = None,
) -> ExtractionResult:
    """Fetch *url* and return its readable content as Markdown.

    Args:
        url:              Fully-qualified HTTP/HTTPS URL.
        include_metadata: Also harvest SEO / Open Graph metadata.
        provider:         Source of the page HTML (default :class:`HttpDocumentProvider`).
        isolator:         Content isolator (default :class:`ReadabilityIsolator`).
        converter:        Markup converter (default :class:`MarkdownifyConverter`).

    Returns:
        :class:`~pagemark.items.ExtractionResult`.  ``content`` is ``""``
        when nothing readable was found; that is not an error.

    Raises:
        :class:`FetchError`: If the page cannot be retrieved.  No partial
            result is produced.
    """
    logger.info("extract: %s (include_metadata=%s)", url, include_metadata)
    provider = provider or HttpDocumentProvider()

    try:
        html = provider.fetch(url)
    except FetchError:
        raise
    except (OSError, http.client.HTTPException) as exc:
        raise FetchError(f"Failed to fetch {url}: {exc}", url=url, reason=str(exc)) from exc

    return parse(
        html,
        url=url,
        include_metadata=include_metadata,
        isolator=isolator,
        converter=converter,
    )
