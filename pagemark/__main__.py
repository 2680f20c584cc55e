"""CLI entry point: python -m pagemark URL [options]"""

from __future__ import annotations

import argparse
import logging
import sys

from pagemark import settings
from pagemark.output import format_json, format_markdown, write_output
from pagemark.query import FetchError, HttpDocumentProvider, extract

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pagemark",
        description=(
            "Extract the readable content of a web page as Markdown.\n"
            "Optionally include SEO / Open Graph metadata."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("url", metavar="URL",
                        help="URL of the web page to extract content from")
    parser.add_argument("-o", "--output", default=None, metavar="PATH",
                        help="Output file path (default: stdout)")
    parser.add_argument("-s", "--seo", action="store_true", default=False,
                        help="Include SEO metadata in the output")
    parser.add_argument("-j", "--json", action="store_true", default=False,
                        help="Output in JSON format")
    parser.add_argument("--timeout", type=int, default=settings.DEFAULT_TIMEOUT, metavar="SECONDS",
                        help=f"Request timeout in seconds (default: {settings.DEFAULT_TIMEOUT})")
    parser.add_argument("--retries", type=int, default=settings.MAX_RETRIES, metavar="N",
                        help=f"Retries on transient errors (default: {settings.MAX_RETRIES})")
    parser.add_argument("--user-agent", default=None, metavar="UA",
                        help="Override the browser User-Agent string")
    parser.add_argument("--proxy", default=None, metavar="URL",
                        help="Proxy URL, e.g. http://host:port")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        metavar="{DEBUG,INFO,WARNING,ERROR}",
                        help="Logging level (default: WARNING)")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    provider = HttpDocumentProvider(
        timeout=args.timeout,
        user_agent=args.user_agent,
        max_retries=args.retries,
        proxy=args.proxy,
    )

    try:
        result = extract(args.url, include_metadata=args.seo, provider=provider)
    except FetchError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if not result.content:
        logger.warning("No readable content found at %s", args.url)

    text = format_json(result) if args.json else format_markdown(result)
    try:
        write_output(text, args.output)
    except OSError as exc:
        print(f"Error: Failed to write to file {args.output}: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
