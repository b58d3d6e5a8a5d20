#!/usr/bin/env python
"""Fetch one Reuters listing and print it as a JSON feed.

Run from the project root::

    python scripts/fetch_reuters_feed.py world us --limit 5

Usage::

    python scripts/fetch_reuters_feed.py CATEGORY [TOPIC] [--limit N] [--fulltext] [--sophi]

Options:
    --limit     Number of listing items (default from settings, 20).
    --fulltext  Enrich every item from its article page.
    --sophi     Use Sophi ranking (world topics only).

Exit codes:
    0 — Feed printed.
    1 — Neither the primary nor the fallback API produced a feed.
    2 — Invalid arguments.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import os
import sys

# Ensure the src layout is on sys.path when run as a standalone script.
_SCRIPT_DIR = os.path.dirname(os.path.abspath(__file__))
_SRC_DIR = os.path.join(os.path.dirname(_SCRIPT_DIR), "src")
if _SRC_DIR not in sys.path:
    sys.path.insert(0, _SRC_DIR)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Print a Reuters listing as a JSON feed.")
    parser.add_argument("category", help="Category slug, e.g. world, business, authors.")
    parser.add_argument("topic", nargs="?", default=None, help="Topic or author slug.")
    parser.add_argument("--limit", type=int, default=None, help="Number of listing items.")
    parser.add_argument("--fulltext", action="store_true", help="Enrich items from article pages.")
    parser.add_argument("--sophi", action="store_true", help="Use Sophi ranking.")
    return parser.parse_args(argv)


async def _run(args: argparse.Namespace) -> int:
    from newsfeed_adapters.config.settings import get_settings  # noqa: PLC0415
    from newsfeed_adapters.core.logging_config import configure_logging  # noqa: PLC0415
    from newsfeed_adapters.sources.reuters.collector import ReutersCollector  # noqa: PLC0415
    from newsfeed_adapters.sources.reuters.models import ListingRequest  # noqa: PLC0415

    configure_logging(get_settings().log_level, stream=sys.stderr)

    try:
        request = ListingRequest.create(
            args.category,
            topic=args.topic,
            limit=args.limit,
            fulltext=args.fulltext,
            sophi=args.sophi,
        )
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    feed = await ReutersCollector().collect(request)
    if feed is None:
        print(f"error: no feed produced for {request.section_path}", file=sys.stderr)
        return 1

    print(json.dumps(feed.to_dict(), indent=2, ensure_ascii=False))
    return 0


def main(argv: list[str] | None = None) -> int:
    return asyncio.run(_run(_parse_args(argv)))


if __name__ == "__main__":
    sys.exit(main())
