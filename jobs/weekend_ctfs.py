"""Announce this weekend's CTFtime events on Discord."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import datetime
from typing import Any, List, Optional, Sequence

from dotenv import load_dotenv

from ingest.config import debug_enabled, load_webhooks
from ingest.ctftime_client import fetch_events, weekend_window
from ingest.discord_client import (
    MAX_EMBEDS_PER_MESSAGE,
    Destination,
    WebhookDispatcher,
    build_payload,
    chunked,
)
from ingest.embeds import build_embeds
from ingest.errors import NotifierError
from ingest.schemas import Embed
from scrapers.icon_scraper import resolve_icons

logger = logging.getLogger(__name__)


def run(
    webhooks: Optional[Sequence[Destination]] = None,
    *,
    now: Optional[datetime] = None,
    dry_run: bool = False,
) -> List[Embed]:
    """Fetch, format and deliver the weekend's events.

    Webhooks are read from the environment when not given. In a dry run no
    webhook configuration is needed and nothing is posted.
    """
    if webhooks is None and not dry_run:
        webhooks = load_webhooks()

    start, end = weekend_window(now)
    logger.info("Window %d -> %d", start, end)

    events = fetch_events(start, end)
    icons = resolve_icons(event.ctftime_url for event in events)
    embeds = build_embeds(events, icons)

    if dry_run:
        for batch in chunked(embeds, MAX_EMBEDS_PER_MESSAGE):
            print(json.dumps(build_payload(batch), indent=2, ensure_ascii=False))
        return embeds

    WebhookDispatcher(webhooks).dispatch(embeds)
    return embeds


def handler(event: Any = None, context: Any = None) -> None:
    """Entry point for a scheduled trigger; the trigger payload is ignored."""
    load_dotenv()
    embeds = run()
    logger.info("Announced %d event(s)", len(embeds))


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="print the webhook payloads instead of posting them",
    )
    args = parser.parse_args(argv)

    load_dotenv()
    if debug_enabled():
        logging.basicConfig(level=logging.INFO, format="%(message)s")

    try:
        embeds = run(dry_run=args.dry_run)
    except NotifierError as exc:
        print("❌ Weekend announcement failed:", exc, file=sys.stderr)
        return 1

    print(f"✅ {len(embeds)} event(s) {'formatted' if args.dry_run else 'announced'}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
