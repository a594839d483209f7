"""Scrape event logos from CTFtime profile pages."""
from __future__ import annotations

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, Iterable, List, Optional

import requests
from bs4 import BeautifulSoup

from ingest.errors import IconResolutionError
from ingest.schemas import Icon

from .utils import parse_dimension, to_absolute_url

ICON_CONTAINER_CLASS = "span2"
PLACEHOLDER_SRC = "static/images/nologo.png"

logger = logging.getLogger(__name__)


def parse_icon(html: str) -> Icon:
    """Extract the logo from a CTFtime event page.

    The logo is the first element nested inside a ``span2`` block. A missing
    ``src`` falls back to CTFtime's "no logo" image and unreadable
    dimensions become 0.

    Raises:
        IconResolutionError: if the page has no element inside a ``span2``.
    """
    soup = BeautifulSoup(html, "html.parser")
    node = soup.select_one(f".{ICON_CONTAINER_CLASS} *")
    if node is None:
        raise IconResolutionError(f"no element inside .{ICON_CONTAINER_CLASS}")

    src = node.get("src", PLACEHOLDER_SRC)
    return Icon(
        src=to_absolute_url(src),
        width=parse_dimension(node.get("width")),
        height=parse_dimension(node.get("height")),
    )


def fetch_icon(url: str) -> Icon:
    """Download ``url`` and return the icon found on it."""
    try:
        resp = requests.get(url, headers={"User-Agent": "Mozilla/5.0"}, timeout=30)
        resp.raise_for_status()
    except requests.RequestException as exc:
        raise IconResolutionError(f"failed to fetch {url}: {exc}") from exc
    return parse_icon(resp.text)


def _try_fetch_icon(url: str) -> Optional[Icon]:
    try:
        return fetch_icon(url)
    except IconResolutionError as exc:
        logger.warning("No icon for %s: %s", url, exc)
        return None


async def resolve_icons_async(
    urls: Iterable[str], executor: Optional[ThreadPoolExecutor] = None
) -> Dict[str, Icon]:
    """Fetch every distinct URL concurrently and collect the icons found.

    URLs whose page could not be fetched or parsed are left out of the result.
    """
    unique: List[str] = list(dict.fromkeys(urls))
    loop = asyncio.get_running_loop()
    results = await asyncio.gather(
        *(loop.run_in_executor(executor, _try_fetch_icon, url) for url in unique)
    )
    icons = {url: icon for url, icon in zip(unique, results) if icon is not None}
    logger.info("Resolved %d of %d icon(s)", len(icons), len(unique))
    return icons


def resolve_icons(urls: Iterable[str]) -> Dict[str, Icon]:
    """Blocking wrapper around :func:`resolve_icons_async`.

    The pool gets one thread per distinct URL so every page is requested at once.
    """
    unique = list(dict.fromkeys(urls))
    with ThreadPoolExecutor(max_workers=max(1, len(unique))) as executor:
        return asyncio.run(resolve_icons_async(unique, executor))
