"""Utility helpers for profile page scrapers."""
from __future__ import annotations

import re
from typing import Optional
from urllib.parse import urljoin

from ingest.ctftime_client import CTFTIME_BASE_URL

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


def to_absolute_url(src: str, base: str = CTFTIME_BASE_URL) -> str:
    """Resolve ``src`` against the CTFtime origin.

    Relative paths with or without a leading slash both end up directly under
    ``base``.
    """
    return urljoin(base, src)


def parse_dimension(value: Optional[str]) -> int:
    """Return an ``<img>`` width/height attribute as an int, or 0.

    Only a plain optionally signed decimal counts; padding, underscores and
    units such as ``50px`` give 0.
    """
    if value is None or not _INTEGER_RE.fullmatch(value):
        return 0
    return int(value)
