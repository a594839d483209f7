"""Client for the CTFtime public event listing."""
from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta, timezone
from typing import Any, List, Optional, Tuple

import requests
from pydantic import TypeAdapter, ValidationError

from .errors import FetchError
from .schemas import Event

CTFTIME_BASE_URL = "https://ctftime.org/"
EVENTS_URL = f"{CTFTIME_BASE_URL}api/v1/events/"
EVENT_LIMIT = 100
HEADERS = {"User-Agent": "Mozilla/5.0"}

logger = logging.getLogger(__name__)

_events_adapter = TypeAdapter(List[Event])


def _utc_midnight(day: date) -> int:
    return int(datetime.combine(day, time(0, 0), tzinfo=timezone.utc).timestamp())


def weekend_window(now: Optional[datetime] = None) -> Tuple[int, int]:
    """Return ``(start, end)`` epoch seconds covering the coming weekend.

    ``start`` is midnight UTC on Friday of the ISO week containing ``now``;
    ``end`` is midnight UTC on Monday of the following ISO week. ``now``
    defaults to the current local time and is read once, so the ISO year,
    week and the week after all come from the same instant.
    """
    if now is None:
        now = datetime.now().astimezone()

    iso_year, iso_week, _ = now.isocalendar()
    friday = date.fromisocalendar(iso_year, iso_week, 5)
    next_monday = date.fromisocalendar(iso_year, iso_week, 1) + timedelta(weeks=1)
    return _utc_midnight(friday), _utc_midnight(next_monday)


def fetch_events(start: int, finish: int, limit: int = EVENT_LIMIT) -> List[Event]:
    """Fetch events between ``start`` and ``finish`` in CTFtime's order.

    Raises:
        FetchError: on network errors, HTTP error statuses or a response that
            does not match the ``Event`` schema.
    """
    params: dict[str, Any] = {"limit": limit, "start": start, "finish": finish}
    logger.info("GET %s params=%s", EVENTS_URL, params)
    try:
        response = requests.get(EVENTS_URL, params=params, headers=HEADERS, timeout=30)
        response.raise_for_status()
        data = response.json()
    except requests.RequestException as exc:
        raise FetchError(f"CTFtime request failed: {exc}") from exc
    except ValueError as exc:
        raise FetchError("CTFtime returned invalid JSON") from exc

    try:
        events = _events_adapter.validate_python(data)
    except ValidationError as exc:
        raise FetchError(f"Unexpected CTFtime response: {exc}") from exc

    logger.info("CTFtime returned %d event(s)", len(events))
    return events
