"""Post embeds to Discord webhooks."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterator, List, Sequence, TypeVar

import requests

from .errors import DispatchError
from .schemas import Embed

WEBHOOK_BASE_URL = "https://discord.com/api/webhooks"
MAX_EMBEDS_PER_MESSAGE = 10

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Destination:
    """A Discord webhook identified by its numeric id and secret token."""

    id: int
    token: str

    @property
    def url(self) -> str:
        return f"{WEBHOOK_BASE_URL}/{self.id}/{self.token}"

    def __repr__(self) -> str:
        return f"Destination(id={self.id}, token=***)"


def parse_webhooks(value: str) -> List[Destination]:
    """Parse a comma separated list of ``id:token`` pairs.

    Entries without a colon, with a non-numeric id or with an empty token are
    skipped. Anything after a second colon is ignored.
    """
    destinations: List[Destination] = []
    for entry in value.split(","):
        entry = entry.strip()
        id_text, sep, rest = entry.partition(":")
        token = rest.split(":", 1)[0]
        if not sep or not token:
            continue
        if not (id_text.isascii() and id_text.isdigit()):
            continue
        destinations.append(Destination(int(id_text), token))
    return destinations


def chunked(items: Sequence[T], size: int) -> Iterator[Sequence[T]]:
    """Yield consecutive slices of ``items`` holding at most ``size`` entries."""
    if size < 1:
        raise ValueError("size must be positive")
    for offset in range(0, len(items), size):
        yield items[offset:offset + size]


def build_payload(embeds: Sequence[Embed]) -> dict[str, Any]:
    return {"embeds": [embed.model_dump() for embed in embeds]}


class WebhookDispatcher:
    """Deliver embeds to a fixed list of webhook destinations.

    Every batch goes to every destination before the next batch is sent.
    A post that fails to reach Discord raises ``DispatchError`` and nothing
    after it is attempted. Error statuses are only logged.
    """

    def __init__(self, destinations: Sequence[Destination], batch_size: int = MAX_EMBEDS_PER_MESSAGE):
        self.destinations = list(destinations)
        self.batch_size = batch_size

    def post(self, destination: Destination, payload: dict[str, Any]) -> str:
        """Send one payload and return the response body."""
        logger.info("POST webhook %s (%d embed(s))", destination.id, len(payload["embeds"]))
        try:
            response = requests.post(destination.url, json=payload, timeout=30)
            body = response.text
        except requests.RequestException as exc:
            raise DispatchError(f"Webhook {destination.id} failed: {exc}") from exc
        if not response.ok:
            logger.warning(
                "Webhook %s answered %s: %s", destination.id, response.status_code, body
            )
        return body

    def dispatch(self, embeds: Sequence[Embed]) -> int:
        """Post ``embeds`` in batches and return the number of requests made."""
        sent = 0
        for batch in chunked(list(embeds), self.batch_size):
            payload = build_payload(batch)
            for destination in self.destinations:
                self.post(destination, payload)
                sent += 1
        logger.info("Sent %d webhook request(s)", sent)
        return sent
