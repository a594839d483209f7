"""Turn CTFtime events into Discord embeds."""
from __future__ import annotations

from typing import Iterable, List, Mapping, Optional

from .schemas import Author, Embed, Event, Icon

EMBED_COLOR = 7506394
DESCRIPTION_LIMIT = 100
ELLIPSIS = "..."


def truncate_description(text: str, limit: int = DESCRIPTION_LIMIT) -> str:
    """Cut ``text`` to ``limit`` characters plus an ellipsis when it is longer."""
    if len(text) > limit:
        return text[:limit] + ELLIPSIS
    return text


def build_embed(event: Event, icon: Optional[Icon] = None) -> Embed:
    # Organizers are validated non-empty when the event is fetched.
    organizer = event.organizers[0]
    return Embed(
        title=event.title,
        description=truncate_description(event.description),
        url=event.url,
        color=EMBED_COLOR,
        author=Author(name=organizer.name, icon_url=icon.src if icon else None),
    )


def build_embeds(events: Iterable[Event], icons: Mapping[str, Icon]) -> List[Embed]:
    """Return one embed per event, in the order given.

    ``icons`` maps an event's ``ctftime_url`` to its scraped logo; events
    without an entry get an author with no icon.
    """
    return [build_embed(event, icons.get(event.ctftime_url)) for event in events]
