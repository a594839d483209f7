"""Shared data models for the weekend notifier."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from pydantic import BaseModel, Field


class Organizer(BaseModel):
    """Team or person running an event, as listed by CTFtime."""

    name: str
    icon_url: Optional[str] = None


class Event(BaseModel):
    """A CTFtime event as returned by ``/api/v1/events/``.

    ``start`` and ``finish`` are kept as the raw ISO strings from the API;
    nothing downstream needs them parsed. Fields the API sends that are not
    listed here are ignored.
    """

    organizers: List[Organizer] = Field(..., min_length=1)
    onsite: bool
    finish: str
    description: str
    weight: float
    title: str
    url: str
    is_votable_now: bool
    restrictions: str
    format: str
    start: str
    ctftime_url: str


@dataclass(frozen=True)
class Icon:
    """Logo scraped from an event profile page."""

    src: str
    width: int = 0
    height: int = 0


class Author(BaseModel):
    name: str
    icon_url: Optional[str] = None


class Embed(BaseModel):
    """Discord embed payload for one event."""

    title: str
    description: str
    url: str
    color: int
    author: Author
