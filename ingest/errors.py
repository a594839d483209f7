"""Exceptions raised by the weekend notifier pipeline."""
from __future__ import annotations


class NotifierError(Exception):
    """Base class for all notifier failures."""


class ConfigError(NotifierError):
    """Webhook configuration is missing or has no usable destination."""


class FetchError(NotifierError):
    """The CTFtime event listing could not be fetched or parsed."""


class IconResolutionError(NotifierError):
    """A single event profile page did not yield an icon."""


class DispatchError(NotifierError):
    """Posting a batch of embeds to a webhook failed."""
