"""Load webhook destinations from the environment."""
from __future__ import annotations

import logging
import os
from typing import List, Mapping, Optional

from .discord_client import Destination, parse_webhooks
from .errors import ConfigError

WEBHOOKS_ENV = "DISCORD_WEBHOOKS"
DEBUG_ENV = "NOTIFIER_DEBUG"

logger = logging.getLogger(__name__)


def load_webhooks(environ: Optional[Mapping[str, str]] = None) -> List[Destination]:
    """Return the destinations configured in ``DISCORD_WEBHOOKS``.

    Raises:
        ConfigError: if the variable is unset or blank, or if every entry in
            it is malformed.
    """
    env = os.environ if environ is None else environ
    raw = env.get(WEBHOOKS_ENV, "")
    if not raw.strip():
        raise ConfigError(f"{WEBHOOKS_ENV} is not set")

    destinations = parse_webhooks(raw)
    if not destinations:
        raise ConfigError(f"{WEBHOOKS_ENV} contains no valid id:token entries")
    logger.info("Loaded %d webhook destination(s)", len(destinations))
    return destinations


def debug_enabled(environ: Optional[Mapping[str, str]] = None) -> bool:
    env = os.environ if environ is None else environ
    return bool(env.get(DEBUG_ENV))
