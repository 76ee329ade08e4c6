from __future__ import annotations

from typing import Any

from .utils import describe


class EventRegistryError(Exception):
    """Base class for every error raised by :class:`EventRegistry`."""


class SubscriptionNotFound(EventRegistryError, LookupError):
    """Raised by ``unsubscribe_*`` when the pair is not currently registered."""

    def __init__(self, event_type: type, target: Any) -> None:
        self.event_type = event_type
        self.target = target
        super().__init__(
            f"{describe(target)} is not subscribed to {describe(event_type)}"
        )


class InvalidArgument(EventRegistryError, TypeError):
    """Caller passed something the registry cannot key or call."""
