from __future__ import annotations

import logging
import threading

from types import TracebackType
from typing import Any, Callable

from .errors import InvalidArgument, SubscriptionNotFound
from .subscription import Subscription
from .utils import describe

_LOG = logging.getLogger(__name__)

Handler = Callable[[Any], Any]


class _OwnerKey:
    """Identity wrapper so owners are keyed by ``is``, hashable or not."""

    __slots__ = ("obj",)

    def __init__(self, obj: Any) -> None:
        self.obj = obj

    def __hash__(self) -> int:
        return id(self.obj)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, _OwnerKey) and other.obj is self.obj


class EventRegistry:
    """Synchronous, thread-safe publish/subscribe registry keyed by event class.

    • Synchronous: `fire()` blocks until every matched handler returns.
    • Exceptions raised by handlers **propagate** to the caller and abort the
      dispatch – handlers not yet reached are not called.
    • Matching is on ``type(event)`` only; subclasses do not reach handlers
      registered for their base class.

    Handlers come in two shapes:

    *free*  – a plain callable, unsubscribed individually by reference.
    *bound* – a callable grouped under an *owner*; ``unsubscribe_bound``
              drops every handler of that owner at once, across **all**
              event types it registered for.
    """

    def __init__(self) -> None:
        self._free_handlers: dict[type, set[Handler]] = {}
        self._registrations: dict[type, set[_OwnerKey]] = {}
        self._handlers: dict[_OwnerKey, set[Handler]] = {}
        self._lock = threading.RLock()

    # ------------------------------------------------------------------ subscribe
    def subscribe_bound(self, event_type: type, owner: Any, handler: Handler) -> None:
        """Register *handler* under *owner* for events of class *event_type*."""
        _check_event_type(event_type)
        _check_handler(handler)
        if owner is None:
            raise InvalidArgument("owner must not be None")

        key = _OwnerKey(owner)
        with self._lock:
            self._registrations.setdefault(event_type, set()).add(key)
            self._handlers.setdefault(key, set()).add(handler)

        if _LOG.isEnabledFor(logging.DEBUG):
            _LOG.debug(
                "subscribed %s (owner %s) to %s",
                describe(handler), describe(owner), describe(event_type),
            )

    def subscribe_free(self, event_type: type, handler: Handler) -> None:
        """Register a free *handler* for events of class *event_type*.

        Keep a reference to *handler*: it is the only way to unsubscribe it.
        """
        _check_event_type(event_type)
        _check_handler(handler)

        with self._lock:
            self._free_handlers.setdefault(event_type, set()).add(handler)

        if _LOG.isEnabledFor(logging.DEBUG):
            _LOG.debug("subscribed %s to %s", describe(handler), describe(event_type))

    # ------------------------------------------------------------------ unsubscribe
    def unsubscribe_bound(self, event_type: type, owner: Any) -> None:
        """Remove *owner* from *event_type* and drop **all** its handlers.

        The owner's handlers are not tracked per event type, so this also
        detaches the owner from every other event type it registered for.
        """
        _check_event_type(event_type)
        key = _OwnerKey(owner)

        with self._lock:
            owners = self._registrations.get(event_type)
            if owners is None or key not in owners:
                raise SubscriptionNotFound(event_type, owner)

            dropped = len(self._handlers.pop(key, ()))
            for other_type, other_owners in list(self._registrations.items()):
                other_owners.discard(key)
                if not other_owners:
                    del self._registrations[other_type]

        if _LOG.isEnabledFor(logging.DEBUG):
            _LOG.debug(
                "unsubscribed owner %s from %s (%d handler(s) dropped)",
                describe(owner), describe(event_type), dropped,
            )

    def unsubscribe_free(self, event_type: type, handler: Handler) -> None:
        """Remove the free *handler* previously registered for *event_type*."""
        _check_event_type(event_type)

        with self._lock:
            handlers = self._free_handlers.get(event_type)
            if handlers is None or not _contains(handlers, handler):
                raise SubscriptionNotFound(event_type, handler)

            handlers.remove(handler)
            if not handlers:
                del self._free_handlers[event_type]

        if _LOG.isEnabledFor(logging.DEBUG):
            _LOG.debug("unsubscribed %s from %s", describe(handler), describe(event_type))

    # ------------------------------------------------------------------ dispatch
    def fire(self, event: Any) -> None:
        """Call every free, then every bound handler registered for ``type(event)``.

        Each bucket is copied when it is reached, so handlers may change
        subscriptions while the dispatch is running.
        """
        event_type = type(event)
        called = 0

        with self._lock:
            free = list(self._free_handlers.get(event_type, ()))
        for handler in free:
            handler(event)
            called += 1

        with self._lock:
            owners = list(self._registrations.get(event_type, ()))
        for key in owners:
            with self._lock:
                bound = list(self._handlers.get(key, ()))
            for handler in bound:
                handler(event)
                called += 1

        if _LOG.isEnabledFor(logging.DEBUG):
            _LOG.debug("fired %s to %d handler(s)", describe(event_type), called)

    # ------------------------------------------------------------------ introspection
    def is_subscribed(self, event_type: type, target: Any) -> bool:
        """True if *target* is a free handler or an owner registered for *event_type*."""
        with self._lock:
            if _OwnerKey(target) in self._registrations.get(event_type, ()):
                return True
            return _contains(self._free_handlers.get(event_type, ()), target)

    def has_subscribers(self, event_type: type) -> bool:
        with self._lock:
            return event_type in self._free_handlers or event_type in self._registrations

    def subscriptions(self, event_type: type | None = None) -> list[Subscription]:
        """Describe current registrations, optionally for one *event_type* only."""
        records: list[Subscription] = []
        with self._lock:
            for etype, handlers in self._free_handlers.items():
                if event_type is None or etype is event_type:
                    records.extend(Subscription(etype, h) for h in handlers)

            for etype, owners in self._registrations.items():
                if event_type is not None and etype is not event_type:
                    continue
                for key in owners:
                    records.extend(
                        Subscription(etype, h, key.obj) for h in self._handlers.get(key, ())
                    )
        return records

    def __len__(self) -> int:
        return len(self.subscriptions())

    # ------------------------------------------------------------------ lifecycle
    def __enter__(self) -> "EventRegistry":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        self.reset()
        return False

    def reset(self) -> None:
        """Remove **all** subscriptions (used by unit tests)."""
        with self._lock:
            self._free_handlers.clear()
            self._registrations.clear()
            self._handlers.clear()
        _LOG.debug("registry reset")


def _check_event_type(event_type: Any) -> None:
    if not isinstance(event_type, type):
        raise InvalidArgument(f"event type must be a class, got {event_type!r}")


def _check_handler(handler: Any) -> None:
    if not callable(handler):
        raise InvalidArgument(f"handler must be callable, got {handler!r}")
    try:
        hash(handler)
    except TypeError as exc:
        raise InvalidArgument(f"handler must be hashable, got {describe(handler)}") from exc


def _contains(handlers: Any, handler: Any) -> bool:
    # unhashable lookups can never match, they were rejected on subscribe
    try:
        hash(handler)
    except TypeError:
        return False
    return handler in handlers


global_registry: EventRegistry = EventRegistry()
