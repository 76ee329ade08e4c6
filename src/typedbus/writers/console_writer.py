from __future__ import annotations

import sys

from typing import Any, TextIO

from typedbus.core.events import EventRegistry, global_registry
from typedbus.core.utils import describe, utc_now_iso


class ConsoleWriter:
    """Subscribe to *event_type* and print a one-liner per fired event."""

    def __init__(
        self,
        event_type: type,
        *,
        registry: EventRegistry | None = None,
        stream: TextIO | None = None,
        prefix: str = "typedbus",
    ) -> None:
        self.event_type = event_type
        self.prefix = prefix
        self._registry = global_registry if registry is None else registry
        self._stream = stream
        self._closed = False

        # Subscribe as owner so close() detaches with one call
        self._registry.subscribe_bound(event_type, self, self._on_event)

    def _on_event(self, event: Any) -> None:
        ts = utc_now_iso()
        kind = describe(type(event))
        print(f"[{self.prefix}] {ts}  {kind:<20s}  {event!r}", file=self._stream or sys.stdout)

    def close(self) -> None:
        """Detach the writer so it stops printing (safe to call twice)."""
        if self._closed:
            return
        self._registry.unsubscribe_bound(self.event_type, self)
        self._closed = True
