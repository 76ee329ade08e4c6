from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from .utils import describe


@dataclass(frozen=True, slots=True)
class Subscription:
    """Immutable description of one registration held by a registry.

    Attributes
    ----------
    event_type
        Concrete class of event values that reach *handler*.
    handler
        The callable invoked with each matching event.
    owner
        Grouping object for *bound* handlers, ``None`` for free ones.  The
        registry compares owners by identity, so two equal-but-distinct owners
        show up as two records.

    Records are taken under the registry lock and are never updated
    afterwards – re-query :meth:`EventRegistry.subscriptions` after changes.
    """

    event_type: type
    handler: Callable[[Any], Any]
    owner: Any | None = None

    @property
    def bound(self) -> bool:
        return self.owner is not None

    def __repr__(self) -> str:
        kind = "bound" if self.bound else "free"
        owner_lbl = f" owner={describe(self.owner)}" if self.bound else ""
        return (
            f"<Subscription {kind} {describe(self.event_type)}{owner_lbl} "
            f"handler={describe(self.handler)}>"
        )
