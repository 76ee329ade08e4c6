import types as _types

from importlib import import_module
from typing import TYPE_CHECKING

from .core.errors import EventRegistryError, InvalidArgument, SubscriptionNotFound
from .core.events import EventRegistry, global_registry, global_registry as registry
from .core.subscription import Subscription

__all__: list[str] = [
    "EventRegistry",
    "registry",
    "global_registry",
    "Subscription",
    "EventRegistryError",
    "SubscriptionNotFound",
    "InvalidArgument",
    "writers",
]


def __getattr__(name: str) -> _types.ModuleType:
    if name == "writers":
        mod = import_module(f"{__name__}.{name}")
        globals()[name] = mod
        return mod
    raise AttributeError(name)


if TYPE_CHECKING:  # pragma: no cover
    from . import writers  # noqa: F401
