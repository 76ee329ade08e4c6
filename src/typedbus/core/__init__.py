from .errors import EventRegistryError, InvalidArgument, SubscriptionNotFound
from .events import EventRegistry, global_registry, global_registry as registry
from .subscription import Subscription

__all__ = [
    "EventRegistry",
    "registry",
    "global_registry",
    "Subscription",
    "EventRegistryError",
    "SubscriptionNotFound",
    "InvalidArgument",
]
