import dataclasses
import functools

import pytest

from typedbus.core.errors import EventRegistryError, SubscriptionNotFound
from typedbus.core.subscription import Subscription
from typedbus.core.utils import describe, utc_now_iso


class Listener:
    def use(self, s):
        pass


def on_text(s):
    pass


def test_free_subscription_repr():
    sub = Subscription(str, on_text)

    assert not sub.bound
    assert repr(sub) == "<Subscription free str handler=on_text>"


def test_bound_subscription_repr():
    listener = Listener()
    sub = Subscription(str, listener.use, listener)

    assert sub.bound
    assert repr(sub) == "<Subscription bound str owner=Listener handler=Listener.use>"


def test_subscription_is_frozen():
    sub = Subscription(str, on_text)

    with pytest.raises(dataclasses.FrozenInstanceError):
        sub.event_type = int


def test_describe_variants():
    assert describe(int) == "int"
    assert describe(Listener().use) == "Listener.use"
    assert describe(functools.partial(on_text)) == "partial(on_text)"
    assert describe(Listener()) == "Listener"
    assert describe("plain value") == "str"


def test_utc_now_iso_has_z_suffix():
    ts = utc_now_iso()

    assert ts.endswith("Z")
    assert "T" in ts
    assert "+00:00" not in ts


def test_subscription_not_found_message_and_hierarchy():
    err = SubscriptionNotFound(str, on_text)

    assert str(err) == "on_text is not subscribed to str"
    assert isinstance(err, EventRegistryError)
    assert isinstance(err, LookupError)
