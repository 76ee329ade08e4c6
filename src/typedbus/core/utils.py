from __future__ import annotations

import datetime as _dt

from typing import Any


def utc_now_iso() -> str:
    """Return current UTC timestamp in ISO-8601 with “Z” suffix."""
    return (
        _dt.datetime.now(_dt.timezone.utc)
        .isoformat(timespec="microseconds")
        .replace("+00:00", "Z")
    )


def describe(obj: Any) -> str:
    """Short label for *obj* suitable for log lines and reprs.

    Priority order
    --------------

    1.  ``__qualname__``          – classes, functions, bound methods
    2.  ``func`` of a partial     – ``functools.partial`` wrappers
    3.  class name of the object  – owners and other plain instances
    """
    name = getattr(obj, "__qualname__", None)
    if isinstance(name, str):
        return name

    inner = getattr(obj, "func", None)
    if inner is not None and callable(obj):
        return f"partial({describe(inner)})"

    return type(obj).__qualname__
