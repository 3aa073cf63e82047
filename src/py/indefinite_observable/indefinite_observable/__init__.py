"""Indefinite observables: push-based event streams that never complete.

A ``Subject`` replays only its most recent value to late subscribers.
"""

from .core import (
    CallbackObserver,
    Observable,
    Subject,
    Subscription,
    SupportsNext,
    to_observer,
)
from .interop import from_interop, is_observable, resolve_interop_tag

__all__ = [
    "CallbackObserver",
    "Observable",
    "Subject",
    "Subscription",
    "SupportsNext",
    "from_interop",
    "is_observable",
    "resolve_interop_tag",
    "to_observer",
]
