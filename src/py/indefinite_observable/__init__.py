"""Indefinite observables: push-based event streams that never complete.

A ``Subject`` replays only its most recent value to late subscribers.
"""

from .indefinite_observable import (
    Observable,
    Subject,
    Subscription,
    resolve_interop_tag,
    to_observer,
)

__all__ = [
    "Observable",
    "Subject",
    "Subscription",
    "resolve_interop_tag",
    "to_observer",
]
