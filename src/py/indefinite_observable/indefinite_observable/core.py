from collections.abc import Mapping
from typing import Callable, Generic, Protocol, TypeVar, Union
from typing_extensions import override
import logging
import typing

from .interop import resolve_interop_tag

T = TypeVar("T")
T_contra = TypeVar("T_contra", contravariant=True)

logger = logging.getLogger(__name__)


class SupportsNext(Protocol[T_contra]):
    def next(self, value: T_contra) -> None:
        """
        Receive an emitted value.
        """
        ...


ObserverLike = Union[
    Callable[[T], None], SupportsNext[T], Mapping[str, Callable[[T], None]]
]
Disconnect = Callable[[], None]
Connect = Callable[[SupportsNext[T]], Disconnect]


class CallbackObserver(Generic[T]):
    def __init__(self, callback: Callable[[T], None]) -> None:
        self.callback = callback

    def next(self, value: T) -> None:
        self.callback(value)


def to_observer(observer: "ObserverLike[T]") -> SupportsNext[T]:
    """
    Normalize a bare callback, a ``{"next": fn}`` mapping or an object with a
    ``next`` method into a single observer shape.

    Objects exposing ``next`` are returned as-is, without validation.
    """
    if hasattr(observer, "next"):
        return typing.cast(SupportsNext[T], observer)
    if isinstance(observer, Mapping) and "next" in observer:
        return CallbackObserver(observer["next"])
    return CallbackObserver(observer)  # type: ignore[arg-type]


class Subscription:
    def __init__(self, disconnect: Disconnect) -> None:
        self._disconnect = disconnect
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def unsubscribe(self) -> None:
        """
        Disconnect the observer. Only the first call has any effect.
        """
        if self._closed:
            return
        self._closed = True
        self._disconnect()


class Observable(Generic[T]):
    def __init__(self, connect: Connect[T]) -> None:
        """
        ``connect`` is called once per subscription, never at construction.
        It attaches the observer to its event source and returns a function
        detaching it again.
        """
        self._connect = connect

    def subscribe(self, observer: "ObserverLike[T]") -> Subscription:
        normalized: SupportsNext[T] = to_observer(observer)
        try:
            disconnect = self._connect(normalized)
        except Exception:
            logger.exception("Observable connect failed.")
            raise

        return Subscription(disconnect)

    def __observable__(self) -> "Observable[T]":
        return self

    def __getattr__(self, name: str) -> Callable[[], "Observable[T]"]:
        # Another loaded copy may have registered a different tag first.
        if name == resolve_interop_tag():
            return self.__observable__
        raise AttributeError(
            f"{type(self).__name__!r} object has no attribute {name!r}"
        )


class Subject(Observable[T], Generic[T]):
    """
    Multicasts every value passed to ``next`` to the current subscribers and
    replays the most recent one to anyone subscribing later.

    Delivery iterates over a snapshot of the subscribers taken when ``next``
    is called: subscribing or unsubscribing from inside a callback only
    affects later emissions. An observer that raises aborts the rest of the
    pass and the exception reaches the caller of ``next``.
    """

    def __init__(self) -> None:
        super().__init__(self._attach)
        # keyed by id: membership is identity, observers need not be hashable
        self._observers: dict[int, SupportsNext[T]] = {}
        self._has_emitted = False
        self._last_value: T

    @property
    def has_value(self) -> bool:
        return self._has_emitted

    @property
    def observer_count(self) -> int:
        return len(self._observers)

    def next(self, value: T) -> None:
        self._has_emitted = True
        self._last_value = value

        for observer in tuple(self._observers.values()):
            try:
                observer.next(value)
            except Exception:
                logger.exception("Subject observer failed.")
                raise

    @override
    def subscribe(self, observer: "ObserverLike[T]") -> Subscription:
        normalized: SupportsNext[T] = to_observer(observer)
        subscription = super().subscribe(normalized)

        # NOTE: the observer is registered before replay, so a failing replay
        # leaves it subscribed
        if self._has_emitted:
            try:
                normalized.next(self._last_value)
            except Exception:
                logger.exception("Subject replay failed.")
                raise

        return subscription

    @override
    def __observable__(self) -> "Subject[T]":
        return self

    def _attach(self, observer: SupportsNext[T]) -> Disconnect:
        self._observers[id(observer)] = observer
        logger.debug("Subject observer added (%d total).", len(self._observers))

        def detach() -> None:
            self._observers.pop(id(observer), None)
            logger.debug(
                "Subject observer removed (%d total).", len(self._observers)
            )

        return detach
