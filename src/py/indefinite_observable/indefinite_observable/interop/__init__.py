from functools import cache
from typing import Any
import logging
import sys

INTEROP_TAG = "__observable__"
REGISTRY_ATTRIBUTE = "__observable_interop_tag__"

logger = logging.getLogger(__name__)


@cache
def resolve_interop_tag() -> str:
    """
    Name of the method through which observables identify themselves.

    Python looks methods up by name, so the tag is a plain string. It is
    registered on the ``sys`` module so that independently loaded copies of
    this package agree on it: whichever copy resolves first wins.
    """
    tag = getattr(sys, REGISTRY_ATTRIBUTE, None)
    if not isinstance(tag, str):
        tag = INTEROP_TAG
        setattr(sys, REGISTRY_ATTRIBUTE, tag)
        logger.debug("Registered observable interop tag %r.", tag)
    return tag


def is_observable(obj: Any) -> bool:
    return callable(getattr(obj, resolve_interop_tag(), None))


def from_interop(obj: Any) -> Any:
    """
    Return the conforming observable a foreign object exposes under the
    interop tag.
    """
    method = getattr(obj, resolve_interop_tag(), None)
    if not callable(method):
        raise TypeError(f"{type(obj).__name__!r} object is not observable")
    return method()
