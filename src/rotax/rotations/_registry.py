"""Closed registry of conversions between rotation types.

Every entry is a pure function ``source_instance -> destination_instance``
keyed by the ``(source type, destination type)`` pair.  Entries are added
only by the rotation modules of this package at import time; there is no
public way to register new converters.

Pairs without a direct entry are executed as ``source -> Quaternion ->
destination``.  Quaternion is the hub because its composition and
inversion are the cheapest and best conditioned, so each rotation type
only has to provide its two legs to and from ``Quaternion``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from rotax.rotations.base import RotationBase

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="RotationBase")

_CONVERTERS: dict[tuple[type, type], Callable] = {}


def _register(source: type, destination: type) -> Callable[[Callable], Callable]:
    """Decorator adding a direct conversion ``source -> destination``.

    Args:
        source (type): Source rotation type.
        destination (type): Destination rotation type.

    Returns:
        Callable: Decorator returning the function unchanged.
    """

    def decorator(func: Callable) -> Callable:
        _CONVERTERS[(source, destination)] = func
        logger.debug("Registered conversion %s -> %s", source.__name__, destination.__name__)
        return func

    return decorator


def supported_conversions() -> frozenset[tuple[type, type]]:
    """Return the set of ``(source, destination)`` pairs with a direct entry.

    Returns:
        frozenset: Registered direct pairs.  Every other pair of rotation
        types is served through the quaternion hub.
    """
    return frozenset(_CONVERTERS)


def _lookup(source: type, destination: type) -> Callable:
    from rotax.rotations.quaternion import Quaternion

    direct = _CONVERTERS.get((source, destination))
    if direct is not None:
        return direct

    to_hub = _CONVERTERS.get((source, Quaternion))
    from_hub = _CONVERTERS.get((Quaternion, destination))
    if source is Quaternion:
        to_hub = Quaternion.copy
    if destination is Quaternion:
        from_hub = Quaternion.copy
    if to_hub is None or from_hub is None:
        raise TypeError(
            f"No conversion registered from {source.__name__} to {destination.__name__}"
        )

    logger.debug("Converting %s -> %s through Quaternion", source.__name__, destination.__name__)
    return lambda rotation: from_hub(to_hub(rotation))


def convert(rotation: RotationBase, destination: type[T]) -> T:
    """Convert a rotation to another rotation type.

    Args:
        rotation (RotationBase): Source rotation.
        destination (type): Target rotation class.

    Returns:
        RotationBase: New instance of ``destination`` representing the
        same rotation.

    Raises:
        TypeError: If either argument is not a rotation (type), or no
            conversion path exists for the pair.
    """
    from rotax.rotations.base import RotationBase

    if not isinstance(rotation, RotationBase):
        raise TypeError(f"Expected a rotation, got {type(rotation).__name__}")
    if not (isinstance(destination, type) and issubclass(destination, RotationBase)):
        raise TypeError(f"Expected a rotation type as destination, got {destination!r}")

    source = type(rotation)
    if source is destination:
        return rotation.copy()
    return _lookup(source, destination)(rotation)
