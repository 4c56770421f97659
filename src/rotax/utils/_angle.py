"""Angle and unit conversion helpers.

These helpers wrap the ``use_degrees`` convention used throughout rotax
and provide the JAX-traceable floating-point modulo used to bring angles
into a fixed range.
"""

import math

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from rotax.config import get_dtype

_PI = math.pi
_TWO_PI = 2.0 * math.pi


def to_radians(angle: ArrayLike, use_degrees: bool) -> Array:
    """Convert angle to radians if ``use_degrees`` is True.

    Args:
        angle (ArrayLike): Angle value.
        use_degrees (bool): If ``True``, treat ``angle`` as degrees and convert.

    Returns:
        Angle in radians.
    """
    return jnp.where(use_degrees, jnp.deg2rad(angle), angle)


def from_radians(angle: ArrayLike, use_degrees: bool) -> Array:
    """Convert angle from radians to degrees if ``use_degrees`` is True.

    Args:
        angle (ArrayLike): Angle in radians.
        use_degrees (bool): If ``True``, convert to degrees.

    Returns:
        Angle in radians or degrees.
    """
    return jnp.where(use_degrees, jnp.rad2deg(angle), angle)


def floating_point_modulo(x: ArrayLike, y: ArrayLike) -> Array:
    """Floating-point modulo with the sign convention of the divisor.

    Computes ``x - y * floor(x / y)``, which lies in ``[0, y)`` for
    ``y > 0`` and in ``(y, 0]`` for ``y < 0``.  Results that land on the
    open end of the interval through round-off are pulled back inside it
    (e.g. ``floating_point_modulo(-1e-16, 360.0)`` is ``0.0``, not
    ``360.0``).  A zero divisor returns ``x`` unchanged.

    Args:
        x (ArrayLike): Dividend.
        y (ArrayLike): Divisor.

    Returns:
        Array: ``x mod y``.
    """
    x = jnp.asarray(x)
    if not jnp.issubdtype(x.dtype, jnp.floating):
        x = x.astype(get_dtype())
    y = jnp.asarray(y, dtype=x.dtype)
    safe_y = jnp.where(y == 0.0, 1.0, y)
    m = x - safe_y * jnp.floor(x / safe_y)

    # y > 0: range [0, y)
    pos = jnp.where(m >= safe_y, 0.0, m)
    pos = jnp.where(m < 0.0, jnp.where(safe_y + m == safe_y, 0.0, safe_y + m), pos)

    # y < 0: range (y, 0]
    neg = jnp.where(m <= safe_y, 0.0, m)
    neg = jnp.where(m > 0.0, jnp.where(safe_y + m == safe_y, 0.0, safe_y + m), neg)

    result = jnp.where(safe_y > 0.0, pos, neg)
    return jnp.where(y == 0.0, x, result)


def wrap_pos_neg_pi(angle: ArrayLike) -> Array:
    """Wrap an angle into ``[-pi, pi)``.

    Angles already inside the interval are returned bit-for-bit unchanged,
    so repeated wrapping is exact.  The plain ``mod(x + pi, 2*pi) - pi``
    rounds through the addition and can move such an angle by a few ulps
    (``pi/2 - 1e-3`` comes back as ``1.5697963267948971`` instead of
    ``1.5697963267948967``); this function keeps the input instead.

    Args:
        angle (ArrayLike): Angle in radians.

    Returns:
        Array: Wrapped angle in radians.
    """
    angle = jnp.asarray(angle)
    wrapped = floating_point_modulo(angle + _PI, _TWO_PI) - _PI
    inside = (angle >= -_PI) & (angle < _PI)
    return jnp.where(inside, angle, wrapped)


def wrap_zero_two_pi(angle: ArrayLike) -> Array:
    """Wrap an angle into ``[0, 2*pi)``.

    Args:
        angle (ArrayLike): Angle in radians.

    Returns:
        Array: Wrapped angle in radians.
    """
    return floating_point_modulo(angle, _TWO_PI)
