"""Scalar angle helpers shared by the rotation types."""

from rotax.utils._angle import (
    floating_point_modulo,
    from_radians,
    to_radians,
    wrap_pos_neg_pi,
    wrap_zero_two_pi,
)

__all__ = [
    "floating_point_modulo",
    "from_radians",
    "to_radians",
    "wrap_pos_neg_pi",
    "wrap_zero_two_pi",
]
