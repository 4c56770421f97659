"""Angle-axis rotation representation.

Provides the ``AngleAxis`` class representing a rotation as an angle
about a unit axis.  Internal storage is a shape ``(4,)`` array
``[angle, x, y, z]`` with the angle in radians.
"""

from __future__ import annotations

import jax
import jax.numpy as jnp

from rotax.config import get_dtype
from rotax.rotations._registry import _register
from rotax.rotations.base import RotationBase
from rotax.rotations.conversions import angle_axis_to_quaternion, quaternion_to_angle_axis
from rotax.rotations.quaternion import Quaternion
from rotax.utils import to_radians, wrap_pos_neg_pi


class AngleAxis(RotationBase):
    """Rotation defined by an angle and a unit axis.

    The axis is normalized on construction.  The ``angle`` and ``axis``
    setters store values as given; a non-unit axis written through them
    is a caller error.

    This class is registered as a JAX pytree with the ``[angle, x, y, z]``
    array as the sole leaf.

    Args:
        angle (float): Rotation angle. Default: ``0.0``.
        axis (jax.Array): Rotation axis of shape ``(3,)``, non-zero.
            Default: ``[1, 0, 0]``.
        use_degrees (bool): If ``True``, interpret ``angle`` as degrees. Default: ``False``.
    """

    __slots__ = ()

    def __init__(self, angle: float = 0.0, axis: jax.Array | None = None, use_degrees: bool = False) -> None:
        _float = get_dtype()
        if axis is None:
            axis = (1.0, 0.0, 0.0)
        axis = jnp.asarray(axis, dtype=_float)
        axis = axis / jnp.linalg.norm(axis)
        angle = _float(to_radians(angle, use_degrees))
        self._data = jnp.concatenate([jnp.array([angle], dtype=_float), axis])

    # Properties

    @property
    def angle(self) -> jax.Array:
        """Rotation angle in radians."""
        return self._data[0]

    @angle.setter
    def angle(self, value: float) -> None:
        self._data = self._data.at[0].set(value)

    @property
    def axis(self) -> jax.Array:
        """Unit rotation axis of shape ``(3,)``."""
        return self._data[1:]

    @axis.setter
    def axis(self, value: jax.Array) -> None:
        self._data = self._data.at[1:].set(jnp.asarray(value, dtype=self._data.dtype))

    # Factory methods

    @classmethod
    def from_values(cls, angle: float, x: float, y: float, z: float, use_degrees: bool = False) -> AngleAxis:
        """Create from the angle and individual axis components.

        Args:
            angle (float): Rotation angle.
            x (float): Axis x-component.
            y (float): Axis y-component.
            z (float): Axis z-component.
            use_degrees (bool): If ``True``, interpret the angle as degrees.

        Returns:
            AngleAxis: New instance.
        """
        return cls(angle, jnp.array([x, y, z]), use_degrees=use_degrees)

    @classmethod
    def from_vector(cls, v: jax.Array, use_degrees: bool = False) -> AngleAxis:
        """Create from a 4-element vector ``[angle, x, y, z]``.

        Args:
            v (jax.Array): Array-like of shape ``(4,)``.
            use_degrees (bool): If ``True``, the angle component is in degrees.

        Returns:
            AngleAxis: New instance.
        """
        return cls(v[0], jnp.array([v[1], v[2], v[3]]), use_degrees=use_degrees)

    def to_vector(self, use_degrees: bool = False) -> jax.Array:
        """Return as a 4-element vector ``[angle, x, y, z]``.

        Args:
            use_degrees (bool): If ``True``, output the angle in degrees.

        Returns:
            jnp.ndarray: Array of shape ``(4,)``.
        """
        angle = jnp.where(use_degrees, jnp.rad2deg(self._data[0]), self._data[0])
        return self._data.at[0].set(angle)

    # Methods

    def inverted(self) -> AngleAxis:
        """Return the inverse rotation (same axis, negated angle).

        Returns:
            AngleAxis: Inverse rotation.
        """
        return AngleAxis._from_internal(self._data.at[0].set(-self._data[0]))

    def get_unique(self) -> AngleAxis:
        """Return the representative with angle in ``[0, pi]``.

        The angle is wrapped into ``[-pi, pi)``; a negative angle is made
        positive by flipping the axis.

        Returns:
            AngleAxis: Canonical angle-axis.
        """
        angle = wrap_pos_neg_pi(self._data[0])
        sign = jnp.where(angle < 0.0, -1.0, 1.0)
        axis = sign * self._data[1:]
        data = jnp.concatenate([jnp.array([jnp.abs(angle)]), axis])
        return AngleAxis._from_internal(data.astype(self._data.dtype))

    # String representations

    def __repr__(self) -> str:
        return (
            f"AngleAxis(angle={float(self._data[0])}, "
            f"axis=[{float(self._data[1])}, "
            f"{float(self._data[2])}, "
            f"{float(self._data[3])}])"
        )


# Registry entries

@_register(AngleAxis, Quaternion)
def _angle_axis_to_quaternion(aa: AngleAxis) -> Quaternion:
    return Quaternion._from_internal(angle_axis_to_quaternion(aa._data[0], aa._data[1:]))


@_register(Quaternion, AngleAxis)
def _quaternion_to_angle_axis(q: Quaternion) -> AngleAxis:
    angle, axis = quaternion_to_angle_axis(q._data)
    return AngleAxis._from_internal(jnp.concatenate([jnp.array([angle]), axis]))


# Register as JAX pytree
jax.tree_util.register_pytree_node(
    AngleAxis,
    lambda aa: ((aa._data,), None),
    lambda _, children: AngleAxis._from_internal(children[0]),
)
