"""Rotation vector representation.

Provides the ``RotationVector`` class: the rotation axis scaled by the
rotation angle, so that the vector norm is the angle in radians.
"""

from __future__ import annotations

import jax
import jax.numpy as jnp

from rotax.config import get_dtype
from rotax.rotations._registry import _register
from rotax.rotations.angle_axis import AngleAxis
from rotax.rotations.base import RotationBase
from rotax.rotations.conversions import (
    angle_axis_to_rotation_vector,
    quaternion_to_rotation_vector,
    rotation_vector_to_angle_axis,
    rotation_vector_to_quaternion,
)
from rotax.rotations.quaternion import Quaternion
from rotax.utils import wrap_pos_neg_pi


class RotationVector(RotationBase):
    """Rotation stored as ``angle * axis``.

    Internal storage is a shape ``(3,)`` array.  The zero vector is the
    identity.

    This class is registered as a JAX pytree with the vector as the sole
    leaf.

    Args:
        x (float): First component. Default: ``0.0``.
        y (float): Second component. Default: ``0.0``.
        z (float): Third component. Default: ``0.0``.
    """

    __slots__ = ()

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0) -> None:
        _float = get_dtype()
        self._data = jnp.array([_float(x), _float(y), _float(z)])

    # Properties

    @property
    def vector(self) -> jax.Array:
        """The rotation vector of shape ``(3,)``."""
        return self._data

    @vector.setter
    def vector(self, value: jax.Array) -> None:
        self._data = jnp.asarray(value, dtype=self._data.dtype)

    @property
    def x(self) -> jax.Array:
        """First component."""
        return self._data[0]

    @x.setter
    def x(self, value: float) -> None:
        self._data = self._data.at[0].set(value)

    @property
    def y(self) -> jax.Array:
        """Second component."""
        return self._data[1]

    @y.setter
    def y(self, value: float) -> None:
        self._data = self._data.at[1].set(value)

    @property
    def z(self) -> jax.Array:
        """Third component."""
        return self._data[2]

    @z.setter
    def z(self, value: float) -> None:
        self._data = self._data.at[2].set(value)

    @property
    def angle(self) -> jax.Array:
        """Rotation angle (vector norm) in radians."""
        return jnp.linalg.norm(self._data)

    @property
    def axis(self) -> jax.Array:
        """Unit rotation axis; ``[1, 0, 0]`` for the zero vector."""
        return rotation_vector_to_angle_axis(self._data)[1]

    # Factory methods

    @classmethod
    def from_vector(cls, v: jax.Array) -> RotationVector:
        """Create from a 3-element array.

        Args:
            v (jax.Array): Array-like of shape ``(3,)``.

        Returns:
            RotationVector: New instance.
        """
        return cls._from_internal(jnp.asarray(v, dtype=get_dtype()))

    def to_vector(self) -> jax.Array:
        """Return the underlying 3-element array."""
        return self._data

    # Methods

    def inverted(self) -> RotationVector:
        """Return the inverse rotation (the negated vector).

        Returns:
            RotationVector: Inverse rotation.
        """
        return RotationVector._from_internal(-self._data)

    def get_unique(self) -> RotationVector:
        """Return the equivalent rotation vector with norm at most pi.

        Returns:
            RotationVector: Canonical rotation vector.
        """
        angle, axis = rotation_vector_to_angle_axis(self._data)
        # A negative wrapped angle reverses the vector direction
        wrapped = wrap_pos_neg_pi(angle)
        return RotationVector._from_internal(angle_axis_to_rotation_vector(wrapped, axis))

    # String representations

    def __repr__(self) -> str:
        return (
            f"RotationVector(x={float(self._data[0])}, "
            f"y={float(self._data[1])}, "
            f"z={float(self._data[2])})"
        )


# Registry entries

@_register(RotationVector, Quaternion)
def _rotation_vector_to_quaternion(rv: RotationVector) -> Quaternion:
    return Quaternion._from_internal(rotation_vector_to_quaternion(rv._data))


@_register(Quaternion, RotationVector)
def _quaternion_to_rotation_vector(q: Quaternion) -> RotationVector:
    return RotationVector._from_internal(quaternion_to_rotation_vector(q._data))


@_register(RotationVector, AngleAxis)
def _rotation_vector_to_angle_axis(rv: RotationVector) -> AngleAxis:
    angle, axis = rotation_vector_to_angle_axis(rv._data)
    return AngleAxis._from_internal(jnp.concatenate([jnp.array([angle]), axis]))


@_register(AngleAxis, RotationVector)
def _angle_axis_to_rotation_vector(aa: AngleAxis) -> RotationVector:
    return RotationVector._from_internal(angle_axis_to_rotation_vector(aa._data[0], aa._data[1:]))


# Register as JAX pytree
jax.tree_util.register_pytree_node(
    RotationVector,
    lambda rv: ((rv._data,), None),
    lambda _, children: RotationVector._from_internal(children[0]),
)
