"""Euler angles Z-Y'-X'' (yaw-pitch-roll) rotation representation.

The rotation is ``C = Rz(yaw) @ Ry(pitch) @ Rx(roll)``: a rotation about
the z-axis, then about the new y-axis, then about the newest x-axis.

Euler angles are redundant: every rotation has infinitely many angle
triples, and at pitch = +-pi/2 (gimbal lock) yaw and roll are only
jointly determined.  :meth:`EulerAnglesZyx.get_unique` picks one
deterministic representative; compare rotations with
:meth:`~rotax.rotations.base.RotationBase.equivalent_to` or ``==``, never
by their stored angles.
"""

from __future__ import annotations

import jax
import jax.numpy as jnp

from rotax.config import get_dtype
from rotax.rotations._registry import _register
from rotax.rotations.base import RotationBase
from rotax.rotations.conversions import (
    euler_zyx_to_quaternion,
    euler_zyx_unique,
    quaternion_to_euler_zyx,
    rotation_matrix_to_euler_zyx,
)
from rotax.rotations.quaternion import Quaternion
from rotax.rotations.rotation_matrix import RotationMatrix
from rotax.utils import from_radians, to_radians


class EulerAnglesZyx(RotationBase):
    """Attitude represented as yaw (Z), pitch (Y') and roll (X'') angles.

    Internal storage is a shape ``(3,)`` array ``[yaw, pitch, roll]`` in
    radians.  The generic accessors ``z``, ``y`` and ``x`` alias yaw,
    pitch and roll.

    This class is registered as a JAX pytree with the angle array as the
    sole leaf.

    Args:
        yaw (float): Rotation about Z. Default: ``0.0``.
        pitch (float): Rotation about Y'. Default: ``0.0``.
        roll (float): Rotation about X''. Default: ``0.0``.
        use_degrees (bool): If ``True``, interpret angles as degrees. Default: ``False``.
    """

    __slots__ = ()

    def __init__(self, yaw: float = 0.0, pitch: float = 0.0, roll: float = 0.0, use_degrees: bool = False) -> None:
        _float = get_dtype()
        self._data = jnp.array([
            _float(to_radians(yaw, use_degrees)),
            _float(to_radians(pitch, use_degrees)),
            _float(to_radians(roll, use_degrees)),
        ])

    # Properties

    @property
    def yaw(self) -> jax.Array:
        """Rotation about Z in radians."""
        return self._data[0]

    @yaw.setter
    def yaw(self, value: float) -> None:
        self._data = self._data.at[0].set(value)

    @property
    def pitch(self) -> jax.Array:
        """Rotation about Y' in radians."""
        return self._data[1]

    @pitch.setter
    def pitch(self, value: float) -> None:
        self._data = self._data.at[1].set(value)

    @property
    def roll(self) -> jax.Array:
        """Rotation about X'' in radians."""
        return self._data[2]

    @roll.setter
    def roll(self, value: float) -> None:
        self._data = self._data.at[2].set(value)

    z = yaw
    y = pitch
    x = roll

    # Factory methods

    @classmethod
    def from_vector(cls, vec: jax.Array, use_degrees: bool = False) -> EulerAnglesZyx:
        """Create from a 3-element vector ``[yaw, pitch, roll]``.

        Args:
            vec (jax.Array): Array-like of shape ``(3,)``.
            use_degrees (bool): If ``True``, interpret as degrees.

        Returns:
            EulerAnglesZyx: New instance.
        """
        return cls(vec[0], vec[1], vec[2], use_degrees=use_degrees)

    def to_vector(self, use_degrees: bool = False) -> jax.Array:
        """Return ``[yaw, pitch, roll]``.

        Args:
            use_degrees (bool): If ``True``, return degrees.

        Returns:
            jnp.ndarray: Array of shape ``(3,)``.
        """
        return from_radians(self._data, use_degrees)

    # Canonical form

    def get_unique(self) -> EulerAnglesZyx:
        """Return the canonical angles for this rotation.

        Angles are brought into yaw in ``[-pi, pi)``, pitch in
        ``[-pi/2, pi/2)`` and roll in ``[-pi, pi)``.  Within
        ``GIMBAL_LOCK_TOLERANCE`` (1e-3 rad) of pitch = -pi/2 the sum
        ``yaw + roll`` is moved into yaw and roll is set to zero; near
        pitch = +pi/2 the same is done with ``yaw - roll``.  In these bands
        pitch keeps its wrapped value, so it may lie up to the tolerance
        beyond +-pi/2.  See :func:`rotax.rotations.conversions.euler_zyx_unique`.

        Returns:
            EulerAnglesZyx: New instance with canonical angles.
        """
        return EulerAnglesZyx._from_internal(euler_zyx_unique(self._data))

    # String representations

    def __repr__(self) -> str:
        return (
            f"EulerAnglesZyx(yaw={float(self._data[0])}, "
            f"pitch={float(self._data[1])}, "
            f"roll={float(self._data[2])})"
        )


#: Yaw-pitch-roll is another name for the Z-Y'-X'' sequence.
EulerAnglesYpr = EulerAnglesZyx


# Registry entries

@_register(EulerAnglesZyx, Quaternion)
def _euler_zyx_to_quaternion(e: EulerAnglesZyx) -> Quaternion:
    return Quaternion._from_internal(euler_zyx_to_quaternion(e._data))


@_register(RotationMatrix, EulerAnglesZyx)
def _rotation_matrix_to_euler_zyx(r: RotationMatrix) -> EulerAnglesZyx:
    return EulerAnglesZyx._from_internal(rotation_matrix_to_euler_zyx(r._data))


@_register(Quaternion, EulerAnglesZyx)
def _quaternion_to_euler_zyx(q: Quaternion) -> EulerAnglesZyx:
    return EulerAnglesZyx._from_internal(quaternion_to_euler_zyx(q._data))


# Register as JAX pytree
jax.tree_util.register_pytree_node(
    EulerAnglesZyx,
    lambda e: ((e._data,), None),
    lambda _, children: EulerAnglesZyx._from_internal(children[0]),
)
