"""Euler angles X-Y'-Z'' (roll-pitch-yaw) rotation representation.

The rotation is ``C = Rx(roll) @ Ry(pitch) @ Rz(yaw)``.
"""

from __future__ import annotations

import jax
import jax.numpy as jnp

from rotax.config import get_dtype
from rotax.rotations._registry import _register
from rotax.rotations.base import RotationBase
from rotax.rotations.conversions import (
    euler_xyz_to_quaternion,
    euler_xyz_unique,
    quaternion_to_euler_xyz,
    rotation_matrix_to_euler_xyz,
)
from rotax.rotations.quaternion import Quaternion
from rotax.rotations.rotation_matrix import RotationMatrix
from rotax.utils import from_radians, to_radians


class EulerAnglesXyz(RotationBase):
    """Attitude represented as roll (X), pitch (Y') and yaw (Z'') angles.

    Internal storage is a shape ``(3,)`` array ``[roll, pitch, yaw]`` in
    radians; ``x``, ``y`` and ``z`` alias roll, pitch and yaw.

    Args:
        roll (float): Rotation about X. Default: ``0.0``.
        pitch (float): Rotation about Y'. Default: ``0.0``.
        yaw (float): Rotation about Z''. Default: ``0.0``.
        use_degrees (bool): If ``True``, interpret angles as degrees. Default: ``False``.
    """

    __slots__ = ()

    def __init__(self, roll: float = 0.0, pitch: float = 0.0, yaw: float = 0.0, use_degrees: bool = False) -> None:
        _float = get_dtype()
        self._data = jnp.array([
            _float(to_radians(roll, use_degrees)),
            _float(to_radians(pitch, use_degrees)),
            _float(to_radians(yaw, use_degrees)),
        ])

    @property
    def roll(self) -> jax.Array:
        """Rotation about X in radians."""
        return self._data[0]

    @roll.setter
    def roll(self, value: float) -> None:
        self._data = self._data.at[0].set(value)

    @property
    def pitch(self) -> jax.Array:
        """Rotation about Y' in radians."""
        return self._data[1]

    @pitch.setter
    def pitch(self, value: float) -> None:
        self._data = self._data.at[1].set(value)

    @property
    def yaw(self) -> jax.Array:
        """Rotation about Z'' in radians."""
        return self._data[2]

    @yaw.setter
    def yaw(self, value: float) -> None:
        self._data = self._data.at[2].set(value)

    x = roll
    y = pitch
    z = yaw

    @classmethod
    def from_vector(cls, vec: jax.Array, use_degrees: bool = False) -> EulerAnglesXyz:
        """Create from a 3-element vector ``[roll, pitch, yaw]``."""
        return cls(vec[0], vec[1], vec[2], use_degrees=use_degrees)

    def to_vector(self, use_degrees: bool = False) -> jax.Array:
        """Return ``[roll, pitch, yaw]``, in degrees if ``use_degrees``."""
        return from_radians(self._data, use_degrees)

    def get_unique(self) -> EulerAnglesXyz:
        """Return angles in ``[-pi, pi) x [-pi/2, pi/2] x [-pi, pi)``.

        A pitch beyond +-pi/2 is reflected through the pole, shifting roll
        and yaw by pi.
        """
        return EulerAnglesXyz._from_internal(euler_xyz_unique(self._data))

    def __repr__(self) -> str:
        return (
            f"EulerAnglesXyz(roll={float(self._data[0])}, "
            f"pitch={float(self._data[1])}, "
            f"yaw={float(self._data[2])})"
        )


EulerAnglesRpy = EulerAnglesXyz


# Registry entries

@_register(EulerAnglesXyz, Quaternion)
def _euler_xyz_to_quaternion(e: EulerAnglesXyz) -> Quaternion:
    return Quaternion._from_internal(euler_xyz_to_quaternion(e._data))


@_register(RotationMatrix, EulerAnglesXyz)
def _rotation_matrix_to_euler_xyz(r: RotationMatrix) -> EulerAnglesXyz:
    return EulerAnglesXyz._from_internal(rotation_matrix_to_euler_xyz(r._data))


@_register(Quaternion, EulerAnglesXyz)
def _quaternion_to_euler_xyz(q: Quaternion) -> EulerAnglesXyz:
    return EulerAnglesXyz._from_internal(quaternion_to_euler_xyz(q._data))


# Register as JAX pytree
jax.tree_util.register_pytree_node(
    EulerAnglesXyz,
    lambda e: ((e._data,), None),
    lambda _, children: EulerAnglesXyz._from_internal(children[0]),
)
