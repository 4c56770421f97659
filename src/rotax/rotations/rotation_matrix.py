"""Rotation matrix rotation representation.

Provides the ``RotationMatrix`` class representing a rotation as an
active 3x3 orthogonal matrix with determinant +1 (SO(3)), mapping
body-frame coordinates into the reference frame.

The component constructor and ``from_matrix`` validate SO(3) membership.
``_from_internal`` and the in-place mutators do not; keeping a mutated
matrix orthonormal is the caller's responsibility.
"""

from __future__ import annotations

import jax
import jax.numpy as jnp

from rotax.config import get_dtype
from rotax.rotations._registry import _register
from rotax.rotations.base import RotationBase
from rotax.rotations.conversions import (
    quaternion_to_rotation_matrix,
    rotation_matrix_to_quaternion,
)
from rotax.rotations.quaternion import Quaternion
from rotax.rotations.rotation_matrices import Rx as _Rx
from rotax.rotations.rotation_matrices import Ry as _Ry
from rotax.rotations.rotation_matrices import Rz as _Rz


def _is_so3(matrix: jax.Array, tol: float = 1e-6) -> bool:
    """Whether ``matrix`` is orthonormal with determinant +1, within ``tol``."""
    if matrix.shape != (3, 3):
        return False
    gram_err = jnp.max(jnp.abs(matrix @ matrix.T - jnp.eye(3)))
    return bool(gram_err < tol and jnp.linalg.det(matrix) > 0.0)


def _not_so3_error(matrix: jax.Array) -> ValueError:
    if matrix.shape != (3, 3):
        return ValueError(f"Rotation matrix must have shape (3, 3), got {matrix.shape}")
    return ValueError(
        f"Matrix is not a proper rotation matrix. det={float(jnp.linalg.det(matrix)):.6f}"
    )


def _element(row: int, col: int) -> property:
    return property(lambda self: self._data[row, col], doc=f"Element ({row}, {col}).")


class RotationMatrix(RotationBase):
    """Active 3x3 rotation matrix.

    Internal storage is a shape ``(3, 3)`` JAX array.  Calling the
    constructor without arguments gives the identity.  Composition is the
    matrix product and inversion the transpose.

    Registered as a JAX pytree; the matrix is the only leaf.

    Args:
        r11, r12, r13, r21, r22, r23, r31, r32, r33 (float): Elements in
            row-major order, ``rIJ`` being row ``I``, column ``J``.

    Raises:
        ValueError: If the elements do not form a proper rotation matrix.
    """

    __slots__ = ()

    def __init__(
        self,
        r11: float = 1.0,
        r12: float = 0.0,
        r13: float = 0.0,
        r21: float = 0.0,
        r22: float = 1.0,
        r23: float = 0.0,
        r31: float = 0.0,
        r32: float = 0.0,
        r33: float = 1.0,
    ) -> None:
        data = jnp.asarray(
            [[r11, r12, r13], [r21, r22, r23], [r31, r32, r33]], dtype=get_dtype()
        )
        if not _is_so3(data):
            raise _not_so3_error(data)
        self._data = data

    # Element accessors

    r11 = _element(0, 0)
    r12 = _element(0, 1)
    r13 = _element(0, 2)
    r21 = _element(1, 0)
    r22 = _element(1, 1)
    r23 = _element(1, 2)
    r31 = _element(2, 0)
    r32 = _element(2, 1)
    r33 = _element(2, 2)

    # Factory methods

    @classmethod
    def from_matrix(cls, matrix: jax.Array, validate: bool = True) -> RotationMatrix:
        """Wrap a ``(3, 3)`` array, checking SO(3) membership unless ``validate=False``.

        Raises:
            ValueError: If validation is on and the array is not a proper
                rotation matrix.
        """
        data = jnp.asarray(matrix, dtype=get_dtype())
        if validate and not _is_so3(data):
            raise _not_so3_error(data)
        return cls._from_internal(data)

    def to_matrix(self) -> jax.Array:
        """Return the underlying ``(3, 3)`` array."""
        return self._data

    def set_matrix(self, matrix: jax.Array) -> RotationMatrix:
        """Overwrite the stored matrix in place, without validation.

        Args:
            matrix (jax.Array): Array-like of shape ``(3, 3)``; must be SO(3).

        Returns:
            RotationMatrix: ``self``.
        """
        self._data = jnp.asarray(matrix, dtype=self._data.dtype)
        return self

    @classmethod
    def rotation_x(cls, angle: float, use_degrees: bool = False) -> RotationMatrix:
        """Elementary active rotation by ``angle`` about the x-axis."""
        return cls._from_internal(jnp.asarray(_Rx(angle, use_degrees), dtype=get_dtype()))

    @classmethod
    def rotation_y(cls, angle: float, use_degrees: bool = False) -> RotationMatrix:
        """Elementary active rotation by ``angle`` about the y-axis."""
        return cls._from_internal(jnp.asarray(_Ry(angle, use_degrees), dtype=get_dtype()))

    @classmethod
    def rotation_z(cls, angle: float, use_degrees: bool = False) -> RotationMatrix:
        """Elementary active rotation by ``angle`` about the z-axis."""
        return cls._from_internal(jnp.asarray(_Rz(angle, use_degrees), dtype=get_dtype()))

    # Methods

    def determinant(self) -> jax.Array:
        """Return the determinant (+1 for a valid rotation matrix)."""
        return jnp.linalg.det(self._data)

    def inverted(self) -> RotationMatrix:
        """Return the inverse rotation (the transpose).

        Returns:
            RotationMatrix: Inverse rotation.
        """
        return RotationMatrix._from_internal(self._data.T)

    # Operators

    def _compose(self, other: RotationBase) -> RotationMatrix:
        return RotationMatrix._from_internal(self._data @ other.to_rotation_matrix()._data)

    def __mul__(self, other: RotationBase | jax.Array) -> RotationMatrix | jax.Array:
        """Concatenate with another rotation, or rotate vectors.

        Args:
            other (RotationBase | jax.Array): Any rotation, or an array of
                shape ``(3,)`` or ``(3, N)`` as accepted by :meth:`rotate`.

        Returns:
            RotationMatrix | jax.Array: Result of multiplication.
        """
        if isinstance(other, RotationBase):
            return self._compose(other)
        v = jnp.asarray(other)
        if v.ndim in (1, 2) and v.shape[0] == 3:
            return self.rotate(v)
        return NotImplemented

    def rotate(self, v: jax.Array) -> jax.Array:
        return self._data @ jnp.asarray(v, dtype=self._data.dtype)

    def inverse_rotate(self, v: jax.Array) -> jax.Array:
        return self._data.T @ jnp.asarray(v, dtype=self._data.dtype)

    def __getitem__(self, idx: int | tuple[int, int]) -> jax.Array:
        return self._data[idx]

    # String representations

    def __str__(self) -> str:
        d = self._data
        return "\n".join(
            " ".join(str(float(d[i, j])) for j in range(3)) for i in range(3)
        )

    def __repr__(self) -> str:
        d = self._data
        return (
            f"RotationMatrix(\n"
            f"  [{float(d[0, 0]):10.6f} {float(d[0, 1]):10.6f} {float(d[0, 2]):10.6f}]\n"
            f"  [{float(d[1, 0]):10.6f} {float(d[1, 1]):10.6f} {float(d[1, 2]):10.6f}]\n"
            f"  [{float(d[2, 0]):10.6f} {float(d[2, 1]):10.6f} {float(d[2, 2]):10.6f}])"
        )


# Registry entries

@_register(RotationMatrix, Quaternion)
def _rotation_matrix_to_quaternion(r: RotationMatrix) -> Quaternion:
    return Quaternion._from_internal(rotation_matrix_to_quaternion(r._data))


@_register(Quaternion, RotationMatrix)
def _quaternion_to_rotation_matrix(q: Quaternion) -> RotationMatrix:
    return RotationMatrix._from_internal(quaternion_to_rotation_matrix(q._data))


# Register as JAX pytree
jax.tree_util.register_pytree_node(
    RotationMatrix,
    lambda r: ((r._data,), None),
    lambda _, children: RotationMatrix._from_internal(children[0]),
)
