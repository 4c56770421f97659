"""Capability interface shared by every rotation type.

``RotationBase`` gives each parameterization the same composition,
inversion, comparison and cross-type construction operations.  It holds
no state of its own beyond the ``_data`` array slot that every subclass
fills with its raw storage; conversions between types are looked up in
the closed registry in :mod:`rotax.rotations._registry`.

Convention:
    Rotations are active.  ``a * b`` is the rotation obtained by applying
    ``b`` first and then ``a``, i.e. ``(a * b).rotate(v) ==
    a.rotate(b.rotate(v))``.  For rotation matrices this is the matrix
    product ``C_a @ C_b``; for quaternions the Hamilton product.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

import jax
import jax.numpy as jnp
from jax.typing import ArrayLike

from rotax.rotations._registry import convert
from rotax.rotations._tolerance import get_rotation_epsilon
from rotax.rotations.conversions import (
    quaternion_conjugate,
    quaternion_disparity_angle,
    quaternion_multiply,
    quaternion_to_rotation_matrix,
    quaternion_to_rotation_vector,
    rotation_vector_to_quaternion,
)

if TYPE_CHECKING:
    from rotax.rotations.angle_axis import AngleAxis
    from rotax.rotations.euler_angles_xyz import EulerAnglesXyz
    from rotax.rotations.euler_angles_zyx import EulerAnglesZyx
    from rotax.rotations.quaternion import Quaternion
    from rotax.rotations.rotation_matrix import RotationMatrix
    from rotax.rotations.rotation_vector import RotationVector

T = TypeVar("T", bound="RotationBase")


class RotationBase:
    """Abstract base of the rotation types.

    Subclasses store their parameters in a single ``_data`` array and
    must be default-constructible to the identity rotation.
    """

    __slots__ = ("_data",)

    @classmethod
    def _from_internal(cls: type[T], data: jax.Array) -> T:
        """Create from a raw JAX array without conversion or validation.

        Used by pytree unflatten and conversion outputs.

        Args:
            data (jax.Array): Raw storage in the layout of ``cls``.

        Returns:
            RotationBase: New instance.
        """
        obj = object.__new__(cls)
        obj._data = data
        return obj

    def to_implementation(self) -> jax.Array:
        """Return the raw storage array (for interop with ``jax.numpy`` code).

        Returns:
            jax.Array: The underlying array.
        """
        return self._data

    def copy(self: T) -> T:
        """Return a new instance holding the same data."""
        return type(self)._from_internal(self._data)

    # Cross-type construction

    @classmethod
    def from_rotation(cls: type[T], other: RotationBase) -> T:
        """Create an instance of this type from any rotation.

        Args:
            other (RotationBase): Source rotation of any type.

        Returns:
            RotationBase: Equivalent rotation of type ``cls``.
        """
        return convert(other, cls)

    def set_from(self: T, other: RotationBase) -> T:
        """Overwrite this rotation in place with the value of ``other``.

        Args:
            other (RotationBase): Source rotation of any type.

        Returns:
            RotationBase: ``self``.
        """
        self._data = convert(other, type(self))._data
        return self

    def to(self, destination: type[T]) -> T:
        """Convert to ``destination`` type."""
        return convert(self, destination)

    def to_quaternion(self) -> Quaternion:
        """Convert to ``Quaternion``."""
        from rotax.rotations.quaternion import Quaternion

        return convert(self, Quaternion)

    def to_rotation_matrix(self) -> RotationMatrix:
        """Convert to ``RotationMatrix``."""
        from rotax.rotations.rotation_matrix import RotationMatrix

        return convert(self, RotationMatrix)

    def to_angle_axis(self) -> AngleAxis:
        """Convert to ``AngleAxis``."""
        from rotax.rotations.angle_axis import AngleAxis

        return convert(self, AngleAxis)

    def to_rotation_vector(self) -> RotationVector:
        """Convert to ``RotationVector``."""
        from rotax.rotations.rotation_vector import RotationVector

        return convert(self, RotationVector)

    def to_euler_angles_zyx(self) -> EulerAnglesZyx:
        """Convert to ``EulerAnglesZyx`` (yaw-pitch-roll)."""
        from rotax.rotations.euler_angles_zyx import EulerAnglesZyx

        return convert(self, EulerAnglesZyx)

    def to_euler_angles_xyz(self) -> EulerAnglesXyz:
        """Convert to ``EulerAnglesXyz`` (roll-pitch-yaw)."""
        from rotax.rotations.euler_angles_xyz import EulerAnglesXyz

        return convert(self, EulerAnglesXyz)

    # Group operations

    def _compose(self: T, other: RotationBase) -> T:
        # Generic path: multiply in the quaternion hub and convert back.
        from rotax.rotations.quaternion import Quaternion

        q = quaternion_multiply(self.to_quaternion()._data, other.to_quaternion()._data)
        return convert(Quaternion._from_internal(q), type(self))

    def __mul__(self: T, other: RotationBase) -> T:
        """Concatenate two rotations: ``other`` is applied first.

        The result has the type of the left operand; the right operand may
        be any rotation type.
        """
        if not isinstance(other, RotationBase):
            return NotImplemented
        return self._compose(other)

    def inverted(self: T) -> T:
        """Return the inverse rotation.

        Returns:
            RotationBase: New rotation of the same type.
        """
        from rotax.rotations.quaternion import Quaternion

        q = quaternion_conjugate(self.to_quaternion()._data)
        return convert(Quaternion._from_internal(q), type(self))

    def invert(self: T) -> T:
        """Invert the rotation in place.

        Returns:
            RotationBase: ``self``.
        """
        self._data = self.inverted()._data
        return self

    def set_identity(self: T) -> T:
        """Set the rotation to identity in place.

        Returns:
            RotationBase: ``self``.
        """
        self._data = type(self)()._data
        return self

    def get_unique(self: T) -> T:
        """Return the canonical representative of this rotation.

        Types without redundancy in their storage return a copy.
        """
        return self.copy()

    def set_unique(self: T) -> T:
        """Replace the stored value by its canonical representative.

        Returns:
            RotationBase: ``self``.
        """
        self._data = self.get_unique()._data
        return self

    # Comparison

    def get_disparity_angle(self, other: RotationBase) -> jax.Array:
        """Angle of the rotation separating ``self`` and ``other``.

        Args:
            other (RotationBase): Rotation of any type.

        Returns:
            jax.Array: Scalar angle in ``[0, pi]`` radians.
        """
        return quaternion_disparity_angle(self.to_quaternion()._data, other.to_quaternion()._data)

    def equivalent_to(self, other: RotationBase, tol: float | None = None) -> bool:
        """Check whether two rotations represent the same orientation.

        The stored values may differ (``q`` and ``-q``, Euler angles offset
        by full turns, ...); only the represented rotation is compared.

        Args:
            other (RotationBase): Rotation of any type.
            tol (float | None): Maximum disparity angle in radians.
                Default: :func:`get_rotation_epsilon`.

        Returns:
            bool: ``True`` if the disparity angle is at most ``tol``.
        """
        if tol is None:
            tol = get_rotation_epsilon()
        return bool(self.get_disparity_angle(other) <= tol)

    def is_near(self, other: RotationBase, tol: float) -> bool:
        """Same as :meth:`equivalent_to` with an explicit tolerance."""
        return self.equivalent_to(other, tol)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.equivalent_to(other)

    def __ne__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return not self.equivalent_to(other)

    __hash__ = None

    # Acting on vectors

    def rotate(self, v: ArrayLike) -> jax.Array:
        """Rotate a vector, or the columns of a ``(3, N)`` array.

        Args:
            v (ArrayLike): Array of shape ``(3,)`` or ``(3, N)``.

        Returns:
            jax.Array: Rotated vector(s), same shape as ``v``.
        """
        C = quaternion_to_rotation_matrix(self.to_quaternion()._data)
        return C @ jnp.asarray(v, dtype=C.dtype)

    def inverse_rotate(self, v: ArrayLike) -> jax.Array:
        """Apply the inverse rotation to a vector or ``(3, N)`` array."""
        C = quaternion_to_rotation_matrix(self.to_quaternion()._data)
        return C.T @ jnp.asarray(v, dtype=C.dtype)

    # Manifold operators

    def box_plus(self: T, v: ArrayLike) -> T:
        """Perturb the rotation by a rotation vector, ``exp(v) * self``.

        Args:
            v (ArrayLike): Rotation vector of shape ``(3,)``.

        Returns:
            RotationBase: Perturbed rotation of the same type.
        """
        from rotax.rotations.quaternion import Quaternion

        dq = rotation_vector_to_quaternion(jnp.asarray(v, dtype=self._data.dtype))
        q = quaternion_multiply(dq, self.to_quaternion()._data)
        return convert(Quaternion._from_internal(q), type(self))

    def box_minus(self, other: RotationBase) -> jax.Array:
        """Rotation vector ``log(self * other^-1)``, inverse of :meth:`box_plus`.

        Args:
            other (RotationBase): Rotation of any type.

        Returns:
            jax.Array: Rotation vector of shape ``(3,)`` with norm at most pi.
        """
        q_other = quaternion_conjugate(other.to_quaternion()._data)
        q = quaternion_multiply(self.to_quaternion()._data, q_other)
        return quaternion_to_rotation_vector(q)

    # String representations

    def __str__(self) -> str:
        return " ".join(str(float(c)) for c in jnp.ravel(self._data))


def compose(a: T, b: RotationBase) -> T:
    """Return ``a * b``: the rotation applying ``b`` first, then ``a``."""
    return a * b


def invert(rotation: T) -> T:
    """Return the inverse of ``rotation`` without modifying it."""
    return rotation.inverted()


def equivalent_to(a: RotationBase, b: RotationBase, tol: float | None = None) -> bool:
    """Check whether ``a`` and ``b`` represent the same rotation.

    See :meth:`RotationBase.equivalent_to`.
    """
    return a.equivalent_to(b, tol)
