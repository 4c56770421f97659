"""Unit quaternion, the hub of the conversion registry.

Every other rotation type registers its conversions to and from
``Quaternion``; pairs without a direct formula are routed through it.
Storage is scalar-first, ``[w, x, y, z]``.
"""

from __future__ import annotations

import jax
import jax.numpy as jnp

from rotax.config import get_dtype
from rotax.rotations.base import RotationBase
from rotax.rotations.conversions import (
    quaternion_conjugate,
    quaternion_multiply,
    quaternion_slerp,
    quaternion_unique,
)


def _component(index: int, doc: str) -> property:
    def fget(self) -> jax.Array:
        return self._data[index]

    def fset(self, value: float) -> None:
        self._data = self._data.at[index].set(value)

    return property(fget, fset, doc=doc)


class Quaternion(RotationBase):
    """Rotation stored as a unit quaternion.

    The four components are normalized when the quaternion is built.
    Writing a component through its setter leaves the norm alone; call
    :meth:`set_normalized` afterwards to restore it.

    Composition is the Hamilton product, and the inverse of a unit
    quaternion is its conjugate.  ``q`` and ``-q`` describe the same
    rotation and compare equal.

    Registered as a JAX pytree; the ``(4,)`` array is the only leaf.

    Args:
        w (float): Real part. Default: ``1.0``.
        x (float): ``i`` component. Default: ``0.0``.
        y (float): ``j`` component. Default: ``0.0``.
        z (float): ``k`` component. Default: ``0.0``.
    """

    __slots__ = ()

    def __init__(self, w: float = 1.0, x: float = 0.0, y: float = 0.0, z: float = 0.0) -> None:
        q = jnp.asarray([w, x, y, z], dtype=get_dtype())
        self._data = q / jnp.linalg.norm(q)

    w = _component(0, "Real part.")
    x = _component(1, "``i`` component.")
    y = _component(2, "``j`` component.")
    z = _component(3, "``k`` component.")

    @property
    def imaginary(self) -> jax.Array:
        """Vector part ``[x, y, z]``."""
        return self._data[1:]

    @classmethod
    def from_vector(cls, v: jax.Array, scalar_first: bool = True) -> Quaternion:
        """Build from four components, ``[w, x, y, z]`` or, with
        ``scalar_first=False``, ``[x, y, z, w]``.  The result is normalized.
        """
        v = jnp.asarray(v)
        if not scalar_first:
            v = jnp.roll(v, 1)
        return cls(v[0], v[1], v[2], v[3])

    def to_vector(self, scalar_first: bool = True) -> jax.Array:
        """Return the components in the order selected by ``scalar_first``."""
        return self._data if scalar_first else jnp.roll(self._data, -1)

    def norm(self) -> jax.Array:
        """Euclidean norm of the four components."""
        return jnp.linalg.norm(self._data)

    def normalize(self) -> Quaternion:
        """Return a unit-norm copy."""
        return Quaternion._from_internal(self._data / self.norm())

    def set_normalized(self) -> Quaternion:
        """Rescale to unit norm in place and return ``self``."""
        self._data = self._data / self.norm()
        return self

    def conjugate(self) -> Quaternion:
        """Return ``[w, -x, -y, -z]``."""
        return Quaternion._from_internal(quaternion_conjugate(self._data))

    def inverted(self) -> Quaternion:
        return self.conjugate()

    def get_unique(self) -> Quaternion:
        """Return whichever of ``q`` and ``-q`` has ``w >= 0``."""
        return Quaternion._from_internal(quaternion_unique(self._data))

    def slerp(self, other: Quaternion, t: float) -> Quaternion:
        """Interpolate along the shorter great arc towards ``other``.

        Args:
            other (Quaternion): End point, reached at ``t = 1``.
            t (float): Fraction of the arc in ``[0, 1]``.

        Returns:
            Quaternion: Interpolated rotation.
        """
        return Quaternion._from_internal(quaternion_slerp(self._data, other._data, t))

    def _compose(self, other: RotationBase) -> Quaternion:
        return Quaternion._from_internal(quaternion_multiply(self._data, other.to_quaternion()._data))

    def __neg__(self) -> Quaternion:
        return Quaternion._from_internal(-self._data)

    def __getitem__(self, index: int) -> jax.Array:
        return self._data[index]

    def __repr__(self) -> str:
        w, x, y, z = (float(c) for c in self._data)
        return f"Quaternion(w={w}, x={x}, y={y}, z={z})"


jax.tree_util.register_pytree_node(
    Quaternion,
    lambda q: ((q._data,), None),
    lambda _, leaves: Quaternion._from_internal(leaves[0]),
)
