"""Default tolerance for comparing rotations."""

from __future__ import annotations

import jax.numpy as jnp

from rotax.config import get_dtype


def get_rotation_epsilon() -> float:
    """Largest disparity angle, in radians, at which two rotations compare equal.

    ``1e-12`` in float64, ``1e-6`` in float32 and ``1e-3`` in the half
    precision types.
    """
    dtype = get_dtype()
    if dtype == jnp.float64:
        return 1e-12
    if dtype == jnp.float32:
        return 1e-6
    return 1e-3
