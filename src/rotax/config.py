"""Float precision shared by every rotax type.

All rotation constructors and factory methods cast their inputs to the
dtype returned by :func:`get_dtype`.  It starts as ``jnp.float32``, the
cheapest choice on accelerators; ``set_dtype(jnp.float64)`` switches to
double precision and turns on JAX's ``jax_enable_x64`` flag.

The dtype is read while a function is traced, so a jitted function keeps
the precision that was active when it was compiled.  Select the dtype
once, at start-up, before anything is jitted.
"""

from __future__ import annotations

import logging

import jax
import jax.numpy as jnp

logger = logging.getLogger(__name__)

_VALID_DTYPES = (jnp.float16, jnp.bfloat16, jnp.float32, jnp.float64)

_dtype = jnp.float32


def set_dtype(dtype) -> None:
    """Select the float dtype used for new rotations.

    Args:
        dtype: ``jnp.float16``, ``jnp.bfloat16``, ``jnp.float32`` or
            ``jnp.float64``.  The last also enables ``jax_enable_x64``.

    Raises:
        ValueError: For any other value.
    """
    global _dtype
    if dtype not in _VALID_DTYPES:
        raise ValueError(
            f"Unsupported dtype {dtype}. Must be one of: "
            f"jnp.float16, jnp.bfloat16, jnp.float32, jnp.float64"
        )
    if dtype == jnp.float64:
        jax.config.update("jax_enable_x64", True)
    if dtype != _dtype:
        logger.info("Switching rotax float dtype from %s to %s", jnp.dtype(_dtype).name, jnp.dtype(dtype).name)
    _dtype = dtype


def get_dtype():
    """Return the active float dtype (``jnp.float32`` unless changed)."""
    return _dtype
