import jax.numpy as jnp
import pytest

from rotax.config import set_dtype


@pytest.fixture(autouse=True)
def _ensure_float64():
    """Run every test in double precision.

    Reference values are checked to 1e-12, which float32 cannot reach.
    test_config.py overrides this with its own float32 fixture.
    """
    set_dtype(jnp.float64)
