import jax.numpy as jnp

from rotax.utils import to_radians


def Rx(angle:float, use_degrees:bool=False) -> jnp.ndarray:
    """Elementary rotation about the x-axis.

    The matrix is active: it turns a vector counter-clockwise by ``angle``
    when viewed from the tip of the axis, so ``Rx(pi/2) @ e_y == e_z``.

    Args:
        angle (float): Rotation angle.
        use_degrees (bool): Interpret ``angle`` in degrees. Default: ``False``

    Returns:
        jnp.ndarray: ``(3, 3)`` rotation matrix.
    """
    a = to_radians(angle, use_degrees)
    c, s = jnp.cos(a), jnp.sin(a)
    return jnp.array([[1.0, 0.0, 0.0],
                      [0.0,   c,  -s],
                      [0.0,   s,   c]])


def Ry(angle:float, use_degrees:bool=False) -> jnp.ndarray:
    """Elementary rotation about the y-axis; ``Ry(pi/2) @ e_z == e_x``."""
    a = to_radians(angle, use_degrees)
    c, s = jnp.cos(a), jnp.sin(a)
    return jnp.array([[  c, 0.0,   s],
                      [0.0, 1.0, 0.0],
                      [ -s, 0.0,   c]])


def Rz(angle:float, use_degrees:bool=False) -> jnp.ndarray:
    """Elementary rotation about the z-axis; ``Rz(pi/2) @ e_x == e_y``."""
    a = to_radians(angle, use_degrees)
    c, s = jnp.cos(a), jnp.sin(a)
    return jnp.array([[  c,  -s, 0.0],
                      [  s,   c, 0.0],
                      [0.0, 0.0, 1.0]])
