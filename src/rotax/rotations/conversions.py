"""Pure numerical kernels shared by the rotation types.

All functions operate on raw JAX arrays (no class instances) to avoid
circular imports between the class modules.  The classes call these
kernels and wrap the results; the conversion registry routes between
them.

Convention:
    Rotations are active.  A rotation matrix ``C`` maps body-frame
    coordinates into the reference frame, ``v_ref = C @ v_body``.
    Quaternion layout is scalar-first: ``[w, x, y, z]`` (shape ``(4,)``)
    and ``C(q1 * q2) = C(q1) @ C(q2)`` for the Hamilton product.
    Euler-ZYX angles are stored ``[yaw, pitch, roll]`` with
    ``C = Rz(yaw) @ Ry(pitch) @ Rx(roll)``.
    Euler-XYZ angles are stored ``[roll, pitch, yaw]`` with
    ``C = Rx(roll) @ Ry(pitch) @ Rz(yaw)``.
    Angle-axis is ``(angle_scalar, axis(3,))``.
"""

from __future__ import annotations

import math

import jax
import jax.numpy as jnp

from rotax.utils import wrap_pos_neg_pi

_PI = math.pi
_HALF_PI = 0.5 * math.pi

#: Half-width of the band around pitch = +-pi/2 that is treated as gimbal lock.
GIMBAL_LOCK_TOLERANCE = 1e-3

# Below this norm the axis of a rotation is undefined.
_AXIS_EPS = 1e-15


# ---------------------------------------------------------------------------
# Quaternion <-> Rotation Matrix
# ---------------------------------------------------------------------------

def quaternion_to_rotation_matrix(q: jax.Array) -> jax.Array:
    """Convert a unit quaternion to an active 3x3 rotation matrix.

    Args:
        q (jax.Array): Quaternion of shape ``(4,)`` in scalar-first order ``[w, x, y, z]``.

    Returns:
        jnp.ndarray: Rotation matrix of shape ``(3, 3)``.
    """
    qs, q1, q2, q3 = q[0], q[1], q[2], q[3]

    return jnp.array([
        [qs*qs + q1*q1 - q2*q2 - q3*q3,  2.0*q1*q2 - 2.0*qs*q3,          2.0*q1*q3 + 2.0*qs*q2],
        [2.0*q1*q2 + 2.0*qs*q3,           qs*qs - q1*q1 + q2*q2 - q3*q3,  2.0*q2*q3 - 2.0*qs*q1],
        [2.0*q1*q3 - 2.0*qs*q2,           2.0*q2*q3 + 2.0*qs*q1,          qs*qs - q1*q1 - q2*q2 + q3*q3],
    ])


def rotation_matrix_to_quaternion(R: jax.Array) -> jax.Array:
    """Convert an active 3x3 rotation matrix to a unit quaternion.

    Shepperd's method: the largest of ``4w^2, 4x^2, 4y^2, 4z^2`` is read
    off the diagonal and the other three components are divided by its
    square root, so the division is never by a small number.  The branch
    is chosen with ``jax.lax.switch`` to stay traceable.

    Args:
        R (jax.Array): Rotation matrix of shape ``(3, 3)``.

    Returns:
        jnp.ndarray: Unit quaternion ``[w, x, y, z]``.
    """
    trace = jnp.trace(R)
    candidates = jnp.concatenate([jnp.array([1.0 + trace]), 1.0 + 2.0 * jnp.diagonal(R) - trace])
    skew = jnp.array([R[2, 1] - R[1, 2], R[0, 2] - R[2, 0], R[1, 0] - R[0, 1]])
    sym = jnp.array([R[0, 1] + R[1, 0], R[0, 2] + R[2, 0], R[1, 2] + R[2, 1]])

    index = jnp.argmax(candidates)
    s = jnp.sqrt(candidates[index])
    branches = [
        lambda: jnp.array([s, skew[0] / s, skew[1] / s, skew[2] / s]),
        lambda: jnp.array([skew[0] / s, s, sym[0] / s, sym[1] / s]),
        lambda: jnp.array([skew[1] / s, sym[0] / s, s, sym[2] / s]),
        lambda: jnp.array([skew[2] / s, sym[1] / s, sym[2] / s, s]),
    ]
    q = 0.5 * jax.lax.switch(index, branches)
    return q / jnp.linalg.norm(q)


# ---------------------------------------------------------------------------
# Angle-Axis <-> Quaternion, Rotation Vector <-> Angle-Axis
# ---------------------------------------------------------------------------

def angle_axis_to_quaternion(angle: jax.Array, axis: jax.Array) -> jax.Array:
    """Convert an angle-axis rotation to a quaternion (half-angle formula).

    Args:
        angle (jax.Array): Rotation angle in radians (scalar).
        axis (jax.Array): Unit rotation axis of shape ``(3,)``.

    Returns:
        jnp.ndarray: Unit quaternion of shape ``(4,)`` in scalar-first order.
    """
    half = angle / 2.0
    s = jnp.sin(half)
    q = jnp.array([jnp.cos(half), axis[0] * s, axis[1] * s, axis[2] * s])
    return q / jnp.linalg.norm(q)


def quaternion_to_angle_axis(q: jax.Array) -> tuple[jax.Array, jax.Array]:
    """Convert a unit quaternion to angle-axis form.

    The angle is ``2*atan2(|v|, |w|)`` and therefore lies in ``[0, pi]``;
    the axis is flipped when ``w < 0`` so that ``q`` and ``-q`` give the
    same result.  For the zero rotation the axis is undefined and
    ``[1, 0, 0]`` is returned.

    Args:
        q (jax.Array): Quaternion of shape ``(4,)`` in scalar-first order.

    Returns:
        tuple: ``(angle, axis)`` with ``angle`` a scalar in radians and
        ``axis`` of shape ``(3,)``.
    """
    v = jnp.array([q[1], q[2], q[3]])
    v_norm = jnp.linalg.norm(v)
    angle = 2.0 * jnp.arctan2(v_norm, jnp.abs(q[0]))

    sign = jnp.where(q[0] < 0.0, -1.0, 1.0)
    safe_norm = jnp.where(v_norm > _AXIS_EPS, v_norm, 1.0)
    default_axis = jnp.array([1.0, 0.0, 0.0], dtype=v.dtype)
    axis = jnp.where(v_norm > _AXIS_EPS, sign * v / safe_norm, default_axis)

    return angle, axis


def rotation_vector_to_angle_axis(v: jax.Array) -> tuple[jax.Array, jax.Array]:
    """Split a rotation vector into angle and unit axis.

    Args:
        v (jax.Array): Rotation vector of shape ``(3,)`` (axis scaled by angle).

    Returns:
        tuple: ``(angle, axis)``; the axis is ``[1, 0, 0]`` for a zero vector.
    """
    angle = jnp.linalg.norm(v)
    safe_angle = jnp.where(angle > _AXIS_EPS, angle, 1.0)
    default_axis = jnp.array([1.0, 0.0, 0.0], dtype=v.dtype)
    axis = jnp.where(angle > _AXIS_EPS, v / safe_angle, default_axis)
    return angle, axis


def angle_axis_to_rotation_vector(angle: jax.Array, axis: jax.Array) -> jax.Array:
    """Scale a unit axis by its rotation angle.

    Args:
        angle (jax.Array): Rotation angle in radians.
        axis (jax.Array): Unit axis of shape ``(3,)``.

    Returns:
        jnp.ndarray: Rotation vector of shape ``(3,)``.
    """
    return angle * axis


def rotation_vector_to_quaternion(v: jax.Array) -> jax.Array:
    """Exponential map from a rotation vector to a unit quaternion."""
    angle, axis = rotation_vector_to_angle_axis(v)
    return angle_axis_to_quaternion(angle, axis)


def quaternion_to_rotation_vector(q: jax.Array) -> jax.Array:
    """Logarithmic map from a unit quaternion to a rotation vector with ``|v| <= pi``."""
    angle, axis = quaternion_to_angle_axis(q)
    return angle_axis_to_rotation_vector(angle, axis)


# ---------------------------------------------------------------------------
# Euler angles <-> Quaternion / Rotation Matrix
# ---------------------------------------------------------------------------

def euler_zyx_to_quaternion(zyx: jax.Array) -> jax.Array:
    """Convert ``[yaw, pitch, roll]`` to a quaternion.

    Closed form of ``q_z(yaw) * q_y(pitch) * q_x(roll)``.

    Args:
        zyx (jax.Array): Euler angles ``[yaw, pitch, roll]`` in radians.

    Returns:
        jnp.ndarray: Unit quaternion of shape ``(4,)`` in scalar-first order.
    """
    cy = jnp.cos(zyx[0] / 2.0)
    sy = jnp.sin(zyx[0] / 2.0)
    cp = jnp.cos(zyx[1] / 2.0)
    sp = jnp.sin(zyx[1] / 2.0)
    cr = jnp.cos(zyx[2] / 2.0)
    sr = jnp.sin(zyx[2] / 2.0)

    q = jnp.array([
        cy*cp*cr + sy*sp*sr,
        cy*cp*sr - sy*sp*cr,
        cy*sp*cr + sy*cp*sr,
        sy*cp*cr - cy*sp*sr,
    ])
    return q / jnp.linalg.norm(q)


def euler_xyz_to_quaternion(xyz: jax.Array) -> jax.Array:
    """Convert ``[roll, pitch, yaw]`` (X-Y'-Z'' order) to a quaternion.

    Closed form of ``q_x(roll) * q_y(pitch) * q_z(yaw)``.

    Args:
        xyz (jax.Array): Euler angles ``[roll, pitch, yaw]`` in radians.

    Returns:
        jnp.ndarray: Unit quaternion of shape ``(4,)`` in scalar-first order.
    """
    cr = jnp.cos(xyz[0] / 2.0)
    sr = jnp.sin(xyz[0] / 2.0)
    cp = jnp.cos(xyz[1] / 2.0)
    sp = jnp.sin(xyz[1] / 2.0)
    cy = jnp.cos(xyz[2] / 2.0)
    sy = jnp.sin(xyz[2] / 2.0)

    q = jnp.array([
        cr*cp*cy - sr*sp*sy,
        sr*cp*cy + cr*sp*sy,
        cr*sp*cy - sr*cp*sy,
        cr*cp*sy + sr*sp*cy,
    ])
    return q / jnp.linalg.norm(q)


def rotation_matrix_to_euler_zyx(C: jax.Array) -> jax.Array:
    """Extract ``[yaw, pitch, roll]`` directly from a rotation matrix.

    The formula reads the transposed (reference-to-body) matrix
    ``R = C^T``::

        yaw   = atan2(R[0, 1], R[0, 0])
        pitch = -asin(R[0, 2])
        roll  = atan2(R[1, 2], R[2, 2])

    It is singular at ``|R[0, 2]| = 1`` (pitch = +-pi/2).  No special
    case is made here; :func:`euler_zyx_unique` folds the redundant
    degree of freedom.  Conversions from every other type go through
    :func:`quaternion_to_euler_zyx`, which stays exact at the pole.

    Args:
        C (jax.Array): Active rotation matrix of shape ``(3, 3)``.

    Returns:
        jnp.ndarray: Array ``[yaw, pitch, roll]`` in radians.
    """
    R = C.T
    r11 = R[0, 0]
    r12 = R[0, 1]
    r13 = jnp.clip(R[0, 2], -1.0, 1.0)
    r23 = R[1, 2]
    r33 = R[2, 2]
    return jnp.array([jnp.arctan2(r12, r11), -jnp.arcsin(r13), jnp.arctan2(r23, r33)])


def quaternion_to_euler_zyx(q: jax.Array) -> jax.Array:
    """Convert a unit quaternion to ``[yaw, pitch, roll]``.

    Unlike :func:`rotation_matrix_to_euler_zyx`, roll is solved from the
    already extracted yaw, so the triple reproduces the rotation even at
    pitch = +-pi/2, where yaw alone is round-off::

        yaw   = atan2(C[1, 0], C[0, 0])
        pitch = atan2(-C[2, 0], hypot(C[0, 0], C[1, 0]))
        roll  = atan2(sy*C[0, 2] - cy*C[1, 2], cy*C[1, 1] - sy*C[0, 1])

    Args:
        q (jax.Array): Quaternion of shape ``(4,)`` in scalar-first order.

    Returns:
        jnp.ndarray: Array ``[yaw, pitch, roll]`` in radians.
    """
    C = quaternion_to_rotation_matrix(q)
    yaw = jnp.arctan2(C[1, 0], C[0, 0])
    pitch = jnp.arctan2(-C[2, 0], jnp.hypot(C[0, 0], C[1, 0]))
    sy = jnp.sin(yaw)
    cy = jnp.cos(yaw)
    roll = jnp.arctan2(sy * C[0, 2] - cy * C[1, 2], cy * C[1, 1] - sy * C[0, 1])
    return jnp.array([yaw, pitch, roll])


def rotation_matrix_to_euler_xyz(C: jax.Array) -> jax.Array:
    """Extract ``[roll, pitch, yaw]`` (X-Y'-Z'' order) from a rotation matrix.

    Yaw is solved from the extracted roll, which keeps the triple exact at
    pitch = +-pi/2::

        roll  = atan2(-C[1, 2], C[2, 2])
        pitch = atan2(C[0, 2], hypot(C[1, 2], C[2, 2]))
        yaw   = atan2(cr*C[1, 0] + sr*C[2, 0], cr*C[1, 1] + sr*C[2, 1])

    Args:
        C (jax.Array): Active rotation matrix of shape ``(3, 3)``.

    Returns:
        jnp.ndarray: Array ``[roll, pitch, yaw]`` in radians.
    """
    roll = jnp.arctan2(-C[1, 2], C[2, 2])
    pitch = jnp.arctan2(C[0, 2], jnp.hypot(C[1, 2], C[2, 2]))
    sr = jnp.sin(roll)
    cr = jnp.cos(roll)
    yaw = jnp.arctan2(cr * C[1, 0] + sr * C[2, 0], cr * C[1, 1] + sr * C[2, 1])
    return jnp.array([roll, pitch, yaw])


def quaternion_to_euler_xyz(q: jax.Array) -> jax.Array:
    """Convert a unit quaternion to ``[roll, pitch, yaw]`` (X-Y'-Z'' order)."""
    return rotation_matrix_to_euler_xyz(quaternion_to_rotation_matrix(q))


# ---------------------------------------------------------------------------
# Canonical forms
# ---------------------------------------------------------------------------

def _flip_by_pi(angle: jax.Array) -> jax.Array:
    # Re-wrap so that e.g. -1e-20 + pi cannot land on +pi
    return wrap_pos_neg_pi(jnp.where(angle < 0.0, angle + _PI, angle - _PI))


def euler_zyx_unique(zyx: jax.Array) -> jax.Array:
    """Map ``[yaw, pitch, roll]`` to its canonical representative.

    Every angle is first wrapped into ``[-pi, pi)``.  The wrapped pitch
    then selects one of five regions, with ``tol = GIMBAL_LOCK_TOLERANCE``:

    - ``pitch < -pi/2 - tol``: reflect through the pole,
      ``(yaw +- pi, -(pitch + pi), roll +- pi)``.
    - ``-pi/2 - tol <= pitch <= -pi/2 + tol``: gimbal lock, only
      ``yaw + roll`` is observable; fold it into yaw and zero the roll.
    - ``-pi/2 + tol < pitch < pi/2 - tol``: unchanged.
    - ``pi/2 - tol <= pitch <= pi/2 + tol``: gimbal lock, only
      ``yaw - roll`` is observable; fold it into yaw and zero the roll.
    - ``pitch > pi/2 + tol``: reflect, ``(yaw +- pi, -(pitch - pi), roll +- pi)``.

    A folded yaw is wrapped back into ``[-pi, pi)``.

    Args:
        zyx (jax.Array): Euler angles ``[yaw, pitch, roll]`` in radians.

    Returns:
        jnp.ndarray: Canonical ``[yaw, pitch, roll]``.
    """
    tol = GIMBAL_LOCK_TOLERANCE
    yaw = wrap_pos_neg_pi(zyx[0])
    pitch = wrap_pos_neg_pi(zyx[1])
    roll = wrap_pos_neg_pi(zyx[2])

    below = pitch < -_HALF_PI - tol
    lower_lock = (-_HALF_PI - tol <= pitch) & (pitch <= -_HALF_PI + tol)
    regular = (-_HALF_PI + tol < pitch) & (pitch < _HALF_PI - tol)
    upper_lock = (_HALF_PI - tol <= pitch) & (pitch <= _HALF_PI + tol)
    # Anything else lies above the upper band
    conditions = [below, lower_lock, regular, upper_lock]

    yaw_out = jnp.select(
        conditions,
        [_flip_by_pi(yaw), wrap_pos_neg_pi(yaw + roll), yaw, wrap_pos_neg_pi(yaw - roll)],
        _flip_by_pi(yaw),
    )
    pitch_out = jnp.select(
        conditions,
        [-(pitch + _PI), pitch, pitch, pitch],
        -(pitch - _PI),
    )
    roll_out = jnp.select(
        conditions,
        [_flip_by_pi(roll), jnp.zeros_like(roll), roll, jnp.zeros_like(roll)],
        _flip_by_pi(roll),
    )
    return jnp.array([yaw_out, pitch_out, roll_out])


def euler_xyz_unique(xyz: jax.Array) -> jax.Array:
    """Map ``[roll, pitch, yaw]`` to angles in ``[-pi, pi) x [-pi/2, pi/2] x [-pi, pi)``.

    Args:
        xyz (jax.Array): Euler angles ``[roll, pitch, yaw]`` in radians.

    Returns:
        jnp.ndarray: Canonical ``[roll, pitch, yaw]``.
    """
    roll = wrap_pos_neg_pi(xyz[0])
    pitch = wrap_pos_neg_pi(xyz[1])
    yaw = wrap_pos_neg_pi(xyz[2])

    below = pitch < -_HALF_PI
    above = pitch > _HALF_PI
    flip = below | above

    return jnp.array([
        jnp.where(flip, _flip_by_pi(roll), roll),
        jnp.where(below, -(pitch + _PI), jnp.where(above, -(pitch - _PI), pitch)),
        jnp.where(flip, _flip_by_pi(yaw), yaw),
    ])


def quaternion_unique(q: jax.Array) -> jax.Array:
    """Return the sign of ``q`` with a non-negative scalar part."""
    return jnp.where(q[0] < 0.0, -q, q)


# ---------------------------------------------------------------------------
# Quaternion algebra
# ---------------------------------------------------------------------------

def quaternion_multiply(q1: jax.Array, q2: jax.Array) -> jax.Array:
    """Hamilton product ``q1 * q2``, returned with unit norm.

    ``C(q1 * q2) == C(q1) @ C(q2)``: ``q2`` acts first.
    """
    w1, u1 = q1[0], q1[1:]
    w2, u2 = q2[0], q2[1:]
    q = jnp.concatenate([
        jnp.array([w1 * w2 - jnp.dot(u1, u2)]),
        w1 * u2 + w2 * u1 + jnp.cross(u1, u2),
    ])
    return q / jnp.linalg.norm(q)


def quaternion_conjugate(q: jax.Array) -> jax.Array:
    """Return ``[w, -x, -y, -z]``."""
    return jnp.array([q[0], -q[1], -q[2], -q[3]])


def quaternion_disparity_angle(q1: jax.Array, q2: jax.Array) -> jax.Array:
    """Angle of the relative rotation ``q1^-1 * q2``, in ``[0, pi]``.

    Insensitive to the sign of either quaternion.

    Args:
        q1 (jax.Array): First unit quaternion of shape ``(4,)``.
        q2 (jax.Array): Second unit quaternion of shape ``(4,)``.

    Returns:
        jax.Array: Scalar angle in radians.
    """
    p = quaternion_multiply(quaternion_conjugate(q1), q2)
    return 2.0 * jnp.arctan2(jnp.linalg.norm(p[1:]), jnp.abs(p[0]))


def quaternion_slerp(q1: jax.Array, q2: jax.Array, t: float | jax.Array) -> jax.Array:
    """Spherical linear interpolation from ``q1`` (``t = 0``) to ``q2`` (``t = 1``).

    ``q2`` is negated when needed so the shorter arc is taken.  Nearly
    parallel inputs (cosine above 0.9995) are blended linearly and
    renormalized.

    Args:
        q1 (jax.Array): Start quaternion of shape ``(4,)``.
        q2 (jax.Array): End quaternion of shape ``(4,)``.
        t (float | jax.Array): Interpolation parameter in ``[0, 1]``.

    Returns:
        jnp.ndarray: Unit quaternion of shape ``(4,)``.
    """
    cos_theta = jnp.dot(q1, q2)
    q2 = jnp.where(cos_theta < 0.0, -q2, q2)
    cos_theta = jnp.abs(cos_theta)

    theta = jnp.arccos(jnp.clip(cos_theta, -1.0, 1.0))
    linear = cos_theta > 0.9995
    sin_theta = jnp.where(linear, 1.0, jnp.sin(theta))
    a = jnp.where(linear, 1.0 - t, jnp.sin((1.0 - t) * theta) / sin_theta)
    b = jnp.where(linear, t, jnp.sin(t * theta) / sin_theta)

    q = a * q1 + b * q2
    return q / jnp.linalg.norm(q)
