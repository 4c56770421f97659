"""Unit tests for the Euler angle classes and their canonical forms."""

import math

import jax
import jax.numpy as jnp
import pytest

from rotax import (
    GIMBAL_LOCK_TOLERANCE,
    AngleAxis,
    EulerAnglesRpy,
    EulerAnglesXyz,
    EulerAnglesYpr,
    EulerAnglesZyx,
    Quaternion,
    RotationMatrix,
    RotationVector,
    Rx,
    Ry,
    Rz,
)
from rotax.rotations.conversions import euler_zyx_unique
from rotax.utils import wrap_pos_neg_pi

PI = math.pi
HALF_PI = PI / 2
TOL = GIMBAL_LOCK_TOLERANCE
ATOL = 1e-12


def _random_angles(seed, n=200, low=-10.0, high=10.0):
    key = jax.random.PRNGKey(seed)
    return jax.random.uniform(key, (n, 3), minval=low, maxval=high, dtype=jnp.float64)


# ===========================================================================
# EulerAnglesZyx
# ===========================================================================


class TestEulerAnglesZyx:
    def test_default_is_identity(self):
        e = EulerAnglesZyx()
        assert jnp.array_equal(e.to_vector(), jnp.zeros(3))
        assert e.to_quaternion().equivalent_to(Quaternion())

    def test_accessors_and_aliases(self):
        e = EulerAnglesZyx(0.1, 0.2, 0.3)
        assert float(e.yaw) == 0.1
        assert float(e.pitch) == 0.2
        assert float(e.roll) == 0.3
        assert float(e.z) == 0.1
        assert float(e.y) == 0.2
        assert float(e.x) == 0.3

    def test_setters(self):
        e = EulerAnglesZyx()
        e.yaw = 0.4
        e.y = -0.2
        e.roll = 1.0
        assert jnp.allclose(e.to_vector(), jnp.array([0.4, -0.2, 1.0]), atol=0.0)

    def test_degrees(self):
        e = EulerAnglesZyx(90.0, 0.0, -45.0, use_degrees=True)
        assert float(e.yaw) == pytest.approx(HALF_PI, abs=ATOL)
        assert float(e.roll) == pytest.approx(-PI / 4, abs=ATOL)
        assert jnp.allclose(e.to_vector(use_degrees=True), jnp.array([90.0, 0.0, -45.0]), atol=1e-10)

    def test_from_vector(self):
        e = EulerAnglesZyx.from_vector(jnp.array([0.1, 0.2, 0.3]))
        assert jnp.allclose(e.to_vector(), jnp.array([0.1, 0.2, 0.3]), atol=0.0)

    def test_ypr_alias(self):
        assert EulerAnglesYpr is EulerAnglesZyx

    def test_matrix_matches_elementary_product(self):
        e = EulerAnglesZyx(0.3, 0.2, 0.1)
        expected = Rz(0.3) @ Ry(0.2) @ Rx(0.1)
        assert jnp.allclose(e.to_rotation_matrix().to_matrix(), expected, atol=ATOL)

    def test_yaw_rotates_x_to_y(self):
        e = EulerAnglesZyx(HALF_PI, 0.0, 0.0)
        assert jnp.allclose(e.rotate(jnp.array([1.0, 0.0, 0.0])), jnp.array([0.0, 1.0, 0.0]), atol=ATOL)

    def test_quaternion_closed_form(self):
        e = EulerAnglesZyx(0.7, -0.4, 1.9)
        qz = Quaternion.from_rotation(AngleAxis(0.7, jnp.array([0.0, 0.0, 1.0])))
        qy = Quaternion.from_rotation(AngleAxis(-0.4, jnp.array([0.0, 1.0, 0.0])))
        qx = Quaternion.from_rotation(AngleAxis(1.9, jnp.array([1.0, 0.0, 0.0])))
        assert e.to_quaternion().equivalent_to(qz * qy * qx, tol=1e-10)

    def test_matrix_roundtrip_recovers_angles(self):
        e = EulerAnglesZyx(2.5, -1.2, -3.0)
        e2 = EulerAnglesZyx.from_rotation(e.to_rotation_matrix())
        assert jnp.allclose(e2.to_vector(), e.to_vector(), atol=1e-10)

    def test_quaternion_roundtrip_recovers_angles(self):
        e = EulerAnglesZyx(-0.6, 0.9, 0.25)
        e2 = EulerAnglesZyx.from_rotation(e.to_quaternion())
        assert jnp.allclose(e2.to_vector(), e.to_vector(), atol=1e-10)

    def test_extraction_near_gimbal_lock(self):
        e = EulerAnglesZyx(0.3, HALF_PI - 0.01, -0.2)
        e2 = EulerAnglesZyx.from_rotation(e.to_rotation_matrix())
        assert e2.equivalent_to(e, tol=1e-9)

    def test_direct_matrix_extraction_at_gimbal_lock_is_finite(self):
        e = EulerAnglesZyx(0.3, HALF_PI, 0.0)
        e2 = EulerAnglesZyx.from_rotation(e.to_rotation_matrix())
        assert bool(jnp.all(jnp.isfinite(e2.to_vector())))
        assert float(e2.pitch) == pytest.approx(HALF_PI, abs=1e-7)

    @pytest.mark.parametrize("pitch", [HALF_PI, -HALF_PI])
    @pytest.mark.parametrize("via", [Quaternion, AngleAxis, RotationVector, EulerAnglesXyz])
    def test_hub_extraction_at_gimbal_lock_preserves_rotation(self, via, pitch):
        e = EulerAnglesZyx(0.3, pitch, 0.2)
        e2 = EulerAnglesZyx.from_rotation(via.from_rotation(e))
        assert float(e2.pitch) == pytest.approx(pitch, abs=1e-7)
        assert e2.equivalent_to(e, tol=1e-9)

    @pytest.mark.parametrize("pitch", [HALF_PI, -HALF_PI])
    def test_gimbal_lock_keeps_observable_combination(self, pitch):
        # At +pi/2 only yaw - roll is determined, at -pi/2 only yaw + roll
        e = EulerAnglesZyx(0.3, pitch, 0.2)
        u = EulerAnglesZyx.from_rotation(e.to_quaternion()).get_unique()
        expected = 0.1 if pitch > 0.0 else 0.5
        assert float(u.yaw) == pytest.approx(expected, abs=1e-9)
        assert float(u.roll) == 0.0

    def test_equality_ignores_full_turns(self):
        a = EulerAnglesZyx(0.1, 0.2, 0.3)
        b = EulerAnglesZyx(0.1 + 2.0 * PI, 0.2, 0.3 - 2.0 * PI)
        assert a == b
        assert not (a != b)
        assert a != EulerAnglesZyx(0.1, 0.2, 0.31)

    def test_repr(self):
        assert repr(EulerAnglesZyx()) == "EulerAnglesZyx(yaw=0.0, pitch=0.0, roll=0.0)"

    def test_str(self):
        assert str(EulerAnglesZyx(1.0, 2.0, 3.0)) == "1.0 2.0 3.0"


# ===========================================================================
# EulerAnglesZyx canonical form
# ===========================================================================


class TestEulerAnglesZyxUnique:
    def test_regular_region_unchanged(self):
        e = EulerAnglesZyx(0.1, 0.2, 0.3)
        assert jnp.array_equal(e.get_unique().to_vector(), e.to_vector())

    def test_wraps_full_turns(self):
        u = EulerAnglesZyx(0.1 + 2.0 * PI, 0.2, -0.1 - 2.0 * PI).get_unique()
        assert jnp.allclose(u.to_vector(), jnp.array([0.1, 0.2, -0.1]), atol=1e-12)

    def test_upper_gimbal_lock_folds_roll_into_yaw(self):
        u = EulerAnglesZyx(1.0, HALF_PI, 0.3).get_unique()
        assert float(u.yaw) == pytest.approx(0.7, abs=1e-15)
        assert float(u.pitch) == HALF_PI
        assert float(u.roll) == 0.0

    def test_lower_gimbal_lock_folds_roll_into_yaw(self):
        u = EulerAnglesZyx(1.0, -HALF_PI, 0.3).get_unique()
        assert float(u.yaw) == pytest.approx(1.3, abs=1e-15)
        assert float(u.pitch) == -HALF_PI
        assert float(u.roll) == 0.0

    def test_fold_preserves_rotation_at_pole(self):
        for pitch in (HALF_PI, -HALF_PI):
            e = EulerAnglesZyx(1.0, pitch, 0.3)
            assert e.get_unique().equivalent_to(e, tol=1e-9)

    def test_folded_yaw_is_wrapped(self):
        u = EulerAnglesZyx(3.0, -HALF_PI, 1.0).get_unique()
        assert float(u.yaw) == pytest.approx(4.0 - 2.0 * PI, abs=1e-12)
        assert float(u.roll) == 0.0

    def test_band_edges_are_inclusive(self):
        for pitch in (-HALF_PI - TOL, -HALF_PI + TOL, HALF_PI - TOL, HALF_PI + TOL):
            u = EulerAnglesZyx(0.2, pitch, 0.1).get_unique()
            assert float(u.roll) == 0.0
            assert float(u.pitch) == pitch

    def test_lower_reflection(self):
        e = EulerAnglesZyx(0.2, -HALF_PI - 0.01, 0.1)
        u = e.get_unique()
        assert float(u.yaw) == pytest.approx(0.2 - PI, abs=ATOL)
        assert float(u.pitch) == pytest.approx(-HALF_PI + 0.01, abs=ATOL)
        assert float(u.roll) == pytest.approx(0.1 - PI, abs=ATOL)
        assert jnp.allclose(
            u.to_rotation_matrix().to_matrix(), e.to_rotation_matrix().to_matrix(), atol=1e-10
        )

    def test_upper_reflection(self):
        e = EulerAnglesZyx(-0.5, HALF_PI + 0.2, -0.4)
        u = e.get_unique()
        assert float(u.yaw) == pytest.approx(-0.5 + PI, abs=ATOL)
        assert float(u.pitch) == pytest.approx(HALF_PI - 0.2, abs=ATOL)
        assert float(u.roll) == pytest.approx(-0.4 + PI, abs=ATOL)
        assert u.equivalent_to(e, tol=1e-10)

    def test_ranges(self):
        angles = _random_angles(0)
        out = jax.vmap(euler_zyx_unique)(angles)
        yaw, pitch, roll = out[:, 0], out[:, 1], out[:, 2]
        assert bool(jnp.all((yaw >= -PI) & (yaw < PI)))
        assert bool(jnp.all((roll >= -PI) & (roll < PI)))
        assert bool(jnp.all((pitch >= -HALF_PI - TOL) & (pitch <= HALF_PI + TOL)))

    def test_idempotent(self):
        angles = _random_angles(1)
        once = jax.vmap(euler_zyx_unique)(angles)
        twice = jax.vmap(euler_zyx_unique)(once)
        assert jnp.array_equal(once, twice)

    def test_idempotent_in_bands(self):
        for pitch in (HALF_PI, -HALF_PI, HALF_PI + 0.5 * TOL, -HALF_PI - TOL):
            u = EulerAnglesZyx(2.9, pitch, 1.3).get_unique()
            assert jnp.array_equal(u.get_unique().to_vector(), u.to_vector())

    def test_preserves_rotation(self):
        angles = _random_angles(2)
        for row in angles[:50]:
            # Folding inside a gimbal-lock band changes the rotation slightly
            pitch = float(wrap_pos_neg_pi(row[1]))
            if abs(abs(pitch) - HALF_PI) <= 2.0 * TOL:
                continue
            e = EulerAnglesZyx.from_vector(row)
            assert e.get_unique().equivalent_to(e, tol=1e-9)

    def test_continuity_across_band_edge(self):
        eps = 1e-6
        inside = EulerAnglesZyx(0.2, -HALF_PI - TOL + eps, 0.1)
        outside = EulerAnglesZyx(0.2, -HALF_PI - TOL - eps, 0.1)
        u_in = inside.get_unique()
        u_out = outside.get_unique()
        assert u_in.equivalent_to(inside, tol=1e-3)
        assert u_out.equivalent_to(outside, tol=1e-9)
        assert u_in.equivalent_to(u_out, tol=1e-3)

    def test_set_unique_in_place(self):
        e = EulerAnglesZyx(1.0, HALF_PI, 0.3)
        assert e.set_unique() is e
        assert float(e.roll) == 0.0

    def test_jit(self):
        @jax.jit
        def unique(e):
            return e.get_unique()

        u = unique(EulerAnglesZyx(1.0, HALF_PI, 0.3))
        assert isinstance(u, EulerAnglesZyx)
        assert float(u.yaw) == pytest.approx(0.7, abs=1e-15)
        assert float(u.roll) == 0.0


# ===========================================================================
# EulerAnglesXyz
# ===========================================================================


class TestEulerAnglesXyz:
    def test_default_is_identity(self):
        assert EulerAnglesXyz().to_rotation_matrix().equivalent_to(RotationMatrix())

    def test_accessors_and_aliases(self):
        e = EulerAnglesXyz(0.1, 0.2, 0.3)
        assert float(e.roll) == 0.1
        assert float(e.pitch) == 0.2
        assert float(e.yaw) == 0.3
        assert float(e.x) == 0.1
        assert float(e.z) == 0.3

    def test_rpy_alias(self):
        assert EulerAnglesRpy is EulerAnglesXyz

    def test_matrix_matches_elementary_product(self):
        e = EulerAnglesXyz(0.1, 0.2, 0.3)
        expected = Rx(0.1) @ Ry(0.2) @ Rz(0.3)
        assert jnp.allclose(e.to_rotation_matrix().to_matrix(), expected, atol=ATOL)

    def test_matrix_roundtrip_recovers_angles(self):
        e = EulerAnglesXyz(-2.0, 0.7, 1.4)
        e2 = EulerAnglesXyz.from_rotation(e.to_rotation_matrix())
        assert jnp.allclose(e2.to_vector(), e.to_vector(), atol=1e-10)

    @pytest.mark.parametrize("pitch", [HALF_PI, -HALF_PI])
    @pytest.mark.parametrize("via", [Quaternion, RotationMatrix, AngleAxis, EulerAnglesZyx])
    def test_extraction_at_gimbal_lock_preserves_rotation(self, via, pitch):
        e = EulerAnglesXyz(0.3, pitch, 0.2)
        e2 = EulerAnglesXyz.from_rotation(via.from_rotation(e))
        assert float(e2.pitch) == pytest.approx(pitch, abs=1e-7)
        assert e2.equivalent_to(e, tol=1e-9)

    def test_from_zyx(self):
        zyx = EulerAnglesZyx(0.5, -0.3, 0.8)
        xyz = EulerAnglesXyz.from_rotation(zyx)
        assert xyz.equivalent_to(zyx, tol=1e-10)

    def test_get_unique_regular(self):
        e = EulerAnglesXyz(0.1, 0.2, 0.3)
        assert jnp.array_equal(e.get_unique().to_vector(), e.to_vector())

    def test_get_unique_reflects(self):
        e = EulerAnglesXyz(0.1, HALF_PI + 0.2, 0.3)
        u = e.get_unique()
        assert float(u.roll) == pytest.approx(0.1 - PI, abs=ATOL)
        assert float(u.pitch) == pytest.approx(HALF_PI - 0.2, abs=ATOL)
        assert float(u.yaw) == pytest.approx(0.3 - PI, abs=ATOL)
        assert u.equivalent_to(e, tol=1e-10)

    def test_get_unique_ranges_and_idempotence(self):
        for row in _random_angles(3, n=50):
            u = EulerAnglesXyz.from_vector(row).get_unique()
            v = u.to_vector()
            assert -PI <= float(v[0]) < PI
            assert -HALF_PI <= float(v[1]) <= HALF_PI
            assert -PI <= float(v[2]) < PI
            assert jnp.array_equal(u.get_unique().to_vector(), v)

    def test_repr(self):
        assert repr(EulerAnglesXyz()) == "EulerAnglesXyz(roll=0.0, pitch=0.0, yaw=0.0)"
