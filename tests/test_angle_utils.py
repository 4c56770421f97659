"""Tests for the scalar angle helpers."""

import math

import jax
import jax.numpy as jnp
import pytest

from rotax import GIMBAL_LOCK_TOLERANCE
from rotax.rotations.conversions import euler_zyx_unique
from rotax.utils import (
    floating_point_modulo,
    from_radians,
    to_radians,
    wrap_pos_neg_pi,
    wrap_zero_two_pi,
)

PI = math.pi
HALF_PI = PI / 2
ATOL = 1e-12


class TestFloatingPointModulo:
    def test_positive(self):
        assert float(floating_point_modulo(7.0, 3.0)) == pytest.approx(1.0, abs=ATOL)

    def test_negative_dividend(self):
        assert float(floating_point_modulo(-1.0, 3.0)) == pytest.approx(2.0, abs=ATOL)

    def test_negative_divisor(self):
        assert float(floating_point_modulo(1.0, -3.0)) == pytest.approx(-2.0, abs=ATOL)

    def test_zero_divisor_returns_dividend(self):
        assert float(floating_point_modulo(5.0, 0.0)) == 5.0

    def test_cutoff_at_upper_end(self):
        # -1e-16 mod 360 rounds to 360.0, which must come back as 0
        assert float(floating_point_modulo(-1e-16, 360.0)) == 0.0

    def test_result_in_range(self):
        xs = jnp.linspace(-50.0, 50.0, 1001)
        m = floating_point_modulo(xs, 2.0 * PI)
        assert bool(jnp.all(m >= 0.0))
        assert bool(jnp.all(m < 2.0 * PI))

    def test_vectorized(self):
        m = floating_point_modulo(jnp.array([4.0, -4.0]), 3.0)
        assert float(m[0]) == pytest.approx(1.0, abs=ATOL)
        assert float(m[1]) == pytest.approx(2.0, abs=ATOL)

    def test_integer_input(self):
        m = floating_point_modulo(jnp.array(7), 2.5)
        assert float(m) == pytest.approx(2.0, abs=ATOL)

    def test_jit(self):
        m = jax.jit(floating_point_modulo)(7.5, 2.0)
        assert float(m) == pytest.approx(1.5, abs=ATOL)


class TestWrapPosNegPi:
    def test_in_range_unchanged(self):
        for angle in (0.1, -0.1, 3.0, -PI, PI - 1e-9):
            assert float(wrap_pos_neg_pi(angle)) == angle

    def test_pi_maps_to_minus_pi(self):
        assert float(wrap_pos_neg_pi(PI)) == pytest.approx(-PI, abs=ATOL)

    def test_three_half_pi(self):
        assert float(wrap_pos_neg_pi(1.5 * PI)) == pytest.approx(-0.5 * PI, abs=ATOL)

    def test_multiple_turns(self):
        assert float(wrap_pos_neg_pi(0.3 + 6.0 * PI)) == pytest.approx(0.3, abs=1e-9)
        assert float(wrap_pos_neg_pi(0.3 - 6.0 * PI)) == pytest.approx(0.3, abs=1e-9)

    def test_idempotent(self):
        xs = jnp.linspace(-20.0, 20.0, 2001)
        once = wrap_pos_neg_pi(xs)
        twice = wrap_pos_neg_pi(once)
        assert bool(jnp.array_equal(once, twice))

    def test_band_edge_kept_exactly(self):
        # The mod round-trip shifts pi/2 - 1e-3 by a couple of ulps; both
        # values still fall in the same gimbal-lock branch.
        edge = HALF_PI - GIMBAL_LOCK_TOLERANCE
        via_mod = float(floating_point_modulo(edge + PI, 2.0 * PI) - PI)
        assert float(wrap_pos_neg_pi(edge)) == edge
        assert via_mod == pytest.approx(edge, abs=1e-15)
        for pitch in (edge, via_mod):
            u = euler_zyx_unique(jnp.array([0.3, pitch, 0.2]))
            assert float(u[2]) == 0.0
            assert float(u[0]) == pytest.approx(0.1, abs=ATOL)

    def test_range(self):
        xs = jnp.linspace(-20.0, 20.0, 2001)
        w = wrap_pos_neg_pi(xs)
        assert bool(jnp.all(w >= -PI))
        assert bool(jnp.all(w < PI))


class TestWrapZeroTwoPi:
    def test_negative(self):
        assert float(wrap_zero_two_pi(-0.5)) == pytest.approx(2.0 * PI - 0.5, abs=ATOL)

    def test_two_pi_maps_to_zero(self):
        assert float(wrap_zero_two_pi(2.0 * PI)) == pytest.approx(0.0, abs=ATOL)


class TestDegrees:
    def test_to_radians(self):
        assert float(to_radians(180.0, True)) == pytest.approx(PI, abs=ATOL)
        assert float(to_radians(1.0, False)) == 1.0

    def test_from_radians(self):
        assert float(from_radians(PI, True)) == pytest.approx(180.0, abs=1e-10)
        assert float(from_radians(1.0, False)) == 1.0
