"""Tests for blob_tracking.mapper."""
from __future__ import annotations

import math

import pytest

from blob_tracking.config import MappingConfig
from blob_tracking.helpers import SmoothedState
from blob_tracking.mapper import PositionMapper

CFG = MappingConfig()  # Y (0, 1.5, 5), areas (9, 40, 100) x 1000, bounds (5, 5)
SURFACE_PX = 40 * 1000


def _state(x=0.5, y=0.5, size=SURFACE_PX) -> SmoothedState:
    d2 = (x - 0.5) ** 2 + (y - 0.5) ** 2
    return SmoothedState(position=(x, y), size=size, distance_to_center_sq=d2)


@pytest.fixture
def mapper() -> PositionMapper:
    return PositionMapper(CFG)


# --- Y mapping ----------------------------------------------------------------

class TestHeight:
    def test_continuous_across_surface_breakpoint(self, mapper):
        _, below, _ = mapper.map(_state(size=SURFACE_PX))
        _, above, _ = mapper.map(_state(size=SURFACE_PX + 1))
        assert below == pytest.approx(CFG.surface_y, abs=1e-3)
        assert above == pytest.approx(CFG.surface_y, abs=1e-3)

    def test_off_center_jump_at_surface_is_bounded(self, mapper):
        below_state = _state(x=1.0, size=SURFACE_PX)
        above_state = _state(x=1.0, size=SURFACE_PX + 1)
        bound = below_state.distance_to_center_sq * CFG.y_offset_compensation
        _, below, _ = mapper.map(below_state)
        _, above, _ = mapper.map(above_state)
        assert abs(below - CFG.surface_y) <= bound + 1e-9
        assert abs(above - CFG.surface_y) <= bound + 1e-3
        # Correction is added below the surface and subtracted above it
        assert below > CFG.surface_y > above

    def test_small_area_maps_to_max_y(self, mapper):
        assert mapper.map(_state(size=9 * 1000))[1] == pytest.approx(CFG.max_y)
        assert mapper.map(_state(size=10))[1] == pytest.approx(CFG.max_y)

    def test_large_area_maps_to_min_y(self, mapper):
        assert mapper.map(_state(size=100 * 1000))[1] == pytest.approx(CFG.min_y)
        assert mapper.map(_state(size=10 ** 7))[1] == pytest.approx(CFG.min_y)

    def test_sqrt_interpolation_below_surface(self, mapper):
        # Halfway between sqrt(9000) and sqrt(40000)
        root = (math.sqrt(9000) + math.sqrt(40000)) / 2
        y = mapper.map(_state(size=root ** 2))[1]
        assert y == pytest.approx((CFG.max_y + CFG.surface_y) / 2, abs=1e-3)

    def test_height_is_monotonic_in_area(self, mapper):
        ys = [mapper.map(_state(size=s))[1] for s in range(0, 120_000, 2_500)]
        assert all(a >= b for a, b in zip(ys, ys[1:]))

    def test_off_center_compensation_sign(self, mapper):
        far_center = mapper.map(_state(size=20_000))[1]
        far_edge = mapper.map(_state(x=1.0, size=20_000))[1]
        near_center = mapper.map(_state(size=70_000))[1]
        near_edge = mapper.map(_state(x=1.0, size=70_000))[1]
        assert far_edge == pytest.approx(far_center + 0.25 * CFG.y_offset_compensation)
        assert near_edge == pytest.approx(near_center - 0.25 * CFG.y_offset_compensation)


# --- X/Z mapping --------------------------------------------------------------

class TestLateral:
    def test_center_maps_to_origin(self, mapper):
        x, _, z = mapper.map(_state())
        assert x == pytest.approx(0.0)
        assert z == pytest.approx(0.0)

    def test_x_is_mirrored(self, mapper):
        assert mapper.map(_state(x=0.0))[0] == pytest.approx(5.0)
        assert mapper.map(_state(x=1.0))[0] == pytest.approx(-5.0)

    def test_z_follows_image_y(self, mapper):
        assert mapper.map(_state(y=0.0))[2] == pytest.approx(-5.0)
        assert mapper.map(_state(y=1.0))[2] == pytest.approx(5.0)

    def test_far_blob_is_spread_wider(self, mapper):
        # At the surface the lateral fraction is 0: plain linear map
        at_surface = mapper.map(_state(x=0.25, size=SURFACE_PX))[0]
        far = mapper.map(_state(x=0.25, size=9_000))[0]
        assert at_surface == pytest.approx(2.5)
        assert far == pytest.approx(5.0 - 10.0 * (0.5 - 0.25 * (1 + 0.4 * 0.3)))
        assert far > at_surface

    def test_output_stays_in_bounds(self, mapper):
        for px in (0.0, 0.02, 0.5, 0.98, 1.0):
            for size in (0, 9_000, 40_001, 100_000):
                x, _, z = mapper.map(_state(x=px, y=px, size=size))
                assert -5.0 <= x <= 5.0
                assert -5.0 <= z <= 5.0


# --- approach -----------------------------------------------------------------

class TestApproach:
    def test_partial_step(self, mapper):
        out = mapper.approach((0.0, 0.0, 0.0), (2.0, 4.0, -6.0), 0.1)  # speed 5 → t 0.5
        assert out == pytest.approx((1.0, 2.0, -3.0))

    def test_large_dt_does_not_overshoot(self, mapper):
        out = mapper.approach((0.0, 0.0, 0.0), (2.0, 4.0, -6.0), 10.0)
        assert out == pytest.approx((2.0, 4.0, -6.0))

    def test_zero_dt_holds(self, mapper):
        assert mapper.approach((1.0, 1.0, 1.0), (9.0, 9.0, 9.0), 0.0) == (1.0, 1.0, 1.0)
