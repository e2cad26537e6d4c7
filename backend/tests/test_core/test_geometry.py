"""Tests for the shared geometry formulas."""

import numpy as np
import pytest

from mandala.core.geometry import (
    POSITION_OFFSET,
    arc_length,
    divider_angle,
    fold_angle,
    ratio_radius,
    scaled_geometry,
    scaled_sizes,
    sub_band_radius,
    to_canvas_angle,
    to_cartesian,
    to_cartesian_many,
    to_outward_rotation,
    to_radial_rotation,
)
from mandala.core.positioning import wheel_position
from mandala.models.ring import RingGeometry

RING = RingGeometry(center=(0.0, 0.0), inner_radius=300.0, outer_radius=400.0)


def test_to_cartesian_axes():
    assert to_cartesian(0, 10, (0, 0)) == pytest.approx((10, 0))
    # y grows downward
    assert to_cartesian(90, 10, (0, 0)) == pytest.approx((0, 10))
    assert to_cartesian(-90, 10, (5, 5)) == pytest.approx((5, -5))


def test_to_cartesian_many_matches_scalar():
    angles = np.array([0.0, 45.0, 200.0])
    pts = to_cartesian_many(angles, 7.5, (1, 2))
    for a, row in zip(angles, pts):
        assert tuple(row) == pytest.approx(to_cartesian(a, 7.5, (1, 2)))


def test_divider_between_10_and_11_at_top(clockwise):
    a = to_canvas_angle(wheel_position(10, clockwise).angle_degrees)
    b = to_canvas_angle(wheel_position(11, clockwise).angle_degrees)
    assert (a + b) / 2 == pytest.approx(-90.0)


def test_canvas_angle_uses_offset():
    assert to_canvas_angle(0.0, 0.0) == -90.0
    assert to_canvas_angle(90.0, 0.0) == -180.0
    assert to_canvas_angle(0.0) == pytest.approx(-90.0 + POSITION_OFFSET)


def test_outward_rotation():
    assert to_outward_rotation(-90.0) == 0.0
    assert to_outward_rotation(0.0) == 90.0


@pytest.mark.parametrize("canvas", np.arange(-180.0, 540.0, 7.5))
def test_radial_rotation_stays_upright(canvas):
    rotation = to_radial_rotation(canvas)
    assert -90.0 <= rotation <= 90.0
    # still along the radius
    assert (rotation - canvas) % 180.0 == pytest.approx(0.0, abs=1e-9) or (
        (rotation - canvas) % 180.0 == pytest.approx(180.0, abs=1e-9)
    )


def test_fold_angle():
    assert fold_angle(190.0) == -170.0
    assert fold_angle(-180.0) == 180.0
    assert fold_angle(540.0) == 180.0


def test_divider_angle():
    assert divider_angle(10.0, 20.0) == 15.0
    assert divider_angle(355.0, 5.0) == pytest.approx(0.0)
    assert divider_angle(5.0, 355.0) == pytest.approx(0.0)
    assert divider_angle(350.0, 356.0) == 353.0


def test_sub_band_radius():
    assert sub_band_radius(RING, 0, 1) == 350.0
    assert sub_band_radius(RING, 0, 2) == 375.0
    assert sub_band_radius(RING, 1, 2) == 325.0
    with pytest.raises(ValueError):
        sub_band_radius(RING, 2, 2)


def test_ratio_radius():
    assert ratio_radius(RING, 0.25) == 325.0
    assert ratio_radius(RING, -0.1, "outer") == 390.0
    assert ratio_radius(RING, 0.0, "mid") == 350.0


def test_scaled_geometry_keeps_proportions():
    scaled = scaled_geometry(RING, 0.5, center=(100, 100))
    assert scaled.inner_radius == 150.0
    assert scaled.band_width == 50.0
    assert scaled.center == (100, 100)
    with pytest.raises(ValueError):
        scaled_geometry(RING, 0)


def test_scaled_sizes():
    assert scaled_sizes(RING, {"font": 0.25}) == {"font": 25.0}


def test_arc_length():
    assert arc_length(100.0, 180.0) == pytest.approx(np.pi * 100)
    assert arc_length(100.0, -5.625) == arc_length(100.0, 5.625)


def test_ring_geometry_rejects_inverted_band():
    with pytest.raises(ValueError):
        RingGeometry(center=(0, 0), inner_radius=400, outer_radius=300)
