#!/usr/bin/env python3
"""
Test contour normalization, mirroring and rib detection.
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest

from argo_samples import RECT_40x80, RIGHT_CANTILEVER, T_BEAM, shifted
from src.model_building.contour import (
    apply_changed_points,
    clean_contour,
    find_rib_bottom_corners,
    find_rib_top,
    find_rib_top_at_axis,
    is_profile_point,
    need_mirror,
    normalize_beam_geometry,
    to_target_units,
)
from src.parsing.argo_models import Beam, Point2D
from src.utilities.errors import DegenerateGeometryError


def _beam(contour, **kw) -> Beam:
    return Beam(number=1, cross_section_contour=[Point2D(z, y) for z, y in contour], **kw)


def test_changed_points_replace_and_ignore_out_of_range(caplog):
    contour = [Point2D(z, y) for z, y in RECT_40x80]
    out = apply_changed_points(contour, [2, 9, 0], [Point2D(25.0, 0.0), Point2D(1.0, 1.0), Point2D(2.0, 2.0)])
    assert out[1] == Point2D(25.0, 0.0)
    assert out[0] == contour[0] and out[2:] == contour[2:]
    assert "ignored" in caplog.text


def test_clean_contour_drops_duplicates_and_closing_point():
    pts = [Point2D(0, 0), Point2D(0.05, 0.0), Point2D(10, 0), Point2D(10, 10), Point2D(0.0, 0.08)]
    assert clean_contour(pts) == [Point2D(0, 0), Point2D(10, 0), Point2D(10, 10)]


def test_unit_conversion_is_axis_relative():
    assert to_target_units([Point2D(170.0, 12.5)], 150.0) == [(200.0, 125.0)]


def test_rectangle_geometry():
    geom = normalize_beam_geometry(_beam(RECT_40x80), 0.0, 0.0)

    assert not geom.mirrored
    assert geom.properties.area == pytest.approx(320000.0)
    assert (geom.centroid_x, geom.centroid_y) == (pytest.approx(0.0, abs=1e-6), pytest.approx(400.0))
    assert geom.rib_bottom_left == (pytest.approx(-200.0), pytest.approx(-400.0))
    assert geom.rib_width == pytest.approx(400.0)
    assert geom.rib_axis_x == pytest.approx(0.0, abs=1e-6)
    assert geom.rib_top_y == pytest.approx(400.0)
    assert geom.rib_height == pytest.approx(800.0)
    assert geom.profile_flags == [True, True, True, True]


def test_t_beam_rib_detection():
    geom = normalize_beam_geometry(_beam(T_BEAM), 0.0, 0.0)

    # rib 2400 cm2 at y=30, flange 2400 cm2 at y=70 -> centroid 500 mm up
    assert geom.centroid_y == pytest.approx(500.0)
    assert geom.rib_bottom_left == (pytest.approx(-200.0), pytest.approx(-500.0))
    assert geom.rib_bottom_right == (pytest.approx(200.0), pytest.approx(-500.0))
    assert geom.rib_width == pytest.approx(400.0)
    # level top corners -> searched at the rib axis
    assert geom.rib_top_y == pytest.approx(300.0)
    assert geom.profile_min_x == pytest.approx(-600.0)
    assert geom.profile_max_x == pytest.approx(600.0)
    assert geom.left_from_rib == pytest.approx(-600.0)


def test_rib_width_is_widest_bottom_edge():
    # two bottom edges at the same level: 100 mm and 300 mm wide
    pts = [(0.0, 0.0), (100.0, 0.0), (100.0, 50.0), (200.0, 50.0), (200.0, 0.0),
           (500.0, 0.0), (500.0, 400.0), (0.0, 400.0)]
    left, right = find_rib_bottom_corners(pts)
    assert left == (200.0, 0.0)
    assert right == (500.0, 0.0)


def test_rib_corners_fallback_without_flat_edge():
    tri = [(0.0, 0.0), (300.0, 500.0), (-300.0, 500.0)]
    left, right = find_rib_bottom_corners(tri)
    assert left == (-300.0, 0.0) and right == (300.0, 0.0)


def test_rib_top_at_axis_near_points():
    pts = [(-200.0, -400.0), (200.0, -400.0), (200.0, 300.0), (20.0, 350.0), (-200.0, 300.0)]
    assert find_rib_top_at_axis(pts, 0.0) == pytest.approx(350.0)


def test_mirror_decision():
    pts = to_target_units([Point2D(z, y) for z, y in RIGHT_CANTILEVER], 0.0)
    assert need_mirror(pts, desired_right=False)
    assert not need_mirror(pts, desired_right=True)
    symmetric = to_target_units([Point2D(z, y) for z, y in T_BEAM], 0.0)
    assert not need_mirror(symmetric, desired_right=False)


def test_first_edge_beam_overhang_is_mirrored_left():
    geom = normalize_beam_geometry(_beam(RIGHT_CANTILEVER), 0.0, 100.0)
    assert geom.mirrored
    assert geom.profile_min_x == pytest.approx(-1000.0)
    assert geom.profile_max_x == pytest.approx(200.0)


def test_last_edge_beam_keeps_right_overhang():
    geom = normalize_beam_geometry(_beam(shifted(RIGHT_CANTILEVER, 200.0)), 200.0, 100.0)
    assert not geom.mirrored
    assert geom.profile_max_x == pytest.approx(1000.0)


def test_profile_point_flags():
    pts = [(0.0, 0.0), (50.0, 0.0), (100.0, 0.0), (100.0, 100.0)]
    assert [is_profile_point(pts, k) for k in range(4)] == [True, False, True, True]


def test_degenerate_contour_raises():
    with pytest.raises(DegenerateGeometryError):
        normalize_beam_geometry(_beam([(0.0, 0.0), (0.0, 0.05), (10.0, 0.0)]), 0.0, 0.0)


# slab steps down right of the rib: left flange top at 70 cm, right at 60 cm
STEPPED_SLAB = [(-20.0, 0.0), (20.0, 0.0), (20.0, 50.0), (60.0, 50.0), (60.0, 60.0),
                (10.0, 60.0), (10.0, 70.0), (-60.0, 70.0), (-60.0, 50.0), (-20.0, 50.0)]


def test_stepped_top_uses_lower_stress_point():
    geom = normalize_beam_geometry(_beam(STEPPED_SLAB), 0.0, 0.0)
    (_, y0), (_, y1) = geom.stress_points[0], geom.stress_points[1]

    assert not geom.mirrored
    assert abs(y0 - y1) == pytest.approx(100.0)
    assert geom.rib_top_y == pytest.approx(min(y0, y1))
    assert geom.rib_top_y == pytest.approx(600.0 - geom.centroid_y)
    # the axis search would have found the higher flange instead
    assert find_rib_top_at_axis(geom.points, geom.rib_axis_x) == pytest.approx(700.0 - geom.centroid_y)


def test_rib_top_level_tolerance_boundary():
    pts = [(-200.0, -400.0), (200.0, -400.0), (200.0, 300.0), (-200.0, 300.0)]
    at_tol = [(-600.0, 300.0), (600.0, 250.0), (200.0, -400.0), (-200.0, -400.0)]
    below_tol = [(-600.0, 300.0), (600.0, 251.0), (200.0, -400.0), (-200.0, -400.0)]

    assert find_rib_top(pts, at_tol, 0.0) == pytest.approx(250.0)
    assert find_rib_top(pts, below_tol, 0.0) == pytest.approx(300.0)
    assert find_rib_top(pts, [], 0.0) == pytest.approx(300.0)
