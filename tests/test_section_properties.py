#!/usr/bin/env python3
"""
Test the closed-polygon section property calculator.

Verifies:
1. Rectangle closed forms (area, centroid, inertias, static moments, moduli)
2. Invariance to start vertex and traversal direction
3. Centering on the computed centroid is idempotent
4. Stress point selection (unique extremes and quadrant search)
5. Degenerate contours
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest

from src.properties.section_property_calculator import (
    calculate_section_properties,
    height_at_x,
    polygon_centroid,
    signed_area,
    width_at_level,
)
from src.utilities.errors import DegenerateGeometryError

RECT = [(0.0, 0.0), (400.0, 0.0), (400.0, 800.0), (0.0, 800.0)]
L_SHAPE = [(0.0, 0.0), (600.0, 0.0), (600.0, 150.0), (150.0, 150.0), (150.0, 900.0), (0.0, 900.0)]


def test_rectangle_closed_forms():
    p = calculate_section_properties(RECT)
    b, h = 400.0, 800.0

    assert p.area == pytest.approx(b * h)
    assert (p.xc, p.yc) == (pytest.approx(200.0), pytest.approx(400.0))
    assert p.perimeter == pytest.approx(2 * (b + h))
    assert p.Iyy == pytest.approx(b * h ** 3 / 12)
    assert p.Izz == pytest.approx(h * b ** 3 / 12)
    assert p.Iyz == pytest.approx(0.0, abs=1.0)

    assert p.Syy == pytest.approx(b * (h / 2) ** 2 / 2)
    assert p.Szz == pytest.approx(h * (b / 2) ** 2 / 2)
    assert p.WyyPlus == pytest.approx(b * h ** 2 / 6)
    assert p.WyyMinus == pytest.approx(b * h ** 2 / 6)
    assert p.WzzPlus == pytest.approx(h * b ** 2 / 6)
    assert p.Byy == pytest.approx(b)
    assert p.Bzz == pytest.approx(h)


def test_torsion_is_capped_by_polar_inertia():
    p = calculate_section_properties(RECT)
    thin_wall = 4 * p.area ** 2 / p.perimeter * (p.area / p.perimeter)
    assert p.It == pytest.approx(min(thin_wall, p.Iyy + p.Izz))
    assert p.It <= p.Iyy + p.Izz


def test_start_vertex_and_orientation_invariance():
    ref = calculate_section_properties(L_SHAPE)
    variants = [
        L_SHAPE[2:] + L_SHAPE[:2],
        list(reversed(L_SHAPE)),
        list(reversed(L_SHAPE[3:] + L_SHAPE[:3])),
    ]
    for pts in variants:
        p = calculate_section_properties(pts)
        assert p.area == pytest.approx(ref.area)
        assert p.xc == pytest.approx(ref.xc)
        assert p.yc == pytest.approx(ref.yc)
        assert p.Iyy == pytest.approx(ref.Iyy)
        assert p.Izz == pytest.approx(ref.Izz)
        assert p.Iyz == pytest.approx(ref.Iyz)
    assert signed_area(L_SHAPE) == pytest.approx(-signed_area(list(reversed(L_SHAPE))))


def test_product_of_inertia_sign_for_l_shape():
    # Legs lie bottom-right and top-left of the centroid
    p = calculate_section_properties(L_SHAPE)
    assert p.Iyz < 0


def test_centroid_inside_bounding_box_and_centering_idempotent():
    cx, cy = polygon_centroid(L_SHAPE)
    assert 0.0 <= cx <= 600.0
    assert 0.0 <= cy <= 900.0

    centered = [(x - cx, y - cy) for x, y in L_SHAPE]
    assert polygon_centroid(centered) == (pytest.approx(0.0, abs=1e-6), pytest.approx(0.0, abs=1e-6))


def test_width_and_height_scans():
    assert width_at_level(L_SHAPE, 100.0) == pytest.approx(600.0)
    assert width_at_level(L_SHAPE, 500.0) == pytest.approx(150.0)
    assert height_at_x(L_SHAPE, 400.0) == pytest.approx(150.0)
    assert width_at_level(L_SHAPE, 2000.0) == 0.0


def test_stress_points_rectangle_corners():
    centered = [(x - 200.0, y - 400.0) for x, y in RECT]
    p = calculate_section_properties(centered)
    assert p.stress_points == [(-200.0, 400.0), (200.0, 400.0), (200.0, -400.0), (-200.0, -400.0)]


def test_stress_points_unique_extremes():
    diamond = [(0.0, -10.0), (10.0, 0.0), (0.0, 10.0), (-10.0, 0.0)]
    p = calculate_section_properties(diamond)
    assert p.stress_points == [(-10.0, 0.0), (0.0, 10.0), (10.0, 0.0), (0.0, -10.0)]


def test_degenerate_contours():
    with pytest.raises(DegenerateGeometryError):
        calculate_section_properties([(0.0, 0.0), (1.0, 1.0)])

    p = calculate_section_properties([(0.0, 0.0), (100.0, 0.0), (200.0, 0.0)])
    assert p.is_degenerate
    assert p.Iyy == 0.0 and p.It == 0.0
    assert p.stress_points == []


def test_to_dict_layout():
    d = calculate_section_properties(RECT).to_dict()
    assert set(d) == {"centroid", "bounds", "properties", "stress_points"}
    assert d["properties"]["area"] == pytest.approx(320000.0)
    assert len(d["stress_points"]) == 4
