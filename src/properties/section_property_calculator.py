#!/usr/bin/env python3
"""
Section Property Calculator for arbitrary closed polygons

Computes the geometric properties PRSSM expects for a beam cross-section
given as an ordered list of (X, Y) vertices (no closing duplicate; the last
vertex connects back to the first). Units follow the input: the converter
passes millimeters, so areas come out in mm², inertias in mm⁴.

Key calculations:
- Area, centroid (shoelace), perimeter
- Second moments Iyy (about the horizontal axis), Izz (about the vertical
  axis) and product Iyz, all about the centroid
- Static moments of the half-section above / right of the centroid, by
  strip integration (the contour is not a rectangle)
- Section moduli towards the four extreme edges
- Minimum thicknesses Byy / Bzz by scanning 100 levels
- Torsional constant, thin-walled approximation capped at Iyy + Izz
- Four extreme-fiber ("stress") points
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence, Tuple

import numpy as np

from config import AREA_EPS, THICKNESS_SCAN_STEPS
from src.utilities.errors import DegenerateGeometryError

logger = logging.getLogger(__name__)

Point = Tuple[float, float]

# Widths at or below this are treated as probing exactly through a vertex
_MIN_THICKNESS = 0.1


@dataclass
class SectionProperties:
    """Container for calculated section properties"""
    area: float
    perimeter: float
    xc: float  # centroid, in the input coordinates
    yc: float
    Iyy: float  # about the horizontal centroidal axis
    Izz: float  # about the vertical centroidal axis
    Iyz: float  # product of inertia (signed)
    It: float   # torsional constant (approximate)
    Syy: float  # static moment of the part above the centroid
    Szz: float  # static moment of the part right of the centroid
    WyyPlus: float
    WyyMinus: float
    WzzPlus: float
    WzzMinus: float
    Byy: float  # minimum width over height
    Bzz: float  # minimum height over width
    x_min: float
    x_max: float
    y_min: float
    y_max: float
    # top-left, top-right, bottom-right, bottom-left
    stress_points: List[Point] = field(default_factory=list)

    @property
    def is_degenerate(self) -> bool:
        return self.area == 0.0

    @classmethod
    def zero(cls, xs: np.ndarray, ys: np.ndarray) -> "SectionProperties":
        return cls(
            area=0.0, perimeter=_perimeter(xs, ys), xc=0.0, yc=0.0,
            Iyy=0.0, Izz=0.0, Iyz=0.0, It=0.0, Syy=0.0, Szz=0.0,
            WyyPlus=0.0, WyyMinus=0.0, WzzPlus=0.0, WzzMinus=0.0,
            Byy=0.0, Bzz=0.0,
            x_min=float(xs.min()), x_max=float(xs.max()),
            y_min=float(ys.min()), y_max=float(ys.max()),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization"""
        return {
            'centroid': {'x': self.xc, 'y': self.yc},
            'bounds': {'x_min': self.x_min, 'x_max': self.x_max,
                       'y_min': self.y_min, 'y_max': self.y_max},
            'properties': {
                'area': self.area,
                'perimeter': self.perimeter,
                'Iyy': self.Iyy,
                'Izz': self.Izz,
                'Iyz': self.Iyz,
                'It': self.It,
                'Syy': self.Syy,
                'Szz': self.Szz,
                'WyyPlus': self.WyyPlus,
                'WyyMinus': self.WyyMinus,
                'WzzPlus': self.WzzPlus,
                'WzzMinus': self.WzzMinus,
                'Byy': self.Byy,
                'Bzz': self.Bzz,
            },
            'stress_points': [list(p) for p in self.stress_points],
        }


def _as_arrays(points: Sequence[Point]) -> Tuple[np.ndarray, np.ndarray]:
    arr = np.asarray(points, dtype=float).reshape(-1, 2)
    return arr[:, 0], arr[:, 1]


def _perimeter(xs: np.ndarray, ys: np.ndarray) -> float:
    return float(np.hypot(np.roll(xs, -1) - xs, np.roll(ys, -1) - ys).sum())


def _cross(xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
    return xs * np.roll(ys, -1) - np.roll(xs, -1) * ys


def signed_area(points: Sequence[Point]) -> float:
    """Shoelace area; positive for counter-clockwise vertex order."""
    xs, ys = _as_arrays(points)
    return float(_cross(xs, ys).sum() / 2.0)


def polygon_centroid(points: Sequence[Point]) -> Point:
    """Area centroid of a closed polygon; (0, 0) for a degenerate one."""
    xs, ys = _as_arrays(points)
    cross = _cross(xs, ys)
    area6 = cross.sum() * 3.0
    if abs(area6) < AREA_EPS:
        return 0.0, 0.0
    cx = ((xs + np.roll(xs, -1)) * cross).sum() / area6
    cy = ((ys + np.roll(ys, -1)) * cross).sum() / area6
    return float(cx), float(cy)


def _second_moments(xs: np.ndarray, ys: np.ndarray, xc: float, yc: float,
                    orientation: float) -> Tuple[float, float, float]:
    x0, y0 = xs - xc, ys - yc
    x1, y1 = np.roll(x0, -1), np.roll(y0, -1)
    cross = x0 * y1 - x1 * y0
    iyy = (cross * (y0 * y0 + y0 * y1 + y1 * y1)).sum() / 12.0
    izz = (cross * (x0 * x0 + x0 * x1 + x1 * x1)).sum() / 12.0
    iyz = (cross * (x0 * y1 + 2 * x0 * y0 + 2 * x1 * y1 + x1 * y0)).sum() / 24.0
    # Clockwise input flips every sum; Iyz keeps its physical sign
    return abs(float(iyy)), abs(float(izz)), float(iyz) * orientation


def _span_at(along: np.ndarray, across: np.ndarray, level: float, include_flat: bool) -> float:
    """
    Extent of the section along one axis on the line `across == level`.

    Intersects the line with every edge and returns max - min of the hits
    (0 when fewer than two hits).
    """
    a0, c0 = along, across
    a1, c1 = np.roll(along, -1), np.roll(across, -1)
    hit = ((c0 <= level) & (c1 > level)) | ((c1 <= level) & (c0 > level))
    t = (level - c0[hit]) / (c1[hit] - c0[hit])
    hits = a0[hit] + t * (a1[hit] - a0[hit])
    if include_flat:
        flat = (np.abs(c0 - level) < AREA_EPS) & (np.abs(c1 - level) < AREA_EPS)
        hits = np.concatenate([hits, a0[flat], a1[flat]])
    if hits.size < 2:
        return 0.0
    return float(hits.max() - hits.min())


def width_at_level(points: Sequence[Point], y: float) -> float:
    """Section width (along X) on the horizontal line at `y`."""
    xs, ys = _as_arrays(points)
    return _span_at(xs, ys, y, include_flat=True)


def height_at_x(points: Sequence[Point], x: float) -> float:
    """Section height (along Y) on the vertical line at `x`."""
    xs, ys = _as_arrays(points)
    return _span_at(ys, xs, x, include_flat=False)


def _half_static_moment(along: np.ndarray, across: np.ndarray, level: float, include_flat: bool) -> float:
    """Static moment of the part with `across >= level`, about that line."""
    cuts = np.unique(np.append(across[across >= level], level))
    moment = 0.0
    for lo, hi in zip(cuts[:-1], cuts[1:]):
        mid = (lo + hi) / 2.0
        moment += _span_at(along, across, mid, include_flat) * (hi - lo) * (mid - level)
    return abs(moment)


def _min_thickness(along: np.ndarray, across: np.ndarray, include_flat: bool) -> float:
    lo, hi = float(across.min()), float(across.max())
    found = [
        w for w in (
            _span_at(along, across, lo + (hi - lo) * s / THICKNESS_SCAN_STEPS, include_flat)
            for s in range(1, THICKNESS_SCAN_STEPS)
        )
        if w > _MIN_THICKNESS
    ]
    return min(found) if found else float(along.max() - along.min())


def _torsional_constant(area: float, perimeter: float, iyy: float, izz: float) -> float:
    if perimeter < AREA_EPS:
        return 0.0
    t_avg = area / perimeter
    return min(4.0 * area * area / perimeter * t_avg, iyy + izz)


def _nearest_to_corner(xs: np.ndarray, ys: np.ndarray, cx: float, cy: float) -> Point:
    i = int(np.argmin(np.hypot(xs - cx, ys - cy)))
    return float(xs[i]), float(ys[i])


def _stress_points(xs: np.ndarray, ys: np.ndarray, xc: float, yc: float,
                   iyy: float, izz: float) -> List[Point]:
    """
    Four extreme-fiber points: top-left, top-right, bottom-right, bottom-left.

    When each bounding extreme is attained by a single vertex those vertices
    are used directly ([min X, max Y, max X, min Y]). Otherwise the vertex
    with the largest |My/Iyy*dy| + |Mz/Izz*dx| is kept per quadrant.
    """
    x_min, x_max = float(xs.min()), float(xs.max())
    y_min, y_max = float(ys.min()), float(ys.max())
    tol = min(x_max - x_min, y_max - y_min) / 100.0

    def single(arr: np.ndarray, value: float) -> bool:
        return int(np.count_nonzero(np.abs(arr - value) < tol)) == 1

    def first(arr: np.ndarray, value: float) -> Point:
        i = int(np.argmax(np.abs(arr - value) < tol))
        return float(xs[i]), float(ys[i])

    if single(xs, x_min) and single(xs, x_max) and single(ys, y_min) and single(ys, y_max):
        return [first(xs, x_min), first(ys, y_max), first(xs, x_max), first(ys, y_min)]

    my = 1000.0
    mz = izz / iyy * my * 0.99
    dx, dy = xs - xc, ys - yc
    sigma_z = mz / izz * dx
    sigma_y = my / iyy * dy
    sigma = np.abs(sigma_z) + np.abs(sigma_y)

    quadrants = [
        ((sigma_z < 0) & (sigma_y > 0), (x_min, y_max)),  # top-left
        ((sigma_z > 0) & (sigma_y > 0), (x_max, y_max)),  # top-right
        ((sigma_z > 0) & (sigma_y < 0), (x_max, y_min)),  # bottom-right
        ((sigma_z < 0) & (sigma_y < 0), (x_min, y_min)),  # bottom-left
    ]
    points: List[Point] = []
    for mask, corner in quadrants:
        if mask.any():
            i = int(np.flatnonzero(mask)[np.argmax(sigma[mask])])
            points.append((float(xs[i]), float(ys[i])))
        else:
            points.append(_nearest_to_corner(xs, ys, *corner))
    return points


def calculate_section_properties(points: Sequence[Point]) -> SectionProperties:
    """
    Calculate all section properties of a closed polygon.

    Args:
        points: ordered (X, Y) vertices, either orientation, no closing duplicate

    Returns:
        SectionProperties; a zero section when the area is below 1e-10

    Raises:
        DegenerateGeometryError: fewer than 3 vertices
    """
    if len(points) < 3:
        raise DegenerateGeometryError(f"Contour must have at least 3 points, got {len(points)}")

    xs, ys = _as_arrays(points)
    a_signed = float(_cross(xs, ys).sum() / 2.0)
    if abs(a_signed) < AREA_EPS:
        logger.warning("Degenerate contour (%d points, area ~ 0): zero section returned", len(xs))
        return SectionProperties.zero(xs, ys)

    area = abs(a_signed)
    perimeter = _perimeter(xs, ys)
    xc, yc = polygon_centroid(points)
    iyy, izz, iyz = _second_moments(xs, ys, xc, yc, 1.0 if a_signed > 0 else -1.0)

    x_min, x_max = float(xs.min()), float(xs.max())
    y_min, y_max = float(ys.min()), float(ys.max())

    def modulus(inertia: float, dist: float) -> float:
        return inertia / dist if dist > AREA_EPS else 0.0

    props = SectionProperties(
        area=area,
        perimeter=perimeter,
        xc=xc,
        yc=yc,
        Iyy=iyy,
        Izz=izz,
        Iyz=iyz,
        It=_torsional_constant(area, perimeter, iyy, izz),
        Syy=_half_static_moment(xs, ys, yc, include_flat=True),
        Szz=_half_static_moment(ys, xs, xc, include_flat=False),
        WyyPlus=modulus(iyy, y_max - yc),
        WyyMinus=modulus(iyy, yc - y_min),
        WzzPlus=modulus(izz, x_max - xc),
        WzzMinus=modulus(izz, xc - x_min),
        Byy=_min_thickness(xs, ys, include_flat=True),
        Bzz=_min_thickness(ys, xs, include_flat=False),
        x_min=x_min,
        x_max=x_max,
        y_min=y_min,
        y_max=y_max,
        stress_points=_stress_points(xs, ys, xc, yc, iyy, izz),
    )
    logger.debug("Section: A=%.1f, Iyy=%.4g, Izz=%.4g, It=%.4g", area, iyy, izz, props.It)
    return props
