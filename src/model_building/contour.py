"""
Beam contour normalization: ARGO centimeters -> PRSSM millimeters.

Steps per beam
--------------
1. Apply changed-point overrides (1-based indices; out-of-range ignored).
2. Drop consecutive duplicates and a closing point equal to the first.
3. X = (Z - beam axis) * 10, Y = Y * 10.
4. Mirror (negate X) when the cantilever overhang points to the wrong side.
5. Re-center on the centroid and compute section properties.
6. Locate the rib: bottom corners, axis, width, top.

All rib quantities are in the centered frame; `profile_min_x/max_x` are
kept in the axis-relative frame because beam assembly measures overhangs
from the beam axis.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

from config import (
    CM_TO_MM,
    DUPLICATE_POINT_TOL,
    MIRROR_SYMMETRY_TOL,
    PROFILE_POINT_CROSS_TOL,
    RIB_BOTTOM_TOL,
    RIB_EDGE_FLAT_TOL,
    RIB_EDGE_MIN_LENGTH,
    RIB_TOP_SEARCH_HALF_WIDTH,
)
from src.parsing.argo_models import Beam, Point2D
from src.properties.section_property_calculator import (
    Point,
    SectionProperties,
    calculate_section_properties,
    polygon_centroid,
)
from src.utilities.errors import DegenerateGeometryError

logger = logging.getLogger(__name__)

# Stress points closer than this vertically mean the top corners are curbs
_LEVEL_TOP_TOL = 50.0


@dataclass
class NormalizedBeamGeometry:
    points: List[Point]  # centered on the centroid, mm
    centroid_x: float    # centroid in the axis-relative frame
    centroid_y: float
    mirrored: bool
    profile_min_x: float  # axis-relative frame
    profile_max_x: float
    profile_min_y: float  # centered frame
    profile_max_y: float
    rib_bottom_left: Point
    rib_bottom_right: Point
    rib_axis_x: float
    rib_width: float
    rib_top_y: float
    properties: SectionProperties
    profile_flags: List[bool] = field(default_factory=list)

    @property
    def stress_points(self) -> List[Point]:
        return self.properties.stress_points

    @property
    def rib_height(self) -> float:
        return self.rib_top_y - self.profile_min_y

    @property
    def rib_axis_original(self) -> float:
        """Rib axis X measured from the beam axis."""
        return self.centroid_x + self.rib_axis_x

    @property
    def left_from_rib(self) -> float:
        return self.profile_min_x - self.rib_axis_original

    @property
    def right_from_rib(self) -> float:
        return self.profile_max_x - self.rib_axis_original


def apply_changed_points(contour: Sequence[Point2D], indices: Sequence[int],
                         changed: Sequence[Point2D], beam_number: int = 0) -> List[Point2D]:
    """Replace contour points at 1-based `indices`; indices outside the contour are skipped."""
    result = list(contour)
    for idx, p in zip(indices, changed):
        if 1 <= idx <= len(result):
            result[idx - 1] = p
        else:
            logger.warning("Beam #%d: changed-point index %d outside contour of %d points, ignored",
                           beam_number, idx, len(result))
    return result


def _same(a: Point2D, b: Point2D) -> bool:
    return abs(a.z - b.z) <= DUPLICATE_POINT_TOL and abs(a.y - b.y) <= DUPLICATE_POINT_TOL


def clean_contour(contour: Sequence[Point2D]) -> List[Point2D]:
    cleaned: List[Point2D] = []
    for p in contour:
        if not cleaned or not _same(p, cleaned[-1]):
            cleaned.append(p)
    if len(cleaned) > 1 and _same(cleaned[0], cleaned[-1]):
        cleaned.pop()
    return cleaned


def to_target_units(contour: Sequence[Point2D], axis_z: float) -> List[Point]:
    return [((p.z - axis_z) * CM_TO_MM, p.y * CM_TO_MM) for p in contour]


def need_mirror(points: Sequence[Point], desired_right: bool) -> bool:
    """
    True when the longer overhang is on the opposite side from `desired_right`.

    Sections whose left and right overhangs differ by less than the mirror
    tolerance count as symmetric and are never mirrored.
    """
    left = -min(x for x, _ in points)
    right = max(x for x, _ in points)
    if abs(right - left) < MIRROR_SYMMETRY_TOL:
        return False
    return (right > left) != desired_right


def find_rib_bottom_corners(points: Sequence[Point]) -> Tuple[Point, Point]:
    """
    Bottom-left and bottom-right corners of the rib.

    Uses the widest near-horizontal edge at the bottom of the section; falls
    back to the outermost bottom vertices, then to the bounding box.
    """
    unique: List[Point] = []
    for p in points:
        if not unique or abs(p[0] - unique[-1][0]) > DUPLICATE_POINT_TOL or abs(p[1] - unique[-1][1]) > DUPLICATE_POINT_TOL:
            unique.append(p)

    min_y = min(y for _, y in unique)
    edges = []
    n = len(unique)
    for k in range(n):
        (x0, y0), (x1, y1) = unique[k], unique[(k + 1) % n]
        if (abs(y0 - min_y) < RIB_BOTTOM_TOL and abs(y1 - min_y) < RIB_BOTTOM_TOL
                and abs(y0 - y1) < RIB_EDGE_FLAT_TOL):
            lo, hi = min(x0, x1), max(x0, x1)
            if hi - lo > RIB_EDGE_MIN_LENGTH:
                edges.append((lo, hi, (y0 + y1) / 2.0))

    if edges:
        lo, hi, y = max(edges, key=lambda e: e[1] - e[0])
        return (lo, y), (hi, y)

    bottom = sorted((p for p in unique if abs(p[1] - min_y) < RIB_BOTTOM_TOL), key=lambda p: p[0])
    if len(bottom) >= 2:
        return bottom[0], bottom[-1]

    return (min(x for x, _ in unique), min_y), (max(x for x, _ in unique), min_y)


def find_rib_top_at_axis(points: Sequence[Point], rib_axis_x: float) -> float:
    """Highest contour level at the rib axis."""
    near = [y for x, y in points if abs(x - rib_axis_x) < RIB_TOP_SEARCH_HALF_WIDTH]
    if near:
        return max(near)

    hits = []
    n = len(points)
    for k in range(n):
        (x0, y0), (x1, y1) = points[k], points[(k + 1) % n]
        if min(x0, x1) <= rib_axis_x <= max(x0, x1) and abs(x1 - x0) > 0.01:
            t = (rib_axis_x - x0) / (x1 - x0)
            hits.append(y0 + t * (y1 - y0))
    if hits:
        return max(hits)
    return max(y for _, y in points)


def find_rib_top(points: Sequence[Point], stress_points: Sequence[Point], rib_axis_x: float) -> float:
    """
    Top of the rib.

    With two top stress points at clearly different levels the lower one is
    the rib top (the other is a curb or the slab). When they are level, or
    stress points are missing, the contour is searched at the rib axis.
    """
    if len(stress_points) >= 4:
        y0, y1 = stress_points[0][1], stress_points[1][1]
        if abs(y0 - y1) >= _LEVEL_TOP_TOL:
            return min(y0, y1)
    return find_rib_top_at_axis(points, rib_axis_x)


def is_profile_point(points: Sequence[Point], k: int) -> bool:
    """Endpoints always; interior points unless collinear with their neighbours."""
    if k == 0 or k == len(points) - 1:
        return True
    (ax, ay), (bx, by), (cx, cy) = points[k - 1], points[k], points[k + 1]
    cross = (bx - ax) * (cy - ay) - (by - ay) * (cx - ax)
    return abs(cross) >= PROFILE_POINT_CROSS_TOL


def normalize_beam_geometry(beam: Beam, axis_z: float, mid_axis_z: float) -> NormalizedBeamGeometry:
    """
    Run the full normalization for one beam.

    Args:
        beam: decoded ARGO beam
        axis_z: this beam's axis (source cm)
        mid_axis_z: midpoint between the first and last beam axes (source cm)

    Raises:
        DegenerateGeometryError: fewer than 3 distinct contour points
    """
    contour = apply_changed_points(beam.cross_section_contour, beam.changed_point_indices,
                                   beam.changed_points, beam.number)
    contour = clean_contour(contour)
    if len(contour) < 3:
        raise DegenerateGeometryError(
            f"Beam #{beam.number}: contour has {len(contour)} distinct points, at least 3 required"
        )

    pts = to_target_units(contour, axis_z)
    desired_right = axis_z > mid_axis_z + 1e-6
    mirrored = need_mirror(pts, desired_right)
    if mirrored:
        pts = [(-x, y) for x, y in pts]

    profile_min_x = min(x for x, _ in pts)
    profile_max_x = max(x for x, _ in pts)

    gx, gy = polygon_centroid(pts)
    centered = [(x - gx, y - gy) for x, y in pts]

    props = calculate_section_properties(centered)
    left, right = find_rib_bottom_corners(centered)
    rib_axis_x = (left[0] + right[0]) / 2.0
    rib_top_y = find_rib_top(centered, props.stress_points, rib_axis_x)

    geom = NormalizedBeamGeometry(
        points=centered,
        centroid_x=gx,
        centroid_y=gy,
        mirrored=mirrored,
        profile_min_x=profile_min_x,
        profile_max_x=profile_max_x,
        profile_min_y=min(y for _, y in centered),
        profile_max_y=max(y for _, y in centered),
        rib_bottom_left=left,
        rib_bottom_right=right,
        rib_axis_x=rib_axis_x,
        rib_width=abs(right[0] - left[0]),
        rib_top_y=rib_top_y,
        properties=props,
        profile_flags=[is_profile_point(centered, k) for k in range(len(centered))],
    )
    logger.debug("Beam #%d: %d pts, mirrored=%s, rib width=%.1f, rib axis=%.1f, rib top=%.1f",
                 beam.number, len(centered), mirrored, geom.rib_width, rib_axis_x, rib_top_y)
    return geom
