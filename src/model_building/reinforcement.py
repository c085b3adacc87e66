"""
Map ARGO reinforcement onto PRSSM placements.

Longitudinal bars
-----------------
- Detailed path: when the beam has a detailed record with at least one
  tensile or compressed group, each group is paired by index with the
  calculated bar of the same kind. The group's sorted Z coordinates give
  the first-bar X and the spacing.
- Estimated path: otherwise each calculated bar with a positive area gets a
  (diameter, count) estimate and is spread evenly across the rib.

Tensile bars sit at profile bottom + delta*10, compressed bars at
rib top - delta*10. Offsets are relative to the rib bottom-left corner;
the binding point is that corner in global coordinates, at Y = 0.

Stirrups
--------
One open two-leg placement per stirrup section with positive area and step.
"""
from __future__ import annotations

import logging
import math
from typing import List, Optional, Sequence, Tuple

from config import (
    BOTTOM_COVER,
    CM_TO_MM,
    MAX_BARS_PER_ROW,
    SIDE_COVER,
    STANDARD_DIAMETERS,
    STIRRUP_DIAMETERS,
    STIRRUP_UTILIZATION,
)
from src.model_building.contour import NormalizedBeamGeometry
from src.model_building.prssm_models import (
    PrssmLongitudinalReinforcement,
    PrssmPoint,
    PrssmReinforcementSegment,
    PrssmTransverseReinforcement,
)
from src.parsing.argo_models import Beam, BeamDetailed, DetailedBarGroup

logger = logging.getLogger(__name__)

FALLBACK_DIAMETER = 16
FALLBACK_STIRRUP_DIAMETER = 10


def bar_area(diameter: float) -> float:
    return math.pi * diameter * diameter / 4.0


def detect_z_scale(z_coordinates: Sequence[float], rib_width: float) -> float:
    """
    Guess whether detailed bar Z values are mm-like (x1) or cm (x10).

    Picks the factor whose scaled coordinate range is closer to the rib
    width; defaults to 10 when there is nothing to compare.
    """
    if len(z_coordinates) < 2 or rib_width <= 1e-6:
        return 10.0
    span = max(z_coordinates) - min(z_coordinates)
    return 10.0 if abs(span * 10.0 - rib_width) < abs(span - rib_width) else 1.0


def estimate_diameter_count(area_cm2: float) -> Tuple[int, int]:
    """
    (diameter mm, bar count) for a required steel area in cm².

    Diameters are tried from the largest down; the first giving 1..10 bars
    wins.
    """
    area_mm2 = area_cm2 * 100.0
    for d in sorted(STANDARD_DIAMETERS, reverse=True):
        n = int(round(area_mm2 / bar_area(d)))
        if 1 <= n <= MAX_BARS_PER_ROW:
            return d, n
    return FALLBACK_DIAMETER, max(1, int(round(area_mm2 / bar_area(FALLBACK_DIAMETER))))


def estimate_stirrup_diameter(area_cm2: float) -> int:
    """Smallest stirrup diameter whose single leg covers 80% of half the area."""
    leg_area = area_cm2 * 100.0 / 2.0
    for d in STIRRUP_DIAMETERS:
        if bar_area(d) >= leg_area * STIRRUP_UTILIZATION:
            return d
    return FALLBACK_STIRRUP_DIAMETER


def binding_point(position: float, geom: NormalizedBeamGeometry) -> PrssmPoint:
    """Rib bottom-left corner in global coordinates (X only; Y is 0)."""
    return PrssmPoint(round(position + geom.rib_bottom_left[0] - geom.rib_axis_x, 2), 0.0)


def _placement(diameter: float, count: int, first_x: float, z: float, step: float,
               x_min: float, x_max: float, geom: NormalizedBeamGeometry,
               bp: PrssmPoint) -> PrssmLongitudinalReinforcement:
    left_x, left_y = geom.rib_bottom_left
    return PrssmLongitudinalReinforcement(
        diameter=diameter,
        items_at_row=count,
        step_element=round(step, 2),
        offset_from_start=max(0.0, x_min * CM_TO_MM),
        y_offset=round(first_x - left_x, 2),
        z_offset=round(z - left_y, 2),
        binding_point=bp,
        segments=[PrssmReinforcementSegment(length=(x_max - x_min) * CM_TO_MM)],
    )


def _group_row(group: DetailedBarGroup, geom: NormalizedBeamGeometry) -> Tuple[float, float]:
    zs = sorted(group.z_coordinates)
    if not zs:
        return 0.0, 0.0
    scale = detect_z_scale(zs, geom.rib_width)
    first_x = geom.rib_axis_x + zs[0] * scale
    last_x = geom.rib_axis_x + zs[-1] * scale
    step = (last_x - first_x) / (group.count - 1) if group.count > 1 else 0.0
    return first_x, step


def _detailed_longitudinals(beam: Beam, detailed: BeamDetailed, geom: NormalizedBeamGeometry,
                            bp: PrssmPoint) -> List[PrssmLongitudinalReinforcement]:
    out = []
    for group, bar in zip(detailed.tensile_bars, beam.tensile_bars):
        if group.count <= 0:
            continue
        first_x, step = _group_row(group, geom)
        z = geom.profile_min_y + bar.delta_lower * CM_TO_MM
        out.append(_placement(group.diameter, group.count, first_x, z, step,
                              bar.x_min, bar.x_max, geom, bp))
    for group, bar in zip(detailed.compressed_bars, beam.compressed_bars):
        if group.count <= 0:
            continue
        first_x, step = _group_row(group, geom)
        z = geom.rib_top_y - bar.delta_upper * CM_TO_MM
        out.append(_placement(group.diameter, group.count, first_x, z, step,
                              bar.x_min, bar.x_max, geom, bp))
    return out


def _estimated_row(area: float, geom: NormalizedBeamGeometry) -> Tuple[int, int, float, float]:
    d, n = estimate_diameter_count(area)
    usable = max(0.0, geom.rib_width - 2 * SIDE_COVER - d)
    step = usable / (n - 1) if n > 1 else 0.0
    return d, n, geom.rib_axis_x - usable / 2.0, step


def _estimated_longitudinals(beam: Beam, geom: NormalizedBeamGeometry,
                             bp: PrssmPoint) -> List[PrssmLongitudinalReinforcement]:
    out = []
    for bar in beam.tensile_bars:
        if bar.area <= 0:
            continue
        d, n, first_x, step = _estimated_row(bar.area, geom)
        z = geom.profile_min_y + bar.delta_lower * CM_TO_MM
        out.append(_placement(d, n, first_x, z, step, bar.x_min, bar.x_max, geom, bp))
    for bar in beam.compressed_bars:
        if bar.area <= 0:
            continue
        d, n, first_x, step = _estimated_row(bar.area, geom)
        z = geom.rib_top_y - bar.delta_upper * CM_TO_MM
        out.append(_placement(d, n, first_x, z, step, bar.x_min, bar.x_max, geom, bp))
    return out


def map_longitudinal(beam: Beam, detailed: Optional[BeamDetailed], geom: NormalizedBeamGeometry,
                     bp: PrssmPoint) -> List[PrssmLongitudinalReinforcement]:
    if detailed is not None and detailed.has_longitudinal_groups:
        bars = _detailed_longitudinals(beam, detailed, geom, bp)
        logger.debug("Beam #%d: %d longitudinal rows from detailed groups", beam.number, len(bars))
    else:
        bars = _estimated_longitudinals(beam, geom, bp)
        logger.debug("Beam #%d: %d longitudinal rows estimated from areas", beam.number, len(bars))
    return bars


def map_transverse(beam: Beam, geom: NormalizedBeamGeometry,
                   bp: PrssmPoint) -> List[PrssmTransverseReinforcement]:
    width = geom.rib_width - 2 * SIDE_COVER
    height = geom.rib_height - 2 * BOTTOM_COVER

    out = []
    start_x = 0.0
    for sec in beam.stirrup_sections:
        end_x = sec.end_x * CM_TO_MM
        if sec.area <= 0 or sec.step <= 0:
            start_x = end_x
            continue
        step = sec.step * CM_TO_MM
        out.append(PrssmTransverseReinforcement(
            diameter=estimate_stirrup_diameter(sec.area),
            items_at_row=int(max(1.0, (end_x - start_x) / step)),
            step_element=step,
            offset_from_start=start_x,
            binding_point=bp,
            segments=[
                PrssmReinforcementSegment(length=width, angle=0.0),
                PrssmReinforcementSegment(length=height, angle=90.0, height=height),
            ],
        ))
        start_x = end_x
    return out
