"""
Place converted beams across the span cross-section.

Rules
-----
- Rib axis position (mm) = (beam axis Z - first beam axis Z) * 10 plus the
  accumulated overlap shift.
- Global edges = position + profile extents measured from the rib axis.
- If a beam's left edge falls left of the previous beam's right edge, it and
  every following beam move right by the overlap.
- Step = position - previous position (0 for the first beam).
- Slab width = last position - first position, 0 for a single beam.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional, Sequence

from config import CM_TO_MM

logger = logging.getLogger(__name__)


@dataclass
class BeamPlacement:
    position: float
    step: float
    left_edge: float
    right_edge: float
    shift: float = 0.0  # overlap correction applied at this beam


class BeamAssembler:
    """Stateful placer; call `place` once per beam, in order."""

    def __init__(self, first_axis_z: float):
        self.first_axis_z = first_axis_z
        self.extra_offset = 0.0
        self._prev_right: Optional[float] = None
        self._prev_position: Optional[float] = None
        self.placements: List[BeamPlacement] = []

    def place(self, axis_z: float, left_from_rib: float, right_from_rib: float) -> BeamPlacement:
        position = (axis_z - self.first_axis_z) * CM_TO_MM + self.extra_offset
        left = position + left_from_rib
        right = position + right_from_rib

        shift = 0.0
        if self._prev_right is not None and left < self._prev_right:
            shift = self._prev_right - left
            self.extra_offset += shift
            position += shift
            left += shift
            right += shift
            logger.info("Beam %d overlaps previous beam by %.1f mm, shifted right",
                        len(self.placements) + 1, shift)

        step = 0.0 if self._prev_position is None else position - self._prev_position
        placement = BeamPlacement(position=position, step=step, left_edge=left, right_edge=right, shift=shift)

        self._prev_right = right
        self._prev_position = position
        self.placements.append(placement)
        return placement


def slab_width(positions: Sequence[float]) -> float:
    if len(positions) < 2:
        return 0.0
    return positions[-1] - positions[0]


def format_slab_width(width: float) -> str:
    """PRSSM stores the slab width as an integer string, halves rounded up."""
    if width <= 0:
        return "0"
    return str(Decimal(width).quantize(Decimal(1), rounding=ROUND_HALF_UP))
