# argo_models.py
"""
Containers for a decoded ARGO document.

Units are the source units: lengths in centimeters, steel areas in cm².
Horizontal coordinates are called Z and vertical ones Y, as in the format.
"""
from __future__ import annotations

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional, Tuple

from src.parsing.file_code import ArgoFileCode


@dataclass(frozen=True)
class Point2D:
    z: float
    y: float


@dataclass
class GlobalParameters:
    print_level: float = 0.0
    concrete_strength: float = 0.0
    tensile_reinforcement_type: float = 0.0
    compressed_reinforcement_type: float = 0.0
    slab_reinforcement_type: float = 0.0
    stirrup_type: float = 0.0
    support_axis_1: float = 0.0
    support_axis_2: float = 0.0
    inner_support_1: float = 0.0
    inner_support_2: float = 0.0
    full_length: float = 0.0
    beam_count: int = 0
    beam_coordinates: List[float] = field(default_factory=list)
    ballast_type: float = 0.0
    sleeper_type: float = 0.0
    track_axis_z: List[float] = field(default_factory=list)
    diaphragm_presence: float = 0.0
    ballast_contour: List[Point2D] = field(default_factory=list)


@dataclass
class CalculatedBar:
    """Slab bar: area and its bend-point polyline."""
    area: float
    bend_points: List[Point2D] = field(default_factory=list)


@dataclass
class SlabReinforcement:
    calculated_bars_count: int = 0
    calculated_bars: List[CalculatedBar] = field(default_factory=list)


@dataclass
class ConcentratedForce:
    x: float
    value: float


@dataclass
class BendReinforcement:
    area: float
    upper_coordinate: float
    lower_coordinate: float
    delta_upper: float
    delta_lower: float


@dataclass
class StirrupSection:
    end_x: float
    area: float
    step: float


@dataclass
class TensileBar:
    x_min: float
    x_max: float
    delta_lower: float  # from the profile bottom
    area: float


@dataclass
class CompressedBar:
    x_min: float
    x_max: float
    delta_upper: float  # down from the rib top
    area: float


@dataclass
class Beam:
    number: int
    sidewalk_load_intensity: Optional[float] = None
    sidewalk_load_coordinate: Optional[float] = None
    fence_load_intensity: Optional[float] = None
    fence_load_coordinate: Optional[float] = None
    slab_reinforcement: SlabReinforcement = field(default_factory=SlabReinforcement)
    concentrated_forces: List[ConcentratedForce] = field(default_factory=list)
    section_coordinates: List[float] = field(default_factory=list)
    slab_beam_junction: Tuple[int, int] = (0, 0)
    slab_vute_junction: Tuple[int, int] = (0, 0)
    border_slab_junction: Optional[Tuple[int, int]] = None
    border_slab_junction_2: Optional[Tuple[int, int]] = None
    longitudinal_cut_lower: float = 0.0
    longitudinal_cut_upper: float = 0.0
    cross_section_contour: List[Point2D] = field(default_factory=list)
    changed_point_indices: List[int] = field(default_factory=list)  # 1-based
    changed_points: List[Point2D] = field(default_factory=list)
    bends: List[BendReinforcement] = field(default_factory=list)
    stirrup_sections: List[StirrupSection] = field(default_factory=list)
    tensile_bars: List[TensileBar] = field(default_factory=list)
    compressed_bars: List[CompressedBar] = field(default_factory=list)

    @property
    def has_loads(self) -> bool:
        return self.sidewalk_load_intensity is not None


@dataclass
class DetailedBarGroup:
    count: int
    diameter: float
    z_coordinates: List[float] = field(default_factory=list)


@dataclass
class PlateBarInfo:
    diameter: float
    step: float


@dataclass
class BeamDetailed:
    beam_number: int
    tensile_bars: List[DetailedBarGroup] = field(default_factory=list)
    compressed_bars: List[DetailedBarGroup] = field(default_factory=list)
    plate_bars: List[PlateBarInfo] = field(default_factory=list)

    @property
    def has_longitudinal_groups(self) -> bool:
        return bool(self.tensile_bars or self.compressed_bars)


@dataclass
class DetailedReinforcement:
    beam_details: List[BeamDetailed] = field(default_factory=list)

    def for_beam(self, number: int) -> Optional[BeamDetailed]:
        return next((d for d in self.beam_details if d.beam_number == number), None)


@dataclass
class ArgoDocument:
    source_file_name: str = ""
    file_code: Optional[ArgoFileCode] = None
    comment_line_count: int = 0
    comments: List[str] = field(default_factory=list)
    global_params: GlobalParameters = field(default_factory=GlobalParameters)
    beams: List[Beam] = field(default_factory=list)
    print_copies: Optional[int] = None
    detailed_reinforcement: Optional[DetailedReinforcement] = None

    def to_dict(self) -> Dict[str, Any]:
        """Plain-dict view for JSON dumps of the decoded source."""
        return asdict(self)
