# prssm_models.py
"""
PRSSM target document model.

Dataclasses use snake_case attributes; `to_dict()` emits the PascalCase keys
the PRSSM reader expects, in the reader's field order, with None-valued
fields left out. Lengths are millimeters, section properties mm-based, the
section centre offsets Yc/Zc meters.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


def _drop_none(d: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in d.items() if v is not None}


@dataclass
class PrssmPoint:
    x: float = 0.0
    y: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {"X": self.x, "Y": self.y}


@dataclass
class PrssmProfilePoint:
    x: float
    y: float
    is_anchor: bool = False
    is_profile_point: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {"X": self.x, "Y": self.y, "IsAnchor": self.is_anchor, "IsProfilePoint": self.is_profile_point}


@dataclass
class PrssmProfileRegion:
    region_type: int = 0  # 0 = body
    points: List[PrssmProfilePoint] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"RegionType": self.region_type, "Points": [p.to_dict() for p in self.points]}


@dataclass
class PrssmShape:
    id: int = 1
    name: str = "custom"
    cad_type: int = 0
    beta: float = 0.0
    is_reflect_x: bool = False
    is_reflect_y: bool = False
    location: PrssmPoint = field(default_factory=PrssmPoint)
    profile: List[PrssmProfileRegion] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "Id": self.id,
            "CadType": self.cad_type,
            "Name": self.name,
            "Beta": self.beta,
            "IsReflectX": self.is_reflect_x,
            "IsReflectY": self.is_reflect_y,
            "Location": self.location.to_dict(),
            "Links": [],
            "Profile": [r.to_dict() for r in self.profile],
        }


@dataclass
class PrssmSection:
    id: int
    name: str
    yc: float = 0.0
    zc: float = 0.0
    perimeter: float = 0.0
    area: float = 0.0
    iyy: float = 0.0
    izz: float = 0.0
    iyz: float = 0.0
    it: float = 0.0
    syy: float = 0.0
    szz: float = 0.0
    byy: float = 0.0
    bzz: float = 0.0
    wyy_plus: float = 0.0
    wyy_minus: float = 0.0
    wzz_plus: float = 0.0
    wzz_minus: float = 0.0
    offset_type: int = 11  # rib bottom-axis anchoring
    offset_y: float = 0.0
    offset_z: float = 0.0
    section_type: int = 1
    weight_factor: float = 1.0
    shapes: List[PrssmShape] = field(default_factory=list)
    stress_points: List[PrssmPoint] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "Name": self.name,
            "SectionType": self.section_type,
            "Yc": self.yc,
            "Zc": self.zc,
            "Perimeter": self.perimeter,
            "Area": self.area,
            "Iyy": self.iyy,
            "Izz": self.izz,
            "Iyz": self.iyz,
            "It": self.it,
            "Syy": self.syy,
            "Szz": self.szz,
            "Byy": self.byy,
            "Bzz": self.bzz,
            "WyyPlus": self.wyy_plus,
            "WyyMinus": self.wyy_minus,
            "WzzPlus": self.wzz_plus,
            "WzzMinus": self.wzz_minus,
            "OffsetType": self.offset_type,
            "OffsetY": self.offset_y,
            "OffsetZ": self.offset_z,
            "Shapes": [s.to_dict() for s in self.shapes],
            "StressPoints": [p.to_dict() for p in self.stress_points],
            "WeightFactor": self.weight_factor,
            "Id": self.id,
        }


@dataclass
class PrssmMaterial:
    id: int
    name: str
    standard_material_type: int
    young_modulus: float
    material_type: int = 0  # 0 = concrete
    poisson_ratio: float = 0.2
    specific_weight: float = 2.45e-5
    thermal_coefficient: float = 1e-5
    strength: float = 0.0
    compressive_strength: float = 0.0
    gamma_m: float = 1.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "Name": self.name,
            "MaterialType": self.material_type,
            "StandartMaterialType": self.standard_material_type,
            "YoungModulus": self.young_modulus,
            "PoissonRatio": self.poisson_ratio,
            "SpecificWeight": self.specific_weight,
            "ThermalCoefficient": self.thermal_coefficient,
            "Strength": self.strength,
            "CompressiveStrength": self.compressive_strength,
            "GammaM": self.gamma_m,
            "Id": self.id,
        }


@dataclass
class PrssmReinforcementSegment:
    length: float
    angle: float = 0.0
    height: float = 0.0
    radius: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {"Length": self.length, "Angle": self.angle, "Height": self.height, "Radius": self.radius}


@dataclass
class PrssmLongitudinalReinforcement:
    diameter: float
    items_at_row: int
    step_element: float
    offset_from_start: float
    y_offset: float
    z_offset: float
    binding_point: PrssmPoint
    segments: List[PrssmReinforcementSegment] = field(default_factory=list)
    n_at_item: int = 1
    angle: float = 0.0
    radius: float = 0.0
    reinforcement_type: int = 0
    name: Optional[str] = None

    @property
    def segment_count(self) -> int:
        return len(self.segments)

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none({
            "Angle": self.angle,
            "Radius": self.radius,
            "ReinforcementType": self.reinforcement_type,
            "Name": self.name,
            "Diameter": self.diameter,
            "NAtItem": self.n_at_item,
            "ItemsAtRow": self.items_at_row,
            "StepElement": self.step_element,
            "OffsetFromStart": self.offset_from_start,
            "YOffset": self.y_offset,
            "ZOffset": self.z_offset,
            "SegmentCount": self.segment_count,
            "Segments": [s.to_dict() for s in self.segments],
            "BindingPoint": self.binding_point.to_dict(),
        })


@dataclass
class PrssmTransverseReinforcement:
    diameter: float
    items_at_row: int
    step_element: float
    offset_from_start: float
    binding_point: PrssmPoint
    segments: List[PrssmReinforcementSegment] = field(default_factory=list)
    y_offset: float = 0.0
    z_offset: float = 0.0
    n_at_item: int = 1
    is_closed: bool = False
    name: Optional[str] = None

    @property
    def segment_count(self) -> int:
        return len(self.segments)

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none({
            "IsClosed": self.is_closed,
            "Name": self.name,
            "Diameter": self.diameter,
            "NAtItem": self.n_at_item,
            "ItemsAtRow": self.items_at_row,
            "StepElement": self.step_element,
            "OffsetFromStart": self.offset_from_start,
            "YOffset": self.y_offset,
            "ZOffset": self.z_offset,
            "SegmentCount": self.segment_count,
            "Segments": [s.to_dict() for s in self.segments],
            "BindingPoint": self.binding_point.to_dict(),
        })


@dataclass
class PrssmBeamPart:
    id: int
    section: PrssmSection
    length: float
    division: int = 1
    is_start_pier: bool = False
    is_end_pier: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "Id": self.id,
            "Section": self.section.to_dict(),
            "Length": self.length,
            "Division": self.division,
            "IsStartPier": self.is_start_pier,
            "IsEndPier": self.is_end_pier,
        }


@dataclass
class PrssmBeam:
    id: int
    material: PrssmMaterial
    position: float = 0.0
    step: float = 0.0
    r: float = 0.0
    beam_parts: List[PrssmBeamPart] = field(default_factory=list)
    longitudinals: List[PrssmLongitudinalReinforcement] = field(default_factory=list)
    transverses: List[PrssmTransverseReinforcement] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "Id": self.id,
            "BeamParts": [p.to_dict() for p in self.beam_parts],
            "BeamPartsNumber": len(self.beam_parts),
            "Material": self.material.to_dict(),
            "Step": self.step,
            "Position": self.position,
            "R": self.r,
            "LongitudinalReinforcementNumber": len(self.longitudinals),
            "TransverseReinforcementNumber": len(self.transverses),
            "ReinforcementLongitudinals": [r.to_dict() for r in self.longitudinals],
            "ReinforcementTransverses": [r.to_dict() for r in self.transverses],
        }


@dataclass
class PrssmSlab:
    width: str = "0"
    thickness: float = 0.0
    k1: float = 0.0
    k2: float = 0.0
    panel_number: int = 0
    delta_x: float = 0.0
    delta_z: float = 0.0
    is_grouped: bool = False
    material: Optional[PrssmMaterial] = None

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none({
            "Thickness": self.thickness,
            "K1": self.k1,
            "K2": self.k2,
            "PanelNumber": self.panel_number,
            "DeltaX": self.delta_x,
            "DeltaZ": self.delta_z,
            "Width": self.width,
            "IsGrouped": self.is_grouped,
            "Material": self.material.to_dict() if self.material else None,
        })


@dataclass
class PrssmSpanType:
    key: str = "StraightSpan"
    name: str = "ПС на прямой"

    def to_dict(self) -> Dict[str, Any]:
        return {"Key": self.key, "Name": self.name}


@dataclass
class PrssmDocument:
    beams_number: int = 0
    beams: List[PrssmBeam] = field(default_factory=list)
    selected_slab: PrssmSlab = field(default_factory=PrssmSlab)
    selected_beam_span_type: PrssmSpanType = field(default_factory=PrssmSpanType)
    r: float = 0.0
    angle: float = 0.0
    slant: float = 0.0
    braces_number: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Root PRSSM object, ready for `json.dumps`."""
        return {
            "BeamsNumber": self.beams_number,
            "Beams": [b.to_dict() for b in self.beams],
            "R": self.r,
            "Angle": self.angle,
            "Slant": self.slant,
            "SelectedSlab": self.selected_slab.to_dict(),
            "BracesNumber": self.braces_number,
            "SelectedBeamSpanType": self.selected_beam_span_type.to_dict(),
        }
