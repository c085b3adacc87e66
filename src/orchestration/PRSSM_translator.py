# -*- coding: utf-8 -*-
"""
PRSSM_translator.py
Converts a decoded ARGO document into a PRSSM document.

Per beam, in order:
  1) Normalize the contour (changed points, mm, mirroring, centering)
  2) Section properties + rib detection          -> PrssmSection
  3) Position across the span (overlap shift)    -> Position / Step
  4) Binding point at the rib bottom-left corner
  5) Longitudinal reinforcement (detailed groups or area estimate)
  6) Stirrups
Then the slab width from the first and last beam positions.

A `ConversionContext` carries the section/material counters for one
document; pass a fresh one per file.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from config import CM_TO_MM
from src.model_building.beams import BeamAssembler, format_slab_width, slab_width
from src.model_building.contour import NormalizedBeamGeometry, normalize_beam_geometry
from src.model_building.prssm_models import (
    PrssmBeam,
    PrssmBeamPart,
    PrssmDocument,
    PrssmPoint,
    PrssmProfilePoint,
    PrssmProfileRegion,
    PrssmSection,
    PrssmShape,
    PrssmSlab,
)
from src.model_building.reinforcement import binding_point, map_longitudinal, map_transverse
from src.parsing.argo_models import ArgoDocument
from src.properties.material_property_calculator import calculate_material
from src.utilities.tagging import ConversionContext

logger = logging.getLogger(__name__)


@dataclass
class TranslationResult:
    document: PrssmDocument
    geometries: List[NormalizedBeamGeometry] = field(default_factory=list)


def build_section(geom: NormalizedBeamGeometry, section_id: int, name: str) -> PrssmSection:
    """PRSSM section for a normalized contour, anchored at the rib bottom axis."""
    p = geom.properties
    region = PrssmProfileRegion(region_type=0, points=[
        PrssmProfilePoint(round(x, 2), round(y, 2), is_anchor=False, is_profile_point=flag)
        for (x, y), flag in zip(geom.points, geom.profile_flags)
    ])
    bottom_y = geom.rib_bottom_left[1]
    return PrssmSection(
        id=section_id,
        name=name,
        yc=round(geom.rib_axis_x / 1000.0, 5),
        zc=round(-bottom_y / 1000.0, 5),
        perimeter=p.perimeter,
        area=p.area,
        iyy=p.Iyy,
        izz=p.Izz,
        iyz=p.Iyz,
        it=p.It,
        syy=p.Syy,
        szz=p.Szz,
        byy=p.Byy,
        bzz=p.Bzz,
        wyy_plus=p.WyyPlus,
        wyy_minus=p.WyyMinus,
        wzz_plus=p.WzzPlus,
        wzz_minus=p.WzzMinus,
        offset_type=11,
        offset_y=round(geom.rib_axis_x, 2),
        offset_z=round(bottom_y, 2),
        shapes=[PrssmShape(id=1, name="custom", profile=[region])],
        stress_points=[PrssmPoint(round(x, 2), round(y, 2)) for x, y in p.stress_points],
    )


def translate(doc: ArgoDocument, context: Optional[ConversionContext] = None) -> TranslationResult:
    """
    Convert every beam of `doc`.

    Raises
    ------
    DegenerateGeometryError
        A beam contour has fewer than 3 distinct points.
    """
    ctx = context or ConversionContext.for_file(doc.source_file_name)
    gp = doc.global_params
    axes = gp.beam_coordinates

    material = calculate_material(gp.concrete_strength, ctx.material_id())
    first_axis = axes[0] if axes else 0.0
    mid_axis = (axes[0] + axes[-1]) / 2.0 if axes else 0.0

    result = TranslationResult(document=PrssmDocument(beams_number=gp.beam_count))
    assembler = BeamAssembler(first_axis)

    for i, beam in enumerate(doc.beams):
        axis_z = axes[i]
        geom = normalize_beam_geometry(beam, axis_z, mid_axis)
        result.geometries.append(geom)

        section = build_section(geom, ctx.section_id(), ctx.section_name(i))
        placement = assembler.place(axis_z, geom.left_from_rib, geom.right_from_rib)

        pb = PrssmBeam(id=i + 1, material=material, position=placement.position, step=placement.step)
        pb.beam_parts.append(PrssmBeamPart(id=1, section=section, length=gp.full_length * CM_TO_MM))

        bp = binding_point(placement.position, geom)
        detailed = doc.detailed_reinforcement.for_beam(beam.number) if doc.detailed_reinforcement else None
        pb.longitudinals = map_longitudinal(beam, detailed, geom, bp)
        pb.transverses = map_transverse(beam, geom, bp)

        result.document.beams.append(pb)
        logger.info("Beam #%d -> %s: A=%.0f mm2, position=%.1f, step=%.1f, long=%d, trans=%d",
                    beam.number, section.name, section.area, pb.position, pb.step,
                    len(pb.longitudinals), len(pb.transverses))

    width = slab_width([b.position for b in result.document.beams])
    result.document.selected_slab = PrssmSlab(width=format_slab_width(width))
    return result


def convert(doc: ArgoDocument, context: Optional[ConversionContext] = None) -> PrssmDocument:
    """Convert a decoded ARGO document to a PRSSM document."""
    return translate(doc, context).document
