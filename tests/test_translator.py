#!/usr/bin/env python3
"""
End-to-end ARGO text -> PRSSM document.

Verifies:
1. Single rectangular beam: section properties, offsets, naming
2. Multi-beam span: ids, positions, slab width, mirroring of edge beams
3. JSON layout of the PRSSM document
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

import json

import pytest

from argo_samples import RIGHT_CANTILEVER, T_BEAM, document_text, shifted, single_rect_text
from src.orchestration.PRSSM_translator import convert, translate
from src.parsing.argo_parser import parse_argo
from src.utilities.errors import DegenerateGeometryError
from src.utilities.tagging import ConversionContext


def test_single_rectangular_beam():
    doc = parse_argo(single_rect_text(tensile=[(0.0, 2360.0, 5.0, 12.0)], stirrups=[(1180.0, 1.0, 20.0)]),
                     "S1K_236.05p")
    prssm = convert(doc)

    assert prssm.beams_number == 1
    beam = prssm.beams[0]
    assert (beam.id, beam.position, beam.step) == (1, 0.0, 0.0)
    assert beam.material.name == "Б25"

    part = beam.beam_parts[0]
    assert part.length == pytest.approx(23600.0)
    assert part.division == 1
    assert not part.is_start_pier and not part.is_end_pier

    sec = part.section
    assert sec.name == "S1K_236_Б1"
    assert sec.id == 1
    assert sec.area == pytest.approx(320000.0)
    assert sec.iyy == pytest.approx(400 * 800 ** 3 / 12)
    assert sec.yc == pytest.approx(0.0, abs=1e-9)
    assert sec.zc == pytest.approx(0.4)
    assert sec.offset_type == 11
    assert sec.offset_z == pytest.approx(-400.0)
    assert len(sec.stress_points) == 4
    assert len(sec.shapes[0].profile[0].points) == 4

    assert [(r.diameter, r.items_at_row) for r in beam.longitudinals] == [(40, 1)]
    assert len(beam.transverses) == 1
    assert beam.longitudinals[0].binding_point.x == pytest.approx(-200.0)
    assert prssm.selected_slab.width == "0"


def test_multi_beam_span():
    axes = [0.0, 150.0, 300.0]
    text = document_text(axes, [
        dict(contour=shifted(RIGHT_CANTILEVER, 0.0)),
        dict(contour=shifted(T_BEAM, 150.0)),
        dict(contour=shifted(RIGHT_CANTILEVER, 300.0)),
    ], concrete=40.0)
    doc = parse_argo(text, "S3K_236.01p")
    result = translate(doc)
    prssm = result.document

    assert [b.id for b in prssm.beams] == [1, 2, 3]
    assert [b.beam_parts[0].section.id for b in prssm.beams] == [1, 2, 3]
    assert all(b.material is prssm.beams[0].material for b in prssm.beams)
    assert prssm.beams[0].material.name == "Б40"

    # first edge beam mirrored to overhang left, last keeps its right overhang
    assert result.geometries[0].mirrored
    assert not result.geometries[2].mirrored

    positions = [b.position for b in prssm.beams]
    assert positions == [pytest.approx(0.0), pytest.approx(1500.0), pytest.approx(3000.0)]
    assert prssm.beams[1].step == pytest.approx(1500.0)
    assert prssm.selected_slab.width == "3000"


def test_overlapping_beams_are_shifted():
    # flanges 1200 mm wide on axes 1000 mm apart -> 200 mm overlap
    text = document_text([0.0, 100.0], [dict(contour=T_BEAM), dict(contour=shifted(T_BEAM, 100.0))])
    prssm = convert(parse_argo(text))
    assert prssm.beams[1].position == pytest.approx(1200.0)
    assert prssm.selected_slab.width == "1200"


def test_context_counters_are_per_document():
    doc = parse_argo(single_rect_text(), "S1K_236.05p")
    ctx = ConversionContext.for_file("other.05")
    convert(doc, ctx)
    second = convert(doc, ctx)
    assert second.beams[0].beam_parts[0].section.id == 2
    assert second.beams[0].beam_parts[0].section.name == "other_Б1"
    assert convert(doc).beams[0].beam_parts[0].section.id == 1


def test_document_json_layout():
    prssm = convert(parse_argo(single_rect_text(tensile=[(0.0, 2360.0, 5.0, 12.0)]), "S1K_236.05p"))
    d = json.loads(json.dumps(prssm.to_dict(), ensure_ascii=False))

    assert list(d)[:2] == ["BeamsNumber", "Beams"]
    assert d["SelectedBeamSpanType"] == {"Key": "StraightSpan", "Name": "ПС на прямой"}
    assert "Material" not in d["SelectedSlab"]
    assert d["SelectedSlab"]["Width"] == "0"

    beam = d["Beams"][0]
    assert beam["BeamPartsNumber"] == 1
    assert beam["LongitudinalReinforcementNumber"] == 1
    assert beam["TransverseReinforcementNumber"] == 0
    long_ = beam["ReinforcementLongitudinals"][0]
    assert "Name" not in long_
    assert long_["SegmentCount"] == 1
    assert set(long_["BindingPoint"]) == {"X", "Y"}

    section = beam["BeamParts"][0]["Section"]
    assert section["Shapes"][0]["Name"] == "custom"
    assert section["Shapes"][0]["Profile"][0]["RegionType"] == 0


def test_degenerate_beam_fails_conversion():
    doc = parse_argo(document_text([0.0], [dict(contour=[(0.0, 0.0), (10.0, 0.0)])]))
    with pytest.raises(DegenerateGeometryError):
        convert(doc)
