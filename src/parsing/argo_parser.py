"""
Positional decoder for ARGO bridge-beam files.

The format has no keywords: every field is identified only by its place in
the token stream, and the presence of several blocks depends on values read
earlier.

Grammar (after the comment header)
----------------------------------
GLOBAL
    print level, concrete strength,
    tensile / compressed / slab / stirrup reinforcement types,
    support axis 1, support axis 2, inner support 1, inner support 2,
    full length, BEAMS=int, BEAMS × beam axis Z,
    ballast type, sleeper type, 2 × track axis Z,
    [diaphragm flag]                        only if BEAMS > 1
    n, n × (Z, Y)                           ballast prism contour
BEAM (repeated BEAMS times)
    [4 load scalars]                        edge beam or BEAMS <= 2
    slab bars: n; n × bend-point count; n × area; per bar count × (Z, Y)
    concentrated forces: n, n × (x, value)
    design sections: n, n × x
    slab-beam pair, slab-vute pair,
    [border-slab pair]                      not an inner beam
    [border-slab pair 2]                    BEAMS == 1
    2 longitudinal-cut flags
    contour: n, n × (Z, Y)
    changed points: n, [n × index, n × (Z, Y)]
    bends: n, n × (area, upper, lower, delta upper, delta lower)
    stirrups: n, n × (end x, area, step)
    tensile: n, n × (x min, x max, delta lower, area)
    compressed: n, n × (x min, x max, delta upper, area)
[print copies]
[DETAILED]                                  per beam: tensile groups,
                                            compressed groups, plate bars

A group count <= 0 in the detailed pass is a sentinel: it is pushed back
and ends that beam's list.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Tuple, Union

from src.parsing.argo_models import (
    ArgoDocument,
    Beam,
    BeamDetailed,
    BendReinforcement,
    CalculatedBar,
    CompressedBar,
    ConcentratedForce,
    DetailedBarGroup,
    DetailedReinforcement,
    GlobalParameters,
    PlateBarInfo,
    Point2D,
    SlabReinforcement,
    StirrupSection,
    TensileBar,
)
from src.parsing.file_code import ArgoFileCode
from src.parsing.token_reader import TokenStream, read_argo_file, split_argo_text
from src.utilities.errors import FormatError, UnexpectedEndOfStream

logger = logging.getLogger(__name__)


def _read_points(ts: TokenStream, count: int, what: str) -> List[Point2D]:
    return [Point2D(ts.read_float(f"{what} Z"), ts.read_float(f"{what} Y")) for _ in range(count)]


def _read_pair(ts: TokenStream, what: str) -> Tuple[int, int]:
    return ts.read_int(what), ts.read_int(what)


def _parse_global_parameters(ts: TokenStream) -> GlobalParameters:
    gp = GlobalParameters()
    gp.print_level = ts.read_float("print level")
    gp.concrete_strength = ts.read_float("concrete strength")

    gp.tensile_reinforcement_type = ts.read_float("tensile reinforcement type")
    gp.compressed_reinforcement_type = ts.read_float("compressed reinforcement type")
    gp.slab_reinforcement_type = ts.read_float("slab reinforcement type")
    gp.stirrup_type = ts.read_float("stirrup type")

    gp.support_axis_1 = ts.read_float("support axis 1")
    gp.support_axis_2 = ts.read_float("support axis 2")
    gp.inner_support_1 = ts.read_float("inner support 1")
    gp.inner_support_2 = ts.read_float("inner support 2")
    gp.full_length = ts.read_float("full length")

    gp.beam_count = ts.read_int("beam count")
    if gp.beam_count < 1:
        raise FormatError(f"Beam count must be at least 1, got {gp.beam_count}")
    gp.beam_coordinates = [ts.read_float("beam axis") for _ in range(gp.beam_count)]

    gp.ballast_type = ts.read_float("ballast type")
    gp.sleeper_type = ts.read_float("sleeper type")
    gp.track_axis_z = [ts.read_float("track axis"), ts.read_float("track axis")]

    if gp.beam_count > 1:
        gp.diaphragm_presence = ts.read_float("diaphragm flag")

    n = ts.read_int("ballast point count")
    gp.ballast_contour = _read_points(ts, n, "ballast point")

    logger.debug("Global parameters: concrete=%s, length=%s, beams=%d, ballast points=%d",
                 gp.concrete_strength, gp.full_length, gp.beam_count, n)
    return gp


def _parse_slab_reinforcement(ts: TokenStream) -> SlabReinforcement:
    slab = SlabReinforcement(calculated_bars_count=ts.read_int("slab bar count"))
    n = slab.calculated_bars_count
    if n <= 0:
        return slab

    bend_counts = [ts.read_int("bend point count") for _ in range(n)]
    areas = [ts.read_float("slab bar area") for _ in range(n)]
    for count, area in zip(bend_counts, areas):
        slab.calculated_bars.append(
            CalculatedBar(area=area, bend_points=_read_points(ts, count, "bend point"))
        )
    return slab


def _parse_beam(ts: TokenStream, number: int, total: int) -> Beam:
    beam = Beam(number=number)

    is_edge = number == 1 or number == total
    is_inner = total > 2 and not is_edge

    if is_edge or total <= 2:
        beam.sidewalk_load_intensity = ts.read_float("sidewalk load")
        beam.sidewalk_load_coordinate = ts.read_float("sidewalk load Z")
        beam.fence_load_intensity = ts.read_float("fence load")
        beam.fence_load_coordinate = ts.read_float("fence load Z")

    beam.slab_reinforcement = _parse_slab_reinforcement(ts)

    n = ts.read_int("concentrated force count")
    beam.concentrated_forces = [
        ConcentratedForce(ts.read_float("force x"), ts.read_float("force value")) for _ in range(n)
    ]

    n = ts.read_int("design section count")
    beam.section_coordinates = [ts.read_float("design section x") for _ in range(n)]

    beam.slab_beam_junction = _read_pair(ts, "slab-beam junction")
    beam.slab_vute_junction = _read_pair(ts, "slab-vute junction")
    if not is_inner:
        beam.border_slab_junction = _read_pair(ts, "border-slab junction")
    if total == 1:
        beam.border_slab_junction_2 = _read_pair(ts, "border-slab junction 2")

    beam.longitudinal_cut_lower = ts.read_float("longitudinal cut")
    beam.longitudinal_cut_upper = ts.read_float("longitudinal cut")

    n = ts.read_int("contour point count")
    beam.cross_section_contour = _read_points(ts, n, "contour point")

    n = ts.read_int("changed point count")
    if n > 0:
        beam.changed_point_indices = [ts.read_int("changed point index") for _ in range(n)]
        beam.changed_points = _read_points(ts, n, "changed point")

    n = ts.read_int("bend count")
    beam.bends = [
        BendReinforcement(
            area=ts.read_float("bend area"),
            upper_coordinate=ts.read_float("bend upper"),
            lower_coordinate=ts.read_float("bend lower"),
            delta_upper=ts.read_float("bend delta upper"),
            delta_lower=ts.read_float("bend delta lower"),
        )
        for _ in range(n)
    ]

    n = ts.read_int("stirrup section count")
    beam.stirrup_sections = [
        StirrupSection(
            end_x=ts.read_float("stirrup end x"),
            area=ts.read_float("stirrup area"),
            step=ts.read_float("stirrup step"),
        )
        for _ in range(n)
    ]

    n = ts.read_int("tensile bar count")
    beam.tensile_bars = [
        TensileBar(
            x_min=ts.read_float("tensile x min"),
            x_max=ts.read_float("tensile x max"),
            delta_lower=ts.read_float("tensile delta"),
            area=ts.read_float("tensile area"),
        )
        for _ in range(n)
    ]

    n = ts.read_int("compressed bar count")
    beam.compressed_bars = [
        CompressedBar(
            x_min=ts.read_float("compressed x min"),
            x_max=ts.read_float("compressed x max"),
            delta_upper=ts.read_float("compressed delta"),
            area=ts.read_float("compressed area"),
        )
        for _ in range(n)
    ]

    logger.debug(
        "Beam #%d: loads=%s, contour=%d pts, changed=%d, bends=%d, stirrups=%d, tensile=%d, compressed=%d",
        number, beam.has_loads, len(beam.cross_section_contour), len(beam.changed_points),
        len(beam.bends), len(beam.stirrup_sections), len(beam.tensile_bars), len(beam.compressed_bars),
    )
    return beam


def _read_bar_groups(ts: TokenStream, expected: int, groups: List[DetailedBarGroup]) -> None:
    """Append up to `expected` groups; a count <= 0 is pushed back and ends the list."""
    for _ in range(expected):
        if not ts.has_more():
            break
        count = ts.read_int("bar group count")
        if count <= 0:
            ts.push_back()
            break
        diameter = ts.read_float("bar diameter")
        zs = [ts.read_float("bar Z") for _ in range(count)]
        groups.append(DetailedBarGroup(count=count, diameter=diameter, z_coordinates=zs))


def _parse_detailed_reinforcement(ts: TokenStream, beams: List[Beam]) -> DetailedReinforcement:
    detailed = DetailedReinforcement()
    for beam in beams:
        bd = BeamDetailed(beam_number=beam.number)
        detailed.beam_details.append(bd)
        try:
            _read_bar_groups(ts, len(beam.tensile_bars), bd.tensile_bars)
            _read_bar_groups(ts, len(beam.compressed_bars), bd.compressed_bars)
            for _ in range(max(beam.slab_reinforcement.calculated_bars_count, 0)):
                if not ts.has_more():
                    break
                bd.plate_bars.append(PlateBarInfo(ts.read_float("plate bar diameter"),
                                                  ts.read_float("plate bar step")))
        except UnexpectedEndOfStream as e:
            logger.warning("Detailed reinforcement truncated in beam #%d: %s", beam.number, e)
            break
        logger.debug("Detailed beam #%d: tensile=%d, compressed=%d, plate=%d",
                     beam.number, len(bd.tensile_bars), len(bd.compressed_bars), len(bd.plate_bars))
        if not ts.has_more():
            break
    return detailed


def parse_argo(text: str, file_name: str = "") -> ArgoDocument:
    """
    Decode ARGO text into an `ArgoDocument`.

    Raises
    ------
    FormatError
        Malformed header, non-numeric token, or beam count < 1.
    UnexpectedEndOfStream
        The data ends before the main grammar is complete.
    """
    comments, tokens = split_argo_text(text)
    ts = TokenStream(tokens)
    logger.info("%s: %d comment lines, %d tokens", file_name or "<text>", len(comments), len(tokens))

    doc = ArgoDocument(
        source_file_name=Path(file_name).name if file_name else "",
        file_code=ArgoFileCode.parse(file_name) if file_name else None,
        comment_line_count=len(comments),
        comments=comments,
    )
    doc.global_params = _parse_global_parameters(ts)

    total = doc.global_params.beam_count
    doc.beams = [_parse_beam(ts, i + 1, total) for i in range(total)]

    if ts.has_more():
        doc.print_copies = ts.read_int("print copies")
        if ts.has_more():
            doc.detailed_reinforcement = _parse_detailed_reinforcement(ts, doc.beams)

    if ts.has_more():
        logger.warning("%s: %d trailing tokens ignored", file_name or "<text>", len(ts) - ts.position)
    return doc


def parse_argo_file(path: Union[str, Path]) -> ArgoDocument:
    """Read, decode (legacy code page) and parse one ARGO file."""
    return parse_argo(read_argo_file(path), str(path))
