# view_utils.py
"""
Plotting helpers for checking converted beam sections.

Public API:
- create_section_figure(geom, beam, options) -> plotly.graph_objs.Figure
- create_document_figure(geometries, beams, options) -> plotly.graph_objs.Figure

Where:
    geom : NormalizedBeamGeometry  (centered contour, rib data, stress points)
    beam : PrssmBeam               (longitudinal rows to overlay; optional)
Options:
    show_stress_points, show_rib, show_bars, show_centroid
    bar_marker_scale : float   # marker size per mm of bar diameter

Notes:
- Sections are drawn in the centered frame (centroid at 0, 0), mm.
- Bars are reconstructed from each row's offsets relative to the rib
  bottom-left corner and its spacing.
- The document figure lays sections side by side at their beam positions,
  shifted so every rib axis lands on its beam position.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional, Sequence, Tuple
from plotly import graph_objects as go

from src.model_building.contour import NormalizedBeamGeometry
from src.model_building.prssm_models import PrssmBeam

Point = Tuple[float, float]


def _closed(points: Sequence[Point], dx: float = 0.0) -> Tuple[List[float], List[float]]:
    xs = [p[0] + dx for p in points]
    ys = [p[1] for p in points]
    if points:
        xs.append(xs[0])
        ys.append(ys[0])
    return xs, ys


def bar_positions(geom: NormalizedBeamGeometry, beam: PrssmBeam) -> List[Tuple[float, float, float]]:
    """(x, y, diameter) of every longitudinal bar, centered frame."""
    lx, ly = geom.rib_bottom_left
    out = []
    for row in beam.longitudinals:
        for k in range(row.items_at_row):
            out.append((lx + row.y_offset + k * row.step_element, ly + row.z_offset, row.diameter))
    return out


def _section_traces(geom: NormalizedBeamGeometry, beam: Optional[PrssmBeam],
                    opts: Dict[str, Any], dx: float = 0.0, label: str = "") -> List[Any]:
    traces: List[Any] = []
    xs, ys = _closed(geom.points, dx)
    traces.append(go.Scatter(x=xs, y=ys, mode="lines", fill="toself",
                             name=f"{label}profile".strip(), line=dict(width=2)))

    if opts.get("show_centroid", True):
        traces.append(go.Scatter(x=[dx], y=[0.0], mode="markers", name=f"{label}centroid".strip(),
                                 marker=dict(symbol="cross", size=10)))

    if opts.get("show_stress_points", True) and geom.stress_points:
        traces.append(go.Scatter(
            x=[p[0] + dx for p in geom.stress_points], y=[p[1] for p in geom.stress_points],
            mode="markers+text", text=["1", "2", "3", "4"][:len(geom.stress_points)],
            textposition="top center", name=f"{label}stress points".strip(),
            marker=dict(symbol="diamond", size=9),
        ))

    if opts.get("show_rib", True):
        (lx, ly), (rx, ry) = geom.rib_bottom_left, geom.rib_bottom_right
        traces.append(go.Scatter(
            x=[lx + dx, rx + dx, geom.rib_axis_x + dx, geom.rib_axis_x + dx],
            y=[ly, ry, ly, geom.rib_top_y],
            mode="markers", name=f"{label}rib".strip(), marker=dict(symbol="square-open", size=8),
        ))

    if beam is not None and opts.get("show_bars", True):
        bars = bar_positions(geom, beam)
        if bars:
            scale = float(opts.get("bar_marker_scale", 0.4))
            traces.append(go.Scatter(
                x=[b[0] + dx for b in bars], y=[b[1] for b in bars], mode="markers",
                name=f"{label}bars".strip(), marker=dict(size=[max(4.0, b[2] * scale) for b in bars]),
            ))
    return traces


def create_section_figure(geom: NormalizedBeamGeometry, beam: Optional[PrssmBeam] = None,
                          options: Optional[Dict[str, Any]] = None) -> go.Figure:
    opts = options or {}
    fig = go.Figure(data=_section_traces(geom, beam, opts))
    fig.update_layout(
        title=opts.get("title", "Section"),
        xaxis_title="X (mm)", yaxis_title="Y (mm)",
        yaxis=dict(scaleanchor="x", scaleratio=1),
        showlegend=True,
    )
    return fig


def create_document_figure(geometries: Sequence[NormalizedBeamGeometry], beams: Sequence[PrssmBeam],
                           options: Optional[Dict[str, Any]] = None) -> go.Figure:
    opts = dict(options or {})
    opts.setdefault("show_centroid", False)
    data: List[Any] = []
    for geom, beam in zip(geometries, beams):
        dx = beam.position - geom.rib_axis_x
        data.extend(_section_traces(geom, beam, opts, dx=dx, label=f"B{beam.id} "))
    fig = go.Figure(data=data)
    fig.update_layout(
        title=opts.get("title", "Span cross-section"),
        xaxis_title="X (mm)", yaxis_title="Y (mm)",
        yaxis=dict(scaleanchor="x", scaleratio=1),
    )
    return fig
