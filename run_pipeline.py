# -*- coding: utf-8 -*-
"""
run_pipeline.py

Batch orchestrator ARGO -> PRSSM:
  1) Enumerate candidate ARGO files under the RAW directory (recursive)
  2) For each file: decode, convert, write <name>.prssm (subfolders mirrored)
  3) Aggregate per-file status and per-beam sanity rows

Writes (into the output directory):
  - <file name with '.' -> '_'>.prssm         one per converted input
  - <same>.argo.json                         with --dump-source
  - <same>.html, <same>_B<n>.html             with --plot (span view, one per beam)
  - pipeline_summary.json
  - beam_table.csv

A failing file is reported and skipped; nothing is written for it.
Exit code is 1 when any file failed.
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd

from config import OUT_DIR, RAW_DIR
from src.orchestration.PRSSM_translator import TranslationResult, translate
from src.parsing.argo_models import ArgoDocument
from src.parsing.argo_parser import parse_argo_file
from src.parsing.file_code import is_argo_file
from src.utilities.tagging import ConversionContext

logger = logging.getLogger("run_pipeline")


def _save(path: Path, data: Dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)


def find_argo_files(raw_dir: Path) -> List[Path]:
    return sorted(p for p in Path(raw_dir).rglob("*") if p.is_file() and is_argo_file(p))


def output_name(path: Path) -> str:
    """`S2K_236.05p` -> `S2K_236_05p`; extensions are appended by the caller."""
    return path.name.replace(".", "_")


def beam_rows(source: str, result: TranslationResult) -> List[Dict[str, Any]]:
    rows = []
    for geom, beam in zip(result.geometries, result.document.beams):
        section = beam.beam_parts[0].section
        rows.append({
            "file": source,
            "beam": beam.id,
            "section": section.name,
            "material": beam.material.name,
            "area_mm2": section.area,
            "Iyy": section.iyy,
            "Izz": section.izz,
            "position_mm": beam.position,
            "step_mm": beam.step,
            "rib_width_mm": geom.rib_width,
            "rib_height_mm": geom.rib_height,
            "mirrored": geom.mirrored,
            "longitudinal": len(beam.longitudinals),
            "transverse": len(beam.transverses),
        })
    return rows


def convert_file(path: Path) -> Tuple[ArgoDocument, TranslationResult]:
    doc = parse_argo_file(path)
    result = translate(doc, ConversionContext.for_file(path.name))
    return doc, result


def _write_outputs(path: Path, target_dir: Path, doc: ArgoDocument, result: TranslationResult,
                   dump_source: bool, plot: bool) -> Path:
    base = output_name(path)
    figures = []
    if plot:
        from view_utils import create_document_figure, create_section_figure
        figures.append((f"{base}.html", create_document_figure(
            result.geometries, result.document.beams, {"title": path.name})))
        for geom, beam in zip(result.geometries, result.document.beams):
            section = beam.beam_parts[0].section
            figures.append((f"{base}_B{beam.id}.html", create_section_figure(
                geom, beam, {"title": f"{section.name} ({beam.material.name})"})))

    out_path = target_dir / f"{base}.prssm"
    written: List[Path] = []
    try:
        written.append(out_path)
        _save(out_path, result.document.to_dict())
        if dump_source:
            written.append(target_dir / f"{base}.argo.json")
            _save(written[-1], doc.to_dict())
        for name, fig in figures:
            written.append(target_dir / name)
            fig.write_html(str(written[-1]))
    except Exception:
        # a failed file leaves no partial artifacts behind
        for p in written:
            p.unlink(missing_ok=True)
        raise
    return out_path


def run_batch(raw_dir: Path, out_dir: Path, dump_source: bool = False, plot: bool = False) -> Dict[str, Any]:
    raw_dir, out_dir = Path(raw_dir), Path(out_dir)
    files = find_argo_files(raw_dir)
    print(f"[PIPELINE] Found {len(files)} ARGO file(s) in {raw_dir}")

    records: List[Dict[str, Any]] = []
    rows: List[Dict[str, Any]] = []
    for path in files:
        rel = path.relative_to(raw_dir)
        try:
            doc, result = convert_file(path)
            out_path = _write_outputs(path, out_dir / rel.parent, doc, result, dump_source, plot)
        except Exception as e:
            logger.error("%s: %s", rel, e)
            print(f"[PIPELINE] FAIL {rel}: {e}")
            records.append({"file": str(rel), "status": "FAIL", "error": f"{type(e).__name__}: {e}"})
            continue
        print(f"[PIPELINE] OK   {rel} -> {out_path.relative_to(out_dir)} ({len(result.document.beams)} beams)")
        records.append({"file": str(rel), "status": "OK", "output": str(out_path),
                        "beams": len(result.document.beams)})
        rows.extend(beam_rows(str(rel), result))

    ok = sum(1 for r in records if r["status"] == "OK")
    summary = {
        "raw_dir": str(raw_dir),
        "out_dir": str(out_dir),
        "total": len(records),
        "succeeded": ok,
        "failed": len(records) - ok,
        "files": records,
    }
    _save(out_dir / "pipeline_summary.json", summary)
    out_dir.mkdir(parents=True, exist_ok=True)
    pd.DataFrame(rows, columns=[
        "file", "beam", "section", "material", "area_mm2", "Iyy", "Izz", "position_mm", "step_mm",
        "rib_width_mm", "rib_height_mm", "mirrored", "longitudinal", "transverse",
    ]).to_csv(out_dir / "beam_table.csv", index=False)

    print("\n===== PIPELINE SUMMARY =====")
    print(f"RAW dir      : {raw_dir}")
    print(f"Output dir   : {out_dir}")
    print(f"Converted    : {ok}")
    print(f"Failed       : {summary['failed']}")
    return summary


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Convert ARGO bridge-beam files to PRSSM documents")
    p.add_argument("--raw", default=None, help="Input directory; defaults to config.RAW_DIR")
    p.add_argument("--out", default=None, help="Output directory; defaults to config.OUT_DIR")
    p.add_argument("--dump-source", action="store_true", help="Also write the decoded ARGO document as JSON")
    p.add_argument("--plot", action="store_true", help="Also write a plotly HTML view of the sections")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = p.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    raw_dir = Path(args.raw) if args.raw else RAW_DIR
    out_dir = Path(args.out) if args.out else OUT_DIR
    if not raw_dir.is_dir():
        print(f"[PIPELINE] RAW directory not found: {raw_dir}")
        return 1

    summary = run_batch(raw_dir, out_dir, dump_source=args.dump_source, plot=args.plot)
    return 1 if summary["failed"] else 0


if __name__ == "__main__":
    sys.exit(main())
