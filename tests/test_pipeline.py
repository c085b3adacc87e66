#!/usr/bin/env python3
"""
Test the batch pipeline on a temporary RAW tree.

Verifies:
1. Candidate selection, output naming and mirrored subfolders
2. Per-file failure isolation and the summary / CSV artifacts
3. Optional source dump and HTML views (span and per beam)
4. A write failure leaves no partial artifacts
5. CLI exit codes
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

import json

import pandas as pd

import view_utils
from argo_samples import single_rect_text
from run_pipeline import find_argo_files, main, output_name, run_batch


def _raw_tree(tmp_path: Path, with_broken: bool = True) -> Path:
    raw = tmp_path / "raw"
    (raw / "span14").mkdir(parents=True)
    (raw / "span14" / "S1K_236.05p").write_bytes(
        single_rect_text(tensile=[(0.0, 2360.0, 5.0, 12.0)]).encode("cp866"))
    (raw / "notes.txt").write_text("not an input", encoding="utf-8")
    if with_broken:
        (raw / "S1K_237.06").write_bytes(b"garbage\n1 2 3\n")
    return raw


def test_output_name():
    assert output_name(Path("S2K_236.05p")) == "S2K_236_05p"


def test_find_argo_files(tmp_path):
    raw = _raw_tree(tmp_path)
    names = [p.name for p in find_argo_files(raw)]
    assert sorted(names) == ["S1K_236.05p", "S1K_237.06"]


def test_run_batch_isolates_failures(tmp_path):
    raw = _raw_tree(tmp_path)
    out = tmp_path / "out"
    summary = run_batch(raw, out, dump_source=True)

    assert summary["total"] == 2
    assert summary["succeeded"] == 1
    assert summary["failed"] == 1
    failed = next(r for r in summary["files"] if r["status"] == "FAIL")
    assert "FormatError" in failed["error"]
    assert not (out / "S1K_237_06.prssm").exists()

    prssm_path = out / "span14" / "S1K_236_05p.prssm"
    data = json.loads(prssm_path.read_text(encoding="utf-8"))
    assert data["BeamsNumber"] == 1
    assert data["Beams"][0]["BeamParts"][0]["Section"]["Name"] == "S1K_236_Б1"

    source = json.loads((out / "span14" / "S1K_236_05p.argo.json").read_text(encoding="utf-8"))
    assert source["global_params"]["beam_count"] == 1

    on_disk = json.loads((out / "pipeline_summary.json").read_text(encoding="utf-8"))
    assert on_disk["failed"] == 1

    table = pd.read_csv(out / "beam_table.csv")
    assert len(table) == 1
    assert table.loc[0, "section"] == "S1K_236_Б1"
    assert table.loc[0, "longitudinal"] == 1


def test_plot_writes_html(tmp_path):
    raw = _raw_tree(tmp_path, with_broken=False)
    out = tmp_path / "out"
    summary = run_batch(raw, out, plot=True)
    assert summary["failed"] == 0
    assert (out / "span14" / "S1K_236_05p.html").exists()
    assert (out / "span14" / "S1K_236_05p_B1.html").exists()


class _BrokenFigure:
    def write_html(self, path):
        raise OSError("disk full")


def test_failed_write_removes_partial_outputs(tmp_path, monkeypatch):
    monkeypatch.setattr(view_utils, "create_section_figure", lambda *args, **kwargs: _BrokenFigure())
    raw = _raw_tree(tmp_path, with_broken=False)
    out = tmp_path / "out"
    summary = run_batch(raw, out, dump_source=True, plot=True)

    assert summary["failed"] == 1
    assert "OSError: disk full" in summary["files"][0]["error"]
    assert not (out / "span14" / "S1K_236_05p.prssm").exists()
    assert not (out / "span14" / "S1K_236_05p.argo.json").exists()
    assert not (out / "span14" / "S1K_236_05p.html").exists()


def test_cli_exit_codes(tmp_path):
    raw = _raw_tree(tmp_path)
    assert main(["--raw", str(raw), "--out", str(tmp_path / "a")]) == 1

    clean = _raw_tree(tmp_path / "clean", with_broken=False)
    assert main(["--raw", str(clean), "--out", str(tmp_path / "b")]) == 0
    assert main(["--raw", str(tmp_path / "missing")]) == 1
