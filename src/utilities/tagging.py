# tagging.py
"""
Per-document ID and naming state for one ARGO -> PRSSM conversion.

Section and material IDs are counters that restart for every document, so a
`ConversionContext` is created per input file and threaded through the
translator instead of living in module globals.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

DEFAULT_SECTION_BASE = "Сечение"


@dataclass
class ConversionContext:
    section_base_name: str = DEFAULT_SECTION_BASE
    next_section_id: int = 1
    next_material_id: int = 1

    @classmethod
    def for_file(cls, file_name: Optional[str]) -> "ConversionContext":
        """Context whose section names derive from the file name without extension."""
        ctx = cls()
        if file_name:
            stem = Path(file_name).stem
            if stem:
                ctx.section_base_name = stem
        return ctx

    def section_id(self) -> int:
        sid = self.next_section_id
        self.next_section_id += 1
        return sid

    def material_id(self) -> int:
        mid = self.next_material_id
        self.next_material_id += 1
        return mid

    def section_name(self, beam_index: int) -> str:
        """Name of the section of the beam at 0-based `beam_index`."""
        return f"{self.section_base_name}_Б{beam_index + 1}"
