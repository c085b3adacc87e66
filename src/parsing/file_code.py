# file_code.py
"""
ARGO file-name conventions.

Typical names look like ``S2K_236.05p``:

- first letter  : load standard (A=1907, B=1925, N=1931, S=1962, I=individual)
- second char   : number of main ribs (0 = slab span without cantilevers)
- after '_'     : span length up to the dot
- after '.'     : two-digit serial number, optional type-suffix letter

`ArgoFileCode.parse` never fails: parts it cannot read keep their defaults.
`is_argo_file` is the heuristic the batch pipeline uses to pick inputs.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict, Optional, Union

LOAD_STANDARDS: Dict[str, tuple] = {
    "A": ("1907", 1907),
    "B": ("1925", 1925),
    "N": ("1931", 1931),
    "S": ("1962", 1962),
    "I": ("Individual", None),
}

_SLAB_BLOCKS = {
    "a": "1 block", "b": "1 block", "c": "1 block",
    "d": "2 blocks", "e": "2 blocks", "f": "2 blocks",
    "g": "3 blocks", "h": "3 blocks", "i": "3 blocks",
    "j": "4 blocks", "k": "4 blocks", "l": "4 blocks",
}

_RIBBED_TYPES = {
    "k": "Short cantilevers",
    "d": "Long cantilevers",
    "l": "Left long",
    "r": "Right long",
    "p": "Symmetric",
    "s": "Standard",
    "z": "Special",
}

_SKIP_EXTENSIONS = {
    ".json", ".prssm", ".txt", ".doc", ".docx", ".pdf", ".exe", ".dll",
    ".hex", ".bat", ".cmd", ".html", ".htm", ".js", ".css", ".lic", ".sys",
    ".aal", ".log", ".tmp", ".bak", ".xml", ".ini", ".cfg", ".gru", ".csv",
}


def type_description(suffix: str, rib_count: int) -> str:
    s = suffix.lower()
    if rib_count == 0 and s in _SLAB_BLOCKS:
        return _SLAB_BLOCKS[s]
    return _RIBBED_TYPES.get(s, s.upper())


@dataclass
class ArgoFileCode:
    original_file_name: str = ""
    load_code: str = ""
    load_name: str = "Unknown"
    load_year: Optional[int] = None
    main_rib_count: int = 0
    span_length: int = 0
    serial_number: int = 0
    type_suffix: Optional[str] = None
    type_description: Optional[str] = None

    @property
    def is_plate_without_consoles(self) -> bool:
        return self.main_rib_count == 0

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["is_plate_without_consoles"] = self.is_plate_without_consoles
        return d

    @classmethod
    def parse(cls, file_name: Union[str, Path]) -> "ArgoFileCode":
        code = cls(original_file_name=str(file_name))
        name = Path(file_name).name
        if not name:
            return code

        code.load_code = name[0].upper()
        code.load_name, code.load_year = LOAD_STANDARDS.get(code.load_code, ("Unknown", None))

        if len(name) > 1 and name[1].isdigit():
            code.main_rib_count = int(name[1])

        us = name.find("_")
        dot = name.find(".")
        if 0 < us < dot:
            span = name[us + 1:dot]
            if span.isdigit():
                code.span_length = int(span)

        if 0 < dot < len(name) - 1:
            after = name[dot + 1:]
            digits = "".join(c for c in after if c.isdigit())
            letters = "".join(c for c in after if c.isalpha())
            if digits:
                code.serial_number = int(digits[:2])
            if letters:
                code.type_suffix = letters[-1].lower()
                code.type_description = type_description(code.type_suffix, code.main_rib_count)

        return code


def is_argo_file(path: Union[str, Path]) -> bool:
    """
    Guess whether a file in a RAW folder is an ARGO input.

    Accepted: extensions starting with two digits (``.05``, ``.02p``),
    names starting with a load letter and a digit (``S2...``), and ``.dat``.
    """
    p = Path(path)
    ext = p.suffix.lower()
    stem = p.stem.upper()

    if ext in _SKIP_EXTENSIONS:
        return False

    tail = ext[1:]
    if 2 <= len(tail) <= 3 and tail[0].isdigit() and tail[1].isdigit():
        return True

    if len(stem) >= 2 and stem[0] in "ABNSI" and stem[1].isdigit():
        return True

    return ext == ".dat"
