#!/usr/bin/env python3
"""
Material Property Calculator for ARGO to PRSSM Translation

ARGO stores only the design concrete strength. PRSSM needs a named concrete
class with its Young's modulus and the standard material type code, so the
strength is bucketed into one of 16 classes by upper bound.

Key conversions:
- Strength -> class name (Б7.5 ... Б60), E in MPa, standard type code 8..23
- Fixed concrete constants: Poisson 0.2, specific weight 2.45e-5, alpha 1e-5
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from src.model_building.prssm_models import PrssmMaterial

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConcreteClass:
    """One row of the concrete class table"""
    name: str
    max_strength: Optional[float]  # inclusive upper bound; None for the last class
    young_modulus: float  # MPa
    standard_type: int


CONCRETE_CLASSES: List[ConcreteClass] = [
    ConcreteClass("Б7.5", 7.5, 16000, 8),
    ConcreteClass("Б10", 10, 18000, 9),
    ConcreteClass("Б12.5", 12.5, 21000, 10),
    ConcreteClass("Б15", 15, 23000, 11),
    ConcreteClass("Б17.5", 17.5, 25500, 12),
    ConcreteClass("Б20", 20, 27000, 13),
    ConcreteClass("Б22.5", 22.5, 28500, 14),
    ConcreteClass("Б25", 25, 30000, 15),
    ConcreteClass("Б27.5", 27.5, 31000, 16),
    ConcreteClass("Б30", 30, 32500, 17),
    ConcreteClass("Б35", 35, 34500, 18),
    ConcreteClass("Б40", 40, 36000, 19),
    ConcreteClass("Б45", 45, 37000, 20),
    ConcreteClass("Б50", 50, 38000, 21),
    ConcreteClass("Б55", 55, 39000, 22),
    ConcreteClass("Б60", None, 39500, 23),
]

POISSON_RATIO = 0.2
SPECIFIC_WEIGHT = 2.45e-5
THERMAL_COEFFICIENT = 1e-5


def concrete_class(strength: float) -> ConcreteClass:
    """
    Look up the concrete class for a design strength

    Args:
        strength: concrete strength as stored in the ARGO global block

    Returns:
        First class whose upper bound is >= strength, else the top class
    """
    for cc in CONCRETE_CLASSES:
        if cc.max_strength is not None and strength <= cc.max_strength:
            return cc
    return CONCRETE_CLASSES[-1]


def calculate_material(strength: float, material_id: int) -> PrssmMaterial:
    """Build the PRSSM material record for a concrete strength."""
    cc = concrete_class(strength)
    logger.debug("Concrete strength %s -> %s (E=%s MPa)", strength, cc.name, cc.young_modulus)
    return PrssmMaterial(
        id=material_id,
        name=cc.name,
        standard_material_type=cc.standard_type,
        young_modulus=cc.young_modulus,
        poisson_ratio=POISSON_RATIO,
        specific_weight=SPECIFIC_WEIGHT,
        thermal_coefficient=THERMAL_COEFFICIENT,
    )
