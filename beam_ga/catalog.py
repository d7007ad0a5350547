"""
CATALOG: BEAM MATERIALS
=======================

PURPOSE:
--------
This module defines the catalog of candidate materials that the search tries
for every beam topology. Each material is looked up by an enumerated tag
instead of being passed around as loose numbers.

WHY THIS MATTERS:
-----------------
1. **Design Exploration**: The orchestrator launches one genetic run per
   (topology, material) pair. Iterating over MaterialTag gives the full set.

2. **Fatigue**: Every material carries three empirical stress-life
   coefficients. They are only meaningful together, so they live in the
   same record as the strength and stiffness values.

3. **Immutability**: The catalog is the only state shared between concurrent
   runs. It is built once at import and exposed through a read-only mapping.

UNITS:
------
Imperial, as used by the load case:
- density: lb/in³
- yield_strength, elastic_modulus: psi
- unit_cost: $/lb
- fatigue_strength: ksi
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class MaterialTag(Enum):
    """Enumerated key for every catalog material."""
    STEEL_1018 = "steel_1018"
    STAINLESS_STEEL_17_4PH = "stainless_steel_17_4ph"
    STEEL_SAE_4340 = "steel_sae_4340"
    ALUMINUM_7075_T6 = "aluminum_7075_t6"
    ALUMINUM_2024_T4 = "aluminum_2024_t4"
    ALUMINUM_6061_T6 = "aluminum_6061_t6"
    TITANIUM_TI_6AL_4V = "titanium_ti_6al_4v"


@dataclass(frozen=True)
class Material:
    """
    Material properties for beam analysis.

    Parameters:
    -----------
    tag : MaterialTag
        Catalog key

    name : str
        Human-readable name (e.g., "Steel 1018")

    density : float
        lb/in³, used for self-weight: weight = area × length × density

    yield_strength : float
        psi, numerator of the factor of safety

    elastic_modulus : float
        psi, scales every deflection term

    unit_cost : float
        $/lb, cost = weight × unit_cost

    fatigue_strength : float
        ksi, fatigue strength coefficient of the stress-life curve

    fatigue_coefficient : float
        Multiplier applied to the mean-stress correction

    fatigue_exponent : float
        Basquin exponent (negative); the life estimate raises to 1/exponent
    """
    tag: MaterialTag
    name: str
    density: float
    yield_strength: float
    elastic_modulus: float
    unit_cost: float
    fatigue_strength: float
    fatigue_coefficient: float
    fatigue_exponent: float


# ============================================================================
# MATERIAL DEFINITIONS
# ============================================================================

_MATERIAL_LIST = [
    Material(
        tag=MaterialTag.STEEL_1018,
        name="Steel 1018",
        density=0.284,
        yield_strength=76000.0,
        elastic_modulus=30000000.0,
        unit_cost=1.09,
        fatigue_strength=105.0,
        fatigue_coefficient=97.9684641113648,
        fatigue_exponent=-0.1,
    ),
    Material(
        tag=MaterialTag.STAINLESS_STEEL_17_4PH,
        name="Stainless Steel 17-4PH",
        density=0.286,
        yield_strength=165000.0,
        elastic_modulus=28000000.0,
        unit_cost=4.65,
        fatigue_strength=257.474868044485,
        fatigue_coefficient=257.0,
        fatigue_exponent=-0.095,
    ),
    Material(
        tag=MaterialTag.STEEL_SAE_4340,
        name="Steel SAE 4340",
        density=0.283,
        yield_strength=132000.0,
        elastic_modulus=29000000.0,
        unit_cost=1.22,
        fatigue_strength=237.0,
        fatigue_coefficient=238.0,
        fatigue_exponent=-0.0977,
    ),
    Material(
        tag=MaterialTag.ALUMINUM_7075_T6,
        name="Aluminum 7075-T6",
        density=0.102,
        yield_strength=73000.0,
        elastic_modulus=10400000.0,
        unit_cost=9.56,
        fatigue_strength=108.0,
        fatigue_coefficient=192.900038382796,
        fatigue_exponent=-0.143,
    ),
    Material(
        tag=MaterialTag.ALUMINUM_2024_T4,
        name="Aluminum 2024-T4",
        density=0.100,
        yield_strength=47000.0,
        elastic_modulus=10600000.0,
        unit_cost=5.35,
        fatigue_strength=91.5,
        fatigue_coefficient=122.0,
        fatigue_exponent=-0.102,
    ),
    Material(
        tag=MaterialTag.ALUMINUM_6061_T6,
        name="Aluminum 6061-T6",
        density=0.0975,
        yield_strength=40000.0,
        elastic_modulus=10000000.0,
        unit_cost=2.92,
        fatigue_strength=85.0,
        fatigue_coefficient=101.666666666667,
        fatigue_exponent=-0.107,
    ),
    Material(
        tag=MaterialTag.TITANIUM_TI_6AL_4V,
        name="Titanium Alloy Ti-6Al-4V",
        density=0.16,
        yield_strength=128000.0,
        elastic_modulus=16500000.0,
        unit_cost=61.50,
        fatigue_strength=249.0,
        fatigue_coefficient=274.0,
        fatigue_exponent=-1.04,
    ),
]

# Read-only view; never mutated after import
MATERIALS: Mapping[MaterialTag, Material] = MappingProxyType(
    {m.tag: m for m in _MATERIAL_LIST}
)


def get_material(tag: MaterialTag) -> Material:
    """Look up a catalog material by tag."""
    return MATERIALS[tag]
