# beam_ga/analysis.py
"""
ANALYSIS: STRUCTURAL RESPONSE OF A BEAM
=======================================

PURPOSE:
--------
Turn a beam genome into the figures the fitness function judges:
weight, cost, combined bending stress, factor of safety, fatigue life and
vertical deflection under the fixed load case.

LOAD PATH:
----------
Vertical bending (about the strong axis, uses ix):

    engine 1      engine 2
       ↓             ↓
    ═══╪═════════════╪════════════   ← beam, length L
    ↓↓↓↓↓↓↓↓↓↓↓↓↓↓↓↓↓↓↓↓↓↓↓↓↓↓↓↓↓   fuel + self-weight (down)
    ↑↑↑↑↑↑↑↑↑↑↑↑↑↑↑↑↑↑↑↑↑↑↑↑↑↑↑↑↑   lift (up)

Horizontal bending (about the weak axis, uses iy) comes from the couple of
engine thrust at the two engine stations.

    σ_vert  = -M_v · y_bend / ix
    σ_horz  =  M_h · x_bend / iy
    σ_total =  σ_vert + σ_horz       (no interaction term)
    FOS     =  yield / σ_total       (+inf when σ_total == 0)

FATIGUE:
--------
Basquin-type stress-life relation on the vertical stress amplitude, with a
mean-stress correction, converted to flight hours at 27 equivalent cycles
per flight hour.

All arithmetic is IEEE float64 with errors silenced, so degenerate sections
produce inf/nan figures and an invalid response rather than an exception.
"""

from dataclasses import dataclass

import numpy as np

from .beams import BeamGenome, DerivedSection
from .loads import LoadCase, DEFAULT_LOAD_CASE


# Equivalent load cycles per flight hour
CYCLES_PER_FLIGHT_HOUR = 27.0


@dataclass(frozen=True)
class StructuralResponse:
    """
    Everything the fitness function needs to judge one beam.

    `valid` is False when a dimension is non-positive or the section is
    degenerate (non-finite properties, non-positive area or second moments);
    the remaining figures are then meaningless.
    """
    section: DerivedSection
    weight: float
    cost: float
    stress_vertical: float
    stress_horizontal: float
    total_stress: float
    factor_of_safety: float
    fatigue_hours: float
    deflection: float
    valid: bool


def vertical_moment(beam: BeamGenome, load_case: LoadCase = DEFAULT_LOAD_CASE) -> float:
    """Superposed vertical bending moment from engines, lift, fuel and self-weight."""
    with np.errstate(all="ignore"):
        L = np.float64(beam.length)
        m_eng1 = -load_case.engine_station_1 * load_case.engine_load
        m_eng2 = -load_case.engine_station_2 * load_case.engine_load
        m_lift = (load_case.lift_load * L) / 2.0 * L / 3.0
        m_fuel = -(load_case.fuel_load * L) / 2.0 * L / 3.0
        m_weight = -np.float64(beam.weight()) * L / 2.0
        return float(m_eng1 + m_eng2 + m_lift + m_fuel + m_weight)


def horizontal_moment(load_case: LoadCase = DEFAULT_LOAD_CASE) -> float:
    """Couple from engine thrust acting at both engine stations."""
    thrust = load_case.thrust
    return thrust * load_case.engine_station_1 + thrust * load_case.engine_station_2


def stress_vertical(beam: BeamGenome, load_case: LoadCase = DEFAULT_LOAD_CASE) -> float:
    with np.errstate(all="ignore"):
        moment = np.float64(vertical_moment(beam, load_case))
        return float(-moment * beam.y_bend() / np.float64(beam.ix()))


def stress_horizontal(beam: BeamGenome, load_case: LoadCase = DEFAULT_LOAD_CASE) -> float:
    with np.errstate(all="ignore"):
        moment = np.float64(horizontal_moment(load_case))
        return float(moment * beam.x_bend() / np.float64(beam.iy()))


def factor_of_safety(yield_strength: float, total_stress: float) -> float:
    """
    Yield strength over combined stress.

    A stress of exactly zero is the most favorable case possible and maps to
    +inf instead of raising.
    """
    if total_stress == 0.0:
        return float("inf")
    with np.errstate(all="ignore"):
        return float(np.float64(yield_strength) / total_stress)


def fatigue_hours(beam: BeamGenome, stress_vert: float) -> float:
    """
    Estimated flight hours to fatigue failure.

    Parameters:
    -----------
    beam : BeamGenome
        Supplies the material's three stress-life coefficients
    stress_vert : float
        Vertical bending stress (psi); the amplitude is half of it

    Returns:
    --------
    float
        Flight hours (nan when the stress-life relation has no real solution)
    """
    material = beam.material
    with np.errstate(all="ignore"):
        relevant_stress = np.float64(stress_vert)
        amplitude = relevant_stress / 2.0
        numerator = 2.33 * amplitude / 1000.0
        denominator = (1.0 - (2.33 * relevant_stress / 1000.0) / material.fatigue_strength) \
            * material.fatigue_coefficient
        cycles = np.power(numerator / denominator, 1.0 / material.fatigue_exponent)
        return float(cycles / CYCLES_PER_FLIGHT_HOUR)


def vertical_deflection(beam: BeamGenome, load_case: LoadCase = DEFAULT_LOAD_CASE) -> float:
    """
    Superposition of closed-form deflections: self-weight, fuel and lift
    distributed loads, and the two engine point loads at their stations.
    """
    E = beam.material.elastic_modulus
    x1 = load_case.engine_station_1
    x2 = load_case.engine_station_2
    P = load_case.engine_load
    with np.errstate(all="ignore"):
        L = np.float64(beam.length)
        L4 = L ** 4.0
        ix = np.float64(beam.ix())
        def_weight = -(np.float64(beam.weight()) / L) * L4 / 8.0 / E / ix
        def_fuel = -load_case.fuel_load * L4 / 30.0 / E / ix
        def_lift = load_case.lift_load * L4 / 30.0 / E / ix
        def_eng1 = -P * x1 ** 2.0 * (3.0 * L - x1) / 6.0 / E / ix
        def_eng2 = -P * x2 ** 2.0 * (3.0 * L - x2) / 6.0 / E / ix
        return float(def_fuel + def_lift + def_eng1 + def_eng2 + def_weight)


def analyze(beam: BeamGenome, load_case: LoadCase = DEFAULT_LOAD_CASE) -> StructuralResponse:
    """
    Compute the full structural response of a beam.

    Never raises for bad geometry: the response simply comes back with
    `valid=False`, which the fitness evaluator scores as maximally infeasible.
    """
    section = beam.section()
    s_vert = stress_vertical(beam, load_case)
    s_horz = stress_horizontal(beam, load_case)
    with np.errstate(all="ignore"):
        total = float(np.float64(s_vert) + s_horz)

    return StructuralResponse(
        section=section,
        weight=beam.weight(),
        cost=beam.cost(),
        stress_vertical=s_vert,
        stress_horizontal=s_horz,
        total_stress=total,
        factor_of_safety=factor_of_safety(beam.material.yield_strength, total),
        fatigue_hours=fatigue_hours(beam, s_vert),
        deflection=vertical_deflection(beam, load_case),
        valid=section.is_valid and beam.dimensions_ok(),
    )
