# beam_ga/fitness.py
"""
FITNESS: SCORING A BEAM AGAINST THE DESIGN REQUIREMENTS
=======================================================

PURPOSE:
--------
Reduce a beam and its structural response to one signed integer.
Higher is better.

HOW THE SCORE IS BUILT:
-----------------------
Every requirement contributes one term:

    requirement                     satisfied           violated
    ---------------------------     ----------------    ---------
    length == design_length         0                   -PENALTY
    height == design_height         0                   -PENALTY
    width_min < width < width_max   0                   -PENALTY
    weight < weight_max             -weight             -PENALTY
    cost < price_max                (price_max-cost)/3  -PENALTY
    fos_min < fos < fos_max         fos × weight_max    -PENALTY
    |deflection| < deflection_max   0                   -PENALTY
    fatigue band                    0                   -PENALTY
    shape ratio (per topology)      0                   -PENALTY

The soft rewards (weight, cost, fos) are bounded, and SearchConfig checks
that PENALTY outweighs all of them together. So any feasible beam strictly
outranks any beam that violates even one requirement, and among feasible
beams lighter, cheaper, and safer wins.

Comparisons against nan are always False, so a nan figure counts as a
violation. A non-positive dimension or degenerate section short-circuits to
MAX_INFEASIBLE, and every total is saturated to the signed 64-bit range.
"""

from typing import Dict, List, Optional

import numpy as np

from .analysis import StructuralResponse, analyze
from .beams import BeamGenome
from .config import PENALTY, SearchConfig
from .loads import LoadCase, DEFAULT_LOAD_CASE


CONSTRAINTS = (
    "length",
    "height",
    "width",
    "weight",
    "cost",
    "factor_of_safety",
    "deflection",
    "fatigue",
    "shape",
)

# Every requirement violated at once
MAX_INFEASIBLE = -PENALTY * len(CONSTRAINTS)

_I64_MAX = 2 ** 63 - 1
_I64_MIN = -(2 ** 63)


def to_score(value: float) -> int:
    """Truncate toward zero, saturating at the 64-bit limits; nan maps to 0."""
    if np.isnan(value):
        return 0
    if value >= _I64_MAX:
        return _I64_MAX
    if value <= _I64_MIN:
        return _I64_MIN
    return int(value)


def _saturate(total: int) -> int:
    return max(_I64_MIN, min(_I64_MAX, total))


def score_terms(
    length: float,
    height: float,
    width: float,
    weight: float,
    cost: float,
    factor_of_safety: float,
    deflection: float,
    fatigue_hours: float,
    shape_ok: bool,
    config: SearchConfig,
) -> Dict[str, int]:
    """Per-requirement contributions, keyed by the names in CONSTRAINTS."""
    c = config
    return {
        "length": 0 if length == c.design_length else -PENALTY,
        "height": 0 if height == c.design_height else -PENALTY,
        "width": 0 if c.width_min < width < c.width_max else -PENALTY,
        "weight": to_score(-weight) if weight < c.weight_max else -PENALTY,
        "cost": (
            to_score(c.price_max / 3.0 - cost / 3.0) if cost < c.price_max else -PENALTY
        ),
        "factor_of_safety": (
            to_score(factor_of_safety * c.weight_max)
            if c.fos_min < factor_of_safety < c.fos_max
            else -PENALTY
        ),
        "deflection": (
            0 if -c.deflection_max < deflection < c.deflection_max else -PENALTY
        ),
        "fatigue": (
            0 if c.fatigue_hours_min < fatigue_hours < c.fatigue_hours_max else -PENALTY
        ),
        "shape": 0 if shape_ok else -PENALTY,
    }


def score_design(*args, **kwargs) -> int:
    """Sum of score_terms(), saturated to the 64-bit range; same arguments."""
    return _saturate(sum(score_terms(*args, **kwargs).values()))


class FitnessEvaluator:
    """
    Scores genomes for one search configuration and load case.

    Instances hold only immutable configuration, so one evaluator can be
    shared by every genome of a generation (and pickled into worker
    processes).
    """

    def __init__(self, config: SearchConfig, load_case: LoadCase = DEFAULT_LOAD_CASE):
        self.config = config
        self.load_case = load_case

    def terms(self, beam: BeamGenome, response: StructuralResponse) -> Dict[str, int]:
        return score_terms(
            length=beam.length,
            height=beam.height,
            width=beam.width,
            weight=response.weight,
            cost=response.cost,
            factor_of_safety=response.factor_of_safety,
            deflection=response.deflection,
            fatigue_hours=response.fatigue_hours,
            shape_ok=beam.shape_ok(),
            config=self.config,
        )

    def evaluate(self, beam: BeamGenome, response: Optional[StructuralResponse] = None) -> int:
        """
        Fitness of one beam.

        Parameters:
        -----------
        beam : BeamGenome
            Candidate to score
        response : StructuralResponse, optional
            Precomputed response; analyzed here when omitted

        Returns:
        --------
        int
            Signed fitness, MAX_INFEASIBLE for degenerate sections
        """
        if response is None:
            response = analyze(beam, self.load_case)
        if not response.valid:
            return MAX_INFEASIBLE
        return _saturate(sum(self.terms(beam, response).values()))

    __call__ = evaluate

    def violations(self, beam: BeamGenome, response: Optional[StructuralResponse] = None) -> List[str]:
        """Names of the requirements the beam fails (every one when degenerate)."""
        if response is None:
            response = analyze(beam, self.load_case)
        if not response.valid:
            return list(CONSTRAINTS)
        return [name for name, term in self.terms(beam, response).items() if term == -PENALTY]

    @property
    def infeasible_ceiling(self) -> int:
        """Highest score any beam with at least one violation can reach."""
        return -PENALTY + self.config.max_soft_reward

    def is_feasible(self, fitness: int) -> bool:
        return fitness > self.infeasible_ceiling
