# beam_ga/engine.py
"""
ENGINE: ONE GENETIC SEARCH RUN
==============================

PURPOSE:
--------
Evolve a population of beams of a single topology and material for a fixed
number of generations, then hand back the best beam of the final generation.

GENERATION CYCLE:
-----------------
    ┌─────────────┐    ┌──────────────┐    ┌───────────────┐    ┌──────────┐
    │  evaluate   │ →  │ select top K │ →  │  reproduce    │ →  │ replace  │
    │ every genome│    │  survivors   │    │ N-K children  │    │population│
    └─────────────┘    └──────────────┘    └───────────────┘    └──────────┘

1. Evaluate: each genome is scored independently. Scoring is pure, so the
   order does not matter and nothing is shared except the read-only catalog.

2. Select: truncation selection. The K highest-scoring genomes survive.
   Ties are broken arbitrarily (numpy argpartition).

3. Reproduce: two parents are drawn with replacement from the survivors.
   The child averages every free parameter of the two, then each free
   parameter gets a small uniform random nudge. Length, height and material
   are never touched.

4. Replace: survivors plus children become the next generation, so the
   population size never changes.

TERMINATION:
------------
Purely by count. There is no convergence test. The result is the best
genome of the *final* generation, not the best seen over the whole run.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Type

import numpy as np
import pandas as pd

from .analysis import StructuralResponse, analyze
from .beams import BeamGenome, Topology
from .catalog import Material
from .config import SearchConfig
from .fitness import FitnessEvaluator
from .loads import LoadCase, DEFAULT_LOAD_CASE
from .population import Population


@dataclass
class RunReport:
    """
    Outcome of one engine run.

    violations names the requirements the genome fails (empty when
    feasible). history is a DataFrame with one row per generation
    (generation, best_fitness, mean_fitness, n_feasible) when the run
    recorded it, otherwise None.
    """
    topology: Topology
    material: Material
    genome: BeamGenome
    fitness: int
    response: StructuralResponse
    violations: List[str] = field(default_factory=list)
    history: Optional[pd.DataFrame] = None

    @property
    def feasible(self) -> bool:
        return not self.violations

    def to_row(self) -> Dict:
        """Flat dict for one DataFrame row."""
        row = {
            'topology': self.topology.value,
            'material': self.material.name,
            'fitness': self.fitness,
        }
        row.update(self.genome.geometry())
        row.update({
            'weight': self.response.weight,
            'cost': self.response.cost,
            'factor_of_safety': self.response.factor_of_safety,
            'fatigue_hours': self.response.fatigue_hours,
            'deflection': self.response.deflection,
            'valid': self.response.valid,
            'feasible': self.feasible,
        })
        return row


class GeneticEngine:
    """
    Generational search over one topology/material pair.

    Parameters:
    -----------
    beam_type : Type[BeamGenome]
        RectBeam, TBeam or IBeam
    material : Material
        Catalog material shared by every genome of the run
    config : SearchConfig
        Bounds and population/generation sizes
    rng : np.random.Generator, optional
        Random stream owned by this run (fresh one when omitted)
    load_case : LoadCase
        External loads used for scoring
    record_history : bool
        Keep per-generation fitness statistics

    Example:
    --------
    >>> from beam_ga.beams import IBeam
    >>> from beam_ga.catalog import MATERIALS, MaterialTag
    >>> engine = GeneticEngine(IBeam, MATERIALS[MaterialTag.STEEL_SAE_4340],
    ...                        SearchConfig(population_size=200, survivor_count=20,
    ...                                     generation_count=100))
    >>> report = engine.run()
    """

    def __init__(
        self,
        beam_type: Type[BeamGenome],
        material: Material,
        config: SearchConfig,
        rng: Optional[np.random.Generator] = None,
        load_case: LoadCase = DEFAULT_LOAD_CASE,
        record_history: bool = False,
    ):
        self.beam_type = beam_type
        self.material = material
        self.config = config
        self.rng = rng if rng is not None else np.random.default_rng()
        self.load_case = load_case
        self.evaluator = FitnessEvaluator(config, load_case)
        self.record_history = record_history

        self.population = Population.sample(beam_type, material, config, self.rng)
        self.generation = 0
        self._history: List[Dict] = []

    # ------------------------------------------------------------------
    # One generation, step by step
    # ------------------------------------------------------------------

    def evaluate(self) -> np.ndarray:
        """Fitness of every genome, in population order."""
        return np.array([self.evaluator(beam) for beam in self.population], dtype=np.int64)

    def select(self, scores: np.ndarray) -> List[BeamGenome]:
        """Top survivor_count genomes by fitness, in no particular order."""
        k = self.config.survivor_count
        if k >= len(scores):
            return list(self.population)
        top = np.argpartition(-scores, k - 1)[:k]
        return [self.population[i] for i in top]

    def reproduce(self, survivors: List[BeamGenome], n_children: int) -> List[BeamGenome]:
        """Crossover + mutation of random survivor pairs (drawn with replacement)."""
        children = []
        parents = self.rng.integers(0, len(survivors), size=(n_children, 2))
        for i, j in parents:
            child = survivors[i].crossover(survivors[j])
            children.append(child.mutate(self.rng, self.config))
        return children

    def step(self) -> None:
        """Advance the population by one generation."""
        scores = self.evaluate()
        if self.record_history:
            self._record(scores)

        survivors = self.select(scores)
        children = self.reproduce(survivors, self.population.size - len(survivors))
        self.population.replace(survivors + children)
        self.generation += 1

    def _record(self, scores: np.ndarray) -> None:
        self._history.append({
            'generation': self.generation,
            'best_fitness': int(scores.max()),
            'mean_fitness': float(scores.astype(float).mean()),
            'n_feasible': int(sum(self.evaluator.is_feasible(int(s)) for s in scores)),
        })

    # ------------------------------------------------------------------
    # Full run
    # ------------------------------------------------------------------

    def best(self) -> RunReport:
        """Highest-fitness genome of the current population."""
        scores = self.evaluate()
        index = int(np.argmax(scores))
        genome = self.population[index]
        response = analyze(genome, self.load_case)
        return RunReport(
            topology=self.beam_type.topology,
            material=self.material,
            genome=genome,
            fitness=int(scores[index]),
            response=response,
            violations=self.evaluator.violations(genome, response),
            history=pd.DataFrame(self._history) if self.record_history else None,
        )

    def run(self) -> RunReport:
        """Run generation_count generations and report the final generation's best."""
        while self.generation < self.config.generation_count:
            self.step()
        if self.record_history:
            self._record(self.evaluate())
        return self.best()
