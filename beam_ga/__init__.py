# beam_ga - Genetic search for beam cross-sections
"""
BEAM-GA: Genetic Beam Cross-Section Search
==========================================

This package provides:
- Closed-form structural model for three beam topologies
- Constraint-based integer fitness
- Generational genetic search per topology/material pair
- Concurrent search across every pair, reduced to one winner

ARCHITECTURE:
-------------
    catalog.py        Material catalog (tagged, read-only)
    loads.py          Fixed external load case
    beams.py          Beam genomes and cross-section properties
    analysis.py       Stress, factor of safety, fatigue, deflection
    config.py         Search bounds and sizes
    fitness.py        Integer fitness (penalties + rewards)
    population.py     Fixed-size genome collection
    engine.py         One genetic run
    orchestrator.py   Fan-out / fan-in over all runs
    report.py         Text report of a design
    viz.py            Fitness history plot
"""

from .catalog import Material, MaterialTag, MATERIALS, get_material
from .loads import LoadCase, DEFAULT_LOAD_CASE
from .beams import BeamGenome, RectBeam, TBeam, IBeam, Topology, BEAM_TYPES, DerivedSection
from .analysis import StructuralResponse, analyze
from .config import SearchConfig, PENALTY
from .fitness import FitnessEvaluator, MAX_INFEASIBLE
from .population import Population
from .engine import GeneticEngine, RunReport
from .orchestrator import SearchOrchestrator, SearchResult, RunReportError, run_search
from .report import format_report

__version__ = "0.1.0"
