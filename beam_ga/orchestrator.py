# beam_ga/orchestrator.py
"""
ORCHESTRATOR: SEARCH EVERY TOPOLOGY × MATERIAL PAIR
===================================================

PURPOSE:
--------
Launch one independent GeneticEngine run per (topology, material) pair,
collect exactly one report from each, and reduce them to the single best
beam.

FAN-OUT / FAN-IN:
-----------------
    Rect × Steel 1018 ─────┐
    Rect × Al 7075-T6 ─────┤
    Tee  × Steel 1018 ─────┼──→ as_completed() ──→ max by fitness ──→ winner
    ...                    │     (any order)
    I    × Ti-6Al-4V  ─────┘

- Every run gets its own random stream (spawned from one SeedSequence) and
  its own population. Runs never talk to each other.
- The only shared state is the read-only material catalog.
- Reports arrive in whatever order runs finish. The reduction is a max by
  fitness, which is commutative and associative, so arrival order does not
  matter.
- A run that fails, or a missing report, is fatal: RunReportError, no
  partial results, no retry.
"""

from concurrent.futures import Executor, ProcessPoolExecutor, ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from functools import reduce
from typing import Iterable, List, Mapping, Optional, Sequence

import numpy as np
import pandas as pd
from tqdm import tqdm

from .beams import BEAM_TYPES, Topology
from .catalog import MATERIALS, Material, MaterialTag
from .config import SearchConfig
from .engine import GeneticEngine, RunReport
from .loads import LoadCase, DEFAULT_LOAD_CASE


class RunReportError(RuntimeError):
    """Raised when a spawned run fails or does not report back exactly once."""
    pass


@dataclass(frozen=True)
class RunSpec:
    """Everything one worker needs to perform a run."""
    topology: Topology
    material: Material
    config: SearchConfig
    load_case: LoadCase
    seed: np.random.SeedSequence
    record_history: bool = False


@dataclass
class SearchResult:
    """Globally best run plus every individual run report."""
    best: RunReport
    reports: List[RunReport]

    def to_frame(self) -> pd.DataFrame:
        """One row per run, best first."""
        df = pd.DataFrame([r.to_row() for r in self.reports])
        return df.sort_values('fitness', ascending=False, kind='stable').reset_index(drop=True)


def execute_run(spec: RunSpec) -> RunReport:
    """
    Perform one engine run.

    Top-level function so it can be pickled into worker processes.
    """
    engine = GeneticEngine(
        BEAM_TYPES[spec.topology],
        spec.material,
        spec.config,
        rng=np.random.default_rng(spec.seed),
        load_case=spec.load_case,
        record_history=spec.record_history,
    )
    return engine.run()


def best_of(a: RunReport, b: RunReport) -> RunReport:
    """The higher-fitness report (the first one on a tie)."""
    return b if b.fitness > a.fitness else a


class SearchOrchestrator:
    """
    Fan one genetic run out per (topology × material) and fold the results.

    Parameters:
    -----------
    config : SearchConfig
        Shared bounds and sizes for every run
    materials : Mapping[MaterialTag, Material], optional
        Material catalog to search (defaults to the full MATERIALS catalog)
    topologies : Sequence[Topology], optional
        Topologies to search (defaults to all three)
    load_case : LoadCase
        External loads
    executor : str
        "process" (default) or "thread"
    max_workers : int, optional
        Pool size; None lets concurrent.futures decide
    seed : int, optional
        Entropy for the per-run SeedSequence; runs are not reproducible in
        general because selection ties are broken arbitrarily
    record_history : bool
        Ask every run for its per-generation history
    show_progress : bool
        tqdm bar over completed runs
    verbose : bool
        Print a launch and completion summary
    """

    def __init__(
        self,
        config: SearchConfig,
        materials: Optional[Mapping[MaterialTag, Material]] = None,
        topologies: Optional[Sequence[Topology]] = None,
        load_case: LoadCase = DEFAULT_LOAD_CASE,
        executor: str = "process",
        max_workers: Optional[int] = None,
        seed: Optional[int] = None,
        record_history: bool = False,
        show_progress: bool = False,
        verbose: bool = False,
    ):
        if executor not in ("process", "thread"):
            raise ValueError(f"executor must be 'process' or 'thread', got {executor!r}")
        self.config = config
        self.materials = materials if materials is not None else MATERIALS
        self.topologies = list(topologies) if topologies is not None else list(Topology)
        if len(self.materials) == 0 or len(self.topologies) == 0:
            raise ValueError("Need at least one material and one topology to search")
        self.load_case = load_case
        self.executor = executor
        self.max_workers = max_workers
        self.seed = seed
        self.record_history = record_history
        self.show_progress = show_progress
        self.verbose = verbose

    def specs(self) -> List[RunSpec]:
        """One RunSpec per (topology, material), each with its own seed."""
        pairs = [(t, m) for t in self.topologies for m in self.materials.values()]
        seeds = np.random.SeedSequence(self.seed).spawn(len(pairs))
        return [
            RunSpec(
                topology=topology,
                material=material,
                config=self.config,
                load_case=self.load_case,
                seed=seed,
                record_history=self.record_history,
            )
            for (topology, material), seed in zip(pairs, seeds)
        ]

    def _make_executor(self) -> Executor:
        if self.executor == "thread":
            return ThreadPoolExecutor(max_workers=self.max_workers)
        return ProcessPoolExecutor(max_workers=self.max_workers)

    def collect(self, specs: Sequence[RunSpec]) -> List[RunReport]:
        """Run every spec concurrently and drain the reports as they complete."""
        reports = []
        with self._make_executor() as pool:
            futures = {pool.submit(execute_run, spec): spec for spec in specs}
            completed: Iterable = as_completed(futures)
            if self.show_progress:
                completed = tqdm(completed, total=len(futures), desc="Runs")
            for future in completed:
                spec = futures[future]
                try:
                    reports.append(future.result())
                except Exception as e:
                    raise RunReportError(
                        f"Run {spec.topology.value} × {spec.material.name} failed: {e}"
                    ) from e

        if len(reports) != len(specs):
            raise RunReportError(f"Expected {len(specs)} run reports, got {len(reports)}")
        return reports

    def run(self) -> SearchResult:
        """Search every pair and return the globally best beam."""
        specs = self.specs()
        if self.verbose:
            print(f"Launching {len(specs)} runs "
                  f"({len(self.topologies)} topologies × {len(self.materials)} materials, "
                  f"{self.config.generation_count} generations each)...")

        reports = self.collect(specs)
        best = reduce(best_of, reports)

        if self.verbose:
            n_feasible = sum(r.feasible for r in reports)
            print(f"Search complete: {n_feasible}/{len(reports)} runs ended feasible; "
                  f"best {best.topology.value} × {best.material.name} (fitness {best.fitness})")
        return SearchResult(best=best, reports=reports)


def run_search(config: SearchConfig = None, **kwargs) -> SearchResult:
    """
    Convenience wrapper: SearchOrchestrator(config, **kwargs).run().

    Uses the default SearchConfig when none is given.
    """
    if config is None:
        config = SearchConfig()
    return SearchOrchestrator(config, **kwargs).run()
