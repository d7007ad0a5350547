# File: tests/test_orchestrator.py
"""
Test the orchestrator.py module: fan-out over topology × material pairs and
reduction to the single best beam.

Uses tiny populations so each run finishes in well under a second.
"""

import itertools
from functools import reduce

import numpy as np
import pytest

import beam_ga.orchestrator as orchestrator
from beam_ga.beams import Topology
from beam_ga.catalog import MATERIALS, MaterialTag
from beam_ga.config import SearchConfig
from beam_ga.orchestrator import (
    RunReportError,
    SearchOrchestrator,
    SearchResult,
    best_of,
    run_search,
)


TWO_MATERIALS = {
    tag: MATERIALS[tag]
    for tag in (MaterialTag.STEEL_SAE_4340, MaterialTag.ALUMINUM_6061_T6)
}


@pytest.fixture
def tiny_config():
    return SearchConfig(population_size=20, survivor_count=4, generation_count=3)


def test_one_report_per_pair(tiny_config):
    result = SearchOrchestrator(
        tiny_config, materials=TWO_MATERIALS, executor="thread", seed=11
    ).run()

    assert isinstance(result, SearchResult)
    assert len(result.reports) == 6

    pairs = {(r.topology, r.material.tag) for r in result.reports}
    assert pairs == set(itertools.product(Topology, TWO_MATERIALS))

    print(f"✓ {len(result.reports)} runs, best fitness {result.best.fitness}")


def test_best_is_maximum(tiny_config):
    result = run_search(tiny_config, materials=TWO_MATERIALS, executor="thread", seed=12)
    assert all(result.best.fitness >= r.fitness for r in result.reports)
    assert any(result.best is r for r in result.reports)


def test_reduction_ignores_arrival_order(tiny_config):
    result = run_search(tiny_config, materials=TWO_MATERIALS, executor="thread", seed=13)
    winners = {
        reduce(best_of, order).fitness
        for order in itertools.permutations(result.reports)
    }
    assert winners == {max(r.fitness for r in result.reports)}


def test_specs_cover_full_catalog_with_distinct_seeds():
    specs = SearchOrchestrator(SearchConfig(), seed=0).specs()
    assert len(specs) == 21

    states = {tuple(s.seed.generate_state(4)) for s in specs}
    assert len(states) == 21


def test_topology_subset(tiny_config):
    result = run_search(
        tiny_config,
        materials=TWO_MATERIALS,
        topologies=[Topology.I],
        executor="thread",
    )
    assert len(result.reports) == 2
    assert all(r.topology is Topology.I for r in result.reports)


def test_process_pool():
    config = SearchConfig(population_size=10, survivor_count=2, generation_count=2)
    result = run_search(
        config,
        materials={MaterialTag.STEEL_1018: MATERIALS[MaterialTag.STEEL_1018]},
        topologies=[Topology.RECTANGULAR],
        executor="process",
        max_workers=1,
    )
    assert len(result.reports) == 1
    assert result.best.topology is Topology.RECTANGULAR


def test_failed_run_is_fatal(tiny_config, monkeypatch):
    def broken_run(spec):
        raise RuntimeError("worker crashed")

    monkeypatch.setattr(orchestrator, "execute_run", broken_run)

    with pytest.raises(RunReportError, match="worker crashed"):
        run_search(tiny_config, materials=TWO_MATERIALS, executor="thread")


def test_result_frame_sorted_best_first(tiny_config):
    result = run_search(
        tiny_config, materials=TWO_MATERIALS, executor="thread", record_history=True
    )
    df = result.to_frame()

    assert len(df) == 6
    assert df['fitness'].iloc[0] == result.best.fitness
    assert df['fitness'].is_monotonic_decreasing
    assert {'topology', 'material', 'width', 'weight', 'feasible'} <= set(df.columns)
    assert all(r.history is not None for r in result.reports)


def test_verbose_summary(tiny_config, capsys):
    run_search(tiny_config, materials=TWO_MATERIALS, executor="thread",
               verbose=True, show_progress=True)
    out = capsys.readouterr().out
    assert "Launching 6 runs" in out
    assert "Search complete" in out


def test_bad_arguments_rejected(tiny_config):
    with pytest.raises(ValueError):
        SearchOrchestrator(tiny_config, executor="cluster")
    with pytest.raises(ValueError):
        SearchOrchestrator(tiny_config, materials={})
    with pytest.raises(ValueError):
        SearchOrchestrator(tiny_config, topologies=[])


def test_run_specs_are_independent_streams(tiny_config):
    specs = SearchOrchestrator(tiny_config, materials=TWO_MATERIALS, seed=5).specs()
    draws = [np.random.default_rng(s.seed).random() for s in specs]
    assert len(set(draws)) == len(draws)
