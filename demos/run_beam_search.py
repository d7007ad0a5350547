"""
BEAM CROSS-SECTION SEARCH DEMO
==============================

PURPOSE:
--------
Run the full search with the reference design constants and print the
winning beam:
1. One genetic run per (topology × material) pair, in parallel
2. Reduce to the single best beam
3. Print the design and its response against every bound
4. Optionally save a per-run CSV and a fitness history plot

The reference sizes (population 1000, 5000 generations, 21 runs) take a long
time in pure Python; use --generations / --population for a quick look.

Usage:
------
    python demos/run_beam_search.py --generations 200 --population 300 --progress
"""

import argparse
import os

from beam_ga import SearchConfig, run_search, format_report
from beam_ga.viz import plot_history


def main():
    defaults = SearchConfig()

    parser = argparse.ArgumentParser(description="Genetic search for beam cross-sections")
    parser.add_argument("--population", type=int, default=defaults.population_size,
                        help="Genomes per generation")
    parser.add_argument("--survivors", type=int, default=defaults.survivor_count,
                        help="Survivors kept each generation")
    parser.add_argument("--generations", type=int, default=defaults.generation_count,
                        help="Generations per run")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the run streams")
    parser.add_argument("--workers", type=int, default=None, help="Worker processes")
    parser.add_argument("--progress", action="store_true", help="Show a progress bar")
    parser.add_argument("--outdir", type=str, default=None,
                        help="Write results.csv and history.png here")
    args = parser.parse_args()

    config = SearchConfig(
        population_size=args.population,
        survivor_count=min(args.survivors, args.population),
        generation_count=args.generations,
    )

    result = run_search(
        config,
        seed=args.seed,
        max_workers=args.workers,
        record_history=args.outdir is not None,
        show_progress=args.progress,
        verbose=True,
    )

    print()
    print(format_report(result.best, config))

    if args.outdir is not None:
        os.makedirs(args.outdir, exist_ok=True)
        csv_path = os.path.join(args.outdir, "results.csv")
        result.to_frame().to_csv(csv_path, index=False)
        print(f"\nResults saved to: {csv_path}")
        plot_history(result.reports, os.path.join(args.outdir, "history.png"), max_runs=8)


if __name__ == "__main__":
    main()
