"""
VISUALIZATION: FITNESS HISTORY
==============================

Plot how the best and mean fitness of each run evolved over its
generations. Penalties are ~1e17, so generations without a single feasible
beam are left out of the curve.
"""

import os
from typing import Optional, Sequence

import matplotlib.pyplot as plt

from .engine import RunReport


def plot_history(
    reports: Sequence[RunReport],
    outpath: str,
    title: str = "Best Fitness per Generation",
    max_runs: Optional[int] = None,
) -> None:
    """
    Save a line plot of best fitness per generation, one line per run.

    Parameters:
    -----------
    reports : Sequence[RunReport]
        Run reports produced with record_history=True
    outpath : str
        Image path (directories are created as needed)
    title : str
        Figure title
    max_runs : int, optional
        Only plot the top max_runs reports by final fitness
    """
    with_history = [r for r in reports if r.history is not None and len(r.history) > 0]
    if len(with_history) == 0:
        raise ValueError("No run histories to plot (run with record_history=True)")

    with_history.sort(key=lambda r: r.fitness, reverse=True)
    if max_runs is not None:
        with_history = with_history[:max_runs]

    fig, ax = plt.subplots(figsize=(10, 6))

    for report in with_history:
        history = report.history
        feasible = history[history['n_feasible'] > 0]
        if len(feasible) == 0:
            continue
        ax.plot(
            feasible['generation'],
            feasible['best_fitness'],
            label=f"{report.topology.value} × {report.material.name}",
            linewidth=1.5,
        )

    ax.set_xlabel("Generation", fontsize=12, fontweight='bold')
    ax.set_ylabel("Best Fitness", fontsize=12, fontweight='bold')
    ax.set_title(title, fontsize=14, fontweight='bold')
    ax.grid(True, alpha=0.3, linestyle='--')
    if ax.get_legend_handles_labels()[0]:
        ax.legend(loc='best', fontsize=8, framealpha=0.9)

    os.makedirs(os.path.dirname(outpath) if os.path.dirname(outpath) else '.', exist_ok=True)

    plt.tight_layout()
    plt.savefig(outpath, dpi=150, bbox_inches='tight')
    plt.close(fig)

    print(f"Fitness history plot saved to: {outpath}")
