"""Human-readable summary of a run report."""

from typing import List

from .beams import Topology
from .config import SearchConfig
from .engine import RunReport


TOPOLOGY_NAMES = {
    Topology.RECTANGULAR: "Rectangular Beam",
    Topology.TEE: "T Beam",
    Topology.I: "I Beam",
}


def format_report(report: RunReport, config: SearchConfig) -> str:
    """
    Text block describing the beam, its score, and each response figure
    next to the bound it is judged against.
    """
    lines: List[str] = [TOPOLOGY_NAMES[report.topology]]
    for name, value in report.genome.geometry().items():
        label = name.replace('_', ' ').title()
        lines.append(f"  {label}: {value:.4f}")
    lines.append(f"  Material: {report.material.name}")
    lines.append(f"  Score: {report.fitness}")

    r = report.response
    c = config
    lines.append("Specs")
    lines.append(f"  Cost: {r.cost:.2f} (< {c.price_max:g})")
    lines.append(f"  Weight: {r.weight:.2f} (< {c.weight_max:g})")
    lines.append(f"  Flight Hours: {r.fatigue_hours:.0f} "
                 f"({c.fatigue_hours_min:g} <-> {c.fatigue_hours_max:g})")
    lines.append(f"  Deflection: {r.deflection:.3f} "
                 f"({-c.deflection_max:g} <-> {c.deflection_max:g})")
    lines.append(f"  FOS: {r.factor_of_safety:.3f} ({c.fos_min:g} <-> {c.fos_max:g})")

    if report.feasible:
        lines.append("All requirements met")
    else:
        lines.append(f"Violated: {', '.join(report.violations)}")
    return "\n".join(lines)
