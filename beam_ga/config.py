"""
Search configuration and defaults.
"""

from dataclasses import dataclass
from typing import Tuple


# Penalty for each violated hard constraint (a tenth of the largest signed 64-bit int)
PENALTY = (2 ** 63 - 1) // 10


@dataclass(frozen=True)
class SearchConfig:
    """
    Design bounds and genetic-search sizes.

    The defaults are the reference design constants. Everything is passed
    explicitly to the engine and orchestrator; there is no global instance
    that the core reads.

    Parameters:
    -----------
    design_length, design_height : float
        Fixed beam length and height (in); never evolved
    width_min, width_max : float
        Open interval the width must fall in; also the sampling range
    fos_min, fos_max : float
        Open band for the factor of safety
    deflection_max : float
        Bound on the magnitude of vertical deflection (in)
    price_max : float
        Cost must stay below this ($)
    fatigue_hours_min, fatigue_hours_max : float
        Open band for estimated fatigue life (flight hours)
    weight_max : float
        Weight must stay below this (lb)
    population_size : int
        Genomes per generation
    survivor_count : int
        Top-K genomes kept as parents each generation
    generation_count : int
        Fixed number of generations per run
    """
    design_length: float = 1257.0
    design_height: float = 34.0

    width_min: float = 22.0
    width_max: float = 38.0

    fos_min: float = 1.4
    fos_max: float = 2.2

    deflection_max: float = 70.0

    price_max: float = 500000.0

    fatigue_hours_min: float = 42000.0
    fatigue_hours_max: float = 500000.0

    weight_max: float = 78000.0

    population_size: int = 1000
    survivor_count: int = 100
    generation_count: int = 5000

    def __post_init__(self):
        if self.design_length <= 0:
            raise ValueError(f"design_length must be positive, got {self.design_length}")
        if self.design_height <= 0:
            raise ValueError(f"design_height must be positive, got {self.design_height}")
        if not self.width_min < self.width_max:
            raise ValueError(f"width_min ({self.width_min}) must be below width_max ({self.width_max})")
        if not self.fos_min < self.fos_max:
            raise ValueError(f"fos_min ({self.fos_min}) must be below fos_max ({self.fos_max})")
        if not self.fatigue_hours_min < self.fatigue_hours_max:
            raise ValueError(
                f"fatigue_hours_min ({self.fatigue_hours_min}) must be below "
                f"fatigue_hours_max ({self.fatigue_hours_max})"
            )
        if self.fos_min < 0:
            raise ValueError(f"fos_min must be non-negative, got {self.fos_min}")
        for name in ("deflection_max", "price_max", "weight_max"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")
        if self.population_size < 1:
            raise ValueError(f"population_size must be at least 1, got {self.population_size}")
        if not 1 <= self.survivor_count <= self.population_size:
            raise ValueError(
                f"survivor_count {self.survivor_count} out of range [1, {self.population_size}]"
            )
        if self.generation_count < 0:
            raise ValueError(f"generation_count must be non-negative, got {self.generation_count}")

        # A single violation must always cost more than the best soft rewards can earn
        if PENALTY <= self.max_soft_reward + self.weight_max:
            raise ValueError(
                f"Soft rewards up to {self.max_soft_reward} (plus weight bound "
                f"{self.weight_max}) would overturn the constraint penalty {PENALTY}"
            )

    @property
    def width_range(self) -> Tuple[float, float]:
        return (self.width_min, self.width_max)

    @property
    def max_soft_reward(self) -> int:
        """Upper bound on the sum of soft rewards a feasible beam can earn."""
        return int(self.price_max / 3.0) + int(self.fos_max * self.weight_max)
