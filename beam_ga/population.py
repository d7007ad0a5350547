"""Fixed-size population of genomes of one topology/material pair."""

from typing import Iterator, List, Sequence, Type

import numpy as np

from .beams import BeamGenome
from .catalog import Material


class Population:
    """
    Ordered collection of genomes whose size never changes.

    The engine owns exactly one Population per run and swaps its contents
    each generation through replace().
    """

    def __init__(self, genomes: Sequence[BeamGenome]):
        if len(genomes) == 0:
            raise ValueError("Population needs at least one genome")
        self._genomes: List[BeamGenome] = list(genomes)
        self.size = len(self._genomes)

    @classmethod
    def sample(
        cls,
        beam_type: Type[BeamGenome],
        material: Material,
        config,
        rng: np.random.Generator,
    ) -> "Population":
        """Uniform random initial population within the configured bounds."""
        return cls([beam_type.sample(rng, material, config) for _ in range(config.population_size)])

    def replace(self, genomes: Sequence[BeamGenome]) -> None:
        """Swap in the next generation; its size must match."""
        if len(genomes) != self.size:
            raise ValueError(
                f"Next generation has {len(genomes)} genomes, population size is {self.size}"
            )
        self._genomes = list(genomes)

    def __len__(self) -> int:
        return len(self._genomes)

    def __iter__(self) -> Iterator[BeamGenome]:
        return iter(self._genomes)

    def __getitem__(self, index: int) -> BeamGenome:
        return self._genomes[index]
