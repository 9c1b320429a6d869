"""Capability set the genetic algorithm needs from a domain object."""

from typing import Callable, Protocol, runtime_checkable

from ..core.random_source import RandomSource
from .chromosome import Chromosome


@runtime_checkable
class Individual(Protocol):
    """
    Anything with a chromosome and a previously computed fitness.

    Both methods must be read-only; the genetic algorithm never modifies
    an individual, it only breeds replacements.
    """

    def chromosome(self) -> Chromosome:
        ...

    def fitness(self) -> float:
        ...


# (child chromosome, rng) -> freshly constructed domain individual
IndividualBuilder = Callable[[Chromosome, RandomSource], Individual]
