"""
Evolutionary operators: selection, crossover, and mutation.

Each operator family is a small strategy interface with a single entry
point, so GeneticAlgorithm can swap implementations without touching its
breeding loop:
- SelectionMethod picks one parent, biased by fitness
- CrossoverMethod combines two parent chromosomes into a child
- MutationMethod perturbs a child chromosome in place

Every operator takes the RandomSource explicitly; none touch global state.
"""

from abc import ABC, abstractmethod
from typing import Sequence
import numpy as np

from ..core.random_source import RandomSource
from ..errors import ChromosomeLengthMismatch, EmptyPopulation
from .chromosome import Chromosome
from .individual import Individual


# =============================================================================
# Selection Operators
# =============================================================================

class SelectionMethod(ABC):
    """Chooses one individual from a population."""

    @abstractmethod
    def select(self, rng: RandomSource, population: Sequence[Individual]) -> Individual:
        ...


class RouletteWheelSelection(SelectionMethod):
    """
    Fitness-proportionate selection.

    Individual i is returned with probability fitness(i) / sum(fitness).
    Draws are independent: selecting a second parent does not exclude the
    first, so self-pairing is possible.
    """

    def select(self, rng: RandomSource, population: Sequence[Individual]) -> Individual:
        """
        Args:
            rng: Random source (one weighted draw per call)
            population: Non-empty population with non-negative fitness

        Raises:
            EmptyPopulation: if the population is empty
            EmptyOrDegeneratePopulation: if total fitness is zero or any
                fitness is negative
        """
        if len(population) == 0:
            raise EmptyPopulation("Cannot select from an empty population")
        index = rng.weighted_choice(population, lambda individual: individual.fitness())
        return population[index]

    def __repr__(self) -> str:
        return "RouletteWheelSelection()"


# =============================================================================
# Crossover Operators
# =============================================================================

class CrossoverMethod(ABC):
    """Combines two parent chromosomes into one child."""

    @abstractmethod
    def crossover(
        self,
        rng: RandomSource,
        parent_a: Chromosome,
        parent_b: Chromosome,
    ) -> Chromosome:
        ...


class UniformCrossover(CrossoverMethod):
    """
    Uniform crossover with a fair coin per gene.

    Example:
        Parent A: [1, 2, 3, 4]
        Parent B: [-1, -2, -3, -4]
        Coins:    [A, B, B, A]
        Child:    [1, -2, -3, 4]

    The child never holds a value absent from both parents at that position.
    """

    def crossover(
        self,
        rng: RandomSource,
        parent_a: Chromosome,
        parent_b: Chromosome,
    ) -> Chromosome:
        if len(parent_a) != len(parent_b):
            raise ChromosomeLengthMismatch(
                f"Parents differ in length: {len(parent_a)} vs {len(parent_b)}"
            )
        take_a = rng.coin_flips(len(parent_a))
        return Chromosome(np.where(take_a, parent_a.genes, parent_b.genes))

    def __repr__(self) -> str:
        return "UniformCrossover()"


# =============================================================================
# Mutation Operators
# =============================================================================

class MutationMethod(ABC):
    """Perturbs a chromosome's genes in place."""

    @abstractmethod
    def mutate(self, rng: RandomSource, chromosome: Chromosome) -> None:
        ...


class UniformMutation(MutationMethod):
    """
    Additive per-gene mutation.

    Each gene independently, with probability ``chance``, becomes
    ``gene + coeff * u`` where u is uniform on [-1, 1).

    Args:
        chance: Probability that a given gene is mutated, in [0, 1]
        coeff: Magnitude of the perturbation, >= 0
    """

    def __init__(self, chance: float, coeff: float):
        if not 0.0 <= chance <= 1.0:
            raise ValueError(f"Mutation chance {chance} out of range [0, 1]")
        if coeff < 0.0:
            raise ValueError(f"Mutation coefficient must be non-negative, got {coeff}")
        self.chance = chance
        self.coeff = coeff

    def mutate(self, rng: RandomSource, chromosome: Chromosome) -> None:
        n_genes = len(chromosome)
        if n_genes == 0:
            return

        mask = rng.coin_flips(n_genes, probability=self.chance)
        # One offset per gene, mutated or not
        offsets = self.coeff * rng.floats_in(-1.0, 1.0, n_genes)

        genes = chromosome.genes.copy()
        genes[mask] += offsets[mask]
        chromosome.apply(genes)

    def __repr__(self) -> str:
        return f"UniformMutation(chance={self.chance}, coeff={self.coeff})"
