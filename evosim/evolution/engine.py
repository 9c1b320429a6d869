"""
Genetic algorithm orchestration.

GeneticAlgorithm performs one generational step:
1. Select two parents (fitness-biased, independent draws)
2. Cross them over into a child chromosome
3. Mutate the child in place
4. Hand the child to a domain builder to materialize a new individual

It knows nothing about fitness computation or how many generations a run
lasts; see evosim.simulation for the multi-generation loop.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence

from ..core.network import normalize_topology
from ..core.random_source import RandomSource
from ..errors import EmptyPopulation
from .chromosome import Chromosome
from .individual import Individual, IndividualBuilder
from .operators import (
    SelectionMethod,
    CrossoverMethod,
    MutationMethod,
    RouletteWheelSelection,
    UniformCrossover,
    UniformMutation,
)


@dataclass
class EvolutionConfig:
    """Configuration for an evolution run."""
    # Population parameters
    population_size: int = 40
    topology: List[int] = field(default_factory=lambda: [9, 18, 2])

    # Mutation parameters
    mutation_chance: float = 0.01
    mutation_coeff: float = 0.3

    # Early stopping
    early_stop_patience: int = 10
    early_stop_min_improvement: float = 0.001

    def __post_init__(self):
        """Validate configuration."""
        if self.population_size < 1:
            raise ValueError(f"Population size must be at least 1, got {self.population_size}")
        normalize_topology(self.topology)
        if not 0.0 <= self.mutation_chance <= 1.0:
            raise ValueError(f"Mutation chance {self.mutation_chance} out of range [0, 1]")
        if self.mutation_coeff < 0.0:
            raise ValueError(f"Mutation coefficient {self.mutation_coeff} must be non-negative")
        if self.early_stop_patience < 1:
            raise ValueError(f"Early stop patience must be at least 1, got {self.early_stop_patience}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            'population_size': self.population_size,
            'topology': list(self.topology),
            'mutation_chance': self.mutation_chance,
            'mutation_coeff': self.mutation_coeff,
            'early_stop_patience': self.early_stop_patience,
            'early_stop_min_improvement': self.early_stop_min_improvement,
        }


def _chromosome_of(individual: Individual) -> Chromosome:
    return individual.chromosome()


class GeneticAlgorithm:
    """
    Strategy-parameterized generational breeder.

    Example:
        ga = GeneticAlgorithm(
            RouletteWheelSelection(),
            UniformCrossover(),
            UniformMutation(chance=0.01, coeff=0.3),
        )
        next_population = ga.evolve(rng, population, builder)
    """

    def __init__(
        self,
        selection_method: SelectionMethod,
        crossover_method: CrossoverMethod,
        mutation_method: MutationMethod,
    ):
        self.selection_method = selection_method
        self.crossover_method = crossover_method
        self.mutation_method = mutation_method

    @classmethod
    def from_config(cls, config: EvolutionConfig) -> 'GeneticAlgorithm':
        """Roulette selection, uniform crossover and uniform mutation from config."""
        return cls(
            RouletteWheelSelection(),
            UniformCrossover(),
            UniformMutation(config.mutation_chance, config.mutation_coeff),
        )

    def breed(
        self,
        rng: RandomSource,
        population: Sequence[Individual],
        to_chromosome: Callable[[Individual], Chromosome] = _chromosome_of,
    ) -> Chromosome:
        """Produce one mutated child chromosome from two selected parents."""
        parent_a = to_chromosome(self.selection_method.select(rng, population))
        parent_b = to_chromosome(self.selection_method.select(rng, population))

        child = self.crossover_method.crossover(rng, parent_a, parent_b)
        self.mutation_method.mutate(rng, child)
        return child

    def evolve(
        self,
        rng: RandomSource,
        population: Sequence[Individual],
        from_chromosome: IndividualBuilder,
        to_chromosome: Optional[Callable[[Individual], Chromosome]] = None,
    ) -> List[Individual]:
        """
        Breed a new population of the same size.

        Args:
            rng: Random source shared by every draw in this call
            population: Evaluated individuals (read-only)
            from_chromosome: Builds a domain individual from a child chromosome
            to_chromosome: Extracts a chromosome from an individual
                (defaults to ``individual.chromosome()``)

        Returns:
            List of newly built individuals, ``len(population)`` long

        Raises:
            EmptyPopulation: if ``population`` is empty
        """
        if len(population) == 0:
            raise EmptyPopulation("Cannot evolve an empty population")
        to_chromosome = to_chromosome or _chromosome_of

        return [
            from_chromosome(self.breed(rng, population, to_chromosome), rng)
            for _ in range(len(population))
        ]

    def __repr__(self) -> str:
        return (
            f"GeneticAlgorithm({self.selection_method!r}, "
            f"{self.crossover_method!r}, {self.mutation_method!r})"
        )
