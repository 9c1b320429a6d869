"""
Genetic algorithm over flat chromosomes.

Key components:
- Chromosome: ordered float genes
- Individual: capability protocol (chromosome + fitness)
- Operators: roulette-wheel selection, uniform crossover, uniform mutation
- GeneticAlgorithm: one generational step over pluggable operators
- EvolutionHistory: per-generation fitness statistics

Example usage:
    from evosim.core import RandomSource
    from evosim.evolution import GeneticAlgorithm, EvolutionConfig

    ga = GeneticAlgorithm.from_config(EvolutionConfig())
    population = ga.evolve(RandomSource(seed=42), population, builder)
"""

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
from .engine import GeneticAlgorithm, EvolutionConfig
from .history import GenerationStats, EvolutionHistory

__all__ = [
    # Core classes
    'Chromosome',
    'Individual',
    'IndividualBuilder',
    'GeneticAlgorithm',
    'EvolutionConfig',
    # Operators
    'SelectionMethod',
    'CrossoverMethod',
    'MutationMethod',
    'RouletteWheelSelection',
    'UniformCrossover',
    'UniformMutation',
    # History
    'GenerationStats',
    'EvolutionHistory',
]
