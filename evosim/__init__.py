"""
evosim - evolving feed-forward neural networks with a genetic algorithm.

Subpackages:
- evosim.core: random source and networks
- evosim.evolution: chromosomes, operators and the genetic algorithm
"""

from .errors import (
    EvolutionError,
    EmptyPopulation,
    EmptyOrDegeneratePopulation,
    ChromosomeLengthMismatch,
    InvalidTopology,
    InputSizeMismatch,
    IndexOutOfRange,
)
from .core import RandomSource, Network, Layer, Neuron, LayerTopology
from .evolution import (
    Chromosome,
    Individual,
    GeneticAlgorithm,
    EvolutionConfig,
    RouletteWheelSelection,
    UniformCrossover,
    UniformMutation,
)
from .agents import BrainAgent, agent_builder, random_population
from .simulation import EvolutionEngine, EvolutionResult

__version__ = '0.1.0'

__all__ = [
    'EvolutionError',
    'EmptyPopulation',
    'EmptyOrDegeneratePopulation',
    'ChromosomeLengthMismatch',
    'InvalidTopology',
    'InputSizeMismatch',
    'IndexOutOfRange',
    'RandomSource',
    'Network',
    'Layer',
    'Neuron',
    'LayerTopology',
    'Chromosome',
    'Individual',
    'GeneticAlgorithm',
    'EvolutionConfig',
    'RouletteWheelSelection',
    'UniformCrossover',
    'UniformMutation',
    'BrainAgent',
    'agent_builder',
    'random_population',
    'EvolutionEngine',
    'EvolutionResult',
]
