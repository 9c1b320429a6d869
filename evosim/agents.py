"""
Agents with evolvable network brains.

BrainAgent adapts a Network to the Individual protocol: its chromosome is
the brain's flat weight encoding and its fitness is whatever score the
surrounding simulation assigned. ``agent_builder`` supplies the
chromosome -> individual construction capability that
GeneticAlgorithm.evolve expects.
"""

from typing import List, Sequence

import numpy as np

from .core.network import Network, TopologyLike, normalize_topology
from .core.random_source import RandomSource
from .evolution.chromosome import Chromosome
from .evolution.individual import IndividualBuilder


class BrainAgent:
    """
    An individual whose genome is its brain's weights.

    Attributes:
        brain: Network built from the agent's chromosome
        fitness_score: Score assigned by the simulation (0 until evaluated)
    """

    def __init__(self, brain: Network, fitness_score: float = 0.0):
        self.brain = brain
        self.fitness_score = fitness_score

    @classmethod
    def random(cls, rng: RandomSource, topology: TopologyLike) -> 'BrainAgent':
        return cls(Network.random(rng, topology))

    @classmethod
    def from_chromosome(
        cls,
        chromosome: Chromosome,
        rng: RandomSource,
        topology: TopologyLike,
    ) -> 'BrainAgent':
        """
        Decode a chromosome into a fresh agent.

        Decoding is deterministic; ``rng`` is part of the builder signature
        and is left untouched here.
        """
        return cls(Network.from_weights(topology, chromosome))

    @property
    def topology(self) -> List[int]:
        return [layer.neurons for layer in self.brain.topology]

    def chromosome(self) -> Chromosome:
        return Chromosome(self.brain.weights())

    def fitness(self) -> float:
        return self.fitness_score

    def act(self, inputs: Sequence[float]) -> np.ndarray:
        """Feed sensor inputs through the brain."""
        return self.brain.propagate(inputs)

    def __repr__(self) -> str:
        return f"BrainAgent(brain={self.brain!r}, fitness={self.fitness_score:.4f})"


def random_population(
    rng: RandomSource,
    topology: TopologyLike,
    size: int,
) -> List[BrainAgent]:
    """Create ``size`` agents with randomly initialized brains."""
    return [BrainAgent.random(rng, topology) for _ in range(size)]


def agent_builder(topology: TopologyLike) -> IndividualBuilder:
    """
    Bind a topology into a construction capability for evolve().

    Example:
        builder = agent_builder([3, 6, 2])
        next_gen = ga.evolve(rng, agents, builder)
    """
    topology = normalize_topology(topology)

    def build(chromosome: Chromosome, rng: RandomSource) -> BrainAgent:
        return BrainAgent.from_chromosome(chromosome, rng, topology)

    return build
