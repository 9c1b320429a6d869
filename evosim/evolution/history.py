"""
Generation-by-generation statistics for evolutionary runs.

Records fitness summaries per generation and detects stagnation for
early stopping.
"""

from dataclasses import dataclass, asdict
from datetime import datetime
from typing import List, Dict, Any, Sequence
import numpy as np

from .individual import Individual


@dataclass
class GenerationStats:
    """Statistics for a single generation."""
    generation: int
    best_fitness: float
    mean_fitness: float
    min_fitness: float
    std_fitness: float
    population_size: int
    timestamp: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def __str__(self) -> str:
        return (
            f"gen {self.generation}: min={self.min_fitness:.3f} "
            f"max={self.best_fitness:.3f} mean={self.mean_fitness:.3f} "
            f"std={self.std_fitness:.3f}"
        )


class EvolutionHistory:
    """
    Tracks evolution progress over generations.

    Only reads fitness from individuals; nothing here feeds back into
    selection.
    """

    def __init__(self):
        self.generations: List[GenerationStats] = []
        self.fitness_trajectory: List[float] = []

    def record_generation(
        self,
        generation: int,
        population: Sequence[Individual],
    ) -> GenerationStats:
        """
        Record statistics for an evaluated generation.

        Args:
            generation: Generation number
            population: Population whose fitness has been computed

        Returns:
            GenerationStats for this generation
        """
        fitnesses = [individual.fitness() for individual in population] or [0.0]

        stats = GenerationStats(
            generation=generation,
            best_fitness=float(max(fitnesses)),
            mean_fitness=float(np.mean(fitnesses)),
            min_fitness=float(min(fitnesses)),
            std_fitness=float(np.std(fitnesses)),
            population_size=len(population),
            timestamp=datetime.now().isoformat(),
        )

        self.generations.append(stats)
        self.fitness_trajectory.append(stats.best_fitness)
        return stats

    def stagnant_generations(self, min_improvement: float = 0.001) -> int:
        """Generations since the best fitness last rose by ``min_improvement``."""
        best = float('-inf')
        stagnant = 0
        for fitness in self.fitness_trajectory:
            if fitness >= best + min_improvement:
                best = fitness
                stagnant = 0
            else:
                stagnant += 1
        return stagnant

    def should_early_stop(
        self,
        patience: int = 10,
        min_improvement: float = 0.001,
    ) -> bool:
        """True once ``patience`` generations in a row brought no real gain."""
        return self.stagnant_generations(min_improvement) >= patience

    def to_dict(self) -> Dict[str, Any]:
        # The trajectory is derived from the stats, so only they are stored
        return {'generations': [stats.to_dict() for stats in self.generations]}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'EvolutionHistory':
        history = cls()
        for entry in data.get('generations', []):
            stats = GenerationStats(**entry)
            history.generations.append(stats)
            history.fitness_trajectory.append(stats.best_fitness)
        return history

    def __len__(self) -> int:
        return len(self.generations)
