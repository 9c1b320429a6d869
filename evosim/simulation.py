"""
Multi-generation evolution loop for BrainAgent populations.

Orchestrates the evolution loop:
1. Initialize a random population
2. Evaluate fitness with a caller-supplied function
3. Record statistics
4. Breed the next generation with GeneticAlgorithm
5. Repeat until the generation budget or early stopping
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional
import time

from .agents import BrainAgent, agent_builder, random_population
from .core.network import Network
from .core.random_source import RandomSource
from .evolution.engine import EvolutionConfig, GeneticAlgorithm
from .evolution.history import EvolutionHistory, GenerationStats

FitnessFn = Callable[[Network], float]


@dataclass
class EvolutionResult:
    """Results from an evolution run."""
    generations_completed: int
    best_fitness: float
    best_agent: Optional[BrainAgent]
    history: EvolutionHistory
    final_population: List[BrainAgent]
    runtime_seconds: float
    early_stopped: bool
    early_stop_reason: Optional[str] = None

    def summary(self) -> str:
        """Generate summary string."""
        lines = [
            f"Generations: {self.generations_completed}",
            f"Best fitness: {self.best_fitness:.4f}",
            f"Runtime: {self.runtime_seconds:.1f}s",
            f"Early stopped: {self.early_stopped}",
        ]
        if self.early_stop_reason:
            lines.append(f"Reason: {self.early_stop_reason}")
        if self.best_agent is not None:
            lines.append(f"Best brain: {self.best_agent.brain!r}")
        return '\n'.join(lines)


class EvolutionEngine:
    """
    Evolves network brains against a fitness function.

    The fitness function receives a network and must return a non-negative
    score; higher is better.
    """

    def __init__(
        self,
        config: EvolutionConfig,
        fitness_fn: FitnessFn,
        genetic_algorithm: Optional[GeneticAlgorithm] = None,
    ):
        """
        Initialize evolution engine.

        Args:
            config: Evolution configuration
            fitness_fn: Scores a network
            genetic_algorithm: Breeder to use (built from config if omitted)
        """
        self.config = config
        self.fitness_fn = fitness_fn
        self.genetic_algorithm = genetic_algorithm or GeneticAlgorithm.from_config(config)
        self.builder = agent_builder(config.topology)

        self.population: List[BrainAgent] = []
        self.best_agent: Optional[BrainAgent] = None
        self.history = EvolutionHistory()
        self.generation = 0

    def initialize_population(self, rng: RandomSource) -> None:
        """Create a random initial population."""
        self.population = random_population(
            rng, self.config.topology, self.config.population_size
        )
        self.generation = 0
        self.best_agent = None
        self.history = EvolutionHistory()

    def evaluate_population(self) -> None:
        """Score every agent in the current population."""
        for agent in self.population:
            agent.fitness_score = float(self.fitness_fn(agent.brain))

    def run_generation(self, rng: RandomSource) -> GenerationStats:
        """Evaluate, record and breed one generation."""
        self.generation += 1

        self.evaluate_population()
        stats = self.history.record_generation(self.generation, self.population)
        self._update_best()

        self.population = self.genetic_algorithm.evolve(
            rng, self.population, self.builder
        )
        return stats

    def _update_best(self) -> None:
        if not self.population:
            return
        candidate = max(self.population, key=lambda agent: agent.fitness_score)
        if self.best_agent is None or candidate.fitness_score > self.best_agent.fitness_score:
            self.best_agent = candidate

    def evolve(
        self,
        n_generations: int,
        seed: Optional[int] = None,
        progress_callback: Optional[Callable[[int, int, Dict], None]] = None,
    ) -> EvolutionResult:
        """
        Run full evolutionary optimization.

        Args:
            n_generations: Maximum number of generations
            seed: Seed for the run's random source
            progress_callback: Optional callback(gen, total_gens, stats)

        Returns:
            EvolutionResult with final population and statistics
        """
        rng = RandomSource(seed)
        start_time = time.time()
        early_stopped = False
        early_stop_reason = None

        self.initialize_population(rng)

        for _ in range(n_generations):
            stats = self.run_generation(rng)

            if progress_callback:
                progress_callback(self.generation, n_generations, stats.to_dict())

            if self.history.should_early_stop(
                patience=self.config.early_stop_patience,
                min_improvement=self.config.early_stop_min_improvement,
            ):
                early_stopped = True
                early_stop_reason = (
                    f"No improvement > {self.config.early_stop_min_improvement} "
                    f"in {self.config.early_stop_patience} generations"
                )
                break

        runtime = time.time() - start_time
        best_fitness = max(self.history.fitness_trajectory) if self.history.fitness_trajectory else 0.0

        return EvolutionResult(
            generations_completed=self.generation,
            best_fitness=best_fitness,
            best_agent=self.best_agent,
            history=self.history,
            final_population=self.population,
            runtime_seconds=runtime,
            early_stopped=early_stopped,
            early_stop_reason=early_stop_reason,
        )
