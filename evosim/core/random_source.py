"""
Seedable random source threaded through every stochastic operation.

Wraps a numpy ``Generator`` so that a single explicit handle, rather than
the global ``np.random`` state, drives selection draws, crossover coin flips,
mutation draws and random network construction. Two sources built from the
same seed produce identical streams.
"""

from typing import Callable, Optional, Sequence, TypeVar
import numpy as np

from ..errors import EmptyPopulation, EmptyOrDegeneratePopulation

T = TypeVar('T')


class RandomSource:
    """Deterministic pseudo-random generator (numpy PCG64 under the hood)."""

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._generator = np.random.default_rng(seed)

    def next_float_in(self, low: float, high: float) -> float:
        """Draw one float uniformly from [low, high)."""
        return float(self._generator.uniform(low, high))

    def floats_in(self, low: float, high: float, size: int) -> np.ndarray:
        """Draw ``size`` floats uniformly from [low, high), in stream order."""
        return self._generator.uniform(low, high, size=size)

    def coin_flips(self, size: int, probability: float = 0.5) -> np.ndarray:
        """Boolean mask of ``size`` independent draws, True with ``probability``."""
        return self._generator.random(size) < probability

    def weighted_choice(
        self,
        items: Sequence[T],
        weight_fn: Callable[[T], float],
    ) -> int:
        """
        Pick an index with probability proportional to ``weight_fn(item)``.

        Uses a single uniform draw over the cumulative weights.

        Args:
            items: Candidates to choose from
            weight_fn: Maps each candidate to a non-negative weight

        Returns:
            Index of the chosen item

        Raises:
            EmptyPopulation: if ``items`` is empty
            EmptyOrDegeneratePopulation: if any weight is negative or not
                finite, or all weights are zero
        """
        if len(items) == 0:
            raise EmptyPopulation("Cannot choose from an empty population")

        weights = np.array([weight_fn(item) for item in items], dtype=np.float64)
        if not np.all(np.isfinite(weights)) or np.any(weights < 0):
            raise EmptyOrDegeneratePopulation(
                f"Weights must be finite and non-negative, got {weights.tolist()}"
            )

        largest = weights.max()
        if largest <= 0:
            raise EmptyOrDegeneratePopulation(
                f"Total weight of {len(items)} items is zero"
            )

        # Scaled to the largest weight so the running sum stays finite
        cumulative = np.cumsum(weights / largest)
        total = cumulative[-1]
        point = self._generator.random() * total
        index = int(np.searchsorted(cumulative, point, side='right'))
        # Guard against point landing exactly on the total after rounding
        return min(index, len(items) - 1)

    def __repr__(self) -> str:
        return f"RandomSource(seed={self.seed})"
