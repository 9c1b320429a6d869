"""
Errors raised by the evolution core.

All of these are precondition violations: the caller is expected to avoid
them by sizing populations and validating topologies up front. They derive
from ValueError so existing ``except ValueError`` handlers keep working.
"""


class EvolutionError(ValueError):
    """Base class for evosim precondition failures."""


class EmptyPopulation(EvolutionError):
    """evolve() or a selection method was given zero individuals."""


class EmptyOrDegeneratePopulation(EvolutionError):
    """Weighted selection over a population whose fitness cannot form a distribution."""


class ChromosomeLengthMismatch(EvolutionError):
    """Gene sequences of incompatible length were combined or decoded."""


class InvalidTopology(EvolutionError):
    """A network topology with fewer than two layers was supplied."""


class InputSizeMismatch(EvolutionError):
    """Network input vector length differs from the first layer's fan-in."""


class IndexOutOfRange(EvolutionError, IndexError):
    """Chromosome index outside [0, len)."""
