"""
Chromosome: the flat gene encoding of an individual's evolvable state.

Genes are stored as a float64 numpy array. Position is significant: each
gene maps to one specific weight or bias of a network.
"""

from typing import Callable, Iterable, Iterator, List
import numpy as np

from ..errors import ChromosomeLengthMismatch, IndexOutOfRange


class Chromosome:
    """
    Ordered, fixed-length sequence of real-valued genes.

    No length validation happens here; crossover and network decoding
    enforce compatibility.
    """

    def __init__(self, genes: Iterable[float] = ()):
        self._genes = np.array(list(genes), dtype=np.float64)

    @property
    def genes(self) -> np.ndarray:
        """Read-only view of the gene array."""
        view = self._genes.view()
        view.flags.writeable = False
        return view

    def _check_index(self, index: int) -> int:
        if not 0 <= index < len(self._genes):
            raise IndexOutOfRange(
                f"Gene index {index} out of range for chromosome of length {len(self._genes)}"
            )
        return index

    def __len__(self) -> int:
        return len(self._genes)

    def __getitem__(self, index: int) -> float:
        return float(self._genes[self._check_index(index)])

    def __setitem__(self, index: int, value: float) -> None:
        self._genes[self._check_index(index)] = value

    def __iter__(self) -> Iterator[float]:
        return (float(gene) for gene in self._genes)

    def map_genes(self, fn: Callable[[float], float]) -> None:
        """Rewrite every gene in place with ``fn(gene)``."""
        for i, gene in enumerate(self._genes):
            self._genes[i] = fn(float(gene))

    def apply(self, genes: np.ndarray) -> None:
        """Overwrite all genes at once; the length must not change."""
        genes = np.asarray(genes, dtype=np.float64)
        if genes.shape != self._genes.shape:
            raise ChromosomeLengthMismatch(
                f"Cannot replace {len(self._genes)} genes with {genes.shape}"
            )
        self._genes[:] = genes

    def to_list(self) -> List[float]:
        return [float(gene) for gene in self._genes]

    def copy(self) -> 'Chromosome':
        return Chromosome(self._genes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Chromosome):
            return NotImplemented
        return np.array_equal(self._genes, other._genes)

    def __repr__(self) -> str:
        if len(self._genes) <= 6:
            return f"Chromosome({self.to_list()})"
        head = ', '.join(f"{g:.3f}" for g in self._genes[:3])
        return f"Chromosome([{head}, ...], len={len(self._genes)})"
