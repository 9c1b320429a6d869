"""
Feed-forward neural networks used as evolvable brains.

A Network is an ordered stack of Layers, each Layer an ordered list of
Neurons, each Neuron a bias plus one weight per input. Networks are built
either at random from a topology or deterministically from a flat weight
sequence (a decoded chromosome), and are never modified after construction.

Flat weight order, shared by ``Network.from_weights`` and ``Network.weights``:
for each layer, for each neuron: bias, then each weight in input order.
"""

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Sequence, Union
import numpy as np

from .random_source import RandomSource
from ..errors import ChromosomeLengthMismatch, InputSizeMismatch, InvalidTopology


@dataclass(frozen=True)
class LayerTopology:
    """Shape of one layer: its neuron count."""
    neurons: int


TopologyLike = Sequence[Union[LayerTopology, int]]


def normalize_topology(layers: TopologyLike) -> List[LayerTopology]:
    """
    Coerce a topology description to a list of LayerTopology.

    Plain ints are accepted as neuron counts.

    Raises:
        InvalidTopology: if fewer than two entries are given or any
            entry has a non-positive neuron count
    """
    topology = [
        layer if isinstance(layer, LayerTopology) else LayerTopology(int(layer))
        for layer in layers
    ]
    if len(topology) < 2:
        raise InvalidTopology(
            f"Topology needs an input size and at least one layer, got {len(topology)} entries"
        )
    for layer in topology:
        if layer.neurons < 1:
            raise InvalidTopology(f"Layer size must be positive, got {layer.neurons}")
    return topology


class Neuron:
    """Single ReLU unit."""

    def __init__(self, bias: float, weights: Iterable[float]):
        self.bias = float(bias)
        self.weights = np.array(list(weights), dtype=np.float64)

    @classmethod
    def random(cls, rng: RandomSource, input_size: int) -> 'Neuron':
        """Bias and weights drawn uniformly from [-1, 1), bias first."""
        bias = rng.next_float_in(-1.0, 1.0)
        weights = rng.floats_in(-1.0, 1.0, input_size)
        return cls(bias, weights)

    @property
    def input_size(self) -> int:
        return len(self.weights)

    def propagate(self, inputs: Sequence[float]) -> float:
        """Biased weighted sum with a zero floor."""
        inputs = np.asarray(inputs, dtype=np.float64)
        if len(inputs) != len(self.weights):
            raise InputSizeMismatch(
                f"Neuron expects {len(self.weights)} inputs, got {len(inputs)}"
            )
        return max(0.0, self.bias + float(np.dot(self.weights, inputs)))

    def __repr__(self) -> str:
        return f"Neuron(bias={self.bias:.4f}, weights={self.weights.tolist()})"


class Layer:
    """Ordered group of neurons sharing the same inputs."""

    def __init__(self, neurons: List[Neuron]):
        self.neurons = neurons

    @classmethod
    def random(cls, rng: RandomSource, input_size: int, output_size: int) -> 'Layer':
        return cls([Neuron.random(rng, input_size) for _ in range(output_size)])

    @property
    def input_size(self) -> int:
        return self.neurons[0].input_size if self.neurons else 0

    @property
    def output_size(self) -> int:
        return len(self.neurons)

    def propagate(self, inputs: Sequence[float]) -> np.ndarray:
        return np.array([neuron.propagate(inputs) for neuron in self.neurons])


class Network:
    """
    Feed-forward network of ReLU layers.

    Example:
        rng = RandomSource(seed=0)
        net = Network.random(rng, [3, 6, 2])
        outputs = net.propagate([0.1, 0.5, -0.2])   # array of length 2
    """

    def __init__(self, layers: List[Layer]):
        self.layers = layers

    @classmethod
    def random(cls, rng: RandomSource, layers: TopologyLike) -> 'Network':
        """
        Build a network with every bias and weight drawn from [-1, 1).

        Args:
            rng: Random source, consumed layer by layer, neuron by neuron
            layers: Input size followed by the size of each layer

        Raises:
            InvalidTopology: if fewer than two topology entries are supplied
        """
        topology = normalize_topology(layers)
        return cls([
            Layer.random(rng, inputs.neurons, outputs.neurons)
            for inputs, outputs in zip(topology, topology[1:])
        ])

    @staticmethod
    def weight_count(layers: TopologyLike) -> int:
        """Number of genes needed to build a network of this shape."""
        topology = normalize_topology(layers)
        return sum(
            (1 + inputs.neurons) * outputs.neurons
            for inputs, outputs in zip(topology, topology[1:])
        )

    @classmethod
    def from_weights(cls, layers: TopologyLike, weights: Iterable[float]) -> 'Network':
        """
        Build a network deterministically from a flat weight sequence.

        Genes beyond the required count are ignored.

        Raises:
            InvalidTopology: if fewer than two topology entries are supplied
            ChromosomeLengthMismatch: if ``weights`` is too short
        """
        topology = normalize_topology(layers)
        genes = np.asarray(list(weights), dtype=np.float64)
        required = cls.weight_count(topology)
        if len(genes) < required:
            raise ChromosomeLengthMismatch(
                f"Topology {[t.neurons for t in topology]} needs {required} genes, "
                f"got {len(genes)}"
            )

        built = []
        offset = 0
        for inputs, outputs in zip(topology, topology[1:]):
            neurons = []
            for _ in range(outputs.neurons):
                bias = genes[offset]
                neuron_weights = genes[offset + 1:offset + 1 + inputs.neurons]
                neurons.append(Neuron(bias, neuron_weights))
                offset += 1 + inputs.neurons
            built.append(Layer(neurons))
        return cls(built)

    @property
    def topology(self) -> List[LayerTopology]:
        """Input size followed by each layer's neuron count."""
        if not self.layers:
            return []
        return (
            [LayerTopology(self.layers[0].input_size)]
            + [LayerTopology(layer.output_size) for layer in self.layers]
        )

    def weights(self) -> Iterator[float]:
        """Yield biases and weights in the flat encoding order."""
        for layer in self.layers:
            for neuron in layer.neurons:
                yield neuron.bias
                yield from (float(w) for w in neuron.weights)

    def propagate(self, inputs: Sequence[float]) -> np.ndarray:
        """
        Run a forward pass.

        Args:
            inputs: Vector whose length equals the first layer's input size

        Returns:
            Output vector of the final layer

        Raises:
            InputSizeMismatch: if the input length is wrong
        """
        current = np.asarray(inputs, dtype=np.float64)
        expected = self.layers[0].input_size
        if current.ndim != 1 or len(current) != expected:
            raise InputSizeMismatch(
                f"Network expects {expected} inputs, got shape {current.shape}"
            )
        for layer in self.layers:
            current = layer.propagate(current)
        return current

    def __repr__(self) -> str:
        shape = '-'.join(str(t.neurons) for t in self.topology)
        return f"Network({shape})"
