"""Core building blocks: random source and feed-forward networks."""

from .random_source import RandomSource
from .network import Network, Layer, Neuron, LayerTopology, normalize_topology

__all__ = [
    'RandomSource',
    'Network',
    'Layer',
    'Neuron',
    'LayerTopology',
    'normalize_topology',
]
