"""
Tests for the random source, feed-forward networks and brain agents.

Run with: python -m pytest tests/test_network.py -v
"""

import pytest
import numpy as np
import sys
from collections import Counter
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from evosim.core.random_source import RandomSource
from evosim.core.network import (
    Network,
    Layer,
    Neuron,
    LayerTopology,
    normalize_topology,
)
from evosim.agents import BrainAgent, agent_builder, random_population
from evosim.evolution.chromosome import Chromosome
from evosim.evolution.individual import Individual
from evosim.errors import (
    ChromosomeLengthMismatch,
    EmptyPopulation,
    EmptyOrDegeneratePopulation,
    InputSizeMismatch,
    InvalidTopology,
)


class TestRandomSource:
    """Tests for RandomSource."""

    def test_same_seed_same_stream(self):
        a = RandomSource(seed=7)
        b = RandomSource(seed=7)

        assert [a.next_float_in(-1.0, 1.0) for _ in range(10)] == \
            [b.next_float_in(-1.0, 1.0) for _ in range(10)]
        assert np.array_equal(a.floats_in(0.0, 5.0, 20), b.floats_in(0.0, 5.0, 20))

    def test_different_seeds_differ(self):
        a = RandomSource(seed=1).floats_in(0.0, 1.0, 10)
        b = RandomSource(seed=2).floats_in(0.0, 1.0, 10)
        assert not np.array_equal(a, b)

    def test_next_float_in_range(self):
        rng = RandomSource(seed=0)
        values = [rng.next_float_in(-2.0, 3.0) for _ in range(500)]
        assert all(-2.0 <= v < 3.0 for v in values)

    def test_coin_flips_extremes(self):
        rng = RandomSource(seed=0)
        assert not rng.coin_flips(100, probability=0.0).any()
        assert rng.coin_flips(100, probability=1.0).all()

    def test_coin_flips_shape(self):
        flips = RandomSource(seed=0).coin_flips(1000)
        assert flips.shape == (1000,)
        assert flips.dtype == bool
        assert 400 < flips.sum() < 600

    def test_weighted_choice_skips_zero_weight(self):
        rng = RandomSource(seed=0)
        picks = {rng.weighted_choice([0.0, 1.0, 0.0], lambda w: w) for _ in range(200)}
        assert picks == {1}

    def test_weighted_choice_huge_weights_stay_proportional(self):
        rng = RandomSource(seed=0)
        picks = Counter(
            rng.weighted_choice([1e308, 1e308, 1.0], lambda w: w) for _ in range(400)
        )
        assert picks[2] == 0
        assert 120 < picks[0] < 280

    def test_weighted_choice_errors(self):
        rng = RandomSource(seed=0)
        with pytest.raises(EmptyPopulation):
            rng.weighted_choice([], lambda w: w)
        with pytest.raises(EmptyOrDegeneratePopulation):
            rng.weighted_choice([0.0, 0.0], lambda w: w)
        with pytest.raises(EmptyOrDegeneratePopulation):
            rng.weighted_choice([1.0, -0.5], lambda w: w)
        with pytest.raises(EmptyOrDegeneratePopulation):
            rng.weighted_choice([1.0, float('nan')], lambda w: w)


class TestNeuronAndLayer:
    """Tests for Neuron and Layer propagation."""

    def test_neuron_propagate(self):
        neuron = Neuron(bias=0.5, weights=[-0.3, 0.8])

        assert neuron.propagate([0.5, 1.0]) == pytest.approx(1.15)
        assert neuron.propagate([-10.0, -10.0]) == 0.0

    def test_neuron_input_mismatch(self):
        neuron = Neuron(bias=0.0, weights=[1.0, 1.0])
        with pytest.raises(InputSizeMismatch):
            neuron.propagate([1.0])

    def test_neuron_random(self):
        neuron = Neuron.random(RandomSource(seed=0), 3)

        assert neuron.input_size == 3
        assert -1.0 <= neuron.bias < 1.0
        assert np.all((neuron.weights >= -1.0) & (neuron.weights < 1.0))

    def test_layer_propagate(self):
        neurons = [
            Neuron(bias=0.0, weights=[0.1, 0.2, 0.3]),
            Neuron(bias=0.0, weights=[0.4, 0.5, 0.6]),
        ]
        layer = Layer(neurons)
        inputs = [-0.5, 0.0, 0.5]

        actual = layer.propagate(inputs)
        expected = [neurons[0].propagate(inputs), neurons[1].propagate(inputs)]

        np.testing.assert_allclose(actual, expected)
        assert layer.input_size == 3
        assert layer.output_size == 2

    def test_layer_random_shape(self):
        layer = Layer.random(RandomSource(seed=0), 3, 2)
        assert layer.output_size == 2
        assert all(n.input_size == 3 for n in layer.neurons)


class TestNetwork:
    """Tests for Network construction and propagation."""

    def test_random_topology(self):
        network = Network.random(RandomSource(seed=0), [3, 2, 1])

        assert len(network.layers) == 2
        assert network.layers[0].output_size == 2
        assert network.layers[0].input_size == 3
        assert network.layers[1].output_size == 1
        assert [t.neurons for t in network.topology] == [3, 2, 1]

    def test_random_is_reproducible(self):
        a = Network.random(RandomSource(seed=3), [4, 5, 2])
        b = Network.random(RandomSource(seed=3), [4, 5, 2])
        assert list(a.weights()) == list(b.weights())

    def test_random_weights_in_range(self):
        network = Network.random(RandomSource(seed=0), [5, 8, 3])
        weights = np.array(list(network.weights()))
        assert np.all((weights >= -1.0) & (weights < 1.0))

    def test_invalid_topology(self):
        rng = RandomSource(seed=0)
        with pytest.raises(InvalidTopology):
            Network.random(rng, [LayerTopology(3)])
        with pytest.raises(InvalidTopology):
            Network.random(rng, [])
        with pytest.raises(InvalidTopology):
            Network.from_weights([3], [])
        with pytest.raises(InvalidTopology):
            normalize_topology([3, 0])

    def test_topology_accepts_ints_and_layer_topology(self):
        assert normalize_topology([3, LayerTopology(2)]) == [LayerTopology(3), LayerTopology(2)]

    def test_weight_count(self):
        # (1 + 3) * 2 + (1 + 2) * 1
        assert Network.weight_count([3, 2, 1]) == 11
        network = Network.random(RandomSource(seed=0), [3, 2, 1])
        assert len(list(network.weights())) == 11

    def test_propagate_matches_layer_chain(self):
        first = Layer([
            Neuron(bias=0.0, weights=[-0.5, -0.4, -0.3]),
            Neuron(bias=0.0, weights=[-0.2, -0.1, 0.0]),
        ])
        second = Layer([Neuron(bias=0.0, weights=[-0.5, 0.5])])
        network = Network([first, second])

        inputs = [0.5, 0.6, 0.7]
        actual = network.propagate(inputs)
        expected = second.propagate(first.propagate(inputs))

        np.testing.assert_allclose(actual, expected)

    def test_propagate_output_length(self):
        network = Network.random(RandomSource(seed=0), [3, 6, 2])
        outputs = network.propagate([0.1, 0.5, -0.2])
        assert outputs.shape == (2,)
        assert np.all(outputs >= 0.0)

    def test_propagate_input_mismatch(self):
        network = Network.random(RandomSource(seed=0), [3, 2])
        with pytest.raises(InputSizeMismatch):
            network.propagate([1.0, 2.0])
        with pytest.raises(InputSizeMismatch):
            network.propagate([1.0, 2.0, 3.0, 4.0])

    def test_from_weights_order(self):
        # Bias first, then weights, neuron by neuron
        network = Network.from_weights([2, 2], [0.5, -0.3, 0.8, 0.1, 0.2, 0.3])

        first, second = network.layers[0].neurons
        assert first.bias == 0.5
        assert first.weights.tolist() == [-0.3, 0.8]
        assert second.bias == 0.1
        assert second.weights.tolist() == [0.2, 0.3]

    def test_from_weights_too_short(self):
        with pytest.raises(ChromosomeLengthMismatch):
            Network.from_weights([3, 2, 1], [0.0] * 10)

    def test_from_weights_ignores_trailing_genes(self):
        genes = list(np.linspace(-1.0, 1.0, 11))
        exact = Network.from_weights([3, 2, 1], genes)
        padded = Network.from_weights([3, 2, 1], genes + [99.0, 42.0])
        assert list(exact.weights()) == list(padded.weights())

    def test_round_trip(self):
        topology = [4, 6, 3]
        original = Network.random(RandomSource(seed=11), topology)
        rebuilt = Network.from_weights(topology, original.weights())

        assert list(rebuilt.weights()) == list(original.weights())

        rng = RandomSource(seed=12)
        for _ in range(20):
            inputs = rng.floats_in(-5.0, 5.0, 4)
            np.testing.assert_array_equal(rebuilt.propagate(inputs), original.propagate(inputs))


class TestBrainAgent:
    """Tests for the Individual adapter around networks."""

    def test_is_individual(self):
        agent = BrainAgent.random(RandomSource(seed=0), [2, 3, 1])
        assert isinstance(agent, Individual)

    def test_chromosome_encodes_brain(self):
        agent = BrainAgent.random(RandomSource(seed=0), [2, 3, 1])
        chromosome = agent.chromosome()

        assert isinstance(chromosome, Chromosome)
        assert len(chromosome) == Network.weight_count([2, 3, 1])
        assert chromosome.to_list() == list(agent.brain.weights())

    def test_fitness_defaults_to_zero(self):
        agent = BrainAgent.random(RandomSource(seed=0), [2, 1])
        assert agent.fitness() == 0.0
        agent.fitness_score = 2.5
        assert agent.fitness() == 2.5

    def test_builder_round_trip(self):
        rng = RandomSource(seed=0)
        agent = BrainAgent.random(rng, [2, 3, 1])
        build = agent_builder([2, 3, 1])

        rebuilt = build(agent.chromosome(), rng)

        assert isinstance(rebuilt, BrainAgent)
        assert rebuilt.chromosome() == agent.chromosome()
        assert rebuilt.topology == [2, 3, 1]
        assert rebuilt.fitness() == 0.0

    def test_builder_rejects_short_chromosome(self):
        build = agent_builder([2, 3, 1])
        with pytest.raises(ChromosomeLengthMismatch):
            build(Chromosome([0.0, 1.0]), RandomSource(seed=0))

    def test_builder_validates_topology(self):
        with pytest.raises(InvalidTopology):
            agent_builder([2])

    def test_act(self):
        agent = BrainAgent.random(RandomSource(seed=0), [3, 4, 2])
        outputs = agent.act([0.2, -0.4, 0.9])
        np.testing.assert_array_equal(outputs, agent.brain.propagate([0.2, -0.4, 0.9]))

    def test_random_population(self):
        population = random_population(RandomSource(seed=0), [2, 2], size=5)
        assert len(population) == 5
        # Each brain is drawn independently
        assert population[0].chromosome() != population[1].chromosome()


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
