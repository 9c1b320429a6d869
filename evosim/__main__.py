"""
Entry point for running an evosim demo.

Evolves small ReLU networks to reproduce the XOR truth table.

Usage:
    python -m evosim [options]

Options:
    --population N      Population size (default: 50)
    --generations N     Number of generations (default: 100)
    --hidden N          Hidden layer width (default: 4)
    --mutation-chance P Per-gene mutation probability (default: 0.05)
    --mutation-coeff C  Mutation magnitude (default: 0.5)
    --seed N            Random seed for reproducibility (default: 0)
"""

import argparse
import numpy as np

from .core.network import Network
from .evolution.engine import EvolutionConfig
from .simulation import EvolutionEngine

XOR_INPUTS = np.array([[0.0, 0.0], [0.0, 1.0], [1.0, 0.0], [1.0, 1.0]])
XOR_TARGETS = np.array([0.0, 1.0, 1.0, 0.0])


def xor_fitness(network: Network) -> float:
    """1 / (1 + MSE) over the XOR truth table; always in (0, 1]."""
    outputs = np.array([network.propagate(x)[0] for x in XOR_INPUTS])
    mse = float(np.mean((outputs - XOR_TARGETS) ** 2))
    return 1.0 / (1.0 + mse)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description='Evolve neural networks with a genetic algorithm (XOR demo)'
    )
    parser.add_argument(
        '--population', type=int, default=50,
        help='Population size (default: 50)'
    )
    parser.add_argument(
        '--generations', type=int, default=100,
        help='Number of generations (default: 100)'
    )
    parser.add_argument(
        '--hidden', type=int, default=4,
        help='Hidden layer width (default: 4)'
    )
    parser.add_argument(
        '--mutation-chance', type=float, default=0.05,
        help='Per-gene mutation probability (default: 0.05)'
    )
    parser.add_argument(
        '--mutation-coeff', type=float, default=0.5,
        help='Mutation magnitude (default: 0.5)'
    )
    parser.add_argument(
        '--patience', type=int, default=25,
        help='Generations without improvement before stopping (default: 25)'
    )
    parser.add_argument(
        '--seed', type=int, default=0,
        help='Random seed for reproducibility (default: 0)'
    )
    return parser.parse_args(argv)


def print_banner():
    print("=" * 60)
    print("   EVOSIM - Neuroevolution demo (XOR)")
    print("=" * 60)


def progress_callback(gen: int, total: int, stats: dict):
    """Print progress during evolution."""
    pct = 100 * gen / total
    print(
        f"\r   Gen {gen:3d}/{total} ({pct:5.1f}%) | "
        f"Best: {stats['best_fitness']:.4f} | "
        f"Mean: {stats['mean_fitness']:.4f}",
        end='', flush=True
    )


def main(argv=None):
    args = parse_args(argv)

    config = EvolutionConfig(
        population_size=args.population,
        topology=[2, args.hidden, 1],
        mutation_chance=args.mutation_chance,
        mutation_coeff=args.mutation_coeff,
        early_stop_patience=args.patience,
    )

    print_banner()
    print("\nConfiguration:")
    for key, value in config.to_dict().items():
        print(f"   {key:28s} {value}")
    print(f"   {'seed':28s} {args.seed}\n")

    engine = EvolutionEngine(config, xor_fitness)
    result = engine.evolve(
        args.generations,
        seed=args.seed,
        progress_callback=progress_callback,
    )

    print("\n")
    print(result.summary())

    if result.best_agent is not None:
        print("\nBest agent on XOR:")
        for inputs, target in zip(XOR_INPUTS, XOR_TARGETS):
            output = result.best_agent.act(inputs)[0]
            print(f"   {inputs.tolist()} -> {output:.3f} (target {target:.0f})")


if __name__ == '__main__':
    main()
