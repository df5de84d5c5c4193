"""
Mutation operators for the knapsack GA.

A single swap of two gene positions, applied at most once per call and only
with probability mutation_rate.
"""

from typing import Dict, List, Tuple

import numpy as np

from .data_models import Individual


def swap_mutation(
    individual: Individual,
    rng: np.random.Generator
) -> Tuple[Individual, List[str]]:
    """
    Swap the values of two randomly chosen genes.

    The two indices are drawn independently and may coincide, in which case
    the swap is a no-op. Swapping two equal values is also a no-op.

    Args:
        individual: Individual to mutate (not modified)
        rng: Random number generator

    Returns:
        Tuple of (mutated_individual, operation_log)
    """
    idx1, idx2 = (int(i) for i in rng.integers(0, individual.num_items, size=2))

    mutated = individual.copy()
    mutated.genes[idx1], mutated.genes[idx2] = individual.genes[idx2], individual.genes[idx1]

    op_log = [f"swap_mutation: genes {idx1} <-> {idx2}"]

    return mutated, op_log


def mutate(
    individual: Individual,
    mutation_rate: float,
    rng: np.random.Generator
) -> Tuple[Individual, List[str]]:
    """
    Apply swap mutation with probability mutation_rate.

    This is one conditional event per call, not a per-gene rate.

    Args:
        individual: Individual to mutate (not modified)
        mutation_rate: Probability of performing the swap
        rng: Random number generator

    Returns:
        Tuple of (mutated_individual, operation_log)
    """
    if rng.random() >= mutation_rate:
        return individual.copy(), ["no_mutation: skipped (probability)"]

    mutated, op_log = swap_mutation(individual, rng)
    mutated.metadata['mutation_ops'] = op_log

    return mutated, op_log


def mutation_statistics(original: Individual, mutated: Individual) -> Dict:
    """
    Calculate statistics about mutation operations.

    Args:
        original: Original individual before mutation
        mutated: Individual after mutation

    Returns:
        Dictionary with mutation statistics
    """
    changed = np.flatnonzero(original.genes != mutated.genes)

    return {
        'num_items': original.num_items,
        'positions_changed': len(changed),
        'changed_indices': [int(i) for i in changed],
        'item_count_delta': mutated.item_count() - original.item_count(),
    }
