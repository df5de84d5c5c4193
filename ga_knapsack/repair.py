"""
Repair and local improvement for knapsack children.

Overweight children lose items by coin flip in ascending index order until
they fit; children with slack are greedily filled in ascending index order.
The fill is first-fit by index, never by value density.
"""

from typing import List, Tuple

import numpy as np

from .data_models import Individual, ItemCatalog
from .fitness import total_weight


def drop_overweight(
    individual: Individual,
    catalog: ItemCatalog,
    capacity: int,
    rng: np.random.Generator,
    drop_probability: float = 0.5
) -> Tuple[Individual, List[str]]:
    """
    Randomly drop packed items until the individual fits.

    Algorithm:
    1. Walk gene indices in ascending order
    2. For each packed item, drop it with probability drop_probability
    3. Stop as soon as the running weight is within capacity

    A single pass is made. If the coin flips never bring the weight down far
    enough the individual stays overweight and scores 0.

    Args:
        individual: Individual to repair (not modified)
        catalog: Item catalog
        capacity: Knapsack capacity
        rng: Random number generator
        drop_probability: Chance of dropping each packed item visited

    Returns:
        Tuple of (repaired_individual, repair_notes)
    """
    notes = []
    weight = total_weight(individual.genes, catalog)

    if weight <= capacity:
        notes.append("drop_overweight: already within capacity")
        return individual.copy(), notes

    notes.append(f"drop_overweight: weight {weight} exceeds capacity {capacity}")

    repaired = individual.copy()
    dropped = []

    for i in range(repaired.num_items):
        # One coin per packed item visited
        if repaired.genes[i] and rng.random() < drop_probability:
            repaired.genes[i] = False
            weight -= int(catalog.weights[i])
            dropped.append(i)
            if weight <= capacity:
                break

    notes.append(f"  Dropped {len(dropped)} items: {dropped}")
    if weight > capacity:
        notes.append(f"  WARNING: still overweight after pass ({weight} > {capacity})")
    else:
        notes.append(f"  Weight now {weight}")

    return repaired, notes


def greedy_fill(
    individual: Individual,
    catalog: ItemCatalog,
    capacity: int
) -> Tuple[Individual, List[str]]:
    """
    Pack every remaining item that still fits, in ascending index order.

    Scans all genes; an item skipped for being too heavy does not stop the
    scan, so lighter items further on can still be packed.

    Args:
        individual: Feasible individual to improve (not modified)
        catalog: Item catalog
        capacity: Knapsack capacity

    Returns:
        Tuple of (filled_individual, repair_notes)
    """
    notes = []
    weight = total_weight(individual.genes, catalog)

    if weight > capacity:
        raise ValueError(f"greedy_fill requires a feasible individual, weight {weight} > {capacity}")

    filled = individual.copy()
    added = []

    for i in range(filled.num_items):
        item_weight = int(catalog.weights[i])
        if not filled.genes[i] and weight + item_weight <= capacity:
            filled.genes[i] = True
            weight += item_weight
            added.append(i)

    notes.append(f"greedy_fill: added {len(added)} items, weight now {weight}/{capacity}")

    return filled, notes


def repair(
    individual: Individual,
    catalog: ItemCatalog,
    capacity: int,
    rng: np.random.Generator,
    drop_probability: float = 0.5
) -> Individual:
    """
    Complete repair pipeline for a child.

    Branches on the weight recomputed from genes (never on cached fitness):
    overweight children go through drop_overweight, all others through
    greedy_fill. Notes are attached to metadata['repair_notes'].

    Args:
        individual: Potentially overweight child from crossover/mutation
        catalog: Item catalog
        capacity: Knapsack capacity
        rng: Random number generator
        drop_probability: Chance of dropping each packed item visited

    Returns:
        Repaired Individual (fitness not yet re-evaluated)
    """
    weight = total_weight(individual.genes, catalog)

    if weight > capacity:
        repaired, notes = drop_overweight(individual, catalog, capacity, rng, drop_probability)
        branch = 'drop'
    else:
        repaired, notes = greedy_fill(individual, catalog, capacity)
        branch = 'fill'

    repaired.metadata['repair_notes'] = '\n'.join(notes)
    repaired.metadata['repair_branch'] = branch
    repaired.metadata['repair_status'] = 'completed'
    repaired.metadata['provisional'] = False

    return repaired
