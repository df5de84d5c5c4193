"""
Fitness evaluation for knapsack individuals.

Capacity is a hard constraint: an overweight subset is worth 0, not a
penalized value.
"""

from typing import Dict, List

import numpy as np

from .data_models import Individual, ItemCatalog


def _check_length(genes: np.ndarray, catalog: ItemCatalog) -> None:
    if len(genes) != len(catalog):
        raise ValueError(
            f"Gene length ({len(genes)}) does not match catalog size ({len(catalog)})"
        )


def total_weight(genes: np.ndarray, catalog: ItemCatalog) -> int:
    """Sum of weights over packed items."""
    _check_length(genes, catalog)
    return int(catalog.weights[genes].sum())


def total_value(genes: np.ndarray, catalog: ItemCatalog) -> int:
    """Sum of values over packed items."""
    _check_length(genes, catalog)
    return int(catalog.values[genes].sum())


def is_feasible(individual: Individual, catalog: ItemCatalog, capacity: int) -> bool:
    """Check whether an individual fits within capacity."""
    return total_weight(individual.genes, catalog) <= capacity


def evaluate(individual: Individual, catalog: ItemCatalog, capacity: int) -> int:
    """
    Compute and cache fitness of an individual.

    Args:
        individual: Individual to evaluate (fitness field is overwritten)
        catalog: Item catalog
        capacity: Knapsack capacity

    Returns:
        Total packed value, or 0 if total weight exceeds capacity
    """
    weight = total_weight(individual.genes, catalog)
    if weight > capacity:
        fitness = 0
    else:
        fitness = total_value(individual.genes, catalog)

    individual.fitness = fitness
    return fitness


def evaluate_population(
    population: List[Individual],
    catalog: ItemCatalog,
    capacity: int
) -> np.ndarray:
    """
    Evaluate every individual in a population.

    Returns:
        Array of fitness values in population order
    """
    return np.array(
        [evaluate(individual, catalog, capacity) for individual in population],
        dtype=np.int64
    )


def fitness_statistics(
    population: List[Individual],
    catalog: ItemCatalog,
    capacity: int
) -> Dict:
    """
    Summarize cached fitness across a population.

    Assumes the population was evaluated; weights are recomputed from genes
    for the feasibility count.

    Returns:
        Dictionary with best/mean/worst fitness and feasible count
    """
    if not population:
        raise ValueError("Cannot compute statistics for an empty population")

    fitnesses = np.array([ind.fitness for ind in population], dtype=np.int64)
    feasible = sum(1 for ind in population if is_feasible(ind, catalog, capacity))

    return {
        'best_fitness': int(fitnesses.max()),
        'mean_fitness': float(fitnesses.mean()),
        'worst_fitness': int(fitnesses.min()),
        'feasible_count': feasible,
        'population_size': len(population),
    }
