"""
Population handling for the knapsack GA.

Initialization, truncation selection, parent sampling and best-individual
lookup.
"""

from typing import List, Tuple

import numpy as np

from .data_models import Individual


def initialize_population(population_size: int, num_items: int) -> List[Individual]:
    """
    Create the deterministic starter population.

    Slot i packs exactly one item, index (i mod num_items), so the first
    num_items slots each start from a different single-item solution and
    larger populations repeat the pattern. Fitness is left unevaluated.

    Args:
        population_size: Number of individuals to create
        num_items: Gene length (catalog size)

    Returns:
        List of population_size Individuals
    """
    if population_size < 1:
        raise ValueError(f"population_size must be positive, got {population_size}")
    if num_items < 1:
        raise ValueError(f"num_items must be positive, got {num_items}")

    population = []
    for i in range(population_size):
        individual = Individual.empty(num_items)
        individual.genes[i % num_items] = True
        individual.metadata['origin'] = 'initial'
        population.append(individual)

    return population


def rank_population(population: List[Individual]) -> np.ndarray:
    """
    Rank individuals by cached fitness, descending.

    Equal fitness keeps original population order (stable sort).

    Returns:
        Array of population indices, best first
    """
    fitnesses = np.array([ind.fitness for ind in population], dtype=np.int64)
    return np.argsort(-fitnesses, kind='stable')


def select_survivors(population: List[Individual]) -> List[Individual]:
    """
    Truncation selection: keep the top half by fitness.

    Args:
        population: Evaluated population with an even number of individuals

    Returns:
        len(population) // 2 individuals, best first

    Raises:
        ValueError: If the population size is odd or yields no survivors
    """
    size = len(population)
    if size % 2 != 0:
        raise ValueError(f"Population size must be even for selection, got {size}")
    if size < 2:
        raise ValueError(f"Population of size {size} produces no survivors")

    order = rank_population(population)
    return [population[i] for i in order[:size // 2]]


def select_two_parents(
    survivors: List[Individual],
    rng: np.random.Generator
) -> Tuple[Individual, Individual]:
    """
    Sample two parents uniformly, with replacement.

    The same survivor may be drawn twice.

    Args:
        survivors: Selected individuals
        rng: Random number generator

    Returns:
        Tuple of (parent_a, parent_b)
    """
    if not survivors:
        raise ValueError("Cannot select parents from an empty survivor list")

    idx_a = rng.integers(0, len(survivors))
    idx_b = rng.integers(0, len(survivors))

    return survivors[idx_a], survivors[idx_b]


def best_individual(population: List[Individual]) -> Individual:
    """
    Find the highest-fitness individual.

    Ties go to the first occurrence in population order.
    """
    if not population:
        raise ValueError("Cannot find best individual of an empty population")

    fitnesses = np.array([ind.fitness for ind in population], dtype=np.int64)
    return population[int(np.argmax(fitnesses))]
