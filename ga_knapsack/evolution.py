"""
Evolution driver for the knapsack GA.

Runs the generational loop: select survivors, breed children until the
population is full, re-evaluate, and record a checkpoint of the best
individual every log_interval generations.
"""

from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

import numpy as np

from .config import ConfigValidationError, GAConfig
from .crossover import three_point_crossover
from .data_models import Individual, ItemCatalog
from .fitness import evaluate, evaluate_population, fitness_statistics
from .mutation import mutate
from .population import (
    best_individual,
    initialize_population,
    select_survivors,
    select_two_parents
)
from .repair import repair


@dataclass
class Checkpoint:
    """
    Best-of-population snapshot taken at a log interval.

    Attributes:
        generation: 0-based generation index
        best_fitness: Fitness of the best individual
        best_genes: Copy of the best individual's genes
        mean_fitness: Mean fitness across the population
        feasible_count: Individuals within capacity
    """
    generation: int
    best_fitness: int
    best_genes: np.ndarray = field(repr=False)
    mean_fitness: float = 0.0
    feasible_count: int = 0


@dataclass
class BreedingStats:
    """Counts for one breeding phase; attempts include failed coin flips."""
    attempts: int = 0
    children: int = 0

    @property
    def acceptance_rate(self) -> float:
        return self.children / self.attempts if self.attempts else 0.0


@dataclass
class EvolutionResult:
    """
    Outcome of a full run.

    Attributes:
        checkpoints: Snapshots in generation order
        best: Best individual of the final population
        population: Final population
        generations: Number of generations run
        breeding_attempts: Total breeding attempts across all generations
        children_bred: Total children accepted across all generations
    """
    checkpoints: List[Checkpoint]
    best: Individual
    population: List[Individual]
    generations: int
    breeding_attempts: int = 0
    children_bred: int = 0

    @property
    def fitness_log(self) -> List[int]:
        """Recorded best fitness values, one per checkpoint."""
        return [checkpoint.best_fitness for checkpoint in self.checkpoints]


def breed_child(
    survivors: List[Individual],
    catalog: ItemCatalog,
    config: GAConfig,
    rng: np.random.Generator
) -> Individual:
    """
    Produce one evaluated child: crossover, mutation, repair.

    Fitness is evaluated after repair, so the child never carries a stale
    value.
    """
    parent_a, parent_b = select_two_parents(survivors, rng)

    child, _ = three_point_crossover(parent_a, parent_b, rng)
    child, _ = mutate(child, config.mutation_rate, rng)
    child = repair(child, catalog, config.capacity, rng, config.drop_probability)
    evaluate(child, catalog, config.capacity)

    return child


def breed_next_generation(
    survivors: List[Individual],
    catalog: ItemCatalog,
    config: GAConfig,
    rng: np.random.Generator
) -> Tuple[List[Individual], BreedingStats]:
    """
    Build the next generation from survivors.

    Each attempt succeeds with probability crossover_rate; failed attempts
    produce nothing. Attempts repeat until the generation is full, so about
    children / crossover_rate attempts are expected.

    Args:
        survivors: Selected individuals
        catalog: Item catalog
        config: GA configuration
        rng: Random number generator

    Returns:
        Tuple of (next_generation, breeding_stats)
    """
    if config.carry_survivors:
        next_generation = list(survivors)
    else:
        next_generation = []

    stats = BreedingStats()

    while len(next_generation) < config.population_size:
        stats.attempts += 1
        if rng.random() < config.crossover_rate:
            next_generation.append(breed_child(survivors, catalog, config, rng))
            stats.children += 1

    return next_generation, stats


def take_checkpoint(
    generation: int,
    population: List[Individual],
    catalog: ItemCatalog,
    capacity: int
) -> Checkpoint:
    """Snapshot the best individual and population statistics."""
    best = best_individual(population)
    stats = fitness_statistics(population, catalog, capacity)

    return Checkpoint(
        generation=generation,
        best_fitness=best.fitness,
        best_genes=best.genes.copy(),
        mean_fitness=stats['mean_fitness'],
        feasible_count=stats['feasible_count']
    )


def run_evolution(
    catalog: ItemCatalog,
    config: GAConfig,
    rng: Optional[np.random.Generator] = None,
    verbose: bool = False,
    on_checkpoint: Optional[Callable[[Checkpoint], None]] = None
) -> EvolutionResult:
    """
    Run the genetic algorithm for config.max_generations generations.

    Algorithm:
        1. Initialize the starter population and evaluate it
        2. For each generation:
           a. Select the top half as survivors
           b. Breed children until the population is full
           c. Replace the population and re-evaluate every individual
           d. On generation % log_interval == 0, record a checkpoint
        3. Return checkpoints and the final population

    Args:
        catalog: Item catalog (size must equal config.num_items)
        config: GA configuration
        rng: Random number generator (seeded from config.random_seed if None)
        verbose: Print a line per checkpoint
        on_checkpoint: Optional callback invoked with each checkpoint

    Returns:
        EvolutionResult

    Raises:
        ConfigValidationError: If the configuration is invalid or does not
            match the catalog
    """
    config.validate()
    if len(catalog) != config.num_items:
        raise ConfigValidationError(
            f"Catalog size ({len(catalog)}) does not match num_items ({config.num_items})"
        )

    if rng is None:
        rng = np.random.default_rng(config.random_seed)

    population = initialize_population(config.population_size, config.num_items)
    evaluate_population(population, catalog, config.capacity)

    checkpoints = []
    total_attempts = 0
    total_children = 0

    for generation in range(config.max_generations):
        survivors = select_survivors(population)

        population, stats = breed_next_generation(survivors, catalog, config, rng)
        total_attempts += stats.attempts
        total_children += stats.children

        evaluate_population(population, catalog, config.capacity)

        if generation % config.log_interval == 0:
            checkpoint = take_checkpoint(generation, population, catalog, config.capacity)
            checkpoints.append(checkpoint)

            if verbose:
                print(f"Iteration {generation}: Best fitness = {checkpoint.best_fitness}")
            if on_checkpoint is not None:
                on_checkpoint(checkpoint)

    if verbose:
        print(f"Fitness log: {[c.best_fitness for c in checkpoints]}")

    return EvolutionResult(
        checkpoints=checkpoints,
        best=best_individual(population),
        population=population,
        generations=config.max_generations,
        breeding_attempts=total_attempts,
        children_bred=total_children
    )
