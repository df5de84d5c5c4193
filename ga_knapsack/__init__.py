"""
Knapsack Genetic Algorithm

This package provides a generational genetic algorithm for the 0/1
knapsack problem: pick the subset of a fixed item catalog with the highest
total value whose total weight stays within capacity.

Key Features:
- Hard capacity constraint (overweight subsets score 0)
- Explicit random generator passed to every stochastic operator
- Copy-on-write operators (parents are never modified)
- Repair step: random drop when overweight, greedy fill when under capacity

Modules:
- data_models: Core data structures (Item, ItemCatalog, Individual)
- config: GA hyperparameters and validation
- catalog: Random catalog generation
- fitness: Fitness evaluation
- population: Initialization, selection, parent sampling
- crossover: Three-point crossover
- mutation: Swap mutation
- repair: Drop/fill repair
- evolution: Generational driver
- io_utils: CSV/YAML I/O
- visualization: Fitness history plots
- cli: Command-line interface for solve and trials modes
"""

__version__ = "0.1.0"
__author__ = "Knapsack GA Team"

from .config import ConfigValidationError, GAConfig
from .data_models import Individual, Item, ItemCatalog
from .evolution import Checkpoint, EvolutionResult, run_evolution

__all__ = [
    "ConfigValidationError",
    "GAConfig",
    "Individual",
    "Item",
    "ItemCatalog",
    "Checkpoint",
    "EvolutionResult",
    "run_evolution",
]
