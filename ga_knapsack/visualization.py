"""
Visualization for knapsack GA runs.

Plots checkpoint fitness history and the packing of the best solution.
"""

from pathlib import Path
from typing import Optional, Tuple, Union

import matplotlib.pyplot as plt

from .data_models import Individual, ItemCatalog
from .evolution import EvolutionResult


def plot_fitness_history(
    result: EvolutionResult,
    ax: Optional[plt.Axes] = None,
    capacity: Optional[int] = None
) -> plt.Axes:
    """
    Plot best and mean fitness per checkpoint.

    Args:
        result: Finished evolution run
        ax: Axes to draw on (a new figure is created if None)
        capacity: Optional capacity shown in the title

    Returns:
        The axes drawn on
    """
    if ax is None:
        _, ax = plt.subplots(figsize=(10, 5))

    generations = [c.generation for c in result.checkpoints]
    best = [c.best_fitness for c in result.checkpoints]
    mean = [c.mean_fitness for c in result.checkpoints]

    ax.plot(generations, best, color='tab:blue', marker='o', markersize=3, label='Best fitness')
    ax.plot(generations, mean, color='tab:orange', linestyle='--', label='Mean fitness')

    ax.set_xlabel('Generation')
    ax.set_ylabel('Fitness (total value)')
    title = 'Knapsack GA fitness history'
    if capacity is not None:
        title += f' (capacity {capacity})'
    ax.set_title(title)
    ax.grid(True, alpha=0.3)
    ax.legend(loc='lower right')

    return ax


def plot_solution(
    individual: Individual,
    catalog: ItemCatalog,
    ax: Optional[plt.Axes] = None
) -> plt.Axes:
    """
    Scatter items by weight and value, highlighting packed ones.

    Args:
        individual: Solution to show
        catalog: Item catalog
        ax: Axes to draw on (a new figure is created if None)

    Returns:
        The axes drawn on
    """
    if ax is None:
        _, ax = plt.subplots(figsize=(6, 5))

    packed = individual.genes
    ax.scatter(catalog.weights[~packed], catalog.values[~packed],
               c='lightgray', edgecolors='gray', label='Left out')
    ax.scatter(catalog.weights[packed], catalog.values[packed],
               c='tab:green', edgecolors='black', label='Packed')

    ax.set_xlabel('Weight')
    ax.set_ylabel('Value')
    ax.set_title(f'Best solution: {int(packed.sum())} of {len(catalog)} items')
    ax.legend(loc='upper left')

    return ax


def save_run_plots(
    result: EvolutionResult,
    catalog: ItemCatalog,
    save_path: Union[str, Path],
    capacity: Optional[int] = None,
    figsize: Tuple[int, int] = (14, 5)
) -> Path:
    """
    Save a two-panel figure: fitness history and best solution.

    Returns:
        Path to saved image
    """
    save_path = Path(save_path)
    save_path.parent.mkdir(parents=True, exist_ok=True)

    fig, (ax_history, ax_solution) = plt.subplots(
        1, 2, figsize=figsize, gridspec_kw={'width_ratios': [2, 1]}
    )
    plot_fitness_history(result, ax_history, capacity=capacity)
    plot_solution(result.best, catalog, ax_solution)

    fig.tight_layout()
    fig.savefig(save_path, dpi=150, bbox_inches='tight')
    plt.close(fig)

    return save_path
