"""
Crossover operators for the knapsack GA.

Implements the three-point crossover used by the evolution driver. The
child inherits two disjoint bands from parent A, [0, p0] and (p1, p2], and
everything else from parent B.
"""

from typing import Dict, Tuple

import numpy as np

from .data_models import Individual


def draw_cut_points(num_items: int, rng: np.random.Generator) -> Tuple[int, int, int]:
    """
    Draw three independent cut points in [0, num_items), sorted ascending.

    Cut points may coincide.
    """
    points = np.sort(rng.integers(0, num_items, size=3))
    return int(points[0]), int(points[1]), int(points[2])


def crossover_mask(num_items: int, cut_points: Tuple[int, int, int]) -> np.ndarray:
    """
    Build the inheritance mask for given cut points.

    Args:
        num_items: Gene length
        cut_points: Sorted (p0, p1, p2)

    Returns:
        Boolean array, True where the child takes the gene from parent A
    """
    p0, p1, p2 = cut_points
    if not p0 <= p1 <= p2:
        raise ValueError(f"Cut points must be sorted, got {cut_points}")

    index = np.arange(num_items)
    return (index <= p0) | ((index > p1) & (index <= p2))


def three_point_crossover(
    parent_a: Individual,
    parent_b: Individual,
    rng: np.random.Generator
) -> Tuple[Individual, Dict]:
    """
    Combine two parents using three-point crossover.

    Args:
        parent_a: First parent
        parent_b: Second parent
        rng: Random number generator

    Returns:
        Tuple of (child_individual, crossover_info)
        where crossover_info holds the cut points and per-parent gene counts

    Note:
        Child fitness is 0 until evaluated. The child may be overweight,
        which the repair step handles.
    """
    if parent_a.num_items != parent_b.num_items:
        raise ValueError(
            f"Parents have different gene lengths: {parent_a.num_items} vs {parent_b.num_items}"
        )

    num_items = parent_a.num_items
    cut_points = draw_cut_points(num_items, rng)
    mask = crossover_mask(num_items, cut_points)

    child_genes = np.where(mask, parent_a.genes, parent_b.genes)

    crossover_info = {
        'cut_points': cut_points,
        'genes_from_a': int(mask.sum()),
        'genes_from_b': int(num_items - mask.sum()),
    }

    child = Individual(
        genes=child_genes,
        metadata={
            'origin': 'crossover',
            'crossover_strategy': 'three_point',
            'cut_points': cut_points,
            'provisional': True  # Needs repair
        }
    )

    return child, crossover_info


def crossover_statistics(child: Individual, parent_a: Individual, parent_b: Individual) -> Dict:
    """
    Calculate statistics about crossover result.

    Args:
        child: Child individual
        parent_a: First parent
        parent_b: Second parent

    Returns:
        Dictionary with crossover statistics
    """
    matches_a = child.genes == parent_a.genes
    matches_b = child.genes == parent_b.genes

    return {
        'num_items': child.num_items,
        'child_items': child.item_count(),
        'matches_parent_a': int(matches_a.sum()),
        'matches_parent_b': int(matches_b.sum()),
        # Genes matching neither parent would mean a broken operator
        'foreign_genes': int((~matches_a & ~matches_b).sum()),
    }
