"""
Random item catalog generation.
"""

from typing import Tuple

import numpy as np

from .data_models import Item, ItemCatalog

DEFAULT_VALUE_RANGE = (2, 30)
DEFAULT_WEIGHT_RANGE = (1, 24)


def generate_catalog(
    num_items: int,
    rng: np.random.Generator,
    value_range: Tuple[int, int] = DEFAULT_VALUE_RANGE,
    weight_range: Tuple[int, int] = DEFAULT_WEIGHT_RANGE
) -> ItemCatalog:
    """
    Draw a random catalog with uniformly distributed values and weights.

    Items are drawn one at a time, value then weight, so a given seed gives
    the same catalog regardless of num_items for the shared prefix.

    Args:
        num_items: Number of items
        rng: Random number generator
        value_range: Inclusive (min, max) item value
        weight_range: Inclusive (min, max) item weight

    Returns:
        ItemCatalog with num_items items
    """
    if num_items < 1:
        raise ValueError(f"num_items must be positive, got {num_items}")

    value_min, value_max = value_range
    weight_min, weight_max = weight_range

    if value_min < 0 or value_min > value_max:
        raise ValueError(f"Invalid value range: {value_range}")
    if weight_min < 1 or weight_min > weight_max:
        raise ValueError(f"Invalid weight range: {weight_range}")

    items = []
    for _ in range(num_items):
        value = int(rng.integers(value_min, value_max + 1))
        weight = int(rng.integers(weight_min, weight_max + 1))
        items.append(Item(value=value, weight=weight))

    return ItemCatalog(items=tuple(items))
