"""
Data models for the knapsack GA.

Core data structures representing catalog items, the item catalog and
individuals (candidate item subsets).
"""

from dataclasses import dataclass, field
from typing import Any, Iterable, List

import numpy as np


@dataclass(frozen=True)
class Item:
    """
    A single knapsack item.

    Attributes:
        value: Non-negative value gained when the item is packed
        weight: Positive weight the item adds to the knapsack
    """
    value: int
    weight: int

    def __post_init__(self):
        """Validate item values."""
        if self.value < 0:
            raise ValueError(f"Item value must be non-negative, got {self.value}")
        if self.weight < 1:
            raise ValueError(f"Item weight must be at least 1, got {self.weight}")


@dataclass(frozen=True)
class ItemCatalog:
    """
    Immutable, ordered collection of items.

    The catalog is read-only for the GA. Values and weights are also exposed
    as read-only numpy arrays so fitness and repair can work vectorized.

    Attributes:
        items: Tuple of Item objects, index i corresponds to gene i
    """
    items: tuple
    values: np.ndarray = field(init=False, repr=False, compare=False)
    weights: np.ndarray = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        """Freeze items and build value/weight arrays."""
        items = tuple(self.items)
        for item in items:
            if not isinstance(item, Item):
                raise TypeError(f"Catalog entries must be Item objects, got {type(item).__name__}")

        values = np.array([item.value for item in items], dtype=np.int64)
        weights = np.array([item.weight for item in items], dtype=np.int64)
        values.flags.writeable = False
        weights.flags.writeable = False

        object.__setattr__(self, 'items', items)
        object.__setattr__(self, 'values', values)
        object.__setattr__(self, 'weights', weights)

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[int, int]]) -> "ItemCatalog":
        """
        Build a catalog from (value, weight) pairs.

        Args:
            pairs: Iterable of (value, weight) tuples

        Returns:
            ItemCatalog with one Item per pair
        """
        return cls(items=tuple(Item(int(value), int(weight)) for value, weight in pairs))

    def total_weight(self) -> int:
        """Weight of packing every item."""
        return int(self.weights.sum())

    def __len__(self) -> int:
        """Number of items in catalog."""
        return len(self.items)

    def __getitem__(self, index: int) -> Item:
        return self.items[index]

    def __iter__(self):
        return iter(self.items)


@dataclass(eq=False)
class Individual:
    """
    Represents a candidate solution (individual in GA population).

    Attributes:
        genes: Boolean array, genes[i] is True when item i is packed
        fitness: Cached fitness, only valid after evaluation
        metadata: Additional information (crossover cut points, mutation ops,
            repair notes, etc.)
    """
    genes: np.ndarray
    fitness: int = 0
    metadata: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        """Ensure genes is a one-dimensional boolean array."""
        genes = np.asarray(self.genes, dtype=bool)
        if genes.ndim != 1:
            raise ValueError(f"Genes must be one-dimensional, got shape {genes.shape}")
        self.genes = genes

    @classmethod
    def empty(cls, num_items: int) -> "Individual":
        """Create an individual with no items packed."""
        return cls(genes=np.zeros(num_items, dtype=bool))

    def copy(self) -> "Individual":
        """
        Create a deep copy of this individual.

        Returns:
            New Individual with copied genes and metadata
        """
        return Individual(
            genes=self.genes.copy(),
            fitness=self.fitness,
            metadata=self.metadata.copy()
        )

    @property
    def num_items(self) -> int:
        """Length of the gene vector."""
        return len(self.genes)

    def included_indices(self) -> List[int]:
        """
        Get indices of packed items.

        Returns:
            Sorted list of gene indices set to True
        """
        return [int(i) for i in np.flatnonzero(self.genes)]

    def item_count(self) -> int:
        """Number of packed items."""
        return int(self.genes.sum())

    def same_genes(self, other: "Individual") -> bool:
        """Check whether two individuals encode the same subset."""
        return bool(np.array_equal(self.genes, other.genes))
