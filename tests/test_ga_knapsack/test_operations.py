"""
Tests for GA operations: fitness, population handling, crossover, and mutation.
"""

import unittest
import numpy as np

from ga_knapsack.data_models import Individual, Item, ItemCatalog
from ga_knapsack.catalog import generate_catalog
from ga_knapsack.fitness import (
    evaluate,
    evaluate_population,
    fitness_statistics,
    total_value,
    total_weight,
)
from ga_knapsack.population import (
    best_individual,
    initialize_population,
    select_survivors,
    select_two_parents,
)
from ga_knapsack.crossover import (
    crossover_mask,
    crossover_statistics,
    draw_cut_points,
    three_point_crossover,
)
from ga_knapsack.mutation import (
    mutate,
    mutation_statistics,
    swap_mutation,
)


def make_individual(bits, fitness=0):
    return Individual(genes=np.array(bits, dtype=bool), fitness=fitness)


class TestDataModels(unittest.TestCase):
    """Test item, catalog and individual models."""

    def test_item_validation(self):
        """Test that invalid items are rejected."""
        with self.assertRaises(ValueError):
            Item(value=-1, weight=3)
        with self.assertRaises(ValueError):
            Item(value=5, weight=0)

    def test_catalog_arrays_read_only(self):
        """Test catalog exposes read-only value/weight arrays."""
        catalog = ItemCatalog.from_pairs([(10, 5), (20, 10)])

        self.assertEqual(len(catalog), 2)
        self.assertEqual(list(catalog.values), [10, 20])
        self.assertEqual(list(catalog.weights), [5, 10])
        self.assertEqual(catalog.total_weight(), 15)

        with self.assertRaises(ValueError):
            catalog.weights[0] = 1

    def test_individual_copy_is_independent(self):
        """Test that copies do not share genes or metadata."""
        original = make_individual([True, False, True], fitness=7)
        original.metadata['tag'] = 'a'

        clone = original.copy()
        clone.genes[1] = True
        clone.metadata['tag'] = 'b'

        self.assertFalse(original.genes[1])
        self.assertEqual(original.metadata['tag'], 'a')
        self.assertEqual(clone.fitness, 7)
        self.assertEqual(original.included_indices(), [0, 2])


class TestFitness(unittest.TestCase):
    """Test fitness evaluation."""

    def setUp(self):
        """Set up four-item catalog."""
        self.catalog = ItemCatalog.from_pairs([(10, 5), (20, 10), (15, 8), (30, 20)])
        self.capacity = 25

    def test_feasible_fitness_is_total_value(self):
        """Test fitness equals total value within capacity."""
        individual = make_individual([True, True, True, False])

        fitness = evaluate(individual, self.catalog, self.capacity)

        self.assertEqual(fitness, 45)
        self.assertEqual(individual.fitness, 45)

    def test_exactly_at_capacity(self):
        """Test that weight equal to capacity is feasible."""
        individual = make_individual([True, False, False, True])
        self.assertEqual(evaluate(individual, self.catalog, self.capacity), 40)

    def test_overweight_scores_zero(self):
        """Test overweight individuals score exactly 0."""
        individual = make_individual([False, True, True, True], fitness=99)

        self.assertEqual(evaluate(individual, self.catalog, self.capacity), 0)
        self.assertEqual(individual.fitness, 0)

    def test_empty_knapsack(self):
        """Test empty knapsack is feasible with fitness 0."""
        individual = Individual.empty(4)
        self.assertEqual(evaluate(individual, self.catalog, self.capacity), 0)

    def test_zero_iff_overweight(self):
        """Test fitness is 0 exactly when weight exceeds capacity."""
        rng = np.random.default_rng(42)
        catalog = generate_catalog(30, rng)
        capacity = 150

        for _ in range(200):
            individual = Individual(genes=rng.random(30) < 0.4)
            weight = total_weight(individual.genes, catalog)
            value = total_value(individual.genes, catalog)
            fitness = evaluate(individual, catalog, capacity)

            if weight > capacity:
                self.assertEqual(fitness, 0)
            else:
                self.assertEqual(fitness, value)

    def test_length_mismatch(self):
        """Test gene/catalog length mismatch is rejected."""
        with self.assertRaises(ValueError):
            evaluate(make_individual([True, False]), self.catalog, self.capacity)

    def test_evaluate_population_and_statistics(self):
        """Test population evaluation and summary statistics."""
        population = [
            make_individual([True, True, True, False]),   # 45
            make_individual([False, True, True, True]),   # overweight
            make_individual([True, False, False, False]), # 10
            make_individual([False, False, False, False]) # 0
        ]

        fitnesses = evaluate_population(population, self.catalog, self.capacity)
        self.assertEqual(list(fitnesses), [45, 0, 10, 0])

        stats = fitness_statistics(population, self.catalog, self.capacity)
        self.assertEqual(stats['best_fitness'], 45)
        self.assertEqual(stats['worst_fitness'], 0)
        self.assertAlmostEqual(stats['mean_fitness'], 13.75)
        self.assertEqual(stats['feasible_count'], 3)


class TestPopulation(unittest.TestCase):
    """Test initialization and selection."""

    def test_initialization_pattern(self):
        """Test slot i packs only item i mod num_items."""
        population = initialize_population(population_size=7, num_items=5)

        self.assertEqual(len(population), 7)
        for i, individual in enumerate(population):
            self.assertEqual(individual.num_items, 5)
            self.assertEqual(individual.included_indices(), [i % 5])
            self.assertEqual(individual.fitness, 0)

        self.assertTrue(population[5].same_genes(population[0]))
        self.assertTrue(population[6].same_genes(population[1]))

    def test_initialization_individuals_not_shared(self):
        """Test repeated patterns are separate objects."""
        population = initialize_population(population_size=4, num_items=2)
        population[0].genes[1] = True
        self.assertEqual(population[2].included_indices(), [0])

    def test_select_top_half_stable(self):
        """Test survivors are top half, ties kept in population order."""
        fitnesses = [3, 0, 5, 0, 5, 1]
        population = [make_individual([i == j for j in range(6)], f) for i, f in enumerate(fitnesses)]

        survivors = select_survivors(population)

        self.assertEqual(len(survivors), 3)
        self.assertIs(survivors[0], population[2])
        self.assertIs(survivors[1], population[4])
        self.assertIs(survivors[2], population[0])

    def test_survivors_dominate_rest(self):
        """Test min survivor fitness >= max non-selected fitness."""
        rng = np.random.default_rng(42)
        population = [make_individual([False], int(f)) for f in rng.integers(0, 5, size=20)]

        survivors = select_survivors(population)
        survivor_ids = {id(ind) for ind in survivors}
        rest = [ind for ind in population if id(ind) not in survivor_ids]

        self.assertEqual(len(survivors), 10)
        self.assertGreaterEqual(min(s.fitness for s in survivors), max(r.fitness for r in rest))

    def test_select_rejects_odd_or_tiny(self):
        """Test odd sizes and sizes with no survivors are rejected."""
        with self.assertRaises(ValueError):
            select_survivors([make_individual([True]) for _ in range(3)])
        with self.assertRaises(ValueError):
            select_survivors([])

    def test_select_two_parents_with_replacement(self):
        """Test single-survivor list yields the same parent twice."""
        only = make_individual([True, False])
        rng = np.random.default_rng(42)

        parent_a, parent_b = select_two_parents([only], rng)

        self.assertIs(parent_a, only)
        self.assertIs(parent_b, only)

    def test_best_individual_first_on_ties(self):
        """Test best individual ties go to first occurrence."""
        population = [make_individual([False], f) for f in [2, 7, 1, 7]]
        self.assertIs(best_individual(population), population[1])


class TestCrossover(unittest.TestCase):
    """Test crossover operators."""

    def setUp(self):
        """Set up test parents."""
        self.rng = np.random.default_rng(42)
        self.parent_a = Individual(genes=np.ones(10, dtype=bool))
        self.parent_b = Individual(genes=np.zeros(10, dtype=bool))

    def test_crossover_mask_bands(self):
        """Test parent A bands are [0, p0] and (p1, p2]."""
        mask = crossover_mask(10, (2, 5, 7))
        expected = [True, True, True, False, False, False, True, True, False, False]
        self.assertEqual(list(mask), expected)

    def test_crossover_mask_degenerate_points(self):
        """Test coinciding cut points."""
        self.assertTrue(crossover_mask(10, (9, 9, 9)).all())
        self.assertEqual(list(np.flatnonzero(crossover_mask(10, (0, 0, 0)))), [0])
        self.assertEqual(list(np.flatnonzero(crossover_mask(10, (1, 1, 4)))), [0, 1, 2, 3, 4])

    def test_crossover_mask_requires_sorted(self):
        """Test unsorted cut points are rejected."""
        with self.assertRaises(ValueError):
            crossover_mask(10, (5, 2, 7))

    def test_draw_cut_points_sorted_in_range(self):
        """Test cut points are sorted and within [0, N)."""
        for _ in range(100):
            p0, p1, p2 = draw_cut_points(10, self.rng)
            self.assertTrue(0 <= p0 <= p1 <= p2 < 10)

    def test_child_follows_mask(self):
        """Test child genes come from parent A exactly where the mask says."""
        child, info = three_point_crossover(self.parent_a, self.parent_b, self.rng)

        expected = crossover_mask(10, info['cut_points'])
        self.assertTrue(np.array_equal(child.genes, expected))
        self.assertEqual(info['genes_from_a'] + info['genes_from_b'], 10)
        self.assertEqual(child.fitness, 0)
        self.assertTrue(child.metadata['provisional'])

    def test_child_genes_from_parents(self):
        """Test child length is N and every gene matches a parent."""
        for _ in range(50):
            parent_a = Individual(genes=self.rng.random(25) < 0.5)
            parent_b = Individual(genes=self.rng.random(25) < 0.5)
            genes_a = parent_a.genes.copy()

            child, _ = three_point_crossover(parent_a, parent_b, self.rng)
            stats = crossover_statistics(child, parent_a, parent_b)

            self.assertEqual(child.num_items, 25)
            self.assertEqual(stats['foreign_genes'], 0)
            self.assertTrue(np.array_equal(parent_a.genes, genes_a))

    def test_mismatched_parents(self):
        """Test parents of different lengths are rejected."""
        with self.assertRaises(ValueError):
            three_point_crossover(self.parent_a, Individual.empty(5), self.rng)


class TestMutation(unittest.TestCase):
    """Test mutation operators."""

    def setUp(self):
        """Set up test individual."""
        self.rng = np.random.default_rng(42)
        self.individual = make_individual([True, False, True, False, False, True, False, True])

    def test_no_mutation_at_zero_rate(self):
        """Test rate 0 never changes genes."""
        for _ in range(20):
            mutated, log = mutate(self.individual, 0.0, self.rng)
            self.assertTrue(mutated.same_genes(self.individual))
            self.assertIsNot(mutated, self.individual)
            self.assertIn("no_mutation", log[0])

    def test_mutation_is_identity_or_single_swap(self):
        """Test mutation changes 0 or 2 positions by swapping values."""
        for _ in range(100):
            mutated, log = mutate(self.individual, 1.0, self.rng)
            stats = mutation_statistics(self.individual, mutated)

            self.assertIn(stats['positions_changed'], (0, 2))
            self.assertEqual(stats['item_count_delta'], 0)
            self.assertIn("swap_mutation", log[0])

            if stats['positions_changed'] == 2:
                i, j = stats['changed_indices']
                self.assertEqual(mutated.genes[i], self.individual.genes[j])
                self.assertEqual(mutated.genes[j], self.individual.genes[i])

    def test_swap_does_not_modify_input(self):
        """Test swap mutation leaves the original untouched."""
        before = self.individual.genes.copy()
        for _ in range(20):
            swap_mutation(self.individual, self.rng)
        self.assertTrue(np.array_equal(self.individual.genes, before))

    def test_uniform_genes_swap_is_noop(self):
        """Test swapping in an all-False individual is observably a no-op."""
        empty = Individual.empty(6)
        mutated, _ = swap_mutation(empty, self.rng)
        self.assertEqual(mutation_statistics(empty, mutated)['positions_changed'], 0)


if __name__ == '__main__':
    unittest.main()
