#!/usr/bin/env python3
"""
Test runner for the knapsack GA
"""

import unittest
import sys
from pathlib import Path

# Add current directory to path for imports
sys.path.insert(0, str(Path(__file__).parent))


def run_all_tests():
    """Run all test modules"""
    loader = unittest.TestLoader()
    suite = loader.discover(
        start_dir=str(Path(__file__).parent / 'tests'),
        pattern='test_*.py',
        top_level_dir=str(Path(__file__).parent)
    )

    runner = unittest.TextTestRunner(verbosity=2)
    result = runner.run(suite)

    return result.wasSuccessful()


def run_integration_test():
    """Run a short default-sized solve"""
    print("\n" + "=" * 50)
    print("INTEGRATION TEST")
    print("=" * 50)

    try:
        import numpy as np
        from ga_knapsack.catalog import generate_catalog
        from ga_knapsack.config import GAConfig
        from ga_knapsack.evolution import run_evolution
        from ga_knapsack.fitness import total_weight

        rng = np.random.default_rng(42)
        config = GAConfig(max_generations=100)

        print("Generating catalog...")
        catalog = generate_catalog(config.num_items, rng)

        print("Running evolution...")
        result = run_evolution(catalog, config, rng, verbose=True)

        weight = total_weight(result.best.genes, catalog)
        log = result.fitness_log

        print(f"Best fitness: {result.best.fitness}")
        print(f"Best weight: {weight}/{config.capacity}")

        # Basic validation
        success = (
            result.best.fitness > 0 and
            weight <= config.capacity and
            all(a <= b for a, b in zip(log, log[1:]))
        )

        if success:
            print("Integration test PASSED")
        else:
            print("Integration test FAILED")

        return success

    except Exception as e:
        print(f"Integration test FAILED: {e}")
        import traceback
        traceback.print_exc()
        return False


if __name__ == "__main__":
    print("Running Knapsack GA Tests")
    print("=" * 60)

    # Run unit tests
    print("Running unit tests...")
    unit_success = run_all_tests()

    # Run integration test
    integration_success = run_integration_test()

    # Summary
    print("\n" + "=" * 60)
    print("TEST SUMMARY")
    print("=" * 60)
    print(f"Unit tests: {'PASSED' if unit_success else 'FAILED'}")
    print(f"Integration test: {'PASSED' if integration_success else 'FAILED'}")

    overall_success = unit_success and integration_success
    print(f"Overall: {'PASSED' if overall_success else 'FAILED'}")

    sys.exit(0 if overall_success else 1)
