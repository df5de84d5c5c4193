"""
Orchestration module for the knapsack GA.

Implements the solve and trials run workflows: build the catalog, run the
evolution, report and export results.
"""

from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

import numpy as np

from .catalog import DEFAULT_VALUE_RANGE, DEFAULT_WEIGHT_RANGE, generate_catalog
from .config import ConfigValidationError, GAConfig
from .data_models import ItemCatalog
from .evolution import EvolutionResult, run_evolution
from .fitness import total_value, total_weight
from .io_utils import (
    load_catalog_csv,
    save_best_solution,
    save_catalog_csv,
    save_fitness_log,
    save_metadata
)


def resolve_seed(run_config: Dict, ga_config: GAConfig) -> int:
    """Pick the run seed: run config, then GA config, then a fresh draw."""
    seed = run_config.get('random_seed', ga_config.random_seed)
    if seed is None:
        seed = int(np.random.randint(0, 2**31))
    return seed


def build_catalog(run_config: Dict, ga_config: GAConfig, rng: np.random.Generator) -> ItemCatalog:
    """
    Load or generate the item catalog described by run_config['catalog'].

    Generated catalogs use their own 'seed' when given, otherwise they draw
    from the run generator.
    """
    catalog_config = run_config.get('catalog') or {'generate': {}}

    if 'path' in catalog_config:
        catalog_path = catalog_config['path']
        print(f"Loading catalog from: {catalog_path}")
        return load_catalog_csv(catalog_path)

    generate_config = catalog_config.get('generate') or {}
    catalog_seed = generate_config.get('seed')
    catalog_rng = np.random.default_rng(catalog_seed) if catalog_seed is not None else rng

    value_range = tuple(generate_config.get('value_range', DEFAULT_VALUE_RANGE))
    weight_range = tuple(generate_config.get('weight_range', DEFAULT_WEIGHT_RANGE))

    print(f"Generating catalog: {ga_config.num_items} items, "
          f"values {value_range}, weights {weight_range}")
    return generate_catalog(ga_config.num_items, catalog_rng, value_range, weight_range)


def check_catalog_size(catalog: ItemCatalog, ga_config: GAConfig) -> None:
    """
    Check the catalog matches 'ga.num_items'.

    Runs before the output directory is created so a mismatch leaves nothing
    behind on disk.

    Raises:
        ConfigValidationError: If the sizes differ
    """
    if len(catalog) != ga_config.num_items:
        raise ConfigValidationError(
            f"Catalog has {len(catalog)} items but 'ga.num_items' is {ga_config.num_items}"
        )


def prepare_output_root(run_config: Dict) -> Optional[Path]:
    """Create the output directory if one is configured."""
    output_config = run_config.get('output') or {}
    if 'root' not in output_config:
        return None

    output_root = Path(output_config['root'])
    overwrite = output_config.get('overwrite', False)

    if output_root.exists() and not overwrite:
        raise FileExistsError(
            f"Output directory already exists: {output_root}\n"
            f"Set 'output.overwrite: true' in config to overwrite"
        )

    output_root.mkdir(parents=True, exist_ok=overwrite)
    return output_root


def print_summary(result: EvolutionResult, catalog: ItemCatalog, ga_config: GAConfig) -> None:
    """Print the final result block."""
    best = result.best
    weight = total_weight(best.genes, catalog)
    value = total_value(best.genes, catalog)

    print()
    print("=" * 70)
    print("SUMMARY")
    print("=" * 70)
    print(f"Generations: {result.generations}")
    print(f"Breeding attempts: {result.breeding_attempts} "
          f"({result.children_bred} children bred)")
    print(f"Best fitness: {best.fitness}")
    print(f"Best solution: {best.item_count()} items, "
          f"value {value}, weight {weight}/{ga_config.capacity}")
    print(f"Packed items: {best.included_indices()}")
    print(f"Fitness log: {result.fitness_log}")


def export_results(
    result: EvolutionResult,
    catalog: ItemCatalog,
    ga_config: GAConfig,
    seed: int,
    output_root: Path,
    run_config: Dict
) -> List[Path]:
    """
    Write catalog, fitness log, best solution, metadata and plot.

    Returns:
        List of written files
    """
    output_config = run_config.get('output') or {}
    overwrite = output_config.get('overwrite', False)

    written = [
        save_catalog_csv(catalog, output_root / 'catalog.csv', overwrite=overwrite),
        save_fitness_log(result, output_root / 'fitness_log.csv', overwrite=overwrite),
        save_best_solution(result.best, catalog, output_root / 'best_solution.csv', overwrite=overwrite),
        save_metadata(
            {
                'seed': seed,
                'ga': ga_config.to_dict(),
                'best_fitness': result.best.fitness,
                'best_weight': total_weight(result.best.genes, catalog),
                'packed_items': result.best.included_indices(),
                'fitness_log': result.fitness_log,
                'breeding_attempts': result.breeding_attempts,
                'children_bred': result.children_bred,
                'finished_at': datetime.now().isoformat(),
            },
            output_root / 'run_metadata.yaml',
            overwrite=overwrite
        ),
    ]

    if output_config.get('plot', True):
        # Non-interactive backend, no display needed
        import matplotlib
        matplotlib.use('Agg')
        from .visualization import save_run_plots

        written.append(
            save_run_plots(result, catalog, output_root / 'fitness_plot.png', capacity=ga_config.capacity)
        )

    return written


def run_solve_mode(run_config: Dict) -> EvolutionResult:
    """
    Solve one knapsack instance.

    Algorithm:
        1. Build GA config from run_config['ga'] and validate it
        2. Setup RNG (run_config['random_seed'] or ga random_seed)
        3. Load or generate the catalog
        4. Run the evolution, printing checkpoints when verbose
        5. Print summary; export files if output.root is set

    Args:
        run_config: Run configuration dict from YAML

    Returns:
        EvolutionResult of the run
    """
    print("=" * 70)
    print("SOLVE MODE")
    print("=" * 70)

    ga_config = GAConfig.from_dict(run_config.get('ga'))
    ga_config.validate()

    seed = resolve_seed(run_config, ga_config)
    print(f"Random seed: {seed}")
    rng = np.random.default_rng(seed)

    catalog = build_catalog(run_config, ga_config, rng)
    check_catalog_size(catalog, ga_config)
    print(f"Catalog: {len(catalog)} items, total weight {catalog.total_weight()}, "
          f"capacity {ga_config.capacity}")

    output_root = prepare_output_root(run_config)
    if output_root is not None:
        print(f"Output directory: {output_root}")

    print(f"\nEvolving {ga_config.population_size} individuals "
          f"for {ga_config.max_generations} generations...\n")

    result = run_evolution(catalog, ga_config, rng, verbose=run_config.get('verbose', True))

    print_summary(result, catalog, ga_config)

    if output_root is not None:
        written = export_results(result, catalog, ga_config, seed, output_root, run_config)
        print(f"Files created: {len(written)}")
        for path in written:
            print(f"  {path}")

    return result


def run_trials_mode(run_config: Dict) -> List[Dict]:
    """
    Run the GA several times on one catalog with different seeds.

    The catalog is built once from the run seed; each trial draws its own
    seed from the run generator.

    Args:
        run_config: Run configuration dict from YAML

    Returns:
        List of per-trial result dicts
    """
    num_trials = run_config['trials']

    print("=" * 70)
    print(f"TRIALS MODE ({num_trials} trials)")
    print("=" * 70)

    ga_config = GAConfig.from_dict(run_config.get('ga'))
    ga_config.validate()

    seed = resolve_seed(run_config, ga_config)
    print(f"Random seed: {seed}")
    rng = np.random.default_rng(seed)

    catalog = build_catalog(run_config, ga_config, rng)
    check_catalog_size(catalog, ga_config)

    results = []
    for trial in range(num_trials):
        trial_seed = int(rng.integers(0, 2**31))
        print(f"\n--- Trial {trial + 1}/{num_trials} (seed {trial_seed}) ---")

        result = run_evolution(catalog, ga_config, np.random.default_rng(trial_seed))

        results.append({
            'trial': trial + 1,
            'seed': trial_seed,
            'best_fitness': result.best.fitness,
            'best_weight': total_weight(result.best.genes, catalog),
            'items': result.best.item_count(),
        })
        print(f"  Best fitness: {result.best.fitness}")

    print("\n" + "=" * 70)
    print("TRIAL SUMMARY")
    print("=" * 70)
    print("Trial | Seed       | Fitness | Weight | Items")
    print("------|------------|---------|--------|------")
    for r in results:
        print(f"{r['trial']:5} | {r['seed']:10} | {r['best_fitness']:7} | {r['best_weight']:6} | {r['items']:5}")

    fitnesses = np.array([r['best_fitness'] for r in results], dtype=float)
    print(f"\nBest Fitness Statistics:")
    print(f"  Average: {fitnesses.mean():.2f}")
    print(f"  Range: {int(fitnesses.min())} - {int(fitnesses.max())}")
    print(f"  Std Dev: {fitnesses.std():.2f}")

    output_root = prepare_output_root(run_config)
    if output_root is not None:
        overwrite = (run_config.get('output') or {}).get('overwrite', False)
        save_catalog_csv(catalog, output_root / 'catalog.csv', overwrite=overwrite)
        save_metadata(
            {'seed': seed, 'ga': ga_config.to_dict(), 'trials': results},
            output_root / 'trials.yaml',
            overwrite=overwrite
        )
        print(f"\nTrial results written to: {output_root}")

    return results
