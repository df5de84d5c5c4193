"""
I/O utilities for the knapsack GA.

Handles catalog CSV parsing/serialization, result export (fitness log,
best solution), YAML config loading and metadata sidecars.
"""

import csv
from pathlib import Path
from typing import Optional, Union

import yaml

from .data_models import Individual, Item, ItemCatalog
from .evolution import EvolutionResult


def _prepare_output(output_path: Union[str, Path], overwrite: bool, label: str = "Output file") -> Path:
    output_path = Path(output_path)

    if output_path.exists() and not overwrite:
        raise FileExistsError(f"{label} already exists: {output_path}")

    output_path.parent.mkdir(parents=True, exist_ok=True)
    return output_path


def load_catalog_csv(csv_path: Union[str, Path]) -> ItemCatalog:
    """
    Load an item catalog from CSV.

    CSV format:
        index,value,weight
        0,12,7
        1,25,19
        ...

    Rows are ordered by the index column, which must cover 0..N-1 exactly.

    Args:
        csv_path: Path to CSV file

    Returns:
        ItemCatalog

    Raises:
        FileNotFoundError: If CSV file doesn't exist
        ValueError: If CSV format is invalid
    """
    csv_path = Path(csv_path)

    if not csv_path.exists():
        raise FileNotFoundError(f"Catalog file not found: {csv_path}")

    rows = {}
    with open(csv_path, 'r', newline='') as f:
        reader = csv.DictReader(f)

        if reader.fieldnames is None or not all(col in reader.fieldnames for col in ['index', 'value', 'weight']):
            raise ValueError(f"Invalid catalog format in {csv_path}. Expected columns: index,value,weight")

        for line_no, row in enumerate(reader, start=2):
            try:
                index = int(row['index'])
                item = Item(value=int(row['value']), weight=int(row['weight']))
            except (TypeError, ValueError) as e:
                raise ValueError(f"{csv_path}:{line_no}: invalid catalog row: {e}")

            if index in rows:
                raise ValueError(f"{csv_path}:{line_no}: duplicate item index {index}")
            rows[index] = item

    if not rows:
        raise ValueError(f"Catalog file is empty: {csv_path}")

    if sorted(rows) != list(range(len(rows))):
        raise ValueError(f"Catalog indices in {csv_path} must be 0..{len(rows) - 1} without gaps")

    return ItemCatalog(items=tuple(rows[i] for i in range(len(rows))))


def save_catalog_csv(
    catalog: ItemCatalog,
    output_path: Union[str, Path],
    overwrite: bool = False
) -> Path:
    """
    Save an item catalog to CSV.

    Raises:
        FileExistsError: If file exists and overwrite=False
    """
    output_path = _prepare_output(output_path, overwrite)

    with open(output_path, 'w', newline='') as f:
        writer = csv.writer(f)
        writer.writerow(['index', 'value', 'weight'])
        for index, item in enumerate(catalog):
            writer.writerow([index, item.value, item.weight])

    return output_path


def save_fitness_log(
    result: EvolutionResult,
    output_path: Union[str, Path],
    overwrite: bool = False
) -> Path:
    """
    Save checkpoint history to CSV.

    Columns: generation,best_fitness,mean_fitness,feasible_count

    Raises:
        FileExistsError: If file exists and overwrite=False
    """
    output_path = _prepare_output(output_path, overwrite, label="Fitness log")

    with open(output_path, 'w', newline='') as f:
        writer = csv.writer(f)
        writer.writerow(['generation', 'best_fitness', 'mean_fitness', 'feasible_count'])
        for checkpoint in result.checkpoints:
            writer.writerow([
                checkpoint.generation,
                checkpoint.best_fitness,
                f"{checkpoint.mean_fitness:.3f}",
                checkpoint.feasible_count
            ])

    return output_path


def save_best_solution(
    individual: Individual,
    catalog: ItemCatalog,
    output_path: Union[str, Path],
    overwrite: bool = False
) -> Path:
    """
    Save a solution as one CSV row per catalog item.

    Columns: index,value,weight,included (0/1)

    Raises:
        FileExistsError: If file exists and overwrite=False
    """
    if individual.num_items != len(catalog):
        raise ValueError(
            f"Gene length ({individual.num_items}) does not match catalog size ({len(catalog)})"
        )

    output_path = _prepare_output(output_path, overwrite)

    with open(output_path, 'w', newline='') as f:
        writer = csv.writer(f)
        writer.writerow(['index', 'value', 'weight', 'included'])
        for index, item in enumerate(catalog):
            writer.writerow([index, item.value, item.weight, int(individual.genes[index])])

    return output_path


def load_config(config_path: Union[str, Path]) -> dict:
    """
    Load configuration from YAML file.

    Raises:
        FileNotFoundError: If config file doesn't exist
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r') as f:
        config = yaml.safe_load(f)

    return config


def save_metadata(
    metadata: dict,
    output_path: Union[str, Path],
    overwrite: bool = False
) -> Path:
    """
    Save metadata to YAML sidecar file.

    Raises:
        FileExistsError: If file exists and overwrite=False
    """
    output_path = _prepare_output(output_path, overwrite, label="Metadata file")

    with open(output_path, 'w') as f:
        yaml.dump(metadata, f, default_flow_style=False, sort_keys=False)

    return output_path


def validate_catalog_csv(csv_path: Union[str, Path]) -> tuple[bool, Optional[str]]:
    """
    Validate that a catalog CSV can be loaded.

    Returns:
        Tuple of (is_valid, error_message)
    """
    try:
        load_catalog_csv(csv_path)
    except (FileNotFoundError, ValueError) as e:
        return False, str(e)

    return True, None
