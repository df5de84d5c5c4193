"""
CLI module for the knapsack GA.

Handles run configuration loading, validation, and mode dispatching.
"""

from typing import Any, Dict
import yaml

from .config import ConfigValidationError, GAConfig
from .io_utils import load_config, validate_catalog_csv


def load_run_config(config_path: str) -> Dict[str, Any]:
    """
    Load run configuration from YAML file.

    Args:
        config_path: Path to run configuration YAML file

    Returns:
        Dictionary containing run configuration

    Raises:
        FileNotFoundError: If config file doesn't exist
        ConfigValidationError: If config is invalid
    """
    try:
        config = load_config(config_path)
    except yaml.YAMLError as e:
        raise ConfigValidationError(f"Invalid YAML in configuration file: {e}")

    if config is None:
        raise ConfigValidationError("Configuration file is empty")

    if not isinstance(config, dict):
        raise ConfigValidationError("Configuration file must contain a mapping")

    return config


def validate_run_config(config: Dict[str, Any]) -> None:
    """
    Validate run configuration structure.

    Args:
        config: Run configuration dictionary

    Raises:
        ConfigValidationError: If configuration is invalid
    """
    mode = config.get('mode', 'solve')
    if mode not in ['solve', 'trials']:
        raise ConfigValidationError(
            f"Invalid mode: '{mode}'. Must be 'solve' or 'trials'"
        )

    # GA section (optional, defaults apply)
    ga_config = GAConfig.from_dict(config.get('ga'))
    ga_config.validate()

    seed = config.get('random_seed')
    if seed is not None and (not isinstance(seed, int) or isinstance(seed, bool) or seed < 0):
        raise ConfigValidationError(f"'random_seed' must be a non-negative integer, got: {seed!r}")

    if 'verbose' in config and not isinstance(config['verbose'], bool):
        raise ConfigValidationError("'verbose' must be true or false")

    if 'catalog' in config:
        _validate_catalog_config(config['catalog'])

    if 'output' in config:
        if not isinstance(config['output'], dict):
            raise ConfigValidationError("'output' must be a dictionary")
        if 'root' not in config['output']:
            raise ConfigValidationError("Missing required field: 'output.root'")

    if mode == 'trials':
        if 'trials' not in config:
            raise ConfigValidationError("Trials mode requires 'trials' field")
        num_trials = config['trials']
        if not isinstance(num_trials, int) or isinstance(num_trials, bool) or num_trials <= 0:
            raise ConfigValidationError(
                f"'trials' must be a positive integer, got: {num_trials}"
            )


def _validate_range(name: str, value: Any, minimum: int) -> None:
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise ConfigValidationError(f"'{name}' must be a [min, max] pair, got: {value!r}")
    low, high = value
    if not all(isinstance(v, int) and not isinstance(v, bool) for v in (low, high)):
        raise ConfigValidationError(f"'{name}' bounds must be integers, got: {value!r}")
    if low < minimum or low > high:
        raise ConfigValidationError(
            f"'{name}' must satisfy {minimum} <= min <= max, got: {value!r}"
        )


def _validate_catalog_config(catalog_config: Any) -> None:
    """
    Validate catalog section.

    Raises:
        ConfigValidationError: If configuration is invalid
    """
    if not isinstance(catalog_config, dict):
        raise ConfigValidationError("'catalog' must be a dictionary")

    has_path = 'path' in catalog_config
    has_generate = 'generate' in catalog_config

    if has_path and has_generate:
        raise ConfigValidationError(
            "Catalog cannot have both 'path' and 'generate'. "
            "Please specify only one."
        )

    if has_path:
        is_valid, error = validate_catalog_csv(catalog_config['path'])
        if not is_valid:
            raise ConfigValidationError(f"Invalid catalog file: {error}")

    if has_generate:
        generate_config = catalog_config['generate'] or {}
        if not isinstance(generate_config, dict):
            raise ConfigValidationError("'catalog.generate' must be a dictionary")
        if 'value_range' in generate_config:
            _validate_range('catalog.generate.value_range', generate_config['value_range'], 0)
        if 'weight_range' in generate_config:
            _validate_range('catalog.generate.weight_range', generate_config['weight_range'], 1)


def run_from_config(config_path: str) -> None:
    """
    Load run configuration and execute appropriate mode.

    This is the main entry point called by ga_cli.py.

    Args:
        config_path: Path to run configuration YAML file

    Raises:
        FileNotFoundError: If config file doesn't exist
        ConfigValidationError: If config is invalid
        Various exceptions from mode implementations
    """
    print(f"Loading configuration from: {config_path}")
    config = load_run_config(config_path)

    print("Validating configuration...")
    validate_run_config(config)

    mode = config.get('mode', 'solve')
    print(f"Mode: {mode}\n")

    if mode == 'solve':
        from .orchestration import run_solve_mode
        run_solve_mode(config)
    elif mode == 'trials':
        from .orchestration import run_trials_mode
        run_trials_mode(config)
    else:
        # Should never reach here due to validation
        raise ConfigValidationError(f"Invalid mode: {mode}")

    print("\nRun completed successfully!")
