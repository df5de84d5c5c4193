"""
Configuration for the knapsack genetic algorithm.

Contains the GA hyperparameters with their default values and the checks
run before a solve starts. Invalid settings are fatal.
"""

from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, List, Optional


class ConfigValidationError(Exception):
    """Raised when run or GA configuration is invalid."""
    pass


@dataclass
class GAConfig:
    """
    Configuration for the knapsack genetic algorithm.

    Defaults:
    - capacity: 250 (knapsack weight bound)
    - num_items: 100 (gene length / catalog size)
    - population_size: 100 (must be even, half survive each generation)
    - max_generations: 1000
    - log_interval: 20 (checkpoint every N generations, starting at 0)
    - crossover_rate: 0.25 (chance a breeding attempt yields a child)
    - mutation_rate: 0.05 (chance of one swap per child)
    """
    capacity: int = 250
    num_items: int = 100
    population_size: int = 100
    max_generations: int = 1000
    log_interval: int = 20
    crossover_rate: float = 0.25
    mutation_rate: float = 0.05

    # Repair coin for overweight children
    drop_probability: float = 0.5

    # Survivors refill the next generation before children are bred
    carry_survivors: bool = True

    random_seed: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "GAConfig":
        """
        Create configuration from a dictionary (e.g., the 'ga' YAML section).

        Raises:
            ConfigValidationError: If unknown keys are present
        """
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigValidationError("'ga' section must be a dictionary")

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigValidationError(f"Unknown GA configuration keys: {unknown}")

        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to a plain dictionary."""
        return asdict(self)

    def validation_errors(self) -> List[str]:
        """
        Collect configuration problems.

        Returns:
            List of error messages (empty if valid)
        """
        errors = []

        for name in ('capacity', 'num_items', 'population_size', 'max_generations', 'log_interval'):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool):
                errors.append(f"'{name}' must be an integer, got: {value!r}")

        if errors:
            return errors

        if self.capacity < 0:
            errors.append(f"'capacity' must be non-negative, got: {self.capacity}")
        if self.num_items < 1:
            errors.append(f"'num_items' must be positive, got: {self.num_items}")
        if self.population_size < 2:
            errors.append(
                f"'population_size' must be at least 2 to produce survivors, got: {self.population_size}"
            )
        elif self.population_size % 2 != 0:
            errors.append(f"'population_size' must be even, got: {self.population_size}")
        if self.max_generations < 0:
            errors.append(f"'max_generations' must be non-negative, got: {self.max_generations}")
        if self.log_interval < 1:
            errors.append(f"'log_interval' must be positive, got: {self.log_interval}")

        for name in ('crossover_rate', 'mutation_rate', 'drop_probability'):
            value = getattr(self, name)
            if not isinstance(value, (int, float)) or isinstance(value, bool) or not 0.0 <= value <= 1.0:
                errors.append(f"'{name}' must be a probability in [0, 1], got: {value!r}")

        # A zero rate would make the breeding loop spin forever
        if not errors and self.crossover_rate == 0:
            errors.append("'crossover_rate' must be greater than 0")

        if not isinstance(self.carry_survivors, bool):
            errors.append(f"'carry_survivors' must be true or false, got: {self.carry_survivors!r}")

        seed = self.random_seed
        if seed is not None and (not isinstance(seed, int) or isinstance(seed, bool) or seed < 0):
            errors.append(f"'random_seed' must be a non-negative integer, got: {seed!r}")

        return errors

    def validate(self) -> None:
        """
        Validate configuration.

        Raises:
            ConfigValidationError: If any setting is invalid
        """
        errors = self.validation_errors()
        if errors:
            raise ConfigValidationError("Invalid GA configuration:\n  " + "\n  ".join(errors))
