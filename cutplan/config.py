import os
import logging
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'

# Quantity used for every stock row when the caller asks for unlimited stock
UNLIMITED_STOCK_QUANTITY = 100

# Upper bound for a single row quantity during input expansion
MAX_ROW_QUANTITY = 10000


def configure_logging(level: Optional[str] = None):
    level = level or os.getenv("CUTPLAN_LOG_LEVEL", "INFO")
    logging.basicConfig(level=getattr(logging, str(level).upper(), logging.INFO), format=LOG_FORMAT)


def _env_number(name: str, cast, default):
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return cast(raw)
    except ValueError:
        logger.warning("Ignoring invalid value %r for %s, using %s", raw, name, default)
        return default


@dataclass
class GeneticConfig:
    population_size: int = 50
    generations: int = 100
    mutation_rate: float = 0.1

    def validate(self) -> "GeneticConfig":
        if self.population_size < 1:
            raise ValueError(f"population_size must be at least 1, got {self.population_size}")
        if self.generations < 0:
            raise ValueError(f"generations must not be negative, got {self.generations}")
        if not 0.0 <= self.mutation_rate <= 1.0:
            raise ValueError(f"mutation_rate must be within [0, 1], got {self.mutation_rate}")
        return self

    @classmethod
    def from_env(cls) -> "GeneticConfig":
        """Defaults, overridden by CUTPLAN_GA_* environment variables where set."""
        defaults = cls()
        return cls(
            population_size=_env_number("CUTPLAN_GA_POPULATION", int, defaults.population_size),
            generations=_env_number("CUTPLAN_GA_GENERATIONS", int, defaults.generations),
            mutation_rate=_env_number("CUTPLAN_GA_MUTATION_RATE", float, defaults.mutation_rate),
        ).validate()
