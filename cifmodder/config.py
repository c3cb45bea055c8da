"""
Runtime configuration for the cif-modder command line.

Values come from the environment (a `.env` file is loaded if present) and
are overridden by command-line flags.
"""

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .src.cif_io import DEFAULT_SUFFIX

ENV_PREFIX = "CIF_MODDER_"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _parse_bool(value: str, name: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ValueError(f"{name} must be a boolean, got '{value}'")


@dataclass(frozen=True)
class CifModderConfig:
    """Settings shared by every file of a run"""
    seed: Optional[int] = None
    log_level: str = "INFO"
    suffix: str = DEFAULT_SUFFIX
    keep_precision: bool = True

    @classmethod
    def from_env(cls, env_file: Optional[Path] = None) -> 'CifModderConfig':
        """
        Build a configuration from CIF_MODDER_* environment variables.

        Args:
            env_file: Explicit .env file; the default search is used otherwise
        """
        if env_file is not None:
            load_dotenv(env_file)
        else:
            load_dotenv()

        config = cls()

        seed = os.getenv(f"{ENV_PREFIX}SEED")
        if seed:
            try:
                config = replace(config, seed=int(seed))
            except ValueError as e:
                raise ValueError(f"{ENV_PREFIX}SEED must be an integer, got '{seed}'") from e

        log_level = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")
        if log_level:
            config = replace(config, log_level=log_level.upper())

        suffix = os.getenv(f"{ENV_PREFIX}SUFFIX")
        if suffix:
            config = replace(config, suffix=suffix)

        keep_precision = os.getenv(f"{ENV_PREFIX}KEEP_PRECISION")
        if keep_precision:
            config = replace(config, keep_precision=_parse_bool(keep_precision, f"{ENV_PREFIX}KEEP_PRECISION"))

        return config

    def with_overrides(self, **overrides) -> 'CifModderConfig':
        """Copy with every non-None override applied."""
        values = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **values)
