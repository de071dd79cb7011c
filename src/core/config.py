"""Runtime configuration model for container packaging.

This module owns staging and worker settings and their validation.
Pipelines consume a typed config object instead of hardcoded values.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from core.constants import DEFAULT_MAX_WORKERS, DEFAULT_STAGING_PREFIX
from core.errors import ConfigError


@dataclass(frozen=True)
class PackagingConfig:
    """Validated packaging configuration.

    Attributes:
        staging_prefix: Name prefix for per-operation staging directories.
        staging_root: Parent directory for staging; platform temp root when None.
        max_workers: Worker count for per-entry image coding; 1 is sequential.
    """

    staging_prefix: str = DEFAULT_STAGING_PREFIX
    staging_root: Path | None = None
    max_workers: int = DEFAULT_MAX_WORKERS

    def __post_init__(self) -> None:
        _validate_staging_prefix(self.staging_prefix)
        _validate_max_workers(self.max_workers)

    @classmethod
    def from_mapping(cls, values: Mapping[str, object]) -> "PackagingConfig":
        """Build config from a loose mapping such as parsed CLI flags.

        Args:
            values: Mapping with optional ``staging_prefix``, ``staging_root``
                and ``max_workers`` keys. None values keep defaults.

        Returns:
            A validated config object.

        Raises:
            ConfigError: If keys are unknown or values are invalid.
        """
        unknown_keys = sorted(set(values) - {"staging_prefix", "staging_root", "max_workers"})
        if unknown_keys:
            raise ConfigError(
                f"Unknown packaging config keys: {', '.join(unknown_keys)}. "
                "Use staging_prefix, staging_root, or max_workers."
            )
        prefix = values.get("staging_prefix")
        root = values.get("staging_root")
        workers = values.get("max_workers")
        return cls(
            staging_prefix=DEFAULT_STAGING_PREFIX if prefix is None else str(prefix),
            staging_root=None if root is None else Path(str(root)).expanduser().resolve(),
            max_workers=DEFAULT_MAX_WORKERS if workers is None else _parse_max_workers(workers),
        )


def _validate_staging_prefix(prefix: str) -> None:
    if not isinstance(prefix, str) or not prefix:
        raise ConfigError("Invalid staging_prefix: expected a non-empty string.")
    if "/" in prefix or "\\" in prefix:
        raise ConfigError(
            f"Invalid staging_prefix '{prefix}': path separators are not allowed. "
            "Use staging_root to choose the parent directory."
        )


def _validate_max_workers(max_workers: int) -> None:
    if isinstance(max_workers, bool) or not isinstance(max_workers, int) or max_workers < 1:
        raise ConfigError(
            f"Invalid max_workers value: expected integer >= 1, got '{max_workers}'."
        )


def _parse_max_workers(raw_value: object) -> int:
    """Parse a worker count from a loose value.

    Args:
        raw_value: Raw integer or string value.

    Returns:
        Parsed integer worker count.

    Raises:
        ConfigError: If value cannot be parsed into int.
    """
    if isinstance(raw_value, bool):
        raise ConfigError(f"Invalid max_workers value: expected integer, got '{raw_value}'.")
    try:
        return int(str(raw_value))
    except ValueError as error:
        raise ConfigError(
            "Invalid max_workers value: "
            f"expected integer, got '{raw_value}'. "
            "Set max_workers to a positive number."
        ) from error
