"""Configuration loading and management for git-author-stats.

Configuration sources are merged in priority order:
    1. Defaults (defined in AuthorStatsConfig)
    2. Global config (~/.git-author-stats.toml)
    3. Project config (./git-author-stats.toml)
    4. Explicit config file
    5. Environment variables (GIT_AUTHOR_STATS_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(worker_limit=4)
    >>> config.worker_limit
    4
    >>> config.start_year
    2016
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import AuthorStatsError, InvalidConfigError
from .exclusions import (
    BINARY_EXTENSIONS,
    GENERATED_EXTENSIONS,
    GENERATED_SUFFIXES,
    ExclusionPolicy,
)

Verbosity = Literal["quiet", "normal", "verbose"]

ENV_PREFIX = "GIT_AUTHOR_STATS_"


@dataclass(frozen=True)
class AuthorStatsConfig:
    """Configuration for an attribution run.

    Attributes:
        Sampling:
            start_year: First year sampled (periods start in January)

        Performance tuning:
            worker_limit: Cap on parallel blame workers per period
            git_timeout_seconds: Timeout for a single git invocation

        Exclusion policy:
            generated_prefixes: Directory prefixes holding generated output
            imported_prefixes: Directory prefixes holding mostly imported code
            binary_extensions: Extensions treated as binary
            generated_extensions: Extensions of generated sources
            generated_suffixes: File name suffixes of generated build artifacts

        Output control:
            verbosity: Logging verbosity level
    """

    # Sampling
    start_year: int = 2016

    # Performance tuning
    worker_limit: int = 16
    git_timeout_seconds: int = 120

    # Exclusion policy
    generated_prefixes: tuple[str, ...] = ("cache/",)
    imported_prefixes: tuple[str, ...] = ("xip/",)
    binary_extensions: frozenset[str] = field(default_factory=lambda: BINARY_EXTENSIONS)
    generated_extensions: frozenset[str] = field(default_factory=lambda: GENERATED_EXTENSIONS)
    generated_suffixes: tuple[str, ...] = GENERATED_SUFFIXES

    # Output control
    verbosity: Verbosity = "normal"

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not 1970 <= self.start_year <= 9999:
            raise InvalidConfigError("start_year", self.start_year, "must be between 1970 and 9999")
        if self.worker_limit < 1:
            raise InvalidConfigError("worker_limit", self.worker_limit, "must be at least 1")
        if self.git_timeout_seconds < 1:
            raise InvalidConfigError(
                "git_timeout_seconds", self.git_timeout_seconds, "must be at least 1"
            )
        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise InvalidConfigError(
                "verbosity", self.verbosity, "expected quiet, normal or verbose"
            )

        # TOML hands us lists; store hashable, normalized forms
        for name in ("generated_prefixes", "imported_prefixes", "generated_suffixes"):
            object.__setattr__(self, name, tuple(getattr(self, name)))
        for name in ("binary_extensions", "generated_extensions"):
            object.__setattr__(
                self, name, frozenset(ext.lstrip(".").lower() for ext in getattr(self, name))
            )

    @property
    def exclusion_policy(self) -> ExclusionPolicy:
        """Exclusion policy built from the configured prefixes and sets."""
        return ExclusionPolicy(
            generated_prefixes=self.generated_prefixes,
            imported_prefixes=self.imported_prefixes,
            binary_extensions=self.binary_extensions,
            generated_extensions=self.generated_extensions,
            generated_suffixes=self.generated_suffixes,
        )


def load_config(config_file: Optional[Path] = None, **overrides) -> AuthorStatsConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags). ``None``
            values are ignored so unset CLI options keep lower-priority values.

    Returns:
        Validated AuthorStatsConfig instance

    Raises:
        AuthorStatsError: If a config file is invalid or missing
    """
    merged: dict = {}

    global_config = Path.home() / ".git-author-stats.toml"
    if global_config.exists():
        merged.update(_read_config_file(global_config, "global config"))

    project_config = Path.cwd() / "git-author-stats.toml"
    if project_config.exists():
        merged.update(_read_config_file(project_config, "project config"))

    if config_file is not None:
        if not config_file.exists():
            raise AuthorStatsError(f"Config file not found: {config_file}")
        merged.update(_read_config_file(config_file, "config file"))

    merged.update(_load_env_vars())

    if overrides.pop("verbose", False):
        overrides["verbosity"] = "verbose"
    if overrides.pop("quiet", False):
        overrides["verbosity"] = "quiet"

    merged.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return AuthorStatsConfig(**merged)
    except TypeError as e:
        # Unknown field in config
        raise AuthorStatsError(f"Invalid configuration: {e}")


def _read_config_file(path: Path, label: str) -> dict:
    try:
        data = _load_toml_file(path)
    except AuthorStatsError:
        raise
    except Exception as e:
        raise AuthorStatsError(f"Invalid {label} '{path}': {e}")
    # Settings may live at top level or under a [git-author-stats] table
    section = data.get("git-author-stats")
    return dict(section) if isinstance(section, dict) else data


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from GIT_AUTHOR_STATS_* environment variables.

    Supported environment variables:
        GIT_AUTHOR_STATS_START_YEAR: int
        GIT_AUTHOR_STATS_WORKER_LIMIT: int
        GIT_AUTHOR_STATS_GIT_TIMEOUT_SECONDS: int
        GIT_AUTHOR_STATS_VERBOSITY: quiet/normal/verbose
        GIT_AUTHOR_STATS_GENERATED_PREFIXES: comma-separated list
        GIT_AUTHOR_STATS_IMPORTED_PREFIXES: comma-separated list

    Returns:
        Dict of field_name -> parsed_value for any variables found.
    """
    type_hints = get_type_hints(AuthorStatsConfig)

    result: dict[str, Any] = {}

    for field_name in AuthorStatsConfig.__dataclass_fields__:
        env_key = f"{ENV_PREFIX}{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
            if parsed is not None:
                result[field_name] = parsed
        except ValueError as e:
            raise AuthorStatsError(f"Invalid {env_key}: {e}")

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the correct type.

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    # Collections: comma-separated
    if origin in (tuple, frozenset):
        items = [item.strip() for item in value.split(",") if item.strip()]
        return tuple(items) if origin is tuple else frozenset(items)

    if type_hint is int:
        return int(value)

    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    Raises:
        AuthorStatsError: If tomllib/tomli not available
        Exception: If TOML parsing fails
    """
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        try:
            # Fallback to tomli for Python 3.9-3.10
            import tomli as tomllib  # type: ignore
        except ImportError:
            raise AuthorStatsError(
                "TOML support requires Python 3.11+ or 'tomli' package. "
                "Install with: pip install tomli"
            )

    with open(path, "rb") as f:
        return tomllib.load(f)
