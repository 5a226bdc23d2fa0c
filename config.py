"""Configuration loader for tunable search bounds and display options.

Provides a Config dataclass and a loader that reads from YAML files,
falling back to default values if no config file is specified or found.
The game rule tables themselves are fixed and live in `constants`.

Exports
-------
Config
SearchConfig
DisplayConfig
load_config
get_config
get_cached_config
reload_config
set_config_path
"""

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from constants import MAX_SEARCH_RESULTS

_DEFAULT_CONFIG_NAME = "config.default.yml"

# Source checkout / editable install first, then the copy installed under
# <prefix>/share/picnic-calc by a regular install
_DEFAULT_CONFIG_CANDIDATES = (
    Path(__file__).parent / _DEFAULT_CONFIG_NAME,
    Path(sys.prefix) / "share" / "picnic-calc" / _DEFAULT_CONFIG_NAME,
)


def _default_config_path() -> Path:
    """First existing default config file (the first candidate if none exist)."""
    for candidate in _DEFAULT_CONFIG_CANDIDATES:
        if candidate.exists():
            return candidate
    return _DEFAULT_CONFIG_CANDIDATES[0]


# Global config path override (set via CLI)
_config_path_override: Path | None = None


@dataclass
class SearchConfig:
    """Enumeration bounds for the reverse-lookup search."""

    max_results: int = 20
    filling_pool_size: int = 12
    condiment_pool_size: int = 10
    min_filling_types: int = 2
    max_filling_types: int = 4
    filling_combo_cap: int = 50
    max_pieces_per_filling: int = 3
    max_total_pieces: int = 12
    min_condiments: int = 2
    max_condiments: int = 3
    condiment_combo_cap: int = 10
    rare_subset_cap: int = 5
    players: int = 1


@dataclass
class DisplayConfig:
    """Output options for the CLI renderer."""

    show_raw_values: bool = True
    show_deliciousness: bool = True


@dataclass
class Config:
    """Root configuration container."""

    search: SearchConfig = field(default_factory=SearchConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)


def _merge_dict_into_dataclass(data: dict[str, Any], dc_instance: Any) -> None:
    """Merge dictionary values into a dataclass instance."""
    for key, value in data.items():
        if hasattr(dc_instance, key):
            setattr(dc_instance, key, value)


def _validate_config(config: Config) -> list[str]:
    """Validate config values and return list of errors."""
    errors: list[str] = []
    search = config.search

    for name in (
        "max_results",
        "filling_pool_size",
        "condiment_pool_size",
        "filling_combo_cap",
        "max_pieces_per_filling",
        "max_total_pieces",
        "condiment_combo_cap",
        "rare_subset_cap",
    ):
        if getattr(search, name) < 1:
            errors.append(f"search.{name} must be >= 1")

    if search.max_results > MAX_SEARCH_RESULTS:
        errors.append(f"search.max_results must be <= {MAX_SEARCH_RESULTS}")

    if search.min_filling_types < 1:
        errors.append("search.min_filling_types must be >= 1")
    if search.max_filling_types < search.min_filling_types:
        errors.append("search.max_filling_types must be >= search.min_filling_types")
    if search.min_condiments < 0:
        errors.append("search.min_condiments must be >= 0")
    if search.max_condiments < search.min_condiments:
        errors.append("search.max_condiments must be >= search.min_condiments")
    if not (1 <= search.players <= 4):
        errors.append("search.players must be in [1, 4]")

    return errors


def load_config(path: str | Path | None = None) -> Config:
    """Load configuration from YAML file.

    Parameters
    ----------
    path : str | Path | None
        Path to config file. If None, uses the global override
        (set via set_config_path) or falls back to config.default.yml.

    Returns
    -------
    Config
        Loaded and validated configuration.

    Raises
    ------
    FileNotFoundError
        If specified path doesn't exist.
    ValueError
        If config validation fails.
    """
    # Determine which path to use
    if path is not None:
        config_path = Path(path)
    elif _config_path_override is not None:
        config_path = _config_path_override
    else:
        config_path = _default_config_path()

    # Check file exists
    if not config_path.exists():
        if path is not None:
            raise FileNotFoundError(f"Config file not found: {config_path}")
        # Fall back to defaults if default config doesn't exist
        return Config()

    # Load YAML
    with open(config_path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    # Build config from defaults, then overlay loaded values
    config = Config()

    if "search" in data:
        _merge_dict_into_dataclass(data["search"], config.search)
    if "display" in data:
        _merge_dict_into_dataclass(data["display"], config.display)

    # Validate
    errors = _validate_config(config)
    if errors:
        raise ValueError(
            "Config validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        )

    return config


def set_config_path(path: str | Path | None) -> None:
    """Set global config path override.

    Call this early (e.g., from CLI parsing) so later `get_cached_config`
    calls pick up the file.

    Parameters
    ----------
    path : str | Path | None
        Path to config file, or None to reset to default.
    """
    global _config_path_override, _cached_config
    _config_path_override = Path(path) if path is not None else None
    _cached_config = None


def get_config() -> Config:
    """Get the current configuration.

    Convenience wrapper around load_config() using the current
    global path override.

    Returns
    -------
    Config
        Current configuration.
    """
    return load_config()


# Singleton instance for lazy loading
_cached_config: Config | None = None


def get_cached_config() -> Config:
    """Get cached configuration (loads once).

    Returns
    -------
    Config
        Cached configuration instance.
    """
    global _cached_config
    if _cached_config is None:
        _cached_config = load_config()
    return _cached_config


def reload_config() -> Config:
    """Reload and cache configuration.

    Returns
    -------
    Config
        Freshly loaded configuration instance.
    """
    global _cached_config
    _cached_config = load_config()
    return _cached_config
