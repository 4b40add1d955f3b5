"""
Configuration loader for the Margin Simulation Engine.

Loads settings from margin_config.yaml and provides typed access
to all configuration sections.
"""
from pathlib import Path
from typing import Any, Optional
from functools import lru_cache

import yaml


# Default config shipped inside the package
DEFAULT_CONFIG_PATH = Path(__file__).parent / "margin_config.yaml"


class ConfigurationError(Exception):
    """Raised when configuration loading or validation fails."""
    pass


class MarginConfig:
    """
    Configuration manager for the margin simulation engine.

    Loads YAML configuration and provides typed access to all sections.
    Use get_config() to obtain the singleton instance.
    """

    def __init__(self, config_path: Optional[Path] = None):
        self._config_path = config_path or DEFAULT_CONFIG_PATH
        self._config: dict = {}
        self._load()

    def _load(self) -> None:
        """Load configuration from YAML file."""
        if not self._config_path.exists():
            raise ConfigurationError(f"Config file not found: {self._config_path}")

        try:
            with open(self._config_path, 'r') as f:
                self._config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in config file: {e}")

        if not isinstance(self._config, dict):
            raise ConfigurationError("Config file must contain a YAML mapping")

    @property
    def version(self) -> str:
        """Configuration file version."""
        return self._config.get("version", "unknown")

    # =========================================================================
    # Global Parameters
    # =========================================================================

    @property
    def global_parameters(self) -> dict:
        """Raw global cost parameters (employer rate, indirect costs, hours)."""
        return self._config.get("global_parameters", {})

    @property
    def parameters_version(self) -> str:
        """Version label of the global parameter set."""
        return str(self.global_parameters.get("version", "default"))

    @property
    def employer_rate(self) -> float:
        """Employer charges as a percentage of gross salary."""
        return float(self.global_parameters.get("employer_rate", 0.0))

    @property
    def indirect_costs_annual(self) -> float:
        """Annual indirect costs allocated to one resource."""
        return float(self.global_parameters.get("indirect_costs_annual", 0.0))

    @property
    def billable_hours_per_year(self) -> int:
        """Billable hours per year before vacation adjustments."""
        return int(self.global_parameters.get("billable_hours_per_year", 1600))

    # =========================================================================
    # Calendar
    # =========================================================================

    @property
    def calendar(self) -> dict:
        """Calendar configuration."""
        return self._config.get("calendar", {})

    @property
    def standard_workday_hours(self) -> float:
        """Hours removed from the billable year per forced vacation day."""
        return float(self.calendar.get("standard_workday_hours", 8.0))

    @property
    def days_per_year(self) -> int:
        """Upper bound for forced vacation days."""
        return int(self.calendar.get("days_per_year", 365))

    # =========================================================================
    # Policy Defaults
    # =========================================================================

    @property
    def policy_defaults(self) -> dict:
        """Margin policy used when a client has no explicit configuration."""
        return self._config.get("policy_defaults", {
            "target_margin_percent": 25.0,
            "min_margin_percent": 15.0,
            "discount_percent": 0.0,
            "forced_vacation_days": 0,
        })

    # =========================================================================
    # Import
    # =========================================================================

    @property
    def import_settings(self) -> dict:
        """Client margin import configuration."""
        return self._config.get("import", {})

    @property
    def fuzzy_match_threshold(self) -> int:
        """Minimum rapidfuzz score to match a client by name."""
        return int(self.import_settings.get("fuzzy_match_threshold", 90))

    def get_column_aliases(self, column: str) -> list[str]:
        """Accepted header spellings for a logical import column."""
        aliases = self.import_settings.get("column_aliases", {})
        return aliases.get(column, [column])

    # =========================================================================
    # UI Configuration
    # =========================================================================

    @property
    def ui(self) -> dict:
        """UI configuration."""
        return self._config.get("ui", {})

    @property
    def currency_config(self) -> dict:
        """Currency formatting configuration."""
        return self.ui.get("currency", {
            "symbol": "$",
            "decimal_places": 2,
            "thousands_separator": ",",
            "decimal_separator": ".",
        })

    @property
    def percent_decimal_places(self) -> int:
        """Decimal places used when rendering percentages."""
        return int(self.ui.get("percent", {}).get("decimal_places", 2))

    # =========================================================================
    # Access
    # =========================================================================

    @property
    def access(self) -> dict:
        """Role configuration for the authorization context."""
        return self._config.get("access", {})

    @property
    def admin_role(self) -> str:
        """Role name granting Admin access to every business unit."""
        return self.access.get("admin_role", "admin")

    @property
    def cfo_role(self) -> str:
        """Role name granting CFO access to every business unit."""
        return self.access.get("cfo_role", "cfo")

    @property
    def business_unit_prefix(self) -> str:
        """Prefix identifying business-unit roles (e.g. 'BU-')."""
        return self.access.get("business_unit_prefix", "BU-")

    # =========================================================================
    # Raw Access
    # =========================================================================

    def get(self, key: str, default: Any = None) -> Any:
        """Get a top-level config value by key."""
        return self._config.get(key, default)

    def __getitem__(self, key: str) -> Any:
        """Dictionary-style access to config."""
        return self._config[key]

    def __contains__(self, key: str) -> bool:
        """Check if key exists in config."""
        return key in self._config


@lru_cache(maxsize=1)
def get_config(config_path: Optional[str] = None) -> MarginConfig:
    """
    Get the singleton configuration instance.

    Args:
        config_path: Optional path to config file. Only used on first call.

    Returns:
        MarginConfig singleton instance
    """
    path = Path(config_path) if config_path else None
    return MarginConfig(path)


def reload_config() -> MarginConfig:
    """Reload configuration from disk and return new instance."""
    get_config.cache_clear()
    return get_config()
