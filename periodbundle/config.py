"""Bundle configuration.

Loads mapper defaults and embedded-period column naming from YAML.

Source precedence:
    1. Explicit path passed to load_config()
    2. PERIODBUNDLE_CONFIG environment variable
    3. Built-in defaults

Example file:

    period:
      form:
        default_boundary_type: "[]"
        allow_null: false
      embedded_period:
        default:
          boundary_type_enabled: true
        properties:
          validity:
            boundary_type_enabled: false
            start_date_column: valid_from
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, replace
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from periodbundle.exceptions import ConfigurationError, PeriodBundleError
from periodbundle.form.periodmapper import MapperConfig
from periodbundle.period.periodmodel import BoundaryType

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "PERIODBUNDLE_CONFIG"

_FORM_KEYS = {
    "default_boundary_type",
    "start_date_field",
    "end_date_field",
    "boundary_type_field",
    "allow_null",
    "parse_strings",
}

_EMBEDDED_KEYS = {
    "boundary_type_enabled",
    "start_date_column",
    "end_date_column",
    "boundary_type_column",
}


@dataclass(frozen=True)
class EmbeddedPeriodConfig:
    """
    Column naming for a Period stored as three columns of its owning row.

    Use for_property() to derive the conventional names:

        >>> EmbeddedPeriodConfig.for_property("validity").start_date_column
        'validity_start_date'
    """

    start_date_column: str = "start_date"
    end_date_column: str = "end_date"
    boundary_type_column: str = "boundary_type"
    boundary_type_enabled: bool = True

    @classmethod
    def for_property(cls, property_name: str, **overrides: Any) -> "EmbeddedPeriodConfig":
        """Build a config with ``{property}_start_date`` style column names."""
        columns = {
            "start_date_column": f"{property_name}_start_date",
            "end_date_column": f"{property_name}_end_date",
            "boundary_type_column": f"{property_name}_boundary_type",
        }
        # null in YAML means "use the derived name"
        columns.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**columns)


@dataclass(frozen=True)
class BundleConfig:
    """
    Parsed bundle configuration.

    Sections are read-only views: load_config() hands the same cached
    instance to every caller.
    """

    form: Mapping[str, Any] = field(default_factory=dict)
    embedded_default: Mapping[str, Any] = field(default_factory=dict)
    embedded_properties: Mapping[str, Mapping[str, Any]] = field(default_factory=dict)
    source: Optional[Path] = None

    def __post_init__(self):
        # frozen dataclass: assign through object.__setattr__
        object.__setattr__(self, "form", MappingProxyType(dict(self.form)))
        object.__setattr__(self, "embedded_default", MappingProxyType(dict(self.embedded_default)))
        object.__setattr__(
            self,
            "embedded_properties",
            MappingProxyType(
                {name: MappingProxyType(dict(opts)) for name, opts in self.embedded_properties.items()}
            ),
        )

    def mapper_config(self, **overrides: Any) -> MapperConfig:
        """
        Build a MapperConfig from the ``form`` section.

        Keyword overrides win over file values (e.g. per-form allow_null).
        """
        options = dict(self.form)
        options.update(overrides)
        return MapperConfig(**options)

    def embedded_config(self, property_name: Optional[str] = None) -> EmbeddedPeriodConfig:
        """
        Column naming for an embedded period.

        Per-property overrides are merged over the ``default`` section.
        Without a property name, the unprefixed default columns are used.
        """
        options = dict(self.embedded_default)
        if property_name is not None:
            options.update(self.embedded_properties.get(property_name, {}))
            return EmbeddedPeriodConfig.for_property(property_name, **options)

        base = EmbeddedPeriodConfig()
        return replace(base, **{k: v for k, v in options.items() if v is not None})

    @property
    def default_boundary_type(self) -> BoundaryType:
        return BoundaryType.coerce(self.form.get("default_boundary_type", BoundaryType.default()))


def _check_keys(section: Mapping[str, Any], allowed: set, where: str) -> Dict[str, Any]:
    if not isinstance(section, Mapping):
        raise ConfigurationError(f"{where} must be a mapping, got {type(section).__name__}")

    unknown = sorted(set(section) - allowed)
    if unknown:
        raise ConfigurationError(
            f"Unknown keys in {where}: {', '.join(unknown)}. Allowed: {', '.join(sorted(allowed))}"
        )
    return dict(section)


def parse_config(data: Optional[Mapping[str, Any]], source: Optional[Path] = None) -> BundleConfig:
    """
    Validate raw configuration data and build a BundleConfig.

    Validation is eager: bad boundary types and bad field bindings raise
    here rather than when a mapper is first used.

    Raises:
        ConfigurationError: If the structure or any value is invalid
    """
    data = data or {}
    if not isinstance(data, Mapping):
        raise ConfigurationError(f"Configuration root must be a mapping, got {type(data).__name__}")

    period = _check_keys(data.get("period") or {}, {"form", "embedded_period"}, "period")
    form = _check_keys(period.get("form") or {}, _FORM_KEYS, "period.form")

    embedded = _check_keys(
        period.get("embedded_period") or {}, {"default", "properties"}, "period.embedded_period"
    )
    embedded_default = _check_keys(
        embedded.get("default") or {}, _EMBEDDED_KEYS, "period.embedded_period.default"
    )
    properties = embedded.get("properties") or {}
    if not isinstance(properties, Mapping):
        raise ConfigurationError("period.embedded_period.properties must be a mapping")
    embedded_properties = {
        name: _check_keys(opts or {}, _EMBEDDED_KEYS, f"period.embedded_period.properties.{name}")
        for name, opts in properties.items()
    }

    config = BundleConfig(
        form=form,
        embedded_default=embedded_default,
        embedded_properties=embedded_properties,
        source=source,
    )

    try:
        config.mapper_config()
    except (PeriodBundleError, TypeError) as e:
        raise ConfigurationError(f"Invalid period.form configuration: {e}") from e

    return config


def load_yaml_file(path: Path) -> dict:
    """
    Load and parse YAML file.

    Raises:
        FileNotFoundError: If file does not exist
        ConfigurationError: If the file is not valid YAML
    """
    if not path.exists():
        raise FileNotFoundError(f"Required file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        try:
            return yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e


@lru_cache(maxsize=8)
def _load_cached(path: Optional[Path]) -> BundleConfig:
    if path is None:
        logger.debug("No period configuration file, using built-in defaults")
        return parse_config({})

    config = parse_config(load_yaml_file(path), source=path)
    logger.info(f"Loaded period configuration from {path}")
    return config


def load_config(path: Optional[Union[str, Path]] = None) -> BundleConfig:
    """
    Load bundle configuration.

    Args:
        path: YAML file path. Defaults to $PERIODBUNDLE_CONFIG, then to
            built-in defaults.

    Returns:
        BundleConfig (cached per path; see clear_config_cache())

    Raises:
        FileNotFoundError: If an explicit or environment path does not exist
        ConfigurationError: If the file content is invalid
    """
    if path is None:
        env_path = os.environ.get(CONFIG_ENV_VAR)
        if env_path:
            logger.debug(f"Using {CONFIG_ENV_VAR}={env_path}")
            path = env_path

    resolved = Path(path).expanduser().resolve() if path is not None else None
    return _load_cached(resolved)


def clear_config_cache() -> None:
    """Clear cached configurations (e.g., after editing the file)."""
    _load_cached.cache_clear()
    logger.info("Cleared period configuration cache")


__all__ = [
    "CONFIG_ENV_VAR",
    "EmbeddedPeriodConfig",
    "BundleConfig",
    "parse_config",
    "load_yaml_file",
    "load_config",
    "clear_config_cache",
]
