"""Convention configuration for the stub generator."""

from pathlib import Path
from typing import Any, Self

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from refitgen.errors import ConfigError

DEFAULT_HTTP_METHOD_NAMES = ("Get", "Head", "Post", "Put", "Delete", "Patch")
DEFAULT_EXCLUDED_USINGS = (
    "System",
    "System.Net.Http",
    "System.Collections.Generic",
    "System.Linq",
)


class ConventionConfig(BaseModel):
    """Vocabulary of the interface convention with Pydantic validation.

    The defaults describe Refit: files must import ``Refit``, methods are
    dispatched through ``[Get]``/``[Post]``/... attributes, and the core
    ``System`` namespaces are always emitted by the generated file itself.
    """

    model_config = ConfigDict(
        # Immutable - configuration cannot be modified after creation
        frozen=True,
        # Strict - extra fields not in the model are rejected
        extra="forbid",
    )

    guard_namespace: str = Field(
        default="Refit",
        description="Namespace a file must import before it is scanned",
    )
    http_method_names: tuple[str, ...] = Field(
        default=DEFAULT_HTTP_METHOD_NAMES,
        description="Attribute names that mark a dispatch method",
        min_length=1,
    )
    attribute_suffix: str = Field(
        default="Attribute",
        description="Optional suffix accepted after each attribute name",
    )
    excluded_usings: tuple[str, ...] = Field(
        default=DEFAULT_EXCLUDED_USINGS,
        description="Using directives the generated file always declares",
    )
    diagnostic_category: str = Field(
        default="Refit",
        description="Prefix for diagnostic ids and messages",
    )

    @field_validator("guard_namespace", "diagnostic_category")
    @classmethod
    def validate_non_empty(cls, v: str) -> str:
        """Reject empty names and strip surrounding whitespace."""
        if not v.strip():
            raise ValueError("Value must be a non-empty string")
        return v.strip()

    @field_validator("http_method_names")
    @classmethod
    def validate_http_method_names(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Normalise verb names and reject blanks or duplicates."""
        names = tuple(name.strip() for name in v)
        if any(not name for name in names):
            raise ValueError("HTTP method names must be non-empty strings")
        if len(set(names)) != len(names):
            raise ValueError(f"HTTP method names must be distinct: {list(names)}")
        return names

    @field_validator("excluded_usings")
    @classmethod
    def validate_excluded_usings(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Strip surrounding whitespace from excluded using directives."""
        return tuple(item.strip() for item in v)

    @property
    def marker_names(self) -> frozenset[str]:
        """Every accepted attribute name, bare and suffixed."""
        return frozenset(
            candidate
            for name in self.http_method_names
            for candidate in (name, f"{name}{self.attribute_suffix}")
        )

    @classmethod
    def from_properties(cls, properties: dict[str, Any]) -> Self:
        """Create configuration from a properties mapping.

        Args:
            properties: Raw configuration values, e.g. loaded from YAML

        Returns:
            Validated configuration object

        Raises:
            ConfigError: If validation fails

        """
        try:
            return cls.model_validate(properties)
        except ValidationError as e:
            raise ConfigError(f"Invalid convention configuration: {e}") from e


def load_config(config_path: Path) -> ConventionConfig:
    """Load a convention configuration from a YAML file.

    Args:
        config_path: Path to the YAML file

    Returns:
        Validated configuration; an empty file yields the defaults

    Raises:
        ConfigError: If the file cannot be read, parsed or validated

    """
    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse YAML config {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config file {config_path}: {e}") from e

    if data is None:
        return ConventionConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid configuration format in {config_path}")

    return ConventionConfig.from_properties(data)  # type: ignore[arg-type]
