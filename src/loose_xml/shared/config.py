"""Configuration classes for loose-xml.

This module provides configuration objects for the parser, the formatter and
logging, plus an aggregate configuration that can be loaded from JSON.
"""

import json
from dataclasses import dataclass, field, replace
from enum import Enum, auto
from typing import Any, Dict, List, Optional

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
DEFAULT_MAX_DEPTH = 256


class MapStrategy(Enum):
    """Attribute map strategy options."""

    ORDERED = auto()   # Attributes iterate in insertion order
    HASHED = auto()    # Attributes iterate in hash order, unspecified


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


@dataclass(frozen=True)
class ParserConfig:
    """Configuration for tokenizing and building element trees."""

    map_strategy: MapStrategy = MapStrategy.ORDERED
    max_depth: int = DEFAULT_MAX_DEPTH

    def __post_init__(self) -> None:
        """Validate parser configuration."""
        if not isinstance(self.map_strategy, MapStrategy):
            raise ConfigValidationError(
                "map_strategy must be a MapStrategy",
                field_name="map_strategy",
                suggestions=[member.name for member in MapStrategy],
            )
        if self.max_depth <= 0:
            raise ConfigValidationError(
                "max_depth must be > 0", field_name="max_depth"
            )


@dataclass(frozen=True)
class FormatConfig:
    """Presentation settings consumed by the formatter."""

    indent: int = 4
    line_separator: str = "\n"
    self_close: bool = True

    def __post_init__(self) -> None:
        """Validate format configuration."""
        if self.indent < 0:
            raise ConfigValidationError("indent must be >= 0", field_name="indent")
        if self.line_separator.strip():
            raise ConfigValidationError(
                "line_separator must only contain whitespace",
                field_name="line_separator",
            )


@dataclass(frozen=True)
class LoggingConfig:
    """Logging and diagnostics settings."""

    level: str = "WARNING"
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate logging configuration."""
        if self.level not in VALID_LOG_LEVELS:
            raise ConfigValidationError(
                f"level must be one of {VALID_LOG_LEVELS}", field_name="level"
            )


_SECTIONS = ("parser", "format", "logging")


@dataclass(frozen=True)
class LooseXMLConfig:
    """Complete configuration for parsing, formatting and logging.

    Immutable; use :meth:`override` to derive modified copies.
    """

    parser: ParserConfig = field(default_factory=ParserConfig)
    format: FormatConfig = field(default_factory=FormatConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    name: Optional[str] = None

    def override(self, **kwargs: Any) -> "LooseXMLConfig":
        """Create a new configuration with specific overrides.

        Args:
            **kwargs: ``section__field`` keys for section fields, plain keys for
                top-level fields

        Returns:
            New LooseXMLConfig instance with overrides applied

        Example:
            >>> config = LooseXMLConfig().override(format__indent=2)
            >>> config.format.indent
            2
        """
        nested_overrides: Dict[str, Dict[str, Any]] = {}
        top_level: Dict[str, Any] = {}
        for key, value in kwargs.items():
            if "__" in key:
                section, field_name = key.split("__", 1)
                if section not in _SECTIONS:
                    raise ConfigValidationError(
                        f"Unknown configuration section: {section}",
                        field_name=key,
                        suggestions=list(_SECTIONS),
                    )
                nested_overrides.setdefault(section, {})[field_name] = value
            else:
                top_level[key] = value

        new_fields: Dict[str, Any] = dict(top_level)
        for section, values in nested_overrides.items():
            try:
                new_fields[section] = replace(getattr(self, section), **values)
            except TypeError as e:
                raise ConfigValidationError(str(e), field_name=section) from e

        return replace(self, **new_fields)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        return {
            "parser": {
                "map_strategy": self.parser.map_strategy.name,
                "max_depth": self.parser.max_depth,
            },
            "format": {
                "indent": self.format.indent,
                "line_separator": self.format.line_separator,
                "self_close": self.format.self_close,
            },
            "logging": {
                "level": self.logging.level,
                "correlation_id": self.logging.correlation_id,
            },
            "name": self.name,
        }

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LooseXMLConfig":
        """Create configuration from dictionary.

        Missing sections and fields keep their defaults.
        """
        parser_data = dict(data.get("parser") or {})
        strategy = parser_data.get("map_strategy")
        if isinstance(strategy, str):
            try:
                parser_data["map_strategy"] = MapStrategy[strategy.upper()]
            except KeyError as e:
                raise ConfigValidationError(
                    f"Unknown map strategy: {strategy}",
                    field_name="parser.map_strategy",
                    suggestions=[member.name for member in MapStrategy],
                ) from e

        try:
            return cls(
                parser=ParserConfig(**parser_data),
                format=FormatConfig(**(data.get("format") or {})),
                logging=LoggingConfig(**(data.get("logging") or {})),
                name=data.get("name"),
            )
        except TypeError as e:
            raise ConfigValidationError(f"Invalid configuration: {e}") from e

    @classmethod
    def from_json(cls, json_str: str) -> "LooseXMLConfig":
        """Create configuration from JSON string."""
        return cls.from_dict(json.loads(json_str))

    # Preset factory methods
    @classmethod
    def default(cls) -> "LooseXMLConfig":
        """Ordered attributes, four-space indentation."""
        return cls(name="default")

    @classmethod
    def fast(cls) -> "LooseXMLConfig":
        """Hash-ordered attributes, for callers that must not rely on attribute order."""
        return cls(parser=ParserConfig(map_strategy=MapStrategy.HASHED), name="fast")

    @classmethod
    def compact(cls) -> "LooseXMLConfig":
        """Single-line output without indentation."""
        return cls(
            format=FormatConfig(indent=0, line_separator=""),
            name="compact",
        )
