"""Configuration for the XML-subset parser facade.

The combinator engine and grammar take no configuration; these settings
govern how the facade applies them to whole documents.
"""

import json
from dataclasses import dataclass, fields, replace
from enum import Enum, auto
from typing import Any, Dict, List, Optional


class TrailingInputPolicy(Enum):
    """What to do with text left over after the top-level element."""

    REJECT = auto()   # Unconsumed text makes the parse fail
    IGNORE = auto()   # Unconsumed text is returned to the caller


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
    """Immutable settings for document-level parsing.

    Thread-safe due to frozen dataclass implementation.
    """

    trailing_input: TrailingInputPolicy = TrailingInputPolicy.REJECT
    max_input_length: Optional[int] = None
    file_encoding: str = "utf-8"
    preview_length: int = 100
    correlation_id: Optional[str] = None

    # Metadata
    name: Optional[str] = None
    description: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate the configuration."""
        if not isinstance(self.trailing_input, TrailingInputPolicy):
            raise ConfigValidationError(
                f"trailing_input must be a TrailingInputPolicy, got {self.trailing_input!r}",
                field_name="trailing_input",
                suggestions=[policy.name for policy in TrailingInputPolicy],
            )
        if self.max_input_length is not None and self.max_input_length <= 0:
            raise ConfigValidationError(
                "max_input_length must be > 0 or None",
                field_name="max_input_length",
            )
        if self.preview_length < 0:
            raise ConfigValidationError(
                "preview_length must be >= 0",
                field_name="preview_length",
            )
        if not self.file_encoding:
            raise ConfigValidationError(
                "file_encoding cannot be empty",
                field_name="file_encoding",
                suggestions=["utf-8"],
            )

    def override(self, **kwargs: Any) -> "ParserConfig":
        """Create a new configuration with specific overrides.

        Example:
            >>> ParserConfig().override(max_input_length=4096).max_input_length
            4096
        """
        known = {config_field.name for config_field in fields(self)}
        unknown = sorted(set(kwargs) - known)
        if unknown:
            raise ConfigValidationError(
                f"Unknown configuration fields: {', '.join(unknown)}",
                field_name=unknown[0],
                suggestions=sorted(known),
            )
        return replace(self, **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        result: Dict[str, Any] = {}
        for config_field in fields(self):
            value = getattr(self, config_field.name)
            result[config_field.name] = value.name if isinstance(value, Enum) else value
        return result

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParserConfig":
        """Create configuration from dictionary; unknown keys are rejected."""
        values = dict(data)
        policy = values.get("trailing_input")
        if isinstance(policy, str):
            try:
                values["trailing_input"] = TrailingInputPolicy[policy.upper()]
            except KeyError as e:
                raise ConfigValidationError(
                    f"Unknown trailing_input policy: {policy}",
                    field_name="trailing_input",
                    suggestions=[member.name for member in TrailingInputPolicy],
                ) from e
        return cls().override(**values)

    @classmethod
    def from_json(cls, json_str: str) -> "ParserConfig":
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid configuration JSON: {e}") from e
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration JSON must be an object")
        return cls.from_dict(data)

    # Preset factory methods
    @classmethod
    def strict(cls) -> "ParserConfig":
        """Whole-document parsing: anything after the root element is an error."""
        return cls(
            trailing_input=TrailingInputPolicy.REJECT,
            name="strict",
            description="Reject any input left over after the root element",
        )

    @classmethod
    def lenient(cls) -> "ParserConfig":
        """Prefix parsing: leftover input is handed back to the caller."""
        return cls(
            trailing_input=TrailingInputPolicy.IGNORE,
            name="lenient",
            description="Parse the leading element and return the rest unconsumed",
        )
