"""Exception hierarchy for the commglass engine.

The engine itself has no recoverable error paths: facet values are enums
and toggling an absent value is a set no-op. These exceptions cover the
edges where untyped input enters (CLI arguments, YAML files).
"""

from typing import Any, Iterable, Optional


class CommGlassError(Exception):
    """Base class for all commglass errors."""


class UnknownFacetValueError(CommGlassError, ValueError):
    """Raised when a string does not name a member of a facet enum."""

    def __init__(self, facet: str, value: Any, choices: Iterable[str] = ()):
        self.facet = facet
        self.value = value
        self.choices = list(choices)
        message = f"Unknown {facet} value: {value!r}"
        if self.choices:
            message += f" (expected one of: {', '.join(self.choices)})"
        super().__init__(message)


class UnknownPresetError(CommGlassError, KeyError):
    """Raised when a filter preset name cannot be resolved."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(name)

    def __str__(self) -> str:
        return f"No filter preset named {self.name!r}"


class DatasetError(CommGlassError):
    """Raised when a content dataset file cannot be loaded."""

    def __init__(self, message: str, index: Optional[int] = None):
        self.index = index
        if index is not None:
            message = f"record {index}: {message}"
        super().__init__(message)


class ConfigError(CommGlassError):
    """Raised when a configuration file is unreadable or invalid."""
