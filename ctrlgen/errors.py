# File: ctrlgen/errors.py
"""
ctrlgen - Exception hierarchy.

The core never wraps or translates these; they propagate to whoever
drives generation (the orchestrator records them per method, the CLI maps
them to exit codes).
"""

from __future__ import annotations


class CtrlgenError(Exception):
    """Base class for every error raised by ctrlgen."""


class ReflectionError(CtrlgenError):
    """A model's (or a method's) type metadata cannot be introspected."""


class UnknownMethodError(CtrlgenError, KeyError):
    """No controller method is registered under the requested name."""

    def __init__(self, name: str, api: bool) -> None:
        self.name: str = name
        self.api: bool = api
        kind: str = "API" if api else "web"
        super().__init__(f"Unknown {kind} controller method: '{name}'.")

    def __str__(self) -> str:
        return self.args[0]


class ConfigError(CtrlgenError, ValueError):
    """Configuration could not be loaded or failed validation."""
