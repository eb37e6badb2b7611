"""
Error types for prismafill.

Parsing is best-effort and never raises; these cover the failures that do
stop a command: missing schema sources, bad configuration and an
unreachable store.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


class PrismafillError(Exception):
    """Base exception for all prismafill errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class ConfigError(PrismafillError):
    """
    Raised when command configuration cannot be resolved.

    Examples:
    - Database name missing from both the option and the connection string
    - Unreadable prismafill.toml
    """

    pass


class SchemaDiscoveryError(PrismafillError):
    """
    Raised when no schema sources can be loaded.

    Examples:
    - Schema directory does not exist
    - No .prisma files below the schema directory
    """

    pass


class StoreConnectionError(PrismafillError):
    """Raised when the MongoDB server cannot be reached or rejects the client."""

    pass


@dataclass
class ErrorContext:
    """
    Where an error happened.

    Attributes:
        path: File or directory involved
    """

    path: Path | None = None

    def format(self) -> str:
        return str(self.path) if self.path is not None else ""
