"""
Custom exception hierarchy for credential_plugin.

All exceptions inherit from PluginError to enable consistent error handling
across the prebuild pipeline and the runtime bridge. Each exception type
includes context for debugging and logging.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class PluginError(Exception):
    """Base exception for all credential_plugin errors."""

    message: str
    context: dict[str, Any] = field(default_factory=dict)
    cause: Exception | None = None

    def __str__(self) -> str:
        ctx = f" | context: {self.context}" if self.context else ""
        cause = f" | caused by: {self.cause}" if self.cause else ""
        return f"{self.message}{ctx}{cause}"


@dataclass
class ValidationError(PluginError):
    """Raised when input validation fails."""

    field_name: str | None = None
    actual_value: Any = None

    def __str__(self) -> str:
        base = super().__str__()
        if self.field_name:
            return f"Validation failed for '{self.field_name}': {base}"
        return f"Validation failed: {base}"


@dataclass
class StructuralMismatchError(PluginError):
    """Raised when an expected anchor or pattern is absent from a target file.

    The host file is assumed to have a known shape; a missing anchor means it
    is incompatible or was edited by hand.
    """

    path: str = ""
    anchor: str = ""

    def __str__(self) -> str:
        return f"Structural mismatch in '{self.path}': {self.message} | anchor: {self.anchor!r}"


@dataclass
class StorageError(PluginError):
    """Raised when a project file cannot be read or written."""

    key: str = ""
    operation: str = ""

    def __str__(self) -> str:
        base = super().__str__()
        return f"[storage.{self.operation}] '{self.key}': {base}"


@dataclass
class PipelineError(PluginError):
    """Raised when the mutation pipeline aborts."""

    step: str = ""
    run_id: str = ""

    def __str__(self) -> str:
        base = super().__str__()
        return f"Pipeline error at step '{self.step}' (run: {self.run_id}): {base}"
