"""Core infrastructure components for credential_plugin."""

from .config import Config, get_config
from .exceptions import (
    PipelineError,
    PluginError,
    StorageError,
    StructuralMismatchError,
    ValidationError,
)
from .logging import get_logger, setup_logging
from .types import MutationResult, PipelineState, StepOutcome, StepStatus

__all__ = [
    "Config",
    "get_config",
    "PluginError",
    "PipelineError",
    "StorageError",
    "StructuralMismatchError",
    "ValidationError",
    "get_logger",
    "setup_logging",
    "MutationResult",
    "PipelineState",
    "StepOutcome",
    "StepStatus",
]
