"""Orchestration module for credential_plugin."""

from .pipeline import (
    STEP_DEPENDENCIES,
    STEP_GENERATE_FILES,
    STEP_REGISTRATION,
    MutationContext,
    MutationPipeline,
)
from .plugin import load_project_config, resolve_android_package, with_google_credential_manager

__all__ = [
    "STEP_DEPENDENCIES",
    "STEP_GENERATE_FILES",
    "STEP_REGISTRATION",
    "MutationContext",
    "MutationPipeline",
    "load_project_config",
    "resolve_android_package",
    "with_google_credential_manager",
]
