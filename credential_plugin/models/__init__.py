"""
credential_plugin Data Models.

Pydantic models describing the project files the prebuild touches and the
payloads exchanged with the generated native module at runtime.
"""

from .bridge import GoogleSignInErrorCode, GoogleSignInResult
from .project import (
    AndroidSection,
    GeneratedFile,
    GradleDependency,
    ModRequest,
    PatchTarget,
    PluginProps,
    ProjectConfig,
    ProjectTargets,
)

__all__ = [
    "GoogleSignInErrorCode",
    "GoogleSignInResult",
    "AndroidSection",
    "GeneratedFile",
    "GradleDependency",
    "ModRequest",
    "PatchTarget",
    "PluginProps",
    "ProjectConfig",
    "ProjectTargets",
]
