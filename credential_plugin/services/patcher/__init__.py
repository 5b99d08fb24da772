"""Idempotent text patches for build.gradle and MainApplication.kt."""

from .service import (
    CREDENTIAL_DEPENDENCIES,
    DEPENDENCY_ANCHOR,
    DEPENDENCY_MARKER,
    REGISTRATION_MARKER,
    PatchResult,
    apply_dependency_patch,
    apply_registration_patch,
    build_patch_targets,
)

__all__ = [
    "CREDENTIAL_DEPENDENCIES",
    "DEPENDENCY_ANCHOR",
    "DEPENDENCY_MARKER",
    "REGISTRATION_MARKER",
    "PatchResult",
    "apply_dependency_patch",
    "apply_registration_patch",
    "build_patch_targets",
]
