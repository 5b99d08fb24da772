"""Services package for credential_plugin."""

from .paths import resolve_targets, to_path, validate_package_identifier
from .patcher import PatchResult, apply_dependency_patch, apply_registration_patch
from .templates import generate_module_source, generate_package_source, generate_sources

__all__ = [
    "resolve_targets",
    "to_path",
    "validate_package_identifier",
    "PatchResult",
    "apply_dependency_patch",
    "apply_registration_patch",
    "generate_module_source",
    "generate_package_source",
    "generate_sources",
]
