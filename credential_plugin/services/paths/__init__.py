"""Package-to-path mapping and target resolution."""

from .service import resolve_targets, to_path, validate_package_identifier

__all__ = ["resolve_targets", "to_path", "validate_package_identifier"]
