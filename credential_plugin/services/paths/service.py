"""
Path Resolution Service.

Maps an Android package name onto the source tree and resolves the canonical
locations of the files the prebuild touches. Nothing here reads the disk;
callers detect missing files themselves.
"""

from __future__ import annotations

import re
from pathlib import Path

from ...core.exceptions import ValidationError
from ...core.logging import get_logger
from ...models.project import ProjectTargets

logger = get_logger(__name__)

DESCRIPTOR_SUFFIX = ("app", "build.gradle")
SOURCE_ROOT_SUFFIX = ("app", "src", "main", "java")
BOOTSTRAP_FILE_NAME = "MainApplication.kt"

_SEGMENT_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def to_path(package_name: str) -> str:
    """Convert a package name to a relative directory ("com.myapp" -> "com/myapp")."""
    return package_name.replace(".", "/")


def resolve_targets(root: Path, package_name: str) -> ProjectTargets:
    """Resolve the build descriptor, bootstrap file and module directory under root.

    Args:
        root: Native Android project root.
        package_name: Android package of the app.

    Returns:
        ProjectTargets with absolute paths beneath root.
    """
    module_dir = root.joinpath(*SOURCE_ROOT_SUFFIX, to_path(package_name))
    return ProjectTargets(
        root=root,
        descriptor_path=root.joinpath(*DESCRIPTOR_SUFFIX),
        bootstrap_path=module_dir / BOOTSTRAP_FILE_NAME,
        module_dir=module_dir,
    )


def validate_package_identifier(package_name: str | None) -> str:
    """Check a package name before it is embedded into sources and paths.

    Only emptiness is rejected. Segments that are not Java identifiers are
    passed through unchanged with a warning.

    Raises:
        ValidationError: If the name is missing or blank.
    """
    if package_name is None or not package_name.strip():
        raise ValidationError(
            message="Android package must be a non-empty string",
            field_name="androidPackage",
            actual_value=package_name,
        )

    cleaned = package_name.strip()
    odd_segments = [s for s in cleaned.split(".") if not _SEGMENT_PATTERN.match(s)]
    if odd_segments:
        logger.warning(
            "Android package has unconventional segments; embedding verbatim",
            package=cleaned,
            segments=odd_segments,
        )
    return cleaned
