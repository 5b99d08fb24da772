"""Kotlin source templates for the generated native module."""

from .service import (
    MODULE_CLASS_NAME,
    PACKAGE_CLASS_NAME,
    generate_module_source,
    generate_package_source,
    generate_sources,
)

__all__ = [
    "MODULE_CLASS_NAME",
    "PACKAGE_CLASS_NAME",
    "generate_module_source",
    "generate_package_source",
    "generate_sources",
]
