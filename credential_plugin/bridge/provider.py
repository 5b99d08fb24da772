"""
Native module providers.

The bridge never reaches into a process-wide registry itself; it asks a
provider for the module by name.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any


class NativeModuleProvider(ABC):
    """Looks up native bridge objects by name."""

    @abstractmethod
    def get(self, name: str) -> Any | None:
        """Return the module registered under name, or None."""
        ...


class RegistryModuleProvider(NativeModuleProvider):
    """Provider backed by the host application's module registry."""

    def __init__(self, registry: Mapping[str, Any]) -> None:
        self.registry = registry

    def get(self, name: str) -> Any | None:
        return self.registry.get(name)
