"""Storage abstraction for credential_plugin."""

from .interface import ProjectStorage
from .local import LocalProjectStorage

__all__ = ["ProjectStorage", "LocalProjectStorage"]
