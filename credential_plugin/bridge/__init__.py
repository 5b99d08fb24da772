"""Runtime bridge to the generated Google Credential Manager module."""

from .provider import NativeModuleProvider, RegistryModuleProvider
from .signin import (
    GoogleSignInBridge,
    GoogleSignInError,
    NativeModuleNotFoundError,
    UnsupportedPlatformBridge,
    UnsupportedPlatformError,
    create_bridge,
    is_cancellation,
)

__all__ = [
    "NativeModuleProvider",
    "RegistryModuleProvider",
    "GoogleSignInBridge",
    "GoogleSignInError",
    "NativeModuleNotFoundError",
    "UnsupportedPlatformBridge",
    "UnsupportedPlatformError",
    "create_bridge",
    "is_cancellation",
]
