"""
Google Sign-In runtime bridge.

Calls the generated GoogleCredentialModule through a NativeModuleProvider.
A cancelled sign-in is reported as ``None``; every other rejection reaches the
caller unchanged with its error code.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..core.exceptions import PluginError
from ..core.logging import get_logger
from ..models.bridge import GoogleSignInErrorCode, GoogleSignInResult
from ..services.templates import MODULE_CLASS_NAME
from .provider import NativeModuleProvider

logger = get_logger(__name__)


@dataclass
class GoogleSignInError(PluginError):
    """Rejection from the native module, tagged with a stable code."""

    code: GoogleSignInErrorCode = GoogleSignInErrorCode.UNKNOWN_ERROR

    def __str__(self) -> str:
        return f"[{self.code.value}] {super().__str__()}"


@dataclass
class NativeModuleNotFoundError(PluginError):
    """Raised when the generated module is not linked into the app."""

    module_name: str = MODULE_CLASS_NAME


@dataclass
class UnsupportedPlatformError(PluginError):
    """Raised when sign-in is requested on a platform without the module."""

    platform: str = ""


def is_cancellation(error: BaseException) -> bool:
    """Whether a rejection means the user dismissed the sign-in sheet."""
    return getattr(error, "code", None) == GoogleSignInErrorCode.SIGN_IN_CANCELLED


class GoogleSignInBridge:
    """Android bridge to the Credential Manager native module."""

    def __init__(self, provider: NativeModuleProvider) -> None:
        self.provider = provider

    def is_available(self) -> bool:
        """True when the native module is linked."""
        return self.provider.get(MODULE_CLASS_NAME) is not None

    async def sign_in(self, web_client_id: str) -> GoogleSignInResult | None:
        """Sign in with Google using the Credential Manager.

        Args:
            web_client_id: OAuth client id of type "Web application".

        Returns:
            The credential with a nonce-bound ID token, or None if the user
            cancelled.

        Raises:
            NativeModuleNotFoundError: If the module is not linked; run the
                prebuild after adding the plugin.
            GoogleSignInError: Any non-cancellation rejection, unchanged.
        """
        module = self.provider.get(MODULE_CLASS_NAME)
        if module is None:
            raise NativeModuleNotFoundError(
                message=(
                    f"{MODULE_CLASS_NAME} native module not found. "
                    "Make sure the prebuild ran after adding the plugin."
                )
            )

        try:
            payload: Any = await module.signIn(web_client_id)
        except Exception as e:
            if is_cancellation(e):
                logger.info("Sign-in cancelled by user")
                return None
            raise

        if isinstance(payload, GoogleSignInResult):
            return payload
        return GoogleSignInResult.model_validate(payload)


class UnsupportedPlatformBridge:
    """Stand-in bridge for targets the module is not generated for."""

    def __init__(self, platform: str) -> None:
        self.platform = platform

    def is_available(self) -> bool:
        return False

    async def sign_in(self, web_client_id: str) -> GoogleSignInResult | None:
        raise UnsupportedPlatformError(
            message=f"Google Sign-In via Credential Manager is only available on Android, not {self.platform}",
            platform=self.platform,
        )


def create_bridge(
    platform: str,
    provider: NativeModuleProvider,
) -> GoogleSignInBridge | UnsupportedPlatformBridge:
    """Select the bridge variant for the configured target platform."""
    if platform == "android":
        return GoogleSignInBridge(provider)
    return UnsupportedPlatformBridge(platform)
