"""
Runtime bridge data models.

Shapes exchanged with the generated GoogleCredentialModule at app runtime.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class GoogleSignInErrorCode(str, Enum):
    """Error codes the native module rejects with."""

    SIGN_IN_CANCELLED = "SIGN_IN_CANCELLED"
    NO_CREDENTIAL = "NO_CREDENTIAL"
    CREDENTIAL_ERROR = "CREDENTIAL_ERROR"
    PARSE_ERROR = "PARSE_ERROR"
    INVALID_CREDENTIAL_TYPE = "INVALID_CREDENTIAL_TYPE"
    INVALID_CREDENTIAL = "INVALID_CREDENTIAL"
    NO_ACTIVITY = "NO_ACTIVITY"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class GoogleSignInResult(BaseModel):
    """Result from a successful Google Sign-In.

    The ID token carries the request nonce and can be exchanged server-side.
    """

    id_token: str = Field(alias="idToken", description="Nonce-bound Google ID token")
    id: str = Field(description="Google account id (email)")
    display_name: str | None = Field(default=None, alias="displayName")
    given_name: str | None = Field(default=None, alias="givenName")
    family_name: str | None = Field(default=None, alias="familyName")
    profile_picture_uri: str | None = Field(default=None, alias="profilePictureUri")

    model_config = ConfigDict(populate_by_name=True)
