"""Typed payloads for the Identity Toolkit REST endpoints we call.

https://cloud.google.com/identity-platform/docs/reference/rest/v1/accounts
"""

from typing import TypedDict

IDENTITY_TOOLKIT_ENDPOINTS: dict[str, str] = {
    "signInWithPassword": "v1/accounts:signInWithPassword",
}


class SignInWithPasswordResponse(TypedDict, total=False):
    kind: str
    localId: str  # The UID of the authenticated user
    email: str
    displayName: str
    idToken: str
    registered: bool
    refreshToken: str
    expiresIn: str  # seconds, as a string
