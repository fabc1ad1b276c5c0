"""Firebase Authentication Service.

Wraps the Firebase Admin SDK and the Identity Toolkit REST API. Passwords
never touch our database: Firebase owns credentials, we own the profile.
"""

import contextlib
import logging
import re
from dataclasses import dataclass
from datetime import timedelta
from functools import lru_cache
from typing import Any

import httpx
from firebase_admin import auth as firebase_admin_auth
from firebase_admin.exceptions import FirebaseError

from lenddesk.auth.exceptions import (
    InvalidCredentialsError,
    PasswordPolicyError,
    SessionCookieError,
    UserDisabledError,
    WeakPasswordError,
)
from lenddesk.auth.identity_toolkit import (
    IDENTITY_TOOLKIT_ENDPOINTS,
    SignInWithPasswordResponse,
)
from lenddesk.core.exceptions import (
    AppException,
    ProviderError,
    RateLimitError,
    ValidationError,
)
from lenddesk.core.http import get_identity_client
from lenddesk.core.retry import with_retry
from lenddesk.user.exceptions import EmailExistsError

logger = logging.getLogger(__name__)

_INVALID_CREDENTIALS_MESSAGES = {
    "EMAIL_NOT_FOUND",
    "INVALID_PASSWORD",
    "INVALID_LOGIN_CREDENTIALS",
}


@dataclass(frozen=True)
class FirebaseUser:
    """Represents authenticated Firebase user data."""

    uid: str
    email: str | None = None
    id_token: str | None = None


@dataclass(frozen=True)
class TokenClaims:
    """Decoded token claims from Firebase."""

    uid: str
    email: str | None = None


class FirebaseAuthService:
    """Firebase Authentication Service implementation.

    Handles:
    - Email/password sign-in via Identity Toolkit REST API
    - Session cookie creation and verification
    - ID token verification
    - Account creation and rollback deletion
    """

    def __init__(
        self,
        api_key: str | None,
        identity_toolkit_base_url: str = "https://identitytoolkit.googleapis.com",
    ):
        self._api_key = api_key
        self._identity_toolkit_base_url = identity_toolkit_base_url

    def _ensure_api_key(self) -> str:
        if not self._api_key:
            raise AppException("Firebase API key not configured")
        return self._api_key

    async def _make_identity_toolkit_request(
        self, endpoint: str, payload: dict[str, Any], *, retry: bool = False
    ) -> dict[str, Any]:
        """POST to Identity Toolkit and return the decoded body.

        Raises:
            InvalidCredentialsError: If email/password invalid
            UserDisabledError: If user account is disabled
            RateLimitError: If rate limit exceeded
            ProviderError: If upstream is unreachable or answers unexpectedly
        """
        api_key = self._ensure_api_key()
        url = f"{self._identity_toolkit_base_url}/{endpoint}?key={api_key}"
        client = get_identity_client()

        async def do_request() -> httpx.Response:
            return await client.post(url, json=payload)

        # attempts=1 still routes transport errors through the same handling
        try:
            response = await with_retry(
                do_request,
                attempts=2 if retry else 1,
                exceptions=(httpx.RequestError,),
            )
        except httpx.RequestError as e:
            raise ProviderError("Authentication provider unavailable") from e

        if response.status_code != 200:
            self._handle_identity_toolkit_error(response)

        return response.json()

    @staticmethod
    def _parse_retry_after(value: str | None) -> int | None:
        """Parse Retry-After header into seconds."""
        if not value:
            return None
        with contextlib.suppress(ValueError):
            parsed = int(value)
            if parsed >= 0:
                return parsed
        return None

    def _raise_rate_limit_error(
        self, response: httpx.Response, cause: BaseException | None = None
    ) -> None:
        retry_after = self._parse_retry_after(response.headers.get("Retry-After"))
        error = RateLimitError(
            "Too many attempts, try again later", retry_after=retry_after
        )
        if cause:
            raise error from cause
        raise error

    @staticmethod
    def _sanitize_error_code(error_message: str) -> str:
        """Extract a safe, non-sensitive error code for logging."""
        match = re.match(r"[A-Z0-9_]+", error_message)
        return match.group(0) if match else "UNKNOWN"

    @staticmethod
    def _extract_password_requirements(error_message: str) -> list[str]:
        match = re.search(r"Missing password requirements: \[([^\]]+)\]", error_message)
        if match:
            return [req.strip() for req in match.group(1).split(",")]
        return []

    def _handle_identity_toolkit_error(self, response: httpx.Response) -> None:
        """Map an Identity Toolkit error body to an application exception."""
        try:
            error_data = response.json()
            error_message = error_data.get("error", {}).get("message", "Unknown error")
        except ValueError as e:
            if response.status_code == 429:
                self._raise_rate_limit_error(response, cause=e)
            raise ProviderError(
                "Authentication provider returned an invalid response"
            ) from e

        logger.info(
            "Identity Toolkit error: status=%s, code=%s",
            response.status_code,
            self._sanitize_error_code(error_message),
        )

        if response.status_code == 429:
            self._raise_rate_limit_error(response)

        if error_message in _INVALID_CREDENTIALS_MESSAGES:
            raise InvalidCredentialsError("Invalid email or password")

        if error_message == "USER_DISABLED":
            raise UserDisabledError("User account is disabled")

        if error_message == "TOO_MANY_ATTEMPTS_TRY_LATER":
            self._raise_rate_limit_error(response)

        # More specific than WEAK_PASSWORD, check first
        if "PASSWORD_DOES_NOT_MEET_REQUIREMENTS" in error_message:
            raise PasswordPolicyError(
                "Password does not meet requirements",
                requirements=self._extract_password_requirements(error_message),
            )

        if "WEAK_PASSWORD" in error_message:
            raise WeakPasswordError("Password is too weak")

        if "TOKEN_EXPIRED" in error_message or "INVALID_ID_TOKEN" in error_message:
            raise InvalidCredentialsError("Session expired, please login again")

        if response.status_code in {400, 401, 403}:
            raise InvalidCredentialsError("Authentication failed")

        raise ProviderError(f"Authentication failed: {error_message}")

    async def sign_in_with_email_password(
        self, email: str, password: str
    ) -> FirebaseUser:
        """Authenticate user with email/password via Identity Toolkit.

        Raises:
            InvalidCredentialsError: If email/password invalid
            UserDisabledError: If user account is disabled
            RateLimitError: If rate limit exceeded
            ProviderError: If upstream returns unexpected response
        """
        data: SignInWithPasswordResponse = await self._make_identity_toolkit_request(
            endpoint=IDENTITY_TOOLKIT_ENDPOINTS["signInWithPassword"],
            payload={
                "email": email,
                "password": password,
                "returnSecureToken": True,
            },
            retry=True,
        )

        id_token = data.get("idToken")
        uid = data.get("localId")

        if not id_token or not uid:
            raise InvalidCredentialsError("Authentication failed")

        return FirebaseUser(uid=uid, email=data.get("email"), id_token=id_token)

    def create_session_cookie(self, id_token: str, expires_in: timedelta) -> str:
        """Create a session cookie from ID token (1 day to 2 weeks)."""
        try:
            return firebase_admin_auth.create_session_cookie(
                id_token, expires_in=expires_in
            )
        except (ValueError, FirebaseError) as e:
            raise SessionCookieError("Failed to create session cookie") from e

    @staticmethod
    def _extract_token_claims(
        decoded: dict[str, Any], allow_sub: bool = False
    ) -> TokenClaims:
        uid = decoded.get("uid")
        if allow_sub and not uid:
            uid = decoded.get("sub")

        if not uid:
            raise AppException("Invalid token: missing uid")

        return TokenClaims(uid=uid, email=decoded.get("email"))

    def verify_session_cookie(
        self, session_cookie: str, check_revoked: bool = True
    ) -> TokenClaims:
        """Verify session cookie and return claims.

        Raises:
            SessionCookieError: If verification fails
        """
        try:
            decoded = firebase_admin_auth.verify_session_cookie(
                session_cookie, check_revoked=check_revoked
            )
            return self._extract_token_claims(decoded, allow_sub=True)
        except (ValueError, FirebaseError) as e:
            raise SessionCookieError("Invalid session cookie") from e
        except AppException as e:
            raise SessionCookieError(str(e)) from e

    def verify_id_token(self, id_token: str) -> TokenClaims:
        """Verify ID token and return claims."""
        try:
            decoded = firebase_admin_auth.verify_id_token(id_token)
            return self._extract_token_claims(decoded, allow_sub=False)
        except (ValueError, FirebaseError) as e:
            raise AppException("Invalid ID token") from e

    def revoke_refresh_tokens(self, uid: str) -> None:
        """Revoke all refresh tokens for a user (best-effort)."""
        try:
            firebase_admin_auth.revoke_refresh_tokens(uid)
        except FirebaseError as e:
            logger.warning("Failed to revoke refresh tokens: %s", e)

    def logout(self, session_cookie: str) -> None:
        """Revoke the refresh tokens behind a session cookie.

        An invalid cookie means the user is already logged out.
        Cookie clearing happens at the router level.
        """
        try:
            claims = self.verify_session_cookie(session_cookie, check_revoked=False)
        except SessionCookieError:
            return
        self.revoke_refresh_tokens(claims.uid)

    def create_user(self, email: str, password: str) -> FirebaseUser:
        """Create a new Firebase user.

        Raises:
            EmailExistsError: If email already registered
            WeakPasswordError: If password doesn't meet requirements
            PasswordPolicyError: If password doesn't meet policy requirements
            AppException: For other Firebase errors
        """
        try:
            firebase_user = firebase_admin_auth.create_user(
                email=email, password=password
            )
        except FirebaseError as e:
            error_message = str(e)
            error_code = getattr(e, "code", None) or ""

            if "PASSWORD_DOES_NOT_MEET_REQUIREMENTS" in error_message:
                raise PasswordPolicyError(
                    "Password does not meet requirements",
                    requirements=self._extract_password_requirements(error_message),
                ) from e
            if "EMAIL_EXISTS" in error_message or error_code == "ALREADY_EXISTS":
                raise EmailExistsError("Email already registered") from e
            if "EMAIL_ALREADY_EXISTS" in error_message:
                raise EmailExistsError("Email already registered") from e
            if "WEAK_PASSWORD" in error_message or "INVALID_PASSWORD" in error_message:
                raise WeakPasswordError("Password is too weak") from e
            raise AppException("Failed to create user") from e
        except ValueError as e:
            # The SDK validates arguments locally before calling Firebase
            raise WeakPasswordError(str(e)) from e

        return FirebaseUser(uid=firebase_user.uid, email=email)

    def update_email(self, uid: str, email: str) -> None:
        """Change the sign-in email of a Firebase user.

        Raises:
            EmailExistsError: If another Firebase account owns the email
            AppException: For other Firebase errors
        """
        try:
            firebase_admin_auth.update_user(uid, email=email)
        except FirebaseError as e:
            error_message = str(e)
            if (
                "EMAIL_EXISTS" in error_message
                or "EMAIL_ALREADY_EXISTS" in error_message
                or getattr(e, "code", None) == "ALREADY_EXISTS"
            ):
                raise EmailExistsError("Email already in use") from e
            raise AppException("Failed to update user email") from e
        except ValueError as e:
            raise ValidationError(str(e)) from e

    def delete_user(self, uid: str) -> None:
        """Delete a Firebase user. Used for rollback, so errors are only logged."""
        try:
            firebase_admin_auth.delete_user(uid)
        except FirebaseError as e:
            logger.warning("Failed to delete Firebase user during rollback: %s", e)


@lru_cache
def get_firebase_auth_service() -> FirebaseAuthService:
    """Get cached Firebase Auth Service instance."""
    from lenddesk.core.settings import get_settings

    settings = get_settings()
    return FirebaseAuthService(
        api_key=settings.firebase_api_key,
        identity_toolkit_base_url=settings.identity_toolkit_base_url,
    )
