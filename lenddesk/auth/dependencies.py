"""Auth domain dependencies.

get_current_user plus the role-gated variants, and their Annotated
aliases for injection into routes.
"""

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlmodel import select

from lenddesk.auth.exceptions import (
    InvalidCredentialsError,
    InvalidTokenError,
    SessionCookieError,
)
from lenddesk.auth.permissions import ensure_account_access, ensure_admin, ensure_staff
from lenddesk.auth.service import FirebaseAuthService, get_firebase_auth_service
from lenddesk.core.deps import SessionDep
from lenddesk.core.exceptions import AppException
from lenddesk.user.exceptions import UserNotFoundError
from lenddesk.user.models import User

SESSION_COOKIE_NAME = "session"

security = HTTPBearer(auto_error=False)

FirebaseAuthDep = Annotated[FirebaseAuthService, Depends(get_firebase_auth_service)]


def get_current_user(
    request: Request,
    session: SessionDep,
    firebase_auth: FirebaseAuthDep,
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(security)
    ] = None,
) -> User:
    """Verify Firebase authentication and return the local User.

    Two authentication methods, in priority order:
    1. Session cookie (web clients)
    2. Bearer ID token (API clients)

    Raises:
        InvalidTokenError: If the cookie or token does not verify
        InvalidCredentialsError: If no credentials were sent
        UserNotFoundError: If no local user matches the Firebase UID
        AccountAccessError: If the account is inactive, pending or rejected
    """
    external_id: str | None = None

    session_cookie = request.cookies.get(SESSION_COOKIE_NAME)
    if session_cookie:
        try:
            claims = firebase_auth.verify_session_cookie(
                session_cookie, check_revoked=True
            )
            external_id = claims.uid
        except SessionCookieError as e:
            raise InvalidTokenError() from e

    if external_id is None and credentials is not None:
        try:
            claims = firebase_auth.verify_id_token(credentials.credentials)
            external_id = claims.uid
        except AppException as e:
            raise InvalidTokenError() from e

    if not external_id:
        raise InvalidCredentialsError("Not authenticated")

    user = session.exec(select(User).where(User.external_id == external_id)).first()
    if user is None:
        raise UserNotFoundError()

    ensure_account_access(user)
    return user


CurrentUserDep = Annotated[User, Depends(get_current_user)]


def require_auth(_user: CurrentUserDep) -> None:
    """Require authentication without injecting the user.

    Use as a router-level dependency:
        router = APIRouter(dependencies=[Depends(require_auth)])
    """


def get_staff_user(user: CurrentUserDep) -> User:
    """Current user, provided they are an admin or editor."""
    ensure_staff(user)
    return user


StaffUserDep = Annotated[User, Depends(get_staff_user)]


def require_staff(_user: StaffUserDep) -> None:
    """Require an admin or editor without injecting the user."""


def get_admin_user(user: CurrentUserDep) -> User:
    """Current user, provided they are an admin."""
    ensure_admin(user)
    return user


AdminUserDep = Annotated[User, Depends(get_admin_user)]


def require_admin(_user: AdminUserDep) -> None:
    """Require admin privileges without injecting the user."""
