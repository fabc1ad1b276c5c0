"""Auth domain router.

Registration, login, logout and the current-user endpoint. Credentials
live in Firebase; the local `users` row carries role and approval state.
"""

import logging

from fastapi import APIRouter, Request, Response, status
from sqlmodel import select

from lenddesk.auth.dependencies import (
    SESSION_COOKIE_NAME,
    CurrentUserDep,
    FirebaseAuthDep,
)
from lenddesk.auth.exceptions import InvalidCredentialsError
from lenddesk.auth.permissions import ensure_account_access
from lenddesk.auth.schemas import AuthMessage, AuthRegister, EmailPasswordLoginRequest
from lenddesk.core.constants import CommonResponses, Routes
from lenddesk.core.deps import SessionDep, SettingsDep
from lenddesk.core.exceptions import InternalError
from lenddesk.user.exceptions import EmailExistsError, UsernameExistsError
from lenddesk.user.models import ApprovalStatus, User, initial_approval_status
from lenddesk.user.schemas import UserRead, UserResponse

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix=Routes.AUTH.prefix,
    tags=[Routes.AUTH.tag],
    responses={**CommonResponses.BAD_REQUEST},
)


@router.post(
    "/register",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses={**CommonResponses.CONFLICT},
)
async def register(
    register_data: AuthRegister,
    session: SessionDep,
    firebase_auth: FirebaseAuthDep,
):
    """Register a new account.

    Viewers are approved immediately; editor and admin signups wait for
    a staff member to approve them.
    """
    if session.exec(select(User).where(User.email == register_data.email)).first():
        raise EmailExistsError()
    if session.exec(
        select(User).where(User.username == register_data.username)
    ).first():
        raise UsernameExistsError()

    firebase_user = firebase_auth.create_user(
        email=register_data.email,
        password=register_data.password,
    )

    user = User(
        external_id=firebase_user.uid,
        **register_data.model_dump(exclude={"password"}),
        approval_status=initial_approval_status(register_data.role),
    )
    try:
        session.add(user)
        session.commit()
        session.refresh(user)
    except Exception as e:
        session.rollback()
        firebase_auth.delete_user(firebase_user.uid)
        raise InternalError("Failed to create user") from e

    logger.info(
        "User registered: role=%s approval_status=%s",
        user.role.value,
        user.approval_status.value,
        extra={"user_id": user.id},
    )

    if user.approval_status == ApprovalStatus.pending:
        message = "Account created successfully. Please wait for admin approval."
    else:
        message = "Account created successfully."
    return UserResponse(message=message, user=UserRead.model_validate(user))


@router.post(
    "/login",
    response_model=UserResponse,
    responses={**CommonResponses.UNAUTHORIZED, **CommonResponses.FORBIDDEN},
)
async def login(
    payload: EmailPasswordLoginRequest,
    response: Response,
    session: SessionDep,
    firebase_auth: FirebaseAuthDep,
    settings: SettingsDep,
):
    """Login with email/password and set the Firebase session cookie.

    Inactive, pending and rejected accounts are refused with 403 before
    any cookie is issued.
    """
    firebase_user = await firebase_auth.sign_in_with_email_password(
        email=payload.email,
        password=payload.password,
    )

    user = session.exec(
        select(User).where(User.external_id == firebase_user.uid)
    ).first()
    if user is None:
        raise InvalidCredentialsError("Invalid email or password")

    ensure_account_access(user)

    session_cookie = firebase_auth.create_session_cookie(
        firebase_user.id_token,
        expires_in=settings.session_expires_in,
    )
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=session_cookie,
        max_age=int(settings.session_expires_in.total_seconds()),
        httponly=True,
        secure=settings.is_secure_cookie,
        samesite="lax",
    )

    logger.info("User logged in", extra={"user_id": user.id})
    return UserResponse(message="Login successful", user=UserRead.model_validate(user))


@router.post(
    "/logout",
    response_model=AuthMessage,
    responses={**CommonResponses.UNAUTHORIZED},
)
async def logout(
    request: Request,
    response: Response,
    firebase_auth: FirebaseAuthDep,
):
    """Clear the session cookie and revoke refresh tokens (best-effort)."""
    session_cookie = request.cookies.get(SESSION_COOKIE_NAME)
    if not session_cookie:
        raise InvalidCredentialsError("Not authenticated")

    response.delete_cookie(key=SESSION_COOKIE_NAME)
    firebase_auth.logout(session_cookie)

    return AuthMessage(message="Logout successful")


@router.get(
    "/me",
    response_model=UserResponse,
    responses={**CommonResponses.UNAUTHORIZED, **CommonResponses.FORBIDDEN},
)
async def me(user: CurrentUserDep):
    """Return the authenticated user."""
    return UserResponse(message="Current user", user=UserRead.model_validate(user))
