"""User domain router.

Self-service profile updates plus the staff-facing account listing,
review (approve/reject) and admin editing routes.
"""

import uuid

from fastapi import APIRouter, Depends

from lenddesk.auth.dependencies import (
    CurrentUserDep,
    FirebaseAuthDep,
    StaffUserDep,
    require_admin,
    require_auth,
    require_staff,
)
from lenddesk.core.constants import CommonResponses, Routes
from lenddesk.core.deps import SessionDep
from lenddesk.core.pagination import PageParamsDep
from lenddesk.user.models import ApprovalStatus
from lenddesk.user.schemas import (
    UserListResponse,
    UserRead,
    UserResponse,
    UserUpdate,
    UserUpdateMe,
)
from lenddesk.user.service import (
    ensure_unique_identity,
    get_user_or_404,
    list_users,
    review_account,
)

router = APIRouter(
    prefix=Routes.USER.prefix,
    tags=[Routes.USER.tag],
    dependencies=[Depends(require_auth)],
    responses={
        **CommonResponses.UNAUTHORIZED,
        **CommonResponses.FORBIDDEN,
    },
)


@router.patch("/me", response_model=UserResponse)
async def update_me(
    user: CurrentUserDep, user_update: UserUpdateMe, session: SessionDep
):
    """Update the current user's profile.

    Only name and contact fields; email, username, role and account
    state are not self-service.
    """
    # null means unchanged; every column here is NOT NULL
    for key, value in user_update.model_dump(
        exclude_unset=True, exclude_none=True
    ).items():
        setattr(user, key, value)
    session.add(user)
    session.commit()
    session.refresh(user)
    return UserResponse(
        message="Profile updated successfully", user=UserRead.model_validate(user)
    )


@router.get(
    "/", response_model=UserListResponse, dependencies=[Depends(require_staff)]
)
async def get_users(session: SessionDep, params: PageParamsDep):
    """List all users, newest first. Staff only."""
    users, meta = list_users(session, params)
    return UserListResponse(
        message="Users retrieved successfully",
        users=[UserRead.model_validate(u) for u in users],
        **meta.model_dump(),
    )


@router.get(
    "/pending",
    response_model=UserListResponse,
    dependencies=[Depends(require_staff)],
)
async def get_pending_users(session: SessionDep, params: PageParamsDep):
    """List accounts awaiting review. Staff only."""
    users, meta = list_users(session, params, approval_status=ApprovalStatus.pending)
    return UserListResponse(
        message="Pending users retrieved successfully",
        users=[UserRead.model_validate(u) for u in users],
        **meta.model_dump(),
    )


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    dependencies=[Depends(require_staff)],
    responses={**CommonResponses.NOT_FOUND},
)
async def get_user(user_id: uuid.UUID, session: SessionDep):
    """Get a user by ID. Staff only."""
    user = get_user_or_404(session, user_id)
    return UserResponse(
        message="User retrieved successfully", user=UserRead.model_validate(user)
    )


@router.patch(
    "/{user_id}",
    response_model=UserResponse,
    dependencies=[Depends(require_admin)],
    responses={**CommonResponses.NOT_FOUND, **CommonResponses.CONFLICT},
)
async def update_user(
    user_id: uuid.UUID,
    user_update: UserUpdate,
    session: SessionDep,
    firebase_auth: FirebaseAuthDep,
):
    """Update a user by ID. Admin only.

    An email change is pushed to Firebase first so sign-in keeps working
    with the address shown in the profile.
    """
    user = get_user_or_404(session, user_id)
    update_data = user_update.model_dump(exclude_unset=True, exclude_none=True)

    ensure_unique_identity(
        session,
        user,
        email=update_data.get("email"),
        username=update_data.get("username"),
    )
    new_email = update_data.get("email")
    if new_email is not None and new_email != user.email:
        firebase_auth.update_email(user.external_id, new_email)

    for key, value in update_data.items():
        setattr(user, key, value)

    session.add(user)
    session.commit()
    session.refresh(user)
    return UserResponse(
        message="User updated successfully", user=UserRead.model_validate(user)
    )


@router.patch(
    "/{user_id}/approve",
    response_model=UserResponse,
    responses={**CommonResponses.NOT_FOUND, **CommonResponses.BAD_REQUEST},
)
async def approve_user(user_id: uuid.UUID, staff: StaffUserDep, session: SessionDep):
    """Approve a pending account. Staff only."""
    user = review_account(session, user_id, ApprovalStatus.approved, staff)
    return UserResponse(
        message="User approved successfully", user=UserRead.model_validate(user)
    )


@router.patch(
    "/{user_id}/reject",
    response_model=UserResponse,
    responses={**CommonResponses.NOT_FOUND, **CommonResponses.BAD_REQUEST},
)
async def reject_user(user_id: uuid.UUID, staff: StaffUserDep, session: SessionDep):
    """Reject a pending account. Staff only."""
    user = review_account(session, user_id, ApprovalStatus.rejected, staff)
    return UserResponse(
        message="User rejected successfully", user=UserRead.model_validate(user)
    )
