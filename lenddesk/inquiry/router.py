"""Inquiry domain router.

All routes require an authenticated, approved account. Listing everyone's
inquiries, replying, the staff read flag and stats are staff-only.
"""

import logging
import uuid

from fastapi import APIRouter, Depends, status

from lenddesk.auth.dependencies import (
    CurrentUserDep,
    StaffUserDep,
    require_auth,
    require_staff,
)
from lenddesk.core.constants import CommonResponses, Routes
from lenddesk.core.email import send_inquiry_reply_email
from lenddesk.core.pagination import PageParamsDep
from lenddesk.inquiry.models import Inquiry
from lenddesk.inquiry.schemas import (
    InquiryCreate,
    InquiryListResponse,
    InquiryRead,
    InquiryReply,
    InquiryResponse,
    InquiryStatsResponse,
)
from lenddesk.inquiry.service import InquiryServiceDep

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix=Routes.INQUIRY.prefix,
    tags=[Routes.INQUIRY.tag],
    dependencies=[Depends(require_auth)],
    responses={
        **CommonResponses.UNAUTHORIZED,
        **CommonResponses.FORBIDDEN,
        **CommonResponses.BAD_REQUEST,
    },
)


def _notify_reply(inquiry: Inquiry) -> None:
    """Email the inquiry owner about the decision. Failures are only logged."""
    if inquiry.user is None:
        return
    try:
        send_inquiry_reply_email(
            to_email=inquiry.user.email,
            user_name=inquiry.user_name,
            item_name=inquiry.item_name,
            status=inquiry.status.value,
            admin_reply=inquiry.admin_reply,
        )
    except Exception:
        logger.warning(
            "Failed to send inquiry reply email",
            exc_info=True,
            extra={"inquiry_id": inquiry.id},
        )


@router.post(
    "",
    response_model=InquiryResponse,
    status_code=status.HTTP_201_CREATED,
    responses={**CommonResponses.NOT_FOUND, **CommonResponses.CONFLICT},
)
async def create_inquiry(
    payload: InquiryCreate, user: CurrentUserDep, inquiries: InquiryServiceDep
):
    inquiry = inquiries.create_inquiry(user.id, payload.item_id, payload.user_message)
    return InquiryResponse(
        message="Inquiry created successfully",
        inquiry=InquiryRead.model_validate(inquiry),
    )


@router.get("/user", response_model=InquiryListResponse)
async def list_my_inquiries(
    user: CurrentUserDep, inquiries: InquiryServiceDep, params: PageParamsDep
):
    """The current user's inquiries, newest first."""
    rows, meta = inquiries.list_for_user(user.id, params)
    return InquiryListResponse(
        message="User inquiries retrieved successfully",
        inquiries=[InquiryRead.model_validate(row) for row in rows],
        **meta.model_dump(),
    )


@router.get(
    "/all",
    response_model=InquiryListResponse,
    dependencies=[Depends(require_staff)],
)
async def list_all_inquiries(inquiries: InquiryServiceDep, params: PageParamsDep):
    """Every inquiry, newest first. Staff only."""
    rows, meta = inquiries.list_all(params)
    return InquiryListResponse(
        message="All inquiries retrieved successfully",
        inquiries=[InquiryRead.model_validate(row) for row in rows],
        **meta.model_dump(),
    )


@router.get(
    "/stats",
    response_model=InquiryStatsResponse,
    dependencies=[Depends(require_staff)],
)
async def inquiry_stats(inquiries: InquiryServiceDep):
    return InquiryStatsResponse(
        message="Inquiry statistics retrieved successfully",
        stats=inquiries.stats(),
    )


@router.post(
    "/{inquiry_id}/reply",
    response_model=InquiryResponse,
    responses={**CommonResponses.NOT_FOUND},
)
async def reply_to_inquiry(
    inquiry_id: uuid.UUID,
    payload: InquiryReply,
    staff: StaffUserDep,
    inquiries: InquiryServiceDep,
):
    """Approve or reject a pending inquiry. Staff only, once per inquiry."""
    inquiry = inquiries.reply_to_inquiry(
        inquiry_id, staff, payload.admin_reply, payload.status
    )
    _notify_reply(inquiry)
    return InquiryResponse(
        message="Reply sent successfully",
        inquiry=InquiryRead.model_validate(inquiry),
    )


@router.patch(
    "/{inquiry_id}/read",
    response_model=InquiryResponse,
    responses={**CommonResponses.NOT_FOUND},
)
async def mark_read(
    inquiry_id: uuid.UUID, user: CurrentUserDep, inquiries: InquiryServiceDep
):
    """Owner marks their own inquiry as read."""
    inquiry = inquiries.mark_read(inquiry_id, user.id)
    return InquiryResponse(
        message="Inquiry marked as read",
        inquiry=InquiryRead.model_validate(inquiry),
    )


@router.patch(
    "/{inquiry_id}/read-admin",
    response_model=InquiryResponse,
    dependencies=[Depends(require_staff)],
    responses={**CommonResponses.NOT_FOUND},
)
async def mark_read_by_admin(inquiry_id: uuid.UUID, inquiries: InquiryServiceDep):
    inquiry = inquiries.mark_read_by_admin(inquiry_id)
    return InquiryResponse(
        message="Inquiry marked as read by admin",
        inquiry=InquiryRead.model_validate(inquiry),
    )
