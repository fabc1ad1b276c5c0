"""Transactional emails sent through Resend.

Every sender here is best-effort from the caller's point of view: the
domain operation has already been committed when a notification goes out.
"""

import logging

import resend

from lenddesk.core.constants import JinjaEmailTemplatesEnv
from lenddesk.core.settings import get_settings

logger = logging.getLogger(__name__)


def _render_template(template_name: str, **context: str) -> str:
    template = JinjaEmailTemplatesEnv.get_template(template_name)
    return template.render(**context)


def init_resend() -> None:
    """Initialize Resend with API key if available."""
    settings = get_settings()
    if not settings.resend_api_key:
        logger.info("RESEND_API_KEY not set, notification emails are disabled")
        return
    resend.api_key = settings.resend_api_key


def _send(to_email: str, subject: str, html: str) -> bool:
    """Send one email. Returns False when sending is disabled."""
    settings = get_settings()
    if not settings.resend_api_key:
        logger.debug("Skipping email %r to %s: Resend not configured", subject, to_email)
        return False

    resend.Emails.send(
        {
            "from": f"noreply@{settings.app_domain}",
            "to": to_email,
            "subject": subject,
            "html": html,
        }
    )
    return True


def send_inquiry_reply_email(
    *,
    to_email: str,
    user_name: str,
    item_name: str,
    status: str,
    admin_reply: str,
) -> bool:
    """Tell a user that staff replied to their inquiry."""
    settings = get_settings()
    html = _render_template(
        "inquiry-reply.html",
        user_name=user_name,
        item_name=item_name,
        status=status,
        admin_reply=admin_reply,
        inquiries_url=f"{settings.client_url}/inquiries",
    )
    return _send(to_email, f"LendDesk - Your inquiry about {item_name}", html)


def send_account_review_email(
    *, to_email: str, first_name: str, approval_status: str
) -> bool:
    """Tell a staff applicant whether their account was approved."""
    settings = get_settings()
    html = _render_template(
        "account-review.html",
        first_name=first_name,
        approval_status=approval_status,
        login_url=f"{settings.client_url}/login",
    )
    return _send(to_email, f"LendDesk - Account {approval_status}", html)
