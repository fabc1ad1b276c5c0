"""Tests for lenddesk/core/email.py - notification emails."""

from unittest.mock import patch

import pytest

from lenddesk.core.email import (
    init_resend,
    send_account_review_email,
    send_inquiry_reply_email,
)
from lenddesk.core.settings import Settings


@pytest.fixture
def email_settings(mock_settings: Settings) -> Settings:
    return mock_settings.model_copy(
        update={"resend_api_key": "re_test", "client_url": "https://lend.example.com"}
    )


def test_init_resend_sets_api_key(email_settings):
    with (
        patch("lenddesk.core.email.get_settings", return_value=email_settings),
        patch("lenddesk.core.email.resend") as mock_resend,
    ):
        init_resend()

    assert mock_resend.api_key == "re_test"


def test_emails_are_skipped_without_api_key(mock_settings):
    with (
        patch("lenddesk.core.email.get_settings", return_value=mock_settings),
        patch("lenddesk.core.email.resend.Emails.send") as mock_send,
    ):
        sent = send_account_review_email(
            to_email="user@example.com", first_name="Eddie", approval_status="approved"
        )

    assert sent is False
    mock_send.assert_not_called()


def test_send_inquiry_reply_email(email_settings):
    with (
        patch("lenddesk.core.email.get_settings", return_value=email_settings),
        patch("lenddesk.core.email.resend.Emails.send") as mock_send,
    ):
        sent = send_inquiry_reply_email(
            to_email="user@example.com",
            user_name="Vera Viewer",
            item_name="Cordless Drill",
            status="approved",
            admin_reply="Pick it up <Friday>",
        )

    assert sent is True
    params = mock_send.call_args[0][0]
    assert params["from"] == f"noreply@{email_settings.app_domain}"
    assert params["to"] == "user@example.com"
    assert params["subject"] == "LendDesk - Your inquiry about Cordless Drill"
    assert "https://lend.example.com/inquiries" in params["html"]
    # Replies are user-visible text, never markup
    assert "Pick it up &lt;Friday&gt;" in params["html"]


def test_send_account_review_email(email_settings):
    with (
        patch("lenddesk.core.email.get_settings", return_value=email_settings),
        patch("lenddesk.core.email.resend.Emails.send") as mock_send,
    ):
        send_account_review_email(
            to_email="editor@example.com", first_name="Eddie", approval_status="rejected"
        )

    params = mock_send.call_args[0][0]
    assert params["subject"] == "LendDesk - Account rejected"
    assert "Hi Eddie" in params["html"]
    assert "https://lend.example.com/login" in params["html"]
