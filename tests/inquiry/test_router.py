"""Tests for lenddesk/inquiry/router.py."""

import uuid
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, select

from lenddesk.inquiry.models import Inquiry
from lenddesk.inquiry.service import InquiryService
from lenddesk.item.models import Item
from lenddesk.user.models import User


@pytest.fixture(name="inquiry")
def inquiry_fixture(session: Session, test_user: User, item: Item) -> Inquiry:
    return InquiryService(session).create_inquiry(
        test_user.id, item.id, "Can I borrow it?"
    )


class TestCreate:
    def test_create(self, client: TestClient, item: Item, test_user: User):
        response = client.post(
            "/inquiries",
            json={"item_id": str(item.id), "user_message": "Can I borrow it?"},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Inquiry created successfully"
        inquiry = body["inquiry"]
        assert inquiry["status"] == "pending"
        assert inquiry["item_name"] == "Cordless Drill"
        assert inquiry["user_name"] == "Vera Viewer"
        assert inquiry["item"]["id"] == str(item.id)
        assert inquiry["user"]["id"] == str(test_user.id)
        assert inquiry["replier"] is None
        assert inquiry["replied_at"] is None
        assert inquiry["created_at"].endswith("Z")

    def test_missing_message(self, client: TestClient, item: Item):
        response = client.post("/inquiries", json={"item_id": str(item.id)})

        assert response.status_code == 400
        assert response.json()["message"] == "Item ID and message are required"

    def test_duplicate_pending(self, client: TestClient, inquiry: Inquiry, item: Item):
        response = client.post(
            "/inquiries", json={"item_id": str(item.id), "user_message": "again"}
        )

        assert response.status_code == 409
        assert response.json() == {
            "type": "duplicate_pending_inquiry",
            "message": "You already have a pending inquiry for this item",
        }

    def test_unknown_item(self, client: TestClient, session: Session):
        response = client.post(
            "/inquiries", json={"item_id": str(uuid.uuid4()), "user_message": "hi"}
        )

        assert response.status_code == 404
        assert response.json() == {"type": "item_not_found", "message": "Item not found"}
        assert session.exec(select(Inquiry)).all() == []

    def test_requires_authentication(self, unauthenticated_client: TestClient):
        response = unauthenticated_client.post("/inquiries", json={})

        assert response.status_code == 401


class TestListing:
    def test_user_listing(self, client: TestClient, inquiry: Inquiry):
        response = client.get("/inquiries/user")

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "User inquiries retrieved successfully"
        assert [i["id"] for i in body["inquiries"]] == [str(inquiry.id)]
        assert body["total"] == 1

    def test_all_is_staff_only(self, client: TestClient):
        assert client.get("/inquiries/all").status_code == 403

    def test_all_for_staff(self, staff_client: TestClient, inquiry: Inquiry):
        response = staff_client.get("/inquiries/all")

        assert response.status_code == 200
        assert response.json()["message"] == "All inquiries retrieved successfully"
        assert len(response.json()["inquiries"]) == 1

    def test_stats(self, staff_client: TestClient, inquiry: Inquiry):
        response = staff_client.get("/inquiries/stats")

        assert response.status_code == 200
        assert response.json() == {
            "message": "Inquiry statistics retrieved successfully",
            "stats": {
                "total": 1,
                "unread_by_admin": 1,
                "by_status": {"pending": 1, "approved": 0, "rejected": 0},
            },
        }


class TestReply:
    @patch("lenddesk.inquiry.router.send_inquiry_reply_email")
    def test_reply(
        self, mock_send, staff_client: TestClient, inquiry: Inquiry, editor_user: User
    ):
        response = staff_client.post(
            f"/inquiries/{inquiry.id}/reply",
            json={"admin_reply": "Sure, pick it up Friday", "status": "approved"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Reply sent successfully"
        assert body["inquiry"]["status"] == "approved"
        assert body["inquiry"]["replier"]["id"] == str(editor_user.id)
        assert body["inquiry"]["replied_at"].endswith("Z")
        mock_send.assert_called_once()
        assert mock_send.call_args.kwargs["to_email"] == "viewer-uid-123@example.com"

    @patch("lenddesk.inquiry.router.send_inquiry_reply_email")
    def test_viewer_cannot_reply(self, mock_send, client: TestClient, inquiry: Inquiry):
        response = client.post(
            f"/inquiries/{inquiry.id}/reply",
            json={"admin_reply": "I approve myself", "status": "approved"},
        )

        assert response.status_code == 403
        mock_send.assert_not_called()

    @patch("lenddesk.inquiry.router.send_inquiry_reply_email")
    def test_second_reply(self, mock_send, staff_client: TestClient, inquiry: Inquiry):
        payload = {"admin_reply": "ok", "status": "approved"}
        staff_client.post(f"/inquiries/{inquiry.id}/reply", json=payload)

        response = staff_client.post(
            f"/inquiries/{inquiry.id}/reply",
            json={"admin_reply": "no", "status": "rejected"},
        )

        assert response.status_code == 400
        assert response.json()["message"] == "This inquiry has already been replied to"

    @patch("lenddesk.inquiry.router.send_inquiry_reply_email")
    def test_invalid_status(self, mock_send, staff_client: TestClient, inquiry: Inquiry):
        response = staff_client.post(
            f"/inquiries/{inquiry.id}/reply",
            json={"admin_reply": "hmm", "status": "pending"},
        )

        assert response.status_code == 400
        assert response.json()["message"] == (
            "Status must be either 'approved' or 'rejected'"
        )

    @patch(
        "lenddesk.inquiry.router.send_inquiry_reply_email",
        side_effect=RuntimeError("email down"),
    )
    def test_email_failure_keeps_reply(
        self, _mock_send, staff_client: TestClient, inquiry: Inquiry
    ):
        response = staff_client.post(
            f"/inquiries/{inquiry.id}/reply",
            json={"admin_reply": "ok", "status": "rejected"},
        )

        assert response.status_code == 200
        assert response.json()["inquiry"]["status"] == "rejected"


class TestReadFlags:
    def test_owner_marks_read(self, client: TestClient, inquiry: Inquiry):
        response = client.patch(f"/inquiries/{inquiry.id}/read")

        assert response.status_code == 200
        assert response.json()["message"] == "Inquiry marked as read"
        assert response.json()["inquiry"]["is_read"] is True

    def test_non_owner_gets_404(
        self, client_for, other_user: User, inquiry: Inquiry
    ):
        response = client_for(other_user).patch(f"/inquiries/{inquiry.id}/read")

        assert response.status_code == 404

    def test_read_admin_is_staff_only(
        self, client_for, test_user: User, editor_user: User, inquiry: Inquiry
    ):
        path = f"/inquiries/{inquiry.id}/read-admin"
        assert client_for(test_user).patch(path).status_code == 403

        response = client_for(editor_user).patch(path)
        assert response.status_code == 200
        assert response.json()["message"] == "Inquiry marked as read by admin"
        assert response.json()["inquiry"]["is_read_by_admin"] is True
