"""Tests for lenddesk/main.py - Application lifespan and wiring."""

from unittest.mock import AsyncMock, patch

import pytest
from fastapi import FastAPI

from lenddesk.main import app, lifespan


@pytest.mark.asyncio
async def test_lifespan_initialization():
    """Lifespan initializes Firebase and Resend, then closes the HTTP client."""
    mock_app = FastAPI()

    with (
        patch("lenddesk.main.init_firebase") as mock_firebase,
        patch("lenddesk.main.init_resend") as mock_resend,
        patch("lenddesk.main.close_identity_client", new=AsyncMock()) as mock_close,
    ):
        async with lifespan(mock_app):
            mock_firebase.assert_called_once()
            mock_resend.assert_called_once()
            mock_close.assert_not_awaited()

        mock_close.assert_awaited_once()


def test_routes_are_registered():
    paths = {route.path for route in app.routes}

    for path in (
        "/health",
        "/auth/register",
        "/auth/login",
        "/auth/logout",
        "/auth/me",
        "/users/me",
        "/users/{user_id}/approve",
        "/items",
        "/items/wishlist",
        "/items/archived",
        "/items/{item_id}",
        "/inquiries",
        "/inquiries/stats",
        "/inquiries/{inquiry_id}/reply",
        "/inquiries/{inquiry_id}/read-admin",
    ):
        assert path in paths
