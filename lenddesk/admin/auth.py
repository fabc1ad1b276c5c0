import hmac

from sqladmin.authentication import AuthenticationBackend
from starlette.requests import Request

from lenddesk.core.settings import get_settings


class AdminAuth(AuthenticationBackend):
    """SQLAdmin login against the ADMIN_USERNAME / ADMIN_PASSWORD pair.

    Operators use this panel; it is separate from the API's Firebase users.
    """

    def __init__(self) -> None:
        # Also the secret for the session middleware SQLAdmin installs
        settings = get_settings()
        super().__init__(secret_key=settings.session_secret_key)

    async def login(self, request: Request) -> bool:
        form = await request.form()
        username = str(form.get("username", "")).strip()
        password = str(form.get("password", ""))

        settings = get_settings()
        ok = hmac.compare_digest(
            username, settings.admin_username
        ) and hmac.compare_digest(password, settings.admin_password)
        if ok:
            request.session["admin_user"] = username
        return ok

    async def logout(self, request: Request) -> bool:
        request.session.clear()
        return True

    async def authenticate(self, request: Request) -> bool:
        return bool(request.session.get("admin_user"))
