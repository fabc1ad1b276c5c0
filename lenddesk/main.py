from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI
from sqladmin import Admin

import lenddesk.models  # noqa: F401
from lenddesk.admin.auth import AdminAuth
from lenddesk.admin.views import InquiryAdmin, ItemAdmin, UserAdmin
from lenddesk.auth.router import router as auth_router
from lenddesk.core.cors import add_cors_middleware
from lenddesk.core.email import init_resend
from lenddesk.core.exception_handlers import register_exception_handlers
from lenddesk.core.firebase import init_firebase
from lenddesk.core.http import close_identity_client
from lenddesk.core.logging import configure_logging
from lenddesk.core.request_logging import add_request_logging_middleware
from lenddesk.db.engine import engine
from lenddesk.health.router import router as health_router
from lenddesk.inquiry.router import router as inquiry_router
from lenddesk.item.router import router as item_router
from lenddesk.user.router import router as user_router

configure_logging()


@asynccontextmanager
async def lifespan(_: FastAPI):
    init_firebase()
    init_resend()
    yield
    await close_identity_client()


app = FastAPI(title="LendDesk", version="0.1.0", lifespan=lifespan)

api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(auth_router)
api_router.include_router(user_router)
api_router.include_router(item_router)
api_router.include_router(inquiry_router)

app.include_router(api_router)

add_request_logging_middleware(app)
add_cors_middleware(app)
register_exception_handlers(app)

admin = Admin(
    app=app,
    engine=engine,
    authentication_backend=AdminAuth(),
)
admin.add_view(UserAdmin)
admin.add_view(ItemAdmin)
admin.add_view(InquiryAdmin)
