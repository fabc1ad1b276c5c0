from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from lenddesk.core.request_logging import REQUEST_ID_HEADER
from lenddesk.core.settings import get_settings


def add_cors_middleware(app: FastAPI):
    settings = get_settings()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )
