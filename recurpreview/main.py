from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from recurpreview.config import get_settings
from recurpreview.logging_config import REQUEST_ID_HEADER, configure_logging, request_id_scope
from recurpreview.routes.api import api_router

configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    logger.info(
        "Starting recurrence preview service default_preview_count=%s max_preview_count=%s",
        settings.default_preview_count,
        settings.max_preview_count,
    )
    yield
    logger.info("Shutting down recurrence preview service")


async def request_id_middleware(request: Request, call_next):
    with request_id_scope(request.headers.get(REQUEST_ID_HEADER)) as request_id:
        response = await call_next(request)
        logger.info("%s %s -> %s", request.method, request.url.path, response.status_code)
    response.headers[REQUEST_ID_HEADER] = request_id
    return response


def create_app() -> FastAPI:
    app = FastAPI(title="Recurrence Preview", version="0.1.0", lifespan=lifespan)
    app.middleware("http")(request_id_middleware)
    app.include_router(api_router, prefix="/api")
    return app


app = create_app()
