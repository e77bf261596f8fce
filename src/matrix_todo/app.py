"""FastAPI application: routers, lifespan and health endpoint."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from matrix_todo.config import get_settings
from matrix_todo.errors import StoreError
from matrix_todo.logging_config import configure_logging
from matrix_todo.slack.router import router as slack_router
from matrix_todo.users.router import router as users_router
from matrix_todo.webhooks.router import router as webhooks_router

logger = logging.getLogger(__name__)

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load settings and configure logging before serving requests."""
    settings = get_settings()
    configure_logging(settings.log_level)
    app.state.settings = settings
    if not settings.slack_signing_secret:
        logger.warning("SLACK_SIGNING_SECRET is not set; every Slack delivery will be rejected")
    logger.info("Starting matrix-todo %s (%s)", VERSION, settings.environment)
    yield


app = FastAPI(title="Matrix Todo", version=VERSION, lifespan=lifespan)
app.include_router(slack_router)
app.include_router(webhooks_router)
app.include_router(users_router)


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    """Database failures surface as 503 so Slack retries the delivery."""
    logger.error("Store failure on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=503, content={"detail": "Storage unavailable"})


@app.get("/health")
async def health():
    """Health check endpoint for Cloud Run and local development."""
    return {
        "status": "ok",
        "service": "matrix-todo",
        "version": VERSION,
    }
