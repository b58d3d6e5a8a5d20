"""FastAPI application factory and entry point.

Creates the application instance, registers the request-logging middleware,
mounts the source routers and creates the collaborators shared by every
request (HTTP client, article cache, template renderer).

Usage::

    # Development server (from project root)
    uvicorn newsfeed_adapters.api.main:app --reload
"""

from __future__ import annotations

import time
import uuid
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Callable

import httpx
import structlog
from fastapi import FastAPI, Request, Response

from newsfeed_adapters import __version__
from newsfeed_adapters.config.settings import get_settings
from newsfeed_adapters.core.cache import ArticleCache
from newsfeed_adapters.core.logging_config import configure_logging
from newsfeed_adapters.core.rendering import TemplateRenderer
from newsfeed_adapters.sources.reuters.router import router as reuters_router

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(application: FastAPI) -> AsyncIterator[None]:
    """Create the shared HTTP client for the lifetime of the app."""
    settings = get_settings()
    async with httpx.AsyncClient(
        timeout=settings.request_timeout,
        headers={"User-Agent": settings.user_agent},
    ) as client:
        application.state.http_client = client
        logger.info("app_startup", version=__version__)
        yield
    application.state.http_client = None
    logger.info("app_shutdown")


def create_app() -> FastAPI:
    """Build and configure the FastAPI application.

    Separated from the module-level ``app`` singleton so that tests can
    call ``create_app()`` with a patched settings environment.

    Returns:
        A fully configured ``FastAPI`` instance.
    """
    settings = get_settings()
    configure_logging(settings.log_level)

    application = FastAPI(
        title=settings.app_name,
        description="Publisher listing pages converted into normalized article feeds.",
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
    )

    # One cache and renderer per process so concurrent requests for the same
    # article share a single detail fetch.
    application.state.article_cache = ArticleCache(
        ttl_seconds=settings.article_cache_ttl_seconds
    )
    application.state.renderer = TemplateRenderer()
    application.state.http_client = None

    @application.middleware("http")
    async def request_logging_middleware(
        request: Request, call_next: Callable
    ) -> Response:
        """Log every request with its status and duration under a request id."""
        request_id = str(uuid.uuid4())
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )

        start = time.perf_counter()
        response: Response | None = None
        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error("unhandled_exception", exc_info=exc)
            raise
        finally:
            elapsed_ms = round((time.perf_counter() - start) * 1000, 2)
            status_code = getattr(response, "status_code", 500)
            log_fn = logger.warning if status_code >= 400 else logger.info
            log_fn("request_complete", status_code=status_code, elapsed_ms=elapsed_ms)

        response.headers["X-Request-ID"] = request_id
        return response

    @application.get("/health", tags=["system"])
    async def health() -> dict[str, str]:
        return {"status": "ok", "version": __version__}

    application.include_router(reuters_router)
    return application


app = create_app()
