"""HTTP server entrypoint.

Responsibilities (and nothing more):
- Configure structlog
- Create AppState in the Starlette lifespan
- Map routes to handlers and JumpScaredError to JSON error bodies
- Start uvicorn
"""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import structlog
import uvicorn
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware
from starlette.responses import JSONResponse, PlainTextResponse
from starlette.routing import Route

import jumpscared.handlers.search as h_search
import jumpscared.handlers.timestamps as h_timestamps
from jumpscared import __version__
from jumpscared.config import Settings
from jumpscared.errors import JumpScaredError
from jumpscared.fetcher import build_http_client
from jumpscared.models.api import HealthOutput
from jumpscared.state import AppState, build_state

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Awaitable, Callable

    from starlette.requests import Request
    from starlette.responses import Response

log = structlog.get_logger()


# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------


def _setup_logging(settings: Settings) -> None:
    """Configure structlog. Called once at startup before any log statements."""
    log_level = logging.getLevelNamesMapping()[settings.logging.level]

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if settings.logging.format == "json":
        processors = [*shared_processors, structlog.processors.JSONRenderer()]
    else:
        processors = [*shared_processors, structlog.dev.ConsoleRenderer()]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


def _state(request: Request) -> AppState:
    return request.app.state.jumpscared


async def _run_handler(
    name: str,
    call: Callable[[], Awaitable[object]],
) -> Response:
    """Run a handler and serialise its result or error as JSON."""
    try:
        return JSONResponse(await call())
    except JumpScaredError as exc:
        log.warning(
            "request_error",
            handler=name,
            code=exc.code,
            message=exc.message,
            status_code=exc.http_status,
        )
        return JSONResponse(exc.to_dict(), status_code=exc.http_status)
    except Exception:
        log.error("request_unexpected_error", handler=name, exc_info=True)
        return JSONResponse({"error": "internal error"}, status_code=500)


async def index(request: Request) -> Response:
    return PlainTextResponse("JumpScared backend is running")


async def health(request: Request) -> Response:
    return JSONResponse(HealthOutput().model_dump(mode="json"))


async def search(request: Request) -> Response:
    state = _state(request)
    query = request.query_params.get("q")
    return await _run_handler("search", lambda: h_search.handle(query, state))


async def timestamps(request: Request) -> Response:
    state = _state(request)
    url = request.query_params.get("url")
    return await _run_handler("timestamps", lambda: h_timestamps.handle(url, state))


# ---------------------------------------------------------------------------
# Application
# ---------------------------------------------------------------------------


def create_app(settings: Settings | None = None, *, state: AppState | None = None) -> Starlette:
    """Build the Starlette app.

    When ``state`` is given it is used as-is and the lifespan neither creates
    nor closes an HTTP client; otherwise the lifespan owns both.
    """
    if state is not None:
        settings = state.settings
    if settings is None:
        settings = Settings()

    @asynccontextmanager
    async def lifespan(app: Starlette) -> AsyncGenerator[None, None]:
        if state is not None:
            app.state.jumpscared = state
            yield
            return

        http_client = build_http_client(settings.fetcher)
        app.state.jumpscared = build_state(settings, http_client)
        log.info(
            "server_started",
            version=__version__,
            target=settings.site.base_url,
            timeout=settings.fetcher.timeout_seconds,
        )
        try:
            yield
        finally:
            await http_client.aclose()
            log.info("server_stopping")

    app = Starlette(
        routes=[
            Route("/", index, methods=["GET"]),
            Route("/api/health", health, methods=["GET"]),
            Route("/api/search", search, methods=["GET"]),
            Route("/api/timestamps", timestamps, methods=["GET"]),
        ],
        middleware=[
            Middleware(
                CORSMiddleware,
                allow_origins=settings.server.cors_allow_origins,
                allow_methods=["GET"],
            )
        ],
        lifespan=lifespan,
    )
    if state is not None:
        # httpx.ASGITransport does not run lifespan events
        app.state.jumpscared = state
    return app


# ---------------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------------


def main() -> None:
    settings = Settings()
    _setup_logging(settings)
    log.info("server_starting", version=__version__, port=settings.server.port)

    uvicorn.run(
        create_app(settings),
        host=settings.server.host,
        port=settings.server.port,
        log_config=None,  # Disable uvicorn's default logging; structlog handles it
    )


if __name__ == "__main__":
    main()
