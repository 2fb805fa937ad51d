"""FastAPI application factory and setup."""

import time
import uuid
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from loguru import logger
from starlette.middleware.base import RequestResponseEndpoint
from starlette.responses import JSONResponse, Response

from src.books_api import __version__
from src.books_api.api.http.app_data import ApplicationDependencies, build_dependencies
from src.books_api.api.http.middleware.cors import CORSHeadersMiddleware, cors_headers
from src.books_api.api.http.routers.books import router as books_router
from src.books_api.api.http.routers.health import router as health_router
from src.books_api.api.utils.app_startup import configure_logging
from src.books_api.core.errors import BookServiceError
from src.books_api.runtime.config.config_data import ConfigData
from src.books_api.runtime.context import get_config

__all__ = ["app", "create_app"]


# --- Request logging middleware ---
async def log_requests(request: Request, call_next: RequestResponseEndpoint) -> Response:
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    client_ip = request.client.host if request.client else "unknown"

    base_ctx = {
        "request_id": request_id,
        "method": request.method,
        "path": request.url.path,
        "client_ip": client_ip,
    }

    start = time.perf_counter()

    # Everything that logs within this block inherits base_ctx
    with logger.contextualize(**base_ctx):
        try:
            logger.debug("request.start")
            response = await call_next(request)

            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=response.status_code,
                duration_ms=round(duration_ms, 1),
            ).info(
                "request.end {} {} -> {}",
                request.method,
                request.url.path,
                response.status_code,
            )

            response.headers.setdefault("X-Request-ID", request_id)
            return response

        except Exception as exc:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=500,
                duration_ms=round(duration_ms, 1),
                error_type=type(exc).__name__,
            ).exception("request.error")
            return JSONResponse(
                status_code=500,
                content={"detail": "Internal Server Error", "request_id": request_id},
                headers={
                    **cors_headers(request.app.state.app_dependencies.config.app.cors),
                    "X-Request-ID": request_id,
                },
            )


async def handle_book_service_error(
    request: Request, exc: BookServiceError
) -> JSONResponse:
    logger.bind(error_kind=exc.kind.value, status_code=exc.status_code).info(
        "request.rejected: {}", exc.message
    )
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


# --- Lifecycle hooks ---
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    deps: ApplicationDependencies = app.state.app_dependencies
    logger.info("Starting up application in {} environment", deps.config.app.environment)
    deps.database_manage_service.init_db(seed=deps.config.database.seed)
    try:
        yield
    finally:
        logger.info("Shutting down application")
        deps.database_service.dispose()


def create_app(config: ConfigData | None = None) -> FastAPI:
    """Build an application with its own database engine and services.

    Args:
        config: Configuration to use, defaults to the current context's.
    """
    config = config or get_config()
    configure_logging(config)

    app = FastAPI(
        title="Books API",
        version=__version__,
        lifespan=lifespan,
        docs_url=None if config.app.environment == "production" else "/docs",
        redoc_url=None if config.app.environment == "production" else "/redoc",
    )
    app.state.app_dependencies = build_dependencies(config)

    app.add_exception_handler(BookServiceError, handle_book_service_error)

    # Request logging is outermost so preflight requests are logged too
    app.add_middleware(CORSHeadersMiddleware, cors=config.app.cors)
    app.middleware("http")(log_requests)

    app.include_router(health_router)
    app.include_router(books_router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    main_config = get_config()
    uvicorn.run(
        app,
        host=main_config.app.host,
        port=main_config.app.port,
        access_log=False,  # Access logging happens in middleware
    )
