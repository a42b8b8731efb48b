"""FastAPI application factory and setup."""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import JSONResponse

from book_api import __version__
from book_api.api.http.app_data import ApplicationDependencies
from book_api.api.http.routers import health
from book_api.api.http.routers.service import book
from book_api.api.utils.app_startup import configure_logging
from book_api.core.errors import BookApiError
from book_api.core.services import DbManageService, DbSessionService
from book_api.runtime.config.config_data import ConfigData
from book_api.runtime.config.config_template import load_config

API_PREFIX = "/api/v1"


# --- Lifecycle hooks ---
def startup(app_dependencies: ApplicationDependencies) -> None:
    """Create the schema; any failure here aborts the process."""
    config = app_dependencies.config
    logger.info("Starting up application in {} environment", config.app.environment)

    database_service = app_dependencies.database_service
    DbManageService(database_service.engine).create_all()
    logger.info("Connected to database {}", config.database.safe_target)


def shutdown(app_dependencies: ApplicationDependencies) -> None:
    logger.info("Shutting down application")
    app_dependencies.database_service.dispose()


# --- Error handlers ---
async def handle_book_api_error(request: Request, exc: BookApiError) -> JSONResponse:
    logger.bind(status_code=exc.status_code, error_type=type(exc).__name__).warning(
        "request.rejected: {}", exc.message
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_response())


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    logger.bind(status_code=400, errors=exc.errors()).warning("request.validation_error")
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


async def handle_http_exception(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


# --- Request logging middleware ---
async def log_requests(request: Request, call_next):
    # Correlation / tracing
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

    base_ctx = {
        "request_id": request_id,
        "method": request.method,
        "path": request.url.path,
        "client_ip": request.client.host if request.client else "unknown",
    }

    start = time.perf_counter()

    # Everything that logs within this block inherits base_ctx
    with logger.contextualize(**base_ctx):
        try:
            logger.info("request.start")
            response = await call_next(request)

            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=response.status_code,
                duration_ms=round(duration_ms, 1),
            ).info("request.end")

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
                content={"error": "Internal Server Error"},
                headers={"X-Request-ID": request_id},
            )


# --- FastAPI app setup ---
def create_app(
    config: ConfigData | None = None,
    database_service: DbSessionService | None = None,
) -> FastAPI:
    """Build the application with its configuration and storage injected.

    Both arguments default to the production wiring: configuration loaded
    from config.yaml and a database engine built from it.
    """
    if config is None:
        config = load_config()

    configure_logging(config)

    if database_service is None:
        database_service = DbSessionService(config)

    app_dependencies = ApplicationDependencies(
        config=config,
        database_service=database_service,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        startup(app_dependencies)
        try:
            yield
        finally:
            shutdown(app_dependencies)

    is_production = config.app.environment == "production"
    app = FastAPI(
        title="Book API",
        version=__version__,
        lifespan=lifespan,
        docs_url=None if is_production else "/docs",
        redoc_url=None if is_production else "/redoc",
    )
    app.state.app_dependencies = app_dependencies

    # --- CORS configuration ---
    cors = config.app.cors
    if cors.allow_credentials and "*" in cors.origins:
        raise RuntimeError(
            "CORS misconfigured: cannot use '*' origins with allow_credentials=True"
        )

    app.middleware("http")(log_requests)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors.origins,
        allow_credentials=cors.allow_credentials,
        allow_methods=cors.allow_methods,
        allow_headers=cors.allow_headers,
    )

    app.add_exception_handler(BookApiError, handle_book_api_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)

    # --- Router registration ---
    app.include_router(health.router)
    app.include_router(book.router, prefix=API_PREFIX)

    return app


def main() -> None:
    import uvicorn

    config = load_config()
    uvicorn.run(
        "book_api.api.http.app:create_app",
        factory=True,
        host=config.app.host,
        port=config.app.port,
        access_log=False,  # We handle access logging in middleware
    )


if __name__ == "__main__":
    main()
