"""FastAPI application setup."""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

from src.catalog.api.http.app_data import ApplicationDependencies
from src.catalog.api.http.routers.health import router as health_router
from src.catalog.api.http.routers.service.category import router as category_router
from src.catalog.api.http.routers.service.product import router as product_router
from src.catalog.api.http.routers.service.voucher import router as voucher_router
from src.catalog.api.utils.app_startup import configure_logging
from src.catalog.core.errors import CatalogError
from src.catalog.runtime.context import get_config
from src.catalog.runtime.init_db import init_db

configure_logging()


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("Referrer-Policy", "strict-origin-when-cross-origin")
        if get_config().app.environment == "production":
            response.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains; preload",
            )
        return response


@asynccontextmanager
async def lifespan(app: FastAPI):
    startup(app)
    try:
        yield
    finally:
        shutdown(app)


app = FastAPI(
    title="Product Catalog",
    lifespan=lifespan,
    docs_url=None if get_config().app.environment == "production" else "/docs",
    redoc_url=None if get_config().app.environment == "production" else "/redoc",
)

__all__ = ["app", "startup", "shutdown"]

app.add_middleware(SecurityHeadersMiddleware)

if get_config().app.environment == "production" and "*" in get_config().app.cors.origins:
    raise RuntimeError(
        "CORS misconfigured: cannot use '*' with allow_credentials=True in production"
    )

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_config().app.cors.origins,
    allow_credentials=get_config().app.cors.allow_credentials,
    allow_methods=get_config().app.cors.allow_methods,
    allow_headers=get_config().app.cors.allow_headers,
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    request.state.request_id = request_id

    xff = request.headers.get("x-forwarded-for")
    client_ip = (
        xff.split(",")[0].strip()
        if xff
        else request.client.host
        if request.client
        else "unknown"
    )

    base_ctx = {
        "request_id": request_id,
        "method": request.method,
        "path": request.url.path,
        "client_ip": client_ip,
        "user_agent": request.headers.get("user-agent", "unknown"),
    }

    start = time.perf_counter()

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
                content={
                    "kind": "Internal",
                    "detail": "Internal Server Error",
                    "request_id": request_id,
                },
                headers={"X-Request-ID": request_id},
            )


@app.exception_handler(CatalogError)
async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
    """Render a core error as exactly one structured response."""
    request_id = getattr(request.state, "request_id", "-")
    if exc.status_code >= 500:
        logger.error("Request failed: {} ({})", exc.message, exc.kind.value)
    else:
        logger.info("Request rejected: {} ({})", exc.message, exc.kind.value)
    return JSONResponse(
        status_code=exc.status_code,
        content={**exc.to_dict(), "request_id": request_id},
        headers={"X-Request-ID": request_id},
    )


app.include_router(health_router)
app.include_router(product_router)
app.include_router(category_router)
app.include_router(voucher_router)


def startup(app: FastAPI) -> None:
    """Wire application services and make sure the schema exists.

    Dependencies already placed on ``app.state`` (tests do this) are kept.
    """
    deps: ApplicationDependencies | None = getattr(app.state, "app_dependencies", None)
    if deps is None:
        deps = ApplicationDependencies.build()
        app.state.app_dependencies = deps

    init_db(deps.database_service)
    logger.info("Starting up application in {} environment", get_config().app.environment)


def shutdown(app: FastAPI) -> None:
    logger.info("Shutting down application")
    deps: ApplicationDependencies | None = getattr(app.state, "app_dependencies", None)
    if deps is not None:
        deps.database_service.engine.dispose()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=get_config().app.host, port=get_config().app.port)
