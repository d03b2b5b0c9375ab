"""
Retail Admin Service - Main FastAPI Application.

JSON administration API for customers, products and orders. Reads and writes
go to the Functions API and fall back to direct storage access when the API
cannot be reached.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .config import settings
from .dependencies import set_resilient_client
from .domain.exceptions import EntityConflictError, RemoteServiceError, StorageBackendError
from .infrastructure.functions_client import FunctionsApiClient
from .logging_config import get_logger, get_request_id, setup_logging
from .metrics import metrics_endpoint, track_request_metrics
from .middleware import PrometheusMiddleware, RequestContextMiddleware
from .repositories import InMemoryStorageBackend, StorageBackend, create_redis_backend
from .routers import customers, health, orders, products, uploads
from .services.resilient_client import ResilientClient

setup_logging(
    log_level=settings.LOG_LEVEL,
    service_name=settings.SERVICE_NAME,
    use_json=settings.LOG_JSON,
)
logger = get_logger(__name__)


def create_storage_backend() -> StorageBackend:
    """Build the configured storage backend."""
    if settings.STORAGE_BACKEND == "memory":
        logger.warning("Using in-memory storage backend; data is not persisted")
        return InMemoryStorageBackend()
    return create_redis_backend(settings.REDIS_URL, key_prefix=settings.REDIS_KEY_PREFIX)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Create the resilient client on startup and close it on shutdown."""
    logger.info("Starting Retail Admin Service")
    logger.info(
        "Configuration loaded",
        extra={
            "extra_fields": {
                "service_name": settings.SERVICE_NAME,
                "functions_base_url": settings.FUNCTIONS_BASE_URL,
                "request_timeout": settings.REQUEST_TIMEOUT,
                "connect_timeout": settings.CONNECT_TIMEOUT,
                "storage_backend": settings.STORAGE_BACKEND,
            }
        },
    )

    client = ResilientClient(FunctionsApiClient(), create_storage_backend())
    set_resilient_client(client)

    if await client.remote_healthy():
        logger.info("Functions API connectivity verified")
    else:
        logger.warning(
            "Functions API is not responding; operations will fall back to storage",
            extra={"extra_fields": {"functions_base_url": settings.FUNCTIONS_BASE_URL}},
        )

    yield

    logger.info("Shutting down Retail Admin Service")
    await client.close()
    set_resilient_client(None)


app = FastAPI(
    title=settings.APP_NAME,
    description="Administration API for customers, products and orders",
    version="1.0.0",
    docs_url="/api/docs" if settings.DEBUG else None,
    redoc_url="/api/redoc" if settings.DEBUG else None,
    lifespan=lifespan,
)

app.add_middleware(RequestContextMiddleware)
app.add_middleware(PrometheusMiddleware, track_func=track_request_metrics)

app.include_router(health.router)
app.include_router(customers.router)
app.include_router(products.router)
app.include_router(orders.router)
app.include_router(uploads.router)

app.add_api_route("/metrics", metrics_endpoint, methods=["GET"], include_in_schema=False)


def _error(status_code: int, error_code: str, message: str, details: dict) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "detail": message,
            "error_code": error_code,
            "details": details,
            "request_id": get_request_id(),
        },
    )


@app.exception_handler(RemoteServiceError)
async def remote_service_error_handler(request: Request, exc: RemoteServiceError):
    return _error(502, "remote_service_error", exc.message, exc.details)


@app.exception_handler(EntityConflictError)
async def entity_conflict_handler(request: Request, exc: EntityConflictError):
    return _error(409, "entity_conflict", exc.message, exc.details)


@app.exception_handler(StorageBackendError)
async def storage_error_handler(request: Request, exc: StorageBackendError):
    logger.error(
        "Storage backend failure",
        extra={"extra_fields": {"path": request.url.path, **exc.details}},
    )
    return _error(503, "storage_unavailable", exc.message, exc.details)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.app:app", host=settings.HOST, port=settings.PORT, log_level="info")
