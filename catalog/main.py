"""Entry point for the catalog API server."""

import time
import uuid

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from common.logging_config import setup_logging
from catalog import config
from catalog.database import init_database
from catalog.exceptions import (
    CatalogException,
    InvalidInputError,
    InvalidStructureError,
    NodeNotFoundError,
)
from catalog.routes.node_routes import router as node_router
from catalog.schemas.common import ErrorResponse
from catalog.service_locator import get_catalog_service, set_catalog_service
from catalog.services.catalog_service import CatalogService
from catalog.utils import get_current_timestamp

logger = setup_logging('catalog')

app = FastAPI(
    title="Catalog API",
    description="Virtual file and folder catalog (metadata only)",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """
    Middleware to log all HTTP requests and responses.
    """
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    request.state.request_id = request_id

    start_time = time.time()

    logger.info(
        f"Request started: {request.method} {request.url.path} [request_id={request_id}]"
    )

    response = await call_next(request)

    duration = time.time() - start_time

    logger.info(
        f"Request completed: {request.method} {request.url.path} "
        f"status={response.status_code} duration={duration:.3f}s [request_id={request_id}]"
    )

    response.headers["X-Request-ID"] = request_id

    return response


@app.on_event("startup")
async def startup_event():
    """
    Prepare storage and the shared service on application startup.
    """
    logger.info("Catalog service starting up...")

    if config.STORAGE_BACKEND == "sqlite":
        init_database()
        logger.info(f"Database initialized [path={config.DATABASE_PATH}]")
    else:
        logger.info(f"Using {config.STORAGE_BACKEND} storage")

    set_catalog_service(CatalogService())

    logger.info(
        f"Policies: strict_tree={config.STRICT_TREE} "
        f"validate_parent_on_update={config.VALIDATE_PARENT_ON_UPDATE} "
        f"cascade_delete={config.CASCADE_DELETE} "
        f"strict_http_status={config.STRICT_HTTP_STATUS}"
    )


@app.on_event("shutdown")
async def shutdown_event():
    """
    Drop the shared service on shutdown.
    """
    logger.info("Catalog service shutting down...")
    set_catalog_service(None)


def _error_response(status_code: int, message: str) -> JSONResponse:
    """
    Failure envelope. Unless strict HTTP status is enabled, domain errors
    travel with 200 and only the success flag signals failure.
    """
    if not config.STRICT_HTTP_STATUS:
        status_code = status.HTTP_200_OK
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump()
    )


@app.exception_handler(NodeNotFoundError)
async def node_not_found_handler(request: Request, exc: NodeNotFoundError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.warning(
        f"Node not found error: {exc} [request_id={request_id}] path={request.url.path}"
    )
    return _error_response(status.HTTP_404_NOT_FOUND, str(exc))


@app.exception_handler(InvalidStructureError)
async def invalid_structure_handler(request: Request, exc: InvalidStructureError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.warning(
        f"Invalid structure error: {exc} [request_id={request_id}] path={request.url.path}"
    )
    return _error_response(status.HTTP_400_BAD_REQUEST, str(exc))


@app.exception_handler(InvalidInputError)
async def invalid_input_handler(request: Request, exc: InvalidInputError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.warning(
        f"Invalid input error: {exc} [request_id={request_id}] path={request.url.path}"
    )
    return _error_response(status.HTTP_400_BAD_REQUEST, str(exc))


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    problems = "; ".join(
        f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg')}"
        for error in exc.errors()
    )
    logger.warning(
        f"Request validation error: {problems} [request_id={request_id}] path={request.url.path}"
    )
    return _error_response(status.HTTP_422_UNPROCESSABLE_ENTITY, f"Invalid request: {problems}")


@app.exception_handler(CatalogException)
async def catalog_exception_handler(request: Request, exc: CatalogException):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.error(
        f"Catalog exception: {exc} [request_id={request_id}] path={request.url.path}",
        exc_info=True
    )
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))


@app.exception_handler(Exception)
async def unexpected_exception_handler(request: Request, exc: Exception):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.error(
        f"Unexpected error: {exc} [request_id={request_id}] path={request.url.path}",
        exc_info=True
    )
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc) or "Unknown error")


app.include_router(node_router)


@app.get("/health")
async def health_check():
    """
    Health check endpoint for Docker healthcheck.
    Returns 200 if service is alive.
    """
    return {"status": "ok", "timestamp": get_current_timestamp().isoformat()}


@app.get("/ready")
async def ready_check():
    """
    Readiness check endpoint.
    Verifies the storage backend answers a query.
    """
    try:
        get_catalog_service().get_children(None, limit=1)
        storage_status = "ok"
    except Exception as e:
        logger.warning(f"Readiness probe failed: {e}")
        storage_status = f"error: {str(e)}"

    ready = storage_status == "ok"
    status_code = status.HTTP_200_OK if ready else status.HTTP_503_SERVICE_UNAVAILABLE

    return JSONResponse(
        status_code=status_code,
        content={
            "ready": ready,
            "storage": storage_status
        }
    )


def main() -> None:
    """
    Start the FastAPI server with uvicorn.
    """
    uvicorn.run(
        "catalog.main:app",
        host=config.CATALOG_HOST,
        port=config.CATALOG_PORT,
    )


if __name__ == "__main__":
    main()
