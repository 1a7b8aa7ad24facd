"""FastAPI application main module.

This module defines the main FastAPI application instance and core API
endpoints for the Atelier recommendation service: health, status, metrics
and catalog reload. Feature routes live in ``src.api.routes``.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from src import __version__
from src.api import dependencies
from src.api.exceptions import AtelierException
from src.api.logging_config import RequestLoggingMiddleware, setup_logging
from src.api.metrics import metrics_service
from src.api.routes import preferences, products, recommend
from src.config import get_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    setup_logging(settings.log_level, json_format=settings.json_logs)
    logger.info("Atelier API starting", extra={"catalog_path": settings.catalog_path})
    yield


# Create FastAPI application instance
app = FastAPI(
    title="Atelier API",
    description="Style-quiz product recommendations for a fashion storefront",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(RequestLoggingMiddleware)

# Include routers
app.include_router(recommend.router)
app.include_router(products.router)
app.include_router(preferences.router)


@app.exception_handler(AtelierException)
async def atelier_exception_handler(request: Request, exc: AtelierException) -> JSONResponse:
    """Render service errors as a consistent JSON envelope."""
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        exc.message,
        extra={
            "path": request.url.path,
            "status_code": exc.status_code,
            "error_type": type(exc).__name__,
        },
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_response())


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render request validation failures in the same envelope."""
    return JSONResponse(
        status_code=422,
        content={
            "error": "ValidationError",
            "message": "Invalid request parameters",
            "details": {"errors": jsonable_encoder(exc.errors())},
        },
    )


class StatusResponse(BaseModel):
    catalog_loaded: bool
    timestamp_last_loaded: Optional[str] = None
    num_products: int
    num_profiles: int


@app.get("/ping")
def ping() -> Dict[str, str]:
    """Health check endpoint.

    Returns:
        Dictionary with status key set to "ok".

    Example:
        >>> response = client.get("/ping")
        >>> assert response.json() == {"status": "ok"}
    """
    return {"status": "ok"}


@app.get("/status", response_model=StatusResponse)
def status() -> StatusResponse:
    """Report what the service has loaded, without loading anything."""
    catalog = dependencies.get_cached_catalog()
    preference_store = dependencies.get_cached_preferences()

    loaded_at = catalog.loaded_at if catalog is not None else None
    return StatusResponse(
        catalog_loaded=catalog is not None and catalog.is_loaded,
        timestamp_last_loaded=loaded_at.isoformat() if loaded_at else None,
        num_products=catalog.num_products if catalog is not None else 0,
        num_profiles=preference_store.num_profiles if preference_store is not None else 0,
    )


@app.get("/metrics")
def metrics() -> Dict[str, Any]:
    """Ranking call counts and latency statistics."""
    return metrics_service.get_metrics()


@app.post("/catalog/reload")
def reload_catalog() -> Dict[str, Any]:
    """Reload the catalog and quiz answers from disk.

    Useful when a new catalog export has been written and needs to be served
    without restarting the server.

    Raises:
        CatalogNotFoundError: If the catalog file is missing.
        CatalogLoadError: If the catalog cannot be parsed.
    """
    logger.info("Reloading catalog...")
    dependencies.reset_stores()

    catalog = dependencies.load_catalog_if_needed()
    preference_store = dependencies.get_optional_preference_store()

    return {
        "status": "Catalog reloaded successfully",
        "num_products": catalog.num_products,
        "num_profiles": preference_store.num_profiles if preference_store else 0,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
