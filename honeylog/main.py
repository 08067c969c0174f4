"""
FastAPI application entry point.
Honeylog - bounded analytics over honeypot logs in blob storage
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from honeylog import __version__
from honeylog.config import get_settings
from honeylog.exceptions import HoneylogError
from honeylog.logging_config import configure_logging
from honeylog.api.routes import router
from honeylog.api.dependencies import get_blob_store, get_geo_lookup


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    configure_logging(get_settings())
    yield
    # Shutdown: release the shared store and geo database if they were built
    if get_blob_store.cache_info().currsize:
        await get_blob_store().close()
    if get_geo_lookup.cache_info().currsize:
        get_geo_lookup().close()


settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    description="Bounded analytics over Cowrie honeypot logs stored in Azure Blob Storage.",
    version=__version__,
    lifespan=lifespan,
)


@app.exception_handler(HoneylogError)
async def honeylog_error_handler(request: Request, exc: HoneylogError):
    """Answer typed failures with a status and message, never a traceback."""
    logger.warning("%s on %s: %s", exc.error, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.error, "message": exc.message, "code": exc.code},
    )


# Include API routes
app.include_router(router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "honeylog.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
    )
