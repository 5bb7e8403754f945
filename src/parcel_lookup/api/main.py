"""
FastAPI Main Application

Pennsylvania parcel lookup REST API.
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config.settings import settings
from src import __version__
from src.parcel_lookup.api.dependencies import get_lookup_service, get_registry
from src.parcel_lookup.api.routers import health, lookup, ui
from src.parcel_lookup.exceptions import GeocodingError, PropertyLookupError
from src.parcel_lookup.utils.logger import get_logger, setup_logging

logger = get_logger(__name__)

SERVER_LOG_HINT = "Check server logs for details"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging and build the lookup service before serving."""
    setup_logging()
    registry = get_registry()
    get_lookup_service()
    logger.info(
        "api_started",
        version=__version__,
        counties=registry.county_names(),
        fallback_mode=settings.parcel_fallback_mode
    )
    yield
    logger.info("api_stopped")


app = FastAPI(
    title="PA Parcel Lookup API",
    description="Geocodes Pennsylvania addresses and returns normalized county parcel data",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

cors_origins = [
    origin.strip()
    for origin in settings.cors_allowed_origins.split(",")
    if origin.strip()
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(lookup.router)
app.include_router(health.router)
app.include_router(ui.router)


@app.exception_handler(PropertyLookupError)
async def lookup_error_handler(request: Request, exc: PropertyLookupError):
    """Render pipeline failures as a flat JSON 500."""
    logger.error(
        "property_lookup_failed",
        path=request.url.path,
        error=exc.message,
        details=exc.details,
        error_type=type(exc).__name__
    )
    message = exc.message
    if isinstance(exc, GeocodingError) and not message.lower().startswith("geocod"):
        message = f"Geocoding failed: {message}"
    return JSONResponse(
        status_code=500,
        content={"error": message, "details": exc.details, "hint": SERVER_LOG_HINT},
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    """Render HTTP errors with the same {"error": ...} shape."""
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies are client errors (400)."""
    logger.warning("request_validation_failed", path=request.url.path, errors=str(exc.errors()))
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request body", "details": str(exc.errors())},
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.parcel_lookup.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
    )
