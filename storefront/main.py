"""
FastAPI application entry point for the storefront backend.

This module creates the FastAPI app instance and registers all routers.
"""

import logging
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from storefront import __version__
from storefront.config import settings
from storefront.routes.bundles import router as bundles_router
from storefront.routes.health import router as health_router
from storefront.routes.recommendations import router as recommendations_router
from storefront.utils.logging import configure_logging

# Configure logging
configure_logging()

logger = logging.getLogger(__name__)


def _get_cors_origins() -> list[str]:
    """
    Get allowed CORS origins based on environment.

    Environment-based configuration:
    - ENVIRONMENT=production: Uses CORS_ALLOWED_ORIGINS env var
    - ENVIRONMENT=testing/development: Allows all origins for local dev

    The storefront frontend calls the recommendation endpoints from the
    browser, so production must list its origin explicitly.

    Returns:
        List of allowed origin URLs, or ["*"] for development.
    """
    if settings.is_production():
        if settings.CORS_ALLOWED_ORIGINS:
            logger.info(
                f"CORS configured for production with "
                f"{len(settings.CORS_ALLOWED_ORIGINS)} allowed origins"
            )
            return settings.CORS_ALLOWED_ORIGINS

        logger.warning(
            "CORS_ALLOWED_ORIGINS not set in production. "
            "No web origins allowed. Set CORS_ALLOWED_ORIGINS for the storefront frontend."
        )
        return []

    logger.info(f"CORS configured for {settings.ENVIRONMENT}: allowing all origins")
    return ["*"]


# Create FastAPI app
app = FastAPI(
    title="Storefront API",
    description="AI product recommendations and bundle merchandising for the storefront",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc"
)


# Custom validation error handler to log detailed errors
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Log detailed validation errors for debugging.

    This helps diagnose 422 errors from the storefront frontend.
    """
    logger.error(
        f"Validation error on {request.method} {request.url.path}: {exc.errors()}"
    )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "validation_error",
            "details": jsonable_errors(exc),
            "body": jsonable_encoder(exc.body),
        }
    )


def jsonable_errors(exc: RequestValidationError) -> list:
    """Validation errors with non-JSON context values stringified."""
    errors = []
    for error in exc.errors():
        error = dict(error)
        if "ctx" in error:
            error["ctx"] = {key: str(value) for key, value in error["ctx"].items()}
        errors.append(error)
    return errors


# Configure CORS with environment-based origins
cors_origins = _get_cors_origins()
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(health_router)
app.include_router(recommendations_router)
app.include_router(bundles_router)

logger.info("FastAPI app initialized successfully")
