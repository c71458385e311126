"""
Application entry point.

Creates the FastAPI application and wires together:
- The reporting container (catalog, ErrorManager, handlers, use cases)
- Routers (health, error catalog, simulation admin)
- Error handlers (centralized domain-to-HTTP mapping)
- Error-handling middleware and rate limiting
- Logging configuration

No business logic belongs here.
"""

from typing import Optional

from fastapi import FastAPI
from slowapi.errors import RateLimitExceeded

from errorhub.core.config import Settings, settings as default_settings
from errorhub.interfaces.health import router as health_router
from errorhub.interfaces.reporting.dependencies import ReportingContainer, build_container
from errorhub.interfaces.reporting.router import admin_router, router as errors_router
from errorhub.shared.errors.handlers import register_error_handlers
from errorhub.shared.logging import configure_logging
from errorhub.shared.middleware.error_handling import ErrorHandlingMiddleware
from errorhub.shared.security.rate_limiting import limiter, rate_limit_exceeded_handler


def create_app(
    settings: Optional[Settings] = None,
    container: Optional[ReportingContainer] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    This is the composition root of the application.

    Args:
        settings: Settings to use; the module-level settings by default.
        container: Prebuilt container, e.g. with extra handlers.

    Returns:
        A fully configured FastAPI application instance.
    """
    settings = settings or default_settings
    configure_logging(level=settings.log_level)

    app = FastAPI(
        title=settings.project_name,
        version=settings.version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )

    app.state.container = container or build_container(settings)

    # --- Rate Limiting ---
    limiter.enabled = settings.rate_limit_enabled
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

    # --- Error Handling ---
    app.add_middleware(ErrorHandlingMiddleware)
    register_error_handlers(app)

    # --- Routers ---
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(errors_router, prefix="/api/v1")
    app.include_router(admin_router, prefix="/api/v1")

    return app
