"""
Environment guard for non-production features.

Error simulation and runtime definitions are test scaffolding; their
routes depend on require_non_production and answer 403 in production.
"""

from fastapi import Request

from errorhub.domain.reporting.errors import EnvironmentForbiddenError


def require_non_production(request: Request) -> None:
    """FastAPI dependency refusing the request in production."""
    settings = request.app.state.container.settings
    if settings.is_production:
        raise EnvironmentForbiddenError(settings.environment)
