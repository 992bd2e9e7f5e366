"""FastAPI application entry point.

Wiring only: lifespan, rate limiter, exception handlers, middleware, routers.
No business logic here. See nexus_obra.core.lifespan and
nexus_obra.core.exception_handlers.

Settings are loaded inside create_app() so that tests can set env (and clear
the get_settings cache) before calling create_app().
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from nexus_obra.api.router import api_router
from nexus_obra.core.config import get_settings
from nexus_obra.core.exception_handlers import register_exception_handlers
from nexus_obra.core.lifespan import create_lifespan
from nexus_obra.core.limiter import RateLimiter
from nexus_obra.middleware import (
    AccessLogMiddleware,
    RequestIDMiddleware,
    SecurityHeadersMiddleware,
)


def create_app() -> FastAPI:
    """Build and return the FastAPI application with its own rate limiter."""
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )

    app.state.rate_limiter = RateLimiter.from_settings(settings)

    register_exception_handlers(app)

    # First added = innermost. Request id is outermost so every log line carries it.
    origins = [o.strip() for o in settings.allowed_origins.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(AccessLogMiddleware)
    app.add_middleware(RequestIDMiddleware, header_name=settings.request_id_header)

    app.include_router(api_router)

    return app
