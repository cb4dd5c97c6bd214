"""
Main entrypoint for the Campus Admin API.

This module assembles the FastAPI application, sets up logging, wires
the services and includes versioned routers.  The ``create_app``
function builds and configures the app, which is then instantiated at
module import time as ``app``.  Importing the app here makes it easy to
run with uvicorn or another ASGI server, e.g.::

    uvicorn campus_admin_api.app.main:app --reload

The application title and version are provided via ``Settings`` from
``core.config``.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from .api.v1.router import router as v1_router
from .core.config import settings
from .core.exceptions import UpstreamFailureError, ValidationFailedError
from .core.logging_config import setup_logging
from .services.container import ServiceContainer, build_container


def create_app(services: Optional[ServiceContainer] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    services: ServiceContainer, optional
        Pre-built services.  When omitted they are built from
        ``settings`` (in-memory stores seeded from the fixtures unless
        ``DATA_BACKEND=remote``).

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    # Initialise logging before anything else so that the service
    # wiring below can log.
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)
    app.state.services = services or build_container(settings)

    @app.exception_handler(ValidationFailedError)
    async def validation_failed_handler(request: Request, exc: ValidationFailedError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": str(exc), "errors": exc.errors},
        )

    @app.exception_handler(UpstreamFailureError)
    async def upstream_failure_handler(request: Request, exc: UpstreamFailureError) -> JSONResponse:
        logging.getLogger(__name__).error("Upstream failure on %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=status.HTTP_502_BAD_GATEWAY, content={"detail": str(exc)})

    # Mount versioned routes under /api/v1.
    app.include_router(v1_router, prefix="/api/v1")

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
