"""
Main entrypoint for the Product Archive API.

This module assembles the FastAPI application, sets up logging and
includes the routers.  The ``create_app`` function builds and
configures the app, which is then instantiated at module import time
as ``app``, so it can be served directly::

    uvicorn product_archive_api.app.main:app --reload

The application title and version are provided via ``Settings`` from
``core.config``.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from .core.config import settings
from .core.exceptions import ProductError
from .core.logging_config import setup_logging
from .api.v1.router import router as v1_router
from .api.files.router import router as files_router


logger = logging.getLogger(__name__)


async def product_error_handler(request: Request, exc: ProductError) -> JSONResponse:
    """Answer any failed product operation with ``500`` and the error message."""
    logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": str(exc)},
    )


def create_app() -> FastAPI:
    """Create and configure a FastAPI application.

    Configures logging first, then mounts the versioned product
    routes under ``/api/v1`` and the file routes under
    ``/api/files``.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    setup_logging(settings)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)

    app.include_router(v1_router, prefix="/api/v1")
    app.include_router(files_router)

    app.add_exception_handler(ProductError, product_error_handler)

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
