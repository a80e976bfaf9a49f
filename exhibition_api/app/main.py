"""
Main entrypoint for the Exhibition Registry API.

This module assembles the FastAPI application, sets up logging, builds
the registry and includes versioned routers.  The ``create_app``
function builds and configures the app, which is then instantiated at
module import time as ``app``, e.g.::

    uvicorn exhibition_api.app.main:app --reload

Pass an explicit ``Settings`` to ``create_app`` to run an isolated
instance against its own database file.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI

from .api.v1.router import router as v1_router
from .core.config import Settings, settings as default_settings
from .core.logging_config import setup_logging
from .services.registry import ExhibitionRegistry

logger = logging.getLogger(__name__)


def create_app(config: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Logging is configured first, then the registry is bound to the
    configured database.  The database file itself is created and
    migrated on application startup.

    Parameters
    ----------
    config : Optional[Settings]
        Settings for this instance; defaults to the environment-derived
        module settings.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    config = config or default_settings
    setup_logging(config.log_level, config.log_file)

    registry = ExhibitionRegistry.from_settings(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        storage = registry.storage
        storage.initialise()
        logger.info(
            "Registry ready at %s (delete mode %s, caller binding %s)",
            storage.db_path,
            config.product_delete_mode,
            "on" if config.enforce_caller_binding else "off",
        )
        yield

    app = FastAPI(
        title=config.project_name,
        version=config.api_version,
        debug=config.debug,
        lifespan=lifespan,
    )
    app.state.settings = config
    app.state.registry = registry

    app.include_router(v1_router, prefix="/api/v1")

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
