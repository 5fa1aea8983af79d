"""FastAPI application for the equation solver web API.

Startup is explicit: ``create_app`` loads settings, registers CORS and the
routes, and installs a lifespan that closes the assistant client on
shutdown.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from equation_solver import __version__
from equation_solver.api.cors import add_cors
from equation_solver.api.routes import health_router, preflight_router, solve_router
from equation_solver.api.services.solver import shutdown_equation_solver
from equation_solver.core.config import Settings, get_settings

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create the FastAPI application.

    Args:
        settings: Settings to use. Defaults to the environment settings.

    Returns:
        The configured FastAPI application.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            "Equation solver starting (model=%s, origins=%s)",
            settings.assistant_model,
            ", ".join(settings.cors_origins),
        )
        if not settings.openai_api_key:
            logger.warning("OPENAI_API_KEY is not set; every solve request will fail")
        yield
        logger.info("Equation solver shutting down")
        await shutdown_equation_solver()

    app = FastAPI(
        title="Equation Solver API",
        description="Solves equations with an AI math tutor assistant",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings

    add_cors(app, settings)

    app.include_router(health_router, tags=["health"])
    app.include_router(solve_router, tags=["solve"])
    # Must come last so it never shadows another route
    app.include_router(preflight_router)

    return app
