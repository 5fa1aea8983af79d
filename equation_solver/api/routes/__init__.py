"""API routes for the equation solver web API."""

from equation_solver.api.routes.health import router as health_router
from equation_solver.api.routes.preflight import router as preflight_router
from equation_solver.api.routes.solve import router as solve_router

__all__ = ["health_router", "preflight_router", "solve_router"]
