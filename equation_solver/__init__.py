"""Equation Solver - HTTP gateway to an AI math tutor assistant."""

__version__ = "0.1.0"
__author__ = "Equation Solver Team"

from equation_solver.api.app import create_app
from equation_solver.api.services.solver import EquationSolver

__all__ = [
    "__version__",
    "create_app",
    "EquationSolver",
]
