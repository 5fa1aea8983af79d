"""Core module for Equation Solver."""

from equation_solver.core.config import Settings, get_settings, reset_settings

__all__ = ["Settings", "get_settings", "reset_settings"]
