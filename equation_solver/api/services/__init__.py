"""Services for the equation solver web API."""

from equation_solver.api.services.accumulator import ResponseAccumulator
from equation_solver.api.services.assistant_gateway import OpenAIAssistantGateway
from equation_solver.api.services.solver import EquationSolver

__all__ = ["ResponseAccumulator", "OpenAIAssistantGateway", "EquationSolver"]
