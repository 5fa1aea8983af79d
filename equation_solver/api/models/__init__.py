"""API models for the equation solver web API."""

from equation_solver.api.models.assistant import AssistantDescriptor
from equation_solver.api.models.solve import EquationRequest, SolveResponse
from equation_solver.api.models.stream import StreamEvent, StreamEventType

__all__ = [
    "AssistantDescriptor",
    "EquationRequest",
    "SolveResponse",
    "StreamEvent",
    "StreamEventType",
]
