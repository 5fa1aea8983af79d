"""Equation solving endpoints.

``/solve-equation`` waits for the assistant's run to finish and replies
with the whole answer; ``/solve-equation/stream`` relays the run as
Server-Sent Events.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from sse_starlette.sse import EventSourceResponse

from equation_solver.api.models.solve import EquationRequest, SolveResponse
from equation_solver.api.models.stream import StreamEvent, StreamEventType
from equation_solver.api.services.solver import EquationSolver, get_equation_solver

logger = logging.getLogger(__name__)

router = APIRouter()

ERROR_BODY = "An error occurred"


def provide_solver(request: Request) -> EquationSolver:
    """Solver built from the settings the app was created with."""
    return get_equation_solver(request.app.state.settings)


@router.post("/solve-equation", response_model=SolveResponse)
async def solve_equation(
    body: Optional[EquationRequest] = None,
    solver: EquationSolver = Depends(provide_solver),
):
    """Solve an equation with the math tutor assistant.

    Args:
        body: Request body holding the equation.
        solver: The equation solver.

    Returns:
        The accumulated assistant response, or a plain-text 500 on any failure.
    """
    equation = body.equation if body else None

    try:
        text = await solver.solve(equation)
    except Exception:
        logger.exception("Failed to solve equation %r", equation)
        return PlainTextResponse(ERROR_BODY, status_code=500)

    return JSONResponse(SolveResponse(response=text).model_dump(), status_code=200)


@router.post("/solve-equation/stream")
async def stream_equation(
    body: Optional[EquationRequest] = None,
    solver: EquationSolver = Depends(provide_solver),
):
    """Stream the assistant's run as Server-Sent Events.

    Args:
        body: Request body holding the equation.
        solver: The equation solver.

    Returns:
        SSE stream of run events, ending with ``end`` or ``error``.
    """
    equation = body.equation if body else None

    async def event_generator():
        try:
            async for event in solver.stream(equation):
                if event.event == StreamEventType.ERROR:
                    # Causes stay in the server log
                    logger.error("Run stream for %r failed: %s", equation, event.error)
                    event = StreamEvent.failure(ERROR_BODY)
                yield {
                    "event": event.event.value,
                    "data": event.model_dump_json(),
                }
        except Exception:
            logger.exception("Failed to stream equation %r", equation)
            failure = StreamEvent.failure(ERROR_BODY)
            yield {
                "event": failure.event.value,
                "data": failure.model_dump_json(),
            }

    return EventSourceResponse(event_generator())
