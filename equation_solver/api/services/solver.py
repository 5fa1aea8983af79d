"""Equation solver service.

Turns one equation into a run of the math tutor assistant and collects
the streamed answer.
"""

import asyncio
import logging
from typing import AsyncGenerator, AsyncIterator, Optional

from equation_solver.api.models.assistant import AssistantDescriptor
from equation_solver.api.models.stream import StreamEvent, StreamEventType
from equation_solver.api.services.accumulator import ResponseAccumulator
from equation_solver.api.services.assistant_gateway import OpenAIAssistantGateway
from equation_solver.core.config import Settings, get_settings
from equation_solver.core.exceptions import StreamTimeoutError

logger = logging.getLogger(__name__)


class EquationSolver:
    """Solves equations by delegating to a remote assistant.

    Every request gets its own thread and response buffer. Unless an
    assistant ID is configured or reuse is enabled, every request also gets
    its own assistant.
    """

    def __init__(
        self,
        gateway: Optional[OpenAIAssistantGateway] = None,
        settings: Optional[Settings] = None,
    ):
        """Initialize the solver.

        Args:
            gateway: Remote assistant operations. Defaults to the OpenAI gateway.
            settings: Solver settings.
        """
        self.settings = settings or get_settings()
        self.gateway = gateway or OpenAIAssistantGateway(self.settings)
        self.descriptor = AssistantDescriptor.from_settings(self.settings)
        self._assistant_lock = asyncio.Lock()

    def build_prompt(self, equation: Optional[str]) -> str:
        """Fill the user message template with the equation."""
        return self.settings.message_template.format(
            equation=equation if equation is not None else ""
        )

    async def _resolve_assistant(self) -> str:
        """Return the assistant to run, creating one when needed."""
        # Configured up front, or cached by an earlier request
        if self.descriptor.assistant_id:
            return self.descriptor.assistant_id

        if not self.settings.reuse_assistant:
            return await self.gateway.create_assistant(self.descriptor)

        async with self._assistant_lock:
            if self.descriptor.assistant_id is None:
                self.descriptor.assistant_id = await self.gateway.create_assistant(
                    self.descriptor
                )
            return self.descriptor.assistant_id

    async def start_run(self, equation: Optional[str]) -> AsyncIterator[StreamEvent]:
        """Set up the assistant, thread and message, then open the run stream.

        Raises:
            MissingCredentialError: If no API key is configured.
            AssistantSetupError: If any remote setup call fails.
        """
        assistant_id = await self._resolve_assistant()
        thread_id = await self.gateway.create_thread()
        await self.gateway.add_message(thread_id, self.build_prompt(equation))
        logger.info("Streaming run of assistant %s on thread %s", assistant_id, thread_id)
        return self.gateway.stream_run(thread_id, assistant_id)

    async def solve(self, equation: Optional[str]) -> str:
        """Solve an equation and return the assistant's accumulated answer.

        Raises:
            MissingCredentialError: If no API key is configured.
            AssistantSetupError: If assistant, thread or message setup fails.
            StreamError: If the run stream fails or closes early.
            StreamTimeoutError: If the run does not finish in time.
        """
        events = await self.start_run(equation)
        accumulator = ResponseAccumulator()
        timeout = self.settings.watchdog_timeout

        try:
            await asyncio.wait_for(accumulator.consume(events), timeout=timeout)
        except asyncio.TimeoutError:
            raise StreamTimeoutError(timeout) from None

        logger.info("Run completed with %d characters", len(accumulator))
        return accumulator.text

    async def stream(self, equation: Optional[str]) -> AsyncGenerator[StreamEvent, None]:
        """Solve an equation, yielding every run event as it arrives.

        Setup failures are raised before the first event. Stream failures
        and watchdog expiry end the sequence with an ``error`` event.
        """
        events = await self.start_run(equation)
        timeout = self.settings.watchdog_timeout
        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout if timeout is not None else None
        iterator = events.__aiter__()

        try:
            while True:
                remaining = deadline - loop.time() if deadline is not None else None
                try:
                    event = await asyncio.wait_for(iterator.__anext__(), timeout=remaining)
                except StopAsyncIteration:
                    yield StreamEvent.failure("Run stream closed before completion")
                    return
                except asyncio.TimeoutError:
                    yield StreamEvent.failure(str(StreamTimeoutError(timeout)))
                    return

                yield event
                if event.event in (StreamEventType.END, StreamEventType.ERROR):
                    return
        finally:
            aclose = getattr(events, "aclose", None)
            if aclose is not None:
                await aclose()

    async def aclose(self) -> None:
        """Release the gateway's resources."""
        await self.gateway.aclose()


# Global instance
_solver: Optional[EquationSolver] = None


def get_equation_solver(settings: Optional[Settings] = None) -> EquationSolver:
    """Get the global equation solver instance.

    Args:
        settings: Settings for the instance if it has not been created yet.
    """
    global _solver
    if _solver is None:
        _solver = EquationSolver(settings=settings)
    return _solver


async def shutdown_equation_solver() -> None:
    """Close and drop the global equation solver, if one was created."""
    global _solver
    if _solver is not None:
        await _solver.aclose()
        _solver = None
