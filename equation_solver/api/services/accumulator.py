"""Response accumulator service.

Collects the text of a run stream into a single answer.
"""

import logging
from typing import AsyncIterator, List

from equation_solver.api.models.stream import StreamEvent, StreamEventType
from equation_solver.core.exceptions import StreamError

logger = logging.getLogger(__name__)


class ResponseAccumulator:
    """Append-only text buffer for one in-flight request.

    Fragments are appended strictly in the order events arrive. The buffer
    is complete once an ``end`` event has been seen.
    """

    def __init__(self) -> None:
        self._parts: List[str] = []
        self.completed = False

    def __len__(self) -> int:
        return len(self.text)

    @property
    def text(self) -> str:
        """The accumulated response."""
        return "".join(self._parts)

    def apply(self, event: StreamEvent) -> None:
        """Append the fragments carried by a non-terminal event."""
        if event.event == StreamEventType.TOOL_CALL_CREATED:
            logger.debug("assistant > %s", event.tool_type)
        else:
            logger.debug("%s: %r", event.event.value, event.fragments())
        self._parts.extend(event.fragments())

    async def consume(self, events: AsyncIterator[StreamEvent]) -> str:
        """Drain a run stream into the buffer.

        Args:
            events: Stream events in emission order.

        Returns:
            The accumulated text once the stream ends.

        Raises:
            StreamError: If the stream reports an error or closes before
                its ``end`` event.
        """
        try:
            async for event in events:
                if event.event == StreamEventType.END:
                    self.completed = True
                    return self.text
                if event.event == StreamEventType.ERROR:
                    raise StreamError(event.error or "Run stream reported an error")
                self.apply(event)
        finally:
            aclose = getattr(events, "aclose", None)
            if aclose is not None:
                await aclose()

        raise StreamError("Run stream closed before completion")
