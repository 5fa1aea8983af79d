"""Stream event models.

A run of the assistant is observed as an ordered sequence of
``StreamEvent`` values. Each event carries the payload of one SDK callback;
``fragments()`` tells which parts of it belong in the final answer.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from equation_solver.api.models.assistant import CODE_INTERPRETER


class StreamEventType(str, Enum):
    """Types of events in a run stream."""

    # Message text
    TEXT_CREATED = "text_created"
    TEXT_DELTA = "text_delta"

    # Tool calls
    TOOL_CALL_CREATED = "tool_call_created"
    TOOL_CALL_DELTA = "tool_call_delta"

    # Terminal events
    END = "end"
    ERROR = "error"


class StreamEvent(BaseModel):
    """An event in a run stream."""

    event: StreamEventType
    text: Optional[str] = None
    tool_type: Optional[str] = None
    code_input: Optional[str] = None
    logs: List[str] = Field(default_factory=list)
    error: Optional[str] = None
    timestamp: datetime = Field(default_factory=datetime.utcnow)

    @classmethod
    def text_created(cls, text: Optional[str]) -> "StreamEvent":
        return cls(event=StreamEventType.TEXT_CREATED, text=text or "")

    @classmethod
    def text_delta(cls, text: Optional[str]) -> "StreamEvent":
        return cls(event=StreamEventType.TEXT_DELTA, text=text or "")

    @classmethod
    def tool_call_created(cls, tool_type: str) -> "StreamEvent":
        return cls(event=StreamEventType.TOOL_CALL_CREATED, tool_type=tool_type)

    @classmethod
    def tool_call_delta(
        cls,
        tool_type: str,
        code_input: Optional[str] = None,
        logs: Optional[List[str]] = None,
    ) -> "StreamEvent":
        return cls(
            event=StreamEventType.TOOL_CALL_DELTA,
            tool_type=tool_type,
            code_input=code_input,
            logs=logs or [],
        )

    @classmethod
    def end(cls) -> "StreamEvent":
        return cls(event=StreamEventType.END)

    @classmethod
    def failure(cls, error: str) -> "StreamEvent":
        return cls(event=StreamEventType.ERROR, error=error)

    @property
    def is_terminal(self) -> bool:
        return self.event in (StreamEventType.END, StreamEventType.ERROR)

    def fragments(self) -> List[str]:
        """Text this event contributes to the accumulated response, in order.

        Tool call creation only announces the tool type and contributes
        nothing. Only code interpreter deltas contribute, first the code
        input fragment and then every log output.
        """
        if self.event in (StreamEventType.TEXT_CREATED, StreamEventType.TEXT_DELTA):
            return [self.text] if self.text else []

        if self.event == StreamEventType.TOOL_CALL_DELTA and self.tool_type == CODE_INTERPRETER:
            parts = []
            if self.code_input:
                parts.append(self.code_input)
            parts.extend(log for log in self.logs if log)
            return parts

        return []
