"""Assistant gateway service.

Talks to the OpenAI Assistants API: creates the tutor assistant, a thread
holding the user's equation, and streams the run back as ``StreamEvent``
values.
"""

import logging
from collections import deque
from typing import AsyncGenerator, Deque, Optional

import openai
from openai.lib.streaming import AsyncAssistantEventHandler

from equation_solver.api.models.assistant import CODE_INTERPRETER, AssistantDescriptor
from equation_solver.api.models.stream import StreamEvent
from equation_solver.core.config import Settings, get_settings
from equation_solver.core.exceptions import AssistantSetupError, MissingCredentialError

logger = logging.getLogger(__name__)


class RunEventCollector(AsyncAssistantEventHandler):
    """Translates SDK stream callbacks into ``StreamEvent`` values.

    The SDK invokes the callbacks while the stream is iterated; translated
    events queue up in ``pending`` until the gateway hands them on.
    """

    def __init__(self) -> None:
        super().__init__()
        self.pending: Deque[StreamEvent] = deque()

    async def on_event(self, event) -> None:
        if event.event == "error":
            message = getattr(event.data, "message", None) or "Assistant stream error"
            logger.error("Assistant stream error: %s", message)
            self.pending.append(StreamEvent.failure(message))

    async def on_text_created(self, text) -> None:
        # the created block already holds the first delta, which on_text_delta delivers next
        logger.debug("assistant > %s", text.value)
        self.pending.append(StreamEvent.text_created(""))

    async def on_text_delta(self, delta, snapshot) -> None:
        logger.debug("%s", delta.value)
        self.pending.append(StreamEvent.text_delta(delta.value))

    async def on_tool_call_created(self, tool_call) -> None:
        logger.info("assistant > %s", tool_call.type)
        self.pending.append(StreamEvent.tool_call_created(tool_call.type))
        # the first tool call delta is merged into this snapshot; on_tool_call_delta skips it
        if tool_call.type == CODE_INTERPRETER and getattr(tool_call, "code_interpreter", None):
            event = _code_interpreter_event(tool_call)
            if event.code_input or event.logs:
                self.pending.append(event)

    async def on_tool_call_delta(self, delta, snapshot) -> None:
        if delta.type != CODE_INTERPRETER or delta.code_interpreter is None:
            self.pending.append(StreamEvent.tool_call_delta(delta.type))
            return
        self.pending.append(_code_interpreter_event(delta))

    async def on_end(self) -> None:
        self.pending.append(StreamEvent.end())


def _code_interpreter_event(tool_call) -> StreamEvent:
    """Build a delta event from a code interpreter call's input and log outputs."""
    code_input = tool_call.code_interpreter.input
    logs = [
        output.logs
        for output in tool_call.code_interpreter.outputs or []
        if output.type == "logs" and output.logs
    ]
    if code_input:
        logger.debug("%s", code_input)
    for log in logs:
        logger.debug("output > %s", log)
    return StreamEvent.tool_call_delta(tool_call.type, code_input, logs)


class OpenAIAssistantGateway:
    """Remote assistant operations backed by ``openai.AsyncOpenAI``."""

    def __init__(self, settings: Optional[Settings] = None):
        """Initialize the gateway.

        Args:
            settings: Settings holding the API credential.
        """
        self.settings = settings or get_settings()
        self._client: Optional[openai.AsyncOpenAI] = None

    def _get_client(self) -> openai.AsyncOpenAI:
        """Get or create the async OpenAI client."""
        if not self.settings.openai_api_key:
            raise MissingCredentialError()
        if self._client is None:
            self._client = openai.AsyncOpenAI(
                api_key=self.settings.openai_api_key,
                base_url=self.settings.openai_base_url,
            )
        return self._client

    async def create_assistant(self, descriptor: AssistantDescriptor) -> str:
        """Create a remote assistant and return its ID."""
        client = self._get_client()
        try:
            assistant = await client.beta.assistants.create(**descriptor.to_create_params())
        except openai.OpenAIError as e:
            raise AssistantSetupError("assistant creation", str(e)) from e
        logger.info("Created assistant %s (%s)", assistant.id, descriptor.model)
        return assistant.id

    async def create_thread(self) -> str:
        """Create an empty remote thread and return its ID."""
        client = self._get_client()
        try:
            thread = await client.beta.threads.create()
        except openai.OpenAIError as e:
            raise AssistantSetupError("thread creation", str(e)) from e
        logger.info("Created thread %s", thread.id)
        return thread.id

    async def add_message(self, thread_id: str, content: str) -> None:
        """Append a user message to a thread."""
        client = self._get_client()
        try:
            await client.beta.threads.messages.create(
                thread_id,
                role="user",
                content=content,
            )
        except openai.OpenAIError as e:
            raise AssistantSetupError("message creation", str(e)) from e

    async def stream_run(
        self,
        thread_id: str,
        assistant_id: str,
    ) -> AsyncGenerator[StreamEvent, None]:
        """Run the assistant on a thread and stream its events.

        The sequence is lazy and can only be iterated once. It ends with an
        ``end`` event, or with a single ``error`` event if the stream fails.

        Args:
            thread_id: The thread holding the user's message.
            assistant_id: The assistant to run.

        Yields:
            Stream events in emission order.
        """
        handler = RunEventCollector()
        try:
            client = self._get_client()
            async with client.beta.threads.runs.stream(
                thread_id=thread_id,
                assistant_id=assistant_id,
                event_handler=handler,
            ) as stream:
                async for _ in stream:
                    while handler.pending:
                        yield handler.pending.popleft()
        except Exception as e:
            logger.error("Run stream failed for thread %s: %s", thread_id, e, exc_info=True)
            # on_end fires even when the stream raises; only text already seen is kept
            while handler.pending:
                event = handler.pending.popleft()
                if not event.is_terminal:
                    yield event
            yield StreamEvent.failure(str(e))
            return

        while handler.pending:
            yield handler.pending.popleft()

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None:
            await self._client.close()
            self._client = None
