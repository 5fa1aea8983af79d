"""Errors raised while solving an equation through the remote assistant."""


class EquationSolverError(Exception):
    """Base class for all equation solver errors."""


class MissingCredentialError(EquationSolverError):
    """No API key is configured for the assistant service."""

    def __init__(self, message: str = "OPENAI_API_KEY is not configured"):
        super().__init__(message)


class AssistantSetupError(EquationSolverError):
    """Creating the assistant, the thread or the user message failed."""

    def __init__(self, step: str, message: str):
        self.step = step
        super().__init__(f"{step} failed: {message}")


class StreamError(EquationSolverError):
    """The run stream failed before signalling completion."""


class StreamTimeoutError(StreamError):
    """The run stream did not complete within the configured timeout."""

    def __init__(self, timeout: float):
        self.timeout = timeout
        super().__init__(f"Run stream did not complete within {timeout:g}s")
