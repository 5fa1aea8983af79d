"""Shared fixtures for the equation solver tests."""

import asyncio
from typing import List, Optional

import pytest
from fastapi.testclient import TestClient

from equation_solver.api.app import create_app
from equation_solver.api.models.assistant import AssistantDescriptor
from equation_solver.api.models.stream import StreamEvent
from equation_solver.api.routes.solve import provide_solver
from equation_solver.api.services import solver as solver_module
from equation_solver.api.services.solver import EquationSolver
from equation_solver.core.config import Settings, reset_settings
from equation_solver.core.exceptions import AssistantSetupError

FRONTEND_ORIGIN = "https://web-math-front-backup-ly9ixsuqeb5112cb.sel5.cloudtype.app"


class FakeGateway:
    """In-memory stand-in for the OpenAI assistant gateway."""

    def __init__(
        self,
        events: Optional[List[StreamEvent]] = None,
        fail_on: Optional[str] = None,
        hang: bool = False,
    ):
        self.events = events or []
        self.fail_on = fail_on
        self.hang = hang
        self.assistants: List[AssistantDescriptor] = []
        self.threads: List[str] = []
        self.messages: List[tuple] = []
        self.runs: List[tuple] = []
        self.closed = False

    async def create_assistant(self, descriptor: AssistantDescriptor) -> str:
        if self.fail_on == "assistant":
            raise AssistantSetupError("assistant creation", "quota exceeded")
        self.assistants.append(descriptor)
        return f"asst_{len(self.assistants)}"

    async def create_thread(self) -> str:
        if self.fail_on == "thread":
            raise AssistantSetupError("thread creation", "network down")
        self.threads.append(f"thread_{len(self.threads) + 1}")
        return self.threads[-1]

    async def add_message(self, thread_id: str, content: str) -> None:
        if self.fail_on == "message":
            raise AssistantSetupError("message creation", "bad request")
        self.messages.append((thread_id, content))

    async def stream_run(self, thread_id: str, assistant_id: str):
        self.runs.append((thread_id, assistant_id))
        for event in self.events:
            yield event
        if self.hang:
            await asyncio.sleep(3600)

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture(autouse=True)
def _reset_globals(monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    reset_settings()
    solver_module._solver = None
    yield
    reset_settings()
    solver_module._solver = None


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, openai_api_key="sk-test", stream_timeout=5)


@pytest.fixture
def make_client(settings):
    """Build a test client whose solver runs against the given gateway."""

    def _make(gateway: FakeGateway, **overrides) -> TestClient:
        app_settings = settings.model_copy(update=overrides)
        app = create_app(app_settings)
        solver = EquationSolver(gateway=gateway, settings=app_settings)
        app.dependency_overrides[provide_solver] = lambda: solver
        return TestClient(app)

    return _make
