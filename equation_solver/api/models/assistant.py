"""Assistant models for the API."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from equation_solver.core.config import Settings

CODE_INTERPRETER = "code_interpreter"


class AssistantDescriptor(BaseModel):
    """A remote assistant persona.

    The persona is fixed by configuration: callers never choose the name,
    instructions or tools.
    """

    model_config = {"protected_namespaces": ()}

    name: str
    instructions: str
    model: str
    tools: List[str] = Field(default_factory=lambda: [CODE_INTERPRETER])
    assistant_id: Optional[str] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "AssistantDescriptor":
        """Build the descriptor for the configured math tutor."""
        return cls(
            name=settings.assistant_name,
            instructions=settings.assistant_instructions,
            model=settings.assistant_model,
            assistant_id=settings.assistant_id,
        )

    def to_create_params(self) -> Dict[str, Any]:
        """Keyword arguments for the remote assistant create call."""
        return {
            "name": self.name,
            "instructions": self.instructions,
            "tools": [{"type": tool} for tool in self.tools],
            "model": self.model,
        }
