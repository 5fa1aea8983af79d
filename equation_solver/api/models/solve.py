"""Request and response bodies for the solve endpoints."""

from typing import Any, Optional

from pydantic import BaseModel, field_validator


class EquationRequest(BaseModel):
    """Body of ``POST /solve-equation``.

    The equation is forwarded to the assistant as-is; a missing value is
    passed through rather than rejected.
    """

    equation: Optional[str] = None

    @field_validator("equation", mode="before")
    @classmethod
    def _stringify(cls, value: Any) -> Optional[str]:
        if value is None or isinstance(value, str):
            return value
        return str(value)


class SolveResponse(BaseModel):
    """Successful solve result."""

    response: str
