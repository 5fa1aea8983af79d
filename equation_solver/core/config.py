"""Configuration management for Equation Solver.

Settings are read from the environment (and an optional ``.env`` file):
the listen port, the OpenAI credential, the CORS allow-list and the
assistant persona used to answer equations.
"""

from typing import Any, List, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings

DEFAULT_PORT = 3000

DEFAULT_CORS_ORIGINS = [
    "https://web-math-front-backup-ly9ixsuqeb5112cb.sel5.cloudtype.app",
]

DEFAULT_CORS_METHODS = ["GET", "HEAD", "PUT", "PATCH", "POST", "DELETE"]

DEFAULT_ASSISTANT_NAME = "수학 선생님"

DEFAULT_ASSISTANT_INSTRUCTIONS = (
    "당신은 개인 수학 선생님입니다. 코드를 써서 수학 질문에 답해주세요. "
    "친절하게 답해주세요."
)

DEFAULT_MESSAGE_TEMPLATE = "저는 방정식을 풀어야해요 `{equation}`. 도와줄 수 있나요?"


class Settings(BaseSettings):
    """Environment-based settings."""

    # Server
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    log_level: str = "INFO"

    # OpenAI
    openai_api_key: Optional[str] = None
    openai_base_url: Optional[str] = None

    # CORS
    cors_origins: List[str] = list(DEFAULT_CORS_ORIGINS)
    cors_methods: List[str] = list(DEFAULT_CORS_METHODS)
    cors_allow_credentials: bool = True

    # Assistant persona
    assistant_name: str = DEFAULT_ASSISTANT_NAME
    assistant_instructions: str = DEFAULT_ASSISTANT_INSTRUCTIONS
    assistant_model: str = "gpt-4o"
    assistant_id: Optional[str] = None
    reuse_assistant: bool = False
    message_template: str = DEFAULT_MESSAGE_TEMPLATE

    # Seconds to wait for a run to finish streaming; <= 0 disables the watchdog
    stream_timeout: Optional[float] = 300.0

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    @field_validator("port", mode="before")
    @classmethod
    def _coerce_port(cls, value: Any) -> int:
        """Fall back to the default port when PORT is empty or not numeric."""
        if value is None or value == "":
            return DEFAULT_PORT
        try:
            return int(value)
        except (TypeError, ValueError):
            return DEFAULT_PORT

    @field_validator("cors_origins")
    @classmethod
    def _strip_trailing_slash(cls, value: List[str]) -> List[str]:
        # Browsers send Origin without a trailing slash
        return [origin.rstrip("/") for origin in value]

    @field_validator("cors_methods")
    @classmethod
    def _upper_methods(cls, value: List[str]) -> List[str]:
        return [method.strip().upper() for method in value]

    @property
    def watchdog_timeout(self) -> Optional[float]:
        """Stream timeout in seconds, or None when the watchdog is disabled."""
        if self.stream_timeout is None or self.stream_timeout <= 0:
            return None
        return self.stream_timeout


# Global instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next call re-reads the environment."""
    global _settings
    _settings = None
