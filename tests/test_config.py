"""Tests for configuration module."""

from equation_solver.core.config import (
    DEFAULT_CORS_METHODS,
    DEFAULT_PORT,
    Settings,
    get_settings,
    reset_settings,
)
from equation_solver.api.models.assistant import AssistantDescriptor


class TestSettings:
    """Tests for Settings."""

    def test_default_values(self):
        settings = Settings(_env_file=None)
        assert settings.port == 3000
        assert settings.openai_api_key is None
        assert settings.assistant_model == "gpt-4o"
        assert settings.reuse_assistant is False
        assert settings.cors_methods == DEFAULT_CORS_METHODS
        assert settings.cors_allow_credentials is True

    def test_port_from_env(self, monkeypatch):
        monkeypatch.setenv("PORT", "8080")
        assert Settings(_env_file=None).port == 8080

    def test_non_numeric_port_falls_back(self, monkeypatch):
        monkeypatch.setenv("PORT", "not-a-port")
        assert Settings(_env_file=None).port == DEFAULT_PORT

    def test_empty_port_falls_back(self, monkeypatch):
        monkeypatch.setenv("PORT", "")
        assert Settings(_env_file=None).port == DEFAULT_PORT

    def test_api_key_from_env(self, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
        assert Settings(_env_file=None).openai_api_key == "sk-env"

    def test_origins_lose_trailing_slash(self):
        settings = Settings(_env_file=None, cors_origins=["https://front.example.com/"])
        assert settings.cors_origins == ["https://front.example.com"]

    def test_origins_from_env(self, monkeypatch):
        monkeypatch.setenv("CORS_ORIGINS", '["https://a.example.com", "https://b.example.com/"]')
        settings = Settings(_env_file=None)
        assert settings.cors_origins == ["https://a.example.com", "https://b.example.com"]

    def test_watchdog_timeout(self):
        assert Settings(_env_file=None, stream_timeout=30).watchdog_timeout == 30
        assert Settings(_env_file=None, stream_timeout=0).watchdog_timeout is None
        assert Settings(_env_file=None, stream_timeout=None).watchdog_timeout is None


class TestGetSettings:
    """Tests for the settings singleton."""

    def test_cached_until_reset(self, monkeypatch):
        first = get_settings()
        assert get_settings() is first
        reset_settings()
        assert get_settings() is not first


class TestAssistantDescriptor:
    """Tests for AssistantDescriptor."""

    def test_from_settings(self):
        descriptor = AssistantDescriptor.from_settings(Settings(_env_file=None))
        assert descriptor.name == "수학 선생님"
        assert descriptor.tools == ["code_interpreter"]
        assert descriptor.assistant_id is None

    def test_create_params(self):
        descriptor = AssistantDescriptor(name="tutor", instructions="help", model="gpt-4o")
        assert descriptor.to_create_params() == {
            "name": "tutor",
            "instructions": "help",
            "tools": [{"type": "code_interpreter"}],
            "model": "gpt-4o",
        }
