"""
Tests for LLM Providers — openai-backed completions

These tests validate:
- Provider selection and precondition errors
- Request shape sent to the SDK (model, endpoint, messages)
- Token usage accounting
- MockProvider for handler tests

All tests mock the SDK client. No network access.
"""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from quartz.config import AIConfig
from quartz.core.errors import PreconditionError
from quartz.presentation.symbols import ASCII
from quartz.services import providers
from quartz.services.providers import (
    LLMResponse, MockProvider, OpenAIProvider, get_provider, get_provider_status,
)


def sdk_response(text, prompt_tokens=11, completion_tokens=7):
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=text))],
        usage=SimpleNamespace(prompt_tokens=prompt_tokens, completion_tokens=completion_tokens),
    )


@pytest.fixture
def fake_openai(monkeypatch):
    """Replace openai.OpenAI with a MagicMock class."""
    client_class = MagicMock()
    monkeypatch.setattr(providers.openai, "OpenAI", client_class)
    return client_class


class TestLLMResponse:
    def test_total_tokens(self):
        assert LLMResponse("x", 3, 4).total_tokens == 7

    def test_format_tokens(self):
        response = LLMResponse("x", 3, 4)
        assert response.format_tokens() == "in:3 out:4 total:7"
        assert response.format_tokens(ASCII) == "<-3 ->4"


class TestGetProvider:
    """Selection and preconditions."""

    def test_missing_key(self):
        with pytest.raises(PreconditionError) as exc:
            get_provider(AIConfig())
        assert exc.value.remediation == "export OPENAI_API_KEY=<key>"

    def test_unknown_provider(self):
        with pytest.raises(PreconditionError, match="Unknown AI provider 'nope'"):
            get_provider(AIConfig(provider="nope"))

    def test_openai(self, monkeypatch, fake_openai):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        provider = get_provider(AIConfig())

        assert isinstance(provider, OpenAIProvider)
        fake_openai.assert_called_once_with(api_key="sk-test", base_url=None)

    def test_deepseek_endpoint(self, monkeypatch, fake_openai):
        monkeypatch.setenv("DEEPSEEK_API_KEY", "ds-test")
        get_provider(AIConfig(provider="deepseek"))
        fake_openai.assert_called_once_with(api_key="ds-test", base_url="https://api.deepseek.com")

    def test_model_override_does_not_mutate_config(self, monkeypatch, fake_openai):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        config = AIConfig(model="gpt-4o-mini")
        provider = get_provider(config, model="gpt-4o")
        assert provider.config.effective_model == "gpt-4o"
        assert config.model == "gpt-4o-mini"

    def test_status(self, monkeypatch):
        assert "OPENAI_API_KEY" in get_provider_status(AIConfig())
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        assert get_provider_status(AIConfig()) == "openai: gpt-4o-mini"
        assert "Unknown provider" in get_provider_status(AIConfig(provider="x"))


class TestOpenAIProvider:
    """Request/response mapping."""

    def test_complete(self, monkeypatch, fake_openai):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        client = fake_openai.return_value
        client.chat.completions.create.return_value = sdk_response("feat: add x")

        response = OpenAIProvider(AIConfig(model="gpt-4o")).complete("sys", "usr", max_tokens=100)

        assert response == LLMResponse("feat: add x", 11, 7)
        client.chat.completions.create.assert_called_once_with(
            model="gpt-4o",
            max_tokens=100,
            messages=[
                {"role": "system", "content": "sys"},
                {"role": "user", "content": "usr"},
            ],
        )

    def test_missing_usage(self, monkeypatch, fake_openai):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        reply = sdk_response(None)
        reply.usage = None
        fake_openai.return_value.chat.completions.create.return_value = reply

        response = OpenAIProvider(AIConfig()).complete("s", "u")
        assert response == LLMResponse("", 0, 0)

    def test_without_key_not_available(self, fake_openai):
        provider = OpenAIProvider(AIConfig())
        assert not provider.is_available
        fake_openai.assert_not_called()
        with pytest.raises(RuntimeError):
            provider.complete("s", "u")


class TestMockProvider:
    def test_records_calls_and_cycles_responses(self):
        mock = MockProvider(responses=["one", "two"])
        assert mock.complete("s", "u1").text == "one"
        assert mock.complete("s", "u2").text == "two"
        assert mock.complete("s", "u3").text == "two"
        assert [c["user"] for c in mock.calls] == ["u1", "u2", "u3"]
        assert mock.is_available
