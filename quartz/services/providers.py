"""
AI Providers — Chat-completion backends

Supports: OpenAI, DeepSeek (OpenAI-compatible endpoint)
Both go through the openai SDK; only the base URL and key differ.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from typing import List, Optional

import openai

from ..config import AIConfig, PROVIDERS
from ..core.errors import PreconditionError


@dataclass
class LLMResponse:
    """Completion text plus the token counts the API reported."""
    text: str
    input_tokens: int = 0
    output_tokens: int = 0

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens

    def format_tokens(self, symbols=None) -> str:
        if symbols:
            return f"{symbols.tokens_in}{self.input_tokens} {symbols.tokens_out}{self.output_tokens}"
        return f"in:{self.input_tokens} out:{self.output_tokens} total:{self.total_tokens}"


class LLMProvider(ABC):
    """One chat-completion backend."""

    @abstractmethod
    def complete(self, system: str, user: str, max_tokens: int = 2048) -> LLMResponse:
        """
        Send one system + user exchange. Blocks on network I/O, so
        async callers go through a worker thread.
        """

    @property
    @abstractmethod
    def is_available(self) -> bool:
        """True when credentials are present."""


class OpenAIProvider(LLMProvider):
    """OpenAI chat completions, or any endpoint speaking the same API."""

    def __init__(self, config: AIConfig):
        self.config = config
        self._client = None
        if config.api_key:
            self._client = openai.OpenAI(
                api_key=config.api_key,
                base_url=config.effective_base_url,
            )

    @property
    def is_available(self) -> bool:
        return self._client is not None

    def complete(self, system: str, user: str, max_tokens: int = 2048) -> LLMResponse:
        if self._client is None:
            raise RuntimeError(f"{self.config.provider} client not initialized")

        messages = [
            {"role": "system", "content": system},
            {"role": "user", "content": user},
        ]
        reply = self._client.chat.completions.create(
            model=self.config.effective_model,
            max_tokens=max_tokens,
            messages=messages,
        )

        # Some compatible endpoints omit usage
        usage = getattr(reply, 'usage', None)
        return LLMResponse(
            text=reply.choices[0].message.content or "",
            input_tokens=getattr(usage, 'prompt_tokens', 0) or 0,
            output_tokens=getattr(usage, 'completion_tokens', 0) or 0,
        )


class MockProvider(LLMProvider):
    """Canned responses for tests. Records every prompt it receives."""

    def __init__(self, text: str = "", responses: Optional[List[str]] = None):
        self.responses = list(responses) if responses else [text]
        self.calls: List[dict] = []

    @property
    def is_available(self) -> bool:
        return True

    def complete(self, system: str, user: str, max_tokens: int = 2048) -> LLMResponse:
        self.calls.append({"system": system, "user": user, "max_tokens": max_tokens})
        text = self.responses[min(len(self.calls), len(self.responses)) - 1]
        return LLMResponse(text=text)


def get_provider(config: AIConfig, model: Optional[str] = None) -> LLMProvider:
    """
    Get a provider for the AI configuration.

    Args:
        config: AI section of the configuration
        model: Per-invocation model override (--model)

    Raises:
        PreconditionError: Unknown provider or missing API key
    """
    if model:
        config = replace(config, model=model)

    if config.provider not in PROVIDERS:
        raise PreconditionError(
            f"Unknown AI provider '{config.provider}'.",
            remediation="quartz set config --key ai.provider --value openai",
        )

    provider = OpenAIProvider(config)
    if not provider.is_available:
        raise PreconditionError(
            f"{config.provider} API key is required for this command.",
            remediation=f"export {config.api_key_env}=<key>",
        )
    return provider


def get_provider_status(config: AIConfig) -> str:
    """Human-readable provider status."""
    if config.provider not in PROVIDERS:
        return f"Unknown provider '{config.provider}'"
    if not config.api_key:
        return f"AI not configured (set {config.api_key_env} environment variable)"
    return f"{config.provider}: {config.effective_model}"
