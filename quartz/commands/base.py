"""
Base — Shared plumbing for command handlers

Handlers receive only the ExecutionContext. These helpers turn it into
the collaborators a handler needs (config manager, git, AI provider)
and push blocking calls onto a worker thread.
"""

import asyncio
from typing import Any, Callable, Optional, TypeVar

from ..config import ConfigManager
from ..core.models import ExecutionContext, ParameterDefinition
from ..presentation.symbols import SymbolSet, get_symbols
from ..services import providers
from ..services.git import GitIntegration
from ..services.providers import LLMResponse


T = TypeVar("T")

# Accepted by every AI command
MODEL_PARAMETER = ParameterDefinition(
    name="model",
    description="Override the configured AI model for this run",
)


async def run_blocking(func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
    """Run a blocking call in a worker thread."""
    return await asyncio.to_thread(func, *args, **kwargs)


def config_manager(context: ExecutionContext) -> ConfigManager:
    return ConfigManager(context.cwd)


def git(context: ExecutionContext) -> GitIntegration:
    return GitIntegration(context.cwd)


def scope_of(context: ExecutionContext) -> str:
    """--global writes the user file, otherwise the project file."""
    return "user" if context.parameters.get("global") else "project"


def symbols_for(context: ExecutionContext) -> SymbolSet:
    logger_symbols = getattr(context.logger, "symbols", None)
    if isinstance(logger_symbols, SymbolSet):
        return logger_symbols
    preference = getattr(getattr(context.config, "display", None), "symbols", None)
    return get_symbols(preference)


def language_of(context: ExecutionContext) -> str:
    display = getattr(context.config, "display", None)
    return getattr(display, "language", None) or "en"


async def complete(
    context: ExecutionContext,
    system: str,
    user: str,
    model: Optional[str] = None,
    max_tokens: int = 2048
) -> LLMResponse:
    """
    One chat completion with the configured provider.

    Raises:
        PreconditionError: No API key / unknown provider
    """
    provider = providers.get_provider(context.config.ai, model=model)
    response = await run_blocking(provider.complete, system, user, max_tokens)
    context.logger.debug(context.t(
        "ai.usage", input=response.input_tokens, output=response.output_tokens
    ))
    return response


def one_of(choices):
    """Validator accepting only the given raw values."""
    choices = tuple(choices)

    def validate(raw):
        if raw in choices:
            return True
        return f"must be one of: {', '.join(choices)}"

    return validate
