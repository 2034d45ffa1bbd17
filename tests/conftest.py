"""
Shared pytest fixtures for the Quartz test suite.

Every test runs with an isolated user config directory and without
provider credentials, so nothing on the developer's machine leaks in.

Usage in tests:
    def test_something(dispatcher, make_context):
        context = make_context()
        asyncio.run(dispatcher.parse_and_dispatch(["version"], context))
        assert context.logger.lines == ["quartz 0.1.0"]
"""

from pathlib import Path
from typing import Any, List, Tuple

import pytest

from quartz.commands import build_registry
from quartz.config import Config, ConfigManager
from quartz.core.dispatcher import Dispatcher
from quartz.core.enums import Object, Verb
from quartz.core.models import CommandDefinition, ExecutionContext
from quartz.core.registry import CommandRegistry
from quartz.i18n import Translator
from quartz.presentation.symbols import ASCII


class RecordingLogger:
    """Logger collaborator that keeps every call for assertions."""

    def __init__(self):
        self.symbols = ASCII
        self.records: List[Tuple[str, str]] = []

    def _record(self, level: str, message: str, *details: Any) -> None:
        text = " ".join([message] + [str(d) for d in details])
        self.records.append((level, text))

    def info(self, message, *details):
        self._record("info", message, *details)

    def success(self, message, *details):
        self._record("success", message, *details)

    def warn(self, message, *details):
        self._record("warn", message, *details)

    def error(self, message, *details):
        self._record("error", message, *details)

    def debug(self, message, *details):
        self._record("debug", message, *details)

    def line(self, text=""):
        self._record("line", text)

    def messages(self, level: str) -> List[str]:
        return [text for lvl, text in self.records if lvl == level]

    @property
    def lines(self) -> List[str]:
        return self.messages("line")

    @property
    def output(self) -> str:
        return "\n".join(text for _, text in self.records)


async def noop_handler(context):
    """Terminal handler that records that it ran."""
    context.logger.info("handler ran")


def make_command(verb=Verb.CREATE, obj=Object.BRANCH, handler=noop_handler, **kwargs) -> CommandDefinition:
    kwargs.setdefault("description", f"{verb.value} {obj.value}")
    return CommandDefinition(verb=verb, object=obj, handler=handler, **kwargs)


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """Private user config dir, no credentials, no env overrides."""
    monkeypatch.setattr(ConfigManager, "USER_CONFIG_DIR", tmp_path / "user-config")
    for name in (
        "OPENAI_API_KEY", "DEEPSEEK_API_KEY", "GITHUB_TOKEN", "GITLAB_TOKEN",
        "QUARTZ_AI_PROVIDER", "QUARTZ_AI_MODEL", "QUARTZ_LANGUAGE",
        "QUARTZ_PROJECT_PATH", "QUARTZ_ASCII_ONLY", "QUARTZ_UNICODE",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def project_dir(tmp_path) -> Path:
    path = tmp_path / "project"
    path.mkdir()
    return path


@pytest.fixture
def registry() -> CommandRegistry:
    """Registry holding the built-in catalog."""
    return build_registry()


@pytest.fixture
def empty_registry() -> CommandRegistry:
    return CommandRegistry()


@pytest.fixture
def logger() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
def make_context(project_dir, logger):
    """
    Build an ExecutionContext with test collaborators.

    Example:
        context = make_context(config=Config(), language="zh")
    """

    def factory(config=None, language="en", cwd=None, **kwargs) -> ExecutionContext:
        return ExecutionContext(
            config=config if config is not None else Config(),
            logger=kwargs.pop("logger", logger),
            t=Translator(language),
            cwd=cwd or project_dir,
            env={},
            **kwargs,
        )

    return factory


@pytest.fixture
def dispatcher(registry) -> Dispatcher:
    """Dispatcher over the built-in catalog, no middleware installed."""
    return Dispatcher(registry)


@pytest.fixture
def command_factory():
    """make_command(verb, obj, handler=..., **definition_fields)"""
    return make_command
