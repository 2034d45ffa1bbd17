"""
Tests for Dispatcher — End-to-end parse, pipeline, handler

These tests validate the canonical scenarios:
- Create a branch with a value token
- Help catalog
- Destructive delete declined by the user
- Dry run
- Mistyped object with suggestions
plus failure surfacing, default middleware order and the façade queries.
"""

import asyncio
from unittest.mock import MagicMock

import pytest

from quartz.core.dispatcher import Dispatcher
from quartz.core.enums import Object, Verb
from quartz.core.errors import ExecutionError, ParseError, PreconditionError
from quartz.core.middleware import (
    ConfigPrecondition,
    ContextValidation,
    DestructiveConfirmation,
    DryRun,
    ErrorTranslation,
    ExecutionLogging,
    ObjectContextPrecondition,
    SlowOperationWarning,
)
from quartz.core.models import ParsedCommand
from quartz.core.registry import CommandRegistry


def in_repository(cwd):
    return {"root": cwd}


def declining(answers):
    async def confirm(message, default=False):
        answers.append(message)
        return False
    return confirm


@pytest.fixture
def fake_git(monkeypatch):
    """GitIntegration stand-in for the branch handlers."""
    repo = MagicMock()
    monkeypatch.setattr("quartz.commands.branch.git", lambda context: repo)
    return repo


@pytest.fixture
def pipeline(registry):
    """Dispatcher with the default middleware, a repository and a declining prompt."""
    answers = []
    dispatcher = Dispatcher(registry)
    dispatcher.setup_default_middleware(probe=in_repository, confirm=declining(answers))
    dispatcher.answers = answers
    return dispatcher


class TestScenarios:
    """Canonical end-to-end flows."""

    def test_create_branch(self, pipeline, make_context, fake_git, logger):
        """create branch --name feature/x runs the handler with the name."""
        result = asyncio.run(pipeline.parse_and_dispatch(
            ["create", "branch", "--name", "feature/x"], make_context()
        ))

        assert result.success
        assert not result.skipped
        fake_git.create_branch.assert_called_once_with("feature/x", None, False)
        assert logger.messages("success") == ["Created branch feature/x"]

    def test_help_catalog(self, pipeline, make_context, logger):
        """help renders the whole catalog through the dispatcher."""
        result = asyncio.run(pipeline.parse_and_dispatch(["help"], make_context()))

        assert result.success
        text = "\n".join(logger.lines)
        assert text.startswith("Usage: quartz <verb> <object> [options]")
        assert "create branch" in text
        assert "git-workflow:" in text

    def test_delete_declined(self, pipeline, make_context, fake_git, logger):
        """Declining the prompt skips the handler but is not a failure."""
        result = asyncio.run(pipeline.parse_and_dispatch(
            ["delete", "branch", "old-feature"], make_context()
        ))

        assert result.success
        assert result.skipped
        assert len(pipeline.answers) == 1
        fake_git.delete_branch.assert_not_called()
        assert "Operation cancelled by user." in logger.messages("info")

    def test_delete_forced(self, pipeline, make_context, fake_git):
        result = asyncio.run(pipeline.parse_and_dispatch(
            ["delete", "branch", "old-feature", "--force"], make_context()
        ))

        assert not result.skipped
        assert pipeline.answers == []
        fake_git.delete_branch.assert_called_once_with("old-feature", True)

    def test_delete_forced_by_alias(self, pipeline, make_context, fake_git):
        """-f is stored under the parameter name, so it skips the prompt too."""
        result = asyncio.run(pipeline.parse_and_dispatch(
            ["delete", "branch", "old-feature", "-f"], make_context()
        ))

        assert not result.skipped
        assert pipeline.answers == []
        fake_git.delete_branch.assert_called_once_with("old-feature", True)

    def test_dry_run(self, pipeline, make_context, fake_git, logger):
        """--dry-run reports the plan and never touches git."""
        result = asyncio.run(pipeline.parse_and_dispatch(
            ["create", "branch", "--name", "feature/x", "--dry-run"], make_context()
        ))

        assert result.success
        assert result.skipped
        fake_git.create_branch.assert_not_called()
        assert "Would execute: create branch" in logger.messages("info")

    def test_mistyped_object(self, pipeline, make_context):
        """create brnch fails parsing with the verb's objects and a suggestion."""
        with pytest.raises(ParseError) as exc:
            asyncio.run(pipeline.parse_and_dispatch(["create", "brnch"], make_context()))

        message = str(exc.value)
        assert message.startswith("Command parsing failed:")
        assert 'Available objects for "create": profile, branch, commit' in message
        assert "Did you mean: branch?" in message


class TestFailures:
    """Failed results surface as ExecutionError."""

    def test_handler_failure_is_chained(self, empty_registry, command_factory, make_context):
        async def handler(context):
            raise ValueError("disk full")

        empty_registry.register(command_factory(handler=handler, parameters=()))
        dispatcher = Dispatcher(empty_registry)

        with pytest.raises(ExecutionError, match="disk full") as exc:
            asyncio.run(dispatcher.parse_and_dispatch(["create", "branch"], make_context()))
        assert isinstance(exc.value.__cause__, ValueError)

    def test_precondition_outside_repository(self, registry, make_context):
        dispatcher = Dispatcher(registry)
        dispatcher.setup_default_middleware(probe=lambda cwd: None, confirm=declining([]))

        with pytest.raises(ExecutionError, match="inside a git repository") as exc:
            asyncio.run(dispatcher.parse_and_dispatch(["list", "branch"], make_context()))
        assert isinstance(exc.value.__cause__, PreconditionError)

    def test_dispatch_unknown_command(self, make_context):
        dispatcher = Dispatcher(CommandRegistry())
        command = ParsedCommand(raw=[], verb=Verb.CREATE, object=Object.BRANCH)
        with pytest.raises(ExecutionError, match="Command not found: create branch"):
            asyncio.run(dispatcher.dispatch(command, make_context()))

    def test_warnings_logged(self, registry, make_context, logger, monkeypatch):
        """Deprecation warnings from validation reach the logger."""
        monkeypatch.setattr("quartz.commands.commit.git", lambda context: MagicMock(
            get_staged_files=MagicMock(return_value=[])
        ))
        asyncio.run(Dispatcher(registry).parse_and_dispatch(["create", "commit"], make_context()))
        assert any("deprecated" in w for w in logger.messages("warn"))


class TestSetup:
    """Default middleware and façade queries."""

    def test_default_order(self, pipeline):
        stages = [type(m) for m in pipeline.executor.middlewares]
        assert stages == [
            ContextValidation, ConfigPrecondition, ObjectContextPrecondition,
            DestructiveConfirmation, DryRun, ErrorTranslation,
            ExecutionLogging, SlowOperationWarning,
        ]
        assert pipeline.executor.middlewares[-1].threshold_ms == 5000

    def test_git_objects_get_repository_hook(self, pipeline):
        objects = pipeline.parser.objects
        for obj in (Object.PROJECT, Object.BRANCH, Object.COMMIT, Object.PR, Object.REVIEW, Object.CHANGELOG):
            assert objects.has_context_hooks(obj)
        assert not objects.has_context_hooks(Object.CONFIG)

    def test_dispatcher_reference_set(self, empty_registry, command_factory, make_context):
        seen = []

        async def handler(context):
            seen.append(context.dispatcher)

        empty_registry.register(command_factory(handler=handler, parameters=()))
        dispatcher = Dispatcher(empty_registry)
        asyncio.run(dispatcher.parse_and_dispatch(["create", "branch"], make_context()))
        assert seen == [dispatcher]

    def test_queries(self, dispatcher):
        assert dispatcher.has_command(Verb.CREATE, Object.BRANCH)
        assert dispatcher.get_command(Verb.CREATE, Object.BRANCH).category == "git-workflow"
        assert "create branch" in dispatcher.list_commands()
        assert dispatcher.get_stats().total_commands == len(dispatcher.list_commands())
        assert dispatcher.get_suggestions(["create", "b"]) == ["create branch"]

    def test_validate_command(self, dispatcher):
        assert dispatcher.validate_command(["create", "branch", "--name", "x"]).valid
        assert not dispatcher.validate_command(["create", "branch"]).valid
