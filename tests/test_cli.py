"""
Tests for the CLI entry point

These tests validate:
- Exit codes for success, parse errors and command failures
- Autocomplete output
- Global options (--project, --version)
"""

import pytest
import yaml

from quartz import __version__
from quartz.cli import EXIT_FAILURE, EXIT_OK, EXIT_USAGE, build_parser, main
from quartz.core.dispatcher import Dispatcher
from quartz.core.errors import CommandValidationError, ExecutionError


@pytest.fixture
def quartz(project_dir):
    """quartz("show", "config") -> exit code, run against project_dir."""

    def run(*command):
        return main(["--project", str(project_dir), *command])

    return run


class TestExitCodes:
    def test_version_command(self, quartz, capsys):
        assert quartz("version") == EXIT_OK
        assert capsys.readouterr().out.strip() == f"quartz {__version__}"

    def test_empty_command_shows_help(self, quartz, capsys):
        assert quartz() == EXIT_OK
        out = capsys.readouterr().out
        assert "Usage: quartz <verb> <object> [options]" in out

    def test_parse_error(self, quartz, capsys):
        assert quartz("frobnicate", "branch") == EXIT_USAGE
        assert "Command parsing failed" in capsys.readouterr().err

    def test_missing_required_parameter(self, quartz, capsys):
        assert quartz("create", "branch") == EXIT_USAGE
        assert 'Required parameter "name" is missing' in capsys.readouterr().err

    def test_precondition_failure(self, quartz, capsys):
        assert quartz("generate", "commit") == EXIT_FAILURE
        assert "API key is required" in capsys.readouterr().err

    def test_handler_failure_reported_once(self, quartz, capsys):
        assert quartz("get", "config", "--key", "ai.secret") == EXIT_FAILURE
        assert capsys.readouterr().err.count("Unknown configuration key: ai.secret") == 1

    def test_failure_ahead_of_translation_is_shown(self, quartz, capsys, monkeypatch):
        async def reject(self, argv, context):
            cause = CommandValidationError("No logger provided in execution context")
            raise ExecutionError(str(cause)) from cause

        monkeypatch.setattr(Dispatcher, "parse_and_dispatch", reject)

        assert quartz("list", "platform") == EXIT_FAILURE
        assert "No logger provided in execution context" in capsys.readouterr().err


class TestProjectOption:
    def test_writes_into_project(self, quartz, project_dir):
        assert quartz("set", "config", "--key", "ai.provider", "--value", "deepseek") == EXIT_OK
        data = yaml.safe_load((project_dir / ".quartz" / "config.yaml").read_text(encoding="utf-8"))
        assert data["ai"]["provider"] == "deepseek"

    def test_reads_project_language(self, quartz, capsys):
        quartz("use", "language", "--name", "zh")
        capsys.readouterr()

        assert quartz("get", "config", "--key", "ai.base_url") == EXIT_OK
        assert capsys.readouterr().out.strip().endswith("ai.base_url 未设置")

    def test_env_default(self, monkeypatch, project_dir):
        monkeypatch.setenv("QUARTZ_PROJECT_PATH", str(project_dir))
        assert build_parser().parse_args([]).project == str(project_dir)


class TestComplete:
    def test_verbs(self, capsys):
        assert main(["--complete", "ge"]) == EXIT_OK
        assert capsys.readouterr().out.split() == ["get", "generate"]

    def test_objects(self, capsys):
        main(["--complete", "delete", ""])
        assert capsys.readouterr().out.splitlines() == ["delete profile", "delete branch"]


def test_version_flag(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["--version"])
    assert exc.value.code == 0
    assert capsys.readouterr().out.strip() == f"quartz {__version__}"
