"""
Tests for HelpRenderer — Help text views

These tests validate:
- Command detail (parameters, globals, examples, deprecation)
- Verb and object views grouped by category
- Catalog view with global options
- Unknown tokens render suggestions instead of raising
- help command routing from positional arguments
"""

import asyncio

import pytest

from quartz.core.enums import Object, Verb
from quartz.core.errors import ExecutionError
from quartz.core.help import HelpRenderer


@pytest.fixture
def renderer(registry):
    return HelpRenderer(registry)


class TestViews:
    """The four render branches."""

    def test_command_detail(self, renderer):
        text = renderer.render(Verb.CREATE, Object.BRANCH)
        assert text.startswith("quartz create branch\n")
        assert "Description:\n  Create a new git branch" in text
        assert "--name" in text
        assert "--checkout (-c)" in text
        assert "--dry-run" in text
        assert "Examples:\n  create branch --name feature/new-feature" in text
        assert "Usage:\n  quartz create branch [options]" in text

    def test_command_detail_from_tokens(self, renderer):
        assert renderer.render("create", "branch") == renderer.render(Verb.CREATE, Object.BRANCH)

    def test_deprecated_notice(self, renderer):
        text = renderer.render("create", "commit")
        assert 'DEPRECATED: "create commit" is deprecated' in text

    def test_verb_view(self, renderer):
        text = renderer.render("generate")
        assert text.startswith('Objects for "generate":')
        assert "ai-features:" in text
        for obj in ("commit", "review", "pr", "changelog"):
            assert f"  {obj}" in text

    def test_object_view(self, renderer):
        text = renderer.render(obj="commit")
        assert text.startswith('Verbs for "commit":')
        assert "(deprecated)" in text

    def test_catalog(self, renderer):
        text = renderer.render()
        lines = text.splitlines()
        assert lines[0] == "Usage: quartz <verb> <object> [options]"
        assert "configuration:" in lines
        assert "Global options:" in lines
        assert lines[-1] == "Run 'quartz help <verb> [object]' for more information."

    def test_custom_program_name(self, registry):
        text = HelpRenderer(registry, program="qz").render()
        assert text.startswith("Usage: qz ")


class TestUnknownTokens:
    """Help never raises for user input."""

    def test_unknown_verb(self, renderer):
        text = renderer.render("delte")
        assert text == 'Unknown verb: "delte". Did you mean: delete?\n'

    def test_unknown_object(self, renderer):
        assert renderer.render("create", "brnch").startswith('Unknown object: "brnch".')

    def test_unregistered_combination(self, renderer):
        assert renderer.render("delete", "config") == 'Command "delete config" not found.\n'

    def test_verb_without_commands(self, renderer):
        assert renderer.render("manage") == 'No commands registered for verb "manage".\n'


class TestHelpCommand:
    """help <verb> <object> through the dispatcher."""

    def run_help(self, dispatcher, make_context, *args):
        asyncio.run(dispatcher.parse_and_dispatch(["help", *args], make_context()))

    def test_verb_argument(self, dispatcher, make_context, logger):
        self.run_help(dispatcher, make_context, "create")
        assert logger.lines[0].startswith('Objects for "create":')

    def test_verb_and_object_arguments(self, dispatcher, make_context, logger):
        self.run_help(dispatcher, make_context, "create", "branch")
        assert logger.lines[0].startswith("quartz create branch")

    def test_object_only_argument(self, dispatcher, make_context, logger):
        self.run_help(dispatcher, make_context, "branch")
        assert logger.lines[0].startswith('Verbs for "branch":')

    def test_token_that_is_verb_and_object(self, dispatcher, make_context, logger):
        """'commit' is both a verb and an object; the verb view wins."""
        self.run_help(dispatcher, make_context, "commit")
        assert logger.lines[0] == 'No commands registered for verb "commit".'

    def test_requires_dispatcher(self, make_context):
        from quartz.commands.system import show_help
        with pytest.raises(ExecutionError):
            asyncio.run(show_help(make_context()))


class TestVersionCommand:
    def test_prints_version(self, dispatcher, make_context, logger):
        from quartz import __version__
        asyncio.run(dispatcher.parse_and_dispatch(["version"], make_context()))
        assert logger.lines == [f"quartz {__version__}"]
