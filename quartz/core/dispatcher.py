"""
Dispatcher — Parse, validate and execute in one call

Callers of dispatch() see success or an exception, never a failed
ExecutionResult. The registry is passed in explicitly so tests can
build isolated instances.
"""

from typing import List, Optional, Sequence, Union

from .enums import Object, Verb
from .errors import ExecutionError, ParseError
from .executor import Executor, Middleware, MiddlewareFunction
from .help import HelpRenderer
from .middleware import (
    GIT_OBJECTS,
    ConfigPrecondition,
    ConfirmFunction,
    ContextValidation,
    DestructiveConfirmation,
    DryRun,
    ErrorTranslation,
    ExecutionLogging,
    ObjectContextPrecondition,
    RepositoryProbe,
    SlowOperationWarning,
    require_repository,
)
from .models import CommandDefinition, ExecutionContext, ExecutionResult, ParsedCommand, ValidationResult
from .parser import CommandParser
from .registry import CommandRegistry, RegistryStats


class Dispatcher:
    """Front door of the routing engine."""

    def __init__(
        self,
        registry: CommandRegistry,
        parser: Optional[CommandParser] = None,
        executor: Optional[Executor] = None,
        program: str = "quartz"
    ):
        self.registry = registry
        self.parser = parser or CommandParser(registry)
        self.executor = executor or Executor()
        self.help = HelpRenderer(registry, self.parser.parameters, program=program)

    async def parse_and_dispatch(self, argv: Sequence[str], context: ExecutionContext) -> ExecutionResult:
        """
        Parse argv and dispatch it.

        Raises:
            ParseError: All parse/validation errors joined into one message
            ExecutionError: The pipeline reported failure
        """
        command, validation = self.parser.parse_and_validate(argv)

        if not validation.valid or command is None:
            errors = validation.errors or ["Failed to parse command"]
            raise ParseError(f"Command parsing failed: {'; '.join(errors)}", errors)

        if context.logger is not None:
            for warning in validation.warnings:
                context.logger.warn(warning)

        return await self.dispatch(command, context)

    async def dispatch(self, command: ParsedCommand, context: ExecutionContext) -> ExecutionResult:
        """Execute an already parsed command. Raises ExecutionError on failure."""
        definition = self.registry.get(command.verb, command.object)
        if definition is None:
            raise ExecutionError(f"Command not found: {command.name}")

        context.dispatcher = self
        result = await self.executor.execute(definition, command, context)

        if not result.success:
            raise ExecutionError(result.error or "Command execution failed") from result.exception
        return result

    def use(self, middleware: Union[Middleware, MiddlewareFunction]) -> None:
        self.executor.use(middleware)

    def setup_default_middleware(
        self,
        probe: Optional[RepositoryProbe] = None,
        confirm: Optional[ConfirmFunction] = None
    ) -> None:
        """
        Install the built-in stages in their default order.

        Args:
            probe: Repository probe for git-bound objects
                (default: quartz.services.git.probe_repository)
            confirm: Async confirmation prompt
                (default: quartz.services.prompts.confirm)
        """
        if probe is None:
            from ..services.git import probe_repository
            probe = probe_repository
        if confirm is None:
            from ..services.prompts import confirm

        objects = self.parser.objects
        hook = require_repository(probe)
        for obj in GIT_OBJECTS:
            objects.register_context_hook(obj, hook)

        self.use(ContextValidation())
        self.use(ConfigPrecondition())
        self.use(ObjectContextPrecondition(objects))
        self.use(DestructiveConfirmation(confirm))
        self.use(DryRun())
        self.use(ErrorTranslation())
        self.use(ExecutionLogging())
        self.use(SlowOperationWarning())

    def generate_help(
        self,
        verb: Union[Verb, str, None] = None,
        obj: Union[Object, str, None] = None
    ) -> str:
        return self.help.render(verb, obj)

    def get_suggestions(self, partial_args: Sequence[str]) -> List[str]:
        return self.parser.get_suggestions(partial_args)

    def get_stats(self) -> RegistryStats:
        return self.registry.get_stats()

    def list_commands(self) -> List[str]:
        return [cmd.name for cmd in self.registry.list()]

    def has_command(self, verb: Verb, obj: Object) -> bool:
        return self.registry.has(verb, obj)

    def get_command(self, verb: Verb, obj: Object) -> Optional[CommandDefinition]:
        return self.registry.get(verb, obj)

    def validate_command(self, argv: Sequence[str]) -> ValidationResult:
        """Validate without executing."""
        _, validation = self.parser.parse_and_validate(argv)
        return validation
