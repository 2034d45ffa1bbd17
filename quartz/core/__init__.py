"""
Core — Routing engine for Quartz CLI

Contains the verb/object command machinery:
- Enums: Closed verb, object and parameter-type vocabularies
- Registry: Indexed catalog of command definitions
- Verbs / Objects: Token resolution, suggestions, context hooks
- Parameters: Named-parameter and positional parsing
- Parser: argv to ParsedCommand
- Executor / Middleware: Ordered pipeline around handlers
- Dispatcher: Parse, validate, execute, help
"""

from .enums import Verb, Object, ParameterType, OBJECTLESS_VERBS, DESTRUCTIVE_VERBS, DEFAULT_CATEGORY
from .errors import (
    QuartzError, ParseError, CommandValidationError,
    PreconditionError, ExecutionError, RegistryConflictError
)
from .models import (
    ParameterDefinition, CommandDefinition, ParsedCommand,
    ValidationResult, ExecutionResult, ExecutionContext
)
from .registry import CommandRegistry, RegistryStats
from .verbs import VerbResolver, VerbParseResult
from .objects import ObjectResolver, ObjectParseResult, ObjectStats
from .parameters import ParameterParser, ParameterParseResult, GLOBAL_PARAMETERS
from .parser import CommandParser
from .executor import Executor, Middleware, FunctionMiddleware
from .middleware import (
    ContextValidation, ConfigPrecondition, ObjectContextPrecondition,
    DestructiveConfirmation, DryRun, ErrorTranslation,
    ExecutionLogging, SlowOperationWarning, require_repository
)
from .help import HelpRenderer
from .dispatcher import Dispatcher

__all__ = [
    # Vocabulary
    "Verb", "Object", "ParameterType", "OBJECTLESS_VERBS", "DESTRUCTIVE_VERBS", "DEFAULT_CATEGORY",
    # Errors
    "QuartzError", "ParseError", "CommandValidationError",
    "PreconditionError", "ExecutionError", "RegistryConflictError",
    # Models
    "ParameterDefinition", "CommandDefinition", "ParsedCommand",
    "ValidationResult", "ExecutionResult", "ExecutionContext",
    # Registry and resolvers
    "CommandRegistry", "RegistryStats",
    "VerbResolver", "VerbParseResult",
    "ObjectResolver", "ObjectParseResult", "ObjectStats",
    "ParameterParser", "ParameterParseResult", "GLOBAL_PARAMETERS",
    "CommandParser",
    # Pipeline
    "Executor", "Middleware", "FunctionMiddleware",
    "ContextValidation", "ConfigPrecondition", "ObjectContextPrecondition",
    "DestructiveConfirmation", "DryRun", "ErrorTranslation",
    "ExecutionLogging", "SlowOperationWarning", "require_repository",
    "HelpRenderer",
    "Dispatcher",
]
