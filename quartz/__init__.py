"""
Quartz — Verb/object command line for git and AI workflows

Every command reads as <verb> <object> [options]. Mistyped tokens get
suggestions, destructive verbs ask first, --dry-run shows the plan.

Usage:
    quartz init config --provider openai
    quartz create branch --name feature/login --checkout
    quartz delete branch old-feature --force
    quartz generate commit --commit
    quartz generate review --staged
    quartz generate pr --base main
    quartz generate changelog --from v1.0.0
    quartz set config --key ai.model --value gpt-4o
    quartz help create branch
"""

__version__ = "0.1.0"

# Routing engine
from .core.enums import Verb, Object, ParameterType
from .core.errors import (
    QuartzError, ParseError, CommandValidationError,
    PreconditionError, ExecutionError, RegistryConflictError
)
from .core.models import (
    ParameterDefinition, CommandDefinition, ParsedCommand,
    ExecutionContext, ExecutionResult, ValidationResult
)
from .core.registry import CommandRegistry
from .core.parser import CommandParser
from .core.executor import Executor, Middleware
from .core.dispatcher import Dispatcher

# Command catalog
from .commands import build_registry, register_all

# Presentation / i18n
from .presentation.symbols import get_symbols, SymbolSet, UNICODE, ASCII
from .presentation.logger import ConsoleLogger
from .i18n import Translator

# Config (stays at root)
from .config import Config, ConfigManager, get_config

__all__ = [
    '__version__',
    # Engine
    'Verb', 'Object', 'ParameterType',
    'QuartzError', 'ParseError', 'CommandValidationError',
    'PreconditionError', 'ExecutionError', 'RegistryConflictError',
    'ParameterDefinition', 'CommandDefinition', 'ParsedCommand',
    'ExecutionContext', 'ExecutionResult', 'ValidationResult',
    'CommandRegistry', 'CommandParser', 'Executor', 'Middleware', 'Dispatcher',
    # Catalog
    'build_registry', 'register_all',
    # Presentation
    'get_symbols', 'SymbolSet', 'UNICODE', 'ASCII', 'ConsoleLogger', 'Translator',
    # Config
    'Config', 'ConfigManager', 'get_config',
]
