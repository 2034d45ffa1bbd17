"""
Models — Data shapes shared by the registry, parser and executor

CommandDefinition is frozen once built; ParsedCommand and
ExecutionContext are per-invocation and discarded after dispatch.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple, Union

from .enums import DEFAULT_CATEGORY, Object, ParameterType, Verb


# Returns True when the raw value is acceptable, otherwise an error message
Validator = Callable[[Any], Union[bool, str]]

# Terminal handler: receives the context, may suspend on I/O
Handler = Callable[["ExecutionContext"], Awaitable[None]]


@dataclass(frozen=True)
class ParameterDefinition:
    """A single named parameter of a command."""
    name: str
    type: ParameterType = ParameterType.STRING
    required: bool = False
    default: Any = None
    description: str = ""
    aliases: Tuple[str, ...] = ()
    validator: Optional[Validator] = None

    @property
    def is_boolean(self) -> bool:
        return self.type is ParameterType.BOOLEAN

    @property
    def has_default(self) -> bool:
        return self.default is not None


@dataclass(frozen=True)
class CommandDefinition:
    """Static record binding a (verb, object) pair to its schema and handler."""
    verb: Verb
    object: Object
    description: str
    handler: Handler
    parameters: Tuple[ParameterDefinition, ...] = ()
    examples: Tuple[str, ...] = ()
    category: str = DEFAULT_CATEGORY
    deprecated: bool = False
    deprecation_message: Optional[str] = None

    @property
    def key(self) -> Tuple[Verb, Object]:
        return (self.verb, self.object)

    @property
    def name(self) -> str:
        """Display name, e.g. 'create branch'."""
        return f"{self.verb.value} {self.object.value}"


@dataclass
class ParsedCommand:
    """Validated, structured result of tokenizing one command line."""
    raw: List[str]
    verb: Verb
    object: Object
    parameters: Dict[str, Any] = field(default_factory=dict)
    args: List[str] = field(default_factory=list)

    @property
    def name(self) -> str:
        return f"{self.verb.value} {self.object.value}"


@dataclass
class ValidationResult:
    """Outcome of a validation step. Warnings never block continuation."""
    valid: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @classmethod
    def failure(cls, *errors: str) -> "ValidationResult":
        return cls(valid=False, errors=list(errors))

    def add_error(self, message: str) -> None:
        self.errors.append(message)
        self.valid = False

    def add_warning(self, message: str) -> None:
        self.warnings.append(message)

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        """Fold another result into this one (in place) and return self."""
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)
        self.valid = self.valid and other.valid and not self.errors
        return self


@dataclass
class ExecutionResult:
    """Outcome of one pass through the execution pipeline."""
    success: bool
    execution_time: float = 0.0  # milliseconds
    error: Optional[str] = None
    skipped: bool = False  # a middleware short-circuited before the handler
    exception: Optional[BaseException] = field(default=None, repr=False)


@dataclass
class ExecutionContext:
    """
    Per-invocation state plus injected collaborators.

    Attributes:
        command: ParsedCommand (bound by the executor)
        config: Configuration snapshot (quartz.config.Config)
        logger: Logger collaborator (info/warn/error/success/debug/line)
        t: Translator collaborator, called as t(key, **params)
        cwd: Working directory
        env: Environment snapshot
        dispatcher: Back-reference set by the dispatcher (help, autocomplete)
    """
    config: Any = None
    logger: Any = None
    t: Any = None
    cwd: Path = field(default_factory=Path.cwd)
    env: Dict[str, str] = field(default_factory=lambda: dict(os.environ))
    command: Optional[ParsedCommand] = None
    dispatcher: Any = None

    @property
    def parameters(self) -> Dict[str, Any]:
        return self.command.parameters if self.command else {}

    @property
    def args(self) -> List[str]:
        return self.command.args if self.command else []
