"""
Object Resolver — Validates the object token and routes (verb, object)

Mirrors the verb resolver for the second token. Also owns the
per-object context-precondition hooks ("must run inside a git
repository"); those hooks are run by pipeline middleware, never
during parsing.
"""

import inspect
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, NamedTuple, Optional, Union

from .enums import DEFAULT_CATEGORY, Object, Verb
from .matching import format_suggestions, suggest
from .models import CommandDefinition, ExecutionContext, ValidationResult
from .registry import CommandRegistry


# hook(context) -> ValidationResult, sync or async
ContextHook = Callable[[ExecutionContext], Union[ValidationResult, Awaitable[ValidationResult]]]


class ObjectParseResult(NamedTuple):
    object: Optional[Object]
    remaining_args: List[str]
    error: Optional[str] = None


@dataclass(frozen=True)
class ObjectStats:
    total_commands: int
    verbs_count: int
    categories_count: int
    deprecated_count: int


class ObjectResolver:
    """Object-level validation, routing and context hooks."""

    def __init__(self, registry: CommandRegistry):
        self.registry = registry
        self._context_hooks: Dict[Object, List[ContextHook]] = {}

    def validate_object(self, token: str) -> ValidationResult:
        result = ValidationResult()

        if not token or not token.strip():
            result.add_error("Object cannot be empty")
            return result

        obj = Object.from_token(token)
        if obj is None:
            valid = ", ".join(o.value for o in Object)
            result.add_error(f'Invalid object: "{token}". Available objects: {valid}')
            return result

        commands = self.registry.find_by_object(obj)
        if not commands:
            result.add_warning(f'Object "{token}" is valid but has no registered commands')
        elif all(cmd.deprecated for cmd in commands):
            result.add_warning(f'All commands for object "{token}" are deprecated')

        return result

    def generate_suggestions(self, token: str, verb: Optional[Verb] = None) -> List[str]:
        """Up to three registered objects (for verb, if given) resembling token."""
        if verb is not None:
            candidates = [o.value for o in self.get_objects_for_verb(verb)]
        else:
            candidates = [o.value for o in self.registry.available_objects()]
        return suggest(token, candidates)

    def parse_object(self, args: List[str], verb: Optional[Verb] = None) -> ObjectParseResult:
        """
        Consume args[0] as the object.

        With a verb, an unknown or mismatched token's error lists the
        objects valid for that verb instead of the whole vocabulary.
        """
        if not args:
            if verb is not None:
                objects = ", ".join(o.value for o in self.get_objects_for_verb(verb))
                return ObjectParseResult(
                    None, list(args),
                    f'No object provided. Available objects for "{verb.value}": {objects}'
                )
            return ObjectParseResult(None, list(args), "No object provided")

        token = args[0]
        validation = self.validate_object(token)
        if not validation.valid:
            hint = format_suggestions(self.generate_suggestions(token, verb))
            if verb is not None:
                objects = ", ".join(o.value for o in self.get_objects_for_verb(verb))
                message = (
                    f'Invalid object: "{token}". '
                    f'Available objects for "{verb.value}": {objects}'
                )
            else:
                message = ", ".join(validation.errors)
            return ObjectParseResult(None, list(args), f"{message}{hint}")

        return ObjectParseResult(Object(token), list(args[1:]))

    def route(self, verb: Verb, obj: Object) -> Optional[CommandDefinition]:
        return self.registry.get(verb, obj)

    def get_objects_for_verb(self, verb: Verb) -> List[Object]:
        return [cmd.object for cmd in self.registry.find_by_verb(verb)]

    def get_possible_verbs(self, obj: Object) -> List[Verb]:
        return [cmd.verb for cmd in self.registry.find_by_object(obj)]

    def get_commands_for_object(self, obj: Object) -> List[CommandDefinition]:
        return self.registry.find_by_object(obj)

    def find_best_match(self, obj: Object, partial_verb: Optional[str] = None) -> Optional[CommandDefinition]:
        """Exact verb, then prefix match, then the object's first command."""
        commands = self.registry.find_by_object(obj)
        if not commands:
            return None
        if not partial_verb:
            return commands[0]

        for cmd in commands:
            if cmd.verb.value == partial_verb:
                return cmd

        prefix = partial_verb.lower()
        for cmd in commands:
            if cmd.verb.value.startswith(prefix):
                return cmd
        return commands[0]

    def get_object_stats(self, obj: Object) -> ObjectStats:
        commands = self.registry.find_by_object(obj)
        return ObjectStats(
            total_commands=len(commands),
            verbs_count=len({cmd.verb for cmd in commands}),
            categories_count=len({cmd.category or DEFAULT_CATEGORY for cmd in commands}),
            deprecated_count=sum(1 for cmd in commands if cmd.deprecated),
        )

    def find_related_objects(self, obj: Object) -> List[Object]:
        """Objects sharing at least one verb with obj."""
        verbs = set(self.get_possible_verbs(obj))
        return [
            other for other in self.registry.available_objects()
            if other != obj and verbs.intersection(self.get_possible_verbs(other))
        ]

    # -------------------------------------------------------------------------
    # Context-precondition hooks
    # -------------------------------------------------------------------------

    def register_context_hook(self, obj: Object, hook: ContextHook) -> None:
        self._context_hooks.setdefault(obj, []).append(hook)

    def clear_context_hooks(self, obj: Optional[Object] = None) -> None:
        if obj is None:
            self._context_hooks.clear()
        else:
            self._context_hooks.pop(obj, None)

    def has_context_hooks(self, obj: Object) -> bool:
        return bool(self._context_hooks.get(obj))

    async def validate_object_context(self, obj: Object, context: ExecutionContext) -> ValidationResult:
        """Run every hook registered for obj and merge their results."""
        result = ValidationResult()
        for hook in self._context_hooks.get(obj, []):
            outcome: Any = hook(context)
            if inspect.isawaitable(outcome):
                outcome = await outcome
            result.merge(outcome)
        return result
