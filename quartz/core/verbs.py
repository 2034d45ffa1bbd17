"""
Verb Resolver — Validates and extracts the verb token

First stage of parsing. Unknown verbs produce up to three
"did you mean" suggestions drawn from registered verbs.
"""

from typing import List, NamedTuple, Optional

from .enums import Object, Verb
from .matching import format_suggestions, suggest
from .models import CommandDefinition, ValidationResult
from .registry import CommandRegistry


class VerbParseResult(NamedTuple):
    verb: Optional[Verb]
    remaining_args: List[str]
    error: Optional[str] = None


class VerbResolver:
    """Verb-level validation, routing help and suggestions."""

    def __init__(self, registry: CommandRegistry):
        self.registry = registry

    def validate_verb(self, token: str) -> ValidationResult:
        """
        Validate a verb token.

        Errors: empty token, token outside the verb vocabulary.
        Warnings: valid verb with no registered commands, or whose
        registered commands are all deprecated.
        """
        result = ValidationResult()

        if not token or not token.strip():
            result.add_error("Verb cannot be empty")
            return result

        verb = Verb.from_token(token)
        if verb is None:
            valid = ", ".join(v.value for v in Verb)
            result.add_error(f'Invalid verb: "{token}". Available verbs: {valid}')
            return result

        commands = self.registry.find_by_verb(verb)
        if not commands:
            result.add_warning(f'Verb "{token}" is valid but has no registered commands')
        elif all(cmd.deprecated for cmd in commands):
            result.add_warning(f'All commands for verb "{token}" are deprecated')

        return result

    def generate_suggestions(self, token: str) -> List[str]:
        """Up to three registered verbs resembling token."""
        candidates = [v.value for v in self.registry.available_verbs()]
        return suggest(token, candidates)

    def parse_verb(self, args: List[str]) -> VerbParseResult:
        """Consume args[0] as the verb."""
        if not args:
            return VerbParseResult(None, list(args), "No verb provided")

        token = args[0]
        validation = self.validate_verb(token)
        if not validation.valid:
            hint = format_suggestions(self.generate_suggestions(token))
            return VerbParseResult(None, list(args), f"{', '.join(validation.errors)}{hint}")

        return VerbParseResult(Verb(token), list(args[1:]))

    def get_possible_objects(self, verb: Verb) -> List[Object]:
        return [cmd.object for cmd in self.registry.find_by_verb(verb)]

    def get_commands_for_verb(self, verb: Verb) -> List[CommandDefinition]:
        return self.registry.find_by_verb(verb)

    def find_best_match(self, verb: Verb, partial_object: Optional[str] = None) -> Optional[CommandDefinition]:
        """Exact object, then prefix match, then the verb's first command."""
        commands = self.registry.find_by_verb(verb)
        if not commands:
            return None
        if not partial_object:
            return commands[0]

        for cmd in commands:
            if cmd.object.value == partial_object:
                return cmd

        prefix = partial_object.lower()
        for cmd in commands:
            if cmd.object.value.startswith(prefix):
                return cmd
        return commands[0]

    def validate_verb_object_combination(self, verb: Verb, obj: Object) -> ValidationResult:
        """Missing combination is an error; a deprecated one only warns."""
        result = ValidationResult()
        command = self.registry.get(verb, obj)

        if command is None:
            objects = ", ".join(o.value for o in self.get_possible_objects(verb))
            result.add_error(
                f'Command "{verb.value} {obj.value}" not found. '
                f'Available objects for "{verb.value}": {objects}'
            )
            return result

        if command.deprecated:
            result.add_warning(f'Command "{command.name}" is deprecated')
            if command.deprecation_message:
                result.add_warning(command.deprecation_message)

        return result

    def find_matching_verbs(self, partial: str) -> List[Verb]:
        """Registered verbs for autocomplete; empty partial matches all."""
        if partial == "":
            return self.registry.available_verbs()
        return self.registry.find_matching_verbs(partial)
