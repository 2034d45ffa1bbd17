"""
Command Parser — Raw argv to a validated ParsedCommand

Composes the verb resolver, object resolver and parameter parser.
Verbs in OBJECTLESS_VERBS (help, version) take no object token; the
canonical object is substituted and parameter parsing proceeds the
same way as for every other command.
"""

from typing import List, Optional, Sequence, Tuple

from .enums import OBJECTLESS_VERBS
from .errors import ParseError
from .models import ParsedCommand, ValidationResult
from .objects import ObjectResolver
from .parameters import ParameterParser, with_global_parameters
from .registry import CommandRegistry
from .verbs import VerbResolver


class CommandParser:
    """Turns raw argv into a structured, validated command."""

    def __init__(
        self,
        registry: CommandRegistry,
        verbs: Optional[VerbResolver] = None,
        objects: Optional[ObjectResolver] = None,
        parameters: Optional[ParameterParser] = None
    ):
        self.registry = registry
        self.verbs = verbs or VerbResolver(registry)
        self.objects = objects or ObjectResolver(registry)
        self.parameters = parameters or ParameterParser()

    def parse(self, argv: Sequence[str]) -> ParsedCommand:
        """
        Parse argv into a ParsedCommand.

        Raises:
            ParseError: Unknown verb/object, unknown combination, or
                parameter errors (all parameter errors are reported).
        """
        argv = list(argv)
        if not argv:
            raise ParseError("No command provided")

        verb_result = self.verbs.parse_verb(argv)
        if verb_result.error:
            raise ParseError(verb_result.error)
        verb = verb_result.verb

        if verb in OBJECTLESS_VERBS:
            obj = OBJECTLESS_VERBS[verb]
            remaining = verb_result.remaining_args
        else:
            object_result = self.objects.parse_object(verb_result.remaining_args, verb=verb)
            if object_result.error:
                raise ParseError(object_result.error)
            obj = object_result.object
            remaining = object_result.remaining_args

        definition = self.objects.route(verb, obj)
        if definition is None:
            combination = self.verbs.validate_verb_object_combination(verb, obj)
            raise ParseError("; ".join(combination.errors), combination.errors)

        param_result = self.parameters.parse_parameters(remaining, definition.parameters)
        if not param_result.validation.valid:
            errors = param_result.validation.errors
            raise ParseError(f"Parameter validation failed: {'; '.join(errors)}", errors)

        return ParsedCommand(
            raw=argv,
            verb=verb,
            object=obj,
            parameters=param_result.parameters,
            args=param_result.remaining_args,
        )

    def validate(self, command: ParsedCommand) -> ValidationResult:
        """Check verb, object, combination, parameters and deprecation."""
        result = ValidationResult()

        result.merge(self.verbs.validate_verb(command.verb.value))
        result.merge(self.objects.validate_object(command.object.value))
        result.merge(self.verbs.validate_verb_object_combination(command.verb, command.object))

        definition = self.registry.get(command.verb, command.object)
        if definition is not None:
            result.merge(self.parameters.validate_parameters(
                command.parameters, with_global_parameters(definition.parameters)
            ))

        return result

    def parse_and_validate(self, argv: Sequence[str]) -> Tuple[Optional[ParsedCommand], ValidationResult]:
        """Parse and validate in one step. Never raises for user input."""
        try:
            command = self.parse(argv)
        except ParseError as e:
            return None, ValidationResult(valid=False, errors=list(e.errors))
        return command, self.validate(command)

    def get_suggestions(self, partial_args: Sequence[str]) -> List[str]:
        """
        Autocomplete candidates for a partial command line.

        0 tokens: every verb. 1 token: verbs with that prefix.
        2+ tokens: objects of the resolved verb with the second token's
        prefix. Resolution failures yield an empty list.
        """
        partial_args = list(partial_args)
        if not partial_args:
            return [verb.value for verb in self.verbs.find_matching_verbs("")]

        if len(partial_args) == 1:
            return [verb.value for verb in self.verbs.find_matching_verbs(partial_args[0])]

        verb_result = self.verbs.parse_verb(partial_args)
        if verb_result.error or verb_result.verb is None:
            return []

        prefix = partial_args[1].lower()
        return [
            f"{verb_result.verb.value} {obj.value}"
            for obj in self.verbs.get_possible_objects(verb_result.verb)
            if obj.value.startswith(prefix)
        ]
