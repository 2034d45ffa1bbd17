"""
Help — Text rendering for the command catalog

Four views:
  verb + object   single command detail
  verb only       that verb's objects, grouped by category
  object only     that object's verbs, grouped by category
  neither         full catalog, grouped by category then verb

Accepts enum members or raw tokens; unknown tokens render a short
message with suggestions instead of raising.
"""

from collections import OrderedDict
from typing import Dict, List, Optional, Union

from .enums import Object, Verb
from .matching import format_suggestions, suggest
from .models import CommandDefinition
from .parameters import GLOBAL_PARAMETERS, ParameterParser, with_global_parameters
from .registry import CommandRegistry


DESCRIPTION_COLUMN = 24


class HelpRenderer:
    """Builds help text from registry contents."""

    def __init__(
        self,
        registry: CommandRegistry,
        parameters: Optional[ParameterParser] = None,
        program: str = "quartz"
    ):
        self.registry = registry
        self.parameters = parameters or ParameterParser()
        self.program = program

    def render(
        self,
        verb: Union[Verb, str, None] = None,
        obj: Union[Object, str, None] = None
    ) -> str:
        if verb is not None and not isinstance(verb, Verb):
            resolved = Verb.from_token(verb)
            if resolved is None:
                hint = format_suggestions(suggest(verb, [v.value for v in self.registry.available_verbs()]))
                return f'Unknown verb: "{verb}".{hint}\n'
            verb = resolved

        if obj is not None and not isinstance(obj, Object):
            resolved_obj = Object.from_token(obj)
            if resolved_obj is None:
                hint = format_suggestions(suggest(obj, [o.value for o in self.registry.available_objects()]))
                return f'Unknown object: "{obj}".{hint}\n'
            obj = resolved_obj

        if verb is not None and obj is not None:
            definition = self.registry.get(verb, obj)
            if definition is None:
                return f'Command "{verb.value} {obj.value}" not found.\n'
            return self.command_help(definition)
        if verb is not None:
            return self.verb_help(verb)
        if obj is not None:
            return self.object_help(obj)
        return self.catalog_help()

    def command_help(self, definition: CommandDefinition) -> str:
        """Description, parameters, examples and deprecation notice."""
        lines = [f"{self.program} {definition.name}", ""]

        if definition.deprecated:
            notice = definition.deprecation_message or "This command is deprecated."
            lines.extend([f"DEPRECATED: {notice}", ""])

        lines.extend(["Description:", f"  {definition.description}", ""])

        lines.append("Parameters:")
        lines.append(self.parameters.generate_parameter_help(
            with_global_parameters(definition.parameters)
        ).rstrip("\n"))
        lines.append("")

        if definition.examples:
            lines.append("Examples:")
            lines.extend(f"  {example}" for example in definition.examples)
            lines.append("")

        lines.extend(["Usage:", f"  {self.program} {definition.name} [options]"])
        return "\n".join(lines) + "\n"

    def verb_help(self, verb: Verb) -> str:
        commands = self.registry.find_by_verb(verb)
        if not commands:
            return f'No commands registered for verb "{verb.value}".\n'

        lines = [f'Objects for "{verb.value}":', ""]
        for category, group in _by_category(commands).items():
            lines.append(f"{category}:")
            lines.extend(_row(cmd.object.value, cmd) for cmd in group)
            lines.append("")
        lines.append(f"Run '{self.program} help {verb.value} <object>' for details.")
        return "\n".join(lines) + "\n"

    def object_help(self, obj: Object) -> str:
        commands = self.registry.find_by_object(obj)
        if not commands:
            return f'No commands registered for object "{obj.value}".\n'

        lines = [f'Verbs for "{obj.value}":', ""]
        for category, group in _by_category(commands).items():
            lines.append(f"{category}:")
            lines.extend(_row(cmd.verb.value, cmd) for cmd in group)
            lines.append("")
        lines.append(f"Run '{self.program} help <verb> {obj.value}' for details.")
        return "\n".join(lines) + "\n"

    def catalog_help(self) -> str:
        """Every registered command, by category then verb."""
        lines = [
            f"Usage: {self.program} <verb> <object> [options]",
            "",
        ]

        for category, group in _by_category(self.registry.list()).items():
            lines.append(f"{category}:")
            by_verb: Dict[Verb, List[CommandDefinition]] = OrderedDict()
            for cmd in group:
                by_verb.setdefault(cmd.verb, []).append(cmd)
            for commands in by_verb.values():
                lines.extend(_row(cmd.name, cmd) for cmd in commands)
            lines.append("")

        lines.append("Global options:")
        for param in GLOBAL_PARAMETERS:
            lines.append(f"  --{param.name:<{DESCRIPTION_COLUMN - 4}}{param.description}")
        lines.append("")
        lines.append(f"Run '{self.program} help <verb> [object]' for more information.")
        return "\n".join(lines) + "\n"


def _by_category(commands: List[CommandDefinition]) -> Dict[str, List[CommandDefinition]]:
    groups: Dict[str, List[CommandDefinition]] = OrderedDict()
    for cmd in commands:
        groups.setdefault(cmd.category, []).append(cmd)
    return groups


def _row(label: str, cmd: CommandDefinition) -> str:
    suffix = " (deprecated)" if cmd.deprecated else ""
    return f"  {label:<{DESCRIPTION_COLUMN - 2}}{cmd.description}{suffix}"
