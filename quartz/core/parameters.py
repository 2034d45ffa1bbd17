"""
Parameter Parser — Named parameters and positional operands

Grammar (left to right, last write wins):
  --name=value    assignment
  --name          boolean flag, or takes the next token as its value
  -x [value]      alias, boolean or followed by a value
  anything else   positional operand (kept in order)

After the scan, defaults fill absent parameters and required
parameters still absent are reported by name. Errors are collected,
never raised.
"""

import json
import math
from typing import Any, Dict, List, NamedTuple, Optional, Sequence, Tuple

from .enums import ParameterType
from .models import ParameterDefinition, ValidationResult


TRUE_WORDS = frozenset({"true", "1", "yes", "on"})
FALSE_WORDS = frozenset({"false", "0", "no", "off"})

# Accepted by every command; a command's own parameter of the same name wins
GLOBAL_PARAMETERS: Tuple[ParameterDefinition, ...] = (
    ParameterDefinition(
        name="dry-run",
        type=ParameterType.BOOLEAN,
        description="Show what would be executed without doing it",
    ),
    ParameterDefinition(
        name="force",
        type=ParameterType.BOOLEAN,
        description="Skip confirmation prompts",
    ),
)


class ParameterParseResult(NamedTuple):
    validation: ValidationResult
    parameters: Dict[str, Any]
    remaining_args: List[str]


def with_global_parameters(definitions: Sequence[ParameterDefinition]) -> List[ParameterDefinition]:
    """Command parameters followed by the global options it does not shadow."""
    own = list(definitions)
    names = {p.name for p in own}
    return own + [p for p in GLOBAL_PARAMETERS if p.name not in names]


class ParameterParser:
    """Tokenizes, type-checks and defaults command parameters."""

    def parse_parameters(
        self,
        args: Sequence[str],
        definitions: Sequence[ParameterDefinition],
        include_globals: bool = True
    ) -> ParameterParseResult:
        """
        Parse parameters from the tokens following verb and object.

        Args:
            args: Remaining tokens
            definitions: The command's parameter definitions
            include_globals: Also accept --dry-run / --force

        Returns:
            ParameterParseResult(validation, parameters, remaining_args)
        """
        if include_globals:
            definitions = with_global_parameters(definitions)
        by_name = {p.name: p for p in definitions}

        parameters: Dict[str, Any] = {}
        remaining: List[str] = []
        validation = ValidationResult()

        i = 0
        while i < len(args):
            arg = args[i]

            if arg.startswith("--") and len(arg) > 2:
                body = arg[2:]
                if "=" in body:
                    name, raw = body.split("=", 1)
                    param = by_name.get(name)
                    if param is None:
                        validation.add_error(f"Unknown parameter: {name}")
                    else:
                        self._assign(param, raw, parameters, validation)
                else:
                    param = by_name.get(body)
                    if param is None:
                        remaining.append(arg)
                    elif param.is_boolean:
                        parameters[param.name] = True
                    elif _has_value(args, i):
                        self._assign(param, args[i + 1], parameters, validation)
                        i += 1
                    else:
                        validation.add_error(f'Parameter "--{body}" requires a value')

            elif arg.startswith("-") and not arg.startswith("--") and len(arg) > 1:
                alias = arg[1:]
                param = _find_by_alias(definitions, alias)
                if param is None:
                    remaining.append(arg)
                elif param.is_boolean:
                    parameters[param.name] = True
                elif _has_value(args, i):
                    self._assign(param, args[i + 1], parameters, validation)
                    i += 1
                else:
                    validation.add_error(f'Parameter "-{alias}" requires a value')

            else:
                remaining.append(arg)

            i += 1

        for param in definitions:
            if param.name in parameters:
                continue
            if param.has_default:
                parameters[param.name] = param.default
            elif param.required:
                validation.add_error(f'Required parameter "{param.name}" is missing')

        return ParameterParseResult(validation, parameters, remaining)

    def _assign(
        self,
        param: ParameterDefinition,
        raw: str,
        parameters: Dict[str, Any],
        validation: ValidationResult
    ) -> None:
        value, error = coerce_value(param, raw)
        if error:
            validation.add_error(error)
            return

        if param.validator is not None:
            verdict = param.validator(raw)
            if verdict is not True:
                validation.add_error(f'Parameter "{param.name}" validation failed: {verdict}')
                return

        parameters[param.name] = value

    def validate_parameters(
        self,
        parameters: Dict[str, Any],
        definitions: Sequence[ParameterDefinition]
    ) -> ValidationResult:
        """Re-check an already parsed parameter map against its definitions."""
        result = ValidationResult()
        for param in definitions:
            value = parameters.get(param.name)
            if value is None:
                if param.required and not param.has_default:
                    result.add_error(f'Required parameter "{param.name}" is missing')
                continue
            if not _matches_type(param.type, value):
                result.add_error(f'Parameter "{param.name}" must be a {param.type.value}')
        return result

    def generate_parameter_help(self, definitions: Sequence[ParameterDefinition]) -> str:
        """Help block describing each parameter."""
        if not definitions:
            return "  No parameters\n"

        lines = []
        for param in definitions:
            aliases = f" (-{', -'.join(param.aliases)})" if param.aliases else ""
            required = "required" if param.required else "optional"
            default = f" [default: {_display_default(param.default)}]" if param.has_default else ""
            lines.append(f"  --{param.name}{aliases}")
            if param.description:
                lines.append(f"    {param.description}")
            lines.append(f"    Type: {param.type.value}, {required}{default}")
        return "\n".join(lines) + "\n"


def coerce_value(param: ParameterDefinition, raw: str) -> Tuple[Any, Optional[str]]:
    """Convert a raw token to the parameter's type. Returns (value, error)."""
    if param.type is ParameterType.STRING:
        return raw, None

    if param.type is ParameterType.NUMBER:
        # int() first so large integers keep every digit
        try:
            return int(raw), None
        except ValueError:
            pass
        try:
            number = float(raw)
        except ValueError:
            return None, f'Parameter "{param.name}" must be a number'
        if not math.isfinite(number):
            return None, f'Parameter "{param.name}" must be a finite number'
        return number, None

    if param.type is ParameterType.BOOLEAN:
        word = raw.strip().lower()
        if word in TRUE_WORDS:
            return True, None
        if word in FALSE_WORDS:
            return False, None
        return None, f'Parameter "{param.name}" must be a boolean (true/false)'

    if param.type is ParameterType.ARRAY:
        return [item.strip() for item in raw.split(",") if item.strip()], None

    # ParameterType.OBJECT
    try:
        value = json.loads(raw)
    except ValueError:
        value = None
    if not isinstance(value, dict):
        return None, f'Parameter "{param.name}" must be a JSON object'
    return value, None


def _has_value(args: Sequence[str], i: int) -> bool:
    return i + 1 < len(args) and not args[i + 1].startswith("-")


def _find_by_alias(definitions: Sequence[ParameterDefinition], alias: str) -> Optional[ParameterDefinition]:
    for param in definitions:
        if alias in param.aliases:
            return param
    return None


def _matches_type(param_type: ParameterType, value: Any) -> bool:
    if param_type is ParameterType.STRING:
        return isinstance(value, str)
    if param_type is ParameterType.NUMBER:
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    if param_type is ParameterType.BOOLEAN:
        return isinstance(value, bool)
    if param_type is ParameterType.ARRAY:
        return isinstance(value, list)
    return isinstance(value, dict)


def _display_default(value: Any) -> str:
    if isinstance(value, bool):
        return str(value).lower()
    return str(value)
