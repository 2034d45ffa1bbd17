"""
Config — Read and change settings

    quartz show config [--format json]
    quartz get config --key ai.model
    quartz set config --key ai.model --value gpt-4o [--global]

Keys are 'section.setting'. API keys are never settable here; they
come from environment variables only.
"""

import json

from ..core.enums import Object, ParameterType, Verb
from ..core.errors import CommandValidationError
from ..core.models import CommandDefinition, ExecutionContext, ParameterDefinition
from .base import config_manager, one_of, run_blocking, scope_of


FORMATS = ("text", "json")


async def show_config(context: ExecutionContext) -> None:
    manager = config_manager(context)

    if context.parameters.get("format") == "json":
        config = await run_blocking(manager.load)
        data = config.to_dict()
        data["ai"]["api_key_set"] = config.ai.is_available
        context.logger.line(json.dumps(data, indent=2, ensure_ascii=False))
        return

    context.logger.line(await run_blocking(manager.display))


async def get_config(context: ExecutionContext) -> None:
    key = context.parameters["key"]
    manager = config_manager(context)

    section, _, setting = key.partition(".")
    if setting not in manager.SETTINGS.get(section, ()):
        raise CommandValidationError(f"Unknown configuration key: {key}")

    value = await run_blocking(manager.get, key)
    if value is None:
        context.logger.info(context.t("config.not_set", key=key))
        return
    context.logger.line(value)


async def set_config(context: ExecutionContext) -> None:
    params = context.parameters
    key, value = params["key"], params["value"]
    scope = scope_of(context)

    error = await run_blocking(config_manager(context).set, key, value, scope)
    if error:
        raise CommandValidationError(error)

    context.logger.success(context.t("config.saved", key=key, value=value, scope=scope))


FORMAT_PARAMETER = ParameterDefinition(
    name="format",
    default="text",
    description="Output format (text, json)",
    validator=one_of(FORMATS),
)

SHOW_CONFIG = CommandDefinition(
    verb=Verb.SHOW,
    object=Object.CONFIG,
    description="Show the effective configuration",
    handler=show_config,
    parameters=(FORMAT_PARAMETER,),
    examples=(
        "show config",
        "show config --format json",
    ),
    category="configuration",
)

LIST_CONFIG = CommandDefinition(
    verb=Verb.LIST,
    object=Object.CONFIG,
    description="List all configuration values",
    handler=show_config,
    parameters=(FORMAT_PARAMETER,),
    examples=(
        "list config",
        "list config --format=json",
    ),
    category="configuration",
)

GET_CONFIG = CommandDefinition(
    verb=Verb.GET,
    object=Object.CONFIG,
    description="Print one configuration value",
    handler=get_config,
    parameters=(
        ParameterDefinition(
            name="key",
            required=True,
            description="Setting to read, e.g. ai.model",
        ),
    ),
    examples=(
        "get config --key ai.model",
        "get config --key display.language",
    ),
    category="configuration",
)

SET_CONFIG = CommandDefinition(
    verb=Verb.SET,
    object=Object.CONFIG,
    description="Change one configuration value",
    handler=set_config,
    parameters=(
        ParameterDefinition(
            name="key",
            required=True,
            description="Setting to change, e.g. ai.model",
        ),
        ParameterDefinition(
            name="value",
            required=True,
            description="New value",
        ),
        ParameterDefinition(
            name="global",
            type=ParameterType.BOOLEAN,
            description="Write the user configuration instead of the project one",
            aliases=("g",),
        ),
    ),
    examples=(
        "set config --key ai.model --value gpt-4o",
        "set config --key ai.provider --value deepseek --global",
        "set config --key display.symbols --value ascii",
    ),
    category="configuration",
)

COMMANDS = [SHOW_CONFIG, LIST_CONFIG, GET_CONFIG, SET_CONFIG]
