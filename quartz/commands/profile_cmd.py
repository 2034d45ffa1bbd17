"""
Profile — Named configuration snapshots

    quartz create profile --name work       snapshot the current settings
    quartz save profile --name work         same, overwriting
    quartz use profile --name work          write it back into config.yaml
    quartz list profile [--global]
    quartz show profile [--name work]
    quartz delete profile --name work

--global works on the user profile store instead of the project one.
"""

import yaml

from ..core.enums import Object, ParameterType, Verb
from ..core.errors import CommandValidationError
from ..core.models import CommandDefinition, ExecutionContext, ParameterDefinition
from .base import config_manager, run_blocking, scope_of, symbols_for


async def create_profile(context: ExecutionContext) -> None:
    name = context.parameters["name"]
    scope = scope_of(context)
    manager = config_manager(context)

    if name in await run_blocking(manager.list_profiles, scope):
        raise CommandValidationError(context.t("profile.exists", name=name))

    error = await run_blocking(manager.save_profile, name, scope, False)
    if error:
        raise CommandValidationError(error)
    context.logger.success(context.t("profile.saved", name=name, scope=scope))


async def save_profile(context: ExecutionContext) -> None:
    name = context.parameters["name"]
    scope = scope_of(context)

    error = await run_blocking(config_manager(context).save_profile, name, scope)
    if error:
        raise CommandValidationError(error)
    context.logger.success(context.t("profile.saved", name=name, scope=scope))


async def use_profile(context: ExecutionContext) -> None:
    name = context.parameters["name"]
    scope = scope_of(context)

    error = await run_blocking(config_manager(context).load_profile, name, scope)
    if error:
        raise CommandValidationError(error)
    context.logger.success(context.t("profile.loaded", name=name, scope=scope))


async def list_profile(context: ExecutionContext) -> None:
    scope = scope_of(context)
    manager = config_manager(context)

    names = await run_blocking(manager.list_profiles, scope)
    if not names:
        context.logger.info(context.t("profile.none"))
        return

    active = await run_blocking(manager.get_active_profile, scope)
    symbols = symbols_for(context)
    for name in names:
        profile = await run_blocking(manager.read_profile, name, scope)
        marker = symbols.current if name == active else " "
        details = f"{profile.ai.provider}, " + context.t("profile.platforms", count=len(profile.platforms))
        context.logger.line(f"{marker} {name}  ({details})")


async def show_profile(context: ExecutionContext) -> None:
    scope = scope_of(context)
    manager = config_manager(context)

    name = context.parameters.get("name") or await run_blocking(manager.get_active_profile, scope)
    if not name:
        context.logger.info(context.t("profile.no_active"))
        return

    profile = await run_blocking(manager.read_profile, name, scope)
    if profile is None:
        raise CommandValidationError(f"Profile '{name}' not found")

    context.logger.line(context.t("profile.current", name=name))
    context.logger.line(
        yaml.safe_dump(profile.to_dict(), default_flow_style=False, allow_unicode=True).rstrip("\n")
    )


async def delete_profile(context: ExecutionContext) -> None:
    name = context.parameters["name"]

    error = await run_blocking(config_manager(context).delete_profile, name, scope_of(context))
    if error:
        raise CommandValidationError(error)
    context.logger.success(context.t("profile.deleted", name=name))


NAME_PARAMETER = ParameterDefinition(
    name="name",
    required=True,
    description="Profile name (letters, digits, '.', '_', '-')",
)

GLOBAL_PARAMETER = ParameterDefinition(
    name="global",
    type=ParameterType.BOOLEAN,
    description="Use the user profile store instead of the project one",
    aliases=("g",),
)

CREATE_PROFILE = CommandDefinition(
    verb=Verb.CREATE,
    object=Object.PROFILE,
    description="Save the current configuration as a new profile",
    handler=create_profile,
    parameters=(NAME_PARAMETER, GLOBAL_PARAMETER),
    examples=(
        "create profile --name work",
        "create profile --name personal --global",
    ),
    category="configuration",
)

SAVE_PROFILE = CommandDefinition(
    verb=Verb.SAVE,
    object=Object.PROFILE,
    description="Save the current configuration as a profile, replacing one of the same name",
    handler=save_profile,
    parameters=(NAME_PARAMETER, GLOBAL_PARAMETER),
    examples=(
        "save profile --name work",
    ),
    category="configuration",
)

USE_PROFILE = CommandDefinition(
    verb=Verb.USE,
    object=Object.PROFILE,
    description="Switch the configuration to a saved profile",
    handler=use_profile,
    parameters=(NAME_PARAMETER, GLOBAL_PARAMETER),
    examples=(
        "use profile --name work",
        "use profile --name personal -g",
    ),
    category="configuration",
)

LOAD_PROFILE = CommandDefinition(
    verb=Verb.LOAD,
    object=Object.PROFILE,
    description="Switch the configuration to a saved profile",
    handler=use_profile,
    parameters=(NAME_PARAMETER, GLOBAL_PARAMETER),
    examples=(
        "load profile --name work",
    ),
    category="configuration",
    deprecated=True,
    deprecation_message='"load profile" is deprecated, use "use profile" instead',
)

LIST_PROFILE = CommandDefinition(
    verb=Verb.LIST,
    object=Object.PROFILE,
    description="List saved profiles, marking the active one",
    handler=list_profile,
    parameters=(GLOBAL_PARAMETER,),
    examples=(
        "list profile",
        "list profile --global",
    ),
    category="configuration",
)

SHOW_PROFILE = CommandDefinition(
    verb=Verb.SHOW,
    object=Object.PROFILE,
    description="Show the settings stored in a profile",
    handler=show_profile,
    parameters=(
        ParameterDefinition(
            name="name",
            description="Profile to show (default: the active one)",
        ),
        GLOBAL_PARAMETER,
    ),
    examples=(
        "show profile",
        "show profile --name work",
    ),
    category="configuration",
)

DELETE_PROFILE = CommandDefinition(
    verb=Verb.DELETE,
    object=Object.PROFILE,
    description="Delete a saved profile",
    handler=delete_profile,
    parameters=(
        NAME_PARAMETER,
        GLOBAL_PARAMETER,
        ParameterDefinition(
            name="force",
            type=ParameterType.BOOLEAN,
            description="Skip confirmation",
            aliases=("f",),
        ),
    ),
    examples=(
        "delete profile --name old",
        "delete profile --name old --force",
    ),
    category="configuration",
)

COMMANDS = [
    CREATE_PROFILE, SAVE_PROFILE, USE_PROFILE, LOAD_PROFILE,
    LIST_PROFILE, SHOW_PROFILE, DELETE_PROFILE,
]
