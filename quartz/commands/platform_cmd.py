"""
Platform — Register code-hosting platforms

Only the platform type and URL are stored. Tokens are read from
GITHUB_TOKEN / GITLAB_TOKEN at use time.
"""

from ..config import PLATFORMS, PlatformConfig
from ..core.enums import Object, Verb
from ..core.errors import CommandValidationError
from ..core.models import CommandDefinition, ExecutionContext, ParameterDefinition
from .base import config_manager, one_of, run_blocking, symbols_for


async def set_platform(context: ExecutionContext) -> None:
    params = context.parameters
    platform_type = params["type"]

    error = await run_blocking(config_manager(context).add_platform, platform_type, params.get("url"))
    if error:
        raise CommandValidationError(error)

    context.logger.success(context.t("config.platform_added", type=platform_type))

    platform = PlatformConfig(type=platform_type, url=params.get("url"))
    if not platform.token:
        context.logger.info(f"Set {platform.token_env} to authenticate with {platform_type}.")


async def list_platform(context: ExecutionContext) -> None:
    platforms = context.config.platforms
    if not platforms:
        context.logger.info(context.t("config.no_platforms"))
        return

    symbols = symbols_for(context)
    for platform in platforms:
        token = symbols.check_pass if platform.token else symbols.check_fail
        context.logger.line(f"{symbols.bullet} {platform.type:<8} {platform.effective_url}  token {token}")


SET_PLATFORM = CommandDefinition(
    verb=Verb.SET,
    object=Object.PLATFORM,
    description="Register a code-hosting platform",
    handler=set_platform,
    parameters=(
        ParameterDefinition(
            name="type",
            required=True,
            description="Platform type (github, gitlab)",
            validator=one_of(PLATFORMS),
        ),
        ParameterDefinition(
            name="url",
            description="Base URL for self-hosted instances",
        ),
    ),
    examples=(
        "set platform --type github",
        "set platform --type gitlab --url https://gitlab.example.com",
    ),
    category="configuration",
)

LIST_PLATFORM = CommandDefinition(
    verb=Verb.LIST,
    object=Object.PLATFORM,
    description="List registered platforms",
    handler=list_platform,
    examples=("list platform",),
    category="configuration",
)

COMMANDS = [SET_PLATFORM, LIST_PLATFORM]
