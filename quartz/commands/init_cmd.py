"""
Init — Write a starter configuration file

    quartz init config                  project file (.quartz/config.yaml)
    quartz init config --global         user file (~/.quartz/config.yaml)

An existing file is left alone unless --force is given.
"""

from ..config import Config, LANGUAGES, PROVIDERS
from ..core.enums import Object, ParameterType, Verb
from ..core.models import CommandDefinition, ExecutionContext, ParameterDefinition
from .base import config_manager, one_of, run_blocking, scope_of


async def init_config(context: ExecutionContext) -> None:
    params = context.parameters
    manager = config_manager(context)
    scope = scope_of(context)
    path = manager.path_for(scope)

    if path.exists() and not params.get("force"):
        context.logger.warn(context.t("config.exists", path=path))
        return

    config = Config()
    if params.get("provider"):
        config.ai.provider = params["provider"]
    if params.get("language"):
        config.display.language = params["language"]

    await run_blocking(manager.save, config, scope)
    context.logger.success(context.t("config.initialized", path=path))

    if not config.ai.is_available:
        context.logger.info(f"Set {config.ai.api_key_env} to enable AI commands.")


INIT_CONFIG = CommandDefinition(
    verb=Verb.INIT,
    object=Object.CONFIG,
    description="Create a configuration file with default settings",
    handler=init_config,
    parameters=(
        ParameterDefinition(
            name="global",
            type=ParameterType.BOOLEAN,
            description="Write the user configuration instead of the project one",
            aliases=("g",),
        ),
        ParameterDefinition(
            name="provider",
            description="AI provider (openai, deepseek)",
            validator=one_of(PROVIDERS),
        ),
        ParameterDefinition(
            name="language",
            description="Interface and prompt language (en, zh)",
            validator=one_of(LANGUAGES),
        ),
    ),
    examples=(
        "init config",
        "init config --global",
        "init config --provider deepseek --language zh",
    ),
    category="initialization",
)

COMMANDS = [INIT_CONFIG]
