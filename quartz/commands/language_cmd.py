"""
Language — Switch the interface and prompt language
"""

from ..config import LANGUAGES
from ..core.enums import Object, ParameterType, Verb
from ..core.errors import CommandValidationError
from ..core.models import CommandDefinition, ExecutionContext, ParameterDefinition
from .base import config_manager, one_of, run_blocking, scope_of


async def use_language(context: ExecutionContext) -> None:
    language = context.parameters["name"]

    error = await run_blocking(config_manager(context).set, "display.language", language, scope_of(context))
    if error:
        raise CommandValidationError(error)

    # Confirm in the new language
    if hasattr(context.t, "set_language"):
        context.t.set_language(language)
    context.logger.success(context.t("config.language_set", language=language))


USE_LANGUAGE = CommandDefinition(
    verb=Verb.USE,
    object=Object.LANGUAGE,
    description="Set the interface and prompt language",
    handler=use_language,
    parameters=(
        ParameterDefinition(
            name="name",
            required=True,
            description="Language code (en, zh)",
            validator=one_of(LANGUAGES),
        ),
        ParameterDefinition(
            name="global",
            type=ParameterType.BOOLEAN,
            description="Write the user configuration instead of the project one",
            aliases=("g",),
        ),
    ),
    examples=(
        "use language --name zh",
        "use language --name en --global",
    ),
    category="configuration",
)

COMMANDS = [USE_LANGUAGE]
