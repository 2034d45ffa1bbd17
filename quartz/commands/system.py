"""
System — help and version

Both are typed without an object; the parser fills in the canonical
one. help reads its targets from positional arguments:

    quartz help
    quartz help create
    quartz help create branch
    quartz help branch          (object-only view)
"""

from .. import __version__
from ..core.enums import Object, Verb
from ..core.errors import ExecutionError
from ..core.models import CommandDefinition, ExecutionContext


async def show_help(context: ExecutionContext) -> None:
    dispatcher = context.dispatcher
    if dispatcher is None:
        raise ExecutionError("Help is only available through the dispatcher")

    args = context.args
    if not args:
        text = dispatcher.generate_help()
    elif len(args) == 1 and Verb.from_token(args[0]) is None and Object.from_token(args[0]) is not None:
        text = dispatcher.generate_help(obj=args[0])
    elif len(args) == 1:
        text = dispatcher.generate_help(args[0])
    else:
        text = dispatcher.generate_help(args[0], args[1])

    context.logger.line(text.rstrip("\n"))


async def show_version(context: ExecutionContext) -> None:
    context.logger.line(context.t("version.current", version=__version__))


HELP = CommandDefinition(
    verb=Verb.HELP,
    object=Object.HELP,
    description="Show help for commands",
    handler=show_help,
    examples=(
        "help",
        "help create",
        "help create branch",
    ),
    category="help",
)

VERSION = CommandDefinition(
    verb=Verb.VERSION,
    object=Object.VERSION,
    description="Show the installed version",
    handler=show_version,
    examples=("version",),
    category="system",
)

COMMANDS = [HELP, VERSION]
