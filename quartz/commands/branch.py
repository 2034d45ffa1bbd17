"""
Branch — Local branch management

    quartz create branch --name feature/x [--from main] [-c]
    quartz switch branch --name main [--create]
    quartz list branch [--remote]
    quartz delete branch old-feature [--force]

delete is destructive: the pipeline asks for confirmation first
unless --force is given, and --force also maps to `git branch -D`.
"""

from ..core.enums import Object, ParameterType, Verb
from ..core.errors import CommandValidationError
from ..core.models import CommandDefinition, ExecutionContext, ParameterDefinition
from .base import git, run_blocking, symbols_for


async def create_branch(context: ExecutionContext) -> None:
    params = context.parameters
    name = params["name"]
    checkout = bool(params.get("checkout"))

    await run_blocking(git(context).create_branch, name, params.get("from"), checkout)

    if checkout:
        context.logger.success(context.t("branch.checked_out", name=name))
    else:
        context.logger.success(context.t("branch.created", name=name))


async def delete_branch(context: ExecutionContext) -> None:
    params = context.parameters
    name = params.get("name") or (context.args[0] if context.args else None)
    if not name:
        raise CommandValidationError(context.t("branch.name_required"))

    await run_blocking(git(context).delete_branch, name, bool(params.get("force")))
    context.logger.success(context.t("branch.deleted", name=name))


async def switch_branch(context: ExecutionContext) -> None:
    params = context.parameters
    name = params["name"]
    create = bool(params.get("create"))

    await run_blocking(git(context).switch_branch, name, create)

    if create:
        context.logger.success(context.t("branch.checked_out", name=name))
    else:
        context.logger.success(context.t("branch.switched", name=name))


async def list_branch(context: ExecutionContext) -> None:
    branches = await run_blocking(git(context).list_branches, bool(context.parameters.get("remote")))
    if not branches:
        context.logger.info(context.t("branch.none"))
        return

    symbols = symbols_for(context)
    for branch in branches:
        marker = symbols.current if branch.current else " "
        context.logger.line(f"{marker} {branch.name}")


CREATE_BRANCH = CommandDefinition(
    verb=Verb.CREATE,
    object=Object.BRANCH,
    description="Create a new git branch",
    handler=create_branch,
    parameters=(
        ParameterDefinition(
            name="name",
            required=True,
            description="Name of the branch to create",
        ),
        ParameterDefinition(
            name="from",
            description="Start point (branch, tag or commit)",
        ),
        ParameterDefinition(
            name="checkout",
            type=ParameterType.BOOLEAN,
            description="Switch to the branch after creating it",
            aliases=("c",),
        ),
    ),
    examples=(
        "create branch --name feature/new-feature",
        "create branch --name hotfix/bug-123 --from main",
        "create branch --name feature/test -c",
    ),
    category="git-workflow",
)

DELETE_BRANCH = CommandDefinition(
    verb=Verb.DELETE,
    object=Object.BRANCH,
    description="Delete a git branch",
    handler=delete_branch,
    parameters=(
        ParameterDefinition(
            name="name",
            description="Branch to delete (or pass it positionally)",
        ),
        ParameterDefinition(
            name="force",
            type=ParameterType.BOOLEAN,
            description="Skip confirmation and delete even if unmerged",
            aliases=("f",),
        ),
    ),
    examples=(
        "delete branch --name feature/old-feature",
        "delete branch old-feature --force",
    ),
    category="git-workflow",
)

LIST_BRANCH = CommandDefinition(
    verb=Verb.LIST,
    object=Object.BRANCH,
    description="List git branches",
    handler=list_branch,
    parameters=(
        ParameterDefinition(
            name="remote",
            type=ParameterType.BOOLEAN,
            description="List remote-tracking branches",
            aliases=("r",),
        ),
    ),
    examples=(
        "list branch",
        "list branch --remote",
    ),
    category="git-workflow",
)

SWITCH_BRANCH = CommandDefinition(
    verb=Verb.SWITCH,
    object=Object.BRANCH,
    description="Switch to another git branch",
    handler=switch_branch,
    parameters=(
        ParameterDefinition(
            name="name",
            required=True,
            description="Branch to check out",
        ),
        ParameterDefinition(
            name="create",
            type=ParameterType.BOOLEAN,
            description="Create the branch from HEAD before switching",
            aliases=("c",),
        ),
    ),
    examples=(
        "switch branch --name main",
        "switch branch --name feature/new -c",
    ),
    category="git-workflow",
)

COMMANDS = [CREATE_BRANCH, DELETE_BRANCH, LIST_BRANCH, SWITCH_BRANCH]
