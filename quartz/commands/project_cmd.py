"""
Project — Repository overview

    quartz show project

Root, current branch and origin remote of the repository around the
project directory. Runs only inside a git repository.
"""

from ..core.enums import Object, Verb
from ..core.errors import PreconditionError
from ..core.models import CommandDefinition, ExecutionContext
from .base import git, run_blocking


async def show_project(context: ExecutionContext) -> None:
    info = await run_blocking(git(context).get_repo_info)
    if info is None:
        raise PreconditionError("This command must be run inside a git repository.")

    t = context.t
    context.logger.line(t("project.root", path=info.root))
    context.logger.line(t("project.branch", name=info.branch or "(detached)"))

    if not info.remote_url:
        context.logger.line(t("project.no_remote"))
        return

    context.logger.line(t("project.remote", url=info.remote_url))
    if info.platform:
        context.logger.line(t("project.hosted", platform=info.platform, owner=info.owner, repo=info.repo))


SHOW_PROJECT = CommandDefinition(
    verb=Verb.SHOW,
    object=Object.PROJECT,
    description="Show repository root, branch and remote",
    handler=show_project,
    examples=(
        "show project",
    ),
    category="git-workflow",
)

COMMANDS = [SHOW_PROJECT]
