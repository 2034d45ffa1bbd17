"""
Commit — AI commit message from the staged diff

    quartz generate commit            print a suggestion
    quartz generate commit --commit   commit with it

`create commit` is the old spelling, kept as a deprecated alias.
"""

from ..content.prompts import commit_prompt
from ..core.enums import Object, ParameterType, Verb
from ..core.models import CommandDefinition, ExecutionContext, ParameterDefinition
from ..presentation.symbols import sanitize_control_chars
from .base import MODEL_PARAMETER, complete, git, language_of, run_blocking


def strip_fences(text: str) -> str:
    """Drop a surrounding ``` block if the model added one."""
    lines = text.strip().splitlines()
    if len(lines) >= 2 and lines[0].startswith("```") and lines[-1].strip() == "```":
        lines = lines[1:-1]
    return "\n".join(lines).strip()


async def generate_commit(context: ExecutionContext) -> None:
    repo = git(context)

    files = await run_blocking(repo.get_staged_files)
    if not files:
        context.logger.warn(context.t("commit.no_staged"))
        context.logger.info(context.t("commit.use_git_add"))
        return

    diff = await run_blocking(repo.get_staged_diff)
    system, user = commit_prompt(diff, files, language_of(context))

    context.logger.info(context.t("commit.generating"))
    response = await complete(context, system, user, model=context.parameters.get("model"))
    message = strip_fences(sanitize_control_chars(response.text))

    context.logger.line(context.t("commit.generated"))
    context.logger.line()
    context.logger.line(message)
    context.logger.line()

    if context.parameters.get("commit"):
        short_hash = await run_blocking(repo.commit, message)
        context.logger.success(context.t("commit.committed", hash=short_hash))
    else:
        context.logger.info(context.t("commit.tip"))


COMMIT_PARAMETERS = (
    ParameterDefinition(
        name="commit",
        type=ParameterType.BOOLEAN,
        description="Commit staged changes with the generated message",
        aliases=("c",),
    ),
    MODEL_PARAMETER,
)

GENERATE_COMMIT = CommandDefinition(
    verb=Verb.GENERATE,
    object=Object.COMMIT,
    description="Generate a commit message from staged changes",
    handler=generate_commit,
    parameters=COMMIT_PARAMETERS,
    examples=(
        "generate commit",
        "generate commit --commit",
        "generate commit --model gpt-4o",
    ),
    category="ai-features",
)

CREATE_COMMIT = CommandDefinition(
    verb=Verb.CREATE,
    object=Object.COMMIT,
    description="Generate a commit message from staged changes",
    handler=generate_commit,
    parameters=COMMIT_PARAMETERS,
    examples=("create commit",),
    category="ai-features",
    deprecated=True,
    deprecation_message='"create commit" is deprecated, use "generate commit" instead',
)

COMMANDS = [GENERATE_COMMIT, CREATE_COMMIT]
