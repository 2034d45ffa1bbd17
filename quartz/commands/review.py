"""
Review — AI code review of pending changes

Reviews unstaged changes by default, falling back to the index when
the working tree is clean. --staged reviews the index only.
"""

from ..content.prompts import review_prompt
from ..core.enums import Object, ParameterType, Verb
from ..core.models import CommandDefinition, ExecutionContext, ParameterDefinition
from ..presentation.symbols import sanitize_control_chars
from .base import MODEL_PARAMETER, complete, git, language_of, run_blocking


async def generate_review(context: ExecutionContext) -> None:
    params = context.parameters
    repo = git(context)
    files = params.get("files") or []

    if params.get("staged"):
        diff = await run_blocking(repo.get_staged_diff, files)
        changed = files or await run_blocking(repo.get_staged_files)
    else:
        diff = await run_blocking(repo.get_diff, files)
        changed = files or await run_blocking(repo.get_changed_files)
        if not diff.strip():
            diff = await run_blocking(repo.get_staged_diff, files)
            changed = files or await run_blocking(repo.get_staged_files)

    if not diff.strip():
        context.logger.info(context.t("review.no_changes"))
        return

    context.logger.info(context.t("review.reviewing", count=len(changed)))
    system, user = review_prompt(diff, changed, language_of(context))
    response = await complete(context, system, user, model=params.get("model"), max_tokens=4096)

    context.logger.line(context.t("review.result"))
    context.logger.line()
    context.logger.line(sanitize_control_chars(response.text).strip())


GENERATE_REVIEW = CommandDefinition(
    verb=Verb.GENERATE,
    object=Object.REVIEW,
    description="Review pending changes with AI",
    handler=generate_review,
    parameters=(
        ParameterDefinition(
            name="staged",
            type=ParameterType.BOOLEAN,
            description="Review only staged changes",
        ),
        ParameterDefinition(
            name="files",
            type=ParameterType.ARRAY,
            description="Comma-separated files to review",
            aliases=("f",),
        ),
        MODEL_PARAMETER,
    ),
    examples=(
        "generate review",
        "generate review --staged",
        "generate review --files src/app.py,src/util.py",
    ),
    category="ai-features",
)

COMMANDS = [GENERATE_REVIEW]
