"""
PR — AI pull request title and description

Produces text only; opening the pull request on the platform is left
to the user (or the platform's own CLI).
"""

import json
from typing import Tuple

from ..content.prompts import pr_prompt
from ..core.enums import Object, ParameterType, Verb
from ..core.models import CommandDefinition, ExecutionContext, ParameterDefinition
from ..presentation.symbols import sanitize_control_chars
from .base import MODEL_PARAMETER, complete, git, language_of, run_blocking
from .commit import strip_fences


def parse_pr_response(text: str) -> Tuple[str, str]:
    """
    Split the model's answer into (title, body).

    Expects {"title": ..., "body": ...}; anything else is treated as
    Markdown whose first line is the title.
    """
    cleaned = strip_fences(text)
    try:
        data = json.loads(cleaned)
    except ValueError:
        data = None

    if isinstance(data, dict) and data.get("title"):
        return str(data["title"]).strip(), str(data.get("body", "")).strip()

    lines = cleaned.splitlines()
    if not lines:
        return "", ""
    title = lines[0].lstrip("#").strip()
    return title, "\n".join(lines[1:]).strip()


async def generate_pr(context: ExecutionContext) -> None:
    params = context.parameters
    base = params["base"]
    repo = git(context)

    branch = await run_blocking(repo.current_branch) or "HEAD"
    commits = await run_blocking(repo.get_commits_between, base, "HEAD")
    if not commits:
        context.logger.warn(context.t("pr.no_commits", base=base, branch=branch))
        return

    diff = await run_blocking(repo.get_diff_with_base, base)
    files = await run_blocking(repo.get_files_changed_since, base)

    context.logger.info(context.t("pr.generating", branch=branch, base=base))
    system, user = pr_prompt(
        diff, [c.message for c in commits], files, branch, base, language_of(context)
    )
    response = await complete(context, system, user, model=params.get("model"), max_tokens=4096)
    title, body = parse_pr_response(sanitize_control_chars(response.text))

    if params.get("draft"):
        title = f"{context.t('pr.draft')} {title}"

    context.logger.line(title)
    context.logger.line()
    context.logger.line(body)


GENERATE_PR = CommandDefinition(
    verb=Verb.GENERATE,
    object=Object.PR,
    description="Generate a pull request title and description",
    handler=generate_pr,
    parameters=(
        ParameterDefinition(
            name="base",
            default="main",
            description="Target branch",
            aliases=("b",),
        ),
        ParameterDefinition(
            name="draft",
            type=ParameterType.BOOLEAN,
            description="Mark the pull request as a draft",
        ),
        MODEL_PARAMETER,
    ),
    examples=(
        "generate pr",
        "generate pr --base develop",
        "generate pr -b main --draft",
    ),
    category="ai-features",
)

COMMANDS = [GENERATE_PR]
