"""
Changelog — AI release notes from commit history

Range defaults to <latest tag>..HEAD, or the whole history when the
repository has no tags.
"""

from ..content.prompts import changelog_prompt
from ..core.enums import Object, Verb
from ..core.models import CommandDefinition, ExecutionContext, ParameterDefinition
from ..presentation.symbols import sanitize_control_chars
from .base import MODEL_PARAMETER, complete, git, language_of, run_blocking
from .commit import strip_fences


async def generate_changelog(context: ExecutionContext) -> None:
    params = context.parameters
    repo = git(context)

    from_ref = params.get("from") or await run_blocking(repo.get_latest_tag)
    to_ref = params["to"]
    version_range = f"{from_ref}..{to_ref}" if from_ref else to_ref

    commits = await run_blocking(repo.get_commits_between, from_ref, to_ref)
    if not commits:
        context.logger.warn(context.t("changelog.no_commits", range=version_range))
        return

    context.logger.info(context.t("changelog.generating", count=len(commits)))
    system, user = changelog_prompt(
        [f"{c.short_hash} {c.message} ({c.author})" for c in commits],
        version_range,
        language_of(context),
    )
    response = await complete(context, system, user, model=params.get("model"), max_tokens=4096)
    text = strip_fences(sanitize_control_chars(response.text))

    output = params.get("output")
    if output:
        path = context.cwd / output
        await run_blocking(path.write_text, text + "\n", encoding="utf-8")
        context.logger.success(context.t("changelog.saved", path=path))
    else:
        context.logger.line(text)


GENERATE_CHANGELOG = CommandDefinition(
    verb=Verb.GENERATE,
    object=Object.CHANGELOG,
    description="Generate a changelog from commit history",
    handler=generate_changelog,
    parameters=(
        ParameterDefinition(
            name="from",
            description="Start ref (default: latest tag)",
        ),
        ParameterDefinition(
            name="to",
            default="HEAD",
            description="End ref",
        ),
        ParameterDefinition(
            name="output",
            description="Write to this file instead of printing",
            aliases=("o",),
        ),
        MODEL_PARAMETER,
    ),
    examples=(
        "generate changelog",
        "generate changelog --from v1.0.0 --to v1.1.0",
        "generate changelog -o CHANGELOG.md",
    ),
    category="ai-features",
)

COMMANDS = [GENERATE_CHANGELOG]
