"""
Prompt templates for the AI commands.

Each builder returns (system, user). Diffs are truncated so a large
change set cannot blow the context window.
"""

from typing import List, Sequence, Tuple


LANGUAGE_NAMES = {
    "en": "English",
    "zh": "Simplified Chinese",
}

COMMIT_DIFF_LIMIT = 8000
REVIEW_DIFF_LIMIT = 12000
PR_DIFF_LIMIT = 10000
PR_FILE_LIMIT = 20

COMMIT_TYPES = """- feat: New feature
- fix: Bug fix
- docs: Documentation update
- style: Formatting only
- refactor: Refactoring
- perf: Performance optimization
- test: Tests
- chore: Build process or tooling
- revert: Revert
- build: Build system or dependencies
- ci: CI configuration"""


def language_name(code: str) -> str:
    return LANGUAGE_NAMES.get(code, "English")


def truncate_diff(diff: str, limit: int) -> str:
    if len(diff) <= limit:
        return diff
    return diff[:limit] + "\n... (diff truncated)"


def commit_prompt(diff: str, files: Sequence[str], language: str = "en") -> Tuple[str, str]:
    lang = language_name(language)
    system = (
        "You are a Git commit message generator. Write a commit message following "
        f"the Conventional Commits specification in {lang}.\n\n"
        "Format:\n<type>(<scope>): <subject>\n\n<body>\n\n<footer>\n\n"
        f"Allowed types:\n{COMMIT_TYPES}\n\n"
        "Rules: subject under 50 characters, no trailing period; body optional; "
        "breaking changes go in the footer. Return only the commit message."
    )
    file_list = "\n".join(f"- {f}" for f in files)
    user = (
        f"Changed files:\n{file_list}\n\n"
        f"Code changes (diff):\n```diff\n{truncate_diff(diff, COMMIT_DIFF_LIMIT)}\n```"
    )
    return system, user


def review_prompt(diff: str, files: Sequence[str], language: str = "en") -> Tuple[str, str]:
    lang = language_name(language)
    system = (
        f"You are a code review expert. Review the changes and respond in {lang}.\n\n"
        "Focus on:\n"
        "1. Code quality and conventions\n"
        "2. Potential bugs (logic errors, edge cases, null handling)\n"
        "3. Performance issues\n"
        "4. Security (injection, sensitive data exposure)\n"
        "5. Maintainability\n\n"
        "For each finding give the file, line, severity (error, warning, info) and a "
        "suggestion. Finish with a one-sentence summary. If the code is fine, say so."
    )
    file_list = "\n".join(f"- {f}" for f in files)
    user = (
        f"Files:\n{file_list}\n\n"
        f"Code changes (diff):\n```diff\n{truncate_diff(diff, REVIEW_DIFF_LIMIT)}\n```"
    )
    return system, user


def pr_prompt(
    diff: str,
    commits: Sequence[str],
    files: Sequence[str],
    branch: str,
    base: str,
    language: str = "en"
) -> Tuple[str, str]:
    lang = language_name(language)
    system = (
        f"You are a pull request description generator. Write in {lang}.\n\n"
        "Return JSON only:\n"
        '{"title": "one-line title under 50 characters", '
        '"body": "Markdown with sections Overview, Changes, Testing, Notes"}'
    )
    shown_files: List[str] = [f"- {f}" for f in files[:PR_FILE_LIMIT]]
    if len(files) > PR_FILE_LIMIT:
        shown_files.append(f"... and {len(files) - PR_FILE_LIMIT} more files")
    history = "\n".join(f"{i}. {c}" for i, c in enumerate(commits, 1))
    user = (
        f"Current branch: {branch}\nTarget branch: {base}\n\n"
        f"Commit history ({len(commits)} commits):\n{history}\n\n"
        f"Changed files ({len(files)} files):\n" + "\n".join(shown_files) + "\n\n"
        f"Code changes (diff):\n```diff\n{truncate_diff(diff, PR_DIFF_LIMIT)}\n```"
    )
    return system, user


def changelog_prompt(commits: Sequence[str], version_range: str, language: str = "en") -> Tuple[str, str]:
    lang = language_name(language)
    system = (
        f"You are a release notes writer. Produce a Markdown changelog in {lang}. "
        "Group entries under Features, Fixes, and Other Changes; omit empty groups. "
        "One bullet per user-visible change, merging duplicates. Return only Markdown."
    )
    history = "\n".join(f"- {c}" for c in commits)
    user = f"Range: {version_range}\n\nCommits:\n{history}"
    return system, user
