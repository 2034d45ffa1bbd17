"""
Content — Static text content for the AI commands

Separates prompt text from handler logic.
"""

from .prompts import commit_prompt, review_prompt, pr_prompt, changelog_prompt, language_name

__all__ = ['commit_prompt', 'review_prompt', 'pr_prompt', 'changelog_prompt', 'language_name']
