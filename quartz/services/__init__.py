"""
Services — External integration layer for Quartz CLI

Contains integrations with external systems:
- Git: Repository probe, branches, diffs, history
- Providers: AI chat-completion backends
- Prompts: Interactive confirmation
"""

from .git import GitIntegration, GitCommandError, RepoInfo, BranchInfo, CommitInfo, probe_repository
from .providers import LLMProvider, LLMResponse, OpenAIProvider, MockProvider, get_provider, get_provider_status
from .prompts import confirm, ask_yes_no

__all__ = [
    # Git
    "GitIntegration", "GitCommandError", "RepoInfo", "BranchInfo", "CommitInfo", "probe_repository",
    # Providers
    "LLMProvider", "LLMResponse", "OpenAIProvider", "MockProvider", "get_provider", "get_provider_status",
    # Prompts
    "confirm", "ask_yes_no",
]
