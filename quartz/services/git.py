"""
Git Integration — Repository probe and branch/commit plumbing

Shells out to the git executable. Read helpers return None (or empty
results) when git fails; mutating helpers raise GitCommandError with
git's own stderr so the user sees why.

All calls block. Async callers go through asyncio.to_thread.
"""

import re
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from ..core.errors import ExecutionError


# owner/repo from SSH or HTTPS remotes, host captured for platform detection
REMOTE_PATTERNS = [
    re.compile(r"^git@(?P<host>[^:]+):/?(?P<owner>[^/]+(?:/[^/]+)*)/(?P<repo>[^/]+?)(?:\.git)?/?$"),
    re.compile(r"^(?:https?|ssh)://(?:[^@/]+@)?(?P<host>[^/:]+)(?::\d+)?/(?P<owner>[^/]+(?:/[^/]+)*)/(?P<repo>[^/]+?)(?:\.git)?/?$"),
]

LOG_SEPARATOR = "\x1f"


class GitCommandError(ExecutionError):
    """A mutating git command exited non-zero."""


@dataclass
class RepoInfo:
    """Where we are: repository root, branch and origin."""
    root: Path
    branch: str
    remote_url: Optional[str] = None
    owner: Optional[str] = None
    repo: Optional[str] = None
    platform: Optional[str] = None  # "github" | "gitlab" | None


@dataclass
class BranchInfo:
    name: str
    current: bool = False


@dataclass
class CommitInfo:
    """One line of history."""
    hash: str
    message: str
    author: str

    @property
    def short_hash(self) -> str:
        return self.hash[:7]


def parse_remote_url(url: str) -> Optional[dict]:
    """
    Split a remote URL into host, owner and repo.

    Examples:
        git@github.com:acme/tool.git     -> github.com, acme, tool
        https://gitlab.com/group/sub/app -> gitlab.com, group/sub, app
    """
    url = url.strip()
    for pattern in REMOTE_PATTERNS:
        match = pattern.match(url)
        if match:
            host = match.group("host").lower()
            platform = None
            if "github" in host:
                platform = "github"
            elif "gitlab" in host:
                platform = "gitlab"
            return {
                "host": host,
                "owner": match.group("owner"),
                "repo": match.group("repo"),
                "platform": platform,
            }
    return None


class GitIntegration:
    """Git repository integration."""

    def __init__(self, repo_path: Optional[Path] = None):
        """
        Initialize git integration.

        Args:
            repo_path: Path inside a git repository. If None, uses current directory.
        """
        self.repo_path = Path(repo_path) if repo_path else Path.cwd()

    @property
    def is_git_repo(self) -> bool:
        """Check if repo_path is inside a git work tree."""
        output = self._run_git(["rev-parse", "--is-inside-work-tree"])
        return output is not None and output.strip() == "true"

    def _run_git(self, args: List[str], check: bool = True) -> Optional[str]:
        """Run a git command and return stdout, or None on failure."""
        try:
            result = subprocess.run(
                ["git"] + args,
                cwd=self.repo_path,
                capture_output=True,
                text=True,
                check=check
            )
            return result.stdout
        except subprocess.CalledProcessError:
            return None
        except OSError:
            return None

    def _run_git_or_raise(self, args: List[str]) -> str:
        """Run a mutating git command. Raises GitCommandError on failure."""
        try:
            result = subprocess.run(
                ["git"] + args,
                cwd=self.repo_path,
                capture_output=True,
                text=True,
            )
        except OSError as e:
            raise GitCommandError(f"git {args[0]} failed: {e}") from e

        if result.returncode != 0:
            detail = (result.stderr or result.stdout).strip()
            raise GitCommandError(f"git {args[0]} failed: {detail}")
        return result.stdout

    # -------------------------------------------------------------------------
    # Repository probe
    # -------------------------------------------------------------------------

    def get_repo_info(self) -> Optional[RepoInfo]:
        """Repository root, current branch and origin; None outside a repository."""
        root = self._run_git(["rev-parse", "--show-toplevel"])
        if root is None or not root.strip():
            return None

        info = RepoInfo(root=Path(root.strip()), branch=self.current_branch() or "")

        remote = self._run_git(["remote", "get-url", "origin"])
        if remote and remote.strip():
            info.remote_url = remote.strip()
            parsed = parse_remote_url(info.remote_url)
            if parsed:
                info.owner = parsed["owner"]
                info.repo = parsed["repo"]
                info.platform = parsed["platform"]

        return info

    def current_branch(self) -> Optional[str]:
        output = self._run_git(["branch", "--show-current"])
        if output is None:
            return None
        return output.strip() or None

    # -------------------------------------------------------------------------
    # Branches
    # -------------------------------------------------------------------------

    def list_branches(self, remote: bool = False) -> List[BranchInfo]:
        args = ["branch", "--format=%(HEAD)%(refname:short)"]
        if remote:
            args.insert(1, "-r")

        output = self._run_git(args)
        branches = []
        for line in (output or "").splitlines():
            if not line.strip():
                continue
            current = line.startswith("*")
            name = line[1:].strip()
            if name.endswith("/HEAD"):
                continue
            branches.append(BranchInfo(name=name, current=current))
        return branches

    def create_branch(self, name: str, start_point: Optional[str] = None, checkout: bool = False) -> None:
        if checkout:
            args = ["checkout", "-b", name]
        else:
            args = ["branch", name]
        if start_point:
            args.append(start_point)
        self._run_git_or_raise(args)

    def delete_branch(self, name: str, force: bool = False) -> None:
        self._run_git_or_raise(["branch", "-D" if force else "-d", name])

    def switch_branch(self, name: str, create: bool = False) -> None:
        """Check out name, creating it from HEAD first when create is set."""
        if create:
            self._run_git_or_raise(["checkout", "-b", name])
        else:
            self._run_git_or_raise(["checkout", name])

    # -------------------------------------------------------------------------
    # Diffs and history
    # -------------------------------------------------------------------------

    def get_staged_files(self) -> List[str]:
        output = self._run_git(["diff", "--cached", "--name-only"])
        return [f for f in (output or "").splitlines() if f]

    def get_changed_files(self) -> List[str]:
        """Unstaged modifications to tracked files."""
        output = self._run_git(["diff", "--name-only"])
        return [f for f in (output or "").splitlines() if f]

    def get_staged_diff(self, files: Optional[List[str]] = None) -> str:
        args = ["diff", "--cached"]
        if files:
            args += ["--"] + list(files)
        return self._run_git(args) or ""

    def get_diff(self, files: Optional[List[str]] = None) -> str:
        """Working tree diff against the index."""
        args = ["diff"]
        if files:
            args += ["--"] + list(files)
        return self._run_git(args) or ""

    def get_diff_with_base(self, base: str) -> str:
        return self._run_git(["diff", f"{base}...HEAD"]) or ""

    def get_files_changed_since(self, base: str) -> List[str]:
        output = self._run_git(["diff", "--name-only", f"{base}...HEAD"])
        return [f for f in (output or "").splitlines() if f]

    def get_commits_between(self, from_ref: Optional[str], to_ref: str = "HEAD") -> List[CommitInfo]:
        """
        Commits reachable from to_ref but not from from_ref, newest first.

        With no from_ref, the whole history of to_ref.
        """
        rev = f"{from_ref}..{to_ref}" if from_ref else to_ref
        output = self._run_git([
            "log", f"--format=%H{LOG_SEPARATOR}%s{LOG_SEPARATOR}%an", rev
        ])

        commits = []
        for line in (output or "").splitlines():
            parts = line.split(LOG_SEPARATOR)
            if len(parts) != 3:
                continue
            commits.append(CommitInfo(hash=parts[0], message=parts[1], author=parts[2]))
        return commits

    def get_latest_tag(self) -> Optional[str]:
        output = self._run_git(["describe", "--tags", "--abbrev=0"])
        if output is None:
            return None
        return output.strip() or None

    def commit(self, message: str) -> str:
        """Commit the index. Returns the new short hash."""
        self._run_git_or_raise(["commit", "-m", message])
        output = self._run_git(["rev-parse", "--short", "HEAD"])
        return (output or "").strip()


def probe_repository(path: Optional[Path] = None) -> Optional[RepoInfo]:
    """Repository probe used by the git-context precondition."""
    return GitIntegration(path).get_repo_info()
