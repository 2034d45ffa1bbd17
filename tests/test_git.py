"""
Tests for Git Integration — Repository probe and git plumbing

These tests validate:
- Remote URL parsing (no git needed)
- Repository detection and info
- Branch create/list/delete
- Diffs, history and commit

SKIP CONDITIONS:
- Tests marked 'requires_git' skip if git is not installed
"""

import subprocess

import pytest

from quartz.services.git import (
    CommitInfo, GitCommandError, GitIntegration, parse_remote_url, probe_repository,
)


# ============================================================================
# GIT AVAILABILITY CHECK
# ============================================================================

def git_is_available() -> bool:
    """Check if git is installed and working."""
    try:
        result = subprocess.run(
            ["git", "--version"],
            capture_output=True,
            text=True,
            timeout=5
        )
        return result.returncode == 0
    except (subprocess.SubprocessError, FileNotFoundError, OSError):
        return False


# Decorator for tests that require git
requires_git = pytest.mark.skipif(
    not git_is_available(),
    reason="Git is not installed or not available"
)


# ============================================================================
# FIXTURES
# ============================================================================

def git(repo, *args):
    subprocess.run(["git", *args], cwd=repo, capture_output=True, check=True)


@pytest.fixture
def temp_git_repo(tmp_path):
    """Temporary repository on branch 'main' with one commit."""
    if not git_is_available():
        pytest.skip("Git is not available")

    repo = tmp_path / "test_repo"
    repo.mkdir()

    try:
        git(repo, "init")
        git(repo, "symbolic-ref", "HEAD", "refs/heads/main")
        git(repo, "config", "user.email", "test@test.com")
        git(repo, "config", "user.name", "Test User")
        git(repo, "config", "commit.gpgsign", "false")

        (repo / "README.md").write_text("# Test")
        git(repo, "add", ".")
        git(repo, "commit", "-m", "Initial commit")
        return repo
    except subprocess.CalledProcessError:
        pytest.skip("Could not create git repository")


@pytest.fixture
def non_git_dir(tmp_path):
    path = tmp_path / "plain"
    path.mkdir()
    return path


# ============================================================================
# TESTS
# ============================================================================

class TestRemoteParsing:
    """parse_remote_url needs no git."""

    def test_ssh_github(self):
        assert parse_remote_url("git@github.com:acme/tool.git") == {
            "host": "github.com", "owner": "acme", "repo": "tool", "platform": "github",
        }

    def test_https_gitlab_subgroup(self):
        parsed = parse_remote_url("https://gitlab.com/group/sub/app")
        assert parsed["owner"] == "group/sub"
        assert parsed["repo"] == "app"
        assert parsed["platform"] == "gitlab"

    def test_self_hosted_has_no_platform(self):
        assert parse_remote_url("https://git.example.com/team/app.git")["platform"] is None

    def test_garbage(self):
        assert parse_remote_url("not a url") is None

    def test_short_hash(self):
        assert CommitInfo(hash="0123456789abcdef", message="m", author="a").short_hash == "0123456"


@requires_git
class TestRepositoryProbe:
    """Detection and repository info."""

    def test_is_git_repo(self, temp_git_repo, non_git_dir):
        assert GitIntegration(temp_git_repo).is_git_repo
        assert not GitIntegration(non_git_dir).is_git_repo

    def test_probe_outside_repository(self, non_git_dir):
        assert probe_repository(non_git_dir) is None

    def test_repo_info(self, temp_git_repo):
        git(temp_git_repo, "remote", "add", "origin", "git@github.com:acme/tool.git")
        info = probe_repository(temp_git_repo)
        assert info.root.resolve() == temp_git_repo.resolve()
        assert info.branch == "main"
        assert (info.owner, info.repo, info.platform) == ("acme", "tool", "github")


@requires_git
class TestBranches:
    """create / list / delete."""

    def test_create_and_list(self, temp_git_repo):
        repo = GitIntegration(temp_git_repo)
        repo.create_branch("feature/x")

        branches = {b.name: b.current for b in repo.list_branches()}
        assert branches == {"main": True, "feature/x": False}

    def test_create_with_checkout(self, temp_git_repo):
        repo = GitIntegration(temp_git_repo)
        repo.create_branch("feature/y", checkout=True)
        assert repo.current_branch() == "feature/y"

    def test_delete(self, temp_git_repo):
        repo = GitIntegration(temp_git_repo)
        repo.create_branch("old-feature")
        repo.delete_branch("old-feature")
        assert "old-feature" not in [b.name for b in repo.list_branches()]

    def test_delete_missing_raises(self, temp_git_repo):
        with pytest.raises(GitCommandError, match="git branch failed"):
            GitIntegration(temp_git_repo).delete_branch("nope")

    def test_switch(self, temp_git_repo):
        repo = GitIntegration(temp_git_repo)
        repo.create_branch("dev")
        repo.switch_branch("dev")
        assert repo.current_branch() == "dev"

        repo.switch_branch("feature/z", create=True)
        assert repo.current_branch() == "feature/z"

    def test_switch_missing_raises(self, temp_git_repo):
        with pytest.raises(GitCommandError, match="git checkout failed"):
            GitIntegration(temp_git_repo).switch_branch("nope")


@requires_git
class TestHistory:
    """Diffs, log and commit."""

    def test_staged_diff(self, temp_git_repo):
        (temp_git_repo / "app.py").write_text("print('hi')\n")
        git(temp_git_repo, "add", "app.py")

        repo = GitIntegration(temp_git_repo)
        assert repo.get_staged_files() == ["app.py"]
        assert "print('hi')" in repo.get_staged_diff()

    def test_unstaged_diff(self, temp_git_repo):
        (temp_git_repo / "README.md").write_text("# Changed\n")
        repo = GitIntegration(temp_git_repo)
        assert repo.get_changed_files() == ["README.md"]
        assert "# Changed" in repo.get_diff(["README.md"])

    def test_commit_and_log(self, temp_git_repo):
        (temp_git_repo / "a.txt").write_text("a")
        git(temp_git_repo, "add", "a.txt")

        repo = GitIntegration(temp_git_repo)
        short = repo.commit("feat: add a")

        commits = repo.get_commits_between(None)
        assert [c.message for c in commits] == ["feat: add a", "Initial commit"]
        assert commits[0].short_hash == short
        assert commits[0].author == "Test User"

    def test_range_since_tag(self, temp_git_repo):
        git(temp_git_repo, "tag", "v1.0.0")
        (temp_git_repo / "b.txt").write_text("b")
        git(temp_git_repo, "add", "b.txt")
        git(temp_git_repo, "commit", "-m", "fix: b")

        repo = GitIntegration(temp_git_repo)
        assert repo.get_latest_tag() == "v1.0.0"
        assert [c.message for c in repo.get_commits_between("v1.0.0")] == ["fix: b"]
        assert repo.get_files_changed_since("v1.0.0") == ["b.txt"]
        assert "b.txt" in repo.get_diff_with_base("v1.0.0")

    def test_no_tags(self, temp_git_repo):
        assert GitIntegration(temp_git_repo).get_latest_tag() is None
