"""Shared test fixtures and configuration."""

import json
import shutil
import subprocess
import tempfile
from pathlib import Path

import pytest

from semcommit.config import BEHAVIORAL_TEST, CREDENTIAL_ENV_VARS, DEFAULT_COMMIT_TYPES
from semcommit.models import AnalysisRequest, CommitRules, FileChange


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def config_dir(temp_dir, monkeypatch):
    """Point the user config directory at a temp dir with a clean environment."""
    directory = temp_dir / "commit-tool"
    monkeypatch.setenv("COMMIT_CONFIG_DIR", str(directory))
    for keys in CREDENTIAL_ENV_VARS.values():
        for key in keys:
            monkeypatch.delenv(key, raising=False)
    return directory


@pytest.fixture
def write_user_config(config_dir):
    """Write a .env file into the temp config dir."""

    def _write(content: str) -> Path:
        config_dir.mkdir(parents=True, exist_ok=True)
        env_file = config_dir / ".env"
        env_file.write_text(content)
        return env_file

    return _write


def _git(repo_dir: Path, *args: str) -> str:
    result = subprocess.run(
        ["git", *args],
        cwd=repo_dir,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout.strip()


@pytest.fixture
def git():
    """Run a git command in a directory and return its stdout."""
    return _git


@pytest.fixture
def temp_repo(tmp_path):
    """Create a temporary git repository with one commit."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")

    repo_dir = tmp_path / "test_repo"
    repo_dir.mkdir()

    _git(repo_dir, "init", "--quiet")
    _git(repo_dir, "config", "user.email", "test@example.com")
    _git(repo_dir, "config", "user.name", "Test User")
    _git(repo_dir, "config", "commit.gpgsign", "false")

    (repo_dir / "README.md").write_text("# Test Repo\n")
    _git(repo_dir, "add", "README.md")
    _git(repo_dir, "commit", "--quiet", "-m", "Initial commit")

    return repo_dir


@pytest.fixture
def empty_repo(tmp_path):
    """Create a temporary git repository without commits."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")

    repo_dir = tmp_path / "empty_repo"
    repo_dir.mkdir()

    _git(repo_dir, "init", "--quiet")
    _git(repo_dir, "config", "user.email", "test@example.com")
    _git(repo_dir, "config", "user.name", "Test User")
    _git(repo_dir, "config", "commit.gpgsign", "false")

    return repo_dir


@pytest.fixture
def sample_plan_dict():
    """Two-commit plan for a handler and a config file."""
    return {
        "commits": [
            {
                "type": "feat",
                "scope": "api",
                "message": "add handler endpoint",
                "files": ["handler.go"],
            },
            {
                "type": "chore",
                "message": "add configuration",
                "files": ["config.yaml"],
            },
        ]
    }


@pytest.fixture
def sample_llm_response(sample_plan_dict):
    """Sample raw LLM response (valid JSON)."""
    return json.dumps(sample_plan_dict, indent=2)


@pytest.fixture
def sample_llm_response_with_markdown(sample_plan_dict):
    """Sample raw LLM response with markdown code fences."""
    return "```json\n" + json.dumps(sample_plan_dict, indent=2) + "\n```"


@pytest.fixture
def sample_request():
    """AnalysisRequest for two new files without repo config."""
    return AnalysisRequest(
        files=[
            FileChange(path="handler.go", status="added", diff_summary="+12 -0"),
            FileChange(path="config.yaml", status="added", diff_summary="+3 -0"),
        ],
        diff="diff --git a/handler.go b/handler.go\n+package api\n",
        recent_commits=["fix: handle empty body", "feat(api): add router"],
        has_scopes=False,
        rules=CommitRules(
            types=list(DEFAULT_COMMIT_TYPES),
            max_message_length=50,
            behavioral_test=BEHAVIORAL_TEST,
        ),
    )
