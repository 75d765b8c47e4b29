"""Tests for semcommit.explain module."""

from unittest.mock import MagicMock

import pytest

from semcommit.explain import explain_file_changes, repo_relative_path, resolve_ref_range
from semcommit.git import GitGateway, NumstatEntry
from semcommit.llm import BaseLLMProvider


@pytest.fixture
def provider():
    provider = MagicMock(spec=BaseLLMProvider)
    provider.explain_diff.return_value = "The loop now stops early."
    return provider


class TestResolveRefRange:
    """Tests for resolve_ref_range function."""

    def test_defaults(self):
        """Test no refs compares HEAD with the working tree."""
        refs = resolve_ref_range()

        assert (refs.from_ref, refs.to_ref) == ("HEAD", None)
        assert refs.description == "uncommitted changes"

    def test_only_to(self):
        """Test --to alone starts from HEAD."""
        refs = resolve_ref_range(to_ref="feature")

        assert (refs.from_ref, refs.to_ref) == ("HEAD", "feature")
        assert refs.description == "from HEAD to feature"

    def test_only_from(self):
        """Test --from alone ends at the working tree."""
        refs = resolve_ref_range(from_ref="v1.0")

        assert refs.to_ref is None
        assert refs.description == "from v1.0 to working copy"

    def test_both(self):
        """Test an explicit range."""
        assert resolve_ref_range("main", "HEAD~2").description == "from main to HEAD~2"


class TestRepoRelativePath:
    """Tests for repo_relative_path function."""

    def test_relative_to_cwd(self, temp_dir):
        """Test a path relative to a subdirectory is rebased on the root."""
        (temp_dir / "src").mkdir()

        assert repo_relative_path("main.go", temp_dir, cwd=temp_dir / "src") == "src/main.go"

    def test_absolute(self, temp_dir):
        """Test an absolute path inside the repository."""
        assert repo_relative_path(str(temp_dir / "a" / "b.py"), temp_dir) == "a/b.py"

    def test_outside_repository(self, temp_dir):
        """Test paths outside the root are passed through."""
        outside = str(temp_dir.parent / "elsewhere.txt")
        assert repo_relative_path(outside, temp_dir) == outside


class TestExplainFileChanges:
    """Tests for explain_file_changes function."""

    def test_no_diff_skips_llm(self, provider):
        """Test an unchanged file returns None without calling the provider."""
        gateway = MagicMock(spec=GitGateway)
        gateway.diff_between.return_value = ""

        assert explain_file_changes(gateway, provider, "main.go") is None
        provider.explain_diff.assert_not_called()
        gateway.diff_between.assert_called_once_with("main.go", "HEAD", None)

    def test_prompt_contents(self, provider):
        """Test path, range, stats and diff reach the provider."""
        gateway = MagicMock(spec=GitGateway)
        gateway.diff_between.return_value = "@@ -1 +1 @@\n-old\n+new\n"
        gateway.numstat_between.return_value = NumstatEntry("1", "1")

        result = explain_file_changes(gateway, provider, "main.go", "v1.0", "v2.0")

        assert result == "The loop now stops early."
        _, user_prompt = provider.explain_diff.call_args.args
        assert "main.go" in user_prompt
        assert "from v1.0 to v2.0" in user_prompt
        assert "+1 -1" in user_prompt
        assert "+new" in user_prompt

    def test_unknown_stats(self, provider):
        """Test missing numstat falls back to unknown."""
        gateway = MagicMock(spec=GitGateway)
        gateway.diff_between.return_value = "+x\n"
        gateway.numstat_between.return_value = None

        explain_file_changes(gateway, provider, "main.go")

        _, user_prompt = provider.explain_diff.call_args.args
        assert "unknown" in user_prompt

    def test_real_repository(self, temp_repo, provider):
        """Test an uncommitted edit is diffed against HEAD."""
        (temp_repo / "README.md").write_text("# Test Repo\nNew line\n")

        result = explain_file_changes(GitGateway(temp_repo), provider, "README.md")

        assert result == "The loop now stops early."
        _, user_prompt = provider.explain_diff.call_args.args
        assert "+New line" in user_prompt
