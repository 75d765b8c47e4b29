"""Tests for semcommit.compose.validation module."""

import pytest

from semcommit.compose import PlanValidationError, filter_sensitive_files, validate_plan
from semcommit.models import CommitPlan, PlannedCommit
from semcommit.repo_config import CommitTypeConfig, RepoConfig, ScopeMapping


def _plan(*commits):
    return CommitPlan(commits=list(commits))


def _commit(files, type="feat", message="add thing", scope=None):
    return PlannedCommit(type=type, scope=scope, message=message, files=files)


@pytest.fixture
def scoped_config():
    return RepoConfig(
        scopes=[ScopeMapping(path="src/api/", scope="api")],
        default_scope="repo",
    )


class TestValidatePlanCoverage:
    """Tests for working-set coverage and duplicates."""

    def test_valid_plan(self):
        """Test a plan covering every file once passes."""
        plan = _plan(_commit(["a.go"]), _commit(["b.go"], type="chore"))

        result = validate_plan(plan, ["a.go", "b.go"])

        assert result.valid
        assert result.errors == []

    def test_missing_file_is_named(self):
        """Test an omitted file is reported by path."""
        plan = _plan(_commit(["a"]))

        result = validate_plan(plan, ["a", "b"])

        assert not result.valid
        assert result.errors == ["validation error in files: file 'b' is not included in any commit"]

    def test_duplicate_file(self):
        """Test a file in two commits is rejected."""
        plan = _plan(_commit(["a"]), _commit(["a", "b"]))

        result = validate_plan(plan, ["a", "b"])

        assert result.errors == [
            "validation error in commits[1].files: file 'a' already appears in commits[0]"
        ]

    def test_unknown_file(self):
        """Test a path outside the working set is rejected."""
        plan = _plan(_commit(["a", "ghost.py"]))

        result = validate_plan(plan, ["a"])

        assert "file 'ghost.py' is not in the working set" in result.errors[0]

    @pytest.mark.parametrize("path", ["/etc/passwd", "../outside.txt", "src/../../x", "C:\\temp\\x"])
    def test_unsafe_paths(self, path):
        """Test absolute and parent-relative paths are rejected."""
        plan = _plan(_commit(["a", path]))

        result = validate_plan(plan, ["a"])

        assert any("must be relative to the repository root" in e for e in result.errors)

    def test_empty_plan(self):
        """Test a plan with no commits is rejected."""
        result = validate_plan(_plan(), ["a"])

        assert "validation error in commits: plan has no commits" in result.errors

    def test_commit_without_files(self):
        """Test every commit needs at least one file."""
        plan = _plan(_commit(["a"]), _commit([]))

        result = validate_plan(plan, ["a"])

        assert result.errors == ["validation error in commits[1].files: commit has no files"]

    def test_sensitive_file_not_required(self):
        """Test sensitive files in the working set need no commit."""
        plan = _plan(_commit(["app.go"]))

        assert validate_plan(plan, ["app.go", ".env"]).valid

    def test_sensitive_file_may_be_planned(self):
        """Test planning a sensitive file is still valid before filtering."""
        plan = _plan(_commit(["app.go", ".env"]))

        assert validate_plan(plan, ["app.go", ".env"]).valid

    def test_errors_accumulate(self):
        """Test every defect is reported, not just the first."""
        plan = _plan(_commit(["a", "ghost"], type="wip", message="x" * 60))

        result = validate_plan(plan, ["a", "b"])

        assert len(result.errors) == 4
        assert result.errors[0].startswith("validation error in commits[0].type")
        assert result.errors[1].startswith("validation error in commits[0].message")
        assert result.errors[2].startswith("validation error in commits[0].files")
        assert result.errors[3].startswith("validation error in files")

    def test_empty_plan_for_sensitive_only_working_set(self):
        """Test no commits are needed when every file is sensitive."""
        assert validate_plan(_plan(), [".env", "certs/server.key"]).valid

    def test_filtering_keeps_plan_valid(self):
        """Test a valid plan stays valid after sensitive files are filtered."""
        plan = _plan(_commit(["app.go", "secrets.yaml"]), _commit([".env"], type="chore"))
        working_set = ["app.go", "secrets.yaml", ".env"]
        assert validate_plan(plan, working_set).valid

        filter_sensitive_files(plan)

        assert validate_plan(plan, working_set).valid

    def test_filtering_everything_keeps_plan_valid(self):
        """Test a plan emptied by filtering is still valid."""
        plan = _plan(_commit([".env"], type="chore"))
        assert validate_plan(plan, [".env"]).valid

        filter_sensitive_files(plan)

        assert plan.commits == []
        assert validate_plan(plan, [".env"]).valid

    def test_removing_commit_keeps_plan_invalid(self):
        """Test dropping a commit from an invalid plan never makes it valid."""
        plan = _plan(_commit(["a"]), _commit(["b"]))
        assert not validate_plan(plan, ["a", "b", "c"]).valid

        smaller = _plan(_commit(["a"]))
        assert not validate_plan(smaller, ["a", "b", "c"]).valid


class TestValidatePlanTypes:
    """Tests for commit type checks."""

    def test_default_types(self):
        """Test built-in types pass without repo config."""
        plan = _plan(_commit(["a"], type="refactor"))
        assert validate_plan(plan, ["a"]).valid

    def test_type_not_in_whitelist(self):
        """Test a type outside the whitelist is rejected."""
        config = RepoConfig(commit_types=CommitTypeConfig(mode="whitelist", types=["feat", "fix"]))
        plan = _plan(_commit(["a"], type="chore"))

        result = validate_plan(plan, ["a"], config)

        assert result.errors == [
            "validation error in commits[0].type: type 'chore' is not allowed (allowed: feat, fix)"
        ]

    def test_blacklisted_type(self):
        """Test a blacklisted type is rejected."""
        config = RepoConfig(commit_types=CommitTypeConfig(mode="blacklist", types=["refactor"]))
        plan = _plan(_commit(["a"], type="refactor"))

        assert not validate_plan(plan, ["a"], config).valid


class TestValidatePlanMessage:
    """Tests for subject message checks."""

    def test_max_length_allowed(self):
        """Test a 50-character message passes."""
        plan = _plan(_commit(["a"], message="x" * 50))
        assert validate_plan(plan, ["a"]).valid

    def test_too_long(self):
        """Test a 51-character message fails with its length."""
        plan = _plan(_commit(["a"], message="x" * 51))

        result = validate_plan(plan, ["a"])

        assert result.errors == ["validation error in commits[0].message: message is 51 characters (max 50)"]

    def test_multiline(self):
        """Test an embedded newline fails."""
        plan = _plan(_commit(["a"], message="add x\nand y"))

        result = validate_plan(plan, ["a"])

        assert result.errors == ["validation error in commits[0].message: message must be a single line"]

    def test_empty(self):
        """Test a blank message fails."""
        plan = _plan(_commit(["a"], message="   "))

        result = validate_plan(plan, ["a"])

        assert result.errors == ["validation error in commits[0].message: message is empty"]


class TestValidatePlanScopes:
    """Tests for scope legality."""

    def test_configured_scope(self, scoped_config):
        """Test a configured scope passes."""
        plan = _plan(_commit(["src/api/x.go"], scope="api"))
        assert validate_plan(plan, ["src/api/x.go"], scoped_config).valid

    def test_default_scope_is_legal(self, scoped_config):
        """Test the default scope is accepted."""
        plan = _plan(_commit(["README.md"], type="docs", scope="repo"))
        assert validate_plan(plan, ["README.md"], scoped_config).valid

    def test_no_scope_is_legal(self, scoped_config):
        """Test omitting the scope is accepted."""
        plan = _plan(_commit(["README.md"], type="docs"))
        assert validate_plan(plan, ["README.md"], scoped_config).valid

    def test_unknown_scope(self, scoped_config):
        """Test an invented scope is rejected."""
        plan = _plan(_commit(["src/api/x.go"], scope="web"))

        result = validate_plan(plan, ["src/api/x.go"], scoped_config)

        assert result.errors == [
            "validation error in commits[0].scope: scope 'web' is not configured (allowed: api, repo)"
        ]

    def test_any_scope_without_scope_config(self):
        """Test scopes are unchecked when the repo defines none."""
        plan = _plan(_commit(["a"], scope="anything"))
        assert validate_plan(plan, ["a"]).valid


class TestValidatePlanSingleCommit:
    """Tests for single-commit mode."""

    def test_one_commit(self):
        """Test one commit covering everything passes."""
        plan = _plan(_commit(["a", "b"]))
        assert validate_plan(plan, ["a", "b"], single_commit=True).valid

    def test_two_commits(self):
        """Test two commits fail in single mode."""
        plan = _plan(_commit(["a"]), _commit(["b"]))

        result = validate_plan(plan, ["a", "b"], single_commit=True)

        assert result.errors == [
            "validation error in commits: single-commit mode requires exactly 1 commit, got 2"
        ]

    def test_sensitive_only_working_set(self):
        """Test single mode accepts an empty plan when every file is sensitive."""
        assert validate_plan(_plan(), [".env"], single_commit=True).valid

    def test_sensitive_only_commit_not_counted(self):
        """Test a commit holding only sensitive files does not count."""
        plan = _plan(_commit(["a"]), _commit([".env"], type="chore"))
        assert validate_plan(plan, ["a", ".env"], single_commit=True).valid


class TestPlanValidationError:
    """Tests for PlanValidationError."""

    def test_message_lists_errors(self):
        """Test every reason appears in the message."""
        error = PlanValidationError(["first", "second"])

        assert error.errors == ["first", "second"]
        assert str(error) == "plan validation failed:\n  - first\n  - second"
