"""Shared console output and error rendering for CLI commands."""

import logging

import typer

from semcommit.compose import ExecutionError, PlanValidationError
from semcommit.config import LLM_TIMEOUT_SECONDS, supported_providers
from semcommit.git import GitError, InsufficientHistoryError, NotARepositoryError, PushedCommitError
from semcommit.llm import LLMAuthError, LLMError, LLMResponseParseError, LLMTimeoutError
from semcommit.models import PlannedCommit
from semcommit.repo_config import REPO_CONFIG_FILE, RepoConfigParseError
from semcommit.user_config import (
    ConfigError,
    ConfigNotFoundError,
    InvalidDefaultModeError,
    InvalidProviderError,
    MissingAPIKeyError,
    ProviderNotConfiguredError,
    create_default_config,
    get_config_file,
)

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def configure_logging(verbose: bool = False) -> None:
    """Send library log records to stderr (DEBUG with --verbose)."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        force=True,
    )


# ============================================================
# Console helpers
# ============================================================

def print_step(emoji: str, message: str) -> None:
    typer.echo(f"\n{emoji} {message}")


def print_success(message: str) -> None:
    typer.echo(f"   ✓ {message}")


def print_step_error(message: str) -> None:
    typer.echo(f"   ✗ {message}")


def print_progress(message: str) -> None:
    typer.echo(f"   ⋯ {message}")


def print_verbose(message: str) -> None:
    typer.echo(f"   │ {message}")


def print_warning(message: str) -> None:
    typer.echo(f"   ⚠️  {message}")


def print_final(emoji: str, message: str) -> None:
    typer.echo(f"\n{emoji} {message}")


def print_detail(message: str = "") -> None:
    """Indented free text under a step."""
    typer.echo(f"   {message}" if message else "")


def print_commit_progress(current: int, total: int, commit: PlannedCommit) -> None:
    """Draw one node of the execution tree with its files."""
    if current == 1:
        branch = "┌─"
    elif current == total:
        branch = "└─"
    else:
        branch = "├─"
    typer.echo(f"   {branch} [{current}/{total}] {commit.subject}")
    for path in commit.files:
        typer.echo(f"   │  └─ {path}")


# ============================================================
# Error rendering
# ============================================================

def _report_config_error(error: ConfigError) -> None:
    config_file = get_config_file()
    providers = ", ".join(supported_providers())

    if isinstance(error, ConfigNotFoundError):
        print_step_error("No config file found")
        print_final("❌", "Configuration required")
        print_detail()
        print_detail("Edit your config file to get started:")
        print_detail(str(config_file))
        print_detail()
        print_detail(f"Set COMMIT_PROVIDER to one of: {providers}")
        print_detail("Then add the corresponding API key.")
        # Leave a template behind for the user to fill in
        try:
            create_default_config()
        except OSError as e:
            logging.getLogger(__name__).debug("Could not create config template: %s", e)

    elif isinstance(error, ProviderNotConfiguredError):
        print_step_error("No provider configured")
        print_final("❌", "Configuration required")
        print_detail()
        print_detail(f"Edit {config_file} and set COMMIT_PROVIDER")
        print_detail()
        print_detail(f"Supported providers: {providers}")

    elif isinstance(error, InvalidProviderError):
        print_step_error(f"Invalid provider: {error.provider}")
        print_final("❌", "Configuration error")
        print_detail()
        print_detail(f"Provider '{error.provider}' is not supported.")
        print_detail(f"Supported providers: {providers}")

    elif isinstance(error, MissingAPIKeyError):
        print_step_error(f"Missing {error.env_var}")
        print_final("❌", "Configuration error")
        print_detail()
        print_detail(f"Provider '{error.provider}' requires {error.env_var} to be set.")
        print_detail(f"Edit {config_file} to add your API key.")

    elif isinstance(error, InvalidDefaultModeError):
        print_step_error(f"Invalid default mode: {error.mode}")
        print_final("❌", "Configuration error")
        print_detail()
        print_detail(f"Default mode '{error.mode}' is not valid.")
        print_detail("Use: smart or single")

    elif isinstance(error, RepoConfigParseError):
        print_step_error(str(error))
        print_final("❌", "Configuration error")
        print_detail()
        print_detail(f"Fix {REPO_CONFIG_FILE} at the repository root.")

    else:
        print_step_error(f"Failed to load config: {error}")
        print_final("❌", "Configuration error")


def _report_llm_error(error: LLMError) -> None:
    print_step_error("Request failed")
    print_final("❌", "LLM request failed")
    print_detail(f"Error: {error}")

    if isinstance(error, LLMAuthError):
        print_detail()
        print_detail(f"💡 Check your API key in {get_config_file()}")
    elif isinstance(error, LLMTimeoutError):
        print_detail()
        print_detail(f"💡 No response within {LLM_TIMEOUT_SECONDS}s. Run the command again.")
    elif isinstance(error, LLMResponseParseError):
        print_detail()
        print_detail("💡 The model returned an unusable plan. Run the command again.")


def report_error(error: Exception) -> None:
    """Render an error as one step error and a final line, plus hints."""
    if isinstance(error, ConfigError):
        _report_config_error(error)

    elif isinstance(error, LLMError):
        _report_llm_error(error)

    elif isinstance(error, PlanValidationError):
        print_step_error("Validation failed")
        for reason in error.errors:
            print_detail(f"• {reason}")
        print_final("❌", "No commits created")

    elif isinstance(error, ExecutionError):
        if isinstance(error.cause, KeyboardInterrupt):
            print_step_error("Interrupted")
        else:
            print_step_error(f"Execution failed: {error.cause}")
        created = plural(len(error.executed), "commit")
        print_final("❌", f"Stopped at commit {error.commit_index + 1}; {created} created")
        for executed in error.executed:
            print_detail(f"{executed.hash} {executed.subject}")

    elif isinstance(error, PushedCommitError):
        print_step_error("Commit has been pushed")
        print_final("❌", "Cannot reverse pushed commit")
        print_detail()
        for line in str(error).splitlines():
            print_detail(line)

    elif isinstance(error, InsufficientHistoryError):
        print_step_error(str(error))
        print_final("❌", "Nothing reversed")

    elif isinstance(error, NotARepositoryError):
        print_final("❌", str(error))

    elif isinstance(error, GitError):
        print_step_error(str(error))
        print_final("❌", "Git command failed")

    else:
        print_final("❌", f"Error: {error}")


def plural(count: int, noun: str) -> str:
    """Return "1 commit" or "2 commits"."""
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"
