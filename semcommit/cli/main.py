"""Main CLI command: split uncommitted changes into conventional commits."""

from typing import Optional

import typer

from semcommit import __version__
from semcommit.compose import (
    ExecutionError,
    PlanValidationError,
    execute_plan,
    filter_sensitive_files,
    preview_plan,
    validate_plan,
)
from semcommit.context import NoChangesError, build_analysis_request, summarize_request
from semcommit.git import GitError, GitGateway, reverse_commits
from semcommit.llm import LLMError, get_provider
from semcommit.models import STATUS_ADDED
from semcommit.repo_config import RepoConfig, has_scopes, load_repo_config, scope_names
from semcommit.user_config import ConfigError, UserConfig, load_user_config, with_provider_override
from semcommit.cli.utils import (
    configure_logging,
    plural,
    print_commit_progress,
    print_detail,
    print_final,
    print_progress,
    print_step,
    print_step_error,
    print_success,
    print_verbose,
    print_warning,
    report_error,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"semcommit version {__version__}")
        raise typer.Exit()

def main_command(
    ctx: typer.Context,
    staged: bool = typer.Option(
        False,
        "--staged",
        help="Only consider staged files",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Run the full pipeline without creating commits",
    ),
    reverse: Optional[int] = typer.Option(
        None,
        "--reverse",
        help="Reverse the last N commits into uncommitted changes (--reverse alone means 1)",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        help="Allow --reverse on commits that were already pushed",
    ),
    provider: Optional[str] = typer.Option(
        None,
        "--provider",
        help="Override the configured LLM provider for this run",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show scope resolution, the commit plan and debug logs",
    ),
    single: bool = typer.Option(
        False,
        "--single",
        "-1",
        help="Create exactly one commit for all changes",
    ),
    smart: bool = typer.Option(
        False,
        "--smart",
        help="Split changes into multiple commits (overrides COMMIT_DEFAULT_MODE)",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
) -> None:
    """Split uncommitted changes into semantic conventional commits."""
    # If a subcommand is invoked, don't run the default behavior
    if ctx.invoked_subcommand is not None:
        return

    configure_logging(verbose)

    if single and smart:
        typer.echo("--single and --smart cannot be used together", err=True)
        raise typer.Exit(1)

    try:
        gateway = GitGateway.find()

        if reverse is not None:
            _run_reverse(gateway, reverse, force)
            return

        print_step("🔧", "Loading config...")
        user_config = load_user_config()
        if provider:
            user_config = with_provider_override(user_config, provider)
        repo_config = load_repo_config(gateway.repo_root)

        print_success(f"Provider: {user_config.provider.value}")
        if has_scopes(repo_config):
            print_success(f"Scopes (from .commit.json): {', '.join(scope_names(repo_config))}")

        single_commit = single or (not smart and user_config.default_mode == "single")
        _run_commit_flow(
            gateway,
            user_config,
            repo_config,
            staged_only=staged,
            dry_run=dry_run or user_config.dry_run,
            single_commit=single_commit,
            verbose=verbose,
        )

    except NoChangesError as e:
        print_step_error("No changes found")
        print_final("❌", str(e))
        if e.staged_only:
            print_detail("Stage files with 'git add' first, or run without --staged")
        return

    except KeyboardInterrupt:
        print_final("❌", "Interrupted")
        raise typer.Exit(1)

    except (ConfigError, GitError, LLMError, PlanValidationError, ExecutionError, ValueError) as e:
        report_error(e)
        raise typer.Exit(1)


def _run_reverse(gateway: GitGateway, count: int, force: bool) -> None:
    print_step("🔄", f"Reversing {plural(count, 'commit')}...")

    result = reverse_commits(gateway, count=count, force=force)

    print_final("✅", f"Reversed {plural(result.count, 'commit')}")
    print_detail("Changes are now uncommitted in your working directory.")
    if result.was_pushed:
        print_warning("You will need to force-push after re-committing.")


def _run_commit_flow(
    gateway: GitGateway,
    user_config: UserConfig,
    repo_config: RepoConfig,
    staged_only: bool,
    dry_run: bool,
    single_commit: bool,
    verbose: bool,
) -> None:
    """Collect, plan, validate, filter and execute."""
    print_step("📂", "Collecting changes...")
    request = build_analysis_request(
        gateway,
        repo_config,
        staged_only=staged_only,
        single_commit=single_commit,
    )

    added = sum(1 for f in request.files if f.status == STATUS_ADDED)
    print_success(
        f"Found {plural(len(request.files), 'file')} "
        f"({len(request.files) - added} changed, {added} new)"
    )
    if verbose:
        for change in request.files:
            print_verbose(f"  {change.path} → {change.scope or '(no scope)'}")
        print_verbose(summarize_request(request))

    print_step("🤖", "Analyzing changes...")
    llm = get_provider(user_config)
    print_progress(f"Sending to {llm.model}...")
    plan = llm.analyze(request)
    print_success("Analysis complete")

    print_step("📋", "Planning commits...")
    result = validate_plan(plan, request.paths, repo_config, single_commit=single_commit)
    if not result.valid:
        raise PlanValidationError(result.errors)

    excluded = filter_sensitive_files(plan)
    if excluded:
        print_warning(f"Excluded {plural(len(excluded), 'sensitive file')}: {', '.join(excluded)}")

    if not plan.commits:
        print_final("❌", "No commits to create")
        print_detail("All changes were filtered out.")
        raise typer.Exit(1)

    print_success(f"{plural(len(plan.commits), 'commit')} planned")
    if verbose or dry_run:
        typer.echo()
        typer.echo(preview_plan(plan))

    if dry_run:
        print_step("🚀", "Preview (dry-run)...")
    else:
        print_step("🚀", "Executing commits...")

    executed = execute_plan(
        plan,
        gateway,
        dry_run=dry_run,
        progress=print_commit_progress,
        rename_sources=request.rename_sources,
    )

    if dry_run:
        print_final("✅", f"Would create {plural(len(executed), 'commit')} (dry-run)")
        return

    print_final("✅", f"Created {plural(len(executed), 'commit')}")
    for commit in executed:
        print_detail(f"{commit.hash} {commit.subject}")
