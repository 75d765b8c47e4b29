"""CLI command for explaining the changes to one file."""

from typing import Optional

import typer

from semcommit.explain import NO_CHANGES_MESSAGE, explain_file_changes, repo_relative_path, resolve_ref_range
from semcommit.git import GitError, GitGateway
from semcommit.llm import LLMError, get_provider
from semcommit.user_config import ConfigError, load_user_config, with_provider_override
from semcommit.cli.utils import (
    configure_logging,
    print_final,
    print_progress,
    print_step,
    print_success,
    report_error,
)


def explain_command(
    file: str = typer.Argument(
        ...,
        help="File whose changes should be explained",
    ),
    from_ref: Optional[str] = typer.Option(
        None,
        "--from",
        help="Start of the range (default: HEAD)",
    ),
    to_ref: Optional[str] = typer.Option(
        None,
        "--to",
        help="End of the range (default: working tree)",
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
        help="Show debug logs",
    ),
) -> None:
    """Explain in plain language what changed in a file.

    Without refs, compares the working tree with HEAD. --to alone compares
    HEAD with that ref; --from alone compares that ref with the working tree.
    """
    configure_logging(verbose)

    try:
        gateway = GitGateway.find()

        print_step("🔧", "Loading config...")
        user_config = load_user_config()
        if provider:
            user_config = with_provider_override(user_config, provider)
        llm = get_provider(user_config)
        print_success(f"Provider: {user_config.provider.value}")

        path = repo_relative_path(file, gateway.repo_root)
        refs = resolve_ref_range(from_ref, to_ref)
        print_step("📂", f"Analyzing: {path} ({refs.description})")
        print_progress(f"Sending to {llm.model}...")

        explanation = explain_file_changes(gateway, llm, path, from_ref, to_ref)

    except KeyboardInterrupt:
        print_final("❌", "Interrupted")
        raise typer.Exit(1)

    except (ConfigError, GitError, LLMError) as e:
        report_error(e)
        raise typer.Exit(1)

    if explanation is None:
        typer.echo(NO_CHANGES_MESSAGE)
        return

    print_final("🤖", "Analysis:")
    typer.echo()
    typer.echo(explanation)
