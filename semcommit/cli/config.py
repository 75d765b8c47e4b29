"""CLI commands for configuration management."""

import typer

from semcommit.config import VALID_MODES, LLMProvider
from semcommit.git import GitGateway, NotARepositoryError
from semcommit.repo_config import REPO_CONFIG_FILE, create_default_repo_config
from semcommit.user_config import (
    SETTABLE_KEYS,
    InvalidDefaultModeError,
    InvalidProviderError,
    create_default_config,
    get_config_file,
    set_config_value,
)

# Subcommand group for configuration management
config_app = typer.Typer(
    name="config",
    help="Manage semcommit configuration (~/.commit-tool/.env and .commit.json)",
    add_completion=False,
)


@config_app.command("init")
def config_init() -> None:
    """Create the user config template and a .commit.json in this repo."""
    config_file = get_config_file()
    try:
        if create_default_config():
            typer.echo(f"✓ Created {config_file}")
        else:
            typer.echo(f"  {config_file} already exists, left unchanged")
    except OSError as e:
        typer.echo(f"Error creating {config_file}: {e}", err=True)
        raise typer.Exit(1)

    try:
        repo_root = GitGateway.find().repo_root
    except NotARepositoryError:
        typer.echo(f"  Not in a git repository, skipped {REPO_CONFIG_FILE}")
        return

    repo_file = repo_root / REPO_CONFIG_FILE
    try:
        if create_default_repo_config(repo_root):
            typer.echo(f"✓ Created {repo_file}")
        else:
            typer.echo(f"  {repo_file} already exists, left unchanged")
    except OSError as e:
        typer.echo(f"Error creating {repo_file}: {e}", err=True)
        raise typer.Exit(1)

    typer.echo()
    typer.echo(f"Next: set COMMIT_PROVIDER and your API key in {config_file}")


def _check_value(key: str, value: str) -> str:
    """Validate and normalize a value for a settable key.

    Raises:
        InvalidDefaultModeError: For an unknown mode.
        InvalidProviderError: For an unsupported provider.
    """
    if key == "defaultMode":
        if value not in VALID_MODES:
            raise InvalidDefaultModeError(value)
        return value

    try:
        return LLMProvider(value.lower()).value
    except ValueError:
        raise InvalidProviderError(value)


@config_app.command("set")
def config_set(
    assignment: str = typer.Argument(
        ...,
        help="KEY=VALUE, e.g. defaultMode=single or provider=openai",
    ),
) -> None:
    """Set one value in ~/.commit-tool/.env."""
    if "=" not in assignment:
        typer.echo("Invalid format. Use: semcommit config set key=value", err=True)
        raise typer.Exit(1)

    key, value = (part.strip() for part in assignment.split("=", 1))

    if key not in SETTABLE_KEYS:
        typer.echo(f"Unknown config key: {key}", err=True)
        typer.echo(f"Available keys: {', '.join(SETTABLE_KEYS)}", err=True)
        raise typer.Exit(1)

    try:
        value = _check_value(key, value)
        set_config_value(SETTABLE_KEYS[key], value)
    except (InvalidDefaultModeError, InvalidProviderError) as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(1)
    except OSError as e:
        typer.echo(f"Failed to set config: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"✓ Set {key}={value}")
