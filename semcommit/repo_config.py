"""Repository configuration for semcommit.

Handles the optional .commit.json file at the repository root:

    {
      "scopes": [{"path": "src/api/", "scope": "api"}],
      "defaultScope": "repo",
      "commitTypes": {"mode": "whitelist", "types": ["feat", "fix"]}
    }

A missing file yields the defaults (no scopes, whitelist of the built-in types).
"""

import json
import logging
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from semcommit.config import DEFAULT_COMMIT_TYPES
from semcommit.user_config import ConfigError

logger = logging.getLogger(__name__)

REPO_CONFIG_FILE = ".commit.json"


class RepoConfigParseError(ConfigError):
    """Raised when .commit.json is malformed or inconsistent."""

    pass


class ScopeMapping(BaseModel):
    """A path prefix bound to a scope name."""

    path: str
    scope: str


class CommitTypeConfig(BaseModel):
    """Whitelist or blacklist of commit types."""

    mode: Optional[Literal["whitelist", "blacklist"]] = None
    types: list[str] = []

    @field_validator("mode", mode="before")
    @classmethod
    def blank_mode_is_unset(cls, value):
        """Treat an empty mode string as unset."""
        if value == "":
            return None
        return value

    @field_validator("types", mode="before")
    @classmethod
    def null_types_is_empty(cls, value):
        """Treat a JSON null type list as empty."""
        return [] if value is None else value


class RepoConfig(BaseModel):
    """Per-repository configuration loaded from .commit.json."""

    model_config = ConfigDict(populate_by_name=True)

    scopes: list[ScopeMapping] = []
    default_scope: Optional[str] = Field(default=None, alias="defaultScope")
    commit_types: CommitTypeConfig = Field(default_factory=CommitTypeConfig, alias="commitTypes")

    @field_validator("scopes", mode="before")
    @classmethod
    def null_scopes_is_empty(cls, value):
        """Treat a JSON null scope list as empty."""
        return [] if value is None else value

    @field_validator("commit_types", mode="before")
    @classmethod
    def null_commit_types_is_unset(cls, value):
        """Treat a JSON null commitTypes block as unset."""
        return {} if value is None else value


def default_repo_config() -> RepoConfig:
    """Return the configuration used when no .commit.json exists."""
    return RepoConfig(
        commit_types=CommitTypeConfig(mode="whitelist", types=list(DEFAULT_COMMIT_TYPES)),
    )


def get_repo_config_file(repo_root: Path) -> Path:
    """Return path to the .commit.json file.

    Args:
        repo_root: The root directory of the git repository.

    Returns:
        Path to .commit.json.
    """
    return repo_root / REPO_CONFIG_FILE


def _normalize_scopes(config: RepoConfig) -> None:
    """Normalize scope prefixes, reject duplicates and empty names, sort longest first.

    Raises:
        RepoConfigParseError: On a duplicate prefix or empty scope name.
    """
    # Local import: scope imports RepoConfig from this module
    from semcommit.scope import normalize_path

    seen = set()
    for mapping in config.scopes:
        original = mapping.path
        prefix = normalize_path(original).rstrip("/") + "/"
        mapping.path = prefix

        if prefix in seen:
            raise RepoConfigParseError(f"duplicate scope path: {prefix}")
        seen.add(prefix)

        if not mapping.scope.strip():
            raise RepoConfigParseError(f"scope name cannot be empty for path: {original}")

    # Stable sort keeps declaration order among equal lengths
    config.scopes.sort(key=lambda m: len(m.path), reverse=True)


def load_repo_config(repo_root: Path) -> RepoConfig:
    """Load and normalize .commit.json.

    Args:
        repo_root: The root directory of the git repository.

    Returns:
        The loaded configuration, or the defaults if the file doesn't exist.

    Raises:
        RepoConfigParseError: If the file is not valid JSON, does not match the
            schema, or declares duplicate/empty scopes.
    """
    config_file = get_repo_config_file(repo_root)

    if not config_file.exists():
        return default_repo_config()

    try:
        data = json.loads(config_file.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise RepoConfigParseError(f"failed to parse repo config: {e}") from e

    if not isinstance(data, dict):
        raise RepoConfigParseError("failed to parse repo config: top-level value must be an object")

    try:
        config = RepoConfig.model_validate(data)
    except ValidationError as e:
        raise RepoConfigParseError(f"failed to parse repo config: {e}") from e

    _normalize_scopes(config)

    if config.commit_types.mode is None:
        config.commit_types = CommitTypeConfig(mode="whitelist", types=list(DEFAULT_COMMIT_TYPES))

    if not allowed_types(config):
        raise RepoConfigParseError(
            f"failed to parse repo config: commitTypes leaves no allowed types (mode={config.commit_types.mode})"
        )

    logger.debug(
        "Loaded %s: %d scopes, mode=%s",
        config_file,
        len(config.scopes),
        config.commit_types.mode,
    )
    return config


def allowed_types(config: RepoConfig) -> list[str]:
    """Return the effective list of allowed commit types.

    Whitelist mode returns the configured types. Blacklist mode returns the
    built-in types minus the configured ones, in built-in order.
    """
    commit_types = config.commit_types
    if commit_types.mode == "blacklist":
        blocked = set(commit_types.types)
        return [t for t in DEFAULT_COMMIT_TYPES if t not in blocked]
    if commit_types.mode == "whitelist":
        return list(commit_types.types)
    return list(DEFAULT_COMMIT_TYPES)


def has_scopes(config: Optional[RepoConfig]) -> bool:
    """Return True if the config has any scope definitions."""
    return config is not None and len(config.scopes) > 0


def scope_names(config: RepoConfig) -> list[str]:
    """Return distinct scope names in prefix order."""
    names = []
    for mapping in config.scopes:
        if mapping.scope not in names:
            names.append(mapping.scope)
    return names


def create_default_repo_config(repo_root: Path) -> bool:
    """Write a template .commit.json unless one already exists.

    Args:
        repo_root: The root directory of the git repository.

    Returns:
        True if a file was written, False if one already existed.
    """
    config_file = get_repo_config_file(repo_root)
    if config_file.exists():
        return False

    template = {
        "scopes": [],
        "defaultScope": None,
        "commitTypes": {"mode": "whitelist", "types": list(DEFAULT_COMMIT_TYPES)},
    }
    config_file.write_text(json.dumps(template, indent=2) + "\n", encoding="utf-8")
    return True
