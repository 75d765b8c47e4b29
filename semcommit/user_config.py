"""User configuration management for semcommit.

Handles the user-level settings stored in ~/.commit-tool/.env:
- COMMIT_PROVIDER: which LLM back-end to use (required)
- credential keys for that provider (ANTHROPIC_API_KEY, ...)
- COMMIT_MODEL, COMMIT_DRY_RUN, COMMIT_DEFAULT_MODE (optional)

The directory can be relocated with the COMMIT_CONFIG_DIR environment variable.
"""

import dataclasses
import logging
import os
import stat
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import dotenv_values

from semcommit.config import CREDENTIAL_ENV_VARS, VALID_MODES, LLMProvider, supported_providers

logger = logging.getLogger(__name__)

CONFIG_DIR_NAME = ".commit-tool"
ENV_FILE_NAME = ".env"
CONFIG_DIR_ENV_VAR = "COMMIT_CONFIG_DIR"

# Friendly names accepted by `semcommit config set`
SETTABLE_KEYS = {
    "defaultMode": "COMMIT_DEFAULT_MODE",
    "provider": "COMMIT_PROVIDER",
}

DEFAULT_ENV_TEMPLATE = """# semcommit configuration

# ==============================================================================
# PROVIDER SELECTION (required)
# ==============================================================================
# Choose one: anthropic | openai | grok | gemini | azure-foundry
COMMIT_PROVIDER=

# ==============================================================================
# PUBLIC CLOUD API KEYS (use the one matching your provider)
# ==============================================================================
ANTHROPIC_API_KEY=
OPENAI_API_KEY=
GROK_API_KEY=
GEMINI_API_KEY=

# ==============================================================================
# AZURE AI FOUNDRY (private cloud, optional)
# ==============================================================================
AZURE_FOUNDRY_ENDPOINT=
AZURE_FOUNDRY_API_KEY=
AZURE_FOUNDRY_DEPLOYMENT=

# ==============================================================================
# OPTIONAL SETTINGS
# ==============================================================================
# Override the default model for your provider
# COMMIT_MODEL=claude-3-5-sonnet-20241022

# Always preview without committing
# COMMIT_DRY_RUN=true

# Default commit mode: smart (multiple semantic commits) or single (one commit)
# COMMIT_DEFAULT_MODE=smart
"""


class ConfigError(Exception):
    """Base exception for configuration errors."""

    pass


class ConfigNotFoundError(ConfigError):
    """Raised when the user config file does not exist."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"config file not found: {path}")


class EnvParseError(ConfigError):
    """Raised when the user config file cannot be read."""

    pass


class ProviderNotConfiguredError(ConfigError):
    """Raised when COMMIT_PROVIDER is missing or empty."""

    def __init__(self):
        super().__init__("no provider configured. Set COMMIT_PROVIDER in ~/.commit-tool/.env")


class InvalidProviderError(ConfigError):
    """Raised when COMMIT_PROVIDER names an unsupported provider."""

    def __init__(self, provider: str):
        self.provider = provider
        super().__init__(
            f"invalid provider '{provider}'. Supported: {', '.join(supported_providers())}"
        )


class MissingAPIKeyError(ConfigError):
    """Raised when a credential required by the provider is not set."""

    def __init__(self, provider: str, env_var: str):
        self.provider = provider
        self.env_var = env_var
        super().__init__(f"missing API key for provider '{provider}'. Set {env_var} in ~/.commit-tool/.env")


class InvalidDefaultModeError(ConfigError):
    """Raised when COMMIT_DEFAULT_MODE is neither smart nor single."""

    def __init__(self, mode: str):
        self.mode = mode
        super().__init__(f"invalid default mode '{mode}'. Use: smart or single")


@dataclass
class UserConfig:
    """Settings loaded from the user config file."""

    provider: LLMProvider
    model: Optional[str] = None
    dry_run: bool = False
    default_mode: str = "smart"
    credentials: dict[str, str] = field(default_factory=dict)

    def credential(self, env_var: str) -> str:
        """Return a credential value, or an empty string if unset."""
        return self.credentials.get(env_var, "")


def get_config_dir() -> Path:
    """Get the user configuration directory.

    Returns:
        Path to ~/.commit-tool/ (or $COMMIT_CONFIG_DIR when set).
    """
    override = os.environ.get(CONFIG_DIR_ENV_VAR)
    if override:
        return Path(override)
    return Path.home() / CONFIG_DIR_NAME


def get_config_file() -> Path:
    """Get path to the .env file.

    Returns:
        Path to ~/.commit-tool/.env
    """
    return get_config_dir() / ENV_FILE_NAME


def ensure_config_dir() -> Path:
    """Ensure the config directory exists with owner-only permissions.

    Returns:
        Path to the config directory.
    """
    config_dir = get_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)
    os.chmod(config_dir, stat.S_IRWXU)
    return config_dir


def read_env_file(path: Path) -> dict[str, str]:
    """Parse a KEY=VALUE file.

    Args:
        path: File to read.

    Returns:
        Mapping of keys to values. Keys without a value map to "".

    Raises:
        EnvParseError: If the file cannot be read or decoded.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            values = dotenv_values(stream=f, interpolate=False)
    except (OSError, UnicodeDecodeError) as e:
        raise EnvParseError(f"failed to parse config file {path}: {e}") from e

    return {key: (value or "").strip() for key, value in values.items()}


def _parse_provider(name: str) -> LLMProvider:
    """Convert a provider name to LLMProvider.

    Raises:
        ProviderNotConfiguredError: If the name is empty.
        InvalidProviderError: If the name is not supported.
    """
    name = (name or "").strip()
    if not name:
        raise ProviderNotConfiguredError()
    try:
        return LLMProvider(name.lower())
    except ValueError:
        raise InvalidProviderError(name)


def validate_credentials(config: UserConfig) -> None:
    """Ensure every credential the provider needs is present.

    Raises:
        MissingAPIKeyError: Naming the first missing key.
    """
    for env_var in CREDENTIAL_ENV_VARS[config.provider]:
        if not config.credential(env_var):
            raise MissingAPIKeyError(config.provider.value, env_var)


def _collect_credentials(env: dict[str, str]) -> dict[str, str]:
    """Gather credential values, falling back to the process environment.

    A value in the config file wins; an exported variable of the same name
    fills in keys the file leaves empty.
    """
    credentials = {}
    for keys in CREDENTIAL_ENV_VARS.values():
        for key in keys:
            value = env.get(key) or os.environ.get(key, "").strip()
            if value:
                credentials[key] = value
    return credentials


def load_user_config() -> UserConfig:
    """Load and validate the user configuration.

    Returns:
        The validated UserConfig.

    Raises:
        ConfigNotFoundError: If the .env file does not exist.
        EnvParseError: If the file cannot be read.
        ProviderNotConfiguredError: If COMMIT_PROVIDER is empty.
        InvalidProviderError: If COMMIT_PROVIDER is unsupported.
        MissingAPIKeyError: If the provider's credentials are incomplete.
        InvalidDefaultModeError: If COMMIT_DEFAULT_MODE is invalid.
    """
    env_file = get_config_file()

    if not env_file.exists():
        raise ConfigNotFoundError(env_file)

    env = read_env_file(env_file)

    provider = _parse_provider(env.get("COMMIT_PROVIDER", ""))

    credentials = _collect_credentials(env)
    config = UserConfig(
        provider=provider,
        model=env.get("COMMIT_MODEL") or None,
        dry_run=env.get("COMMIT_DRY_RUN", "").lower() == "true",
        credentials=credentials,
    )

    validate_credentials(config)

    default_mode = env.get("COMMIT_DEFAULT_MODE", "")
    if default_mode:
        if default_mode not in VALID_MODES:
            raise InvalidDefaultModeError(default_mode)
        config.default_mode = default_mode

    logger.debug("Loaded user config from %s (provider=%s)", env_file, provider.value)
    return config


def with_provider_override(config: UserConfig, provider_name: str) -> UserConfig:
    """Return a copy of the config using another provider.

    The configured model belongs to the original provider, so it is dropped
    when the provider actually changes.

    Raises:
        ProviderNotConfiguredError: If the name is empty.
        InvalidProviderError: If the name is not supported.
        MissingAPIKeyError: If the new provider's credentials are missing.
    """
    provider = _parse_provider(provider_name)
    if provider == config.provider:
        return config

    overridden = dataclasses.replace(config, provider=provider, model=None)
    validate_credentials(overridden)
    return overridden


def create_default_config() -> bool:
    """Write the commented .env template unless one already exists.

    Returns:
        True if a file was written, False if one already existed.
    """
    ensure_config_dir()
    env_file = get_config_file()

    if env_file.exists():
        return False

    env_file.write_text(DEFAULT_ENV_TEMPLATE, encoding="utf-8")
    os.chmod(env_file, stat.S_IRUSR | stat.S_IWUSR)
    return True


def set_config_value(env_key: str, value: str) -> None:
    """Set one KEY=value line in the .env file, keeping everything else.

    An existing (possibly commented-out) assignment of the key is replaced in
    place; otherwise the line is appended.

    Args:
        env_key: The variable name (e.g., "COMMIT_DEFAULT_MODE").
        value: The value to store.
    """
    create_default_config()
    env_file = get_config_file()

    lines = env_file.read_text(encoding="utf-8").splitlines()
    new_line = f"{env_key}={value}"
    replaced = False

    for i, line in enumerate(lines):
        candidate = line.strip().lstrip("#").strip()
        if candidate.split("=", 1)[0].strip() == env_key and "=" in candidate:
            if not replaced:
                lines[i] = new_line
                replaced = True

    if not replaced:
        lines.append(new_line)

    env_file.write_text("\n".join(lines) + "\n", encoding="utf-8")
    os.chmod(env_file, stat.S_IRUSR | stat.S_IWUSR)
