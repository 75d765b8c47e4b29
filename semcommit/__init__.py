"""LLM-assisted semantic commit splitter CLI tool."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("semcommit")
except PackageNotFoundError:
    # Fallback for development mode
    __version__ = "0.0.0-dev"
