"""Contributor defaults for thynkai commands.

Defaults can come from a .env file in the working directory or from the
process environment. Explicit CLI flags always take precedence.
"""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import dotenv_values

# Environment variables
ROOT_ENV_VAR = "THYNKAI_ROOT"
OWNER_ENV_VAR = "THYNKAI_OWNER"
OWNER_NAME_ENV_VAR = "THYNKAI_OWNER_NAME"

ENV_FILENAME = ".env"

DEFAULT_ROOT = Path(".")
DEFAULT_OWNER = "contrib:unknown"
DEFAULT_OWNER_NAME = "Unknown"


@dataclass
class Settings:
    """Resolved contributor defaults."""

    root: Path
    owner: str
    owner_name: str


def load_env_file(path: Path) -> dict[str, str]:
    """Load environment variables from a .env file.

    Args:
        path: Path to the .env file.

    Returns:
        Dictionary of environment variable names to values.
        Returns empty dict if file doesn't exist.
    """
    if not path.is_file():
        return {}

    raw_values = dotenv_values(path)
    return {k: v for k, v in raw_values.items() if v is not None}


def _lookup(name: str, file_vars: dict[str, str]) -> str | None:
    """Find a value in the .env file first, then the process environment."""
    value = file_vars.get(name) or os.environ.get(name)
    return value or None


def load_settings(cwd: Path | None = None) -> Settings:
    """Resolve contributor defaults.

    Resolution order per setting:
    1. .env file in cwd (if present)
    2. Process environment
    3. Built-in default

    Args:
        cwd: Directory to look for the .env file in. Defaults to the
            current working directory.

    Returns:
        Settings with every field resolved.
    """
    file_vars = load_env_file((cwd or Path.cwd()) / ENV_FILENAME)

    root = _lookup(ROOT_ENV_VAR, file_vars)
    return Settings(
        root=Path(root).expanduser() if root else DEFAULT_ROOT,
        owner=_lookup(OWNER_ENV_VAR, file_vars) or DEFAULT_OWNER,
        owner_name=_lookup(OWNER_NAME_ENV_VAR, file_vars) or DEFAULT_OWNER_NAME,
    )
