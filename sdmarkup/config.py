"""
Central configuration for data paths and engine defaults.

The vocabulary data file ships with the package under sdmarkup/data/.
Configure via environment variables (a .env file is honoured by the CLI):
  - SDMARKUP_VOCABULARY_PATH (default: bundled schema_types.yaml)
  - SDMARKUP_SEMANTIC (default: microdata)
  - SDMARKUP_SUFFIXES (default: sd, comma-separated)
"""

import os
from pathlib import Path

from .constants import DEFAULT_SEMANTIC, DEFAULT_SUFFIX


def get_data_dir() -> Path:
    """Get the directory holding bundled data files."""
    return Path(__file__).parent / "data"


def get_vocabulary_path() -> Path:
    """
    Get the vocabulary data file path.

    Uses SDMARKUP_VOCABULARY_PATH environment variable if set, otherwise
    defaults to the bundled schema.org subset.

    Returns:
        Path to the vocabulary file
    """
    env_path = os.environ.get("SDMARKUP_VOCABULARY_PATH")
    if env_path:
        return Path(env_path).expanduser().resolve()
    return get_data_dir() / "schema_types.yaml"


def get_default_semantic() -> str:
    """Get the default output semantic ("microdata" or "rdfa")."""
    return os.environ.get("SDMARKUP_SEMANTIC", DEFAULT_SEMANTIC).strip().lower()


def get_default_suffixes() -> list[str]:
    """Get the default data-* attribute suffixes."""
    raw = os.environ.get("SDMARKUP_SUFFIXES", DEFAULT_SUFFIX)
    return [s.strip().lower() for s in raw.split(",") if s.strip()]
