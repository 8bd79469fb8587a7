# src/git_assets/core/config.py
"""
Configuration schema and loading for git-assets.

Uses Pydantic for validation and Dynaconf for multi-source loading.
Settings are frozen (immutable) after construction.
"""

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from git_assets.core.store import DEFAULT_CHUNK_SIZE, DEFAULT_MAX_STAGING_PROBES, DEFAULT_STAGING_PREFIX

ENVVAR_PREFIX = "GIT_ASSETS"


class GitAssetsSettings(BaseModel):
    """Top-level git-assets configuration."""

    model_config = {"frozen": True}

    store_path: Path | None = Field(
        default=None,
        description="Store root; discovered from the enclosing git repository when unset",
    )
    staging_prefix: str = Field(
        default=DEFAULT_STAGING_PREFIX,
        description="File name prefix for staging files",
    )
    max_staging_probes: int = Field(
        default=DEFAULT_MAX_STAGING_PROBES,
        gt=0,
        description="Maximum staging names tried before giving up",
    )
    copy_chunk_size: int = Field(
        default=DEFAULT_CHUNK_SIZE,
        gt=0,
        description="Chunk size in bytes for streaming copies and hashing",
    )

    @field_validator("staging_prefix")
    @classmethod
    def validate_staging_prefix(cls, v: str) -> str:
        """Staging prefix must be a single, visible path component."""
        if not v:
            raise ValueError("staging_prefix must not be empty")
        if "/" in v or "\\" in v or "\0" in v:
            raise ValueError(f"staging_prefix must not contain path separators, got {v!r}")
        if v.startswith("."):
            raise ValueError(f"staging_prefix must not start with '.', got {v!r}")
        return v


def load_settings(config_path: Path | None = None) -> GitAssetsSettings:
    """Load settings from an optional file with environment variable overrides.

    Uses Dynaconf for multi-source loading with precedence:
    1. Environment variables (GIT_ASSETS_*) - highest priority
    2. Config file, if given
    3. Defaults from Pydantic schema - lowest priority

    Args:
        config_path: Path to a YAML or TOML configuration file

    Returns:
        Validated GitAssetsSettings instance

    Raises:
        ValidationError: If configuration fails Pydantic validation
        FileNotFoundError: If config_path is given but doesn't exist
    """
    from dynaconf import Dynaconf

    # Explicit check for file existence (Dynaconf silently accepts missing files)
    if config_path is not None and not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    dynaconf_settings = Dynaconf(
        envvar_prefix=ENVVAR_PREFIX,
        settings_files=[str(config_path)] if config_path is not None else [],
        environments=False,
        load_dotenv=False,
        merge_enabled=True,
    )

    # Dynaconf returns uppercase keys; convert to lowercase for Pydantic
    # and drop its internal bookkeeping keys
    internal_keys = {"LOAD_DOTENV", "ENVIRONMENTS", "SETTINGS_FILES"}
    raw_config = {k.lower(): v for k, v in dynaconf_settings.as_dict().items() if k not in internal_keys}

    return GitAssetsSettings(**raw_config)
