# tests/core/test_config.py
"""Tests for settings schema and loading."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from git_assets.core.config import GitAssetsSettings, load_settings


class TestGitAssetsSettings:
    """Schema defaults and validation."""

    def test_defaults(self) -> None:
        settings = GitAssetsSettings()

        assert settings.store_path is None
        assert settings.staging_prefix == "smudge"
        assert settings.max_staging_probes == 10_000
        assert settings.copy_chunk_size == 64 * 1024

    def test_settings_are_frozen(self) -> None:
        settings = GitAssetsSettings()

        with pytest.raises(ValidationError):
            settings.staging_prefix = "other"  # type: ignore[misc]

    @pytest.mark.parametrize("prefix", ["", "a/b", "a\\b", ".hidden"])
    def test_rejects_bad_staging_prefix(self, prefix: str) -> None:
        with pytest.raises(ValidationError, match="staging_prefix"):
            GitAssetsSettings(staging_prefix=prefix)

    @pytest.mark.parametrize("field", ["max_staging_probes", "copy_chunk_size"])
    def test_rejects_non_positive_limits(self, field: str) -> None:
        with pytest.raises(ValidationError):
            GitAssetsSettings(**{field: 0})


class TestLoadSettings:
    """Multi-source loading via Dynaconf."""

    def test_no_file_no_env_gives_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("GIT_ASSETS_STORE_PATH", raising=False)

        assert load_settings() == GitAssetsSettings()

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_settings(tmp_path / "missing.yaml")

    def test_loads_yaml_file(self, tmp_path: Path) -> None:
        config = tmp_path / "git-assets.yaml"
        config.write_text("store_path: /srv/assets\nstaging_prefix: clean\nmax_staging_probes: 50\n")

        settings = load_settings(config)

        assert settings.store_path == Path("/srv/assets")
        assert settings.staging_prefix == "clean"
        assert settings.max_staging_probes == 50

    def test_environment_overrides_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        config = tmp_path / "git-assets.yaml"
        config.write_text("max_staging_probes: 50\n")
        monkeypatch.setenv("GIT_ASSETS_MAX_STAGING_PROBES", "7")

        assert load_settings(config).max_staging_probes == 7

    def test_invalid_values_raise_validation_error(self, tmp_path: Path) -> None:
        config = tmp_path / "git-assets.yaml"
        config.write_text("copy_chunk_size: -1\n")

        with pytest.raises(ValidationError):
            load_settings(config)
