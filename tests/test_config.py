"""Unit tests for Config (clismith.config).

Tests cover:
- Defaults and validation
- Derived paths (properties)
- Package manager resolution from the forced flag and the yarn probe
- from_env and CLI overrides
"""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from clismith.config import DEFAULT_GITHUB_API, DEFAULT_TEMPLATE_REPO, Config
from clismith.scaffolder.models import PackageManager


class TestConfigDefaults:
    @pytest.mark.unit
    def test_defaults(self):
        config = Config(name="my-cli")
        assert config.template_repo == DEFAULT_TEMPLATE_REPO
        assert config.github_api_url == DEFAULT_GITHUB_API
        assert config.defaults is False
        assert config.package_manager is None
        assert config.has_yarn is False
        assert config.yarn_mutex is None
        assert config.debug is False

    @pytest.mark.unit
    def test_empty_name_rejected(self):
        with pytest.raises(ValidationError):
            Config(name="")

    @pytest.mark.unit
    def test_short_clone_timeout_rejected(self):
        with pytest.raises(ValidationError):
            Config(name="x", clone_timeout=1)


class TestDerivedPaths:
    @pytest.mark.unit
    def test_destination_resolved(self, tmp_path: Path):
        config = Config(name="my-cli", output_dir=tmp_path)
        assert config.destination == (tmp_path / "my-cli").resolve()
        assert config.destination.is_absolute()

    @pytest.mark.unit
    def test_file_paths(self, tmp_path: Path):
        config = Config(name="my-cli", output_dir=tmp_path)
        assert config.manifest_path == config.destination / "package.json"
        assert config.gitignore_path == config.destination / ".gitignore"
        assert config.readme_bin == config.destination / "node_modules" / ".bin" / "oclif"


class TestPackageManager:
    @pytest.mark.unit
    def test_npm_without_yarn(self):
        assert Config(name="x").detected_package_manager is PackageManager.NPM

    @pytest.mark.unit
    def test_yarn_when_detected(self):
        assert Config(name="x", has_yarn=True).detected_package_manager is PackageManager.YARN

    @pytest.mark.unit
    def test_forced_wins_over_detection(self):
        config = Config(name="x", has_yarn=True, package_manager=PackageManager.NPM)
        assert config.detected_package_manager is PackageManager.NPM


class TestFromEnv:
    @pytest.mark.unit
    def test_reads_environment(self):
        env = {
            "CLISMITH_TEMPLATE_REPO": "https://example.com/t.git",
            "CLISMITH_GITHUB_API": "https://ghe.example.com/api/v3",
            "CLISMITH_DEBUG": "1",
            "YARN_MUTEX": "network",
        }
        with patch.dict(os.environ, env, clear=True):
            config = Config.from_env("my-cli")
        assert config.template_repo == "https://example.com/t.git"
        assert config.github_api_url == "https://ghe.example.com/api/v3"
        assert config.debug is True
        assert config.yarn_mutex == "network"

    @pytest.mark.unit
    def test_empty_environment(self):
        with patch.dict(os.environ, {}, clear=True):
            config = Config.from_env("my-cli")
        assert config.template_repo == DEFAULT_TEMPLATE_REPO
        assert config.yarn_mutex is None
        assert config.debug is False

    @pytest.mark.unit
    def test_overrides_win_and_none_ignored(self):
        with patch.dict(os.environ, {"CLISMITH_TEMPLATE_REPO": "from-env"}, clear=True):
            config = Config.from_env(
                "my-cli", template_repo="from-flag", package_manager=None, defaults=True
            )
        assert config.template_repo == "from-flag"
        assert config.package_manager is None
        assert config.defaults is True
