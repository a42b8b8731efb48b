"""Unit tests for config_template module."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from book_api.runtime.config.config_data import ConfigData
from book_api.runtime.config.config_template import (
    load_config,
    load_templated_yaml,
    substitute_env_vars,
)

REPO_CONFIG = Path(__file__).resolve().parents[5] / "config.yaml"


class TestSubstituteEnvVars:
    """Test cases for substitute_env_vars function."""

    def test_substitute_simple_env_var(self):
        with patch.dict(os.environ, {"TEST_VAR": "test_value"}):
            assert substitute_env_vars("${TEST_VAR}") == "test_value"

    def test_substitute_env_var_in_text(self):
        with patch.dict(os.environ, {"HOST": "localhost", "PORT": "8080"}):
            text = "Server running at http://${HOST}:${PORT}/api"
            result = substitute_env_vars(text)
            assert result == "Server running at http://localhost:8080/api"

    def test_substitute_env_var_with_default(self):
        with patch.dict(os.environ, {}, clear=True):
            assert substitute_env_vars("${MISSING_VAR:-default_value}") == "default_value"

    def test_empty_env_var_falls_back_to_default(self):
        with patch.dict(os.environ, {"EMPTY_VAR": ""}):
            assert substitute_env_vars("${EMPTY_VAR:-fallback}") == "fallback"

    def test_substitute_env_var_with_default_when_set(self):
        with patch.dict(os.environ, {"PRESENT_VAR": "actual_value"}):
            assert substitute_env_vars("${PRESENT_VAR:-default_value}") == "actual_value"

    def test_substitute_required_env_var_missing(self):
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(
                ValueError, match="Required environment variable MISSING_VAR not set"
            ):
                substitute_env_vars("${MISSING_VAR}")

    def test_substitute_env_var_with_custom_error(self):
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(
                ValueError,
                match="Required environment variable DB_PASSWORD: needed for postgres",
            ):
                substitute_env_vars("${DB_PASSWORD:?needed for postgres}")

    def test_text_without_placeholders_is_unchanged(self):
        assert substitute_env_vars("plain: value") == "plain: value"


class TestLoadTemplatedYaml:
    """Test cases for load_templated_yaml function."""

    def test_load_with_substitution(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            "config:\n"
            "  app:\n"
            '    port: "${PORT:-8080}"\n'
            "  database:\n"
            '    host: "${DB_HOSTNAME:-localhost}"\n'
            '    sslmode: "${DB_SSLMODE:-require}"\n'
        )

        with patch.dict(os.environ, {"PORT": "9000", "DB_HOSTNAME": "db.internal"}):
            config = load_templated_yaml(config_file)

        assert config.app.port == 9000
        assert config.database.host == "db.internal"
        assert config.database.sslmode == "require"

    def test_missing_sections_use_defaults(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("config:\n  logging:\n    level: DEBUG\n")

        config = load_templated_yaml(config_file)

        assert config.logging.level == "DEBUG"
        assert config.database.dbname == "defaultdb"

    def test_invalid_yaml(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("config: [unclosed")

        with pytest.raises(ValueError, match="Error parsing YAML"):
            load_templated_yaml(config_file)

    def test_empty_file(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("")

        with pytest.raises(ValueError, match="Failed to parse YAML"):
            load_templated_yaml(config_file)

    def test_invalid_values(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("config:\n  app:\n    port: not-a-number\n")

        with pytest.raises(ValueError, match="Invalid configuration"):
            load_templated_yaml(config_file)

    def test_file_not_found(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_templated_yaml(tmp_path / "missing.yaml")

    def test_repository_config_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            config = load_templated_yaml(REPO_CONFIG)

        assert config.app.port == 8080
        assert config.database.host == "localhost"
        assert config.database.port == 5432
        assert config.database.user == "postgres"
        assert config.database.dbname == "defaultdb"
        assert config.database.sslmode == "require"
        assert not config.database.url
        assert config.app.cors.origins == ["*"]


class TestLoadConfig:
    def test_missing_file_uses_defaults(self, tmp_path):
        config = load_config(tmp_path / "absent.yaml")

        assert config == ConfigData()

    def test_path_from_environment(self, tmp_path):
        config_file = tmp_path / "custom.yaml"
        config_file.write_text("config:\n  app:\n    port: 9999\n")

        with patch.dict(os.environ, {"BOOK_API_CONFIG": str(config_file)}):
            config = load_config()

        assert config.app.port == 9999
