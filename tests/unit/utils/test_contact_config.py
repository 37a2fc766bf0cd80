"""Tests for YAML configuration."""
import pytest
import yaml

from awscontactman.contacts.retry import RetryPolicy
from awscontactman.utils.config import Config


def write_config(path, data):
    path.write_text(yaml.safe_dump(data), encoding="utf-8")


class TestConfig:
    """Test Config loading and lookups."""

    def test_missing_file_uses_defaults(self, isolated_config):
        config = Config()

        assert config.config_file == isolated_config
        assert config.get("default_profile") is None
        assert config.retry_policy() == RetryPolicy()
        assert config.get_export_config() == {"bucket": None, "prefix": ""}
        assert config.get_logging_config() == {"level": "WARNING", "file": None}

    def test_dot_notation(self, isolated_config):
        write_config(isolated_config, {"export": {"bucket": "contacts", "prefix": "lists/"}})
        config = Config()

        assert config.get("export.bucket") == "contacts"
        assert config.get("export.missing", "fallback") == "fallback"
        assert config.get("export.bucket.deeper") is None

    def test_retry_policy_from_file(self, isolated_config):
        write_config(
            isolated_config,
            {"retry": {"max_attempts": 5, "base_delay_ms": 200, "max_delay_ms": 1000}},
        )

        assert Config().retry_policy() == RetryPolicy(max_attempts=5, base_delay=0.2, max_delay=1.0)

    def test_partial_retry_section_keeps_defaults(self, isolated_config):
        write_config(isolated_config, {"retry": {"max_attempts": 4}})

        assert Config().retry_policy() == RetryPolicy(max_attempts=4)

    def test_env_overrides_max_attempts(self, isolated_config, monkeypatch):
        write_config(isolated_config, {"retry": {"max_attempts": 4}})
        monkeypatch.setenv("AWSCONTACTMAN_RETRY_MAX_ATTEMPTS", "7")

        assert Config().retry_policy().max_attempts == 7

    def test_invalid_env_value_is_ignored(self, isolated_config, monkeypatch):
        monkeypatch.setenv("AWSCONTACTMAN_RETRY_MAX_ATTEMPTS", "lots")

        assert Config().retry_policy().max_attempts == 3

    def test_out_of_range_retry_config(self, isolated_config):
        write_config(isolated_config, {"retry": {"max_attempts": 0}})

        with pytest.raises(ValueError):
            Config().retry_policy()

    def test_invalid_yaml_is_treated_as_empty(self, isolated_config):
        isolated_config.write_text("retry: [unclosed", encoding="utf-8")

        assert Config().get("retry") is None

    def test_non_mapping_is_ignored(self, isolated_config):
        isolated_config.write_text("- just\n- a list\n", encoding="utf-8")

        assert Config().config_data == {}
        assert Config().get("anything", 1) == 1

    def test_config_is_read_only(self, isolated_config):
        write_config(isolated_config, {"default_profile": "org-admin"})
        config = Config()

        assert config.get("default_profile") == "org-admin"
        assert not hasattr(config, "set")
        assert not hasattr(config, "save_config")
