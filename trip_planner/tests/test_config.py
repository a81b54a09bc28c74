"""
Tests for planner configuration and credential handling.
"""

import pytest

from trip_planner.planner.graph.config import (
    DEFAULT_CONFIG,
    PlannerConfig,
    config_from_env,
    get_config,
)
from trip_planner.shared.llm import client as llm_client
from trip_planner.shared.resilience.errors import ConfigurationError


class TestGetConfig:
    def test_defaults(self):
        config = get_config()
        assert config.model == DEFAULT_CONFIG.model
        assert config.deadline_ms == 20000
        assert config.retry_policy.max_attempts == 2
        assert config.retry_policy.fixed_delay_ms == 1000
        assert config.max_known_locations == 30

    def test_overrides(self):
        config = get_config(model="gpt-4o-mini", deadline_ms=5000, max_attempts=4, fixed_delay_ms=10)
        assert config.model == "gpt-4o-mini"
        assert config.deadline_ms == 5000
        assert config.retry_policy.max_attempts == 4
        assert config.retry_policy.fixed_delay_ms == 10

    def test_invalid_retry_budget(self):
        with pytest.raises(ConfigurationError):
            get_config(max_attempts=0)

    def test_invalid_deadline(self):
        with pytest.raises(ConfigurationError):
            PlannerConfig(deadline_ms=0)


class TestConfigFromEnv:
    def test_reads_planner_variables(self, monkeypatch):
        monkeypatch.setenv("PLANNER_MODEL", "gpt-4o")
        monkeypatch.setenv("PLANNER_DEADLINE_MS", "1500")
        monkeypatch.setenv("PLANNER_MAX_ATTEMPTS", "3")
        monkeypatch.setenv("PLANNER_RETRY_DELAY_MS", "250")
        config = config_from_env()
        assert config.model == "gpt-4o"
        assert config.deadline_ms == 1500
        assert config.retry_policy.max_attempts == 3
        assert config.retry_policy.fixed_delay_ms == 250

    def test_unset_variables_keep_defaults(self, monkeypatch):
        for name in ["PLANNER_MODEL", "PLANNER_DEADLINE_MS", "PLANNER_MAX_ATTEMPTS", "PLANNER_RETRY_DELAY_MS"]:
            monkeypatch.delenv(name, raising=False)
        config = config_from_env()
        assert config.deadline_ms == DEFAULT_CONFIG.deadline_ms
        assert config.retry_policy == DEFAULT_CONFIG.retry_policy

    def test_non_integer_is_configuration_error(self, monkeypatch):
        monkeypatch.setenv("PLANNER_DEADLINE_MS", "soon")
        with pytest.raises(ConfigurationError):
            config_from_env()


class TestApiKey:
    def test_missing_key(self, monkeypatch):
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        with pytest.raises(ConfigurationError):
            llm_client.read_api_key()

    def test_blank_key(self, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "   ")
        with pytest.raises(ConfigurationError):
            llm_client.read_api_key()

    def test_key_with_whitespace(self, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-abc def")
        with pytest.raises(ConfigurationError):
            llm_client.read_api_key()

    def test_valid_key(self, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test-123")
        assert llm_client.read_api_key() == "sk-test-123"

    def test_client_not_created_without_key(self, monkeypatch):
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        llm_client.reset_client()
        with pytest.raises(ConfigurationError):
            llm_client.get_cached_client()
        llm_client.reset_client()
