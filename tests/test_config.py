"""Tests for environment-driven settings."""

import pytest

from internhub import ConfigError, DispatchPolicy, TopicRegistry, load_settings


class TestSettings:
    def test_defaults(self):
        settings = load_settings(dotenv=False)
        assert settings.dispatch_policy is DispatchPolicy.STOP
        assert settings.log_level == "INFO"
        assert settings.api_key is None

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("DISPATCH_POLICY", " Continue ")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("API_KEY", "secret")

        settings = load_settings(dotenv=False)

        assert settings.dispatch_policy is DispatchPolicy.CONTINUE
        assert settings.log_level == "DEBUG"
        assert settings.api_key == "secret"

    def test_invalid_policy(self, monkeypatch):
        monkeypatch.setenv("DISPATCH_POLICY", "retry")
        with pytest.raises(ConfigError):
            load_settings(dotenv=False)
        with pytest.raises(ConfigError):
            TopicRegistry()

    def test_explicit_policy_wins_over_environment(self, monkeypatch):
        monkeypatch.setenv("DISPATCH_POLICY", "continue")
        assert TopicRegistry(policy=DispatchPolicy.STOP).policy is DispatchPolicy.STOP
