"""Tests for Settings configuration model."""

import pytest

from chatflow.config import Settings


class TestDefaults:
    def test_vault_identity(self):
        s = Settings()
        assert s.keyring_service == "ClaudeFlow"
        assert s.keyring_account == "claude_api_key"

    def test_api_endpoint(self):
        s = Settings()
        assert s.api_endpoint == "https://api.anthropic.com/v1/messages"
        assert s.api_version == "2023-06-01"

    def test_validation_request(self):
        s = Settings()
        assert s.validation_model == "claude-3-haiku-20240307"
        assert s.validation_max_tokens == 10

    def test_flow_defaults(self):
        s = Settings()
        assert s.flow_file_version == "1.0.0"
        assert s.default_conversation_title == "New Conversation"

    def test_log_level(self):
        s = Settings()
        assert s.log_level == "INFO"


class TestOverrides:
    def test_init_values_win(self):
        s = Settings(keyring_service="Isolated", validation_max_tokens=1)
        assert s.keyring_service == "Isolated"
        assert s.validation_max_tokens == 1

    def test_env_ignored_under_pytest(self, monkeypatch):
        monkeypatch.setenv("CHATFLOW_KEYRING_SERVICE", "FromEnv")
        assert Settings().keyring_service == "ClaudeFlow"


class TestExtraForbidden:
    def test_unknown_setting_raises(self):
        with pytest.raises(ValueError, match="extra_forbidden"):
            Settings(**{"nonexistent_field": "value"})
