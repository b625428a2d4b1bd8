"""
Relay Hub Backend: Configuration Tests
=========================================

What:  Tests for Settings loading, validation and immutability.
How:   Environment variables are set per test with monkeypatch; `.env` files
       are ignored via `_env_file=None`.
"""

import pytest
from pydantic import ValidationError

from app.config import Settings

CREDENTIAL_VARS = ("FACE_API_KEY", "FACE_API_SECRET", "WEATHER_API_KEY", "LLAMA_API_KEY", "CHAT_API_KEY")


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every variable the suite's conftest or the shell may have set."""
    for name in CREDENTIAL_VARS + ("PORT", "UPSTREAM_TIMEOUT", "CORS_ORIGINS", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestSettingsDefaults:

    def test_server_defaults(self, clean_env):
        s = Settings(_env_file=None)
        assert s.port == 3000
        assert s.static_dir == "public"
        assert s.log_level == "INFO"
        assert s.upstream_timeout == 60.0

    def test_chat_defaults(self, clean_env):
        s = Settings(_env_file=None)
        assert s.chat_model == "llama-2-70b-chat"
        assert s.chat_temperature == 0.7
        assert s.chat_max_tokens == 2000

    def test_upstream_urls(self, clean_env):
        s = Settings(_env_file=None)
        assert s.face_api_url == "https://api-us.faceplusplus.com/facepp/v3/detect"
        assert s.weather_api_url == "https://api.openweathermap.org/data/2.5/weather"
        assert s.chat_api_url == "https://api.llama-api.com/chat/completions"


class TestSettingsFromEnvironment:

    def test_reads_credentials(self, clean_env):
        clean_env.setenv("FACE_API_KEY", "fk")
        clean_env.setenv("FACE_API_SECRET", "fs")
        clean_env.setenv("WEATHER_API_KEY", "wk")
        s = Settings(_env_file=None)
        assert (s.face_api_key, s.face_api_secret, s.weather_api_key) == ("fk", "fs", "wk")

    def test_llama_api_key_fills_chat_key(self, clean_env):
        clean_env.setenv("LLAMA_API_KEY", "llama-secret")
        assert Settings(_env_file=None).chat_api_key == "llama-secret"

    def test_chat_api_key_also_accepted(self, clean_env):
        clean_env.setenv("CHAT_API_KEY", "chat-secret")
        assert Settings(_env_file=None).chat_api_key == "chat-secret"

    def test_port_from_env(self, clean_env):
        clean_env.setenv("PORT", "8080")
        assert Settings(_env_file=None).port == 8080

    def test_log_level_normalized(self, clean_env):
        clean_env.setenv("LOG_LEVEL", "debug")
        assert Settings(_env_file=None).log_level == "DEBUG"

    def test_invalid_log_level_rejected(self, clean_env):
        clean_env.setenv("LOG_LEVEL", "chatty")
        with pytest.raises(ValidationError, match="Invalid log_level"):
            Settings(_env_file=None)

    def test_non_positive_timeout_rejected(self, clean_env):
        clean_env.setenv("UPSTREAM_TIMEOUT", "0")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)


class TestSettingsBehavior:

    def test_frozen(self, clean_env):
        s = Settings(_env_file=None, weather_api_key="wk")
        with pytest.raises(ValidationError):
            s.weather_api_key = "changed"
        assert s.weather_api_key == "wk"

    def test_missing_credentials_lists_unset_keys(self, clean_env):
        s = Settings(_env_file=None, face_api_key="fk", weather_api_key="wk")
        assert s.missing_credentials() == ["FACE_API_SECRET", "LLAMA_API_KEY"]

    def test_no_missing_credentials(self, test_settings):
        assert test_settings.missing_credentials() == []

    def test_cors_origins_list(self, clean_env):
        s = Settings(_env_file=None, cors_origins="http://localhost:5173, https://example.com")
        assert s.cors_origins_list == ["http://localhost:5173", "https://example.com"]

    def test_cors_default_allows_any_origin(self, clean_env):
        assert Settings(_env_file=None).cors_origins_list == ["*"]
