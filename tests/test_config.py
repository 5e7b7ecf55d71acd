"""Tests for Settings loading."""

import pytest

from lead_agent.config import DEFAULT_PORT, Settings, load_settings, parse_port


class TestParsePort:

    @pytest.mark.parametrize(
        "raw, expected",
        [
            (None, 3000),
            ("", 3000),
            ("abc", 3000),
            ("0", 3000),
            ("-5", 3000),
            ("8080", 8080),
            (" 5000 ", 5000),
        ],
    )
    def test_parse_port(self, raw, expected):
        assert parse_port(raw) == expected


class TestLoadSettings:

    def test_defaults(self):
        settings = load_settings({})

        assert settings == Settings()
        assert settings.port == DEFAULT_PORT
        assert settings.openai_api_key is None
        assert settings.openai_model == "gpt-4"
        assert settings.temperature == 0.7
        assert settings.max_tokens == 150
        assert settings.debug is False

    def test_from_environment(self):
        settings = load_settings({
            "PORT": "4000",
            "HOST": "127.0.0.1",
            "OPENAI_API_KEY": "sk-test",
            "OPENAI_MODEL": "gpt-4o-mini",
            "DEBUG": "TRUE",
        })

        assert settings.port == 4000
        assert settings.host == "127.0.0.1"
        assert settings.openai_api_key == "sk-test"
        assert settings.openai_model == "gpt-4o-mini"
        assert settings.debug is True

    def test_empty_api_key_is_unset(self):
        assert load_settings({"OPENAI_API_KEY": ""}).openai_api_key is None

    def test_settings_are_frozen(self):
        settings = Settings()

        with pytest.raises(AttributeError):
            settings.port = 1
