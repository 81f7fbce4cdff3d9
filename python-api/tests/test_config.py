"""Tests for configuration settings."""

import pytest

from siesru.config import LINE_TERMINATORS, Settings


def make_settings(**overrides):
    return Settings(_env_file=None, **overrides)


def test_settings_has_defaults():
    settings = make_settings(SRU_LINE_ENDING="crlf", SIE_ENCODING="iso-8859-1")

    assert settings.line_terminator == "\r\n"
    assert settings.SIE_ENCODING == "iso-8859-1"
    assert settings.max_file_size_bytes == settings.MAX_FILE_SIZE_MB * 1024 * 1024


def test_lf_line_terminator():
    assert make_settings(SRU_LINE_ENDING="lf").line_terminator == "\n"


def test_allowed_origins_list():
    settings = make_settings(ALLOWED_ORIGINS="https://a.se, https://b.se")
    assert settings.allowed_origins_list == ["https://a.se", "https://b.se"]
    assert make_settings(ALLOWED_ORIGINS=" ").allowed_origins_list == ["http://localhost:5173"]


def test_production_rejects_debug():
    settings = make_settings(ENV="production", DEBUG=True, ALLOWED_ORIGINS="https://sru.example.se")
    with pytest.raises(ValueError, match="DEBUG"):
        settings.validate_production_config()


def test_production_rejects_localhost():
    settings = make_settings(ENV="production", DEBUG=False, ALLOWED_ORIGINS="http://localhost:5173")
    with pytest.raises(ValueError, match="localhost"):
        settings.validate_production_config()


def test_production_accepts_real_origin():
    settings = make_settings(ENV="production", DEBUG=False, ALLOWED_ORIGINS="https://sru.example.se")
    settings.validate_production_config()


@pytest.mark.parametrize("ending", sorted(LINE_TERMINATORS))
def test_line_terminator_uses_shared_mapping(ending):
    assert make_settings(SRU_LINE_ENDING=ending).line_terminator == LINE_TERMINATORS[ending]
