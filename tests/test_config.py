import logging

import pytest

from doc_delivery.config import DEFAULT_API_URL, Settings, load_settings
from doc_delivery.errors import ConfigurationError
from doc_delivery.logging_setup import configure_logging


def test_load_settings_defaults(monkeypatch):
    for var in ("CLOUDCONVERT_API_KEY", "CLOUDCONVERT_API_URL", "CLOUDCONVERT_TIMEOUT_SEC", "DOC_DELIVERY_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    settings = load_settings()
    assert settings.api_key is None
    assert settings.api_url == DEFAULT_API_URL
    assert settings.timeout_sec is None
    assert settings.log_level == "INFO"
    with pytest.raises(ConfigurationError):
        settings.require_api_key()


def test_load_settings_reads_environment(monkeypatch):
    monkeypatch.setenv("CLOUDCONVERT_API_KEY", "abc")
    monkeypatch.setenv("CLOUDCONVERT_API_URL", "https://sandbox.example/v2/")
    monkeypatch.setenv("CLOUDCONVERT_TIMEOUT_SEC", "45")
    monkeypatch.setenv("DOC_DELIVERY_LOG_LEVEL", "debug")
    settings = load_settings()
    assert settings.require_api_key() == "abc"
    assert settings.api_url == "https://sandbox.example/v2"
    assert settings.timeout_sec == 45.0
    assert settings.log_level == "DEBUG"


def test_require_api_key_strips_whitespace():
    assert Settings(api_key="  key \n").require_api_key() == "key"


def test_configure_logging_is_idempotent():
    logger = configure_logging("DEBUG")
    configure_logging("WARNING")
    ours = [h for h in logger.handlers if getattr(h, "_doc_delivery", False)]
    assert len(ours) == 1
    assert logger.level == logging.WARNING


@pytest.mark.parametrize("raw", ["abc", "30s", "1,5"])
def test_malformed_timeout_is_configuration_error(monkeypatch, raw):
    monkeypatch.setenv("CLOUDCONVERT_TIMEOUT_SEC", raw)
    with pytest.raises(ConfigurationError, match="CLOUDCONVERT_TIMEOUT_SEC"):
        load_settings()
