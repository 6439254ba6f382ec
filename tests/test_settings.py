import importlib

import pytest

from config.settings import auth, security


@pytest.fixture
def reload_settings(monkeypatch):
    def _reload(**environ):
        for name, value in environ.items():
            monkeypatch.setenv(name, value)
        return importlib.reload(auth), importlib.reload(security)

    yield _reload
    monkeypatch.undo()
    importlib.reload(auth)
    importlib.reload(security)


@pytest.mark.parametrize("raw", ["on", "yes", "1", "true", "True"])
def test_boolean_flags_accept_usual_spellings(reload_settings, raw):
    auth_settings, security_settings = reload_settings(CORS_ALLOW_ALL_ORIGINS=raw, SESSION_COOKIE_SECURE=raw)

    assert auth_settings.CORS_ALLOW_ALL_ORIGINS is True
    assert security_settings.SESSION_COOKIE_SECURE is True


def test_boolean_flags_can_be_switched_off(reload_settings):
    auth_settings, security_settings = reload_settings(CORS_ALLOW_ALL_ORIGINS="off", CSRF_COOKIE_SECURE="no")

    assert auth_settings.CORS_ALLOW_ALL_ORIGINS is False
    assert security_settings.CSRF_COOKIE_SECURE is False


def test_origin_lists_are_comma_separated(reload_settings):
    auth_settings, security_settings = reload_settings(
        CORS_ALLOWED_ORIGINS="https://admin.example.com,https://desk.example.com",
        CSRF_TRUSTED_ORIGINS="https://admin.example.com",
        SECURE_HSTS_SECONDS="31536000",
    )

    assert auth_settings.CORS_ALLOWED_ORIGINS == ["https://admin.example.com", "https://desk.example.com"]
    assert security_settings.CSRF_TRUSTED_ORIGINS == ["https://admin.example.com"]
    assert security_settings.SECURE_HSTS_SECONDS == 31536000
    assert security_settings.SECURE_HSTS_INCLUDE_SUBDOMAINS is True
