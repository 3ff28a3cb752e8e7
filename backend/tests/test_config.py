"""Testes das configurações."""
from devops_bot.config import Settings


def test_defaults():
    s = Settings(_env_file=None)
    assert s.VSTS_API_VERSION == "7.1"
    assert s.REQUEST_TIMEOUT == 30
    assert s.emulator_url is None


def test_emulator_url_only_when_debugging():
    url = "http://localhost:9000"
    assert Settings(_env_file=None, EMULATOR_LISTENING_URL=url).emulator_url is None
    assert Settings(_env_file=None, EMULATOR_LISTENING_URL=url, DEBUG="yes").emulator_url == url


def test_invalid_timeout_falls_back():
    assert Settings(_env_file=None, REQUEST_TIMEOUT="abc").REQUEST_TIMEOUT == 30
    assert Settings(_env_file=None, REQUEST_TIMEOUT=-1).REQUEST_TIMEOUT == 30


def test_oauth_app_settings_read_from_environment(monkeypatch):
    monkeypatch.setenv("APP_ID", "oauth-app")
    monkeypatch.setenv("APP_SCOPE", "vso.build_execute vso.release_manage")
    s = Settings(_env_file=None)
    assert s.APP_ID == "oauth-app"
    assert s.APP_SCOPE == "vso.build_execute vso.release_manage"
    assert s.APP_SECRET == ""
