import pytest

from giftdraw.core.config import load_settings


@pytest.fixture
def env(monkeypatch):
    monkeypatch.setenv("BOT_TOKEN", "123:abc")
    monkeypatch.setenv("DATABASE_URL", "sqlite:///test.db")
    for name in ("SESSION_KEY", "COPIED_INDICATOR_SECONDS", "RATE_LIMIT_CALLS", "RATE_LIMIT_PERIOD"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(env):
    settings = load_settings()
    assert settings.session_key == "secret-draw"
    assert settings.copied_indicator_seconds == 2
    assert settings.rate_limit_calls == 5


def test_missing_token(env):
    env.delenv("BOT_TOKEN")
    with pytest.raises(ValueError):
        load_settings()


def test_bad_number(env):
    env.setenv("RATE_LIMIT_CALLS", "many")
    with pytest.raises(ValueError):
        load_settings()
