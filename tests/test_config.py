import pytest

from utility import config
from utility.config import DEFAULT_MODEL, Settings, load_settings
from utility.exceptions import ConfigurationError

ENV_VARS = (
    "GEMINI_API_KEY", "GEMINI_MODEL", "GEMINI_API_BASE", "HOST", "PORT",
    "ALLOWED_ORIGINS", "PROMPT_INCLUDE_EXAMPLE", "LOG_LEVEL", "LOG_DIR", "RELAY_URL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    # keep a developer's .env out of the tests
    monkeypatch.setattr(config, "load_dotenv", lambda *args, **kwargs: False)
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    settings = load_settings()

    assert settings.gemini_api_key is None
    assert settings.gemini_model == DEFAULT_MODEL
    assert settings.port == 3000
    assert settings.allowed_origins == ["*"]
    assert settings.include_example is True
    assert settings.relay_url == "http://localhost:3000"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "secret")
    monkeypatch.setenv("GEMINI_MODEL", "gemini-2.5-flash")
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("ALLOWED_ORIGINS", "http://localhost:5173, https://mail.example.com")
    monkeypatch.setenv("PROMPT_INCLUDE_EXAMPLE", "false")
    monkeypatch.setenv("RELAY_URL", "http://relay:3000/")

    settings = load_settings()

    assert settings.require_api_key() == "secret"
    assert settings.gemini_model == "gemini-2.5-flash"
    assert settings.port == 8080
    assert settings.allowed_origins == ["http://localhost:5173", "https://mail.example.com"]
    assert settings.include_example is False
    assert settings.relay_url == "http://relay:3000"


def test_missing_api_key_is_fatal():
    with pytest.raises(ConfigurationError, match="GEMINI_API_KEY"):
        Settings().require_api_key()


def test_invalid_port(monkeypatch):
    monkeypatch.setenv("PORT", "not-a-port")

    with pytest.raises(ConfigurationError):
        load_settings()
