import pytest

from flightdesk.core.config import DEFAULT_HOSTNAME, load_settings
from flightdesk.services.integration.common.errors import ConfigurationError


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    for name in ("AMADEUS_API_KEY", "AMADEUS_API_SECRET", "AMADEUS_HOSTNAME",
                 "AMADEUS_TIMEOUT", "CORS_ORIGINS", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    # keep a developer's .env out of the way
    monkeypatch.chdir(tmp_path)
    return monkeypatch


def test_load_settings(clean_env):
    clean_env.setenv("AMADEUS_API_KEY", "  key  ")
    clean_env.setenv("AMADEUS_API_SECRET", "secret")

    settings = load_settings()

    assert settings.amadeus_api_key == "key"
    assert settings.amadeus_hostname == DEFAULT_HOSTNAME
    assert settings.base_url == f"https://{DEFAULT_HOSTNAME}"
    assert settings.amadeus_timeout == 30.0


@pytest.mark.parametrize("key, secret", [
    (None, "secret"),
    ("key", None),
    ("   ", "secret"),
    ("key", ""),
])
def test_missing_credentials_fail_fast(clean_env, key, secret):
    if key is not None:
        clean_env.setenv("AMADEUS_API_KEY", key)
    if secret is not None:
        clean_env.setenv("AMADEUS_API_SECRET", secret)

    with pytest.raises(ConfigurationError):
        load_settings()


def test_bad_timeout(clean_env):
    clean_env.setenv("AMADEUS_API_KEY", "key")
    clean_env.setenv("AMADEUS_API_SECRET", "secret")
    clean_env.setenv("AMADEUS_TIMEOUT", "soon")

    with pytest.raises(ConfigurationError):
        load_settings()
