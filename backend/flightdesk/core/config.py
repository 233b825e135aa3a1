"""
FlightDesk configuration.

Values come from the environment; a local .env file is loaded first.
"""
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import find_dotenv, load_dotenv

from flightdesk.services.integration.common.errors import ConfigurationError

DEFAULT_HOSTNAME = "test.api.amadeus.com"
DEFAULT_TIMEOUT = 30.0


@dataclass(frozen=True)
class Settings:
    amadeus_api_key: str
    amadeus_api_secret: str
    amadeus_hostname: str = DEFAULT_HOSTNAME
    amadeus_timeout: float = DEFAULT_TIMEOUT

    @property
    def base_url(self) -> str:
        return f"https://{self.amadeus_hostname}"


def _clean(value: Optional[str]) -> str:
    return (value or "").strip()


def load_settings(env_file: Optional[str] = None) -> Settings:
    """
    Builds Settings from the environment.

    Raises ConfigurationError if AMADEUS_API_KEY or AMADEUS_API_SECRET
    is missing or blank.
    """
    load_dotenv(env_file or find_dotenv(usecwd=True))

    api_key = _clean(os.getenv("AMADEUS_API_KEY"))
    api_secret = _clean(os.getenv("AMADEUS_API_SECRET"))

    if not api_key or not api_secret:
        raise ConfigurationError(
            "Missing Amadeus credentials. Set AMADEUS_API_KEY and AMADEUS_API_SECRET."
        )

    timeout_raw = _clean(os.getenv("AMADEUS_TIMEOUT"))
    try:
        timeout = float(timeout_raw) if timeout_raw else DEFAULT_TIMEOUT
    except ValueError:
        raise ConfigurationError(f"AMADEUS_TIMEOUT must be a number, got {timeout_raw!r}")

    return Settings(
        amadeus_api_key=api_key,
        amadeus_api_secret=api_secret,
        amadeus_hostname=_clean(os.getenv("AMADEUS_HOSTNAME")) or DEFAULT_HOSTNAME,
        amadeus_timeout=timeout,
    )
