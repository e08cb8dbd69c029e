# src/gcal_client/config.py
import os
from dataclasses import dataclass, replace
from typing import Optional

from dotenv import load_dotenv

from gcal_client.errors import ConfigError
from gcal_client.google_auth_helpers import ServiceAccountCredential

DEFAULT_API_BASE_URL = "https://www.googleapis.com/calendar/v3"
DEFAULT_TIMEOUT_SECONDS = 30
DEFAULT_CREDENTIALS_ENV = "GOOGLE_SA_CRED"


@dataclass(frozen=True)
class GCalConfig:
    """Settings for one HttpClient. Build it once and pass it down; nothing here is global."""
    api_base_url: str = DEFAULT_API_BASE_URL
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    credentials: Optional[ServiceAccountCredential] = None

    @classmethod
    def from_env(cls, var_name: str = DEFAULT_CREDENTIALS_ENV) -> "GCalConfig":
        """
        Load config from environment variables (and a .env file if present).

        var_name holds the service account key JSON. GCAL_API_BASE_URL and
        GCAL_TIMEOUT_SECONDS override the defaults when set.
        """
        load_dotenv()

        creds_env = os.getenv(var_name)
        if not creds_env:
            raise ConfigError(f"Failed to read credentials: {var_name} is not set")

        timeout_env = os.getenv("GCAL_TIMEOUT_SECONDS")
        try:
            timeout = float(timeout_env) if timeout_env else DEFAULT_TIMEOUT_SECONDS
        except ValueError as e:
            raise ConfigError(f"GCAL_TIMEOUT_SECONDS must be a number, got {timeout_env!r}") from e
        if timeout <= 0:
            raise ConfigError("GCAL_TIMEOUT_SECONDS must be positive")

        return cls(
            api_base_url=os.getenv("GCAL_API_BASE_URL") or DEFAULT_API_BASE_URL,
            timeout_seconds=timeout,
            credentials=ServiceAccountCredential.from_json(creds_env),
        )

    def with_base_url(self, url: str) -> "GCalConfig":
        return replace(self, api_base_url=url)

    def with_timeout(self, seconds: float) -> "GCalConfig":
        return replace(self, timeout_seconds=seconds)

    def with_credentials(self, credentials: Optional[ServiceAccountCredential]) -> "GCalConfig":
        return replace(self, credentials=credentials)
