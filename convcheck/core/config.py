from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Harness settings loaded from environment with defaults.

    Environment variable mapping follows pydantic's rules (e.g., PAGE_URL, API_URL,
    API_CREDENTIAL, API_AUTH_SCHEME, UI_TIMEOUT_MS, RATE_PROVIDER).
    """

    app_name: str = "Currency Converter Check"
    debug: bool = False
    version: str = "0.1.0"

    # Page under test
    page_url: str = "https://www.xe.com/currencyconverter"
    ui_timeout_ms: int = 5000

    # Rate provider endpoint; credential is never hard-coded
    api_url: str = "http://127.0.0.1:8000/rates"
    api_credential: Optional[SecretStr] = None
    api_auth_scheme: str = "Basic"
    http_timeout_seconds: float = 5.0

    # Allowed: 'http' (authenticated endpoint at api_url), 'static' (fixed table for offline runs)
    rate_provider: str = "http"

    # Local rate stub service
    stub_base_currency: str = "EUR"
    stub_rates_file: Optional[Path] = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    def init_post_load(self) -> None:
        """Normalize derived fields and reject unsupported choices."""
        self.page_url = self.page_url.rstrip("/")
        allowed = {"http", "static"}
        if self.rate_provider not in allowed:
            raise ValueError(
                f"Unsupported rate_provider '{self.rate_provider}'. Allowed: {allowed}"
            )
        schemes = {"basic": "Basic", "bearer": "Bearer"}
        scheme = schemes.get(self.api_auth_scheme.lower())
        if scheme is None:
            raise ValueError(
                f"Unsupported api_auth_scheme '{self.api_auth_scheme}'. Allowed: {set(schemes.values())}"
            )
        self.api_auth_scheme = scheme
        self.stub_base_currency = self.stub_base_currency.upper()

    def auth_header(self) -> Optional[str]:
        if self.api_credential is None:
            return None
        return f"{self.api_auth_scheme} {self.api_credential.get_secret_value()}"


@lru_cache
def get_settings() -> Settings:
    settings = Settings()
    settings.init_post_load()
    return settings
