from functools import lru_cache

from pydantic import AnyHttpUrl, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

RATE_PROVIDERS = {"static", "vatcomply"}


class Settings(BaseSettings):
    """Application settings loaded from environment with defaults.

    Environment variable mapping follows pydantic's rules (e.g., APP_NAME, DEBUG,
    RATE_PROVIDER, RATES_API_URL, HTTP_TIMEOUT_SECONDS).
    """

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Basic app metadata
    app_name: str = "Currency Converter"
    debug: bool = False
    version: str = "0.1.0"

    # Rate table source
    base_currency: str = "USD"
    # Allowed: 'static' (built-in table), 'vatcomply' (live HTTP source)
    rate_provider: str = "vatcomply"
    rates_api_url: AnyHttpUrl = "https://api.vatcomply.com/rates"
    http_timeout_seconds: float = 5.0
    http_retries: int = Field(2, ge=0)

    # Initial widget state
    default_amount: float = Field(1.0, ge=0)
    default_from: str = "USD"
    default_to: str = "EUR"

    @field_validator("rate_provider")
    @classmethod
    def known_provider(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in RATE_PROVIDERS:
            raise ValueError(
                f"Unsupported rate_provider '{v}'. Allowed: {sorted(RATE_PROVIDERS)}"
            )
        return v

    @field_validator("base_currency", "default_from", "default_to")
    @classmethod
    def upper_code(cls, v: str) -> str:
        return v.strip().upper()


@lru_cache
def get_settings() -> Settings:
    return Settings()
