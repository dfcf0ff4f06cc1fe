"""
Application Configuration

All settings loaded from environment variables.
"""

from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

from pricehub.services.cache.ttl_cache import TTL


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "PriceHub"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 3000

    # CORS
    allowed_origins: list[str] = ["*"]

    # Request defaults
    reference_currency: str = "usd"
    default_ids: str = "bitcoin,ethereum"
    default_vs: str = "inr"
    default_days: int = 30
    default_symbol: str = "bitcoin"
    analyze_days: int = 60

    # Cache TTLs (seconds)
    price_ttl: float = TTL["price"]
    compare_ttl: float = TTL["compare"]
    fx_ttl: float = TTL["fx"]
    resolve_ttl: float = TTL["resolve"]

    # Upstream politeness
    batch_delay_seconds: float = 0.05
    http_timeout_seconds: float = 10.0

    # Fallback chain, cheapest/fastest first
    price_sources: list[str] = ["binance", "coincap", "coinpaprika", "coingecko"]

    # Binance
    binance_base_url: str = "https://api.binance.com"

    # CoinCap
    coincap_base_url: str = "https://api.coincap.io/v2"
    coincap_api_key: Optional[str] = None

    # CoinPaprika
    coinpaprika_base_url: str = "https://api.coinpaprika.com/v1"

    # CoinGecko (free tier wants a pause between calls)
    coingecko_base_url: str = "https://api.coingecko.com/api/v3"
    coingecko_api_key: Optional[str] = None
    coingecko_delay_seconds: float = 1.2

    # FX
    fx_base_url: str = "https://open.er-api.com/v6/latest/USD"
    fx_api_key: Optional[str] = None

    # Narrative (optional)
    llm_provider: str = "openai"  # Options: openai, anthropic
    openai_api_key: Optional[str] = None
    anthropic_api_key: Optional[str] = None
    llm_model: str = "gpt-4o-mini"
    anthropic_model: str = "claude-3-haiku-20240307"
    narrative_timeout_seconds: float = 20.0
    narrative_max_tokens: int = 256

    @property
    def narrative_enabled(self) -> bool:
        return bool(self.openai_api_key or self.anthropic_api_key)


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
