"""Application configuration using pydantic-settings.

Everything is read once from the environment (or a local .env file) and
treated as immutable for the life of the process.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ALLOWED_ORIGIN = "https://zk-chan.fun"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ======================
    # Server
    # ======================
    host: str = Field(default="0.0.0.0", description="Listening interface")
    port: int = Field(default=8080, description="Listening port")
    app_name: str = Field(default="zkChan Backend", description="Service display name")
    trust_proxy: bool = Field(
        default=True, description="Take the client address from X-Forwarded-For"
    )

    # ======================
    # Logging
    # ======================
    log_format: str = Field(
        default="dev", description="Access log format: dev, tiny, short, common, combined"
    )
    log_level: str = Field(default="INFO", description="Root log level")
    debug: bool = Field(default=False, description="Enable debug mode")

    # ======================
    # Jupiter aggregator
    # ======================
    jupiter_base: str = Field(
        default="https://quote-api.jup.ag", description="Jupiter swap API base URL"
    )
    jupiter_api_key: Optional[str] = Field(
        default=None, description="Optional Jupiter API key for higher rate limits"
    )
    tokens_url: str = Field(
        default="https://token.jup.ag/all", description="Jupiter token list URL"
    )
    fetch_timeout_ms: int = Field(
        default=12000, gt=0, description="Outbound request deadline in milliseconds"
    )

    # ======================
    # Ingress policy
    # ======================
    cors_origins: str = Field(
        default="", description="Comma-separated list of allowed browser origins"
    )
    rate_limit_enabled: bool = Field(default=True, description="Enable /api rate limiting")
    rate_limit_max: int = Field(
        default=120, gt=0, description="Max /api requests per client per window"
    )
    rate_limit_window_seconds: int = Field(
        default=60, gt=0, description="Sliding rate-limit window length"
    )
    max_body_bytes: int = Field(
        default=1024 * 1024, gt=0, description="Largest accepted request body"
    )

    @property
    def allowed_origins(self) -> list[str]:
        """Parse CORS origins, falling back to the default site."""
        origins = [o.strip() for o in self.cors_origins.split(",") if o.strip()]
        return origins or [DEFAULT_ALLOWED_ORIGIN]

    @property
    def fetch_timeout_seconds(self) -> float:
        return self.fetch_timeout_ms / 1000

    @property
    def rate_limit(self) -> str:
        """Rate limit in the limits-library notation, e.g. ``120/60 seconds``."""
        return f"{self.rate_limit_max}/{self.rate_limit_window_seconds} seconds"

    def get_safe_dict(self) -> dict:
        """Return settings dict with secrets redacted."""
        return {
            "app_name": self.app_name,
            "host": self.host,
            "port": self.port,
            "debug": self.debug,
            "log_format": self.log_format,
            "jupiter_base": self.jupiter_base,
            "jupiter_api_key": "***" if self.jupiter_api_key else "(not set)",
            "tokens_url": self.tokens_url,
            "fetch_timeout_ms": self.fetch_timeout_ms,
            "allowed_origins": self.allowed_origins,
            "rate_limit": self.rate_limit if self.rate_limit_enabled else "(disabled)",
            "max_body_bytes": self.max_body_bytes,
        }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
