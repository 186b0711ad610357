from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Environment mode: dev or prod
    ENV: Literal["dev", "prod"] = "dev"

    # Logging
    LOG_LEVEL: str = "INFO"

    # DexScreener
    DEXSCREENER_BASE_URL: str = "https://api.dexscreener.com"
    DEXSCREENER_TIMEOUT_SECONDS: float = 5.0

    # Twitter v2
    TWITTER_API_BASE_URL: str = "https://api.twitter.com"
    TWITTER_BEARER_TOKEN: str | None = None
    TWITTER_TIMEOUT_SECONDS: float = 15.0

    # Pair filtering thresholds (USD)
    MIN_LIQUIDITY_USD: float = 10_000
    MIN_VOLUME_24H_USD: float = 10_000

    # Where lookup results are written as JSON files
    ARTIFACT_DIR: str = "artifacts"

    # Docs Configuration
    DOCS_ENABLED: bool | None = None  # Override docs setting (None = auto based on ENV)

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",  # ignore unrelated keys in local .env
    )

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENV == "prod"

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENV == "dev"

    @property
    def debug_enabled(self) -> bool:
        """Debug mode is only enabled in development."""
        return self.is_development

    @property
    def effective_log_level(self) -> str:
        """Return appropriate log level based on environment."""
        if self.is_production:
            # In production, minimum INFO level (ignore DEBUG)
            return self.LOG_LEVEL if self.LOG_LEVEL.upper() != "DEBUG" else "INFO"
        return self.LOG_LEVEL

    @property
    def docs_enabled(self) -> bool:
        """Swagger/ReDoc docs enabled based on environment or override."""
        if self.DOCS_ENABLED is not None:
            return self.DOCS_ENABLED
        return self.is_development


settings = Settings()
