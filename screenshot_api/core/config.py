"""Application configuration."""
from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict

from screenshot_scraper.config import RateLimitConfig, RetryConfig, ScraperConfig


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=Path(__file__).parent.parent.parent / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # API
    app_name: str = "Steam Screenshots API"
    api_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 3000

    # CORS - accepts comma-separated string from env, "*" for any origin
    cors_origins: str = "*"

    # Crawl
    request_timeout_seconds: float = 900.0
    fetch_timeout: float = 30.0
    batch_size: int = 3
    batch_delay: float = 2.0
    page_delay: float = 1.0
    empty_page_threshold: int = 2
    max_retries: int = 3
    retry_base_delay: float = 1.0
    probe_id_range: bool = False

    @property
    def cors_origins_list(self) -> list[str]:
        """Return CORS origins as a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()] or ["*"]

    def scraper_config(self) -> ScraperConfig:
        """Build the scraper configuration from these settings."""
        return ScraperConfig(
            request_timeout=self.fetch_timeout,
            rate_limit=RateLimitConfig(min_delay=self.page_delay, initial_delay=self.page_delay),
            retry=RetryConfig(max_retries=self.max_retries, base_delay=self.retry_base_delay),
            batch_size=self.batch_size,
            batch_delay=self.batch_delay,
            empty_page_threshold=self.empty_page_threshold,
            probe_id_range=self.probe_id_range,
        )


settings = Settings()
