from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings

BASE_DIR = Path(__file__).resolve().parent.parent.parent


class Settings(BaseSettings):
    class Config:
        env_file = BASE_DIR / ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    """
    Configuration settings for the scraper and the REST API.
    """

    # LinkedIn endpoints
    LINKEDIN_BASE_URL: str = "https://www.linkedin.com"
    JOBS_SEARCH_URL: str = "https://www.linkedin.com/jobs/search"

    # Cache
    CACHE_TTL: int = 1800  # seconds

    # Outbound HTTP
    MAX_RETRIES: int = 3
    REQUEST_TIMEOUT: int = 30  # seconds
    # Polite delay before each request. Zero keeps API latency low; the batch
    # pipeline passes its own, slower values.
    MIN_DELAY: float = 0.0
    MAX_DELAY: float = 0.0

    # Rate limiting (fixed window per API key)
    RATE_LIMIT_WINDOW_MINUTES: int = 15
    RATE_LIMIT_MAX: int = 100

    # Search & enrichment
    ENABLE_COMPANY_ENRICHMENT: bool = True
    MAX_RESULTS: int = 25
    ENRICHMENT_WORKERS: int = 5

    # Server
    CORS_ORIGINS: List[str] = [
        "https://rapidapi.com",
        "http://localhost:3000",
    ]
    LOG_LEVEL: str = "INFO"
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    @property
    def rate_limit(self) -> str:
        """Limit string in the format understood by slowapi."""
        return f"{self.RATE_LIMIT_MAX}/{self.RATE_LIMIT_WINDOW_MINUTES} minutes"


settings = Settings()
