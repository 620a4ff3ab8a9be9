"""Movies database API configuration settings.

RapidAPI "moviesdatabase" service: actors and titles.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class MoviesDatabaseSettings(BaseSettings):
    """Source API configuration.

    Attributes:
        api_key: RapidAPI key (required for ingestion).
        host: RapidAPI host header value.
        base_url: API base URL.
        timeout: HTTP timeout in seconds.
    """

    api_key: str = Field(default="", alias="RAPID_API_KEY")
    host: str = Field(
        default="moviesdatabase.p.rapidapi.com",
        alias="RAPID_API_HOST",
    )
    base_url: str = Field(
        default="https://moviesdatabase.p.rapidapi.com",
        alias="SOURCE_BASE_URL",
    )
    timeout: float = Field(default=30.0, alias="SOURCE_TIMEOUT")

    # Rate limiting
    requests_per_period: int = Field(default=10, alias="SOURCE_REQUESTS_PER_PERIOD")
    period_seconds: float = Field(default=1.0, alias="SOURCE_PERIOD_SECONDS")
    min_request_delay: float = Field(default=0.0, alias="SOURCE_MIN_REQUEST_DELAY")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def is_configured(self) -> bool:
        """Check if the RapidAPI key is configured."""
        return bool(self.api_key and self.api_key != "your_api_key_here")

    @property
    def actors_url(self) -> str:
        """Actors listing endpoint."""
        return f"{self.base_url.rstrip('/')}/actors"

    @property
    def titles_url(self) -> str:
        """Titles endpoint (append ``/{title_id}`` for one title)."""
        return f"{self.base_url.rstrip('/')}/titles"
