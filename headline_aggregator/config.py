from datetime import date, datetime, timezone
from functools import lru_cache
from typing import Annotated

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


DEFAULT_CUTOFF_DATE = date(2022, 1, 1)


def _default_tracked_years() -> list[int]:
    return list(range(datetime.now(timezone.utc).year, DEFAULT_CUTOFF_DATE.year - 1, -1))


def _split_csv(value):
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    return value


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=[".env", ".env.local"],  # .env.local takes precedence over .env
        env_file_encoding="utf-8",
        extra="ignore",
    )

    api_host: str = Field(default="localhost", description="API host")
    api_port: int = Field(
        default=3000,
        description="API port",
        validation_alias=AliasChoices("PORT", "API_PORT", "api_port"),
    )
    debug: bool = Field(default=False, description="Debug mode")

    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="json", description="Log format (json or text)")

    allowed_origins: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: ["*"],
        description="Allowed CORS origins",
        validation_alias=AliasChoices("CORS_ALLOWED_ORIGINS", "ALLOWED_ORIGINS", "allowed_origins"),
    )

    # Primary site
    site_url: str = Field(default="https://www.theverge.com/", description="Front page scraped for articles")
    site_base_url: str = Field(default="https://www.theverge.com", description="Origin used to absolutize relative links")
    site_name: str = Field(default="The Verge", description="Display name of the primary site")
    primary_timeout_seconds: float = Field(default=30.0, description="Timeout for the front page fetch")

    # Fallback feeds
    fallback_feed_urls: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: [
            "https://www.theverge.com/rss/index.xml",
            "https://www.theverge.com/rss/front-page",
            "https://feeds.feedburner.com/TheVerge",
        ],
        description="RSS feeds consulted in order when scraping finds too few articles",
    )
    feed_timeout_seconds: float = Field(default=15.0, description="Timeout for each feed fetch")
    fallback_threshold: int = Field(
        default=10,
        description="Scraped article count below which fallback feeds are consulted",
    )

    # Aggregation window
    cache_duration_minutes: int = Field(default=30, description="Minutes before cached articles go stale")
    cutoff_date: date = Field(default=DEFAULT_CUTOFF_DATE, description="Articles published before this date are dropped")
    tracked_years: Annotated[list[int], NoDecode] = Field(
        default_factory=_default_tracked_years,
        description="Years whose URL segments the front page selectors look for",
    )

    @field_validator("allowed_origins", "fallback_feed_urls", mode="before")
    @classmethod
    def parse_csv_list(cls, value):
        return _split_csv(value)

    @field_validator("tracked_years", mode="before")
    @classmethod
    def parse_tracked_years(cls, value):
        return _split_csv(value)

    @field_validator("tracked_years")
    @classmethod
    def sort_tracked_years(cls, value: list[int]) -> list[int]:
        return sorted(set(value), reverse=True)

    @property
    def cutoff_datetime(self) -> datetime:
        return datetime(
            self.cutoff_date.year, self.cutoff_date.month, self.cutoff_date.day, tzinfo=timezone.utc
        )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
