from pathlib import Path
from typing import Annotated
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
import logging

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


logger = logging.getLogger(__name__)


class CustomSettings(BaseSettings):
    """Application settings loaded from environment variables.

    Defaults reproduce the stock scrape so the program runs with no configuration.
    """

    base_url: str = "https://www.hot.net.il/"
    guide_url: str = "https://www.hot.net.il/heb/tv/tvguide/"
    channels: Annotated[list[str], NoDecode] = ["11", "12", "13", "14"]
    output_path: str = "schedule.json"
    schedule_timezone: str = "Asia/Jerusalem"

    request_timeout_sec: float = 90.0
    warmup_delay_sec: float = 5.0
    parse_timeout_sec: int = 60  # 0 disables timeout
    user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/122.0.0.0 Safari/537.36"
    )
    accept_language: str = "he-IL,he;q=0.9,en-US;q=0.8,en;q=0.7"

    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("channels", mode="before")
    @classmethod
    def parse_channels(cls, value):
        """Parse comma-separated channel numbers or list."""
        if value is None:
            return []
        if isinstance(value, str):
            return [channel.strip() for channel in value.split(",") if channel.strip()]
        if isinstance(value, (list, tuple, set)):
            return [str(channel).strip() for channel in value if str(channel).strip()]
        return value

    @field_validator("channels", mode="after")
    @classmethod
    def validate_channels(cls, value: list[str]) -> list[str]:
        """Require at least one channel to scrape."""
        if not value:
            raise ValueError("At least one channel must be configured")
        return list(dict.fromkeys(value))

    @field_validator("base_url", "guide_url")
    @classmethod
    def validate_urls(cls, value: str, info) -> str:
        """Validate page URLs are HTTP/HTTPS."""
        if not value.lower().startswith(("http://", "https://")):
            raise ValueError(f"{info.field_name} must be HTTP/HTTPS: {value}")
        return value

    @field_validator("output_path")
    @classmethod
    def validate_output_path(cls, value: str) -> str:
        """Reject an empty or directory output path."""
        if not value.strip():
            raise ValueError("output_path must not be empty")
        if Path(value).is_dir():
            raise ValueError(f"output_path points to a directory: {value}")
        return value

    @field_validator("schedule_timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        """Validate timezone is a known IANA name."""
        if value == "UTC":
            return value
        try:
            ZoneInfo(value)
            return value
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Invalid timezone: {value}") from exc

    @field_validator("request_timeout_sec")
    @classmethod
    def validate_request_timeout(cls, value: float) -> float:
        """Validate HTTP timeout (seconds)."""
        if value <= 0:
            raise ValueError("request_timeout_sec must be > 0")
        return value

    @field_validator("warmup_delay_sec", "parse_timeout_sec")
    @classmethod
    def validate_non_negative(cls, value, info):
        """Ensure delays and timeouts are non-negative."""
        if value < 0:
            raise ValueError(f"{info.field_name} must be >= 0")
        return value

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate logging level name."""
        normalized = value.upper()
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if normalized not in allowed:
            raise ValueError(f"log_level must be one of {sorted(allowed)}")
        return normalized

    def log_summary(self) -> None:
        """Log the effective configuration."""
        logger.info("Configuration loaded:")
        logger.info("  Guide URL: %s", self.guide_url)
        logger.info("  Channels: %s", ", ".join(self.channels))
        logger.info("  Output: %s", self.output_path)
        logger.info("  Schedule Timezone: %s", self.schedule_timezone)
        logger.info("  Request Timeout: %ss", self.request_timeout_sec)
        logger.info(
            "  Parse Timeout: %s",
            f"{self.parse_timeout_sec}s" if self.parse_timeout_sec else "disabled",
        )


settings = CustomSettings()


def setup_logging() -> None:
    """Configure application logging."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
