"""Application configuration pulled from environment variables via pydantic."""
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from utils.logging_utils import get_tagged_logger, mask_api_key
logger = get_tagged_logger(__name__, tag="config")


class Settings(BaseSettings):
    """Environment-driven configuration for the environmental health dashboard."""
    model_config = SettingsConfigDict(env_prefix="ENVHEALTH_", extra="ignore")

    api_base_url: str = "http://localhost:5000"
    data_source: str = "http"  # options: http, static
    retry_count: int = Field(default=3, ge=0)
    retry_delay_seconds: float = Field(default=1.0, ge=0)
    request_timeout_seconds: float = 10.0
    http_cache_name: str = ".cache"
    http_cache_ttl_seconds: int = 300
    session_ttl_seconds: int = 3600
    session_max_age_seconds: int | None = None
    api_key: str | None = None
    location_name: str = "Hanoi"
    log_level: str = "INFO"

    @field_validator("api_base_url", mode="after")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize base URLs to avoid double slashes."""
        return str(v).rstrip("/")


settings = Settings()


if __name__ == "__main__":
    logger.logger.setLevel("DEBUG")
    logger.debug(
        f"Loaded settings: {settings.model_dump_json(indent=4, exclude={'api_key'})}",
        extra={"api_key": mask_api_key(settings.api_key)},
    )
