from functools import lru_cache

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from monetary.domain.values import RoundingMode


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=True, extra="ignore"
    )

    LOG_LEVEL: str = Field(
        default="INFO", description="Logging level [DEBUG, INFO, WARNING, ERROR]"
    )

    JSON_LOGS: bool = Field(
        default=False,
        description="Should logs be in JSON format?",
    )

    ENABLE_METRICS: bool = Field(
        default=False,
        description="Should metrics collection be enabled?",
    )

    DEFAULT_PRECISION: int = Field(
        default=19,
        ge=1,
        le=50,
        description="Significant digits of the default monetary context",
    )

    DEFAULT_MAX_SCALE: int = Field(
        default=6,
        ge=0,
        le=50,
        description="Fraction digits kept when the default context rounds",
    )

    DEFAULT_ROUNDING_MODE: RoundingMode = Field(
        default=RoundingMode.HALF_EVEN,
        description="Rounding mode of the default monetary context",
    )

    RATE_CACHE_TTL_SECONDS: float = Field(
        default=300,
        gt=0,
        le=86400,
        description="TTL the caching provider assigns to every cached rate",
    )

    RATE_CACHE_CLEANUP_INTERVAL: int = Field(
        default=100,
        ge=1,
        le=100000,
        description="Number of cache insertions between expired-entry sweeps",
    )

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        valid_levels = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
        if value.upper() not in valid_levels:
            raise ValueError(
                f"Invalid LOG_LEVEL '{value}'. Must be one of {valid_levels}"
            )
        return value.upper()

    @field_validator("DEFAULT_ROUNDING_MODE", mode="before")
    @classmethod
    def validate_rounding_mode(cls, value: object) -> object:
        if isinstance(value, str):
            return value.upper()
        return value

    @model_validator(mode="after")
    def validate_scale_within_precision(self) -> "Settings":
        if self.DEFAULT_MAX_SCALE > self.DEFAULT_PRECISION:
            raise ValueError(
                f"DEFAULT_MAX_SCALE ({self.DEFAULT_MAX_SCALE}) "
                f"cannot exceed DEFAULT_PRECISION ({self.DEFAULT_PRECISION})"
            )
        return self


@lru_cache()
def get_settings() -> Settings:
    from monetary.shared.logging import get_logger

    logger = get_logger(__name__)

    try:
        settings = Settings()
        logger.info("Settings loaded successfully")
        return settings

    except Exception as e:
        logger.error(f"Failed to load settings: {e}", exc_info=True)
        raise
