"""Configuration management for the in-memory cache."""

from typing import Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class CacheSettings(BaseSettings):
    """Cache settings loaded from environment variables (prefix ``KV_CACHE_``)."""

    model_config = SettingsConfigDict(
        env_prefix="KV_CACHE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"  # Ignore extra fields from environment variables
    )

    # Cache Configuration
    capacity: int = Field(default=1000, gt=0, description="Maximum number of keys held by the default cache")
    eviction_policy: str = Field(default="LRU", description="Eviction policy of the default cache (LRU or LFU)")
    shard_count: int = Field(default=1, gt=0, description="Number of independently locked shards")
    sweep_interval_seconds: Optional[float] = Field(
        default=None,
        description="Interval of the background expiry sweep; unset keeps expiration purely lazy"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")

    # Monitoring
    enable_metrics: bool = Field(default=True, description="Enable Prometheus metrics")

    @field_validator("eviction_policy")
    @classmethod
    def _normalize_policy(cls, value: str) -> str:
        value = value.strip().upper()
        if value not in ("LRU", "LFU"):
            raise ValueError(f"unsupported eviction policy: {value}")
        return value

    @field_validator("sweep_interval_seconds")
    @classmethod
    def _positive_interval(cls, value: Optional[float]) -> Optional[float]:
        if value is not None and value <= 0:
            raise ValueError("sweep_interval_seconds must be positive")
        return value


# Global settings instance
settings = CacheSettings()
