"""
Shared configuration management for the pool cache service.
"""

from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BaseConfig(BaseSettings):
    """Base configuration class with common settings."""

    model_config = SettingsConfigDict(
        env_prefix="POOLS_",
        env_file=".env",
        case_sensitive=False,
        extra="allow"
    )

    # Environment
    env: str = Field(default="local")
    log_level: str = Field(default="info")

    # Durable pool cache: "s3" (signed, AWS credential chain) or "http" (gateway)
    object_store_backend: str = Field(default="s3")
    aws_region: Optional[str] = Field(default=None)
    object_store_url: Optional[str] = Field(default=None)
    object_store_token: Optional[str] = Field(default=None)
    object_store_timeout_seconds: float = Field(default=10.0)
    pool_cache_bucket: str = Field(default="routing-pool-cache")
    pool_cache_base_key: str = Field(default="poolCache.json")

    # Served pools
    chain_ids: List[int] = Field(default_factory=lambda: [1])
    protocols: List[str] = Field(default_factory=lambda: ["V2", "V3"])
    eager_warm: bool = Field(default=True)


class ServiceConfig(BaseConfig):
    """Service-specific configuration."""

    service_name: str
    port: int
    host: str = "0.0.0.0"

    def __init__(self, service_name: str, port: int, **kwargs):
        super().__init__(service_name=service_name, port=port, **kwargs)


def get_config(service_name: str, port: int, **overrides) -> ServiceConfig:
    """Get configuration for a specific service."""
    return ServiceConfig(service_name=service_name, port=port, **overrides)
