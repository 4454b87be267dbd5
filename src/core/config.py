"""
Core configuration module for the document-search client.

This module provides centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables with the DOCSEARCH_ prefix.

Complex values (lists, dicts) are read as JSON, for example:
    DOCSEARCH_NODE_ADDRESSES='["http://es-1:9200", "http://es-2:9200"]'
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Client settings loaded from environment variables.

    All fields use the DOCSEARCH_ prefix for environment variables.
    Example: DOCSEARCH_TIMEOUT_SECONDS=10
    """

    # =========================================================================
    # Service Identification
    # =========================================================================
    service_name: str = Field(
        default="docsearch-client",
        description="Service name added to every log event",
    )
    environment: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Deployment environment added to every log event",
    )

    # =========================================================================
    # Cluster Addresses
    # =========================================================================
    node_addresses: list[str] = Field(
        default_factory=lambda: ["http://localhost:9200"],
        description="Base URLs of the cluster nodes, visited round robin",
    )

    # =========================================================================
    # Transport Configuration
    # Timeouts are enforced by the transport, never by the request pipeline
    # =========================================================================
    timeout_seconds: float = Field(
        default=30.0,
        ge=0.1,
        le=600.0,
        description="Connect/read/write/pool timeout for each request",
    )
    max_connections: int = Field(
        default=100,
        ge=1,
        description="Maximum number of connections in the pool",
    )
    max_keepalive: int = Field(
        default=20,
        ge=0,
        description="Maximum number of keepalive connections",
    )
    user_agent: str = Field(
        default="docsearch-client/1.0",
        description="User-Agent header sent with every request",
    )

    # =========================================================================
    # Request Defaults
    # =========================================================================
    default_headers: dict[str, str] = Field(
        default_factory=dict,
        description="Headers merged into every request",
    )
    default_url_params: dict[str, str] = Field(
        default_factory=dict,
        description="Query string parameters merged into every request",
    )

    # =========================================================================
    # Logging
    # =========================================================================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING",
        description="Level for the client's structured logs",
    )

    model_config = {
        "env_prefix": "DOCSEARCH_",
        "case_sensitive": False,
        "extra": "ignore",
    }

    @field_validator("node_addresses")
    @classmethod
    def validate_node_addresses(cls, v: list[str]) -> list[str]:
        """Validate and normalise node base URLs."""
        normalised = []
        for address in v:
            address = address.strip()
            if not address.startswith(("http://", "https://")):
                raise ValueError(
                    f"Node address must start with http:// or https://: {address!r}"
                )
            normalised.append(address.rstrip("/"))
        return normalised

    @field_validator("log_level", mode="before")
    @classmethod
    def normalise_log_level(cls, v: str) -> str:
        """Accept lower-case level names."""
        return v.upper() if isinstance(v, str) else v


@lru_cache
def get_settings() -> Settings:
    """
    Get the settings singleton.

    Uses functools.lru_cache to ensure only one Settings instance is created.

    Returns:
        Settings: The client settings instance.
    """
    return Settings()
