"""Configuration model for connecting to a Loki server."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LokiConfig(BaseModel):
    """Grafana Loki connection configuration.

    Attributes:
        url: Loki server URL.
        timeout: Request timeout in seconds.
        tenant: Default tenant sent as ``X-ScopeOrgID`` on push requests.
        verify_ssl: Whether to verify TLS certificates.
    """

    model_config = ConfigDict(extra="forbid")

    url: str = "http://localhost:3100"
    timeout: int = 30
    tenant: str | None = Field(default=None, description="Default tenant for push requests")
    verify_ssl: bool = True

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Validate URL format."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("url must start with http:// or https://")
        return v.rstrip("/")

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: int) -> int:
        """Validate timeout is positive."""
        if v <= 0:
            raise ValueError("timeout must be positive")
        return v
