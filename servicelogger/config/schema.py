"""Pydantic models for servicelogger configuration."""

from __future__ import annotations

from typing import List, Optional
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, field_validator


class FileConfig(BaseModel):
    """Optional defaults read from the YAML config file."""

    model_config = ConfigDict(extra="allow")

    ocm_url: Optional[str] = None
    ocm_token: Optional[str] = None
    cluster_ids: List[str] = []
    log_level: Optional[str] = None
    timeout: Optional[float] = None


class SendConfig(BaseModel):
    """Resolved settings for one `send` invocation."""

    model_config = ConfigDict(frozen=True)

    base_url: str
    auth_token: str
    target_ids: List[str]
    timeout: float = 30.0

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"Invalid OCM URL: {v!r}. Expected http(s)://host")
        return v.rstrip("/")

    @field_validator("auth_token")
    @classmethod
    def validate_auth_token(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("OCM token is empty")
        return v.strip()

    @field_validator("target_ids")
    @classmethod
    def validate_target_ids(cls, v: List[str]) -> List[str]:
        # Duplicates are kept; each entry is delivered independently.
        if not v:
            raise ValueError("At least one cluster ID is required")
        if any(not target.strip() for target in v):
            raise ValueError("Cluster IDs must not be blank")
        return [target.strip() for target in v]

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"Timeout must be positive, got: {v}")
        return v
