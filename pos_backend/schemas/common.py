"""Shared response bodies: health check and plain acknowledgements."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: Literal["ok"] = "ok"
    environment: Literal["dev", "prod"]
    version: str
    database: Literal["connected", "disconnected"] = Field(
        description="Result of a SELECT 1 against the configured database",
    )


class MessageResponse(BaseModel):
    """Acknowledgement for operations with no resource to return (logout, delete)."""

    message: str
