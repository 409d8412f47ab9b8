"""Pydantic schemas for health check responses."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response body for GET /health (load balancers and monitoring)."""

    status: Literal["ok"] = "ok"
    service: str = Field(default="admin-service", description="Service name")
    environment: Literal["dev", "prod"]
    database: Literal["connected", "disconnected"]
