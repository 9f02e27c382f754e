"""
Response models of the storefront HTTP API.
"""

from datetime import datetime
from typing import Any, Dict, Generic, Optional, TypeVar

from pydantic import BaseModel, Field

from storefront.api.v1.schemas.squarespace_schemas import Pagination

T = TypeVar("T")


class APIError(BaseModel):
    type: str
    message: str


class APIResponse(BaseModel, Generic[T]):
    """Envelope of every API response: data, optional pagination, or an error."""

    data: Optional[T] = None
    pagination: Optional[Pagination] = None
    error: Optional[APIError] = None


class InventoryUpdateRequest(BaseModel):
    quantity: int = Field(..., ge=0, description="New stock quantity")


class HealthCheck(BaseModel):
    """Result of a single health check."""

    status: str
    message: Optional[str] = None
    latency_ms: Optional[float] = None


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
    version: str
    checks: Dict[str, HealthCheck] = Field(default_factory=dict)


class RootResponse(BaseModel):
    message: str
    version: str
    status: str
    endpoints: Dict[str, Any] = Field(default_factory=dict)
