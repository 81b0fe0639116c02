"""API request/response schemas (Pydantic). Presentation layer only."""

from app.schemas.fragment import (
    FragmentListResponse,
    FragmentMetadata,
    FragmentResponse,
    StatusResponse,
)
from app.schemas.health import HealthResponse

__all__ = [
    "FragmentListResponse",
    "FragmentMetadata",
    "FragmentResponse",
    "HealthResponse",
    "StatusResponse",
]
