"""Pydantic schemas for API responses.

Every response is an envelope: ``success`` plus either ``data``
or ``error``.
"""

from datetime import UTC, datetime

from pydantic import BaseModel, Field

from boxoffice.exceptions import ErrorCode
from boxoffice.ranking.schemas import BoxOfficeResult

# =============================================================================
# HEALTH
# =============================================================================


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str = Field(examples=["healthy"])
    version: str = Field(examples=["1.0.0"])
    tmdb_configured: bool = False
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))


# =============================================================================
# BOX OFFICE
# =============================================================================


class BoxOfficeResponse(BaseModel):
    """Successful ranking response."""

    success: bool = True
    data: BoxOfficeResult


# =============================================================================
# ERRORS
# =============================================================================


class ErrorDetail(BaseModel):
    """Structured error with a stable code."""

    code: ErrorCode = Field(examples=[ErrorCode.VALIDATION_ERROR])
    message: str = Field(examples=["Month must be between 1 and 12"])


class ErrorResponse(BaseModel):
    """Error response envelope."""

    success: bool = False
    error: ErrorDetail
