"""
Pydantic schemas for reporting API request/response validation.

These schemas enforce input validation and define the API contract.
No business logic belongs here.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field

ERROR_CODE_PATTERN = r"^[A-Z][A-Z0-9_]*$"
ERROR_CODE_MAX_LEN = 100


class HealthResponse(BaseModel):
    """Response schema for the health check endpoint."""

    status: str
    version: str
    environment: str


class ErrorResponse(BaseModel):
    """Standard error response returned by all error handlers."""

    error: str
    detail: Optional[str] = None


class NoticeSchema(BaseModel):
    display_mode: str
    message: str
    severity: str
    blocking: str
    code: Optional[str] = None


class HandledErrorResponse(BaseModel):
    """Body of a materialized Blocked/Continue outcome."""

    error: str
    message: str
    blocking: str
    display_mode: str
    notices: list[NoticeSchema] = Field(default_factory=list)


class ErrorCodeSchema(BaseModel):
    """One catalog entry."""

    code: str
    severity: str
    blocking_level: str
    status_code: int
    display_mode: str
    notify_team: bool
    recovery_action: Optional[str] = None


class ErrorCodesResponse(BaseModel):
    codes: list[ErrorCodeSchema]


class SimulationStatusResponse(BaseModel):
    code: str
    active: bool


class ActiveSimulationsResponse(BaseModel):
    enabled: bool
    codes: list[str]


class ResetSimulationsResponse(BaseModel):
    cleared: int


class DefineErrorRequest(BaseModel):
    """Request schema for defining an error type at runtime.

    Attributes:
        code: Upper-case error code (letters, digits, underscores).
        definition: Definition record, same fields as a catalog entry.
    """

    code: str = Field(
        ...,
        min_length=1,
        max_length=ERROR_CODE_MAX_LEN,
        pattern=ERROR_CODE_PATTERN,
        description="Error code to define",
    )
    definition: dict[str, Any] = Field(
        ..., description="Catalog record: severity, blocking_level, messages, ..."
    )
