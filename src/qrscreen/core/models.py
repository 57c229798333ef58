"""Request/response models for the QR-screen gateway API."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class TextRequest(BaseModel):
    """Request model for POST /api/header and /api/footer."""

    text: str = Field(..., description="Text to display, sent verbatim")

    model_config = ConfigDict(json_schema_extra={"example": {"text": "R-Call"}})


class QrRequest(BaseModel):
    """Request model for POST /api/qr."""

    text: str = Field(..., description="Content encoded into the QR code")
    logo: bool = Field(False, description="Show the QR code together with the logo")

    model_config = ConfigDict(json_schema_extra={"example": {"text": "https://example.com", "logo": True}})


class ClearRequest(BaseModel):
    """Request model for POST /api/clear."""

    logo: bool = Field(True, description="Clear the QR section with the logo (CQ) or without it (CQL)")


class TimeoutsRequest(BaseModel):
    """Request model for PUT /api/timeouts. Omitted fields keep their value."""

    read_ms: int | None = Field(None, ge=0, description="Read timeout in milliseconds")
    write_ms: int | None = Field(None, ge=0, description="Write timeout in milliseconds")

    model_config = ConfigDict(json_schema_extra={"example": {"read_ms": 1000}})


class TimeoutsResponse(BaseModel):
    """Current session timeouts."""

    read_ms: int = Field(..., ge=0, description="Read timeout in milliseconds")
    write_ms: int = Field(..., ge=0, description="Write timeout in milliseconds")


class ValueResponse(BaseModel):
    """Response model for data-returning commands (version, id)."""

    command: str = Field(..., description="Command tag")
    value: str = Field(..., description="Value reported by the screen")
    timestamp: datetime = Field(default_factory=datetime.now, description="Response timestamp")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "command": "V",
                "value": "QR-1.3.10.7789",
                "timestamp": "2026-01-13T10:30:00",
            }
        }
    )


class CommandResponse(BaseModel):
    """Response model for display commands."""

    command: str = Field(..., description="Command tag")
    success: bool = Field(..., description="Whether the screen acknowledged the command")
    timestamp: datetime = Field(default_factory=datetime.now, description="Response timestamp")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "command": "Q",
                "success": True,
                "timestamp": "2026-01-13T10:30:00",
            }
        }
    )


class ErrorResponse(BaseModel):
    """Response model for errors."""

    detail: str = Field(..., description="Error message")


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str = Field(..., description="Health status (healthy/unhealthy)")
    screen_connected: bool = Field(..., description="Whether the serial port is open")
    port: str | None = Field(None, description="Serial port in use")
