"""Pydantic schemas for the processing service wire format and client results."""

from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, model_validator


class Severity(str, Enum):
    """Severity tag of a status message."""

    INFO = "info"
    SUCCESS = "success"
    ERROR = "error"


class UIState(str, Enum):
    """Lifecycle of a single upload cycle."""

    IDLE = "idle"
    PREVIEWING = "previewing"
    UPLOADING = "uploading"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class StatusMessage(BaseModel):
    """The single status line shown to the user."""

    model_config = ConfigDict(frozen=True)

    text: str
    severity: Severity


class HealthResponse(BaseModel):
    """Body of GET /health."""

    status: str = "unknown"
    message: str | None = None


class ProcessResponse(BaseModel):
    """Body of POST /process as sent by the service.

    Only `success` is required here; the remaining invariants are checked
    when the body is turned into a ProcessingResult.
    """

    success: bool
    threshold_value: int | float | None = None
    processed_image_base64: str | None = Field(
        default=None, description="Ready-to-display data URI of the binary image"
    )
    error: str | None = None
    message: str | None = None
    output_filename: str | None = None


class ProcessingResult(BaseModel):
    """Outcome of one accepted processing request."""

    model_config = ConfigDict(frozen=True)

    success: bool
    threshold_value: int | float | None = None
    processed_image: str | None = None
    error: str | None = None
    message: str | None = None
    output_filename: str | None = None

    @model_validator(mode="after")
    def _check_outcome(self):
        if self.success:
            if self.threshold_value is None or not self.processed_image:
                raise ValueError("successful result needs threshold_value and processed_image")
            if self.error is not None:
                raise ValueError("successful result cannot carry an error")
        elif not self.error:
            raise ValueError("failed result needs an error")
        return self

    @classmethod
    def from_response(cls, body: ProcessResponse) -> "ProcessingResult":
        return cls(
            success=body.success,
            threshold_value=body.threshold_value,
            processed_image=body.processed_image_base64,
            error=body.error,
            message=body.message,
            output_filename=body.output_filename,
        )


def format_threshold(value: int | float) -> str:
    """Render a threshold value, dropping the fraction of integral floats."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
