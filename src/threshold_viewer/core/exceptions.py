"""Custom exceptions for the threshold viewer."""


class ThresholdViewerError(Exception):
    """Base exception for threshold viewer errors."""

    code: str = "VIEWER_ERROR"

    def __init__(self, message: str, details: dict | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class InvalidFileTypeError(ThresholdViewerError):
    """Selected file is not an image."""

    code = "INVALID_FILE_TYPE"

    def __init__(self, media_type: str = ""):
        super().__init__("Please select a valid image file", {"media_type": media_type})


class NetworkError(ThresholdViewerError):
    """Transport failure or non-2xx response from the processing service."""

    code = "NETWORK_ERROR"

    @property
    def status_code(self) -> int | None:
        return self.details.get("status_code")


class ApplicationError(ThresholdViewerError):
    """Service answered, but reported (or returned) an unusable result."""

    code = "APPLICATION_ERROR"


class HealthCheckError(ThresholdViewerError):
    """Processing service did not pass the startup readiness check."""

    code = "HEALTH_CHECK_FAILED"

    def __init__(self, base_url: str, reason: str):
        super().__init__(
            f"Cannot connect to processing service at {base_url}. "
            "Make sure the server is running.",
            {"base_url": base_url, "reason": reason},
        )
