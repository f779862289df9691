"""HTTP client for the remote thresholding service."""

import logging

import httpx
from pydantic import ValidationError

from threshold_viewer.core.config import ClientConfig
from threshold_viewer.core.exceptions import ApplicationError, NetworkError
from threshold_viewer.core.files import SelectedFile
from .schemas import ProcessingResult, ProcessResponse

logger = logging.getLogger(__name__)

UNKNOWN_ERROR = "Unknown error occurred"


def _server_error(response: httpx.Response) -> str | None:
    """Pull the service's `error` string out of a failure body, if there is one."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and isinstance(body.get("error"), str):
        return body["error"]
    return None


class ProcessingClient:
    """Submits images to POST /process and interprets the answer."""

    def __init__(self, config: ClientConfig | None = None, http: httpx.AsyncClient | None = None):
        self.config = config or ClientConfig()
        self._owns_http = http is None
        # No timeout: the service may take as long as it needs
        self._http = http or httpx.AsyncClient(timeout=None)

    async def __aenter__(self) -> "ProcessingClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    async def submit(self, file: SelectedFile) -> ProcessingResult:
        """
        Upload a file and return the successful processing result.

        Args:
            file: Image that already passed the media type check

        Returns:
            ProcessingResult with success set, threshold value and processed image

        Raises:
            NetworkError: If the transport fails or the status code is not 2xx
            ApplicationError: If the service reports failure or sends a malformed body
        """
        files = {self.config.image_field: (file.filename, file.content, file.media_type)}
        logger.info("Submitting %s (%d bytes) to %s", file.filename, len(file.content), self.config.process_url)

        try:
            response = await self._http.post(self.config.process_url, files=files)
        except httpx.RequestError as e:
            raise NetworkError(str(e) or type(e).__name__, {"url": self.config.process_url}) from e

        if not response.is_success:
            details = {"status_code": response.status_code}
            message = f"HTTP error! status: {response.status_code}"
            server_error = _server_error(response)
            if server_error:
                details["server_error"] = server_error
                message = f"{message} ({server_error})"
            raise NetworkError(message, details)

        try:
            body = ProcessResponse.model_validate_json(response.content)
        except ValidationError as e:
            raise ApplicationError(
                "Malformed response from processing service",
                {"errors": e.errors(include_url=False)},
            ) from e

        if not body.success:
            raise ApplicationError(body.error or UNKNOWN_ERROR)

        try:
            result = ProcessingResult.from_response(body)
        except ValidationError as e:
            raise ApplicationError(
                "Incomplete response from processing service",
                {"errors": e.errors(include_url=False)},
            ) from e

        logger.info("Processing finished with threshold %s", result.threshold_value)
        return result
