"""Startup readiness check against the processing service."""

import logging

import httpx
from pydantic import ValidationError

from threshold_viewer.core.config import ClientConfig
from threshold_viewer.core.exceptions import HealthCheckError
from threshold_viewer.ui.status import StatusNotifier
from .schemas import HealthResponse, Severity

logger = logging.getLogger(__name__)


class HealthProbe:
    """One-shot GET /health. Purely advisory: it never blocks uploads."""

    def __init__(
        self,
        notifier: StatusNotifier,
        config: ClientConfig | None = None,
        http: httpx.AsyncClient | None = None,
    ):
        self.notifier = notifier
        self.config = config or ClientConfig()
        self._http = http
        self._healthy: bool | None = None

    async def check(self) -> HealthResponse:
        """
        Query the health endpoint.

        Raises:
            HealthCheckError: On transport failure or a non-2xx status
        """
        try:
            if self._http is None:
                async with httpx.AsyncClient(timeout=None) as http:
                    response = await http.get(self.config.health_url)
            else:
                response = await self._http.get(self.config.health_url)
        except httpx.RequestError as e:
            raise HealthCheckError(self.config.base_url, str(e) or type(e).__name__) from e

        if not response.is_success:
            raise HealthCheckError(self.config.base_url, f"status {response.status_code}")

        try:
            return HealthResponse.model_validate_json(response.content)
        except ValidationError:
            # Any 2xx counts as healthy, whatever the body looks like
            return HealthResponse(status="healthy")

    async def run(self) -> bool:
        """Run the check once, showing a connectivity warning on failure."""
        if self._healthy is not None:
            return self._healthy
        self._healthy = False

        try:
            health = await self.check()
        except HealthCheckError as e:
            logger.warning("Health check failed: %s", e.details.get("reason"))
            self.notifier.show(e.message, Severity.ERROR)
            return False

        self._healthy = True
        logger.info("Processing service ready at %s: %s", self.config.base_url, health.message or health.status)
        return True
