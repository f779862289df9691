"""Application configuration."""

import os
from dataclasses import dataclass

DEFAULT_BASE_URL = "http://localhost:8080"
BASE_URL_ENV_VAR = "THRESHOLD_SERVICE_URL"

ACCEPTED_MEDIA_PREFIX = "image/"
# Only offered as a hint to file pickers; the media type check is the real gate
ADVISORY_EXTENSIONS = (".jpg", ".jpeg", ".png")


@dataclass
class ClientConfig:
    """Configuration for talking to the thresholding service."""

    base_url: str = DEFAULT_BASE_URL
    image_field: str = "image"
    process_path: str = "/process"
    health_path: str = "/health"

    # Capacity of the selection event channel
    channel_size: int = 8

    def __post_init__(self):
        self.base_url = self.base_url.rstrip("/")

    @property
    def process_url(self) -> str:
        return f"{self.base_url}{self.process_path}"

    @property
    def health_url(self) -> str:
        return f"{self.base_url}{self.health_path}"

    @classmethod
    def from_env(cls, **overrides) -> "ClientConfig":
        """Build a config, taking the base URL from the environment when set."""
        env_url = os.environ.get(BASE_URL_ENV_VAR, "").strip()
        if env_url and "base_url" not in overrides:
            overrides["base_url"] = env_url
        return cls(**overrides)
