"""Turning selected files into displayable image sources."""

import asyncio
import base64
import binascii
import logging

import cv2
import numpy as np

from threshold_viewer.core.files import SelectedFile

logger = logging.getLogger(__name__)


def to_data_uri(content: bytes, media_type: str) -> str:
    """Encode raw bytes as a data URI."""
    payload = base64.b64encode(content).decode("ascii")
    return f"data:{media_type};base64,{payload}"


def decode_data_uri(uri: str) -> np.ndarray | None:
    """Decode a base64 image data URI into a BGR image, or None if it is not one."""
    header, sep, payload = uri.partition(",")
    if not sep or not header.startswith("data:") or not header.endswith(";base64"):
        return None
    try:
        raw = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError):
        return None
    return _imdecode(raw)


def _imdecode(raw: bytes) -> np.ndarray | None:
    if not raw:
        return None
    nparr = np.frombuffer(raw, np.uint8)
    return cv2.imdecode(nparr, cv2.IMREAD_COLOR)


class FilePreviewRenderer:
    """Produces the image source for the "original" pane.

    Decode problems never reach the status line: the preview simply
    stays blank.
    """

    def __init__(self, verify: bool = True):
        # Check the payload really decodes before offering it for display
        self.verify = verify

    async def decode(self, file: SelectedFile) -> str | None:
        """
        Read a selected file into a data URI.

        Args:
            file: File that already passed the media type check

        Returns:
            data URI for the file, or None if its content cannot be decoded
        """
        if self.verify:
            image = await asyncio.to_thread(_imdecode, file.content)
            if image is None:
                logger.warning("Could not decode %s for preview", file.filename)
                return None
        return to_data_uri(file.content, file.media_type)
