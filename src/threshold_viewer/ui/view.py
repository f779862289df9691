"""Side-by-side rendering of the original and processed panes."""

import logging
from pathlib import Path
from typing import TextIO

import cv2
import numpy as np

from threshold_viewer.api.schemas import StatusMessage, UIState
from threshold_viewer.processing.state import ControllerState
from .preview import decode_data_uri

logger = logging.getLogger(__name__)


def compose_side_by_side(original: np.ndarray, processed: np.ndarray, gap: int = 8) -> np.ndarray:
    """
    Place two images next to each other on a white canvas.

    Args:
        original: BGR or grayscale image for the left pane
        processed: BGR or grayscale image for the right pane
        gap: Width in pixels of the white strip between the panes

    Returns:
        BGR image with both panes scaled to the same height
    """
    panes = [_as_bgr(original), _as_bgr(processed)]
    height = max(p.shape[0] for p in panes)

    scaled = []
    for pane in panes:
        if pane.shape[0] != height:
            width = max(1, round(pane.shape[1] * height / pane.shape[0]))
            pane = cv2.resize(pane, (width, height), interpolation=cv2.INTER_LINEAR)
        scaled.append(pane)

    spacer = np.full((height, gap, 3), 255, dtype=np.uint8)
    return cv2.hconcat([scaled[0], spacer, scaled[1]])


def _as_bgr(image: np.ndarray) -> np.ndarray:
    if image.ndim == 2:
        return cv2.cvtColor(image, cv2.COLOR_GRAY2BGR)
    if image.shape[2] == 4:
        return cv2.cvtColor(image, cv2.COLOR_BGRA2BGR)
    return image


class ConsoleView:
    """Projects controller state onto the terminal and image files."""

    def __init__(self, stream: TextIO | None = None):
        self.stream = stream
        self.loading_visible = False

    def render(self, state: ControllerState) -> None:
        logger.debug("Render: %s", state.ui_state.value)
        if state.ui_state is UIState.SUCCEEDED and state.threshold_text:
            self._write(state.threshold_text)

    def set_loading(self, visible: bool) -> None:
        self.loading_visible = visible
        if visible:
            self._write("Processing...")

    def show_status(self, message: StatusMessage | None) -> None:
        if message is not None:
            self._write(f"[{message.severity.value}] {message.text}")

    def _write(self, line: str) -> None:
        print(line, file=self.stream)

    def save_processed(self, state: ControllerState, path: str | Path) -> bool:
        processed = decode_data_uri(state.processed_source) if state.processed_source else None
        if processed is None:
            logger.warning("No processed image to save")
            return False
        return bool(cv2.imwrite(str(path), processed))

    def save_comparison(self, state: ControllerState, path: str | Path) -> bool:
        """Write the original and processed images side by side."""
        original = decode_data_uri(state.original_source) if state.original_source else None
        processed = decode_data_uri(state.processed_source) if state.processed_source else None
        if original is None or processed is None:
            logger.warning("Both panes are needed for a comparison image")
            return False
        return bool(cv2.imwrite(str(path), compose_side_by_side(original, processed)))
