"""Controller-owned view state."""

from dataclasses import dataclass

from threshold_viewer.api.schemas import ProcessingResult, UIState, format_threshold


@dataclass
class ControllerState:
    """Everything the panes display, owned by the upload controller.

    The processed pane and the threshold text are derived from the last
    result rather than stored separately.
    """

    ui_state: UIState = UIState.IDLE
    original_source: str | None = None
    last_result: ProcessingResult | None = None
    # Bumped on every selection; responses from older generations are stale
    generation: int = 0

    @property
    def processed_source(self) -> str | None:
        if self.last_result is None or not self.last_result.success:
            return None
        return self.last_result.processed_image

    @property
    def threshold_text(self) -> str:
        if self.last_result is None or self.last_result.threshold_value is None:
            return ""
        return f"Threshold Value: {format_threshold(self.last_result.threshold_value)}"
