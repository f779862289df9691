"""Upload state machine orchestration."""

import asyncio
import dataclasses
import logging
from typing import Callable

from threshold_viewer.api.client import ProcessingClient
from threshold_viewer.api.schemas import ProcessingResult, Severity, UIState, format_threshold
from threshold_viewer.core.exceptions import InvalidFileTypeError, ThresholdViewerError
from threshold_viewer.core.files import SelectedFile
from threshold_viewer.ui.loading import LoadingIndicator
from threshold_viewer.ui.preview import FilePreviewRenderer
from threshold_viewer.ui.status import StatusNotifier
from .channel import EventChannel
from .state import ControllerState

logger = logging.getLogger(__name__)

UPLOADING_TEXT = "Uploading and processing image…"


class UploadController:
    """Drives one upload cycle per file selection.

    The controller is the only writer of ControllerState. Each accepted
    selection starts a new generation; results belonging to an older
    generation are dropped when they arrive.
    """

    def __init__(
        self,
        client: ProcessingClient,
        notifier: StatusNotifier | None = None,
        preview: FilePreviewRenderer | None = None,
        loading: LoadingIndicator | None = None,
        on_change: Callable[[ControllerState], None] | None = None,
    ):
        self.client = client
        self.notifier = notifier or StatusNotifier()
        self.preview = preview or FilePreviewRenderer()
        self.loading = loading or LoadingIndicator()
        self._on_change = on_change
        self._state = ControllerState()

    def snapshot(self) -> ControllerState:
        """Copy of the current state, safe to hand to views."""
        return dataclasses.replace(self._state)

    @property
    def ui_state(self) -> UIState:
        return self._state.ui_state

    def _transition(self, ui_state: UIState) -> None:
        logger.debug("State %s -> %s (generation %d)", self._state.ui_state.value, ui_state.value, self._state.generation)
        self._state.ui_state = ui_state
        if self._on_change is not None:
            self._on_change(self.snapshot())

    def _is_current(self, generation: int) -> bool:
        if generation != self._state.generation:
            logger.debug("Dropping stale update for generation %d (now %d)", generation, self._state.generation)
            return False
        return True

    async def on_file_selected(self, file: SelectedFile | None) -> None:
        """Handle a selection event from the file picker."""
        if file is None:
            return

        self._state.generation += 1
        generation = self._state.generation
        # Any request still in flight is stale from here on
        self.loading.hide()

        if not file.is_image:
            error = InvalidFileTypeError(file.media_type)
            logger.info("Rejected %s: media type %r", file.filename, file.media_type)
            self._transition(UIState.FAILED)
            self.notifier.show(error.message, Severity.ERROR)
            return

        self._state.last_result = None
        self._transition(UIState.PREVIEWING)

        try:
            source = await self.preview.decode(file)
        except Exception:
            logger.exception("Preview decode failed for %s", file.filename)
            source = None
        if not self._is_current(generation):
            return
        self._state.original_source = source

        self._transition(UIState.UPLOADING)
        self.notifier.show(UPLOADING_TEXT, Severity.INFO)

        self.loading.show()
        try:
            result = await self.client.submit(file)
        except ThresholdViewerError as e:
            if self._is_current(generation):
                self._fail(e)
        else:
            if self._is_current(generation):
                self._succeed(result)
        finally:
            # A stale request must not hide the indicator of the one that replaced it
            if generation == self._state.generation:
                self.loading.hide()

    def _succeed(self, result: ProcessingResult) -> None:
        self._state.last_result = result
        self._transition(UIState.SUCCEEDED)
        self.notifier.show(
            f"Image processed successfully! Threshold value: {format_threshold(result.threshold_value)}",
            Severity.SUCCESS,
        )

    def _fail(self, error: ThresholdViewerError) -> None:
        self._state.last_result = None
        self._transition(UIState.FAILED)
        self.notifier.show(f"Error: {error.message}", Severity.ERROR)

    async def run(self, channel: EventChannel) -> None:
        """Consume selections until the channel closes.

        Every selection gets its own task so a new pick can supersede an
        upload that is still in flight.
        """
        tasks: set[asyncio.Task] = set()

        def _done(task: asyncio.Task) -> None:
            tasks.discard(task)
            if not task.cancelled() and task.exception() is not None:
                logger.error("Selection handling failed", exc_info=task.exception())

        async for file in channel:
            task = asyncio.create_task(self.on_file_selected(file))
            tasks.add(task)
            task.add_done_callback(_done)
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
