"""Single-line status display."""

import logging
from typing import Callable

from threshold_viewer.api.schemas import Severity, StatusMessage

logger = logging.getLogger(__name__)

_LOG_LEVELS = {
    Severity.INFO: logging.INFO,
    Severity.SUCCESS: logging.INFO,
    Severity.ERROR: logging.ERROR,
}


class StatusNotifier:
    """Holds the one status message currently on display.

    A new message always replaces the previous one; there is no history.
    """

    def __init__(self, sink: Callable[[StatusMessage | None], None] | None = None):
        self._sink = sink
        self._current: StatusMessage | None = None

    @property
    def current(self) -> StatusMessage | None:
        return self._current

    def show(self, text: str, severity: Severity) -> StatusMessage:
        message = StatusMessage(text=text, severity=severity)
        self._current = message
        logger.log(_LOG_LEVELS[severity], "[%s] %s", severity.value, text)
        if self._sink is not None:
            self._sink(message)
        return message

    def hide(self) -> None:
        self._current = None
        if self._sink is not None:
            self._sink(None)
