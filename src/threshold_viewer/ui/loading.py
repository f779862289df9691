"""Loading indicator shown while a processing request is outstanding."""

from typing import Callable


class LoadingIndicator:
    """Idempotent show/hide.

    Repeated show() or hide() calls are no-ops; the toggle callback only
    fires when visibility actually changes.
    """

    def __init__(self, on_toggle: Callable[[bool], None] | None = None):
        self._visible = False
        self._on_toggle = on_toggle

    @property
    def visible(self) -> bool:
        return self._visible

    def show(self) -> None:
        self._set(True)

    def hide(self) -> None:
        self._set(False)

    def _set(self, visible: bool) -> None:
        if visible == self._visible:
            return
        self._visible = visible
        if self._on_toggle is not None:
            self._on_toggle(visible)
