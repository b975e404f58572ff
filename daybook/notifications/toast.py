"""
Transient Notifications

A page shows at most one toast at a time. A toast disappears on its
own after a fixed window (2 seconds by default) or earlier when the
user closes it. Showing a new toast replaces the current one.
"""

import time
from enum import Enum
from typing import Callable, Optional

from pydantic import BaseModel, Field


class ToastKind(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


# Messages the pages use
SAVED = "Salvo"
EDITED = "Editado"
ERROR = "Erro"


class Toast(BaseModel):
    message: str
    kind: ToastKind = ToastKind.SUCCESS
    shown_at: float = Field(..., description="Clock reading when shown")
    duration: float = Field(..., gt=0)
    rendered: bool = False

    def is_expired(self, now: float) -> bool:
        return now - self.shown_at >= self.duration


class ToastNotifier:
    """Holds the current toast for one page session."""

    def __init__(
        self,
        duration_seconds: float = 2.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._duration = duration_seconds
        self._clock = clock
        self._toast: Optional[Toast] = None

    def show(self, message: str, kind: ToastKind = ToastKind.SUCCESS) -> Toast:
        self._toast = Toast(
            message=message,
            kind=kind,
            shown_at=self._clock(),
            duration=self._duration,
        )
        return self._toast

    def success(self, message: str = SAVED) -> Toast:
        return self.show(message, ToastKind.SUCCESS)

    def error(self, message: str = ERROR) -> Toast:
        return self.show(message, ToastKind.ERROR)

    def hide(self) -> None:
        """Close the current toast before its window ends."""
        self._toast = None

    def current(self, now: Optional[float] = None) -> Optional[Toast]:
        """The visible toast, or None once it expired or was closed."""
        if self._toast is None:
            return None
        now = self._clock() if now is None else now
        if self._toast.is_expired(now):
            self._toast = None
        return self._toast

    def take_unrendered(self) -> Optional[Toast]:
        """
        Hand the visible toast to the UI exactly once.

        Streamlit reruns the script on every interaction; this keeps a
        toast from being drawn again on each rerun.
        """
        toast = self.current()
        if toast is None or toast.rendered:
            return None
        self._toast = toast.model_copy(update={"rendered": True})
        return toast
