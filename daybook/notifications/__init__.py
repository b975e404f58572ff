"""Transient success/error notifications."""

from daybook.notifications.toast import (
    EDITED,
    ERROR,
    SAVED,
    Toast,
    ToastKind,
    ToastNotifier,
)

__all__ = [
    "EDITED",
    "ERROR",
    "SAVED",
    "Toast",
    "ToastKind",
    "ToastNotifier",
]
