"""
Notification sink for user-facing messages.

The core fires notifications and never reads a result back. Two sinks ship:
- LogNotifier: writes to the module logger (default, used headless and in tests)
- NiceGUINotifier: shows a toast via ui.notify
"""

import logging
from typing import Literal, Protocol, runtime_checkable

from nicegui import ui

logger = logging.getLogger(__name__)

NoticeKind = Literal['success', 'error']

# NiceGUI notification types for each notice kind
_NICEGUI_TYPES = {
    'success': 'positive',
    'error': 'negative',
}


@runtime_checkable
class Notifier(Protocol):
    """Fire-and-forget message sink."""

    def notify(self, kind: NoticeKind, message: str) -> None:
        ...


class LogNotifier:
    """Routes notifications to logging."""

    def notify(self, kind: NoticeKind, message: str) -> None:
        if kind == 'error':
            logger.error(message)
        else:
            logger.info(message)


class NiceGUINotifier:
    """Shows notifications as NiceGUI toasts at the bottom of the page."""

    def __init__(self, position: str = 'bottom', timeout: int = 1500):
        self.position = position
        self.timeout = timeout

    def notify(self, kind: NoticeKind, message: str) -> None:
        ui.notify(
            message,
            type=_NICEGUI_TYPES.get(kind, 'info'),
            position=self.position,
            timeout=self.timeout,
        )
