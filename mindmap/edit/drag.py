"""
Drag Controller - pointer drag repositioning of a single node.

A drag session is an explicit record (DragSession) or None. Pointer moves
while a session is active become position updates on the GraphStore; nothing
else is touched, so a move step is one dict lookup plus one assignment.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from mindmap.graph_store import GraphStore
from mindmap.models import Point

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DragSession:
    """Node being dragged and pointer offset from the node origin at drag start."""
    node_id: str
    offset: Point


class DragController:
    """Tracks at most one active drag session."""

    def __init__(self, store: GraphStore):
        self.store = store
        self._session: Optional[DragSession] = None
        self._on_state_change: Optional[Callable[[Optional[DragSession]], None]] = None

    @property
    def session(self) -> Optional[DragSession]:
        return self._session

    @property
    def is_dragging(self) -> bool:
        return self._session is not None

    def set_on_state_change(self, callback: Callable[[Optional[DragSession]], None]):
        self._on_state_change = callback

    def begin_drag(self, node_id: str, pointer: Tuple[float, float]) -> bool:
        """
        Start dragging node_id from a canvas pointer position.

        Also selects the node. Returns False (and changes nothing) when the
        node does not exist or another drag is already running.
        """
        if self._session is not None:
            logger.warning(f"begin_drag ignored: {self._session.node_id[:8]} is already being dragged")
            return False
        node = self.store.get_node(node_id)
        if node is None:
            return False

        self._session = DragSession(node_id=node_id, offset=Point(*pointer).minus(node.position))
        self.store.select(node_id)
        logger.debug(f"Drag start {node_id[:8]} offset={self._session.offset}")
        self._notify_change()
        return True

    def on_pointer_move(self, pointer: Tuple[float, float]) -> Optional[Point]:
        """Move the dragged node under the pointer; returns its new position."""
        if self._session is None:
            return None
        position = Point(*pointer).minus(self._session.offset)
        self.store.update_node(self._session.node_id, position=position)
        return position

    def end_drag(self) -> None:
        """Pointer up or left the canvas."""
        if self._session is None:
            return
        logger.debug(f"Drag end {self._session.node_id[:8]}")
        self._session = None
        self._notify_change()

    def _notify_change(self):
        if self._on_state_change:
            self._on_state_change(self._session)
