"""
MindMapEditor - glue between user actions and the mind map model.

Owns one GraphStore plus the drag and edit sessions bound to it, the map
title and view toggles. Each public method corresponds to a button or input
of the editor page; app.py only forwards events here.
"""

import logging
import random
from typing import Callable, Optional, Set, Tuple

from mindmap.constants import DEFAULT_CANVAS_HEIGHT, DEFAULT_CANVAS_WIDTH, DEFAULT_TITLE
from mindmap.edit.drag import DragController
from mindmap.edit.text_edit import EditSession
from mindmap.graph_store import GraphStore
from mindmap.notifications import LogNotifier, Notifier
from mindmap.serializer import (
    SnapshotError,
    export_filename,
    export_snapshot,
    load_snapshot,
    parse_snapshot,
    snapshot_timestamp,
    snapshot_title,
    snapshot_to_json,
)

logger = logging.getLogger(__name__)


class MindMapEditor:
    """Editor state for one mind map page."""

    def __init__(
        self,
        notifier: Optional[Notifier] = None,
        title: str = DEFAULT_TITLE,
        canvas_size: Tuple[float, float] = (DEFAULT_CANVAS_WIDTH, DEFAULT_CANVAS_HEIGHT),
        rng: Optional[random.Random] = None,
    ):
        self.notifier = notifier or LogNotifier()
        self.title = title
        self.show_connections = True
        self._canvas_size = canvas_size
        self._rng = rng
        self._on_change: Optional[Callable[[], None]] = None
        self._bind(GraphStore(notifier=self.notifier, canvas_size=canvas_size, rng=rng))

    def _bind(self, store: GraphStore) -> None:
        self.store = store
        self.drag = DragController(store)
        self.edit = EditSession(store)
        store.on('nodes_deleted', self._drop_sessions)
        store.on('cleared', lambda: self._drop_sessions(None))
        for event in ('node_added', 'node_updated', 'nodes_deleted', 'cleared'):
            store.on(event, lambda *_: self._changed())
        self.edit.set_on_state_change(lambda _state: self._changed())

    def set_on_change(self, callback: Callable[[], None]) -> None:
        """Called after anything a renderer shows has changed."""
        self._on_change = callback

    def _changed(self) -> None:
        if self._on_change:
            self._on_change()

    def _drop_sessions(self, removed: Optional[Set[str]]) -> None:
        session = self.drag.session
        if session and (removed is None or session.node_id in removed):
            self.drag.end_drag()
        if self.edit.node_id and (removed is None or self.edit.node_id in removed):
            self.edit.cancel()

    # --- Stats ---

    @property
    def node_count(self) -> int:
        return self.store.node_count

    @property
    def connection_count(self) -> int:
        return self.store.connection_count

    @property
    def selected_node_id(self) -> Optional[str]:
        return self.store.selected_node_id

    # --- Actions ---

    def add_node(self) -> str:
        """'Add Node' button: a new root-level node."""
        return self.store.add_node()

    def add_child(self) -> Optional[str]:
        """'Add Child' button: a child of the selected node (selection unchanged)."""
        if self.store.selected_node_id is None:
            return None
        return self.store.add_node(self.store.selected_node_id)

    def start_editing(self, node_id: Optional[str] = None) -> None:
        """'Edit' button: edit node_id, or the selected node."""
        target = node_id or self.store.selected_node_id
        if target:
            self.edit.begin(target)

    def delete_selected(self) -> None:
        if self.store.selected_node_id:
            self.store.delete_node(self.store.selected_node_id)

    def pick_color(self, color: str) -> None:
        if self.store.selected_node_id:
            self.store.set_color(self.store.selected_node_id, color)

    def toggle_connections(self) -> bool:
        self.show_connections = not self.show_connections
        self._changed()
        return self.show_connections

    def set_title(self, title: str) -> None:
        self.title = title

    def clear(self) -> None:
        """'Clear All': single fresh root, default title."""
        self.store.clear()
        self.title = DEFAULT_TITLE

    # --- Pointer input (canvas-local coordinates) ---

    def pointer_down(self, point: Tuple[float, float]) -> Optional[str]:
        """Select and start dragging the node under the pointer, if any."""
        node = self.store.node_at(point)
        if node is None:
            return None
        self.drag.begin_drag(node.id, point)
        self._changed()
        return node.id

    def pointer_move(self, point: Tuple[float, float]) -> None:
        if self.drag.on_pointer_move(point) is not None:
            logger.debug(f"Drag step to {point}")

    def pointer_up(self) -> None:
        self.drag.end_drag()

    # --- Export / import ---

    def export(self) -> Tuple[str, str]:
        """Return (filename, json_text) for the current map."""
        snapshot = export_snapshot(self.store, self.title)
        filename = export_filename(self.title)
        logger.info(f"Exported {snapshot['title']!r}: {len(snapshot['nodes'])} nodes")
        self.notifier.notify('success', 'Mind map exported successfully!')
        return filename, snapshot_to_json(snapshot)

    def import_json(self, text: str) -> bool:
        """
        Replace the current map with an exported one.

        Invalid input leaves the current map untouched and reports an error.
        """
        try:
            data = parse_snapshot(text)
            store = load_snapshot(
                data, notifier=self.notifier, canvas_size=self._canvas_size, rng=self._rng
            )
        except SnapshotError as e:
            logger.warning(f"Import rejected: {e}")
            self.notifier.notify('error', f'Import failed: {e}')
            return False

        self._drop_sessions(None)
        self._bind(store)
        self.title = snapshot_title(data, DEFAULT_TITLE)
        logger.info(f"Imported {self.title!r} exported at {snapshot_timestamp(data)}")
        self.notifier.notify('success', 'Mind map imported successfully!')
        self._changed()
        return True

