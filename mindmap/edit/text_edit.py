"""
Inline text editing of one node at a time.

States:
- Idle: `state is None`
- Editing: `state` is an EditState(node_id, draft_text)

The draft is staged here and only written to the GraphStore on commit
(blur or Enter). Cancel (Escape) drops it.
"""

import logging
from dataclasses import dataclass, replace
from typing import Callable, Optional

from mindmap.constants import CANCEL_KEY, CONFIRM_KEY
from mindmap.graph_store import GraphStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EditState:
    """Snapshot of an open edit."""
    node_id: str
    draft_text: str


class EditSession:
    """Stages and commits/discards text changes for a single node."""

    def __init__(self, store: GraphStore):
        self.store = store
        self._state: Optional[EditState] = None
        self._on_state_change: Optional[Callable[[Optional[EditState]], None]] = None

    @property
    def state(self) -> Optional[EditState]:
        return self._state

    @property
    def is_editing(self) -> bool:
        return self._state is not None

    @property
    def node_id(self) -> Optional[str]:
        return self._state.node_id if self._state else None

    def set_on_state_change(self, callback: Callable[[Optional[EditState]], None]):
        self._on_state_change = callback

    def begin(self, node_id: str) -> Optional[EditState]:
        """
        Open an edit on node_id with its current text as the draft.

        An edit already open on another node loses focus, so it is committed
        first. Unknown ids leave the session unchanged.
        """
        node = self.store.get_node(node_id)
        if node is None:
            return self._state
        if self._state is not None:
            if self._state.node_id == node_id:
                return self._state
            self.commit()

        self._state = EditState(node_id=node_id, draft_text=node.text)
        self._notify_change()
        return self._state

    def set_draft(self, text: str) -> None:
        if self._state is None:
            return
        self._state = replace(self._state, draft_text=text)
        self._notify_change()

    def commit(self) -> None:
        """Write the draft to the node and return to Idle."""
        if self._state is None:
            return
        state, self._state = self._state, None
        if state.node_id in self.store:
            self.store.update_node(state.node_id, text=state.draft_text)
            logger.info(f"Committed text for {state.node_id[:8]}")
            self.store.notify('success', 'Node updated!')
        else:
            logger.info(f"Dropped edit for deleted node {state.node_id[:8]}")
        self._notify_change()

    def cancel(self) -> None:
        """Discard the draft and return to Idle."""
        if self._state is None:
            return
        self._state = None
        self._notify_change()

    def handle_key(self, key: str) -> bool:
        """Route a key press while editing. Returns True if the key was consumed."""
        if self._state is None:
            return False
        if key == CONFIRM_KEY:
            self.commit()
            return True
        if key == CANCEL_KEY:
            self.cancel()
            return True
        return False

    def _notify_change(self):
        if self._on_state_change:
            self._on_state_change(self._state)
