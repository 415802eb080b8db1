"""
Edit Handlers - canvas and inline-editor event handlers for app.py.

Translates NiceGUI event payloads into MindMapEditor calls so the page code
only deals with layout. Pointer coordinates arrive canvas-local from
ui.interactive_image (image_x / image_y).
"""

import logging
from typing import Any, Callable, Dict, Optional, Tuple

from mindmap.editor import MindMapEditor

logger = logging.getLogger(__name__)

# interactive_image events the canvas subscribes to
CANVAS_EVENTS = ['mousedown', 'mousemove', 'mouseup', 'mouseout', 'dblclick']


def event_point(event: Any) -> Optional[Tuple[float, float]]:
    """
    Extract a canvas-local point from a mouse event.

    Accepts MouseEventArguments (image_x/image_y), a dict payload
    (image_x/offsetX/x) or an [x, y] pair.
    """
    if hasattr(event, 'image_x') and hasattr(event, 'image_y'):
        return float(event.image_x), float(event.image_y)

    raw = event.args if hasattr(event, 'args') else event
    if isinstance(raw, (list, tuple)) and len(raw) >= 2:
        return float(raw[0]), float(raw[1])
    if isinstance(raw, dict):
        x = raw.get('image_x', raw.get('offsetX', raw.get('x')))
        y = raw.get('image_y', raw.get('offsetY', raw.get('y')))
        if x is not None and y is not None:
            return float(x), float(y)
    return None


def setup_edit_handlers(editor: MindMapEditor) -> Dict[str, Callable]:
    """
    Build the event handlers for the canvas and the inline text input.

    Returns:
        Dict with handler functions for binding to UI events
    """

    def handle_mouse(event):
        """Dispatch interactive_image mouse events to drag / selection / edit."""
        kind = getattr(event, 'type', None)
        if kind in ('mouseup', 'mouseout'):
            editor.pointer_up()
            return

        point = event_point(event)
        if point is None:
            logger.debug(f"Ignoring {kind} event without coordinates")
            return

        if kind == 'mousedown':
            editor.pointer_down(point)
        elif kind == 'mousemove':
            editor.pointer_move(point)
        elif kind == 'dblclick':
            node = editor.store.node_at(point)
            if node is not None:
                editor.start_editing(node.id)

    def handle_draft_change(event):
        """Keep the staged text in sync with the input value."""
        value = getattr(event, 'value', event)
        editor.edit.set_draft('' if value is None else str(value))

    def handle_key(event):
        """Enter commits, Escape cancels; only while editing."""
        args = getattr(event, 'args', event)
        key = args.get('key') if isinstance(args, dict) else args
        if isinstance(key, str):
            editor.edit.handle_key(key)

    def handle_blur(_event=None):
        """Losing focus commits the open edit."""
        editor.edit.commit()

    return {
        'handle_mouse': handle_mouse,
        'handle_draft_change': handle_draft_change,
        'handle_key': handle_key,
        'handle_blur': handle_blur,
    }
