"""
Interactive editing for the mind map canvas.

This package provides the pointer and keyboard sessions:
- DragController: live drag repositioning of one node
- EditSession: inline text edit state machine
- setup_edit_handlers: NiceGUI event handlers for app.py integration

Usage:
    from mindmap.edit import DragController, EditSession
    from mindmap.edit.handlers import setup_edit_handlers
"""

from mindmap.edit.drag import DragController, DragSession
from mindmap.edit.text_edit import EditSession, EditState

__all__ = [
    'DragController',
    'DragSession',
    'EditSession',
    'EditState',
]
