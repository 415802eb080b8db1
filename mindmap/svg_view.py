"""
SVG builder for the mind map canvas.

Turns the editor state into SVG markup for ui.interactive_image, which
overlays it on an image of the canvas size. Read-only: nothing here mutates
the model.
"""

from html import escape
from typing import List

from mindmap.constants import LABEL_MAX_CHARS
from mindmap.editor import MindMapEditor
from mindmap.geometry import edge_path, node_center
from mindmap.models import Node

EDGE_COLOR = '#8b5cf6'
SELECTED_OUTLINE = '#8b5cf6'
TEXT_COLOR = '#374151'
GRID_COLOR = '#e5e7eb'


def truncate_label(text: str, limit: int = LABEL_MAX_CHARS) -> str:
    """Labels longer than limit show the first limit chars plus '...'."""
    return text if len(text) <= limit else f'{text[:limit]}...'


def build_svg_content(editor: MindMapEditor) -> str:
    """SVG elements for the grid, the connections and the nodes (in paint order)."""
    store = editor.store
    parts: List[str] = [
        '<defs><pattern id="grid" width="20" height="20" patternUnits="userSpaceOnUse">'
        f'<path d="M 20 0 L 0 0 0 20" fill="none" stroke="{GRID_COLOR}" stroke-width="0.5" opacity="0.3"/>'
        '</pattern></defs>',
        '<rect width="100%" height="100%" fill="url(#grid)"/>',
    ]

    # Connections first so they sit behind the nodes
    opacity = 0.6 if editor.show_connections else 0
    for conn in store.connections:
        from_node = store.get_node(conn.from_id)
        to_node = store.get_node(conn.to_id)
        if from_node is None or to_node is None:
            continue
        parts.append(
            f'<path d="{edge_path(from_node, to_node)}" stroke="{EDGE_COLOR}" stroke-width="2" '
            f'fill="none" stroke-dasharray="4 4" opacity="{opacity}"/>'
        )

    edit_state = editor.edit.state
    for node in store.nodes:
        draft = edit_state.draft_text if edit_state and edit_state.node_id == node.id else None
        parts.append(_node_svg(node, node.id == store.selected_node_id, draft))

    return '\n'.join(parts)


def _node_svg(node: Node, selected: bool, draft: str = None) -> str:
    x, y = node.position
    center = node_center(node)
    stroke = SELECTED_OUTLINE if selected else 'transparent'
    stroke_width = 3 if selected else 0
    label = draft if draft is not None else truncate_label(node.text)
    # Italic while the text is being edited
    style = ' font-style="italic"' if draft is not None else ''
    return (
        f'<g id="node-{escape(node.id)}">'
        f'<rect x="{x}" y="{y}" width="{node.width}" height="{node.height}" rx="16" '
        f'fill="{escape(node.color)}" stroke="{stroke}" stroke-width="{stroke_width}"/>'
        f'<text x="{center.x}" y="{center.y}" text-anchor="middle" dominant-baseline="middle" '
        f'font-size="{node.font_size}" fill="{TEXT_COLOR}"{style}>{escape(label)}</text>'
        '</g>'
    )
