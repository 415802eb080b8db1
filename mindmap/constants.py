"""
Shared constants for the mind map model and the SVG view.

Node sizes are layout-only: the model stores a size category and the
geometry/view code looks up width, height and font size here.
"""

from typing import Dict, Literal, Tuple

SizeCategory = Literal['small', 'medium', 'large']

PASTEL_COLORS = [
    '#ffd6e7',  # pink
    '#a2f0f7',  # teal
    '#d2a2f7',  # lilac
    '#f5f0e8',  # beige
    '#7dd3fc',  # turquoise
    '#a7f3d0',  # mint
    '#fed7aa',  # peach
    '#e0e7ff',  # lavender
]

NODE_SIZES: Dict[str, Dict[str, int]] = {
    'small': {'width': 120, 'height': 60, 'font_size': 12},
    'medium': {'width': 160, 'height': 80, 'font_size': 14},
    'large': {'width': 200, 'height': 100, 'font_size': 16},
}

# New child = parent position + this vector
CHILD_OFFSET: Tuple[float, float] = (200.0, 150.0)

# Perpendicular offset of the quadratic control point, relative to edge length
CURVE_FACTOR = 0.2

# Random placement for root-level nodes: r * (extent - 2 * margin) + margin
SPAWN_MARGIN = 100.0

DEFAULT_CANVAS_WIDTH = 800
DEFAULT_CANVAS_HEIGHT = 600

ROOT_TEXT = 'Main Topic'
ROOT_POSITION: Tuple[float, float] = (400.0, 300.0)
DEFAULT_NODE_TEXT = 'New Node'
DEFAULT_TITLE = 'My Mind Map'

LABEL_MAX_CHARS = 20

# Keys reaching EditSession.handle_key
CONFIRM_KEY = 'Enter'
CANCEL_KEY = 'Escape'
