"""
Edge geometry for the mind map renderer.

Pure functions over node records and points. Nothing here touches the
GraphStore; the renderer calls these with nodes it has already looked up.
"""

from typing import Iterable, Optional, Tuple

from mindmap.constants import CURVE_FACTOR
from mindmap.models import Node, Point


def node_center(node: Node) -> Point:
    """Center of the node's rectangle (position is the top-left corner)."""
    return Point(node.position.x + node.width / 2, node.position.y + node.height / 2)


def edge_control_point(from_center: Tuple[float, float], to_center: Tuple[float, float]) -> Point:
    """
    Control point of the quadratic curve drawn between two node centers.

    The midpoint is pushed perpendicular to the center line by CURVE_FACTOR of
    the delta, so every edge bends the same way relative to its direction.
    """
    from_x, from_y = from_center
    to_x, to_y = to_center
    mid_x = (from_x + to_x) / 2
    mid_y = (from_y + to_y) / 2
    return Point(
        mid_x + (from_y - to_y) * CURVE_FACTOR,
        mid_y + (to_x - from_x) * CURVE_FACTOR,
    )


def edge_path(from_node: Node, to_node: Node) -> str:
    """SVG path data for the curved edge between two nodes."""
    start = node_center(from_node)
    end = node_center(to_node)
    control = edge_control_point(start, end)
    return (
        f'M {_fmt(start.x)} {_fmt(start.y)} '
        f'Q {_fmt(control.x)} {_fmt(control.y)} {_fmt(end.x)} {_fmt(end.y)}'
    )


def contains(node: Node, point: Tuple[float, float]) -> bool:
    """True if point lies inside the node's rectangle (edges inclusive)."""
    px, py = point
    x, y = node.position
    return x <= px <= x + node.width and y <= py <= y + node.height


def topmost_at(nodes: Iterable[Node], point: Tuple[float, float]) -> Optional[Node]:
    """Last node in paint order whose rectangle contains point."""
    hit = None
    for node in nodes:
        if contains(node, point):
            hit = node
    return hit


def _fmt(value: float) -> str:
    # 12.0 -> '12', 12.5 -> '12.5'
    return f'{value:.2f}'.rstrip('0').rstrip('.')
