"""
Data records for the mind map graph.

Nodes reference each other by id only (parent_id / children). The GraphStore
owns every Node and Connection; other components hold ids, never records.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, NamedTuple, Optional

from mindmap.constants import NODE_SIZES, SizeCategory


class Point(NamedTuple):
    """Canvas-local coordinate. Unbounded, real-valued."""
    x: float
    y: float

    def plus(self, other: 'Point') -> 'Point':
        return Point(self.x + other[0], self.y + other[1])

    def minus(self, other: 'Point') -> 'Point':
        return Point(self.x - other[0], self.y - other[1])


@dataclass
class Node:
    id: str
    text: str
    position: Point
    color: str
    size: SizeCategory = 'medium'
    parent_id: Optional[str] = None
    children: List[str] = field(default_factory=list)

    @property
    def width(self) -> int:
        return NODE_SIZES[self.size]['width']

    @property
    def height(self) -> int:
        return NODE_SIZES[self.size]['height']

    @property
    def font_size(self) -> int:
        return NODE_SIZES[self.size]['font_size']

    def to_dict(self) -> Dict[str, Any]:
        """Plain dict in the export format (camelCase, parentId omitted for roots)."""
        data: Dict[str, Any] = {
            'id': self.id,
            'text': self.text,
            'x': self.position.x,
            'y': self.position.y,
            'color': self.color,
            'size': self.size,
        }
        if self.parent_id is not None:
            data['parentId'] = self.parent_id
        data['children'] = list(self.children)
        return data


@dataclass(frozen=True)
class Connection:
    """Directed parent -> child edge."""
    from_id: str
    to_id: str

    def to_dict(self) -> Dict[str, str]:
        return {'fromId': self.from_id, 'toId': self.to_id}
