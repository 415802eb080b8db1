"""
GraphStore - single source of truth for the mind map graph.

Nodes live in an id-indexed dict (insertion order is paint order). Edges are
stored twice and must change together:
- parent_id / children on each Node
- an explicit Connection per child, keyed by child id

Every public mutation keeps both views in step and runs to completion before
returning, so a renderer never sees a half-applied change. Operations on
unknown ids are no-ops.

Change events (see `on`):
- node_added(node_id)
- node_updated(node_id)
- nodes_deleted(removed_ids)
- cleared()
"""

import logging
import random
import uuid
from typing import Any, Callable, Dict, List, Optional, Set, Tuple

import networkx as nx

from mindmap.constants import (
    CHILD_OFFSET,
    DEFAULT_CANVAS_HEIGHT,
    DEFAULT_CANVAS_WIDTH,
    DEFAULT_NODE_TEXT,
    NODE_SIZES,
    PASTEL_COLORS,
    ROOT_POSITION,
    ROOT_TEXT,
    SPAWN_MARGIN,
)
from mindmap.geometry import topmost_at
from mindmap.models import Connection, Node, Point
from mindmap.notifications import LogNotifier, Notifier

logger = logging.getLogger(__name__)

EVENTS = ('node_added', 'node_updated', 'nodes_deleted', 'cleared')

# Fields update_node may touch; structure fields are never patched
PATCHABLE_FIELDS = ('position', 'text', 'color', 'size')


def _as_point(value: Any) -> Optional[Point]:
    """A position given as {x, y} or an (x, y) pair, or None if it is neither."""
    if isinstance(value, dict):
        value = (value.get('x'), value.get('y'))
    if isinstance(value, (str, bytes)):
        return None
    try:
        x, y = value
        return Point(float(x), float(y))
    except (TypeError, ValueError):
        return None


class GraphStore:
    """Owns all nodes and connections of one mind map."""

    def __init__(
        self,
        notifier: Optional[Notifier] = None,
        canvas_size: Tuple[float, float] = (DEFAULT_CANVAS_WIDTH, DEFAULT_CANVAS_HEIGHT),
        rng: Optional[random.Random] = None,
        id_factory: Optional[Callable[[], str]] = None,
        with_root: bool = True,
    ):
        self.notifier = notifier or LogNotifier()
        self.canvas_size = canvas_size
        self._rng = rng or random.Random()
        self._new_id = id_factory or (lambda: str(uuid.uuid4()))

        self._nodes: Dict[str, Node] = {}
        # child id -> Connection(parent, child)
        self._connections: Dict[str, Connection] = {}
        self.selected_node_id: Optional[str] = None

        self._callbacks: Dict[str, List[Callable]] = {name: [] for name in EVENTS}

        if with_root:
            self._insert_root()

    # --- Events ---

    def on(self, event: str, callback: Callable) -> None:
        """Register a callback for a change event."""
        if event not in self._callbacks:
            raise ValueError(f"Unknown GraphStore event: {event}")
        self._callbacks[event].append(callback)

    def _emit(self, event: str, *args: Any) -> None:
        for callback in self._callbacks[event]:
            callback(*args)

    def notify(self, kind: str, message: str) -> None:
        self.notifier.notify(kind, message)

    # --- Queries ---

    def get_node(self, node_id: Optional[str]) -> Optional[Node]:
        if node_id is None:
            return None
        return self._nodes.get(node_id)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    @property
    def nodes(self) -> List[Node]:
        return list(self._nodes.values())

    @property
    def connections(self) -> List[Connection]:
        return list(self._connections.values())

    @property
    def node_count(self) -> int:
        return len(self._nodes)

    @property
    def connection_count(self) -> int:
        return len(self._connections)

    @property
    def roots(self) -> List[Node]:
        return [n for n in self._nodes.values() if n.parent_id is None]

    @property
    def selected_node(self) -> Optional[Node]:
        return self.get_node(self.selected_node_id)

    def children_of(self, node_id: str) -> List[Node]:
        node = self._nodes.get(node_id)
        if node is None:
            return []
        return [self._nodes[cid] for cid in node.children if cid in self._nodes]

    def subtree_ids(self, node_id: str) -> Set[str]:
        """
        Ids of node_id and all its transitive descendants.

        Walks children with an explicit stack so deep chains cannot hit the
        recursion limit. Empty set for an unknown id.
        """
        if node_id not in self._nodes:
            return set()
        collected = {node_id}
        stack = [node_id]
        while stack:
            current = self._nodes[stack.pop()]
            for child_id in current.children:
                if child_id not in collected and child_id in self._nodes:
                    collected.add(child_id)
                    stack.append(child_id)
        return collected

    def node_at(self, point: Tuple[float, float]) -> Optional[Node]:
        """Top-most node under a canvas point, or None."""
        return topmost_at(self._nodes.values(), point)

    # --- Selection ---

    def select(self, node_id: Optional[str]) -> None:
        """Select a node (None clears). Unknown ids clear the selection."""
        self.selected_node_id = node_id if node_id in self._nodes else None

    # --- Mutations ---

    def add_node(self, parent_id: Optional[str] = None) -> str:
        """
        Create a node and return its id.

        Without a parent the node is a new root-level node, size 'large', at a
        random spot inside the canvas. With a parent it is a 'medium' child
        offset from the parent and linked by a new Connection. A parent id that
        does not exist is treated as no parent.
        """
        parent = self._nodes.get(parent_id) if parent_id is not None else None
        if parent_id is not None and parent is None:
            logger.warning(f"add_node: parent {parent_id} not found, adding a root-level node")

        node_id = self._new_id()
        if parent is not None:
            position = parent.position.plus(Point(*CHILD_OFFSET))
            size = 'medium'
        else:
            position = self._random_position()
            size = 'large'

        node = Node(
            id=node_id,
            text=DEFAULT_NODE_TEXT,
            position=position,
            color=self._rng.choice(PASTEL_COLORS),
            size=size,
            parent_id=parent.id if parent is not None else None,
        )
        self._nodes[node_id] = node
        if parent is not None:
            parent.children.append(node_id)
            self._connections[node_id] = Connection(parent.id, node_id)

        logger.info(f"Added node {node_id[:8]} (parent={parent.id[:8] if parent else None})")
        self._emit('node_added', node_id)
        self.notify('success', 'Node added successfully!')
        return node_id

    def delete_node(self, node_id: str) -> None:
        """
        Delete a node together with its whole subtree.

        Descendants are collected first, then nodes, connections and the
        parent's children list are replaced in one step.
        """
        node = self._nodes.get(node_id)
        if node is None:
            return

        removed = self.subtree_ids(node_id)

        nodes = {nid: n for nid, n in self._nodes.items() if nid not in removed}
        connections = {
            child_id: conn for child_id, conn in self._connections.items()
            if conn.from_id not in removed and conn.to_id not in removed
        }
        parent = nodes.get(node.parent_id) if node.parent_id else None

        self._nodes = nodes
        self._connections = connections
        if parent is not None:
            parent.children = [cid for cid in parent.children if cid != node_id]
        if self.selected_node_id in removed:
            self.selected_node_id = None

        logger.info(f"Deleted node {node_id[:8]} and {len(removed) - 1} descendant(s)")
        self._emit('nodes_deleted', removed)
        self.notify('success', 'Node deleted successfully!')

    def update_node(self, node_id: str, **patch: Any) -> None:
        """
        Merge patch fields into a node: position, text, color, size.

        id, parent_id and children are structural and ignored here, as are
        unknown keys, invalid sizes and malformed positions.
        """
        node = self._nodes.get(node_id)
        if node is None:
            return

        changed = False
        for key, value in patch.items():
            if key not in PATCHABLE_FIELDS:
                logger.warning(f"update_node: ignoring field '{key}' for {node_id[:8]}")
                continue
            if key == 'position':
                value = _as_point(value)
                if value is None:
                    logger.warning(f"update_node: invalid position for {node_id[:8]}")
                    continue
            elif key == 'size' and (not isinstance(value, str) or value not in NODE_SIZES):
                logger.warning(f"update_node: unknown size '{value}'")
                continue
            setattr(node, key, value)
            changed = True

        if changed:
            self._emit('node_updated', node_id)

    def set_color(self, node_id: str, color: str) -> None:
        """Apply a palette color to a node."""
        if color not in PASTEL_COLORS:
            logger.warning(f"set_color: {color} is not a palette color")
            return
        self.update_node(node_id, color=color)

    def clear(self) -> None:
        """Reset to a single fresh root node."""
        self._nodes = {}
        self._connections = {}
        self.selected_node_id = None
        self._insert_root()
        logger.info("Mind map cleared")
        self._emit('cleared')
        self.notify('success', 'Mind map cleared!')

    # --- Internal ---

    def _insert_root(self) -> Node:
        root = Node(
            id=self._new_id(),
            text=ROOT_TEXT,
            position=Point(*ROOT_POSITION),
            color=PASTEL_COLORS[0],
            size='large',
        )
        self._nodes[root.id] = root
        return root

    def _random_position(self) -> Point:
        width, height = self.canvas_size
        return Point(
            self._rng.random() * (width - 2 * SPAWN_MARGIN) + SPAWN_MARGIN,
            self._rng.random() * (height - 2 * SPAWN_MARGIN) + SPAWN_MARGIN,
        )

    def _restore(self, nodes: List[Node], connections: List[Connection]) -> None:
        """Replace the whole state; used by snapshot import only."""
        self._nodes = {n.id: n for n in nodes}
        self._connections = {c.to_id: c for c in connections}
        self.selected_node_id = None

    # --- Integrity ---

    def to_networkx(self) -> nx.DiGraph:
        """Structure as a directed graph (parent -> child) with node attributes."""
        G = nx.DiGraph()
        for node in self._nodes.values():
            G.add_node(node.id, text=node.text, color=node.color, size=node.size)
        for conn in self._connections.values():
            G.add_edge(conn.from_id, conn.to_id)
        return G

    def check_invariants(self) -> List[str]:
        """
        Return a list of integrity problems; empty when the graph is healthy.

        Checks that parent/children fields and connections describe the same
        edges and that the edges form a forest (every node has at most one
        parent, no cycles).
        """
        problems = []
        for node in self._nodes.values():
            for child_id in node.children:
                child = self._nodes.get(child_id)
                if child is None or child.parent_id != node.id:
                    problems.append(f"{node.id} lists {child_id} as a child but it is not")

            if node.parent_id is None:
                if node.id in self._connections:
                    problems.append(f"root {node.id} has an incoming connection")
                continue
            parent = self._nodes.get(node.parent_id)
            if parent is None:
                problems.append(f"{node.id} has missing parent {node.parent_id}")
            elif parent.children.count(node.id) != 1:
                problems.append(f"{node.id} listed {parent.children.count(node.id)} times by its parent")
            conn = self._connections.get(node.id)
            if conn is None or conn.from_id != node.parent_id:
                problems.append(f"{node.id} has no connection from its parent")

        for child_id, conn in self._connections.items():
            if conn.to_id != child_id:
                problems.append(f"connection {conn} filed under {child_id}")
            if conn.from_id not in self._nodes or conn.to_id not in self._nodes:
                problems.append(f"connection {conn.from_id}->{conn.to_id} references a missing node")

        if self._nodes and not nx.is_branching(self.to_networkx()):
            problems.append("parent relation is not a forest")
        return problems
