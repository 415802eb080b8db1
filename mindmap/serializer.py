"""
Snapshot export and import for mind maps.

Snapshot format (JSON):
{
  "title": "My Mind Map",
  "nodes": [
    {"id": "...", "text": "Main Topic", "x": 400, "y": 300,
     "color": "#ffd6e7", "size": "large", "children": ["..."]},
    {"id": "...", "text": "New Node", "x": 600, "y": 450,
     "color": "#a7f3d0", "size": "medium", "parentId": "...", "children": []}
  ],
  "connections": [{"fromId": "...", "toId": "..."}],
  "timestamp": "2026-01-14T12:00:00Z"
}

Older exports carry the timestamp under "created"; both are accepted on load.
"""

import json
import re
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from mindmap.constants import NODE_SIZES
from mindmap.graph_store import GraphStore
from mindmap.models import Connection, Node, Point
from mindmap.notifications import Notifier


class SnapshotError(ValueError):
    """Raised when a snapshot cannot be turned back into a valid graph."""


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def export_snapshot(store: GraphStore, title: str, timestamp: Optional[str] = None) -> Dict[str, Any]:
    """Deep copy of the current graph plus title and generation time."""
    return {
        'title': title,
        'nodes': [node.to_dict() for node in store.nodes],
        'connections': [conn.to_dict() for conn in store.connections],
        'timestamp': timestamp or _now_iso(),
    }


def snapshot_to_json(snapshot: Dict[str, Any]) -> str:
    return json.dumps(snapshot, indent=2, ensure_ascii=False)


def export_filename(title: str) -> str:
    """Download name for a map: every non-alphanumeric character becomes '_'."""
    return re.sub(r'[^a-zA-Z0-9]', '_', title) + '.json'


def load_snapshot(data: Dict[str, Any], notifier: Optional[Notifier] = None, **store_kwargs: Any) -> GraphStore:
    """
    Rebuild a GraphStore from an exported snapshot.

    Raises SnapshotError if a record is malformed or the nodes and
    connections do not describe a consistent forest.
    """
    if not isinstance(data, dict):
        raise SnapshotError("Snapshot must be a JSON object")
    raw_nodes = data.get('nodes')
    raw_connections = data.get('connections', [])
    if not isinstance(raw_nodes, list):
        raise SnapshotError("Snapshot nodes must be a list")
    if not isinstance(raw_connections, list):
        raise SnapshotError("Snapshot connections must be a list")

    nodes = []
    seen = set()
    for raw in raw_nodes:
        node = _node_from_dict(raw)
        if node.id in seen:
            raise SnapshotError(f"Duplicate node id {node.id}")
        seen.add(node.id)
        nodes.append(node)

    connections = []
    for raw in raw_connections:
        try:
            connections.append(Connection(str(raw['fromId']), str(raw['toId'])))
        except (KeyError, TypeError) as e:
            raise SnapshotError(f"Malformed connection {raw!r}") from e

    store = GraphStore(notifier=notifier, with_root=False, **store_kwargs)
    store._restore(nodes, connections)
    problems = store.check_invariants()
    if problems or store.connection_count != len(connections):
        raise SnapshotError("Inconsistent snapshot: " + "; ".join(problems or ["duplicate connections"]))
    return store


def parse_snapshot(text: str) -> Dict[str, Any]:
    """Decode snapshot JSON text (e.g. an uploaded file)."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise SnapshotError(f"Not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise SnapshotError("Snapshot must be a JSON object")
    return data


def snapshot_title(data: Dict[str, Any], default: str) -> str:
    title = data.get('title') if isinstance(data, dict) else None
    return title if isinstance(title, str) and title else default


def snapshot_timestamp(data: Dict[str, Any]) -> Optional[str]:
    return data.get('timestamp') or data.get('created')


def _node_from_dict(raw: Any) -> Node:
    if not isinstance(raw, dict):
        raise SnapshotError(f"Malformed node {raw!r}")
    try:
        node = Node(
            id=str(raw['id']),
            text=str(raw.get('text', '')),
            position=Point(float(raw['x']), float(raw['y'])),
            color=str(raw['color']),
            size=raw.get('size', 'medium'),
            parent_id=_optional_id(raw.get('parentId')),
            children=[str(cid) for cid in raw.get('children', [])],
        )
    except (KeyError, TypeError, ValueError) as e:
        raise SnapshotError(f"Malformed node {raw.get('id', '?')}: {e}") from e
    if not isinstance(node.size, str) or node.size not in NODE_SIZES:
        raise SnapshotError(f"Node {node.id} has unknown size {node.size!r}")
    return node


def _optional_id(value: Any) -> Optional[str]:
    return None if value is None else str(value)
