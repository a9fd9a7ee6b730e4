"""
    Graph model - one editable graph and its pure mutators.

    Every operation takes the full current ``(nodes, edges)`` tuples and
    returns new tuples; inputs are never modified.  That makes the results
    safe to snapshot into the undo history, replay, or throw away.
"""
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Tuple

from ..constants import DEFAULT_NODE_COLOR, FIRST_ID
from ..types import ColorValidator, Point
from .node import Node
from .edge import Edge

Nodes = Tuple[Node, ...]
Edges = Tuple[Edge, ...]


# ── Pure operations on (nodes, edges) ────────────────────────────

def next_node_id(nodes: Nodes) -> int:
    """``max(existing ids) + 1``, or 1 for an empty sequence."""
    if not nodes:
        return FIRST_ID
    return max(node.node_id for node in nodes) + 1


def add_node(nodes: Nodes, position: Point,
             color: str = DEFAULT_NODE_COLOR) -> Nodes:
    """Append a new node at ``position``."""
    x, y = position
    return tuple(nodes) + (Node(next_node_id(nodes), x, y, color),)


def delete_node(nodes: Nodes, edges: Edges, node_id: int) -> Tuple[Nodes, Edges]:
    """Remove a node and all connected edges (no-op if the node is absent)."""
    new_nodes = tuple(n for n in nodes if n.node_id != node_id)
    new_edges = tuple(e for e in edges if not e.touches(node_id))
    return new_nodes, new_edges


def move_node(nodes: Nodes, node_id: int, x: float, y: float) -> Nodes:
    return tuple(n.moved_to(x, y) if n.node_id == node_id else n for n in nodes)


def set_node_color(nodes: Nodes, node_id: int, color: str) -> Nodes:
    ColorValidator.validate(color)
    return tuple(n.recolored(color) if n.node_id == node_id else n for n in nodes)


def has_edge_between(edges: Edges, a: int, b: int) -> bool:
    return any(e.connects_nodes(a, b) for e in edges)


def add_edge(edges: Edges, a: int, b: int) -> Edges:
    """
    Append ``Edge(a, b)``.

    Self-loops and edges duplicating an existing unordered pair are
    rejected: the input is returned unchanged.
    """
    if a == b or has_edge_between(edges, a, b):
        return tuple(edges)
    return tuple(edges) + (Edge(a, b),)


def delete_edge(edges: Edges, edge: Edge) -> Edges:
    """Remove the exact edge value (no-op if absent)."""
    return tuple(e for e in edges if e != edge)


# ── Graph ────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Graph:
    """
        One graph instance: an id plus immutable node and edge sequences.

        Methods mirror the module-level operations and return a new
        ``Graph`` with the same id.
    """
    graph_id: int
    nodes: Nodes = field(default_factory=tuple)
    edges: Edges = field(default_factory=tuple)

    @classmethod
    def seeded(cls, graph_id: int, position: Point,
               color: str = DEFAULT_NODE_COLOR) -> 'Graph':
        """A fresh graph holding a single node at ``position``."""
        return cls(graph_id, add_node((), position, color), ())

    # ── Mutators (return new graphs) ─────────────────────────────

    def with_state(self, nodes: Nodes, edges: Edges) -> 'Graph':
        return replace(self, nodes=tuple(nodes), edges=tuple(edges))

    def add_node(self, position: Point, color: str = DEFAULT_NODE_COLOR) -> 'Graph':
        return replace(self, nodes=add_node(self.nodes, position, color))

    def delete_node(self, node_id: int) -> 'Graph':
        nodes, edges = delete_node(self.nodes, self.edges, node_id)
        return self.with_state(nodes, edges)

    def move_node(self, node_id: int, x: float, y: float) -> 'Graph':
        return replace(self, nodes=move_node(self.nodes, node_id, x, y))

    def set_node_color(self, node_id: int, color: str) -> 'Graph':
        return replace(self, nodes=set_node_color(self.nodes, node_id, color))

    def add_edge(self, a: int, b: int) -> 'Graph':
        return replace(self, edges=add_edge(self.edges, a, b))

    def delete_edge(self, edge: Edge) -> 'Graph':
        return replace(self, edges=delete_edge(self.edges, edge))

    # ── Queries ──────────────────────────────────────────────────

    def get_node(self, node_id: Optional[int]) -> Optional[Node]:
        for node in self.nodes:
            if node.node_id == node_id:
                return node
        return None

    def has_node(self, node_id: Optional[int]) -> bool:
        return self.get_node(node_id) is not None

    def incident_edges(self, node_id: int) -> List[Edge]:
        """Edges with ``node_id`` as one endpoint, in sequence order"""
        return [e for e in self.edges if e.touches(node_id)]

    def node_at(self, point: Point, radius: float) -> Optional[Node]:
        """
        Hit-test: the first node (sequence order) strictly within ``radius``
        of ``point``.  Ties are resolved by order only, not by distance.
        """
        for node in self.nodes:
            if node.contains_point(point, radius):
                return node
        return None

    def get_number_of_nodes(self) -> int:
        return len(self.nodes)

    def get_number_of_edges(self) -> int:
        return len(self.edges)

    def __repr__(self) -> str:
        return f"Graph({self.graph_id}, nodes={len(self.nodes)}, edges={len(self.edges)})"

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.graph_id,
            'nodes': [node.to_dict() for node in self.nodes],
            'edges': [edge.to_dict() for edge in self.edges]
        }
