"""
    Snapshot - one history entry.
"""
from dataclasses import dataclass
from typing import Any, Dict

from .graph import Graph, Nodes, Edges


@dataclass(frozen=True)
class Snapshot:
    """
    Immutable ``(nodes, edges)`` pair captured after a committed edit.

    The tuples hold frozen ``Node`` / ``Edge`` values, so a snapshot can
    never observe later changes to the live graph.
    """
    nodes: Nodes
    edges: Edges

    @classmethod
    def of(cls, graph: Graph) -> 'Snapshot':
        return cls(tuple(graph.nodes), tuple(graph.edges))

    def apply_to(self, graph: Graph) -> Graph:
        """The given graph with its state replaced by this snapshot"""
        return graph.with_state(self.nodes, self.edges)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'nodes': [n.to_dict() for n in self.nodes],
            'edges': [e.to_dict() for e in self.edges],
        }
