"""
    Edge model - representation of an edge between two nodes.
"""
from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Optional, Tuple


@dataclass(frozen=True)
class Edge:
    """
        Undirected edge between two node ids.

        ``start`` / ``end`` keep the order in which the edge was created, but
        duplicate detection treats the pair as unordered: ``Edge(1, 2)`` and
        ``Edge(2, 1)`` connect the same nodes.
    """
    start: int
    end: int

    def get_endpoints(self) -> Tuple[int, int]:
        return self.start, self.end

    @property
    def pair(self) -> FrozenSet[int]:
        """Unordered endpoint pair"""
        return frozenset((self.start, self.end))

    def touches(self, node_id: int) -> bool:
        """Check if the node is one of the endpoints"""
        return self.start == node_id or self.end == node_id

    def get_other_node(self, node_id: int) -> Optional[int]:
        """Get the other end of the edge, or None if the node is not an endpoint"""
        if node_id == self.start:
            return self.end
        elif node_id == self.end:
            return self.start
        return None

    def connects_nodes(self, node1: int, node2: int) -> bool:
        """Check if edge connects two nodes, in either direction"""
        return (self.start == node1 and self.end == node2) or \
               (self.start == node2 and self.end == node1)

    def __repr__(self) -> str:
        return f"Edge({self.start} -- {self.end})"

    def to_dict(self) -> Dict[str, Any]:
        return {
            'start': self.start,
            'end': self.end,
        }
