"""
    Node model - a point-like vertex on the canvas
"""
from dataclasses import dataclass, replace
from typing import Any, Dict

from ..constants import DEFAULT_NODE_COLOR
from ..types import ColorValidator, Point, distance


@dataclass(frozen=True)
class Node:
    """
    A node in the graph.

    Nodes are immutable values: dragging or recoloring a node produces a new
    ``Node`` with the same ``node_id``.  Two nodes are equal when every field
    is equal, which is what history snapshots rely on.

    Attributes:
        node_id: Identifier, unique within its graph.
        x:       Horizontal canvas coordinate.
        y:       Vertical canvas coordinate.
        color:   Fill color as a hex string.
    """
    node_id: int
    x: float
    y: float
    color: str = DEFAULT_NODE_COLOR

    def __post_init__(self):
        ColorValidator.validate(self.color)

    @property
    def position(self) -> Point:
        return self.x, self.y

    def moved_to(self, x: float, y: float) -> 'Node':
        """Same node at a new position"""
        return replace(self, x=x, y=y)

    def recolored(self, color: str) -> 'Node':
        """Same node with a new fill color"""
        return replace(self, color=color)

    def distance_to(self, point: Point) -> float:
        return distance(self.position, point)

    def contains_point(self, point: Point, radius: float) -> bool:
        """True if ``point`` lies strictly within ``radius`` of the center."""
        return self.distance_to(point) < radius

    def __repr__(self) -> str:
        return f"Node({self.node_id}, x={self.x}, y={self.y}, color={self.color})"

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.node_id,
            'x': self.x,
            'y': self.y,
            'color': self.color,
        }
