"""
    Editor commands — every model mutation as an object.

    Design Pattern: Command
    ───────────────────────
    Each command encapsulates one graph mutation:
        • ``execute(graph) → CommandResult``  — compute the new graph
        • ``records_history``                 — commit or preview tag

    Commit commands (node add / delete / color, edge add / delete, drag
    release) produce exactly one history entry.  Preview commands (live
    drag motion) change the live graph only; their effect is folded into
    the next commit.

    Commands never mutate the graph they receive: ``Graph`` is immutable,
    so the invoker (``InteractionController.dispatch``) decides what to store and
    record.  A command that finds nothing to do (stale id, rejected edge)
    returns ``success=False`` and the unchanged graph.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from graph_api.constants import DEFAULT_NODE_COLOR
from graph_api.models.edge import Edge
from graph_api.models.graph import Graph
from graph_api.types import Point


# ── Result wrapper ───────────────────────────────────────────────

@dataclass
class CommandResult:
    """
    Value object returned by every command execution.

    Attributes:
        success:  Whether the command changed (or committed) anything.
        message:  Human-readable output.
        graph:    The graph after the command.
        data:     Optional structured data for programmatic consumers.
    """
    success: bool
    message: str
    graph: Optional[Graph] = None
    data: Optional[Dict[str, Any]] = field(default_factory=dict)


# ── Abstract base ────────────────────────────────────────────────

class Command(ABC):
    """
    Abstract base for all editor commands.

    Design Pattern: Command
    """

    @abstractmethod
    def execute(self, graph: Graph) -> CommandResult:
        """Compute the command's effect on the given graph."""
        ...

    @property
    def records_history(self) -> bool:
        """Commit commands record a history entry; previews do not."""
        return True

    def __repr__(self) -> str:
        fields = ", ".join(f"{k.lstrip('_')}={v!r}" for k, v in vars(self).items())
        return f"{type(self).__name__}({fields})"


# ═════════════════════════════════════════════════════════════════
#  NODE COMMANDS
# ═════════════════════════════════════════════════════════════════

class AddNodeCommand(Command):
    """Append a node with the next free id at ``position``."""

    def __init__(self, position: Point, color: str = DEFAULT_NODE_COLOR):
        self._position = position
        self._color = color

    def execute(self, graph: Graph) -> CommandResult:
        new_graph = graph.add_node(self._position, self._color)
        node = new_graph.nodes[-1]
        return CommandResult(
            True,
            f"Node {node.node_id} added at ({node.x:g}, {node.y:g}).",
            new_graph,
            data={"node_id": node.node_id},
        )


class DeleteNodeCommand(Command):
    """Delete a node together with every edge touching it."""

    def __init__(self, node_id: int):
        self._node_id = node_id

    def execute(self, graph: Graph) -> CommandResult:
        if not graph.has_node(self._node_id):
            return CommandResult(False, f"Node {self._node_id} not found.", graph)

        removed_edges = graph.incident_edges(self._node_id)
        new_graph = graph.delete_node(self._node_id)
        return CommandResult(
            True,
            f"Node {self._node_id} deleted with {len(removed_edges)} edge(s).",
            new_graph,
            data={"node_id": self._node_id, "removed_edges": removed_edges},
        )


class MoveNodeCommand(Command):
    """
    Move a node during a drag.

    Preview command: applied to the live graph on every pointer move,
    never recorded.
    """

    def __init__(self, node_id: int, x: float, y: float):
        self._node_id = node_id
        self._x = x
        self._y = y

    @property
    def records_history(self) -> bool:
        return False

    def execute(self, graph: Graph) -> CommandResult:
        if not graph.has_node(self._node_id):
            return CommandResult(False, f"Node {self._node_id} not found.", graph)
        return CommandResult(
            True,
            f"Node {self._node_id} moved to ({self._x:g}, {self._y:g}).",
            graph.move_node(self._node_id, self._x, self._y),
        )


class CommitDragCommand(Command):
    """
    Finish a drag.

    Changes nothing by itself; it exists so that the state accumulated by
    the preceding ``MoveNodeCommand`` previews is recorded as one entry.
    A release without motion is still a commit and records.
    """

    def __init__(self, node_id: int):
        self._node_id = node_id

    def execute(self, graph: Graph) -> CommandResult:
        node = graph.get_node(self._node_id)
        if node is None:
            return CommandResult(False, f"Node {self._node_id} not found.", graph)
        return CommandResult(
            True,
            f"Node {self._node_id} released at ({node.x:g}, {node.y:g}).",
            graph,
        )


class SetNodeColorCommand(Command):
    """Recolor a node."""

    def __init__(self, node_id: int, color: str):
        self._node_id = node_id
        self._color = color

    def execute(self, graph: Graph) -> CommandResult:
        node = graph.get_node(self._node_id)
        if node is None:
            return CommandResult(False, f"Node {self._node_id} not found.", graph)
        return CommandResult(
            True,
            f"Node {self._node_id} colored {self._color}.",
            graph.set_node_color(self._node_id, self._color),
        )


# ═════════════════════════════════════════════════════════════════
#  EDGE COMMANDS
# ═════════════════════════════════════════════════════════════════

class AddEdgeCommand(Command):
    """Connect two distinct nodes that are not connected yet."""

    def __init__(self, start: int, end: int):
        self._start = start
        self._end = end

    def execute(self, graph: Graph) -> CommandResult:
        if self._start == self._end:
            return CommandResult(False, "An edge needs two distinct nodes.", graph)
        for node_id in (self._start, self._end):
            if not graph.has_node(node_id):
                return CommandResult(False, f"Node {node_id} not found.", graph)

        new_graph = graph.add_edge(self._start, self._end)
        if new_graph.edges == graph.edges:
            return CommandResult(
                False,
                f"Nodes {self._start} and {self._end} are already connected.",
                graph,
            )
        return CommandResult(
            True,
            f"Edge {self._start} -- {self._end} created.",
            new_graph,
            data={"edge": new_graph.edges[-1]},
        )


class DeleteEdgeCommand(Command):
    """Remove one exact edge value."""

    def __init__(self, edge: Edge):
        self._edge = edge

    def execute(self, graph: Graph) -> CommandResult:
        if self._edge not in graph.edges:
            return CommandResult(False, f"{self._edge!r} not found.", graph)
        return CommandResult(
            True,
            f"Edge {self._edge.start} -- {self._edge.end} deleted.",
            graph.delete_edge(self._edge),
        )
