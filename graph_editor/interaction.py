"""
    InteractionController — turns pointer and keyboard input into commands.

    Design Patterns
    ───────────────
    • State     – ``IDLE`` / ``DRAGGING`` / ``EDGE_ARMED`` decide what a
                  pointer-down means.
    • Invoker   – every mutation goes through ``dispatch()``, which stores
                  the new graph and records commit commands in the history.
    • Observer  – listeners are told once per handled input whenever the
                  graph, the current graph or the selection changed.

    The controller subscribes to an ``InputSurface`` only between
    ``start()`` and ``stop()`` (or inside a ``with`` block), so there is no
    ambient global key handler.

    Stale ids never raise: a selection or drag that points at a node which
    no longer exists is dropped wherever it is noticed.
"""
from __future__ import annotations

import functools
import logging
from contextlib import contextmanager
from enum import Enum
from typing import Any, Callable, Iterator, List, Optional, Set

from graph_api.models.edge import Edge
from graph_api.models.graph import Graph
from graph_api.models.node import Node
from graph_api.models.snapshot import Snapshot

from .collection import EVENT_GRAPH_SWITCHED, GraphCollection
from .commands import (
    AddEdgeCommand,
    AddNodeCommand,
    Command,
    CommandResult,
    CommitDragCommand,
    DeleteEdgeCommand,
    DeleteNodeCommand,
    MoveNodeCommand,
    SetNodeColorCommand,
)
from .config import EditorConfig
from .events import EventType, InputSurface, KeyEvent, PointerEvent, PointerKind
from .history import HistoryStack

logger = logging.getLogger(__name__)

# Minimum node count for edge creation to be offered
MIN_NODES_FOR_EDGE = 2


class InteractionState(Enum):
    IDLE = "idle"
    DRAGGING = "dragging"
    EDGE_ARMED = "edge_armed"


def _notifies_change(method: Callable) -> Callable:
    """Fire the change listeners once after the outermost handled call."""

    @functools.wraps(method)
    def wrapper(self: 'InteractionController', *args, **kwargs):
        self._depth += 1
        before = self._view_key() if self._depth == 1 else None
        try:
            return method(self, *args, **kwargs)
        finally:
            self._depth -= 1
            if self._depth == 0 and self._view_key() != before:
                self._notify_change()

    return wrapper


class InteractionController:
    """
    State machine over the current graph of a ``GraphCollection``.

    Usage:
        controller = InteractionController(collection, history, config)
        with controller.attached(surface):
            surface.pointer_down(400, 300)
            surface.pointer_move(50, 50)
            surface.pointer_up()
    """

    def __init__(self, collection: GraphCollection, history: HistoryStack,
                 config: Optional[EditorConfig] = None):
        self._collection = collection
        self._history = history
        self._config = config or EditorConfig()

        self._selected_node_id: Optional[int] = None
        self._dragging_node_id: Optional[int] = None
        self._edge_creation_armed: bool = False

        bindings = self._config.key_bindings
        self._undo_keys = self._normalize(bindings.undo)
        self._redo_keys = self._normalize(bindings.redo)
        self._delete_keys = self._normalize(bindings.delete)

        self._surface: Optional[InputSurface] = None
        self._listeners: List[Callable[..., Any]] = []
        self._depth = 0

        self._collection.subscribe(EVENT_GRAPH_SWITCHED, self._on_graph_switched)

    # ── Properties ───────────────────────────────────────────────

    @property
    def graph(self) -> Graph:
        """The graph being edited."""
        return self._collection.current()

    @property
    def history(self) -> HistoryStack:
        return self._history

    @property
    def state(self) -> InteractionState:
        if self._dragging_node_id is not None:
            return InteractionState.DRAGGING
        if self._edge_creation_armed:
            return InteractionState.EDGE_ARMED
        return InteractionState.IDLE

    @property
    def selected_node_id(self) -> Optional[int]:
        return self._selected_node_id

    @property
    def selected_node(self) -> Optional[Node]:
        return self.graph.get_node(self._selected_node_id)

    @property
    def dragging_node_id(self) -> Optional[int]:
        return self._dragging_node_id

    @property
    def edge_creation_armed(self) -> bool:
        return self._edge_creation_armed

    @property
    def can_arm_edge_mode(self) -> bool:
        """A node is selected and the graph has at least two nodes."""
        graph = self.graph
        return (graph.has_node(self._selected_node_id)
                and graph.get_number_of_nodes() >= MIN_NODES_FOR_EDGE)

    @property
    def is_attached(self) -> bool:
        return self._surface is not None

    # ── Invoker ──────────────────────────────────────────────────

    def dispatch(self, command: Command) -> CommandResult:
        """
        Execute a command against the current graph.

        Successful commands replace the live graph.  Successful commit
        commands then record exactly one snapshot, taken after the graph has
        been stored, even when the state did not change.  Failed commands
        record nothing.
        """
        graph = self.graph
        result = command.execute(graph)
        if not result.success:
            logger.debug("Graph %d: %r ignored (%s)", graph.graph_id, command, result.message)
            return result

        if result.graph is not None and result.graph is not graph:
            self._collection.update(result.graph)

        if command.records_history:
            self._history.record(Snapshot.of(self.graph))
            logger.info("Graph %d: %s", graph.graph_id, result.message)
        else:
            logger.debug("Graph %d: %s", graph.graph_id, result.message)
        return result

    # ── Pointer input ────────────────────────────────────────────

    @_notifies_change
    def pointer_down(self, x: float, y: float) -> Optional[int]:
        """
        Hit-test at ``(x, y)`` and act on the result.

        Returns:
            Id of the node that was hit, or ``None``.
        """
        if self._dragging_node_id is not None:
            # The previous release never arrived; end that drag where it is.
            self.pointer_up()

        hit = self.graph.node_at((x, y), self._config.hit_radius)
        logger.debug("Hit-test at (%g, %g): %s", x, y, hit.node_id if hit else None)

        if hit is None:
            self._selected_node_id = None
            self._edge_creation_armed = False
            return None

        if (self._edge_creation_armed
                and self._selected_node_id is not None
                and hit.node_id != self._selected_node_id):
            self.dispatch(AddEdgeCommand(self._selected_node_id, hit.node_id))
            self._edge_creation_armed = False
            return hit.node_id

        self._selected_node_id = hit.node_id
        self._dragging_node_id = hit.node_id
        return hit.node_id

    @_notifies_change
    def pointer_move(self, x: float, y: float) -> bool:
        """
        Drag the grabbed node to ``(x, y)``.  Not recorded.

        Returns:
            ``True`` if a node moved.
        """
        if self._dragging_node_id is None:
            return False
        result = self.dispatch(MoveNodeCommand(self._dragging_node_id, x, y))
        if not result.success:
            self._dragging_node_id = None
            self._prune_stale()
        return result.success

    @_notifies_change
    def pointer_up(self) -> bool:
        """
        Release the dragged node, recording the drag as one history entry.

        Returns:
            ``True`` if a drag was in progress.
        """
        node_id = self._dragging_node_id
        if node_id is None:
            return False
        self._dragging_node_id = None
        self.dispatch(CommitDragCommand(node_id))
        self._prune_stale()
        return True

    # ── Selection-panel actions ──────────────────────────────────

    @_notifies_change
    def select(self, node_id: Optional[int]) -> bool:
        """
        Select a node by id (``None`` clears the selection).

        Returns:
            ``True`` if a node is selected afterwards.
        """
        self._edge_creation_armed = False
        if node_id is not None and self.graph.has_node(node_id):
            self._selected_node_id = node_id
            return True
        self._selected_node_id = None
        return False

    @_notifies_change
    def arm_edge_mode(self) -> bool:
        """
        Make the next pointer-down on another node create an edge.

        Returns:
            ``True`` if edge creation is armed.
        """
        self._prune_stale()
        if not self.can_arm_edge_mode:
            logger.debug("Edge mode not available (selected=%s, nodes=%d)",
                         self._selected_node_id, self.graph.get_number_of_nodes())
            return False
        self._edge_creation_armed = True
        return True

    @_notifies_change
    def add_node(self) -> CommandResult:
        """Add a node at the viewport center."""
        return self.dispatch(AddNodeCommand(self._config.viewport_center,
                                            self._config.default_node_color))

    @_notifies_change
    def delete_selected(self) -> Optional[CommandResult]:
        """
        Delete the selected node and its edges.

        Returns:
            The command result, or ``None`` if nothing was selected.
        """
        node_id = self._selected_node_id
        if node_id is None:
            return None
        result = self.dispatch(DeleteNodeCommand(node_id))
        self._selected_node_id = None
        self._dragging_node_id = None
        self._edge_creation_armed = False
        return result

    @_notifies_change
    def set_selected_color(self, color: str) -> Optional[CommandResult]:
        """
        Recolor the selected node.

        Raises:
            ValueError: If ``color`` is not a hex color.
        """
        self._prune_stale()
        if self._selected_node_id is None:
            return None
        return self.dispatch(SetNodeColorCommand(self._selected_node_id, color))

    @_notifies_change
    def move_node(self, node_id: int, x: float, y: float) -> CommandResult:
        """Move a node in one step: a preview move committed right away."""
        result = self.dispatch(MoveNodeCommand(node_id, x, y))
        if result.success:
            self.dispatch(CommitDragCommand(node_id))
        return result

    @_notifies_change
    def set_node_color(self, node_id: int, color: str) -> CommandResult:
        return self.dispatch(SetNodeColorCommand(node_id, color))

    @_notifies_change
    def delete_node(self, node_id: int) -> CommandResult:
        result = self.dispatch(DeleteNodeCommand(node_id))
        self._prune_stale()
        return result

    @_notifies_change
    def add_edge(self, start: int, end: int) -> CommandResult:
        return self.dispatch(AddEdgeCommand(start, end))

    @_notifies_change
    def delete_edge(self, edge: Edge) -> CommandResult:
        return self.dispatch(DeleteEdgeCommand(edge))

    # ── History ──────────────────────────────────────────────────

    @_notifies_change
    def undo(self) -> bool:
        """
        Overwrite the live graph with the previous history entry.

        Returns:
            ``False`` if there was nothing to undo.
        """
        return self._restore(self._history.undo())

    @_notifies_change
    def redo(self) -> bool:
        """
        Overwrite the live graph with the next history entry.

        Returns:
            ``False`` if there was nothing to redo.
        """
        return self._restore(self._history.redo())

    def _restore(self, entry: Optional[Snapshot]) -> bool:
        if entry is None:
            return False
        # An in-progress drag belongs to the state being replaced.
        self._dragging_node_id = None
        self._collection.update(entry.apply_to(self.graph))
        self._prune_stale()
        return True

    # ── Graphs ───────────────────────────────────────────────────

    @_notifies_change
    def add_graph(self) -> Graph:
        return self._collection.add_graph()

    @_notifies_change
    def switch_graph(self, graph_id: int) -> Graph:
        """
        Raises:
            UnknownGraph: If the id does not exist.
        """
        return self._collection.switch_to(graph_id)

    def _on_graph_switched(self, graph: Graph) -> None:
        self._history.reset(Snapshot.of(graph))
        self._selected_node_id = None
        self._dragging_node_id = None
        self._edge_creation_armed = False

    # ── Keyboard input ───────────────────────────────────────────

    @_notifies_change
    def key_down(self, event: KeyEvent) -> bool:
        """
        Handle a key press.

        Returns:
            ``True`` if the key mapped to an operation; the event's default
            action is then prevented.
        """
        combo = event.combo
        if combo in self._undo_keys:
            self.undo()
        elif combo in self._redo_keys:
            self.redo()
        elif combo in self._delete_keys and self._selected_node_id is not None:
            self.delete_selected()
        else:
            return False
        event.prevent_default()
        return True

    # ── Input-surface lifecycle ──────────────────────────────────

    def start(self, surface: InputSurface) -> None:
        """
        Subscribe to ``surface``.

        Raises:
            RuntimeError: If already attached to a surface.
        """
        if self._surface is not None:
            raise RuntimeError("Controller is already attached to an input surface.")
        surface.subscribe(EventType.POINTER, self.handle_pointer)
        surface.subscribe(EventType.KEY, self.handle_key)
        self._surface = surface
        logger.debug("Controller attached to %r", surface)

    def stop(self) -> None:
        """Unsubscribe from the current surface (no-op if detached)."""
        if self._surface is None:
            return
        self._surface.unsubscribe(EventType.POINTER, self.handle_pointer)
        self._surface.unsubscribe(EventType.KEY, self.handle_key)
        logger.debug("Controller detached from %r", self._surface)
        self._surface = None

    @contextmanager
    def attached(self, surface: InputSurface) -> Iterator['InteractionController']:
        """Subscribe to ``surface`` for the duration of a ``with`` block."""
        self.start(surface)
        try:
            yield self
        finally:
            self.stop()

    def handle_pointer(self, event: PointerEvent) -> None:
        if event.kind is PointerKind.DOWN:
            self.pointer_down(event.x, event.y)
        elif event.kind is PointerKind.MOVE:
            if self.pointer_move(event.x, event.y):
                event.prevent_default()
        elif event.kind is PointerKind.UP:
            self.pointer_up()

    def handle_key(self, event: KeyEvent) -> None:
        self.key_down(event)

    # ── Observer ─────────────────────────────────────────────────

    def subscribe(self, callback: Callable[..., Any]) -> None:
        """Register ``callback(controller)`` for state changes."""
        self._listeners.append(callback)

    def unsubscribe(self, callback: Callable[..., Any]) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)

    def _notify_change(self) -> None:
        for cb in list(self._listeners):
            cb(self)

    # ── Internal helpers ─────────────────────────────────────────

    def _view_key(self):
        return (self.graph, self._selected_node_id, self._edge_creation_armed)

    def _prune_stale(self) -> None:
        graph = self.graph
        if self._selected_node_id is not None and not graph.has_node(self._selected_node_id):
            logger.debug("Selection %s is stale; cleared", self._selected_node_id)
            self._selected_node_id = None
        if self._dragging_node_id is not None and not graph.has_node(self._dragging_node_id):
            self._dragging_node_id = None
        if self._selected_node_id is None:
            self._edge_creation_armed = False

    @staticmethod
    def _normalize(combos) -> Set[str]:
        return {KeyEvent.parse(c).combo for c in combos}

    def __repr__(self) -> str:
        return (
            f"InteractionController(state={self.state.value}, "
            f"graph={self._collection.current_graph_id}, "
            f"selected={self._selected_node_id})"
        )
