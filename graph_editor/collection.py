"""
    GraphCollection — every graph of an editing session and which one is current.

    Design Patterns applied
    ───────────────────────
    • Repository         – graphs are kept in creation order and looked up
                           by id; callers never touch the list directly.
    • Observer (hooks)   – ``graph_added`` / ``graph_switched`` /
                           ``graph_updated`` events let the history and the
                           interaction controller react to graph changes.

    A single-graph editor is simply a collection holding one graph.
"""
import logging
from typing import Any, Callable, Dict, Iterator, List, Optional

from graph_api.constants import FIRST_ID
from graph_api.models.graph import Graph
from graph_api.plugins.base import GraphComparatorPlugin

from .config import EditorConfig
from .exceptions import InvariantViolation, UnknownGraph

logger = logging.getLogger(__name__)


# ── Observer event types ─────────────────────────────────────────
EVENT_GRAPH_ADDED = "graph_added"
EVENT_GRAPH_SWITCHED = "graph_switched"
EVENT_GRAPH_UPDATED = "graph_updated"


class GraphCollection:
    """
    Ordered graphs plus ``current_graph_id``.

    Invariant: ``current_graph_id`` always names a stored graph.
    """

    def __init__(self, config: Optional[EditorConfig] = None,
                 comparator: Optional[GraphComparatorPlugin] = None):
        """
        Create a collection holding one seeded graph (id 1), which is current.

        Args:
            config:     Supplies the viewport center and default node color
                        for seed nodes.
            comparator: Plugin backing ``compare()``; optional.
        """
        self._config = config or EditorConfig()
        self._comparator = comparator
        self._graphs: List[Graph] = [self._seed_graph(FIRST_ID)]
        self._current_graph_id: int = FIRST_ID

        # Observer listeners: event_name → [callback, ...]
        self._listeners: Dict[str, List[Callable[..., Any]]] = {}

    # ── Properties ───────────────────────────────────────────────

    @property
    def current_graph_id(self) -> int:
        return self._current_graph_id

    @property
    def graph_ids(self) -> List[int]:
        return [g.graph_id for g in self._graphs]

    @property
    def comparator(self) -> Optional[GraphComparatorPlugin]:
        return self._comparator

    @comparator.setter
    def comparator(self, value: Optional[GraphComparatorPlugin]) -> None:
        self._comparator = value

    # ── Lookup ───────────────────────────────────────────────────

    def get(self, graph_id: int) -> Optional[Graph]:
        """Get a graph by its id, or None."""
        for graph in self._graphs:
            if graph.graph_id == graph_id:
                return graph
        return None

    def current(self) -> Graph:
        """
        Return the current graph.

        Raises:
            InvariantViolation: If ``current_graph_id`` names no graph.
        """
        graph = self.get(self._current_graph_id)
        if graph is None:
            raise InvariantViolation(
                f"Current graph id {self._current_graph_id} not in collection "
                f"{self.graph_ids}."
            )
        return graph

    # ── Mutation ─────────────────────────────────────────────────

    def update(self, graph: Graph) -> None:
        """
        Replace the stored graph that has the same id.

        Raises:
            UnknownGraph: If no stored graph has that id.
        """
        for i, stored in enumerate(self._graphs):
            if stored.graph_id == graph.graph_id:
                self._graphs[i] = graph
                self._notify(EVENT_GRAPH_UPDATED, graph=graph)
                return
        raise UnknownGraph(graph.graph_id)

    def add_graph(self) -> Graph:
        """
        Append a new seeded graph and make it current.

        Returns:
            The new graph.
        """
        new_id = max(self.graph_ids) + 1 if self._graphs else FIRST_ID
        graph = self._seed_graph(new_id)
        self._graphs.append(graph)
        self._current_graph_id = new_id
        logger.info("Graph %d added (%d graphs)", new_id, len(self._graphs))
        self._notify(EVENT_GRAPH_ADDED, graph=graph)
        self._notify(EVENT_GRAPH_SWITCHED, graph=graph)
        return graph

    def switch_to(self, graph_id: int) -> Graph:
        """
        Make ``graph_id`` the current graph.

        Raises:
            UnknownGraph: If the id does not exist.
        """
        graph = self.get(graph_id)
        if graph is None:
            raise UnknownGraph(graph_id)
        self._current_graph_id = graph_id
        logger.info("Switched to graph %d", graph_id)
        self._notify(EVENT_GRAPH_SWITCHED, graph=graph)
        return graph

    def compare(self, first_id: int, second_id: int) -> Any:
        """
        Resolve two graphs and hand them to the comparator plugin.

        Returns:
            The comparator's result, or ``None`` if no comparator is set.

        Raises:
            UnknownGraph: If either id does not exist.
        """
        first = self.get(first_id)
        if first is None:
            raise UnknownGraph(first_id)
        second = self.get(second_id)
        if second is None:
            raise UnknownGraph(second_id)

        if self._comparator is None:
            logger.debug("No comparator configured; compare(%d, %d) skipped",
                         first_id, second_id)
            return None
        return self._comparator.compare(first, second)

    # ── Observer pattern ─────────────────────────────────────────

    def subscribe(self, event: str, callback: Callable[..., Any]) -> None:
        """
        Register a callback for a collection event.

        Events:
            - graph_added
            - graph_switched
            - graph_updated
        """
        self._listeners.setdefault(event, []).append(callback)

    def unsubscribe(self, event: str, callback: Callable[..., Any]) -> None:
        listeners = self._listeners.get(event, [])
        if callback in listeners:
            listeners.remove(callback)

    def _notify(self, event: str, **kwargs: Any) -> None:
        for cb in list(self._listeners.get(event, [])):
            cb(**kwargs)

    # ── Internal helpers ─────────────────────────────────────────

    def _seed_graph(self, graph_id: int) -> Graph:
        return Graph.seeded(graph_id, self._config.viewport_center,
                            self._config.default_node_color)

    # ── Dunder ───────────────────────────────────────────────────

    def __len__(self) -> int:
        return len(self._graphs)

    def __iter__(self) -> Iterator[Graph]:
        return iter(list(self._graphs))

    def __contains__(self, graph_id: int) -> bool:
        return self.get(graph_id) is not None

    def __repr__(self) -> str:
        return (
            f"GraphCollection(graphs={self.graph_ids}, "
            f"current={self._current_graph_id})"
        )
