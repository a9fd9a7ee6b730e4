"""
    GraphEditor — the editing session facade.

    Design Patterns applied
    ───────────────────────
    • Facade             – one object owns the graph collection, the history
                           stack and the interaction controller, and exposes
                           what the UI layer needs.
    • Strategy           – renderers and the graph comparator are plugins.
    • Observer (hooks)   – renderers are called after every change to the
                           graph, the selection or the current graph.

    The read-only views (``render_view``, ``selection_panel``,
    ``graph_buttons``) are what a UI binds its widgets to; every write goes
    through the controller.
"""
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterator, List, Optional

from graph_api.models.edge import Edge
from graph_api.models.graph import Graph
from graph_api.models.node import Node
from graph_api.models.snapshot import Snapshot
from graph_api.plugins.base import GraphComparatorPlugin, RendererPlugin, RenderView

from .collection import GraphCollection
from .commands import CommandResult
from .config import EditorConfig
from .events import InputSurface
from .history import HistoryStack
from .interaction import InteractionController
from .plugin_loader import create_comparator_loader, create_renderer_loader

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SelectionPanel:
    """
    What the selection panel shows for the selected node.

    Attributes:
        node:           The selected node.
        incident_edges: Edges touching it, each with its own delete control.
        can_arm_edge:   Whether the "add edge" button is enabled.
        edge_armed:     Whether edge creation is waiting for a target.
    """
    node: Node
    incident_edges: List[Edge]
    can_arm_edge: bool
    edge_armed: bool

    @property
    def color(self) -> str:
        return self.node.color


@dataclass(frozen=True)
class GraphButton:
    graph_id: int
    label: str
    is_current: bool


class GraphEditor:
    """
    Editing session over a collection of graphs.

    Usage:
        editor = GraphEditor(EditorConfig(viewport_width=1024))
        editor.add_renderer(my_renderer)
        with editor.attached(surface):
            ...
    """

    def __init__(self, config: Optional[EditorConfig] = None,
                 renderers: Optional[List[RendererPlugin]] = None,
                 comparator: Optional[GraphComparatorPlugin] = None):
        """
        Args:
            config:     Editor configuration.
            renderers:  Renderers to attach in addition to the entry-point
                        renderers named in ``config.renderer_names``.
            comparator: Graph comparator; if omitted and
                        ``config.comparator_name`` is set, it is loaded from
                        the installed plugins.

        Raises:
            ValueError: If a configured plugin name is not installed.
        """
        self._config = config or EditorConfig()
        self._renderers: List[RendererPlugin] = []

        if comparator is None and self._config.comparator_name:
            comparator = self._load_plugin(create_comparator_loader(),
                                           self._config.comparator_name)

        self._collection = GraphCollection(self._config, comparator)
        self._history = HistoryStack(Snapshot.of(self._collection.current()),
                                     self._config.max_history_depth)
        self._controller = InteractionController(self._collection, self._history,
                                                 self._config)
        self._controller.subscribe(self._on_change)

        if self._config.renderer_names:
            loader = create_renderer_loader()
            for name in self._config.renderer_names:
                self.add_renderer(self._load_plugin(loader, name))
        for renderer in renderers or []:
            self.add_renderer(renderer)

        logger.info("GraphEditor initialized (%d renderer(s)).", len(self._renderers))

    # ── Components ───────────────────────────────────────────────

    @property
    def config(self) -> EditorConfig:
        return self._config

    @property
    def collection(self) -> GraphCollection:
        return self._collection

    @property
    def history(self) -> HistoryStack:
        return self._history

    @property
    def controller(self) -> InteractionController:
        return self._controller

    @property
    def graph(self) -> Graph:
        """The current graph."""
        return self._collection.current()

    # ── Renderers ────────────────────────────────────────────────

    def add_renderer(self, renderer: RendererPlugin) -> None:
        """Attach a renderer and draw the current state with it."""
        self._renderers.append(renderer)
        self._render_with(renderer, self.render_view())

    def remove_renderer(self, renderer: RendererPlugin) -> None:
        if renderer in self._renderers:
            self._renderers.remove(renderer)

    @property
    def renderers(self) -> List[RendererPlugin]:
        return list(self._renderers)

    def refresh(self) -> None:
        """Redraw with every attached renderer."""
        view = self.render_view()
        for renderer in list(self._renderers):
            self._render_with(renderer, view)

    def _on_change(self, controller: InteractionController) -> None:
        self.refresh()

    @staticmethod
    def _render_with(renderer: RendererPlugin, view: RenderView) -> None:
        try:
            renderer.render(view)
        except Exception as exc:
            logger.error("Renderer '%s' failed: %s", renderer.get_plugin_name(), exc)

    # ── Views for the UI ─────────────────────────────────────────

    def render_view(self) -> RenderView:
        graph = self.graph
        return RenderView(graph.graph_id, graph.nodes, graph.edges,
                          self._controller.selected_node_id)

    def selection_panel(self) -> Optional[SelectionPanel]:
        """The panel contents, or ``None`` when no node is selected."""
        node = self._controller.selected_node
        if node is None:
            return None
        return SelectionPanel(
            node=node,
            incident_edges=self.graph.incident_edges(node.node_id),
            can_arm_edge=self._controller.can_arm_edge_mode,
            edge_armed=self._controller.edge_creation_armed,
        )

    def graph_buttons(self) -> List[GraphButton]:
        """One button per graph, in creation order."""
        current = self._collection.current_graph_id
        return [
            GraphButton(g.graph_id, f"Graph {g.graph_id}", g.graph_id == current)
            for g in self._collection
        ]

    # ── Operations (delegated to the controller) ─────────────────

    def add_node(self) -> CommandResult:
        return self._controller.add_node()

    def delete_selected(self) -> Optional[CommandResult]:
        return self._controller.delete_selected()

    def set_selected_color(self, color: str) -> Optional[CommandResult]:
        return self._controller.set_selected_color(color)

    def arm_edge_mode(self) -> bool:
        return self._controller.arm_edge_mode()

    def delete_edge(self, edge: Edge) -> CommandResult:
        return self._controller.delete_edge(edge)

    def undo(self) -> bool:
        return self._controller.undo()

    def redo(self) -> bool:
        return self._controller.redo()

    def add_graph(self) -> Graph:
        return self._controller.add_graph()

    def switch_graph(self, graph_id: int) -> Graph:
        """
        Raises:
            UnknownGraph: If the id does not exist.
        """
        return self._controller.switch_graph(graph_id)

    def compare_graphs(self, first_id: int, second_id: int) -> Any:
        """
        Raises:
            UnknownGraph: If either id does not exist.
        """
        return self._collection.compare(first_id, second_id)

    @contextmanager
    def attached(self, surface: InputSurface) -> Iterator['GraphEditor']:
        """Receive input from ``surface`` for the duration of a ``with`` block."""
        with self._controller.attached(surface):
            yield self

    # ── Internal helpers ─────────────────────────────────────────

    @staticmethod
    def _load_plugin(loader, name: str):
        plugin = loader.get(name)
        if plugin is None:
            raise ValueError(
                f"Plugin '{name}' not found. Available: {loader.get_names()}"
            )
        return plugin

    def __repr__(self) -> str:
        return (
            f"GraphEditor(graphs={len(self._collection)}, "
            f"current={self._collection.current_graph_id}, "
            f"history={len(self._history)}, renderers={len(self._renderers)})"
        )
