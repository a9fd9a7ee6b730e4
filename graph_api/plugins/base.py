"""
    Abstract base classes for plugins.
    Defines the "Contract" that all plugins must follow.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional

from ..models.graph import Graph, Nodes, Edges


@dataclass(frozen=True)
class RenderView:
    """
    Everything a renderer needs to draw one frame.

    Attributes:
        graph_id:         Id of the graph being shown.
        nodes:            Nodes of the current graph.
        edges:            Edges of the current graph.
        selected_node_id: Node drawn with an outline, if any.
    """
    graph_id: int
    nodes: Nodes
    edges: Edges
    selected_node_id: Optional[int] = None


class RendererPlugin(ABC):
    """
        Abstract base class for Renderer plugins.
        Pattern: Strategy (for drawing).
    """

    @abstractmethod
    def get_plugin_name(self) -> str:
        """
            Returns the unique name of the renderer.
            Example: "Canvas Renderer"
        """
        pass

    @abstractmethod
    def render(self, view: RenderView) -> Any:
        """
        Main method: Draws the current graph.

        Called after every change to nodes, edges, selection or the current
        graph.  Each edge is drawn as a line between its endpoints, each node
        as a filled disc of ``NODE_RADIUS`` in its color, and the selected
        node gets an outline ``SELECTED_OUTLINE_WIDTH`` wide.

        Args:
            view: Snapshot of the state to draw.

        Returns:
            Whatever the renderer produces (ignored by the editor).
        """
        pass


class GraphComparatorPlugin(ABC):
    """
        Abstract base class for graph comparison plugins.
        The editor only resolves the two graphs; what "comparing" means is
        entirely up to the plugin.
    """

    @abstractmethod
    def get_plugin_name(self) -> str:
        pass

    @abstractmethod
    def compare(self, first: Graph, second: Graph) -> Any:
        """
        Args:
            first:  Graph resolved from the first id.
            second: Graph resolved from the second id.

        Returns:
            Plugin-defined comparison result.
        """
        pass
