# tests/conftest.py
"""
Shared test fixtures.
Stub graph: five nodes on a row, a path 1-2-3 plus a 4-5 edge.
Node 3 is red; the default viewport is 800x600, so its center is (400, 300).
"""
import pytest

from graph_api.models.edge import Edge
from graph_api.models.graph import Graph
from graph_api.models.node import Node
from graph_api.plugins.base import GraphComparatorPlugin, RendererPlugin

from graph_editor.config import EditorConfig
from graph_editor.editor import GraphEditor
from graph_editor.events import InputSurface


CENTER = (400.0, 300.0)

# ── Node definitions ─────────────────────────────────────────────
_NODES = [
    (1, 100, 100, "#0000FF"),
    (2, 200, 100, "#0000FF"),
    (3, 300, 100, "#FF0000"),
    (4, 100, 300, "#0000FF"),
    (5, 200, 300, "#00FF00"),
]

# ── Edge definitions (start, end) ────────────────────────────────
_EDGES = [
    (1, 2),
    (2, 3),
    (4, 5),
]


def _build_graph(graph_id: int = 1) -> Graph:
    nodes = tuple(Node(i, x, y, color) for i, x, y, color in _NODES)
    edges = tuple(Edge(a, b) for a, b in _EDGES)
    return Graph(graph_id, nodes, edges)


class RecordingRenderer(RendererPlugin):
    """Renderer that keeps every view it was asked to draw."""

    def __init__(self):
        self.views = []

    def get_plugin_name(self) -> str:
        return "recording"

    def render(self, view):
        self.views.append(view)

    @property
    def last(self):
        return self.views[-1]


class CountingComparator(GraphComparatorPlugin):
    """Comparator returning the node-count difference."""

    def get_plugin_name(self) -> str:
        return "counting"

    def compare(self, first, second):
        return first.get_number_of_nodes() - second.get_number_of_nodes()


# ── Pytest fixtures ──────────────────────────────────────────────

@pytest.fixture
def stub_graph() -> Graph:
    """Five nodes, three edges."""
    return _build_graph()


@pytest.fixture
def config() -> EditorConfig:
    return EditorConfig()


@pytest.fixture
def renderer() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture
def editor(renderer) -> GraphEditor:
    """Fresh editor: graph 1 with its seed node at the center."""
    return GraphEditor(renderers=[renderer])


@pytest.fixture
def loaded_editor(editor, stub_graph) -> GraphEditor:
    """Editor whose current graph holds the stub graph, history reset on it."""
    editor.collection.update(stub_graph)
    editor.collection.switch_to(stub_graph.graph_id)
    return editor


@pytest.fixture
def surface() -> InputSurface:
    return InputSurface()


@pytest.fixture
def comparator() -> CountingComparator:
    return CountingComparator()


@pytest.fixture
def renderer_factory():
    """Build extra recording renderers inside a test."""
    return RecordingRenderer
