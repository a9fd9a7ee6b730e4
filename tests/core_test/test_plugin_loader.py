# tests/core_test/test_plugin_loader.py
"""
PluginLoader tests — entry-point discovery with a patched ``entry_points``.
"""
import importlib.metadata
import logging

import pytest

from graph_api.plugins.base import GraphComparatorPlugin, RendererPlugin

from graph_editor import plugin_loader
from graph_editor.config import EditorConfig
from graph_editor.editor import GraphEditor
from graph_editor.plugin_loader import (
    COMPARATOR_EP_GROUP,
    RENDERER_EP_GROUP,
    create_comparator_loader,
    create_renderer_loader,
)


class _TextRenderer(RendererPlugin):

    def get_plugin_name(self) -> str:
        return "text"

    def render(self, view):
        return f"{len(view.nodes)} nodes"


class _SizeComparator(GraphComparatorPlugin):

    def get_plugin_name(self) -> str:
        return "size"

    def compare(self, first, second):
        return first.get_number_of_edges() == second.get_number_of_edges()


class _NotAPlugin:
    pass


class _CrashingRenderer(_TextRenderer):

    def __init__(self):
        raise RuntimeError("display unavailable")


class _FakeEntryPoint:

    def __init__(self, name, target):
        self.name = name
        self._target = target

    def load(self):
        if isinstance(self._target, Exception):
            raise self._target
        return self._target


_REGISTRY = {
    RENDERER_EP_GROUP: [
        _FakeEntryPoint("text", _TextRenderer),
        _FakeEntryPoint("bogus", _NotAPlugin),
        _FakeEntryPoint("crashing", _CrashingRenderer),
        _FakeEntryPoint("missing", ImportError("no module named 'canvas'")),
    ],
    COMPARATOR_EP_GROUP: [
        _FakeEntryPoint("size", _SizeComparator),
    ],
}


@pytest.fixture
def fake_entry_points(monkeypatch):
    calls = []

    def entry_points(group=None):
        calls.append(group)
        return list(_REGISTRY.get(group, []))

    monkeypatch.setattr(importlib.metadata, "entry_points", entry_points)
    return calls


# ═════════════════════════════════════════════════════════════════
#  Discovery
# ═════════════════════════════════════════════════════════════════

class TestPluginLoader:

    def test_loads_valid_plugins_only(self, fake_entry_points):
        loader = create_renderer_loader()
        plugins = loader.load_all()
        assert list(plugins) == ["text"]
        assert isinstance(plugins["text"], _TextRenderer)

    def test_bad_plugins_logged(self, fake_entry_points, caplog):
        with caplog.at_level(logging.WARNING, logger="graph_editor.plugin_loader"):
            create_renderer_loader().load_all()
        assert "'bogus' does not subclass RendererPlugin" in caplog.text
        assert "Failed to load plugin 'missing'" in caplog.text
        assert "Failed to load plugin 'crashing': display unavailable" in caplog.text

    def test_lookup(self, fake_entry_points):
        loader = create_renderer_loader()
        assert loader.get("nope") is None
        assert loader.get_names() == ["text"]

    def test_scans_once(self, fake_entry_points):
        loader = create_comparator_loader()
        loader.get("size")
        loader.get_names()
        assert fake_entry_points == [COMPARATOR_EP_GROUP]

    def test_empty_group(self, fake_entry_points):
        loader = plugin_loader.PluginLoader(RendererPlugin, "graph_editor.nothing")
        assert loader.load_all() == {}
        assert repr(loader) == (
            "PluginLoader(base=RendererPlugin, group='graph_editor.nothing', loaded=0)"
        )


# ═════════════════════════════════════════════════════════════════
#  Editor wiring
# ═════════════════════════════════════════════════════════════════

class TestEditorPlugins:

    def test_renderers_by_name(self, fake_entry_points):
        editor = GraphEditor(EditorConfig(renderer_names=["text"]))
        assert [r.get_plugin_name() for r in editor.renderers] == ["text"]

    def test_comparator_by_name(self, fake_entry_points):
        editor = GraphEditor(EditorConfig(comparator_name="size"))
        editor.add_graph()
        assert editor.compare_graphs(1, 2) is True

    def test_explicit_comparator_wins(self, fake_entry_points, comparator):
        editor = GraphEditor(EditorConfig(comparator_name="size"), comparator=comparator)
        assert editor.collection.comparator is comparator
        assert fake_entry_points == []
