"""
Graph Editor — core package.

Public API:
    GraphEditor           – editing session facade
    GraphCollection       – the graphs of a session and the current one
    HistoryStack          – linear undo / redo over snapshots
    InteractionController – pointer / keyboard state machine
    EditorConfig          – top-level configuration
    InputSurface          – pointer and keyboard event source
"""
from .config import EditorConfig, KeyBindings
from .collection import GraphCollection
from .history import HistoryStack
from .events import InputSurface, KeyEvent, PointerEvent, PointerKind
from .interaction import InteractionController, InteractionState
from .editor import GraphEditor, GraphButton, SelectionPanel
from .exceptions import UnknownGraph, InvariantViolation, CommandParseError
from .plugin_loader import (
    PluginLoader,
    create_renderer_loader,
    create_comparator_loader,
)

__all__ = [
    'GraphEditor',
    'GraphButton',
    'SelectionPanel',
    'GraphCollection',
    'HistoryStack',
    'InteractionController',
    'InteractionState',
    'EditorConfig',
    'KeyBindings',
    'InputSurface',
    'KeyEvent',
    'PointerEvent',
    'PointerKind',
    'UnknownGraph',
    'InvariantViolation',
    'CommandParseError',
    'PluginLoader',
    'create_renderer_loader',
    'create_comparator_loader',
]
