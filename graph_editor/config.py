"""
    Editor configuration — viewport, hit-testing, history and key bindings.

    A plain dataclass tree; construct it with keyword overrides and pass it
    to ``GraphEditor``.  Nothing here is read from the environment.
"""
from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional

from graph_api.constants import DEFAULT_NODE_COLOR, HIT_RADIUS
from graph_api.types import Point


@dataclass
class KeyBindings:
    """
    Key combos mapped to editor operations.

    A combo is written ``"ctrl+z"``, ``"ctrl+shift+z"``, ``"Backspace"``:
    modifiers (``ctrl``, ``shift``, ``alt``, ``meta``) joined with ``+`` and
    followed by the key.  Letter keys are matched case-insensitively; the
    shift modifier decides between undo and redo.

    Attributes:
        undo:   Combos that undo the last commit.
        redo:   Combos that redo the next undone commit.
        delete: Combos that delete the selected node.
    """
    undo: FrozenSet[str] = frozenset({"ctrl+z", "meta+z"})
    redo: FrozenSet[str] = frozenset({"ctrl+shift+z", "meta+shift+z", "ctrl+y"})
    delete: FrozenSet[str] = frozenset({"Backspace", "Delete"})


@dataclass
class EditorConfig:
    """
    Top-level configuration for the graph editor.

    Attributes:
        viewport_width:     Canvas width; new nodes appear at its center.
        viewport_height:    Canvas height.
        default_node_color: Fill color of new nodes.
        hit_radius:         Pointer distance (exclusive) that selects a node.
        max_history_depth:  How many snapshots the history keeps.
                            ``None`` means unbounded.
        key_bindings:       Keyboard shortcuts.
        renderer_names:     Entry-point names of renderer plugins to attach
                            on startup.
        comparator_name:    Entry-point name of the graph comparator plugin.
    """
    viewport_width: float = 800
    viewport_height: float = 600
    default_node_color: str = DEFAULT_NODE_COLOR
    hit_radius: float = HIT_RADIUS
    max_history_depth: Optional[int] = None
    key_bindings: KeyBindings = field(default_factory=KeyBindings)
    renderer_names: List[str] = field(default_factory=list)
    comparator_name: Optional[str] = None

    @property
    def viewport_center(self) -> Point:
        return self.viewport_width / 2, self.viewport_height / 2
