"""
    CommandProcessor — parses console lines and drives a ``GraphEditor``.

    Design Patterns
    ───────────────
    • Interpreter   – parses the console text into a bound handler call.
    • Facade        – single ``process(text)`` entry-point hides all parsing.

    The console reaches the same controller operations a UI would, so a
    script of ``down`` / ``move`` / ``up`` lines exercises exactly the
    interaction state machine, including hit-testing.
"""
from __future__ import annotations

import functools
import logging
import shlex
from typing import Callable, List, Optional

from ..commands import CommandResult
from ..editor import GraphEditor
from ..events import KeyEvent
from ..exceptions import CommandParseError, UnknownGraph

logger = logging.getLogger(__name__)

HELP_TEXT = """
Available commands:
───────────────────────────────────────────────────────
  node add                     Add a node at the viewport center.
  node move <id> <x> <y>       Move a node (one undo step).
  node color <id> <#hex>       Recolor a node.
  node delete <id>             Delete a node and its edges.

  edge add <a> <b>             Connect two nodes.
  edge delete <a> <b>          Remove the edge between two nodes.

  select <id>|none             Select a node or clear the selection.
  color <#hex>                 Recolor the selected node.
  delete                       Delete the selected node.
  arm                          Next click on another node creates an edge.

  down <x> <y>                 Pointer pressed at (x, y).
  move <x> <y>                 Pointer moved to (x, y).
  up                           Pointer released.
  key <combo>                  Key press, e.g. ctrl+z, ctrl+shift+z, Backspace.

  undo | redo                  Step through the history.

  graph add                    Create a graph and switch to it.
  graph switch <id>            Switch graphs (clears the history).
  graph compare <id1> <id2>    Run the installed graph comparator.

  list [nodes|edges|graphs]    List the current graph's contents.
  info                         Summary of the editor state.
  help                         Show this help text.
───────────────────────────────────────────────────────
""".strip()


class CommandProcessor:
    """
    Parses raw console input and runs it against an editor.

    Usage:
        processor = CommandProcessor(GraphEditor())
        result = processor.process("node add")
    """

    def __init__(self, editor: Optional[GraphEditor] = None):
        self._editor = editor or GraphEditor()

    @property
    def editor(self) -> GraphEditor:
        return self._editor

    # ── Public API ───────────────────────────────────────────────

    def process(self, text: str) -> CommandResult:
        """
        Parse and execute a single console line.

        Returns:
            ``CommandResult`` with success status, message and the current
            graph afterwards.
        """
        text = self._strip_comments(text).strip()
        if not text:
            return CommandResult(False, "Empty command. Type 'help' for usage.", self._editor.graph)

        logger.debug("Console: %s", text)
        try:
            action = self._parse(text)
        except CommandParseError as e:
            return CommandResult(False, f"Parse error: {e}", self._editor.graph)

        try:
            return action()
        except UnknownGraph as e:
            return CommandResult(False, str(e), self._editor.graph)
        except ValueError as e:
            return CommandResult(False, f"Invalid value: {e}", self._editor.graph)

    def run_script(self, lines) -> List[CommandResult]:
        """Process every line of an iterable, in order."""
        return [self.process(line) for line in lines]

    # ── Comment handling ────────────────────────────────────────

    @staticmethod
    def _strip_comments(text: str) -> str:
        """
        Strip inline comments: everything after an unquoted ``#`` that
        starts a word.  ``#`` inside a word (hex colors) is kept.

        Example:
            >>> CommandProcessor._strip_comments("node color 1 #FF0000  # red")
            'node color 1 #FF0000'
        """
        in_single = False
        in_double = False
        for i, ch in enumerate(text):
            if ch == "'" and not in_double:
                in_single = not in_single
            elif ch == '"' and not in_single:
                in_double = not in_double
            elif (ch == '#' and not in_single and not in_double
                  and (i == 0 or text[i - 1].isspace())
                  and (i + 1 == len(text) or not _is_hex_digit(text[i + 1]))):
                return text[:i].rstrip()
        return text

    # ── Parser ───────────────────────────────────────────────────

    def _parse(self, text: str) -> Callable[[], CommandResult]:
        """
        Parse raw console text into a zero-argument handler call.

        Raises:
            CommandParseError: If the text cannot be parsed.
        """
        try:
            tokens = shlex.split(text)
        except ValueError:
            tokens = text.split()

        if not tokens:
            raise CommandParseError("Empty command.")

        verb = tokens[0].lower()
        args = tokens[1:]
        bind = functools.partial

        # ── Single-word commands ──
        single = {
            "help": bind(self._ok, HELP_TEXT),
            "undo": self._undo,
            "redo": self._redo,
            "info": self._info,
            "up": self._pointer_up,
            "arm": self._arm,
            "delete": self._delete_selected,
        }
        if verb in single:
            self._no_args(args, verb)
            return single[verb]

        # ── Pointer ──
        if verb in ("down", "move"):
            x, y = self._floats(args, 2, f"{verb} <x> <y>")
            handler = self._pointer_down if verb == "down" else self._pointer_move
            return bind(handler, x, y)

        if verb == "key":
            if len(args) != 1:
                raise CommandParseError("Usage: key <combo>")
            try:
                event = KeyEvent.parse(args[0])
            except ValueError as e:
                raise CommandParseError(str(e))
            return bind(self._key, event)

        if verb == "select":
            if len(args) != 1:
                raise CommandParseError("Usage: select <id>|none")
            node_id = None if args[0].lower() == "none" else self._int(args[0], "node id")
            return bind(self._select, node_id)

        if verb == "color":
            if len(args) != 1:
                raise CommandParseError("Usage: color <#hex>")
            return bind(self._color_selected, args[0])

        if verb == "list":
            target = args[0].lower() if args else None
            if target not in (None, "nodes", "edges", "graphs"):
                raise CommandParseError(
                    f"Unknown list target: '{target}'. Use 'nodes', 'edges' or 'graphs'."
                )
            return bind(self._list, target)

        # ── node / edge / graph ──
        if verb in ("node", "edge", "graph"):
            if not args:
                raise CommandParseError(f"Usage: {verb} <action> ...")
            action, rest = args[0].lower(), args[1:]
            parser = getattr(self, f"_parse_{verb}")
            return parser(action, rest)

        raise CommandParseError(f"Unknown command: '{verb}'. Type 'help' for usage.")

    def _parse_node(self, action: str, rest: List[str]) -> Callable[[], CommandResult]:
        editor = self._editor
        if action == "add":
            self._no_args(rest, "node add")
            return editor.add_node
        if action == "move":
            if len(rest) != 3:
                raise CommandParseError("Usage: node move <id> <x> <y>")
            node_id = self._int(rest[0], "node id")
            x, y = self._floats(rest[1:], 2, "node move <id> <x> <y>")
            return functools.partial(editor.controller.move_node, node_id, x, y)
        if action == "color":
            if len(rest) != 2:
                raise CommandParseError("Usage: node color <id> <#hex>")
            return functools.partial(editor.controller.set_node_color,
                                     self._int(rest[0], "node id"), rest[1])
        if action == "delete":
            if len(rest) != 1:
                raise CommandParseError("Usage: node delete <id>")
            return functools.partial(editor.controller.delete_node,
                                     self._int(rest[0], "node id"))
        raise CommandParseError(f"Unknown node action: '{action}'.")

    def _parse_edge(self, action: str, rest: List[str]) -> Callable[[], CommandResult]:
        if action not in ("add", "delete"):
            raise CommandParseError(f"Unknown edge action: '{action}'.")
        if len(rest) != 2:
            raise CommandParseError(f"Usage: edge {action} <a> <b>")
        a = self._int(rest[0], "node id")
        b = self._int(rest[1], "node id")
        if action == "add":
            return functools.partial(self._editor.controller.add_edge, a, b)
        return functools.partial(self._delete_edge_between, a, b)

    def _parse_graph(self, action: str, rest: List[str]) -> Callable[[], CommandResult]:
        if action == "add":
            self._no_args(rest, "graph add")
            return self._add_graph
        if action == "switch":
            if len(rest) != 1:
                raise CommandParseError("Usage: graph switch <id>")
            return functools.partial(self._switch_graph, self._int(rest[0], "graph id"))
        if action == "compare":
            if len(rest) != 2:
                raise CommandParseError("Usage: graph compare <id1> <id2>")
            return functools.partial(self._compare,
                                     self._int(rest[0], "graph id"),
                                     self._int(rest[1], "graph id"))
        raise CommandParseError(f"Unknown graph action: '{action}'.")

    # ── Token helpers ────────────────────────────────────────────

    @staticmethod
    def _no_args(tokens: List[str], usage: str) -> None:
        if tokens:
            raise CommandParseError(f"Usage: {usage} (takes no arguments, got {tokens})")

    @staticmethod
    def _int(token: str, what: str) -> int:
        try:
            return int(token)
        except ValueError:
            raise CommandParseError(f"Invalid {what}: '{token}'.")

    @staticmethod
    def _floats(tokens: List[str], count: int, usage: str) -> List[float]:
        if len(tokens) != count:
            raise CommandParseError(f"Usage: {usage}")
        try:
            return [float(t) for t in tokens]
        except ValueError:
            raise CommandParseError(f"Coordinates must be numbers: {tokens}")

    # ── Handlers ─────────────────────────────────────────────────

    def _ok(self, message: str, **data) -> CommandResult:
        return CommandResult(True, message, self._editor.graph, data=data)

    def _fail(self, message: str) -> CommandResult:
        return CommandResult(False, message, self._editor.graph)

    def _undo(self) -> CommandResult:
        if self._editor.undo():
            return self._ok(f"Undo (history {self._editor.history.index}/{len(self._editor.history) - 1}).")
        return self._fail("Nothing to undo.")

    def _redo(self) -> CommandResult:
        if self._editor.redo():
            return self._ok(f"Redo (history {self._editor.history.index}/{len(self._editor.history) - 1}).")
        return self._fail("Nothing to redo.")

    def _pointer_down(self, x: float, y: float) -> CommandResult:
        edges_before = len(self._editor.graph.edges)
        hit = self._editor.controller.pointer_down(x, y)
        if hit is None:
            return self._ok(f"No node at ({x:g}, {y:g}); selection cleared.", hit=None)
        if len(self._editor.graph.edges) > edges_before:
            return self._ok(f"Edge created to node {hit}.", hit=hit)
        return self._ok(f"Node {hit} selected.", hit=hit)

    def _pointer_move(self, x: float, y: float) -> CommandResult:
        if self._editor.controller.pointer_move(x, y):
            return self._ok(f"Dragged to ({x:g}, {y:g}).")
        return self._fail("Not dragging.")

    def _pointer_up(self) -> CommandResult:
        if self._editor.controller.pointer_up():
            return self._ok("Released.")
        return self._fail("Not dragging.")

    def _key(self, event: KeyEvent) -> CommandResult:
        if self._editor.controller.key_down(event):
            return self._ok(f"Key '{event.combo}' handled.")
        return self._fail(f"Key '{event.combo}' not bound.")

    def _select(self, node_id: Optional[int]) -> CommandResult:
        if self._editor.controller.select(node_id):
            return self._ok(f"Node {node_id} selected.")
        if node_id is None:
            return self._ok("Selection cleared.")
        return self._fail(f"Node {node_id} not found.")

    def _arm(self) -> CommandResult:
        if self._editor.arm_edge_mode():
            return self._ok("Edge mode armed: click another node.")
        return self._fail("Select a node in a graph with at least two nodes first.")

    def _delete_selected(self) -> CommandResult:
        result = self._editor.delete_selected()
        return result if result is not None else self._fail("No node selected.")

    def _color_selected(self, color: str) -> CommandResult:
        result = self._editor.set_selected_color(color)
        return result if result is not None else self._fail("No node selected.")

    def _delete_edge_between(self, a: int, b: int) -> CommandResult:
        for edge in self._editor.graph.edges:
            if edge.connects_nodes(a, b):
                return self._editor.delete_edge(edge)
        return self._fail(f"No edge between {a} and {b}.")

    def _add_graph(self) -> CommandResult:
        graph = self._editor.add_graph()
        return self._ok(f"Graph {graph.graph_id} added.", graph_id=graph.graph_id)

    def _switch_graph(self, graph_id: int) -> CommandResult:
        self._editor.switch_graph(graph_id)
        return self._ok(f"Switched to graph {graph_id}.")

    def _compare(self, first: int, second: int) -> CommandResult:
        outcome = self._editor.compare_graphs(first, second)
        if outcome is None:
            return self._ok(f"Graphs {first} and {second} resolved; no comparator installed.")
        return self._ok(f"Compared graphs {first} and {second}: {outcome}", result=outcome)

    def _info(self) -> CommandResult:
        editor = self._editor
        graph = editor.graph
        controller = editor.controller
        msg = (
            f"Graph {graph.graph_id} of {editor.collection.graph_ids}: "
            f"{graph.get_number_of_nodes()} node(s), "
            f"{graph.get_number_of_edges()} edge(s); "
            f"state={controller.state.value}, "
            f"selected={controller.selected_node_id}, "
            f"history={editor.history.index}/{len(editor.history) - 1}"
        )
        return self._ok(msg)

    def _list(self, target: Optional[str]) -> CommandResult:
        graph = self._editor.graph
        lines: List[str] = []

        if target in (None, "nodes"):
            lines.append(f"── Nodes ({graph.get_number_of_nodes()}) ──")
            selected = self._editor.controller.selected_node_id
            for node in graph.nodes:
                marker = " *" if node.node_id == selected else ""
                lines.append(f"  [{node.node_id}] ({node.x:g}, {node.y:g}) {node.color}{marker}")

        if target in (None, "edges"):
            lines.append(f"── Edges ({graph.get_number_of_edges()}) ──")
            for edge in graph.edges:
                lines.append(f"  {edge.start} -- {edge.end}")

        if target == "graphs":
            lines.append(f"── Graphs ({len(self._editor.collection)}) ──")
            for button in self._editor.graph_buttons():
                marker = " *" if button.is_current else ""
                lines.append(f"  {button.label}{marker}")

        return self._ok("\n".join(lines))


def _is_hex_digit(ch: str) -> bool:
    return ch in "0123456789abcdefABCDEF"
