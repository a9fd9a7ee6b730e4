# tests/cli_test/test_cli.py
"""
Console tests — command processor parsing, node / edge / pointer / key
commands, history, graphs, listing and the ``main()`` entry point.
"""
import pytest

from graph_api.models.edge import Edge
from graph_api.models.node import Node

from graph_editor.cli import HELP_TEXT, main
from graph_editor.cli.command_processor import CommandProcessor
from graph_editor.editor import GraphEditor


@pytest.fixture
def processor(editor) -> CommandProcessor:
    return CommandProcessor(editor)


@pytest.fixture
def loaded_processor(loaded_editor) -> CommandProcessor:
    return CommandProcessor(loaded_editor)


def _run(processor, *lines):
    return processor.run_script(lines)


# ═════════════════════════════════════════════════════════════════
#  Parsing
# ═════════════════════════════════════════════════════════════════

class TestParsing:

    @pytest.mark.parametrize("text", ["", "   ", "# only a comment"])
    def test_empty(self, processor, text):
        result = processor.process(text)
        assert not result.success
        assert "Empty command" in result.message

    def test_unknown_command(self, processor):
        result = processor.process("explode")
        assert not result.success
        assert "Unknown command: 'explode'" in result.message

    @pytest.mark.parametrize("text, fragment", [
        ("node", "Usage: node"),
        ("node fly", "Unknown node action"),
        ("node move 1 2", "Usage: node move"),
        ("node move x 2 3", "Invalid node id"),
        ("node move 1 a b", "Coordinates must be numbers"),
        ("edge add 1", "Usage: edge add"),
        ("edge cut 1 2", "Unknown edge action"),
        ("graph switch", "Usage: graph switch"),
        ("graph switch two", "Invalid graph id"),
        ("graph merge", "Unknown graph action"),
        ("down 1", "Usage: down"),
        ("key", "Usage: key"),
        ("key hyper+z", "Unknown modifier"),
        ("select", "Usage: select"),
        ("list everything", "Unknown list target"),
        ("undo #abandon", "Usage: undo"),
        ("redo now", "Usage: redo"),
        ("help me", "Usage: help"),
        ("node add extra", "Usage: node add"),
        ("graph add 2", "Usage: graph add"),
    ])
    def test_parse_errors(self, processor, text, fragment):
        result = processor.process(text)
        assert not result.success
        assert result.message.startswith("Parse error:")
        assert fragment in result.message

    def test_strip_comments_keeps_hex_colors(self):
        assert CommandProcessor._strip_comments("node color 1 #FF0000  # red") == "node color 1 #FF0000"
        assert CommandProcessor._strip_comments("color #abc") == "color #abc"
        assert CommandProcessor._strip_comments("undo # go back") == "undo"

    def test_strip_comments_respects_quotes(self):
        assert CommandProcessor._strip_comments("key '# x'") == "key '# x'"

    def test_verbs_case_insensitive(self, processor):
        assert processor.process("NODE ADD").success

    def test_result_carries_graph(self, processor, editor):
        result = processor.process("node add")
        assert result.graph is editor.graph

    def test_default_editor(self):
        processor = CommandProcessor()
        assert isinstance(processor.editor, GraphEditor)


# ═════════════════════════════════════════════════════════════════
#  Node and edge commands
# ═════════════════════════════════════════════════════════════════

class TestNodeCommands:

    def test_add(self, processor, editor):
        result = processor.process("node add")
        assert result.success
        assert editor.graph.get_node(2) == Node(2, 400, 300)

    def test_move(self, loaded_processor, loaded_editor):
        assert loaded_processor.process("node move 3 10.5 -4").success
        assert loaded_editor.graph.get_node(3).position == (10.5, -4)
        assert len(loaded_editor.history) == 2

    def test_move_missing(self, loaded_processor):
        result = loaded_processor.process("node move 9 1 1")
        assert not result.success
        assert "Node 9 not found" in result.message

    def test_color(self, loaded_processor, loaded_editor):
        assert loaded_processor.process("node color 1 #00FF00").success
        assert loaded_editor.graph.get_node(1).color == "#00FF00"

    def test_invalid_color(self, loaded_processor):
        result = loaded_processor.process("node color 1 green")
        assert not result.success
        assert result.message.startswith("Invalid value:")

    def test_delete(self, loaded_processor, loaded_editor):
        assert loaded_processor.process("node delete 2").success
        assert loaded_editor.graph.edges == (Edge(4, 5),)

    def test_selected_node_shortcuts(self, loaded_processor, loaded_editor):
        _run(loaded_processor, "select 5", "color #fff")
        assert loaded_editor.graph.get_node(5).color == "#fff"
        assert loaded_processor.process("delete").success
        assert not loaded_editor.graph.has_node(5)

    def test_shortcuts_need_selection(self, loaded_processor):
        assert not loaded_processor.process("delete").success
        assert "No node selected" in loaded_processor.process("color #fff").message


class TestEdgeCommands:

    def test_add(self, loaded_processor, loaded_editor):
        assert loaded_processor.process("edge add 1 5").success
        assert Edge(1, 5) in loaded_editor.graph.edges

    def test_add_duplicate_reversed(self, loaded_processor):
        result = loaded_processor.process("edge add 2 1")
        assert not result.success
        assert "already connected" in result.message

    def test_self_loop(self, loaded_processor):
        assert not loaded_processor.process("edge add 3 3").success

    def test_delete_in_either_order(self, loaded_processor, loaded_editor):
        assert loaded_processor.process("edge delete 3 2").success
        assert loaded_editor.graph.edges == (Edge(1, 2), Edge(4, 5))

    def test_delete_missing(self, loaded_processor):
        result = loaded_processor.process("edge delete 1 5")
        assert not result.success
        assert "No edge between 1 and 5" in result.message


# ═════════════════════════════════════════════════════════════════
#  Pointer, selection and keys
# ═════════════════════════════════════════════════════════════════

class TestPointerCommands:

    def test_drag_script(self, processor, editor):
        results = _run(processor, "down 400 300", "move 50 60", "move 55 65", "up")
        assert all(r.success for r in results)
        assert results[0].data == {"hit": 1}
        assert editor.graph.get_node(1).position == (55, 65)
        assert len(editor.history) == 2

    def test_down_miss(self, processor):
        result = processor.process("down 0 0")
        assert result.success
        assert "No node at (0, 0)" in result.message

    def test_move_and_up_without_drag(self, processor):
        assert not processor.process("move 1 1").success
        assert not processor.process("up").success

    def test_edge_by_clicking(self, loaded_processor, loaded_editor):
        results = _run(loaded_processor, "select 1", "arm", "down 300 100")
        assert all(r.success for r in results)
        assert results[-1].message == "Edge created to node 3."
        assert Edge(1, 3) in loaded_editor.graph.edges

    def test_arm_unavailable(self, processor):
        processor.process("select 1")
        result = processor.process("arm")
        assert not result.success

    def test_select(self, loaded_processor, loaded_editor):
        assert loaded_processor.process("select 2").success
        assert loaded_editor.controller.selected_node_id == 2
        assert loaded_processor.process("select none").message == "Selection cleared."
        assert not loaded_processor.process("select 42").success

    def test_keys(self, processor, editor):
        processor.process("node add")
        assert processor.process("key ctrl+z").success
        assert editor.graph.get_number_of_nodes() == 1
        assert processor.process("key ctrl+shift+z").success
        assert editor.graph.get_number_of_nodes() == 2
        result = processor.process("key ctrl+q")
        assert not result.success
        assert "not bound" in result.message


# ═════════════════════════════════════════════════════════════════
#  History and graphs
# ═════════════════════════════════════════════════════════════════

class TestHistoryCommands:

    def test_undo_redo(self, processor, editor):
        processor.process("node add")
        assert processor.process("undo").success
        assert editor.graph.get_number_of_nodes() == 1
        assert processor.process("redo").success
        assert editor.graph.get_number_of_nodes() == 2

    def test_nothing_to_undo(self, processor):
        assert processor.process("undo").message == "Nothing to undo."
        assert processor.process("redo").message == "Nothing to redo."


class TestGraphCommands:

    def test_add_and_switch(self, processor, editor):
        result = processor.process("graph add")
        assert result.success
        assert result.data == {"graph_id": 2}
        assert processor.process("graph switch 1").success
        assert editor.collection.current_graph_id == 1
        assert processor.process("undo").message == "Nothing to undo."

    def test_switch_unknown(self, processor):
        result = processor.process("graph switch 5")
        assert not result.success
        assert result.message == "Graph '5' not found."

    def test_compare_without_comparator(self, processor):
        processor.process("graph add")
        result = processor.process("graph compare 1 2")
        assert result.success
        assert "no comparator installed" in result.message

    def test_compare_with_comparator(self, comparator):
        processor = CommandProcessor(GraphEditor(comparator=comparator))
        _run(processor, "node add", "graph add")
        result = processor.process("graph compare 1 2")
        assert result.data == {"result": 1}

    def test_compare_unknown(self, processor):
        assert not processor.process("graph compare 1 9").success


# ═════════════════════════════════════════════════════════════════
#  Listing, info, help
# ═════════════════════════════════════════════════════════════════

class TestReporting:

    def test_list_nodes(self, loaded_processor):
        loaded_processor.process("select 3")
        text = loaded_processor.process("list nodes").message
        assert "── Nodes (5) ──" in text
        assert "[3] (300, 100) #FF0000 *" in text
        assert "Edges" not in text

    def test_list_edges(self, loaded_processor):
        text = loaded_processor.process("list edges").message
        assert "1 -- 2" in text
        assert "4 -- 5" in text

    def test_list_default(self, loaded_processor):
        text = loaded_processor.process("list").message
        assert "Nodes" in text and "Edges" in text

    def test_list_graphs(self, processor):
        processor.process("graph add")
        text = processor.process("list graphs").message
        assert "Graph 1" in text
        assert "Graph 2 *" in text

    def test_info(self, loaded_processor):
        msg = loaded_processor.process("info").message
        assert "Graph 1 of [1]" in msg
        assert "5 node(s), 3 edge(s)" in msg
        assert "state=idle" in msg

    def test_help(self, processor):
        result = processor.process("help")
        assert result.success
        assert result.message == HELP_TEXT
        assert "graph compare" in result.message


# ═════════════════════════════════════════════════════════════════
#  Entry point
# ═════════════════════════════════════════════════════════════════

class TestMain:

    def test_script(self, tmp_path, capsys):
        script = tmp_path / "edit.txt"
        script.write_text(
            "# build a triangle\n"
            "node add\n"
            "node move 2 100 100\n"
            "node add\n"
            "edge add 1 2\n"
            "edge add 2 3\n"
            "list edges\n"
        )
        assert main([str(script)]) == 0
        out = capsys.readouterr().out
        assert "Node 2 added" in out
        assert "2 -- 3" in out

    def test_script_failure_exit_code(self, tmp_path):
        script = tmp_path / "bad.txt"
        script.write_text("graph switch 9\n")
        assert main([str(script)]) == 1

    def test_repl(self, monkeypatch, capsys):
        lines = iter(["node add", "", "info", "quit"])
        monkeypatch.setattr("builtins.input", lambda prompt="": next(lines))
        assert main(["--width", "200", "--height", "100"]) == 0
        out = capsys.readouterr().out
        assert "Node 2 added at (100, 50)." in out
        assert "2 node(s)" in out

    def test_repl_eof(self, monkeypatch):
        def _eof(prompt=""):
            raise EOFError
        monkeypatch.setattr("builtins.input", _eof)
        assert main([]) == 0
