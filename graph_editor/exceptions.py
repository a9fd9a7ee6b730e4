# graph_editor/exceptions.py

class UnknownGraph(Exception):
    """Raised when a graph id passed to switch / compare / update does not exist."""

    def __init__(self, graph_id):
        self.graph_id = graph_id
        super().__init__(f"Graph '{graph_id}' not found.")


class InvariantViolation(Exception):
    """Raised when the collection's current graph id names no graph (a bug)."""
    pass


class CommandParseError(Exception):
    """Raised when console input is empty or malformed."""
    pass
