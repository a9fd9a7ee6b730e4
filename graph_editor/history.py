"""
    HistoryStack — linear undo / redo over graph snapshots.

    Design Pattern: Memento
    ───────────────────────
    The stack stores immutable ``Snapshot`` values of the current graph.
    A cursor (``index``) points at the entry matching the live graph;
    entries before it can be undone, entries after it can be redone.

    History is linear: recording after an undo discards the undone
    future.  The stack lives for one editing session and is reset to a
    single entry whenever the current graph changes.
"""
import logging
from typing import List, Optional

from graph_api.models.snapshot import Snapshot

logger = logging.getLogger(__name__)


class HistoryStack:
    """
    Ordered snapshots plus a cursor.

    Invariant: ``0 <= index < len(self)`` at all times.
    """

    def __init__(self, initial: Snapshot, max_depth: Optional[int] = None):
        """
        Args:
            initial:   Entry for the state the session starts from.
            max_depth: Maximum number of entries kept; the oldest ones are
                       dropped beyond it.  ``None`` means unbounded.
        """
        if max_depth is not None and max_depth < 1:
            raise ValueError("max_depth must be at least 1")
        self._entries: List[Snapshot] = [initial]
        self._index: int = 0
        self._max_depth = max_depth

    # ── Properties ───────────────────────────────────────────────

    @property
    def index(self) -> int:
        return self._index

    @property
    def current(self) -> Snapshot:
        """The entry under the cursor."""
        return self._entries[self._index]

    @property
    def can_undo(self) -> bool:
        return self._index > 0

    @property
    def can_redo(self) -> bool:
        return self._index < len(self._entries) - 1

    @property
    def entries(self) -> List[Snapshot]:
        return list(self._entries)

    # ── Operations ───────────────────────────────────────────────

    def record(self, entry: Snapshot) -> None:
        """
        Truncate everything after the cursor, append ``entry`` and move the
        cursor onto it.
        """
        discarded = len(self._entries) - self._index - 1
        del self._entries[self._index + 1:]
        self._entries.append(entry)

        if self._max_depth is not None and len(self._entries) > self._max_depth:
            del self._entries[:len(self._entries) - self._max_depth]

        self._index = len(self._entries) - 1
        if discarded:
            logger.debug("History: recorded entry, %d future entr%s discarded",
                         discarded, "y" if discarded == 1 else "ies")
        else:
            logger.debug("History: recorded entry %d", self._index)

    def undo(self) -> Optional[Snapshot]:
        """
        Step back one entry.

        Returns:
            The entry now under the cursor, or ``None`` if there is
            nothing to undo.
        """
        if not self.can_undo:
            logger.warning("History: nothing to undo.")
            return None

        self._index -= 1
        logger.info("History: undo (cursor %d/%d)", self._index, len(self._entries) - 1)
        return self._entries[self._index]

    def redo(self) -> Optional[Snapshot]:
        """
        Step forward one entry.

        Returns:
            The entry now under the cursor, or ``None`` if there is
            nothing to redo.
        """
        if not self.can_redo:
            logger.warning("History: nothing to redo.")
            return None

        self._index += 1
        logger.info("History: redo (cursor %d/%d)", self._index, len(self._entries) - 1)
        return self._entries[self._index]

    def reset(self, entry: Snapshot) -> None:
        """Replace the whole stack with ``[entry]``."""
        self._entries = [entry]
        self._index = 0
        logger.info("History: reset")

    # ── Dunder ───────────────────────────────────────────────────

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"HistoryStack(entries={len(self._entries)}, index={self._index})"
