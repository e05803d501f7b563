"""Bounded undo history of reversible grid edits."""

import logging
from collections import deque

from pydantic import ValidationError

from wleddraw.exceptions import StoredDataError
from wleddraw.models import ClearAllAction, DrawAction, HistoryAction, history_log_adapter

from .pixel_grid import PixelGrid

logger = logging.getLogger(__name__)

MAX_HISTORY_LENGTH = 50


class HistoryStack:
    """
    Undo log over a PixelGrid.

    record() pushes an action and discards the oldest one once the log
    holds more than ``capacity`` entries. undo() pops the newest action and
    applies its inverse. There is no redo.
    """

    def __init__(self, capacity: int = MAX_HISTORY_LENGTH):
        if capacity <= 0:
            raise ValueError("History capacity must be positive")
        self._capacity = capacity
        self._actions: deque[HistoryAction] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def can_undo(self) -> bool:
        return len(self._actions) > 0

    def __len__(self) -> int:
        return len(self._actions)

    def actions(self) -> list[HistoryAction]:
        """Recorded actions, oldest first."""
        return list(self._actions)

    def record(self, action: HistoryAction) -> None:
        """Push an action, evicting the oldest when over capacity."""
        if len(self._actions) == self._capacity:
            logger.debug("History full, discarding oldest action")
        self._actions.append(action)

    def record_draw(self, index: int, previous_color: str) -> None:
        self.record(DrawAction(index=index, previous_color=previous_color))

    def record_snapshot(self, cells: list[str]) -> None:
        self.record(ClearAllAction(previous_cells=tuple(cells)))

    def undo(self, grid: PixelGrid) -> HistoryAction | None:
        """
        Revert the most recent action on ``grid``.

        Returns:
            The action that was undone, or None when the history is empty
        """
        if not self._actions:
            return None

        action = self._actions.pop()
        if isinstance(action, DrawAction):
            if action.index < grid.size:
                grid.set(action.index, action.previous_color)
            else:
                # Recorded before the grid shrank
                logger.warning(f"Skipping undo of cell {action.index}: outside {grid.size}-cell grid")
        else:
            grid.replace(action.previous_cells)

        logger.debug(f"Undid {action.type} action ({len(self._actions)} left)")
        return action

    def clear(self) -> None:
        self._actions.clear()

    # =================================================================
    # Persistence
    # =================================================================

    def to_json(self) -> str:
        """Serialize the log, oldest first, using the stored field names."""
        return history_log_adapter.dump_json(list(self._actions), by_alias=True).decode("utf-8")

    def load_json(self, raw: str) -> None:
        """
        Replace the log with a serialized one.

        Only the newest ``capacity`` entries are kept.

        Raises:
            StoredDataError: If the data cannot be decoded (the log is left empty)
        """
        self._actions.clear()
        try:
            actions = history_log_adapter.validate_json(raw)
        except ValidationError as e:
            raise StoredDataError("history", raw, str(e)) from e
        self._actions.extend(actions)
