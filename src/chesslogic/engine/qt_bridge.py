"""Qt bridge that runs the minimax search on a worker thread.

Typical wiring from a GUI::

    worker = EngineWorker(max_depth=3)
    worker.moveToThread(thread)
    ai = AIPlayer(
        on_request_move=lambda pos: request.emit(pos, next_id()),
        on_cancel=worker.cancel,
    )
    worker.best_move_ready.connect(lambda _id, move, *_: ctrl.submit_move(
        move.from_sq, move.to_sq))

Every request carries an id so a GUI can drop answers to positions that
are no longer on the board.
"""

from __future__ import annotations

import logging
import threading

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from chesslogic.core.position import Position
from chesslogic.engine.minimax import MinimaxSearchEngine
from chesslogic.engine.search import DEFAULT_DEPTH, IEngine, SearchLimits, SearchResult

_LOGGER = logging.getLogger(__name__)


class EngineWorker(QObject):
    """Computes engine replies for positions handed over by the GUI thread.

    Signals (all carry the request id first):
        best_move_ready(id, move, score, depth, nodes)
        search_no_move(id, score, depth, nodes): side to move is mated or
            stalemated.
        search_cancelled(id)
        search_error(id, message)
    """

    best_move_ready = pyqtSignal(int, object, int, int, int)
    search_no_move = pyqtSignal(int, int, int, int)
    search_cancelled = pyqtSignal(int)
    search_error = pyqtSignal(int, str)

    def __init__(
        self,
        *,
        max_depth: int = DEFAULT_DEPTH,
        engine: IEngine | None = None,
    ) -> None:
        super().__init__()
        self._engine: IEngine = engine if engine is not None else MinimaxSearchEngine()
        self._limits = SearchLimits(max_depth=max_depth)
        self._stop = threading.Event()

    @property
    def limits(self) -> SearchLimits:
        return self._limits

    @pyqtSlot(int)
    def set_limits(self, max_depth: int) -> None:
        """New depth for the next request; a running search keeps its own."""
        self._limits = SearchLimits(max_depth=max_depth)

    @pyqtSlot()
    def cancel(self) -> None:
        """Ask the running search to stop at its next node."""
        self._stop.set()

    @pyqtSlot(object, int)
    def request_move(self, position_obj: object, request_id: int) -> None:
        if not isinstance(position_obj, Position):
            self.search_error.emit(request_id, "Engine received invalid position")
            return

        # The caller keeps playing on its own position; search a snapshot.
        snapshot = position_obj.copy()
        limits = self._limits
        self._stop.clear()
        _LOGGER.debug("Search %d started at depth %d", request_id, limits.max_depth)
        try:
            result = self._engine.search(snapshot, limits, is_cancelled=self._stop.is_set)
        except Exception as exc:
            _LOGGER.exception("Search %d failed", request_id)
            self.search_error.emit(request_id, str(exc))
            return
        self._publish(request_id, result)

    def _publish(self, request_id: int, result: SearchResult) -> None:
        if result.cancelled or self._stop.is_set():
            _LOGGER.debug("Search %d cancelled after %d nodes", request_id, result.nodes)
            self.search_cancelled.emit(request_id)
        elif result.best_move is None:
            self.search_no_move.emit(request_id, result.score, result.depth, result.nodes)
        else:
            self.best_move_ready.emit(
                request_id, result.best_move, result.score, result.depth, result.nodes
            )
