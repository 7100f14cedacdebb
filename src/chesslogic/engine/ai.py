"""The computer opponent: searches for and plays Black's move."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from chesslogic.core.enums import Color, PieceType
from chesslogic.engine.minimax import MinimaxSearchEngine
from chesslogic.engine.search import IEngine, SearchLimits, SearchResult

if TYPE_CHECKING:
    from chesslogic.game.state import GameState

_LOGGER = logging.getLogger(__name__)

AI_COLOR = Color.BLACK


class ChessAI:
    """Plays Black's moves on a :class:`GameState`.

    Args:
        state: Game to play in.  The search runs on ``state.position``
            directly and leaves it exactly as it found it.
        limits: Search depth.  Defaults to :class:`SearchLimits` ``()``.
        engine: Search implementation (default :class:`MinimaxSearchEngine`).
    """

    __slots__ = ("_state", "_limits", "_engine", "last_result")

    def __init__(
        self,
        state: GameState,
        limits: SearchLimits | None = None,
        engine: IEngine | None = None,
    ) -> None:
        self._state = state
        self._limits = limits if limits is not None else SearchLimits()
        self._engine = engine if engine is not None else MinimaxSearchEngine()
        self.last_result: SearchResult | None = None

    @property
    def limits(self) -> SearchLimits:
        return self._limits

    @limits.setter
    def limits(self, value: SearchLimits) -> None:
        self._limits = value

    def make_move(self) -> bool:
        """Search and play Black's best move.

        Does nothing unless it is Black's turn in a running game.  Any failure
        during search is logged and reported as ``False`` (no move made).
        """
        state = self._state
        if state.current_turn != AI_COLOR or state.is_game_over:
            return False

        try:
            result = self._engine.search(state.position, self._limits)
            self.last_result = result
            move = result.best_move
            if move is None:
                _LOGGER.debug("No move found (score %d)", result.score)
                return False

            if not state.try_make_move(move.from_sq, move.to_sq):
                _LOGGER.warning("Engine move %s was rejected", move)
                return False

            promo_sq = state.pending_promotion
            if promo_sq is not None and state.board[promo_sq].color == AI_COLOR:
                state.promote_pawn(promo_sq, PieceType.QUEEN)

            _LOGGER.debug(
                "AI played %s (score %d, depth %d, %d nodes, %d cutoffs)",
                move,
                result.score,
                result.depth,
                result.nodes,
                result.cutoffs,
            )
            return True
        except Exception:
            _LOGGER.exception("AI failed to make a move")
            return False
