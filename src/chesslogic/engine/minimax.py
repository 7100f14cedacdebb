"""Fixed-depth minimax search with alpha-beta pruning."""

from __future__ import annotations

from time import sleep

from chesslogic.core.enums import Color
from chesslogic.core.move import Move
from chesslogic.core.move_generator import MoveGenerator
from chesslogic.core.movement import is_castling_attempt
from chesslogic.core.position import Position
from chesslogic.engine.evaluation import PIECE_VALUES, evaluate, is_center
from chesslogic.engine.search import CancelCheck, IEngine, SearchLimits, SearchResult

_INF_SCORE = 1_000_000
_CAPTURE_VICTIM_FACTOR = 10
_CASTLING_BONUS = 12
_CHECK_BONUS = 5
_CENTER_BONUS = 2
_YIELD_EVERY_NODES = 4096


def _never_cancelled() -> bool:
    return False


class MinimaxSearchEngine(IEngine):
    """Plain minimax over legal moves, Black maximizing and White minimizing.

    Scores come from :func:`~chesslogic.engine.evaluation.evaluate` and are
    Black-positive.  The root picks the first move reaching the best score in
    move-ordering order, so results are deterministic.
    """

    __slots__ = ("_cancel_check", "_nodes", "_cutoffs", "_last_yield_nodes", "_stopped")

    def __init__(self) -> None:
        self._nodes = 0
        self._cutoffs = 0
        self._last_yield_nodes = 0
        self._cancel_check: CancelCheck = _never_cancelled
        self._stopped = False

    @property
    def nodes(self) -> int:
        return self._nodes

    def search(
        self,
        position: Position,
        limits: SearchLimits,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchResult:
        if limits.max_depth <= 0:
            raise ValueError("Search depth must be >= 1")

        self._nodes = 0
        self._cutoffs = 0
        self._last_yield_nodes = 0
        self._stopped = False
        self._cancel_check = is_cancelled or _never_cancelled

        root_moves = MoveGenerator(position).generate_legal_moves()
        if not root_moves:
            return SearchResult(None, evaluate(position), 0, self._nodes)

        maximizing = position.side_to_move == Color.BLACK
        best_move: Move | None = None
        best_score = -_INF_SCORE if maximizing else _INF_SCORE
        alpha = -_INF_SCORE
        beta = _INF_SCORE

        for move in self.order_moves(position, root_moves):
            if best_move is not None and self._should_stop():
                break

            undo = position.make_move(move)
            assert undo is not None
            try:
                score = self._minimax(position, limits.max_depth - 1, alpha, beta)
            finally:
                position.unmake_move(undo)

            # Strict comparison: ties keep the first move seen.
            if maximizing:
                if score > best_score:
                    best_score = score
                    best_move = move
                alpha = max(alpha, score)
            else:
                if score < best_score:
                    best_score = score
                    best_move = move
                beta = min(beta, score)

        return SearchResult(
            best_move,
            best_score,
            0 if self._stopped else limits.max_depth,
            self._nodes,
            self._cutoffs,
            cancelled=self._stopped,
        )

    def _minimax(self, position: Position, depth: int, alpha: int, beta: int) -> int:
        self._nodes += 1
        if depth <= 0 or self._should_stop():
            return evaluate(position)

        moves = MoveGenerator(position).generate_legal_moves()
        if not moves:
            return evaluate(position)

        if position.side_to_move == Color.BLACK:
            best = -_INF_SCORE
            for move in self.order_moves(position, moves):
                score = self._child_score(position, move, depth, alpha, beta)
                best = max(best, score)
                alpha = max(alpha, score)
                if beta <= alpha:
                    self._cutoffs += 1
                    break
            return best

        best = _INF_SCORE
        for move in self.order_moves(position, moves):
            score = self._child_score(position, move, depth, alpha, beta)
            best = min(best, score)
            beta = min(beta, score)
            if beta <= alpha:
                self._cutoffs += 1
                break
        return best

    def _child_score(
        self,
        position: Position,
        move: Move,
        depth: int,
        alpha: int,
        beta: int,
    ) -> int:
        undo = position.make_move(move)
        assert undo is not None
        try:
            return self._minimax(position, depth - 1, alpha, beta)
        finally:
            position.unmake_move(undo)

    def _should_stop(self) -> bool:
        if self._nodes - self._last_yield_nodes >= _YIELD_EVERY_NODES:
            # Let a GUI thread run while we search in a worker.
            self._last_yield_nodes = self._nodes
            sleep(0.001)
        if not self._stopped and self._cancel_check():
            self._stopped = True
        return self._stopped

    # ── Move ordering ────────────────────────────────────────────────────

    def order_moves(self, position: Position, moves: list[Move]) -> list[Move]:
        """Most promising moves first; equal scores keep their input order."""
        return sorted(
            moves,
            key=lambda move: self._move_order_score(position, move),
            reverse=True,
        )

    def _move_order_score(self, position: Position, move: Move) -> int:
        board = position.board
        moving_piece = board[move.from_sq]
        if moving_piece is None:
            return -_INF_SCORE

        score = 0
        victim = board[move.to_sq]
        if victim is not None:
            score += (
                _CAPTURE_VICTIM_FACTOR * PIECE_VALUES[victim.piece_type]
                - PIECE_VALUES[moving_piece.piece_type]
            )
        if is_castling_attempt(moving_piece, move.from_sq, move.to_sq):
            score += _CASTLING_BONUS
        if is_center(move.to_sq):
            score += _CENTER_BONUS
        if self._gives_check(position, move, moving_piece.color):
            score += _CHECK_BONUS
        return score

    @staticmethod
    def _gives_check(position: Position, move: Move, mover: Color) -> bool:
        undo = position.make_move(move)
        if undo is None:
            return False
        try:
            return MoveGenerator(position).is_in_check(mover.opposite)
        finally:
            position.unmake_move(undo)
