"""Legal move generation + check detection."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from chesslogic.core.enums import Color
from chesslogic.core.move import Move
from chesslogic.core.movement import candidate_targets, is_square_attacked, is_valid_move
from chesslogic.core.types import Square

if TYPE_CHECKING:
    from chesslogic.core.position import Position


class MoveGenerator:
    """Generates legal moves for a given :class:`Position`.

    The generator mutates the position via ``make_move`` / ``unmake_move``
    internally but always restores it before returning.
    """

    __slots__ = ("_pos", "_board")

    def __init__(self, position: Position) -> None:
        self._pos = position
        self._board = position.board

    # -- Public API ---------------------------------------------------------

    def generate_legal_moves(self, color: Color | None = None) -> list[Move]:
        """All strictly legal moves for *color* (default: side to move)."""
        return list(self._iter_legal_moves(color))

    def has_legal_move(self, color: Color | None = None) -> bool:
        """Whether *color* has at least one legal move."""
        return next(self._iter_legal_moves(color), None) is not None

    def generate_pseudo_legal_moves(self, color: Color | None = None) -> list[Move]:
        """Moves the piece rules allow (may leave own king in check)."""
        return list(self._iter_pseudo_legal_moves(color))

    def is_legal(self, move: Move) -> bool:
        """Piece rules allow *move* and it does not expose the mover's king."""
        piece = self._board.get_piece_at(move.from_sq)
        if piece is None:
            return False
        return self._leaves_king_safe(move, piece.color)

    # -- Attack detection (public) -----------------------------------------

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked by the opponent?

        A side without a king is never in check.
        """
        if not self._board.has_king(color):
            return False
        king_sq = self._board.king_square(color)
        return is_square_attacked(self._pos, king_sq, color.opposite)

    def is_square_attacked(self, sq: Square, by_color: Color) -> bool:
        """Is *sq* attacked by any piece of *by_color*?"""
        return is_square_attacked(self._pos, sq, by_color)

    # -- Internals -----------------------------------------------------------

    def _iter_pseudo_legal_moves(self, color: Color | None) -> Iterator[Move]:
        if color is None:
            color = self._pos.side_to_move
        # Snapshot: callers make/unmake between yields.
        for from_sq, piece in list(self._board.occupied()):
            if piece.color != color:
                continue
            for to_sq in candidate_targets(piece, from_sq):
                if is_valid_move(self._pos, from_sq, to_sq):
                    yield Move(from_sq, to_sq)

    def _iter_legal_moves(self, color: Color | None) -> Iterator[Move]:
        if color is None:
            color = self._pos.side_to_move
        for move in self._iter_pseudo_legal_moves(color):
            if self._leaves_king_safe(move, color):
                yield move

    def _leaves_king_safe(self, move: Move, color: Color) -> bool:
        undo = self._pos.make_move(move)
        if undo is None:
            return False
        try:
            return not self.is_in_check(color)
        finally:
            self._pos.unmake_move(undo)
