"""High-level chess rules: check, checkmate, stalemate, game result."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chesslogic.core.enums import Color, GameResult
from chesslogic.core.move_generator import MoveGenerator

if TYPE_CHECKING:
    from chesslogic.core.position import Position


class Rules:
    """Static rule-checker that operates on a :class:`Position`.

    Every query takes the colour explicitly; it defaults to the side to move.
    """

    @staticmethod
    def is_in_check(position: Position, color: Color | None = None) -> bool:
        gen = MoveGenerator(position)
        return gen.is_in_check(_side(position, color))

    @staticmethod
    def is_checkmate(position: Position, color: Color | None = None) -> bool:
        color = _side(position, color)
        gen = MoveGenerator(position)
        if not gen.is_in_check(color):
            return False
        return not gen.has_legal_move(color)

    @staticmethod
    def is_stalemate(position: Position, color: Color | None = None) -> bool:
        color = _side(position, color)
        gen = MoveGenerator(position)
        if gen.is_in_check(color):
            return False
        return not gen.has_legal_move(color)

    @staticmethod
    def game_result(position: Position) -> GameResult:
        """Result for the side to move: mate, stalemate or still playing."""
        side = position.side_to_move
        gen = MoveGenerator(position)
        if gen.has_legal_move(side):
            return GameResult.IN_PROGRESS
        if gen.is_in_check(side):
            return GameResult.BLACK_WINS if side == Color.WHITE else GameResult.WHITE_WINS
        return GameResult.DRAW  # stalemate


def _side(position: Position, color: Color | None) -> Color:
    return position.side_to_move if color is None else color
