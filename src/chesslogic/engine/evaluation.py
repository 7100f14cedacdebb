"""Static evaluation: material, centre control and check threats.

Scores are from Black's point of view (Black is the engine's side):
positive is good for Black, negative good for White.
"""

from __future__ import annotations

from chesslogic.core.enums import Color, PieceType
from chesslogic.core.move_generator import MoveGenerator
from chesslogic.core.position import Position
from chesslogic.core.types import Square

PIECE_VALUES: dict[PieceType, int] = {
    PieceType.PAWN: 1,
    PieceType.KNIGHT: 3,
    PieceType.BISHOP: 3,
    PieceType.ROOK: 5,
    PieceType.QUEEN: 9,
    # Never summed: both kings are always on the board.
    PieceType.KING: 9999,
}

MATE_SCORE = 1000
CHECK_BONUS = 3
CENTER_BONUS = 1

CENTER_SQUARES: frozenset[Square] = frozenset(
    Square(f, r) for f in range(2, 6) for r in range(2, 6)
)


def _signed(color: Color, value: int) -> int:
    return value if color == Color.BLACK else -value


def is_center(sq: Square) -> bool:
    """Inside the central 4x4 block (c3–f6)."""
    return 2 <= sq[0] <= 5 and 2 <= sq[1] <= 5


def evaluate(position: Position) -> int:
    """Score *position* without searching.

    Checkmate of White is ``+MATE_SCORE``, of Black ``-MATE_SCORE``; a
    stalemated side on either colour scores 0.
    """
    gen = MoveGenerator(position)
    white_in_check = gen.is_in_check(Color.WHITE)
    black_in_check = gen.is_in_check(Color.BLACK)
    white_stuck = not gen.has_legal_move(Color.WHITE)
    black_stuck = not gen.has_legal_move(Color.BLACK)

    if white_in_check and white_stuck:
        return MATE_SCORE
    if black_in_check and black_stuck:
        return -MATE_SCORE
    if white_stuck or black_stuck:
        return 0

    score = material(position) + center_control(position)
    if white_in_check:
        score += CHECK_BONUS
    if black_in_check:
        score -= CHECK_BONUS
    return score


def material(position: Position) -> int:
    """Black's material minus White's, kings excluded."""
    score = 0
    for _, piece in position.board.occupied():
        if piece.piece_type == PieceType.KING:
            continue
        score += _signed(piece.color, PIECE_VALUES[piece.piece_type])
    return score


def center_control(position: Position) -> int:
    """+1 per Black piece, -1 per White piece on the central squares."""
    board = position.board
    score = 0
    for sq in CENTER_SQUARES:
        piece = board.get_piece_at(sq)
        if piece is not None:
            score += _signed(piece.color, CENTER_BONUS)
    return score
