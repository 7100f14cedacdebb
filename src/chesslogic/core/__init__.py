"""Core domain layer: pure chess logic with zero external dependencies.

Quick start::

    from chesslogic.core import Move, MoveGenerator, Position, parse_square

    pos = Position()
    gen = MoveGenerator(pos)
    for move in gen.generate_legal_moves():
        print(move)
"""

from chesslogic.core.board import Board
from chesslogic.core.enums import CastlingSide, Color, GameEndReason, GameResult, PieceType
from chesslogic.core.move import Move
from chesslogic.core.move_generator import MoveGenerator
from chesslogic.core.movement import can_castle, is_square_attacked, is_valid_move
from chesslogic.core.piece import Piece
from chesslogic.core.position import MoveUndo, Position
from chesslogic.core.rules import Rules
from chesslogic.core.types import (
    Square,
    is_valid_square,
    parse_square,
    square_name,
)

__all__ = [
    # Enums
    "CastlingSide",
    "Color",
    "GameEndReason",
    "GameResult",
    "PieceType",
    # Types / helpers
    "Square",
    "is_valid_square",
    "parse_square",
    "square_name",
    # Domain objects
    "Board",
    "Move",
    "MoveGenerator",
    "MoveUndo",
    "Piece",
    "Position",
    "Rules",
    # Piece rules
    "can_castle",
    "is_square_attacked",
    "is_valid_move",
]
