"""Game state: turn order, the move transaction and end-of-game detection."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from chesslogic.core.board import Board
from chesslogic.core.enums import Color, GameEndReason, GameResult, PieceType
from chesslogic.core.move import Move
from chesslogic.core.move_generator import MoveGenerator
from chesslogic.core.movement import (
    PROMOTION_RANK,
    can_castle,
    is_castling_attempt,
    is_square_attacked,
    is_valid_move,
)
from chesslogic.core.piece import Piece
from chesslogic.core.position import CastlingRights, MoveUndo, Position
from chesslogic.core.rules import Rules
from chesslogic.core.types import Square

_LOGGER = logging.getLogger(__name__)

PROMOTION_CHOICES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)


@dataclass
class MoveRecord:
    """A single entry in the move history."""

    move: Move
    undo: MoveUndo
    was_capture: bool = False
    was_check: bool = False
    promoted_pawn: Piece | None = None


class GameState:
    """Authoritative state of one game.

    All moves from the outside world go through :meth:`try_make_move`, which
    either applies a fully legal move and passes the turn, or returns
    ``False`` and leaves everything exactly as it was.

    This is a pure data/logic class with no threading or UI.  One search or
    move at a time: callers must not share a ``GameState`` across threads.
    """

    __slots__ = ("position", "result", "end_reason", "move_history", "_game_over")

    def __init__(self, position: Position | None = None) -> None:
        self.position = position if position is not None else Position()
        self.result = GameResult.IN_PROGRESS
        self.end_reason: GameEndReason | None = None
        self.move_history: list[MoveRecord] = []
        self._game_over = False
        self._update_game_state()

    @classmethod
    def new(cls) -> GameState:
        """Standard starting position, White to move."""
        return cls(Position(Board.initial()))

    def restart(self) -> None:
        """Throw the current game away and set up a new one."""
        self.position = Position(Board.initial())
        self.result = GameResult.IN_PROGRESS
        self.end_reason = None
        self.move_history.clear()
        self._game_over = False
        _LOGGER.info("New game started")

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def board(self) -> Board:
        return self.position.board

    @property
    def current_turn(self) -> Color:
        return self.position.side_to_move

    @property
    def is_game_over(self) -> bool:
        return self._game_over

    @property
    def castling_rights(self) -> CastlingRights:
        return self.position.castling_rights

    @property
    def last_moved_piece(self) -> Piece | None:
        return self.position.last_moved

    @property
    def ply_count(self) -> int:
        """Number of half-moves played."""
        return len(self.move_history)

    def is_in_check(self, color: Color) -> bool:
        return Rules.is_in_check(self.position, color)

    def is_in_checkmate(self, color: Color) -> bool:
        return Rules.is_checkmate(self.position, color)

    def is_in_stalemate(self, color: Color) -> bool:
        return Rules.is_stalemate(self.position, color)

    def is_square_under_attack(self, sq: Square, color: Color) -> bool:
        """Is *sq* attacked by *color*'s opponent?"""
        return is_square_attacked(self.position, sq, color.opposite)

    def can_castle(self, from_sq: Square, to_sq: Square) -> bool:
        return can_castle(self.position, from_sq, to_sq)

    def legal_moves(self, color: Color | None = None) -> list[Move]:
        """Legal moves for *color* (default: side to move)."""
        return MoveGenerator(self.position).generate_legal_moves(color)

    # ── Move application ─────────────────────────────────────────────────

    def try_make_move(self, from_sq: Square, to_sq: Square) -> bool:
        """Play *from_sq* → *to_sq* for the side to move if it is legal.

        Returns:
            ``True`` when the move was applied and the turn passed; ``False``
            otherwise, with no observable change to the game.
        """
        if self._game_over:
            _LOGGER.debug("Rejected %s%s: game is over", from_sq, to_sq)
            return False

        piece = self.board.get_piece_at(from_sq)
        if piece is None or piece.color != self.current_turn:
            _LOGGER.debug("Rejected %s%s: no %s piece there", from_sq, to_sq, self.current_turn)
            return False

        if is_castling_attempt(piece, from_sq, to_sq):
            if not can_castle(self.position, from_sq, to_sq):
                _LOGGER.debug("Rejected %s%s: castling not allowed", from_sq, to_sq)
                return False
        elif not is_valid_move(self.position, from_sq, to_sq):
            _LOGGER.debug("Rejected %s%s: not a %s move", from_sq, to_sq, piece.piece_type.name)
            return False

        mover = piece.color
        move = Move(Square(*from_sq), Square(*to_sq))
        undo = self.position.make_move(move)
        if undo is None:
            return False

        gen = MoveGenerator(self.position)
        if gen.is_in_check(mover):
            self.position.unmake_move(undo)
            _LOGGER.debug("Rejected %s: leaves the %s king in check", move, mover)
            return False

        record = MoveRecord(
            move=move,
            undo=undo,
            was_capture=undo.captured_piece is not None,
            was_check=gen.is_in_check(mover.opposite),
        )
        self.move_history.append(record)
        _LOGGER.debug("Played %s (%s)", move, mover)

        self._update_game_state()
        return True

    def undo_last_move(self) -> Move | None:
        """Take back the last move. Returns the undone Move, or None.

        Nothing is undone once a side has resigned: the resignation is not a
        move and taking back the ply before it would silently revive the game.
        """
        if not self.move_history or self.end_reason == GameEndReason.RESIGNATION:
            return None

        record = self.move_history.pop()
        if record.promoted_pawn is not None:
            self.board.place_piece(record.promoted_pawn, record.move.to_sq)
        self.position.unmake_move(record.undo)

        # Moves are only accepted while the game is running.
        self.result = GameResult.IN_PROGRESS
        self.end_reason = None
        self._game_over = False
        return record.move

    # ── Promotion ────────────────────────────────────────────────────────

    @property
    def pending_promotion(self) -> Square | None:
        """Square of a pawn that just reached its last rank, if any."""
        piece = self.position.last_moved
        if (
            piece is None
            or piece.piece_type != PieceType.PAWN
            or piece.square is None
        ):
            return None
        if piece.square.rank != PROMOTION_RANK[piece.color]:
            return None
        return piece.square

    def promote_pawn(self, sq: Square, piece_type: PieceType) -> bool:
        """Replace the pawn that just reached its last rank at *sq*.

        Only the pawn moved on the latest ply can be promoted, before the
        opponent replies.  The swap is attached to that move's history
        record so :meth:`undo_last_move` puts the pawn back.
        """
        if piece_type not in PROMOTION_CHOICES:
            return False
        if self.end_reason == GameEndReason.RESIGNATION:
            return False
        if sq != self.pending_promotion or not self.move_history:
            return False
        record = self.move_history[-1]
        if record.move.to_sq != sq:
            return False

        pawn = self.board.get_piece_at(sq)
        assert pawn is not None and pawn.piece_type == PieceType.PAWN
        self.position.replace_piece(Square(*sq), piece_type)
        record.promoted_pawn = pawn
        _LOGGER.debug("Promoted %s pawn on %s to %s", pawn.color, sq, piece_type.name)

        # The new piece may give mate, or lift a stalemate found with the pawn.
        self.result = GameResult.IN_PROGRESS
        self.end_reason = None
        self._game_over = False
        self._update_game_state()
        return True

    # ── Resignation ──────────────────────────────────────────────────────

    def resign(self, color: Color) -> bool:
        """*color* gives up; the opponent wins."""
        if self._game_over:
            return False
        self._finish(
            GameResult.BLACK_WINS if color == Color.WHITE else GameResult.WHITE_WINS,
            GameEndReason.RESIGNATION,
        )
        return True

    # ── Internal ─────────────────────────────────────────────────────────

    def _update_game_state(self) -> None:
        side = self.current_turn
        if not (self.board.has_king(Color.WHITE) and self.board.has_king(Color.BLACK)):
            return
        if Rules.is_checkmate(self.position, side):
            self._finish(
                GameResult.BLACK_WINS if side == Color.WHITE else GameResult.WHITE_WINS,
                GameEndReason.CHECKMATE,
            )
        elif Rules.is_stalemate(self.position, side):
            self._finish(GameResult.DRAW, GameEndReason.STALEMATE)

    def _finish(self, result: GameResult, reason: GameEndReason) -> None:
        self.result = result
        self.end_reason = reason
        self._game_over = True
        _LOGGER.info("Game over: %s by %s", result.name, reason.name.lower())
