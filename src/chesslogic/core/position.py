"""Position: board plus turn, castling rights and en passant bookkeeping."""

from __future__ import annotations

from dataclasses import dataclass

from chesslogic.core.board import Board
from chesslogic.core.enums import CastlingSide, Color, PieceType
from chesslogic.core.move import Move
from chesslogic.core.movement import (
    BACK_RANK,
    ROOK_HOME_FILE,
    castling_side,
    is_castling_attempt,
    is_valid_move,
)
from chesslogic.core.piece import Piece
from chesslogic.core.types import Square

CastlingRights = dict[tuple[Color, CastlingSide], bool]


def full_castling_rights() -> CastlingRights:
    return {(color, side): True for color in Color for side in CastlingSide}


@dataclass(slots=True)
class MoveUndo:
    """Everything :meth:`Position.make_move` changed, so it can be reverted."""

    move: Move
    piece: Piece
    had_moved: bool
    had_moved_two_squares: bool
    castling_rights: CastlingRights
    last_moved: Piece | None
    side_to_move: Color
    ply: int
    captured_piece: Piece | None = None
    captured_square: Square | None = None
    rook: Piece | None = None
    rook_from: Square | None = None
    rook_to: Square | None = None
    rook_had_moved: bool = False

    @property
    def is_castling(self) -> bool:
        return self.rook is not None

    @property
    def is_en_passant(self) -> bool:
        return (
            self.captured_square is not None
            and self.captured_square != self.move.to_sq
        )


class Position:
    """Full game position: board + side to move + castling rights + last move.

    Moves are applied in place by :meth:`make_move`, which hands back a
    :class:`MoveUndo` token; :meth:`unmake_move` reverts exactly that move,
    including every piece flag it touched.  Search and legality probing run
    thousands of these pairs on one shared position.
    """

    __slots__ = (
        "board",
        "side_to_move",
        "castling_rights",
        "last_moved",
        "ply",
    )

    def __init__(
        self,
        board: Board | None = None,
        side_to_move: Color = Color.WHITE,
        castling_rights: CastlingRights | None = None,
        last_moved: Piece | None = None,
        ply: int = 0,
    ) -> None:
        self.board = board if board is not None else Board.initial()
        self.side_to_move = side_to_move
        self.castling_rights: CastlingRights = (
            dict(castling_rights)
            if castling_rights is not None
            else full_castling_rights()
        )
        self.last_moved = last_moved
        self.ply = ply

    # ── En passant ───────────────────────────────────────────────────────

    def is_en_passant_target(self, pawn: Piece) -> bool:
        """Can *pawn* be taken en passant on this ply?

        Only the pawn that made a double step on the previous ply qualifies.
        """
        return (
            pawn.piece_type == PieceType.PAWN
            and pawn.moved_two_squares
            and pawn is self.last_moved
        )

    # ── Core move operations ─────────────────────────────────────────────

    def make_move(self, move: Move) -> MoveUndo | None:
        """Apply *move* if the piece rules allow it.

        Handles captures, castling and en passant, records the mover as the
        last-moved piece and passes the turn to the other side.  Does not
        test whether the mover's king is left in check.

        Returns:
            Undo token, or ``None`` (position untouched) when the piece on
            ``from_sq`` may not go to ``to_sq``.
        """
        piece = self.board.get_piece_at(move.from_sq)
        if piece is None or not is_valid_move(self, move.from_sq, move.to_sq):
            return None

        undo = self._snapshot(move, piece)

        # En passant: the captured pawn sits beside the mover, not on to_sq
        if (
            piece.piece_type == PieceType.PAWN
            and move.file_delta != 0
            and self.board.is_empty_square(move.to_sq)
        ):
            victim_sq = Square(move.to_sq.file, move.from_sq.rank)
            undo.captured_piece = self.board.remove_piece(victim_sq)
            undo.captured_square = victim_sq

        self._relocate(undo)

        self.last_moved = piece
        self.ply += 1
        self.side_to_move = piece.color.opposite
        return undo

    def unmake_move(self, undo: MoveUndo) -> None:
        """Revert the move described by *undo*."""
        board = self.board
        move = undo.move
        piece = undo.piece
        assert board.get_piece_at(move.to_sq) is piece, "undo out of order"

        board.place_piece(piece, move.from_sq)
        board.place_piece(None, move.to_sq)

        if undo.rook is not None:
            assert undo.rook_from is not None and undo.rook_to is not None
            board.place_piece(None, undo.rook_to)
            board.place_piece(undo.rook, undo.rook_from)
            undo.rook.has_moved = undo.rook_had_moved

        if undo.captured_piece is not None:
            assert undo.captured_square is not None
            board.place_piece(undo.captured_piece, undo.captured_square)

        piece.has_moved = undo.had_moved
        piece.moved_two_squares = undo.had_moved_two_squares
        self.castling_rights = undo.castling_rights
        self.last_moved = undo.last_moved
        self.side_to_move = undo.side_to_move
        self.ply = undo.ply

    def move_piece(self, from_sq: Square, to_sq: Square) -> bool:
        """Physically move a piece if its own rules allow it.

        Relocates the piece (and the rook when castling), overwrites any
        occupant of *to_sq*, sets moved flags and updates castling rights.
        Knows nothing of turns, check, or en passant removal.
        """
        piece = self.board.get_piece_at(from_sq)
        if piece is None or not is_valid_move(self, from_sq, to_sq):
            return False
        self._relocate(self._snapshot(Move(Square(*from_sq), Square(*to_sq)), piece))
        return True

    def replace_piece(self, sq: Square, piece_type: PieceType) -> Piece:
        """Swap the piece on *sq* for a new one of *piece_type*, same colour."""
        old = self.board.get_piece_at(sq)
        if old is None:
            raise ValueError(f"No piece on {sq}")
        new = Piece(old.color, piece_type, has_moved=True)
        self.board.place_piece(new, sq)
        if self.last_moved is old:
            self.last_moved = new
        return new

    # ── Internals ────────────────────────────────────────────────────────

    def _snapshot(self, move: Move, piece: Piece) -> MoveUndo:
        return MoveUndo(
            move=move,
            piece=piece,
            had_moved=piece.has_moved,
            had_moved_two_squares=piece.moved_two_squares,
            castling_rights=dict(self.castling_rights),
            last_moved=self.last_moved,
            side_to_move=self.side_to_move,
            ply=self.ply,
        )

    def _relocate(self, undo: MoveUndo) -> None:
        board = self.board
        move = undo.move
        piece = undo.piece

        if is_castling_attempt(piece, move.from_sq, move.to_sq):
            side = castling_side(move.from_sq, move.to_sq)
            rank = move.from_sq.rank
            rook_from = Square(ROOK_HOME_FILE[side], rank)
            step = 1 if side == CastlingSide.KINGSIDE else -1
            rook_to = Square(move.from_sq.file + step, rank)
            rook = board.get_piece_at(rook_from)
            assert rook is not None, "castling without a rook"
            undo.rook = rook
            undo.rook_from = rook_from
            undo.rook_to = rook_to
            undo.rook_had_moved = rook.has_moved

            board.place_piece(None, move.from_sq)
            board.place_piece(piece, move.to_sq)
            board.place_piece(None, rook_from)
            board.place_piece(rook, rook_to)
            rook.has_moved = True
        else:
            captured = board.get_piece_at(move.to_sq)
            if captured is not None:
                undo.captured_piece = captured
                undo.captured_square = move.to_sq
            board.place_piece(None, move.from_sq)
            board.place_piece(piece, move.to_sq)

        if piece.piece_type in (PieceType.KING, PieceType.ROOK):
            piece.has_moved = True
        if piece.piece_type == PieceType.PAWN:
            piece.moved_two_squares = abs(move.rank_delta) == 2

        self._update_castling_rights(undo)

    def _update_castling_rights(self, undo: MoveUndo) -> None:
        piece = undo.piece
        rights = self.castling_rights
        if piece.piece_type == PieceType.KING:
            for side in CastlingSide:
                rights[piece.color, side] = False
        elif piece.piece_type == PieceType.ROOK:
            side = self._rook_corner_side(piece.color, undo.move.from_sq)
            if side is not None:
                rights[piece.color, side] = False

        captured = undo.captured_piece
        if captured is not None and captured.piece_type == PieceType.ROOK:
            assert undo.captured_square is not None
            side = self._rook_corner_side(captured.color, undo.captured_square)
            if side is not None:
                rights[captured.color, side] = False

    @staticmethod
    def _rook_corner_side(color: Color, sq: Square) -> CastlingSide | None:
        if sq.rank != BACK_RANK[color]:
            return None
        for side, file in ROOK_HOME_FILE.items():
            if sq.file == file:
                return side
        return None

    # ── Utilities ────────────────────────────────────────────────────────

    def copy(self) -> Position:
        """Deep copy; the last-moved piece is remapped onto the new board."""
        board = self.board.copy()
        last_moved: Piece | None = None
        if self.last_moved is not None and self.last_moved.square is not None:
            last_moved = board.get_piece_at(self.last_moved.square)
        return Position(
            board=board,
            side_to_move=self.side_to_move,
            castling_rights=self.castling_rights,
            last_moved=last_moved,
            ply=self.ply,
        )

    def __repr__(self) -> str:
        return f"{self.board!r}\n{self.side_to_move} to move"
