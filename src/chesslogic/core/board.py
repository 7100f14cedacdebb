"""Board - piece placement on an 8x8 grid."""

from __future__ import annotations

from collections.abc import Iterator

from chesslogic.core.enums import Color, PieceType
from chesslogic.core.piece import Piece
from chesslogic.core.types import Square, is_valid_square

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


class Board:
    """Mutable 8x8 grid of optional pieces.

    The board owns every piece standing on it and keeps each piece's cached
    ``square`` equal to its grid slot.  It knows nothing about turns, check or
    castling rights; see :class:`~chesslogic.core.position.Position`.
    """

    __slots__ = ("_rows", "_king_squares")

    def __init__(self) -> None:
        # [rank][file]
        self._rows: list[list[Piece | None]] = [[None] * 8 for _ in range(8)]
        # [color] -> king square cache (None if king missing).
        self._king_squares: list[Square | None] = [None, None]

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        return self.get_piece_at(sq)

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        self.place_piece(piece, sq)

    def is_valid_position(self, sq: tuple[int, int]) -> bool:
        """Bounds check only."""
        return is_valid_square(sq)

    def get_piece_at(self, sq: tuple[int, int]) -> Piece | None:
        """Occupant of *sq*, or ``None`` when empty or off the board."""
        if not is_valid_square(sq):
            return None
        return self._rows[sq[1]][sq[0]]

    def is_empty_square(self, sq: tuple[int, int]) -> bool:
        """Whether *sq* is on the board and unoccupied.

        An off-board square is never empty, so sliding pieces treat the
        board edge as a blocker.
        """
        if not is_valid_square(sq):
            return False
        return self._rows[sq[1]][sq[0]] is None

    def place_piece(self, piece: Piece | None, sq: Square) -> None:
        """Put *piece* (or nothing) on *sq*, replacing whatever stood there.

        The displaced occupant, if any, is detached (its ``square`` becomes
        ``None``).  The slot *piece* came from is left for the caller.
        """
        if not is_valid_square(sq):
            raise ValueError(f"Square off the board: {tuple(sq)!r}")
        sq = Square(*sq)
        old_piece = self._rows[sq.rank][sq.file]
        if old_piece is piece:
            return

        if old_piece is not None:
            if old_piece.square == sq:
                old_piece.square = None
            color_idx = int(old_piece.color)
            if (
                old_piece.piece_type == PieceType.KING
                and self._king_squares[color_idx] == sq
            ):
                self._king_squares[color_idx] = None

        self._rows[sq.rank][sq.file] = piece

        if piece is None:
            return

        piece.square = sq
        if piece.piece_type == PieceType.KING:
            self._king_squares[int(piece.color)] = sq

    def remove_piece(self, sq: Square) -> Piece | None:
        """Clear *sq* and return what stood there."""
        piece = self.get_piece_at(sq)
        if piece is not None:
            self.place_piece(None, sq)
        return piece

    # -- Query helpers ------------------------------------------------------

    def occupied(self) -> Iterator[tuple[Square, Piece]]:
        """All (square, piece) pairs, rank by rank from the top."""
        for rank, row in enumerate(self._rows):
            for file, piece in enumerate(row):
                if piece is not None:
                    yield Square(file, rank), piece

    def pieces(self, color: Color, piece_type: PieceType | None = None) -> list[Piece]:
        """*color*'s pieces, optionally only those of *piece_type*."""
        return [
            piece
            for _, piece in self.occupied()
            if piece.color == color
            and (piece_type is None or piece.piece_type == piece_type)
        ]

    def king_square(self, color: Color) -> Square:
        """Return the single king square for *color*."""
        sq = self._king_squares[int(color)]
        if sq is None:
            raise ValueError(f"No {color.name} king on board")
        return sq

    def has_king(self, color: Color) -> bool:
        return self._king_squares[int(color)] is not None

    # -- Mutation / copying -------------------------------------------------

    def copy(self) -> Board:
        """Deep copy: every piece is duplicated along with its flags."""
        b = Board()
        for sq, piece in self.occupied():
            b.place_piece(
                Piece(
                    piece.color,
                    piece.piece_type,
                    has_moved=piece.has_moved,
                    moved_two_squares=piece.moved_two_squares,
                ),
                sq,
            )
        return b

    def clear(self) -> None:
        for _, piece in self.occupied():
            piece.square = None
        self._rows = [[None] * 8 for _ in range(8)]
        self._king_squares = [None, None]

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position (Black on ranks 0–1, White on 6–7)."""
        b = cls()
        for f in range(8):
            b.place_piece(Piece(Color.BLACK, PieceType.PAWN), Square(f, 1))
            b.place_piece(Piece(Color.WHITE, PieceType.PAWN), Square(f, 6))

        for f, pt in enumerate(_BACK_RANK):
            b.place_piece(Piece(Color.BLACK, pt), Square(f, 0))
            b.place_piece(Piece(Color.WHITE, pt), Square(f, 7))
        return b

    # -- Dunder helpers -----------------------------------------------------

    def layout(self) -> tuple[str, ...]:
        """One string per rank, '.' for empty squares."""
        return tuple(
            "".join(str(p) if p else "." for p in row) for row in self._rows
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.layout() == other.layout()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        rows: list[str] = []
        for rank, line in enumerate(self.layout()):
            rows.append(f"{8 - rank} {' '.join(line)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
