"""Piece - a mutable chess man that remembers where it stands."""

from __future__ import annotations

from dataclasses import dataclass

from chesslogic.core.enums import Color, PieceType
from chesslogic.core.types import Square

# Diagram character ↔ (Color, PieceType)
_CHAR_MAP: dict[str, tuple[Color, PieceType]] = {
    "P": (Color.WHITE, PieceType.PAWN),
    "N": (Color.WHITE, PieceType.KNIGHT),
    "B": (Color.WHITE, PieceType.BISHOP),
    "R": (Color.WHITE, PieceType.ROOK),
    "Q": (Color.WHITE, PieceType.QUEEN),
    "K": (Color.WHITE, PieceType.KING),
    "p": (Color.BLACK, PieceType.PAWN),
    "n": (Color.BLACK, PieceType.KNIGHT),
    "b": (Color.BLACK, PieceType.BISHOP),
    "r": (Color.BLACK, PieceType.ROOK),
    "q": (Color.BLACK, PieceType.QUEEN),
    "k": (Color.BLACK, PieceType.KING),
}

_UNICODE: dict[tuple[Color, PieceType], str] = {
    (Color.WHITE, PieceType.PAWN): "♙",
    (Color.WHITE, PieceType.KNIGHT): "♘",
    (Color.WHITE, PieceType.BISHOP): "♗",
    (Color.WHITE, PieceType.ROOK): "♖",
    (Color.WHITE, PieceType.QUEEN): "♕",
    (Color.WHITE, PieceType.KING): "♔",
    (Color.BLACK, PieceType.PAWN): "♟",
    (Color.BLACK, PieceType.KNIGHT): "♞",
    (Color.BLACK, PieceType.BISHOP): "♝",
    (Color.BLACK, PieceType.ROOK): "♜",
    (Color.BLACK, PieceType.QUEEN): "♛",
    (Color.BLACK, PieceType.KING): "♚",
}

_DIAGRAM_CHARS: dict[tuple[Color, PieceType], str] = {
    v: k for k, v in _CHAR_MAP.items()
}


@dataclass(slots=True, eq=False)
class Piece:
    """A piece on (or captured from) the board.

    Pieces compare by identity: the en passant rule asks whether a pawn is
    *the* piece that moved last, not whether it looks like it.

    Attributes:
        color: Owning side.
        piece_type: Kind of piece.
        square: Cached location; the board keeps it equal to the grid slot.
        has_moved: Set once a king or rook leaves its square (castling).
        moved_two_squares: Set on a pawn's double step, cleared on its next move.
    """

    color: Color
    piece_type: PieceType
    square: Square | None = None
    has_moved: bool = False
    moved_two_squares: bool = False

    # ── Serialisation ────────────────────────────────────────────────────

    def __str__(self) -> str:
        """Diagram character (uppercase = white, lowercase = black)."""
        return _DIAGRAM_CHARS[(self.color, self.piece_type)]

    def __repr__(self) -> str:
        where = "" if self.square is None else f"@{self.square}"
        return f"Piece({self.color.name} {self.piece_type.name}{where})"

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Create piece from diagram character, e.g. 'N' → white knight."""
        try:
            color, ptype = _CHAR_MAP[char]
        except KeyError:
            raise ValueError(f"Invalid piece character: {char!r}") from None
        return cls(color, ptype)

    @property
    def symbol(self) -> str:
        """Unicode chess symbol, e.g. ♞."""
        return _UNICODE[(self.color, self.piece_type)]

    def same_kind(self, other: Piece | None) -> bool:
        """Same colour and piece type as *other*."""
        return (
            other is not None
            and other.color == self.color
            and other.piece_type == self.piece_type
        )
