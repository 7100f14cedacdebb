"""Move value object."""

from __future__ import annotations

from dataclasses import dataclass

from chesslogic.core.types import Square, parse_square, square_name


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable (from, to) pair.

    Castling and en passant are recognised from the board, and promotion is
    chosen afterwards, so a move carries nothing but its two squares.
    """

    from_sq: Square
    to_sq: Square

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        return f"{square_name(self.from_sq)}{square_name(self.to_sq)}"

    @classmethod
    def from_str(cls, text: str) -> Move:
        """Parse long algebraic text such as ``"e2e4"``."""
        text = text.strip()
        if len(text) != 4:
            raise ValueError(f"Invalid move text: {text!r}")
        return cls(parse_square(text[:2]), parse_square(text[2:]))

    @property
    def file_delta(self) -> int:
        return self.to_sq.file - self.from_sq.file

    @property
    def rank_delta(self) -> int:
        return self.to_sq.rank - self.from_sq.rank
