"""Square type and coordinate helpers.

Board layout (file, rank), rank 0 at the top::

    rank 0:  a8 b8 c8 d8 e8 f8 g8 h8   <- Black's back rank
    rank 1:  a7 ...                      <- Black pawns
    ...
    rank 6:  a2 ...                      <- White pawns
    rank 7:  a1 b1 c1 d1 e1 f1 g1 h1   <- White's back rank
"""

from __future__ import annotations

from typing import NamedTuple


class Square(NamedTuple):
    """Board coordinate: file 0–7 (a–h), rank 0–7 (8th rank down to 1st)."""

    file: int
    rank: int

    def offset(self, df: int, dr: int) -> Square:
        """Square shifted by (*df*, *dr*); may fall off the board."""
        return Square(self.file + df, self.rank + dr)

    def __str__(self) -> str:
        if not is_valid_square(self):
            return f"({self.file},{self.rank})"
        return square_name(self)


def is_valid_square(sq: tuple[int, int]) -> bool:
    """Both coordinates in [0, 8)."""
    return 0 <= sq[0] < 8 and 0 <= sq[1] < 8


def square_name(sq: tuple[int, int]) -> str:
    """Human-readable name, e.g. (4, 6) → 'e2'."""
    if not is_valid_square(sq):
        raise ValueError(f"Invalid square: {tuple(sq)!r}")
    return chr(ord("a") + sq[0]) + str(8 - sq[1])


def parse_square(name: str) -> Square:
    """Parse square name, e.g. 'e2' → Square(4, 6)."""
    if len(name) != 2 or name[0] not in "abcdefgh" or name[1] not in "12345678":
        raise ValueError(f"Invalid square name: {name!r}")
    return Square(ord(name[0]) - ord("a"), 8 - int(name[1]))


ALL_SQUARES: tuple[Square, ...] = tuple(
    Square(f, r) for r in range(8) for f in range(8)
)

# ── Named square constants ──────────────────────────────────────────────────

A8, B8, C8, D8, E8, F8, G8, H8 = (Square(f, 0) for f in range(8))
A7, B7, C7, D7, E7, F7, G7, H7 = (Square(f, 1) for f in range(8))
A6, B6, C6, D6, E6, F6, G6, H6 = (Square(f, 2) for f in range(8))
A5, B5, C5, D5, E5, F5, G5, H5 = (Square(f, 3) for f in range(8))
A4, B4, C4, D4, E4, F4, G4, H4 = (Square(f, 4) for f in range(8))
A3, B3, C3, D3, E3, F3, G3, H3 = (Square(f, 5) for f in range(8))
A2, B2, C2, D2, E2, F2, G2, H2 = (Square(f, 6) for f in range(8))
A1, B1, C1, D1, E1, F1, G1, H1 = (Square(f, 7) for f in range(8))
