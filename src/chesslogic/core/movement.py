"""Per-piece movement rules and attack detection.

Every piece kind has one geometry predicate; :func:`is_valid_move` picks it
from a table keyed by :class:`PieceType`.  The predicates answer "may this
piece go there?" from the board and castling/en passant bookkeeping only; they
do not care whose turn it is or whether the mover's king ends up in check.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from chesslogic.core.enums import CastlingSide, Color, PieceType
from chesslogic.core.piece import Piece
from chesslogic.core.types import ALL_SQUARES, Square, is_valid_square

if TYPE_CHECKING:
    from chesslogic.core.position import Position


KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

# Rank step of a pawn advance; White walks towards rank 0.
PAWN_DIRECTION: dict[Color, int] = {Color.WHITE: -1, Color.BLACK: 1}
PAWN_HOME_RANK: dict[Color, int] = {Color.WHITE: 6, Color.BLACK: 1}
PROMOTION_RANK: dict[Color, int] = {Color.WHITE: 0, Color.BLACK: 7}
BACK_RANK: dict[Color, int] = {Color.WHITE: 7, Color.BLACK: 0}

KING_HOME_FILE = 4
ROOK_HOME_FILE: dict[CastlingSide, int] = {
    CastlingSide.KINGSIDE: 7,
    CastlingSide.QUEENSIDE: 0,
}


# -- Precomputed lookup tables ---------------------------------------------


def _build_targets(
    offsets: tuple[tuple[int, int], ...],
) -> dict[Square, tuple[Square, ...]]:
    targets: dict[Square, tuple[Square, ...]] = {}
    for sq in ALL_SQUARES:
        moves: list[Square] = []
        for df, dr in offsets:
            to_sq = sq.offset(df, dr)
            if is_valid_square(to_sq):
                moves.append(to_sq)
        targets[sq] = tuple(moves)
    return targets


def _build_rays(
    directions: tuple[tuple[int, int], ...],
) -> dict[Square, tuple[tuple[Square, ...], ...]]:
    rays_per_square: dict[Square, tuple[tuple[Square, ...], ...]] = {}
    for sq in ALL_SQUARES:
        square_rays: list[tuple[Square, ...]] = []
        for df, dr in directions:
            ray: list[Square] = []
            to_sq = sq.offset(df, dr)
            while is_valid_square(to_sq):
                ray.append(to_sq)
                to_sq = to_sq.offset(df, dr)
            square_rays.append(tuple(ray))
        rays_per_square[sq] = tuple(square_rays)
    return rays_per_square


KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
KING_TARGETS = _build_targets(KING_OFFSETS)
BISHOP_RAYS = _build_rays(BISHOP_DIRS)
ROOK_RAYS = _build_rays(ROOK_DIRS)
QUEEN_RAYS = _build_rays(QUEEN_DIRS)


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


# -- Geometry helpers ------------------------------------------------------


def is_path_clear(position: Position, from_sq: Square, to_sq: Square) -> bool:
    """Every square strictly between *from_sq* and *to_sq* is empty.

    The two squares must share a rank, file or diagonal.  Off-board squares
    count as blocked.
    """
    step_f = _sign(to_sq[0] - from_sq[0])
    step_r = _sign(to_sq[1] - from_sq[1])
    board = position.board
    f = from_sq[0] + step_f
    r = from_sq[1] + step_r
    while (f, r) != (to_sq[0], to_sq[1]):
        if not board.is_empty_square((f, r)):
            return False
        f += step_f
        r += step_r
    return True


def _is_diagonal(df: int, dr: int) -> bool:
    return df != 0 and abs(df) == abs(dr)


def _is_straight(df: int, dr: int) -> bool:
    return (df == 0) != (dr == 0)


# -- Per-piece predicates --------------------------------------------------


def _pawn_move(position: Position, piece: Piece, from_sq: Square, to_sq: Square) -> bool:
    board = position.board
    direction = PAWN_DIRECTION[piece.color]
    df = to_sq[0] - from_sq[0]
    dr = to_sq[1] - from_sq[1]

    if df == 0:
        if dr == direction:
            return board.is_empty_square(to_sq)
        if dr == 2 * direction and from_sq[1] == PAWN_HOME_RANK[piece.color]:
            middle = (from_sq[0], from_sq[1] + direction)
            return board.is_empty_square(middle) and board.is_empty_square(to_sq)
        return False

    if abs(df) != 1 or dr != direction:
        return False

    target = board.get_piece_at(to_sq)
    if target is not None:
        return target.color != piece.color

    victim = board.get_piece_at((to_sq[0], from_sq[1]))
    return victim is not None and victim.color != piece.color and (
        position.is_en_passant_target(victim)
    )


def _knight_move(position: Position, piece: Piece, from_sq: Square, to_sq: Square) -> bool:
    df = abs(to_sq[0] - from_sq[0])
    dr = abs(to_sq[1] - from_sq[1])
    return (df, dr) in ((1, 2), (2, 1))


def _bishop_move(position: Position, piece: Piece, from_sq: Square, to_sq: Square) -> bool:
    df = to_sq[0] - from_sq[0]
    dr = to_sq[1] - from_sq[1]
    return _is_diagonal(df, dr) and is_path_clear(position, from_sq, to_sq)


def _rook_move(position: Position, piece: Piece, from_sq: Square, to_sq: Square) -> bool:
    df = to_sq[0] - from_sq[0]
    dr = to_sq[1] - from_sq[1]
    return _is_straight(df, dr) and is_path_clear(position, from_sq, to_sq)


def _queen_move(position: Position, piece: Piece, from_sq: Square, to_sq: Square) -> bool:
    df = to_sq[0] - from_sq[0]
    dr = to_sq[1] - from_sq[1]
    if not (_is_diagonal(df, dr) or _is_straight(df, dr)):
        return False
    return is_path_clear(position, from_sq, to_sq)


def _king_move(position: Position, piece: Piece, from_sq: Square, to_sq: Square) -> bool:
    df = to_sq[0] - from_sq[0]
    dr = to_sq[1] - from_sq[1]
    if abs(df) == 2 and dr == 0:
        return can_castle(position, from_sq, to_sq)
    return max(abs(df), abs(dr)) == 1


_MovePredicate = Callable[["Position", Piece, Square, Square], bool]

_MOVE_RULES: dict[PieceType, _MovePredicate] = {
    PieceType.PAWN: _pawn_move,
    PieceType.KNIGHT: _knight_move,
    PieceType.BISHOP: _bishop_move,
    PieceType.ROOK: _rook_move,
    PieceType.QUEEN: _queen_move,
    PieceType.KING: _king_move,
}


def is_valid_move(position: Position, from_sq: Square, to_sq: Square) -> bool:
    """May the piece on *from_sq* move to *to_sq*?

    Shared precondition for all kinds: the destination is on the board and
    not occupied by a piece of the mover's colour.  Whose turn it is and
    whether the mover's own king is left in check are not considered.
    """
    board = position.board
    piece = board.get_piece_at(from_sq)
    if piece is None or not is_valid_square(to_sq):
        return False
    target = board.get_piece_at(to_sq)
    if target is not None and target.color == piece.color:
        return False
    return _MOVE_RULES[piece.piece_type](position, piece, Square(*from_sq), Square(*to_sq))


# -- Castling --------------------------------------------------------------


def castling_side(from_sq: Square, to_sq: Square) -> CastlingSide:
    return CastlingSide.KINGSIDE if to_sq[0] > from_sq[0] else CastlingSide.QUEENSIDE


def is_castling_attempt(piece: Piece | None, from_sq: Square, to_sq: Square) -> bool:
    """A king stepping two files along its rank."""
    return (
        piece is not None
        and piece.piece_type == PieceType.KING
        and abs(to_sq[0] - from_sq[0]) == 2
        and to_sq[1] == from_sq[1]
    )


def can_castle(position: Position, from_sq: Square, to_sq: Square) -> bool:
    """Castling predicate for the king on *from_sq* going to *to_sq*.

    Requires: king unmoved on its home square, the castling right still
    held, the matching rook unmoved in its corner, every square between king
    and rook empty, and no square the king stands on or crosses (destination
    included) attacked by the opponent.
    """
    board = position.board
    king = board.get_piece_at(from_sq)
    if not is_castling_attempt(king, from_sq, to_sq):
        return False
    assert king is not None

    rank = BACK_RANK[king.color]
    if king.has_moved or tuple(from_sq) != (KING_HOME_FILE, rank):
        return False

    side = castling_side(from_sq, to_sq)
    if not position.castling_rights[king.color, side]:
        return False

    rook_sq = Square(ROOK_HOME_FILE[side], rank)
    rook = board.get_piece_at(rook_sq)
    if (
        rook is None
        or rook.piece_type != PieceType.ROOK
        or rook.color != king.color
        or rook.has_moved
    ):
        return False

    if not is_path_clear(position, Square(*from_sq), rook_sq):
        return False

    opponent = king.color.opposite
    step = 1 if side == CastlingSide.KINGSIDE else -1
    for file in range(from_sq[0], to_sq[0] + step, step):
        if is_square_attacked(position, Square(file, rank), opponent):
            return False
    return True


# -- Attack detection ------------------------------------------------------


def attacks(position: Position, from_sq: Square, to_sq: Square) -> bool:
    """Does the piece on *from_sq* attack *to_sq*?

    Same geometry as :func:`is_valid_move` except that occupancy of the
    target is ignored, pawns hit only their forward diagonals and kings only
    their neighbours.
    """
    piece = position.board.get_piece_at(from_sq)
    if piece is None or not is_valid_square(to_sq):
        return False
    df = to_sq[0] - from_sq[0]
    dr = to_sq[1] - from_sq[1]
    pt = piece.piece_type
    if pt == PieceType.PAWN:
        return abs(df) == 1 and dr == PAWN_DIRECTION[piece.color]
    if pt == PieceType.KNIGHT:
        return (abs(df), abs(dr)) in ((1, 2), (2, 1))
    if pt == PieceType.KING:
        return max(abs(df), abs(dr)) == 1
    if pt == PieceType.BISHOP:
        geometry = _is_diagonal(df, dr)
    elif pt == PieceType.ROOK:
        geometry = _is_straight(df, dr)
    else:
        geometry = _is_diagonal(df, dr) or _is_straight(df, dr)
    return geometry and is_path_clear(position, Square(*from_sq), Square(*to_sq))


def is_square_attacked(position: Position, sq: Square, by_color: Color) -> bool:
    """Is *sq* attacked by any piece of *by_color*?

    Walks outwards from *sq* (knight hops, king steps, pawn diagonals, then
    sliding rays up to the first blocker), which gives the same answer as
    asking :func:`attacks` of every enemy piece.
    """
    board = position.board
    sq = Square(*sq)

    for from_sq in KNIGHT_TARGETS[sq]:
        piece = board.get_piece_at(from_sq)
        if (
            piece is not None
            and piece.color == by_color
            and piece.piece_type == PieceType.KNIGHT
        ):
            return True

    for from_sq in KING_TARGETS[sq]:
        piece = board.get_piece_at(from_sq)
        if (
            piece is not None
            and piece.color == by_color
            and piece.piece_type == PieceType.KING
        ):
            return True

    # A pawn attacking sq stands one rank behind it (from the pawn's view).
    pawn_rank = sq.rank - PAWN_DIRECTION[by_color]
    for df in (-1, 1):
        piece = board.get_piece_at((sq.file + df, pawn_rank))
        if (
            piece is not None
            and piece.color == by_color
            and piece.piece_type == PieceType.PAWN
        ):
            return True

    for ray in BISHOP_RAYS[sq]:
        for from_sq in ray:
            piece = board.get_piece_at(from_sq)
            if piece is None:
                continue
            if piece.color == by_color and piece.piece_type in (
                PieceType.BISHOP,
                PieceType.QUEEN,
            ):
                return True
            break

    for ray in ROOK_RAYS[sq]:
        for from_sq in ray:
            piece = board.get_piece_at(from_sq)
            if piece is None:
                continue
            if piece.color == by_color and piece.piece_type in (
                PieceType.ROOK,
                PieceType.QUEEN,
            ):
                return True
            break

    return False


def candidate_targets(piece: Piece, from_sq: Square) -> tuple[Square, ...]:
    """Squares *piece* could conceivably reach from *from_sq*.

    A superset of its valid destinations; callers still filter with
    :func:`is_valid_move`.
    """
    pt = piece.piece_type
    if pt == PieceType.KNIGHT:
        return KNIGHT_TARGETS[from_sq]
    if pt == PieceType.KING:
        castles = tuple(
            Square(from_sq.file + df, from_sq.rank)
            for df in (2, -2)
            if 0 <= from_sq.file + df < 8
        )
        return KING_TARGETS[from_sq] + castles
    if pt == PieceType.PAWN:
        direction = PAWN_DIRECTION[piece.color]
        steps = ((0, direction), (0, 2 * direction), (-1, direction), (1, direction))
        return tuple(
            to_sq
            for to_sq in (from_sq.offset(df, dr) for df, dr in steps)
            if is_valid_square(to_sq)
        )
    rays = {
        PieceType.BISHOP: BISHOP_RAYS,
        PieceType.ROOK: ROOK_RAYS,
        PieceType.QUEEN: QUEEN_RAYS,
    }[pt][from_sq]
    return tuple(to_sq for ray in rays for to_sq in ray)
