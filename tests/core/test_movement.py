"""Tests for per-piece movement rules, castling and attack detection."""

import pytest

from chesslogic.core.enums import CastlingSide, Color
from chesslogic.core.movement import attacks, can_castle, is_square_attacked, is_valid_move
from chesslogic.core.position import Position
from chesslogic.core.types import ALL_SQUARES, Square, parse_square


def _sq(name: str) -> Square:
    return parse_square(name)


def _valid(pos: Position, frm: str, to: str) -> bool:
    return is_valid_move(pos, _sq(frm), _sq(to))


class TestSharedPrecondition:
    def test_empty_source(self) -> None:
        assert not _valid(Position(), "e4", "e5")

    def test_own_piece_on_target(self) -> None:
        assert not _valid(Position(), "d1", "d2")

    def test_off_board_target(self) -> None:
        pos = Position()
        assert not is_valid_move(pos, _sq("h2"), Square(8, 5))


class TestPawn:
    def test_single_and_double_step(self) -> None:
        pos = Position()
        assert _valid(pos, "e2", "e3")
        assert _valid(pos, "e2", "e4")
        assert not _valid(pos, "e2", "e5")

    def test_black_moves_down_the_board(self) -> None:
        pos = Position()
        assert _valid(pos, "e7", "e5")
        assert not _valid(pos, "e7", "e8")

    def test_no_backward_move(self, make_position) -> None:
        pos = make_position({"e4": "P"})
        assert not _valid(pos, "e4", "e3")

    def test_double_step_only_from_home_rank(self, make_position) -> None:
        pos = make_position({"e3": "P"})
        assert _valid(pos, "e3", "e4")
        assert not _valid(pos, "e3", "e5")

    def test_blocked_double_step(self, make_position) -> None:
        pos = make_position({"e2": "P", "e3": "n"})
        assert not _valid(pos, "e2", "e3")
        assert not _valid(pos, "e2", "e4")

    def test_blocked_on_landing_square(self, make_position) -> None:
        pos = make_position({"e2": "P", "e4": "n"})
        assert _valid(pos, "e2", "e3")
        assert not _valid(pos, "e2", "e4")

    def test_diagonal_needs_capture(self, make_position) -> None:
        pos = make_position({"e4": "P", "d5": "p"})
        assert _valid(pos, "e4", "d5")
        assert not _valid(pos, "e4", "f5")

    def test_no_straight_capture(self, make_position) -> None:
        pos = make_position({"e4": "P", "e5": "p"})
        assert not _valid(pos, "e4", "e5")


class TestLeapersAndSliders:
    def test_knight_jumps(self) -> None:
        pos = Position()
        assert _valid(pos, "g1", "f3")
        assert _valid(pos, "b8", "c6")
        assert not _valid(pos, "g1", "g3")

    def test_bishop_blocked_then_free(self) -> None:
        pos = Position()
        assert not _valid(pos, "f1", "c4")
        pos.board.remove_piece(_sq("e2"))
        assert _valid(pos, "f1", "c4")

    def test_bishop_only_diagonal(self, make_position) -> None:
        pos = make_position({"d4": "B"})
        assert _valid(pos, "d4", "h8")
        assert not _valid(pos, "d4", "d5")

    def test_rook_straight_and_blocked(self, make_position) -> None:
        pos = make_position({"a1": "R", "a5": "p"})
        assert _valid(pos, "a1", "a5")
        assert not _valid(pos, "a1", "a6")
        assert _valid(pos, "a1", "h1")
        assert not _valid(pos, "a1", "b2")

    def test_queen_lines_only(self, make_position) -> None:
        pos = make_position({"d4": "Q"})
        assert _valid(pos, "d4", "d8")
        assert _valid(pos, "d4", "a7")
        assert not _valid(pos, "d4", "e6")

    def test_king_single_step(self, make_position) -> None:
        pos = make_position({"e4": "K"})
        assert _valid(pos, "e4", "f5")
        assert not _valid(pos, "e4", "e6")


# ── Castling ────────────────────────────────────────────────────────────────


_CASTLE_SETUP = {"e1": "K", "h1": "R", "a1": "R", "a8": "k"}


def _castle_position(make_position, **extra: str) -> Position:
    return make_position({**_CASTLE_SETUP, **extra})


class TestCastling:
    def test_both_sides_allowed(self, make_position) -> None:
        pos = _castle_position(make_position)
        assert can_castle(pos, _sq("e1"), _sq("g1"))
        assert can_castle(pos, _sq("e1"), _sq("c1"))
        assert _valid(pos, "e1", "g1")

    def test_king_has_moved(self, make_position) -> None:
        pos = _castle_position(make_position)
        pos.board[_sq("e1")].has_moved = True
        assert not can_castle(pos, _sq("e1"), _sq("g1"))

    def test_rook_has_moved(self, make_position) -> None:
        pos = _castle_position(make_position)
        pos.board[_sq("h1")].has_moved = True
        assert not can_castle(pos, _sq("e1"), _sq("g1"))
        assert can_castle(pos, _sq("e1"), _sq("c1"))

    def test_right_revoked(self, make_position) -> None:
        pos = _castle_position(make_position)
        pos.castling_rights[Color.WHITE, CastlingSide.QUEENSIDE] = False
        assert not can_castle(pos, _sq("e1"), _sq("c1"))
        assert can_castle(pos, _sq("e1"), _sq("g1"))

    def test_rook_missing(self, make_position) -> None:
        pos = make_position({"e1": "K", "a1": "R", "a8": "k"})
        assert not can_castle(pos, _sq("e1"), _sq("g1"))

    def test_corner_holds_other_piece(self, make_position) -> None:
        pos = make_position({"e1": "K", "h1": "N", "a8": "k"})
        assert not can_castle(pos, _sq("e1"), _sq("g1"))

    def test_enemy_rook_in_corner(self, make_position) -> None:
        pos = make_position({"e1": "K", "h1": "r", "a8": "k"})
        assert not can_castle(pos, _sq("e1"), _sq("g1"))

    def test_path_blocked(self, make_position) -> None:
        pos = _castle_position(make_position, f1="B", b1="N")
        assert not can_castle(pos, _sq("e1"), _sq("g1"))
        # b1 is not crossed by the king but still sits between king and rook
        assert not can_castle(pos, _sq("e1"), _sq("c1"))

    def test_king_in_check(self, make_position) -> None:
        pos = _castle_position(make_position, e5="r")
        assert not can_castle(pos, _sq("e1"), _sq("g1"))
        assert not can_castle(pos, _sq("e1"), _sq("c1"))

    def test_crossing_square_attacked(self, make_position) -> None:
        pos = _castle_position(make_position, f8="r")
        assert not can_castle(pos, _sq("e1"), _sq("g1"))

    def test_destination_attacked(self, make_position) -> None:
        pos = _castle_position(make_position, g8="r")
        assert not can_castle(pos, _sq("e1"), _sq("g1"))

    def test_attacked_b_file_does_not_stop_queenside(self, make_position) -> None:
        pos = _castle_position(make_position, b8="r")
        assert can_castle(pos, _sq("e1"), _sq("c1"))

    def test_king_off_home_square(self, make_position) -> None:
        pos = make_position({"d1": "K", "h1": "R", "a8": "k"})
        assert not can_castle(pos, _sq("d1"), _sq("f1"))

    def test_black_castles_on_rank_zero(self, make_position) -> None:
        pos = make_position({"e8": "k", "h8": "r", "a1": "K"}, side_to_move=Color.BLACK)
        assert can_castle(pos, _sq("e8"), _sq("g8"))

    def test_not_a_castling_step(self, make_position) -> None:
        pos = _castle_position(make_position)
        assert not can_castle(pos, _sq("e1"), _sq("f1"))


# ── Attacks ─────────────────────────────────────────────────────────────────


class TestAttacks:
    def test_pawn_attacks_diagonals_only(self, make_position) -> None:
        pos = make_position({"e4": "P"})
        assert is_square_attacked(pos, _sq("d5"), Color.WHITE)
        assert is_square_attacked(pos, _sq("f5"), Color.WHITE)
        assert not is_square_attacked(pos, _sq("e5"), Color.WHITE)
        assert not is_square_attacked(pos, _sq("d3"), Color.WHITE)

    def test_black_pawn_attacks_downwards(self, make_position) -> None:
        pos = make_position({"e5": "p"})
        assert is_square_attacked(pos, _sq("d4"), Color.BLACK)
        assert not is_square_attacked(pos, _sq("d6"), Color.BLACK)

    def test_king_does_not_attack_castling_square(self) -> None:
        pos = Position()
        assert not attacks(pos, _sq("e1"), _sq("g1"))
        assert attacks(pos, _sq("e1"), _sq("f1"))

    def test_blocked_slider(self, make_position) -> None:
        pos = make_position({"a1": "R", "a4": "P"})
        assert is_square_attacked(pos, _sq("a4"), Color.WHITE)
        assert not is_square_attacked(pos, _sq("a5"), Color.WHITE)

    def test_defended_piece_counts_as_attacked(self, make_position) -> None:
        pos = make_position({"a1": "R", "a4": "N"})
        assert attacks(pos, _sq("a1"), _sq("a4"))

    def test_knight_and_queen(self, make_position) -> None:
        pos = make_position({"g8": "n", "d8": "q"})
        assert is_square_attacked(pos, _sq("f6"), Color.BLACK)
        assert is_square_attacked(pos, _sq("h4"), Color.BLACK)
        assert not is_square_attacked(pos, _sq("e6"), Color.BLACK)

    @pytest.mark.parametrize("color", [Color.WHITE, Color.BLACK])
    def test_reverse_lookup_matches_attacks(self, color: Color) -> None:
        pos = Position()
        pos.board.remove_piece(_sq("e2"))
        pos.board.remove_piece(_sq("d7"))
        for target in ALL_SQUARES:
            expected = any(
                attacks(pos, from_sq, target)
                for from_sq, piece in pos.board.occupied()
                if piece.color == color
            )
            assert is_square_attacked(pos, target, color) == expected, target
