"""Tests for check, checkmate, stalemate and results."""

import pytest

from chesslogic.core.enums import Color, GameResult
from chesslogic.core.move import Move
from chesslogic.core.position import Position
from chesslogic.core.rules import Rules


def _fools_mate() -> Position:
    pos = Position()
    for text in ("f2f3", "e7e5", "g2g4", "d8h4"):
        assert pos.make_move(Move.from_str(text)) is not None
    return pos


_BACK_RANK_MATE = {"g1": "K", "g8": "k", "f7": "p", "g7": "p", "h7": "p", "d8": "R"}
_STALEMATE = {"h8": "k", "g6": "Q", "f7": "K"}


class TestCheck:
    def test_start_not_in_check(self) -> None:
        pos = Position()
        assert not Rules.is_in_check(pos, Color.WHITE)
        assert not Rules.is_in_check(pos, Color.BLACK)

    def test_fools_mate_check(self) -> None:
        pos = _fools_mate()
        assert Rules.is_in_check(pos)
        assert not Rules.is_in_check(pos, Color.BLACK)


class TestCheckmate:
    def test_fools_mate(self) -> None:
        pos = _fools_mate()
        assert Rules.is_checkmate(pos, Color.WHITE)
        assert not Rules.is_stalemate(pos, Color.WHITE)
        assert Rules.game_result(pos) == GameResult.BLACK_WINS

    def test_back_rank(self, make_position) -> None:
        pos = make_position(_BACK_RANK_MATE, side_to_move=Color.BLACK)
        assert Rules.is_checkmate(pos)
        assert Rules.game_result(pos) == GameResult.WHITE_WINS

    def test_escape_square_means_no_mate(self, make_position) -> None:
        pos = make_position(
            {**_BACK_RANK_MATE, "h7": "P"},  # h7 now white: king can take it
            side_to_move=Color.BLACK,
        )
        assert Rules.is_in_check(pos)
        assert not Rules.is_checkmate(pos)


class TestStalemate:
    def test_king_boxed_in(self, make_position) -> None:
        pos = make_position(_STALEMATE, side_to_move=Color.BLACK)
        assert Rules.is_stalemate(pos)
        assert not Rules.is_checkmate(pos)
        assert Rules.game_result(pos) == GameResult.DRAW

    def test_side_with_moves_is_not_stalemated(self, make_position) -> None:
        pos = make_position(_STALEMATE, side_to_move=Color.BLACK)
        assert not Rules.is_stalemate(pos, Color.WHITE)

    def test_start_in_progress(self) -> None:
        assert Rules.game_result(Position()) == GameResult.IN_PROGRESS


class TestExclusivity:
    @pytest.mark.parametrize("color", [Color.WHITE, Color.BLACK])
    def test_never_both(self, make_position, color: Color) -> None:
        for pos in (
            Position(),
            _fools_mate(),
            make_position(_BACK_RANK_MATE),
            make_position(_STALEMATE),
        ):
            assert not (Rules.is_checkmate(pos, color) and Rules.is_stalemate(pos, color))
