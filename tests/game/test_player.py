"""Tests for Player implementations."""

from chesslogic.core.enums import Color
from chesslogic.core.types import parse_square
from chesslogic.engine.search import SearchLimits
from chesslogic.game.player import AIPlayer, HumanPlayer
from chesslogic.game.state import GameState


class TestHumanPlayer:
    def test_properties(self) -> None:
        p = HumanPlayer(Color.WHITE, "Alice")
        assert p.color == Color.WHITE
        assert p.name == "Alice"
        assert p.is_human is True

    def test_default_name(self) -> None:
        p = HumanPlayer(Color.BLACK)
        assert "black" in p.name.lower()

    def test_request_move_noop(self) -> None:
        p = HumanPlayer(Color.WHITE)
        state = GameState.new()
        assert p.request_move(state) is False
        assert state.ply_count == 0

    def test_cancel_noop(self) -> None:
        p = HumanPlayer(Color.WHITE)
        p.cancel()  # should not raise


class TestAIPlayer:
    def test_properties(self) -> None:
        p = AIPlayer("Minimax")
        assert p.color == Color.BLACK
        assert p.name == "Minimax"
        assert p.is_human is False
        assert p.limits == SearchLimits()

    def test_request_move_calls_callback(self) -> None:
        called_with = []
        p = AIPlayer(on_request_move=lambda pos: called_with.append(pos))
        state = GameState.new()
        state.try_make_move(parse_square("e2"), parse_square("e4"))

        assert p.request_move(state) is False
        assert called_with == [state.position]
        assert state.ply_count == 1

    def test_request_move_plays_synchronously(self) -> None:
        p = AIPlayer(limits=SearchLimits(max_depth=1))
        state = GameState.new()
        state.try_make_move(parse_square("e2"), parse_square("e4"))

        assert p.request_move(state) is True
        assert state.ply_count == 2
        assert state.current_turn == Color.WHITE

    def test_request_move_off_turn(self) -> None:
        p = AIPlayer(limits=SearchLimits(max_depth=1))
        state = GameState.new()
        assert p.request_move(state) is False
        assert state.ply_count == 0

    def test_cancel_calls_callback(self) -> None:
        cancelled = []
        p = AIPlayer(on_cancel=lambda: cancelled.append(True))
        p.cancel()
        assert cancelled == [True]

    def test_cancel_without_callback(self) -> None:
        AIPlayer().cancel()  # should not raise

    def test_limits_setter(self) -> None:
        p = AIPlayer()
        p.limits = SearchLimits(max_depth=4)
        assert p.limits.max_depth == 4
