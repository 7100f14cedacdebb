"""Tests for the terminal front end."""

import pytest

from chesslogic.app import (
    TerminalSession,
    build_parser,
    describe_result,
    limits_from_args,
    main,
    render_board,
)
from chesslogic.core.board import Board
from chesslogic.core.enums import Color, GameEndReason, GameResult
from chesslogic.engine.search import SearchLimits


def _session(depth: int = 1) -> tuple[TerminalSession, list[str]]:
    out: list[str] = []
    session = TerminalSession(SearchLimits(max_depth=depth), write=out.append)
    session.start()
    out.clear()
    return session, out


class TestArguments:
    def test_default_difficulty(self) -> None:
        args = build_parser().parse_args([])
        assert limits_from_args(args).max_depth == 3

    def test_named_difficulty(self) -> None:
        args = build_parser().parse_args(["--difficulty", "hard"])
        assert limits_from_args(args).max_depth == 4

    def test_explicit_depth(self) -> None:
        args = build_parser().parse_args(["--depth", "2"])
        assert limits_from_args(args).max_depth == 2

    def test_bad_depth(self) -> None:
        args = build_parser().parse_args(["--depth", "0"])
        with pytest.raises(ValueError):
            limits_from_args(args)

    def test_main_rejects_bad_depth(self) -> None:
        with pytest.raises(SystemExit):
            main(["--depth", "0"])


class TestRendering:
    def test_board_diagram(self) -> None:
        lines = render_board(Board.initial()).splitlines()
        assert lines[0] == "8 ♜ ♞ ♝ ♛ ♚ ♝ ♞ ♜"
        assert lines[4] == "4 · · · · · · · ·"
        assert lines[-1] == "  a b c d e f g h"

    def test_describe_result(self) -> None:
        assert describe_result(GameResult.DRAW, GameEndReason.STALEMATE) == "Draw by stalemate."
        assert (
            describe_result(GameResult.BLACK_WINS, GameEndReason.CHECKMATE)
            == "Black wins by checkmate."
        )


class TestSession:
    def test_move_and_reply(self) -> None:
        session, out = _session()
        assert session.handle("e2e4")
        assert out[0] == "white: e2e4"
        assert out[1].startswith("black: ")
        assert session.state.current_turn == Color.WHITE

    def test_illegal_move(self) -> None:
        session, out = _session()
        session.handle("e2e5")
        assert out == ["Illegal move: e2e5"]

    def test_unknown_command(self) -> None:
        session, out = _session()
        session.handle("castle please")
        assert "Unknown command" in out[0]

    def test_quit(self) -> None:
        session, _ = _session()
        assert session.handle("quit") is False

    def test_resign_and_new(self) -> None:
        session, out = _session()
        session.handle("resign")
        assert out[-1] == "Black wins by resignation."
        session.handle("e2e4")
        assert "over" in out[-1]
        session.handle("new")
        assert not session.state.is_game_over

    def test_undo(self) -> None:
        session, _ = _session()
        session.handle("e2e4")
        session.handle("undo")
        assert session.state.ply_count == 0

    def test_run_consumes_lines(self) -> None:
        out: list[str] = []
        session = TerminalSession(SearchLimits(max_depth=1), write=out.append)
        session.run(["moves", "quit", "e2e4"])
        assert session.state.ply_count == 0
        assert any("e2e4" in line for line in out)
