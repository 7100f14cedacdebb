"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import os
import sys
from collections.abc import Callable, Iterator

import pytest

from chesslogic.core.board import Board
from chesslogic.core.enums import Color
from chesslogic.core.piece import Piece
from chesslogic.core.position import CastlingRights, Position
from chesslogic.core.types import parse_square

# Linux CI runners are often headless. Force an offscreen backend only there.
if (
    sys.platform.startswith("linux")
    and "QT_QPA_PLATFORM" not in os.environ
    and "DISPLAY" not in os.environ
    and "WAYLAND_DISPLAY" not in os.environ
):
    os.environ["QT_QPA_PLATFORM"] = "offscreen"


PositionFactory = Callable[..., Position]


def build_position(
    pieces: dict[str, str],
    side_to_move: Color = Color.WHITE,
    castling_rights: CastlingRights | None = None,
) -> Position:
    """Position from ``{"e1": "K", "e8": "k", ...}`` (uppercase = White)."""
    board = Board()
    for name, char in pieces.items():
        board.place_piece(Piece.from_char(char), parse_square(name))
    return Position(board, side_to_move, castling_rights)


@pytest.fixture
def make_position() -> PositionFactory:
    """Factory fixture wrapping :func:`build_position`."""
    return build_position


@pytest.fixture(scope="session")
def qapp() -> Iterator[object]:
    """Provide a singleton QCoreApplication for signal tests."""
    from PyQt6.QtCore import QCoreApplication

    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])
    yield app
