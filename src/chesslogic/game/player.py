"""Concrete player implementations."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from chesslogic.core.enums import Color
from chesslogic.engine.ai import AI_COLOR, ChessAI
from chesslogic.engine.search import IEngine, SearchLimits
from chesslogic.game.interfaces import IPlayer

if TYPE_CHECKING:
    from chesslogic.core.position import Position
    from chesslogic.game.state import GameState


class HumanPlayer(IPlayer):
    """A human participant whose moves come from the UI.

    ``request_move`` is a no-op because humans select moves interactively.
    """

    __slots__ = ("_color", "_name")

    def __init__(self, color: Color, name: str = "") -> None:
        self._color = color
        self._name = name or f"Player ({color})"

    @property
    def color(self) -> Color:
        return self._color

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_human(self) -> bool:
        return True

    def request_move(self, state: GameState) -> bool:
        return False  # Human moves arrive via controller.submit_move()

    def cancel(self) -> None:
        pass


class AIPlayer(IPlayer):
    """The computer opponent.  It always plays Black.

    Without callbacks the move is searched and played synchronously by a
    :class:`ChessAI` inside ``request_move``.  With ``on_request_move`` the
    search is handed off instead (in production to an ``EngineWorker`` in a
    ``QThread``) and the result comes back through ``submit_move``.

    Args:
        name: Display name.
        limits: Search depth for the synchronous path.
        engine: Search implementation for the synchronous path.
        on_request_move: ``(Position) -> None``, called when the game
            controller asks the AI to start thinking.
        on_cancel: ``() -> None``, called to abort a running search.
    """

    __slots__ = (
        "_name",
        "_limits",
        "_engine",
        "_on_request_move",
        "_on_cancel",
    )

    def __init__(
        self,
        name: str = "Engine",
        limits: SearchLimits | None = None,
        engine: IEngine | None = None,
        on_request_move: Callable[[Position], None] | None = None,
        on_cancel: Callable[[], None] | None = None,
    ) -> None:
        self._name = name
        self._limits = limits if limits is not None else SearchLimits()
        self._engine = engine
        self._on_request_move = on_request_move
        self._on_cancel = on_cancel

    @property
    def color(self) -> Color:
        return AI_COLOR

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_human(self) -> bool:
        return False

    @property
    def limits(self) -> SearchLimits:
        return self._limits

    @limits.setter
    def limits(self, value: SearchLimits) -> None:
        self._limits = value

    def request_move(self, state: GameState) -> bool:
        if self._on_request_move is not None:
            self._on_request_move(state.position)
            return False
        return ChessAI(state, self._limits, self._engine).make_move()

    def cancel(self) -> None:
        if self._on_cancel is not None:
            self._on_cancel()
