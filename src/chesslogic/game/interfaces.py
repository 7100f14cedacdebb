"""Abstract interfaces for the game layer.

The GameController depends on these ABCs, not on concrete players.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum, auto
from typing import TYPE_CHECKING

from chesslogic.core.enums import Color, PieceType

if TYPE_CHECKING:
    from chesslogic.core.types import Square
    from chesslogic.game.state import GameState


# ── Game phase FSM states ────────────────────────────────────────────────────


class GamePhase(IntEnum):
    """Finite-state-machine states for a chess game."""

    NOT_STARTED = auto()
    AWAITING_MOVE = auto()
    AWAITING_PROMOTION = auto()  # a human pawn reached the last rank
    THINKING = auto()  # AI is computing
    GAME_OVER = auto()


# ── Abstract interfaces ─────────────────────────────────────────────────────


class IPlayer(ABC):
    """Interface for a game participant (human or AI)."""

    @property
    @abstractmethod
    def color(self) -> Color: ...

    @property
    @abstractmethod
    def name(self) -> str: ...

    @property
    @abstractmethod
    def is_human(self) -> bool: ...

    @abstractmethod
    def request_move(self, state: GameState) -> bool:
        """Begin the move-selection process.

        Returns ``True`` if a move was played on *state* before returning.
        Humans and asynchronous engines return ``False``; their move comes
        back later through the controller's ``submit_move``.
        """

    @abstractmethod
    def cancel(self) -> None:
        """Cancel an ongoing move computation (AI only, no-op for human)."""


class IGameController(ABC):
    """Interface for the game orchestrator."""

    @abstractmethod
    def new_game(self, white: IPlayer, black: IPlayer) -> None:
        """Set up a new game."""

    @abstractmethod
    def submit_move(self, from_sq: Square, to_sq: Square) -> bool:
        """Submit a move. Returns True if legal and applied."""

    @abstractmethod
    def promote(self, piece_type: PieceType) -> bool:
        """Choose the piece for a pending pawn promotion."""

    @abstractmethod
    def resign(self, color: Color) -> None:
        """Player of *color* resigns."""

    @abstractmethod
    def undo_move(self) -> bool:
        """Undo the last move. Returns True on success."""

    @abstractmethod
    def restart(self) -> None:
        """Start over with the same players."""
