"""GameController: the central orchestrator of a chess game.

Coordinates: Players, GameState, promotion choice and the AI reply.
Emits events via simple callbacks so the UI / tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from chesslogic.core.enums import Color, GameEndReason, GameResult, PieceType
from chesslogic.core.move import Move
from chesslogic.core.types import Square
from chesslogic.game.interfaces import GamePhase, IGameController, IPlayer
from chesslogic.game.state import GameState

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[Move, "GameState"], None]
PromotionCallback = Callable[[Square], None]
GameOverCallback = Callable[[GameResult, "GameEndReason | None"], None]
PhaseCallback = Callable[[GamePhase], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_promotion_required: list[PromotionCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_phase_changed: list[PhaseCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController(IGameController):
    """Orchestrates a full chess game: validates moves, switches turns,
    asks for promotion pieces, lets the AI reply, notifies listeners.

    Thread-safety: methods are designed to be called from a single thread
    (the main/UI thread).  Results of a background engine search must be
    delivered to ``submit_move`` on that thread (e.g. via a queued signal).
    """

    __slots__ = ("_state", "_players", "_phase", "events")

    def __init__(self) -> None:
        self._state = GameState.new()
        self._players: dict[Color, IPlayer] = {}
        self._phase = GamePhase.NOT_STARTED
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def phase(self) -> GamePhase:
        return self._phase

    @property
    def current_player(self) -> IPlayer | None:
        return self._players.get(self._state.current_turn)

    def player(self, color: Color) -> IPlayer | None:
        return self._players.get(color)

    # ── IGameController impl ─────────────────────────────────────────────

    def new_game(self, white: IPlayer, black: IPlayer) -> None:
        if white.color != Color.WHITE or black.color != Color.BLACK:
            raise ValueError("Players must be given as (white, black)")

        for old in self._players.values():
            if not old.is_human:
                old.cancel()
        self._players = {Color.WHITE: white, Color.BLACK: black}
        self._state = GameState.new()
        _LOGGER.info("New game: %s vs %s", white.name, black.name)

        self._set_phase(GamePhase.AWAITING_MOVE)
        self._prompt_current_player()

    def restart(self) -> None:
        if not self._players:
            raise RuntimeError("No game to restart")
        self.new_game(self._players[Color.WHITE], self._players[Color.BLACK])

    def submit_move(self, from_sq: Square, to_sq: Square) -> bool:
        if self._state.is_game_over:
            return False
        if self._phase not in (GamePhase.AWAITING_MOVE, GamePhase.THINKING):
            return False

        mover = self.current_player
        if not self._state.try_make_move(from_sq, to_sq):
            return False
        move = self._state.move_history[-1].move

        promo_sq = self._state.pending_promotion
        if promo_sq is not None:
            if mover is None or mover.is_human:
                self._emit_move(move)
                self._set_phase(GamePhase.AWAITING_PROMOTION)
                for cb in self.events.on_promotion_required:
                    cb(promo_sq)
                return True
            self._state.promote_pawn(promo_sq, PieceType.QUEEN)

        self._emit_move(move)
        self._after_move()
        return True

    def promote(self, piece_type: PieceType) -> bool:
        if self._phase != GamePhase.AWAITING_PROMOTION:
            return False
        sq = self._state.pending_promotion
        if sq is None or not self._state.promote_pawn(sq, piece_type):
            return False
        self._after_move()
        return True

    def resign(self, color: Color) -> None:
        if self._state.is_game_over:
            return
        cp = self.current_player
        if cp is not None and not cp.is_human:
            cp.cancel()
        if self._state.resign(color):
            self._emit_game_over()

    def undo_move(self) -> bool:
        if self._state.is_game_over or not self._state.move_history:
            return False

        # Cancel AI if it's thinking
        cp = self.current_player
        if cp is not None and not cp.is_human:
            cp.cancel()

        self._state.undo_last_move()
        # Back to the last position where a human is to move.
        while self._state.move_history and not self._is_human_turn():
            self._state.undo_last_move()

        self._set_phase(GamePhase.AWAITING_MOVE)
        self._prompt_current_player()
        return True

    # ── Internal helpers ─────────────────────────────────────────────────

    def _is_human_turn(self) -> bool:
        cp = self.current_player
        return cp is None or cp.is_human

    def _after_move(self) -> None:
        if self._state.is_game_over:
            self._emit_game_over()
        else:
            self._prompt_current_player()

    def _prompt_current_player(self) -> None:
        """Ask the current player to move."""
        cp = self.current_player
        if cp is None:
            return

        if cp.is_human:
            self._set_phase(GamePhase.AWAITING_MOVE)
            return

        self._set_phase(GamePhase.THINKING)
        if cp.request_move(self._state):
            self._emit_move(self._state.move_history[-1].move)
            self._after_move()

    def _emit_move(self, move: Move) -> None:
        for cb in self.events.on_move:
            cb(move, self._state)

    def _emit_game_over(self) -> None:
        self._set_phase(GamePhase.GAME_OVER)
        for cb in self.events.on_game_over:
            cb(self._state.result, self._state.end_reason)

    def _set_phase(self, phase: GamePhase) -> None:
        self._phase = phase
        for cb in self.events.on_phase_changed:
            cb(phase)
