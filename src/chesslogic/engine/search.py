"""Shared engine search models and protocol."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import IntEnum
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from chesslogic.core.move import Move
    from chesslogic.core.position import Position

CancelCheck = Callable[[], bool]

DEFAULT_DEPTH = 3


class Difficulty(IntEnum):
    """Named difficulty levels; the value is the search depth in plies."""

    EASY = 2
    NORMAL = 3
    HARD = 4


@dataclass(slots=True, frozen=True)
class SearchLimits:
    """Search constraints for a single move computation."""

    max_depth: int = DEFAULT_DEPTH

    @classmethod
    def for_difficulty(cls, difficulty: Difficulty) -> SearchLimits:
        return cls(max_depth=int(difficulty))


@dataclass(slots=True, frozen=True)
class SearchResult:
    """Result produced by the engine search.

    ``score`` is from Black's point of view: positive favours Black.
    A cancelled search reports ``depth == 0``: its scores come from a
    partially searched tree and no ply was searched to full depth.
    """

    best_move: Move | None
    score: int
    depth: int
    nodes: int
    cutoffs: int = 0
    cancelled: bool = False


class IEngine(Protocol):
    """Protocol for chess engines used by the AI player and worker bridge."""

    def search(
        self,
        position: Position,
        limits: SearchLimits,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchResult: ...
