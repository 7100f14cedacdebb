"""Game management layer: controller, players, state machine.

Quick start::

    from chesslogic.game import AIPlayer, GameController, HumanPlayer

    ctrl = GameController()
    ctrl.new_game(white=HumanPlayer(Color.WHITE, "Alice"), black=AIPlayer())
    ctrl.submit_move(parse_square("e2"), parse_square("e4"))  # Black replies
"""

from chesslogic.game.controller import GameController, GameEvents
from chesslogic.game.interfaces import GamePhase, IGameController, IPlayer
from chesslogic.game.player import AIPlayer, HumanPlayer
from chesslogic.game.state import PROMOTION_CHOICES, GameState, MoveRecord

__all__ = [
    # Interfaces
    "GamePhase",
    "IGameController",
    "IPlayer",
    # Concrete
    "AIPlayer",
    "GameController",
    "GameEvents",
    "GameState",
    "HumanPlayer",
    "MoveRecord",
    "PROMOTION_CHOICES",
]
