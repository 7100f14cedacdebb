"""Chess engine package: evaluation, search, the AI player and Qt worker bridge."""

from chesslogic.engine.ai import ChessAI
from chesslogic.engine.evaluation import PIECE_VALUES, evaluate
from chesslogic.engine.minimax import MinimaxSearchEngine
from chesslogic.engine.qt_bridge import EngineWorker
from chesslogic.engine.search import Difficulty, IEngine, SearchLimits, SearchResult

DefaultEngine: type[IEngine] = MinimaxSearchEngine

__all__ = [
    "ChessAI",
    "DefaultEngine",
    "Difficulty",
    "EngineWorker",
    "IEngine",
    "MinimaxSearchEngine",
    "PIECE_VALUES",
    "SearchLimits",
    "SearchResult",
    "evaluate",
]
