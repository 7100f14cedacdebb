"""Application entry point: play White against the engine in a terminal."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Callable, Iterable

from chesslogic.core.board import Board
from chesslogic.core.enums import Color, GameEndReason, GameResult, PieceType
from chesslogic.core.move import Move
from chesslogic.core.types import Square
from chesslogic.engine.search import Difficulty, SearchLimits
from chesslogic.game.controller import GameController
from chesslogic.game.interfaces import GamePhase
from chesslogic.game.player import AIPlayer, HumanPlayer
from chesslogic.game.state import GameState

_LOGGER = logging.getLogger(__name__)

_PROMOTION_KEYS: dict[str, PieceType] = {
    "q": PieceType.QUEEN,
    "r": PieceType.ROOK,
    "b": PieceType.BISHOP,
    "n": PieceType.KNIGHT,
}

HELP_TEXT = (
    "Enter moves as e2e4. Commands: board, moves, undo, resign, new, help, quit.\n"
    "When a pawn promotes, answer q, r, b or n."
)

Writer = Callable[[str], None]


def render_board(board: Board) -> str:
    """Board diagram with White at the bottom, using Unicode pieces."""
    lines = []
    for rank in range(8):
        cells = []
        for file in range(8):
            piece = board[file, rank]
            cells.append(piece.symbol if piece is not None else "·")
        lines.append(f"{8 - rank} {' '.join(cells)}")
    lines.append("  a b c d e f g h")
    return "\n".join(lines)


def describe_result(result: GameResult, reason: GameEndReason | None) -> str:
    if result == GameResult.DRAW:
        return "Draw by stalemate."
    winner = "White" if result == GameResult.WHITE_WINS else "Black"
    how = reason.name.lower() if reason is not None else "unknown"
    return f"{winner} wins by {how}."


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chesslogic",
        description="Play White against a minimax chess engine.",
    )
    level = parser.add_mutually_exclusive_group()
    level.add_argument(
        "--depth",
        type=int,
        help="search depth in plies (default: %(default)s)",
    )
    level.add_argument(
        "--difficulty",
        choices=[d.name.lower() for d in Difficulty],
        default=Difficulty.NORMAL.name.lower(),
        help="named search depth preset (default: %(default)s)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="logging verbosity (default: %(default)s)",
    )
    return parser


def limits_from_args(args: argparse.Namespace) -> SearchLimits:
    if args.depth is not None:
        if args.depth < 1:
            raise ValueError("Search depth must be >= 1")
        return SearchLimits(max_depth=args.depth)
    return SearchLimits.for_difficulty(Difficulty[args.difficulty.upper()])


class TerminalSession:
    """Feeds text commands into a :class:`GameController` and reports back."""

    __slots__ = ("controller", "_write", "_white", "_black")

    def __init__(self, limits: SearchLimits, write: Writer = print) -> None:
        self.controller = GameController()
        self._write = write
        self._white = HumanPlayer(Color.WHITE, "You")
        self._black = AIPlayer(limits=limits)

        events = self.controller.events
        events.on_move.append(self._on_move)
        events.on_promotion_required.append(self._on_promotion)
        events.on_game_over.append(self._on_game_over)

    @property
    def state(self) -> GameState:
        return self.controller.state

    def start(self) -> None:
        self.controller.new_game(self._white, self._black)
        self._write(HELP_TEXT)
        self._write(render_board(self.state.board))

    def handle(self, line: str) -> bool:
        """Process one input line. Returns ``False`` when the user quits."""
        text = line.strip().lower()
        if not text:
            return True
        if text in ("quit", "exit"):
            return False

        if self.controller.phase == GamePhase.AWAITING_PROMOTION:
            piece_type = _PROMOTION_KEYS.get(text)
            if piece_type is None or not self.controller.promote(piece_type):
                self._write("Promote to q, r, b or n.")
            else:
                self._write(render_board(self.state.board))
            return True

        if text == "help":
            self._write(HELP_TEXT)
        elif text == "board":
            self._write(render_board(self.state.board))
        elif text == "moves":
            self._write(" ".join(str(m) for m in self.state.legal_moves()) or "(none)")
        elif text == "undo":
            if self.controller.undo_move():
                self._write(render_board(self.state.board))
            else:
                self._write("Nothing to undo.")
        elif text == "resign":
            self.controller.resign(Color.WHITE)
        elif text == "new":
            self.controller.restart()
            self._write(render_board(self.state.board))
        else:
            self._play(text)
        return True

    def run(self, lines: Iterable[str]) -> None:
        self.start()
        for line in lines:
            if not self.handle(line):
                break

    def _play(self, text: str) -> None:
        try:
            move = Move.from_str(text)
        except ValueError:
            self._write(f"Unknown command: {text!r} (type 'help')")
            return

        if self.state.is_game_over:
            self._write("The game is over. Type 'new' to play again.")
            return
        if not self.controller.submit_move(move.from_sq, move.to_sq):
            self._write(f"Illegal move: {move}")
            return
        if self.controller.phase != GamePhase.AWAITING_PROMOTION:
            self._write(render_board(self.state.board))
        if self.controller.phase == GamePhase.THINKING:
            self._write("The engine could not move.")

    # ── Event handlers ───────────────────────────────────────────────────

    def _on_move(self, move: Move, state: GameState) -> None:
        mover = state.current_turn.opposite
        suffix = "+" if state.move_history and state.move_history[-1].was_check else ""
        self._write(f"{mover}: {move}{suffix}")

    def _on_promotion(self, square: Square) -> None:
        self._write(f"Pawn on {square} promotes. Choose q, r, b or n:")

    def _on_game_over(self, result: GameResult, reason: GameEndReason | None) -> None:
        self._write(describe_result(result, reason))


def _input_lines() -> Iterable[str]:
    while True:
        try:
            yield input("> ")
        except EOFError:
            return


def main(argv: list[str] | None = None) -> int:
    """Launch the terminal game."""
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        limits = limits_from_args(args)
    except ValueError as exc:
        parser.error(str(exc))

    _LOGGER.info("Engine depth %d", limits.max_depth)
    session = TerminalSession(limits)
    try:
        session.run(_input_lines())
    except KeyboardInterrupt:
        print()
    return 0


if __name__ == "__main__":
    sys.exit(main())
