"""
The Game class will be the entrypoint into the domain layer for the service layer (and any other shell around it).
It is responsible for orchestrating everything required to play a turn: it owns one board + game state through
its MoveExecutor, and answers the questions a front end asks.

NOTE: Errors for a bad move never leave this class: `make_move` simply answers False and leaves the game as it was.
"""

import logging
import random
from dataclasses import dataclass
from typing import Callable, Optional, Self

from chesslogic.chess.board import Board
from chesslogic.chess.castling import CastlingDirection
from chesslogic.chess.executor import MoveExecutor
from chesslogic.chess.fen import STARTING_FEN, GameState
from chesslogic.chess.moves import AcceptedMove, Move
from chesslogic.chess.pieces import Color, Piece
from chesslogic.chess.square import BOARD_DIMENSIONS, FILE_NAMES, Square
from chesslogic.core.exceptions import ChessError, InvariantViolationError
from chesslogic.core.models import GameModel

_LOGGER = logging.getLogger(__name__)

# Given the number of options, return the index of the one to pick
MoveSelector = Callable[[int], int]

CASTLING_LABELS: dict[CastlingDirection, str] = {
    CastlingDirection.WHITE_KING_SIDE: "White king side",
    CastlingDirection.WHITE_QUEEN_SIDE: "White queen side",
    CastlingDirection.BLACK_KING_SIDE: "Black king side",
    CastlingDirection.BLACK_QUEEN_SIDE: "Black queen side",
}


@dataclass
class Game:
    executor: MoveExecutor

    # --- CREATION ---
    @classmethod
    def from_fen(cls, fen: str = STARTING_FEN) -> Self:
        return cls(MoveExecutor.from_fen(fen))

    @classmethod
    def new_game(cls) -> Self:
        return cls.from_fen(STARTING_FEN)

    @classmethod
    def from_model(cls, model: GameModel) -> Self:
        """
        Define how to construct a Game from the information the Service layer actually has.

        The move records are rebuilt from the descriptor stored before each move, so they carry the same
        piece snapshots as when the moves were played.
        """
        executor = MoveExecutor.from_fen(model.current_fen)
        for fen_before, move_text in zip(model.history_fen, model.moves):
            board_before = Board.from_fen(fen_before.split(" ")[0])
            move = Move.from_text(move_text)
            executor.history.append(AcceptedMove.from_move_and_board(move, board_before))
        executor.history_fen.extend(model.history_fen)
        return cls(executor)

    def to_model(self) -> GameModel:
        """Encode back into a format the Service layer uses"""
        return GameModel(
            current_fen=self.to_fen(),
            history_fen=list(self.executor.history_fen),
            moves=[record.move.to_text() for record in self.history],
        )

    # --- QUERIES ---
    @property
    def board(self) -> Board:
        return self.executor.board

    @property
    def state(self) -> GameState:
        return self.executor.state

    @property
    def history(self) -> list[AcceptedMove]:
        return self.executor.history

    @property
    def color_to_move(self) -> Color:
        return self.state.color_to_move

    def to_fen(self) -> str:
        return self.executor.to_fen()

    def legal_moves(self) -> list[str]:
        return [move.to_text() for move in self.executor.legal_moves]

    def state_description(self) -> str:
        """Human readable summary of everything besides the pieces."""
        state = self.state
        en_passant = (
            state.en_passant_square.to_algebraic() if state.en_passant_square else "-"
        )
        lines = [
            f"Turn #{state.full_move_number}. Turn owner: {state.color_to_move.name.lower()}. "
            f"Rule of 50: {state.half_move_clock}",
            "Castling available:",
            *[
                f"  {label}: {'yes' if state.castling_rights[direction] else 'no'}"
                for direction, label in CASTLING_LABELS.items()
            ],
            f"En passant target: {en_passant}",
            f"Position: {self.to_fen()}",
        ]
        return "\n".join(lines)

    def board_cells_for_display(self) -> list[tuple[Square, Optional[Piece]]]:
        """All cells in reading order for a front end: 8th rank first, a-file to h-file."""
        num_files, num_ranks = BOARD_DIMENSIONS
        return [
            (square, self.board.piece(square))
            for rank in range(num_ranks - 1, -1, -1)
            for file in range(num_files)
            for square in [Square(file, rank)]
        ]

    # --- COMMANDS ---
    def make_move(self, move_text: str) -> bool:
        """
        Attempt a move written as two squares, ex. "e2e4".
        ---

        True if the move was played. False (and no change at all) if the text cannot be read or the move is not legal.
        """
        try:
            move = Move.from_text(move_text)
            self.executor.make_move(
                move.from_square.to_algebraic(), move.to_square.to_algebraic()
            )
        except InvariantViolationError:
            _LOGGER.exception("Game reached an impossible state while trying %r", move_text)
            return False
        except ChessError as error:
            _LOGGER.info("Rejected move %r: %s", move_text, error)
            return False
        return True

    def make_random_move(self, selector: Optional[MoveSelector] = None) -> bool:
        """
        Play one of the legal moves, picked by `selector` (random by default).
        False if there is no legal move left.
        """
        legal_moves = self.legal_moves()
        if not legal_moves:
            return False

        pick = selector or random.randrange
        index = pick(len(legal_moves))
        if not 0 <= index < len(legal_moves):
            _LOGGER.warning("Move selector picked index %d out of %d options", index, len(legal_moves))
            return False
        return self.make_move(legal_moves[index])

    def undo(self) -> bool:
        """Take back the last move (see MoveExecutor.undo_last_move). False if no move has been played."""
        return self.executor.undo_last_move() is not None


def render_board(game: Game) -> str:
    """Plain text board. Black pieces are shown in upper case, White pieces in lower case."""
    rows: list[str] = ["  +-----------------+"]
    cells = game.board_cells_for_display()
    num_files = BOARD_DIMENSIONS[0]
    for row_start in range(0, len(cells), num_files):
        row = cells[row_start : row_start + num_files]
        rank_name = row[0][0].rank + 1
        symbols = " ".join(piece.to_fen() if piece else "." for _, piece in row)
        rows.append(f"{rank_name} | {symbols} |")
    rows.append("  +-----------------+")
    rows.append(f"    {' '.join(FILE_NAMES)}")
    return "\n".join(rows)
