"""
Applying moves: validates a proposed move against the legal moves and performs all state updates that come with it.
"""

import logging
from copy import deepcopy
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional, Self

from chesslogic.chess.board import Board
from chesslogic.chess.castling import rook_castling_direction
from chesslogic.chess.fen import GameState
from chesslogic.chess.legality import generate_legal_moves
from chesslogic.chess.moves import (
    AcceptedMove,
    Move,
    double_push_en_passant_square,
    is_pawn_on_promotion_square,
)
from chesslogic.chess.pieces import Color, PieceType
from chesslogic.chess.square import Square
from chesslogic.core.exceptions import IllegalMoveError, InvalidAddressError

_LOGGER = logging.getLogger(__name__)


class Phase(Enum):
    AWAITING_MOVE = auto()
    APPLYING = auto()


@dataclass
class MoveExecutor:
    """
    Owns the live Board and GameState of a game, and the set of legal moves for the player to move.
    ---

    A move is worked out on copies of the board and the state. Only once everything (including the legal moves
    for the next player) has been computed are the copies swapped in, so a failing move changes nothing.
    """

    board: Board
    state: GameState
    history: list[AcceptedMove] = field(default_factory=list)
    history_fen: list[str] = field(default_factory=list)  # descriptor before each move in `history`
    legal_moves: list[Move] = field(init=False, default_factory=list)
    phase: Phase = field(init=False, default=Phase.AWAITING_MOVE)

    def __post_init__(self) -> None:
        self.refresh_legal_moves()

    @classmethod
    def from_fen(cls, fen: str) -> Self:
        return cls(Board.from_fen(fen.split(" ")[0]), GameState.from_fen(fen))

    def to_fen(self) -> str:
        return f"{self.board.to_fen()} {self.state.to_fen()}"

    def refresh_legal_moves(self) -> None:
        self.legal_moves = generate_legal_moves(
            self.board, self.state.color_to_move, self.state.en_passant_square
        )

    def make_move(self, start_address: str, end_address: str) -> AcceptedMove:
        """
        Attempt to make a move
        -----

        1. decode the squares
        2. check the move is one of the legal moves
        3. work out the new board / state (see `_apply`)
        4. swap them in and record the move
        """
        start = Square.from_algebraic(start_address)
        end = Square.from_algebraic(end_address)
        if start is None or end is None:
            raise InvalidAddressError(
                f"Cannot interpret {start_address!r} -> {end_address!r} as squares."
            )

        move = Move(start, end)
        if move not in self.legal_moves:
            raise IllegalMoveError(f"Move not allowed: {move.to_text()}")

        self.phase = Phase.APPLYING
        try:
            accepted_move, board, state, legal_moves = self._apply(move)
        finally:
            self.phase = Phase.AWAITING_MOVE

        self.history_fen.append(self.to_fen())
        self.history.append(accepted_move)
        self.board = board
        self.state = state
        self.legal_moves = legal_moves
        _LOGGER.debug(
            "Applied %s, %d legal replies. Position: %s",
            move.to_text(),
            len(legal_moves),
            self.to_fen(),
        )
        return accepted_move

    def undo_last_move(self) -> Optional[AcceptedMove]:
        """
        Take back the last move.
        ---

        Restores the exact position from before that move: pieces (incl. anything captured), castling rights,
        en passant square and both move counters. Returns None if there is nothing to take back.
        """
        if not self.history:
            return None

        previous_fen = self.history_fen.pop()
        undone = self.history.pop()
        self.board = Board.from_fen(previous_fen.split(" ")[0])
        self.state = GameState.from_fen(previous_fen)
        self.refresh_legal_moves()
        _LOGGER.debug("Took back %s", undone.move.to_text())
        return undone

    # -- PRIVATE HELPERS ---
    def _apply(
        self, move: Move
    ) -> tuple[AcceptedMove, Board, GameState, list[Move]]:
        """
        All updates that come with a legal move, performed on copies.
        NOTE the order matters: everything that depends on who is moving happens before the turn is passed.
        """
        board = self.board.copy()
        state = deepcopy(self.state)

        # Store move info before update
        accepted_move = AcceptedMove.from_move_and_board(move, board)
        moving_piece = accepted_move.moving_piece

        # a double pawn push creates an en passant square, anything else clears it
        state.en_passant_square = double_push_en_passant_square(move, moving_piece)

        # move counters
        if self._is_half_move(accepted_move):
            state.increment_half_move_counter()
        else:
            state.reset_half_move_counter()

        self._revoke_castling_rights_if_needed(state, accepted_move)

        if state.color_to_move == Color.BLACK:
            state.increment_full_move_counter()

        state.pass_turn()

        # update the board (takes care of removing a pawn taken en passant)
        board.apply_move(move)

        # promotion rule: pawns are always promoted to a queen
        landed_piece = board.piece(move.to_square)
        if is_pawn_on_promotion_square(move.to_square, landed_piece):
            assert landed_piece is not None
            landed_piece.promote_to(PieceType.QUEEN)

        legal_moves = generate_legal_moves(
            board, state.color_to_move, state.en_passant_square
        )
        return accepted_move, board, state, legal_moves

    def _is_half_move(self, move: AcceptedMove) -> bool:
        """Neither a pawn move nor a capture"""
        is_pawn_move = move.moving_piece.type == PieceType.PAWN
        is_capture = move.captured_piece is not None
        return not is_pawn_move and not is_capture

    def _revoke_castling_rights_if_needed(
        self, state: GameState, move: AcceptedMove
    ) -> None:
        """
        Checks which rights should get revoked
        ----

        1. If you are moving your king --> revoke both
        2. If you are moving a rook away from its starting corner --> revoke the right on that side
        """
        player_color = move.moving_piece.color
        if not state.can_castle(player_color):
            return

        if move.moving_piece.type == PieceType.KING:
            state.revoke_all_castling_rights(player_color)

        if move.moving_piece.type == PieceType.ROOK:
            direction = rook_castling_direction(player_color, move.move.from_square)
            if direction is not None:
                state.revoke_castling_rights(direction)
