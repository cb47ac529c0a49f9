"""
Legality filter: throw away every candidate move that would leave your own king under attack.

The check is done by simulation instead of pin detection:
1. Copy the board
2. make the candidate move on the copy
3. let the opponent generate all of its moves on the copy
4. if any of those ends on your king's square, the candidate move is illegal
"""

from typing import Optional

from chesslogic.chess.board import Board
from chesslogic.chess.moves import Move, generate_pseudo_legal_moves
from chesslogic.chess.pieces import Color
from chesslogic.chess.square import Square


def hypothetical_board(board: Board, move: Move) -> Board:
    """The board as it would look after the move. The original board is left untouched."""
    board_after = board.copy()
    board_after.apply_move(move)
    return board_after


def is_king_attacked(board: Board, color: Color) -> bool:
    """Could any of the opponent's pieces move onto the square of this color's king?"""
    king_square = board.cell_with_king(color).square
    # NOTE: En passant never targets a king, so the opponent's replies do not need the en passant square.
    opponent_moves = generate_pseudo_legal_moves(board, color.opponent)
    return any(move.to_square == king_square for move in opponent_moves)


def is_putting_yourself_in_check(board: Board, move: Move, color: Color) -> bool:
    """Return True if making the move leaves the king of `color` under attack"""
    return is_king_attacked(hypothetical_board(board, move), color)


def filter_legal_moves(board: Board, color: Color, candidate_moves: list[Move]) -> list[Move]:
    """keep those moves that do not put (or leave) you in check"""
    return [
        move
        for move in candidate_moves
        if not is_putting_yourself_in_check(board, move, color)
    ]


def generate_legal_moves(
    board: Board, color: Color, en_passant_square: Optional[Square] = None
) -> list[Move]:
    """
    List of legal moves for the player with the 'color' pieces
    ----

    1. generate candidate moves, using the basic movement rules for all pieces (incl. taking en passant)
    2. remove illegal options --> a move that would put you in check or you are in check and the move does not get you out of it.
    """
    candidate_moves = generate_pseudo_legal_moves(board, color, en_passant_square)
    return filter_legal_moves(board, color, candidate_moves)
