"""
Helpers for castling-rights bookkeeping. Need to be imported by multiple sources.

Castling itself is never played by this engine; we only keep track of whether the right to castle
has been lost. Once lost, a right never comes back.
"""

from enum import Enum
from typing import Optional

from chesslogic.chess.pieces import Color
from chesslogic.chess.square import Square


class CastlingDirection(Enum):
    """The four castling directions. Values represent their encodings in the position descriptor."""

    WHITE_KING_SIDE = "K"
    WHITE_QUEEN_SIDE = "Q"
    BLACK_KING_SIDE = "k"
    BLACK_QUEEN_SIDE = "q"


# Order in which the rights are written out
CASTLING_ORDER: tuple[CastlingDirection, ...] = (
    CastlingDirection.WHITE_KING_SIDE,
    CastlingDirection.WHITE_QUEEN_SIDE,
    CastlingDirection.BLACK_KING_SIDE,
    CastlingDirection.BLACK_QUEEN_SIDE,
)

CASTLING_DIRECTIONS_BY_COLOR: dict[Color, tuple[CastlingDirection, CastlingDirection]] = {
    Color.WHITE: (CastlingDirection.WHITE_KING_SIDE, CastlingDirection.WHITE_QUEEN_SIDE),
    Color.BLACK: (CastlingDirection.BLACK_KING_SIDE, CastlingDirection.BLACK_QUEEN_SIDE),
}

# The corner each rook starts on. A rook leaving this square costs its side the matching right.
ROOK_STARTING_SQUARES: dict[CastlingDirection, Square] = {
    CastlingDirection.WHITE_KING_SIDE: Square(7, 0),
    CastlingDirection.WHITE_QUEEN_SIDE: Square(0, 0),
    CastlingDirection.BLACK_KING_SIDE: Square(7, 7),
    CastlingDirection.BLACK_QUEEN_SIDE: Square(0, 7),
}


def castling_from_fen(castle_fen: str) -> dict[CastlingDirection, bool]:
    """parse the part of the descriptor that encodes castling rights"""
    return {
        direction: (direction.value in castle_fen) for direction in CastlingDirection
    }


def castling_to_fen(castling_rights: dict[CastlingDirection, bool]) -> str:
    """create the part of the descriptor that encodes castling rights"""
    castling_chars = "".join(
        [direction.value for direction in CASTLING_ORDER if castling_rights[direction]]
    )
    return castling_chars or "-"


def rook_castling_direction(color: Color, from_square: Square) -> Optional[CastlingDirection]:
    """Which of the player's castling rights is tied to a rook leaving `from_square` (if any)."""
    for direction in CASTLING_DIRECTIONS_BY_COLOR[color]:
        if ROOK_STARTING_SQUARES[direction] == from_square:
            return direction
    return None
