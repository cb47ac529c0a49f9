"""
Type definitions used across layers
"""

from enum import StrEnum

# --- NOTE The domain layer has its own Color / PieceType enums (chesslogic/chess/pieces.py).
# --- These are the string versions that can cross the API boundary.


class Color(StrEnum):
    WHITE = "white"
    BLACK = "black"


class PieceType(StrEnum):
    PAWN = "pawn"
    KNIGHT = "knight"
    BISHOP = "bishop"
    ROOK = "rook"
    QUEEN = "queen"
    KING = "king"
