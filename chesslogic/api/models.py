"""Requests and Response models"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from chesslogic.chess.fen import is_valid_fen
from chesslogic.chess.square import Square
from chesslogic.core.exceptions import InvalidRequestError
from chesslogic.core.shared_types import Color, PieceType


# --- REQUEST MODELS ---
class CreateGameRequest(BaseModel):
    starting_fen: Optional[str] = None

    @field_validator("starting_fen")
    @classmethod
    def validate_starting_fen(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value

        value = value.strip()
        parts = value.split(" ")
        if len(parts) != 6:
            raise InvalidRequestError(
                "Position descriptor must contain 6 space-separated parts."
            )
        if not is_valid_fen(value):
            raise InvalidRequestError(
                f"Cannot interpret {value!r} as a position descriptor."
            )
        return value


class GetGameRequest(BaseModel):
    game_id: UUID


class LegalMovesRequest(BaseModel):
    game_id: UUID


class MoveRequest(BaseModel):
    game_id: UUID
    move: str

    @field_validator("move")
    @classmethod
    def validate_move(cls, value: str) -> str:
        """Two squares in algebraic notation, ex. 'e2e4'"""
        value = value.strip()
        if len(value) != 4:
            raise InvalidRequestError(
                f"Move must be written as two squares, ex. 'e2e4'. Got: {value!r}"
            )

        for square_name in (value[:2], value[2:]):
            if Square.from_algebraic(square_name) is None:
                raise InvalidRequestError(
                    f"Cannot interpret {square_name!r} as a valid square name."
                )
        return value


class RandomMoveRequest(BaseModel):
    game_id: UUID


class UndoMoveRequest(BaseModel):
    game_id: UUID


class DeleteGameRequest(BaseModel):
    game_id: UUID


# --- RESPONSE MODELS ---
class CellResponse(BaseModel):
    square: str
    piece: Optional[PieceType] = None
    color: Optional[Color] = None


class GameResponse(BaseModel):
    game_id: UUID
    fen_state: str
    starting_state: str
    color_to_move: Color
    description: str
    move_history: list[str]
    board: list[CellResponse]


class MoveResponse(BaseModel):
    accepted: bool
    game: GameResponse


class LegalMovesResponse(BaseModel):
    game_id: UUID
    color: Color
    legal_moves: list[str]
