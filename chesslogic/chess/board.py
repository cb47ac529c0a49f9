"""The Game board implements all rules that effect the `position` (in chess: the configuration of pieces on the board)"""

from copy import deepcopy
from dataclasses import dataclass
from typing import Optional, Self

from chesslogic.chess.moves import (
    Move,
    en_passant_victim_square,
    is_en_passant_capture,
)
from chesslogic.chess.pieces import FEN_TO_PIECE, Color, Piece, PieceType
from chesslogic.chess.square import BOARD_DIMENSIONS, Square
from chesslogic.core.exceptions import InvalidFENError, InvariantViolationError


@dataclass
class Cell:
    """One of the 64 squares of the board, with the piece standing on it (if any)."""

    square: Square
    piece: Optional[Piece] = None

    @property
    def is_empty(self) -> bool:
        return self.piece is None


@dataclass
class Board:
    cells: dict[Square, Cell]

    @classmethod
    def empty(cls) -> Self:
        return cls(
            {
                Square(file, rank): Cell(Square(file, rank))
                for rank in range(BOARD_DIMENSIONS[1])
                for file in range(BOARD_DIMENSIONS[0])
            }
        )

    @classmethod
    def from_fen(cls, fen_str: str) -> Self:
        """Construct a board using the placement part of a position descriptor.

        ex. standard starting position:
        rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR
        means:
        * the first group describes the 1st rank, starting with the a-file: rook on a1, knight on b1, etc.
        * pawns cover 2nd rank entirely
        * ranks 3 through 6 have 8 consecutive empty squares
        * 7th rank are the black pawns
        * 8th rank are the black pieces.

        Every placement must hold exactly one king per color.

        NOTE: lower case letters are White pieces, upper case letters are Black pieces (see pieces.py).
        Together with reading the 1st rank first, the standard starting string still gives the standard starting position.
        """
        rank_fens = fen_str.split("/")
        if len(rank_fens) != BOARD_DIMENSIONS[1]:
            raise InvalidFENError(
                f"Expected {BOARD_DIMENSIONS[1]} ranks separated by '/', got {len(rank_fens)}: {fen_str!r}"
            )

        board = cls.empty()
        for rank, fen_one_rank in enumerate(rank_fens):
            file = 0
            for character in fen_one_rank:
                if character.isdecimal():
                    # A number denotes the amount of empty squares after each other
                    file += int(character)
                elif character.lower() in FEN_TO_PIECE:
                    # a letter directly denotes the piece that should be created
                    if file >= BOARD_DIMENSIONS[0]:
                        raise InvalidFENError(f"Rank {rank + 1} is too long: {fen_one_rank!r}")
                    board.cells[Square(file, rank)].piece = Piece.from_fen(character)
                    file += 1
                else:
                    raise InvalidFENError(
                        f"Unknown character {character!r} in rank {rank + 1}: {fen_one_rank!r}"
                    )

            if file != BOARD_DIMENSIONS[0]:
                raise InvalidFENError(
                    f"Rank {rank + 1} does not describe exactly {BOARD_DIMENSIONS[0]} squares: {fen_one_rank!r}"
                )

        for color in Color:
            kings = [
                cell
                for cell in board.cells_of_color(color)
                if cell.piece is not None and cell.piece.type == PieceType.KING
            ]
            if len(kings) != 1:
                raise InvalidFENError(
                    f"Expected exactly one {color.name.lower()} king, found {len(kings)}: {fen_str!r}"
                )
        return board

    def to_fen(self) -> str:
        """Ranks are separated by slashes, in the same order as they are read."""
        return "/".join(
            self._rank_to_fen(rank) for rank in range(BOARD_DIMENSIONS[1])
        )

    def _rank_to_fen(self, rank: int) -> str:
        """placement string of a single rank"""
        fen_characters: list[str] = []
        empty_count = 0
        for file in range(BOARD_DIMENSIONS[0]):
            piece = self.piece(Square(file, rank))

            if piece is not None:
                if empty_count > 0:
                    fen_characters.append(str(empty_count))
                    empty_count = 0
                fen_characters.append(piece.to_fen())
            else:
                empty_count += 1

        # if the entire rank is empty, then we still place this number in the string
        if empty_count > 0:
            fen_characters.append(str(empty_count))
        return "".join(fen_characters)

    # --- LOOKUPS ---
    def cell_at(self, square: Square) -> Optional[Cell]:
        """None for squares that are not on the board"""
        return self.cells.get(square)

    def cell_at_address(self, address: str) -> Optional[Cell]:
        square = Square.from_algebraic(address)
        if square is None:
            return None
        return self.cell_at(square)

    def piece(self, square: Square) -> Optional[Piece]:
        cell = self.cell_at(square)
        return cell.piece if cell else None

    def occupied_cells(self) -> list[Cell]:
        return [cell for cell in self.cells.values() if not cell.is_empty]

    def cells_of_color(self, color: Color) -> list[Cell]:
        return [
            cell
            for cell in self.cells.values()
            if cell.piece is not None and cell.piece.color == color
        ]

    def cell_with_king(self, color: Color) -> Cell:
        """Both kings are on the board in every position that can be reached by playing legal moves."""
        for cell in self.cells_of_color(color):
            assert cell.piece is not None
            if cell.piece.type == PieceType.KING:
                return cell
        raise InvariantViolationError(f"No {color.name.lower()} king on the board.")

    def copy(self) -> Self:
        """Independent copy: changing the copy (or its pieces) never touches this board."""
        return deepcopy(self)

    # --- UPDATES ---
    def place_piece(self, piece: Piece, square: Square) -> None:
        self.cells[square].piece = piece

    def remove_piece(self, square: Square) -> Optional[Piece]:
        cell = self.cells[square]
        piece, cell.piece = cell.piece, None
        return piece

    def move_piece(self, move: Move) -> Optional[Piece]:
        """Update the position on the board. Returns whatever got overwritten on the target square."""
        piece_that_moved = self.remove_piece(move.from_square)
        captured = self.cells[move.to_square].piece
        self.cells[move.to_square].piece = piece_that_moved
        return captured

    def apply_move(self, move: Move) -> Optional[Piece]:
        """
        Move a piece, including the side effect of taking en passant.
        ---

        1. A pawn landing diagonally on an empty square is taking en passant: remove the pawn it passed
        2. Move the piece (anything on the target square is captured)

        Returns the captured piece, if any.
        """
        captured: Optional[Piece] = None
        if is_en_passant_capture(move, self):
            captured = self.remove_piece(en_passant_victim_square(move))
        return self.move_piece(move) or captured
