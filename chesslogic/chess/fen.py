"""
Position descriptor (FEN-like string) parsing and validation, and the game state encoded in it.
"""

from dataclasses import dataclass, field
from typing import Optional, Self

from chesslogic.chess.castling import (
    CASTLING_DIRECTIONS_BY_COLOR,
    CastlingDirection,
    castling_from_fen,
    castling_to_fen,
)
from chesslogic.chess.pieces import FEN_TO_PIECE, Color
from chesslogic.chess.square import BOARD_DIMENSIONS, Square
from chesslogic.core.exceptions import InvalidFENError

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"
CASTLING_CHARACTERS = "".join(direction.value for direction in CastlingDirection)
# a double push by the opponent leaves its target on this rank
EN_PASSANT_RANK_FOR_COLOR_CODE = {"w": "6", "b": "3"}


def is_valid_fen(fen: str) -> bool:
    """
    Check if given string follows the position descriptor notation.
    """

    # there should be 6 parts to the string
    parts = fen.split(" ")
    if len(parts) != 6:
        return False

    position, color, castling, en_passant, half_move_counter, full_move_counter = parts
    return (
        is_valid_position(position)
        and is_valid_color_code(color)
        and is_valid_castling_rights(castling)
        and is_valid_en_passant(en_passant)
        and en_passant_matches_color(en_passant, color)
        and is_valid_move_counter(half_move_counter)
        and is_valid_move_counter(full_move_counter)
    )


def is_valid_position(position: str) -> bool:
    """Only check the part of the descriptor for the board position."""
    num_files, num_ranks = BOARD_DIMENSIONS
    rank_fens = position.split("/")
    if len(rank_fens) != num_ranks:
        return False

    king_counts = {"k": 0, "K": 0}
    for rank_fen in rank_fens:
        file_count = 0
        for character in rank_fen:
            # make sure every character is valid
            if character.isdecimal():
                file_count += int(character)
            elif character.lower() in FEN_TO_PIECE:
                file_count += 1
                if character in king_counts:
                    king_counts[character] += 1
            else:
                # immediately invalidate if the character is anything else
                return False

        # make sure you are creating a correctly sized board
        if file_count != num_files:
            return False

    # exactly one king per color
    return all(count == 1 for count in king_counts.values())


def is_valid_color_code(color: str) -> bool:
    return color in {"w", "b"}


def is_valid_castling_rights(castling: str) -> bool:
    """Either '-' if all rights have been revoked, or each of K, Q, k, q at most once."""
    if castling == "-":
        return True
    return (
        len(castling) > 0
        and all(character in CASTLING_CHARACTERS for character in castling)
        and len(set(castling)) == len(castling)
    )


def is_valid_en_passant(en_passant: str) -> bool:
    """Valid en passant square encoding should be a square that exists on the board or a '-'"""
    return (en_passant == "-") or Square.from_algebraic(en_passant) is not None


def en_passant_matches_color(en_passant: str, color: str) -> bool:
    """The target square sits behind a pawn of the player who is *not* to move."""
    return en_passant == "-" or en_passant[1:] == EN_PASSANT_RANK_FOR_COLOR_CODE.get(color)


def is_valid_move_counter(counter: str) -> bool:
    return counter.isdecimal()


@dataclass
class GameState:
    """
    Everything in the position descriptor apart from the piece placement.
    ----

    <board position string> <active color> <castling rights> <en passant square> <half move clock> <full move number>

    * The string to describe the board position is handled by the Board class
    * The active color is either "w" or "b"
    * Castling rights are denoted as "k" for king-side or "q" for queen-side. Capital letters for White, small letters for Black.
        In the starting position: KQkq (all rights available). A "-" is used once all rights are revoked.
    * The en passant square is the square a pawn can take on after the opponent's double pawn push. If not available a "-" is used.
    * The half move clock counts the number of moves made since the last pawn move or capture ("rule of 50").
    * The full move number starts at 1 and increments after every move black makes.

    ex) The standard starting position is
    rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1
    i.e. it is white to move, all castling options available, no en passant square, no half moves and we are in the first turn.
    """

    color_to_move: Color = Color.WHITE
    castling_rights: dict[CastlingDirection, bool] = field(
        default_factory=lambda: {direction: True for direction in CastlingDirection}
    )
    en_passant_square: Optional[Square] = None
    half_move_clock: int = 0
    full_move_number: int = 1

    @classmethod
    def from_fen(cls, fen: str) -> Self:
        """Parse the descriptor into data (the placement part is left for the Board)."""

        # raise an exception if invalid descriptor:
        if not is_valid_fen(fen):
            raise InvalidFENError(f"Cannot interpret supplied string as position descriptor: {fen!r}")

        # extract the different components. Descriptor is space separated
        (
            _,
            active_color,
            castling_str,
            en_passant_algebraic,
            half_move_clock,
            full_move_number,
        ) = fen.split(" ")

        return cls(
            color_to_move=Color.WHITE if active_color == "w" else Color.BLACK,
            castling_rights=castling_from_fen(castling_str),
            en_passant_square=(
                Square.from_algebraic(en_passant_algebraic)
                if en_passant_algebraic != "-"
                else None
            ),
            half_move_clock=int(half_move_clock),
            full_move_number=int(full_move_number),
        )

    def to_fen(self) -> str:
        """reverse operation: the five fields after the placement, space separated"""
        active_color = "w" if self.color_to_move == Color.WHITE else "b"
        castling_str = castling_to_fen(self.castling_rights)
        en_passant_algebraic = (
            self.en_passant_square.to_algebraic()
            if self.en_passant_square is not None
            else "-"
        )
        return f"{active_color} {castling_str} {en_passant_algebraic} {self.half_move_clock} {self.full_move_number}"

    # --- CASTLING RIGHTS ---
    def castling_options(self, color: Color) -> tuple[CastlingDirection, ...]:
        return CASTLING_DIRECTIONS_BY_COLOR[color]

    def can_castle(self, color: Color) -> bool:
        """Any castling right left for this color?"""
        return any(self.castling_rights[direction] for direction in self.castling_options(color))

    def revoke_castling_rights(self, direction: CastlingDirection) -> None:
        """NOTE: there is no way to grant a right again."""
        self.castling_rights[direction] = False

    def revoke_all_castling_rights(self, color: Color) -> None:
        for direction in self.castling_options(color):
            self.revoke_castling_rights(direction)

    # --- MOVE COUNTERS ---
    def increment_half_move_counter(self) -> None:
        self.half_move_clock += 1

    def reset_half_move_counter(self) -> None:
        self.half_move_clock = 0

    def increment_full_move_counter(self) -> None:
        self.full_move_number += 1

    def pass_turn(self) -> None:
        self.color_to_move = self.color_to_move.opponent
