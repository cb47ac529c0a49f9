"""
A square on the board, plus conversion to and from algebraic notation.

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass
from string import ascii_lowercase
from typing import Optional

# Chess board is always 8x8. Files and ranks are zero-based: a1 is (0, 0), h8 is (7, 7)
BOARD_DIMENSIONS = (8, 8)
FILE_NAMES = ascii_lowercase[: BOARD_DIMENSIONS[0]]
RANK_NAMES = "".join(str(rank) for rank in range(1, BOARD_DIMENSIONS[1] + 1))


@dataclass(frozen=True)
class Square:
    file: int
    rank: int

    @classmethod
    def from_algebraic(cls, sq: str) -> Optional[Square]:
        """
        Algebraic notation: 'a1' - 'h8' get converted to (0,0) - (7,7)

        Anything that is not exactly a file letter followed by a rank digit on the board gives None.
        """
        if len(sq) != 2:
            return None

        file_char, rank_char = sq[0], sq[1]
        if file_char not in FILE_NAMES or rank_char not in RANK_NAMES:
            return None

        return cls(FILE_NAMES.index(file_char), RANK_NAMES.index(rank_char))

    def to_algebraic(self) -> str:
        """Empty string for squares that are not on the board."""
        if not self.is_within_bounds():
            return ""
        return f"{FILE_NAMES[self.file]}{self.rank + 1}"

    def is_within_bounds(self) -> bool:
        return (0 <= self.file < BOARD_DIMENSIONS[0]) and (
            0 <= self.rank < BOARD_DIMENSIONS[1]
        )

    def offset(self, df: int, dr: int) -> Square:
        """The square found by stepping df files and dr ranks away (might be off the board)."""
        return Square(self.file + df, self.rank + dr)
