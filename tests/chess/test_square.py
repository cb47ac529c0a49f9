"""Unit tests for chesslogic/chess/square.py"""

from string import ascii_lowercase

import pytest

from chesslogic.chess.square import BOARD_DIMENSIONS, Square


@pytest.mark.parametrize(
    "file, rank, notation",
    [
        (file, rank, f"{ascii_lowercase[file]}{rank + 1}")
        for file in range(8)
        for rank in range(8)
    ],
)
def test_creating_from_algebraic(file: int, rank: int, notation: str) -> None:
    """Simply checks if the notation for 'a1' indeed maps to file 0, rank 0, etc."""
    square = Square.from_algebraic(notation)
    assert square == Square(file, rank)


@pytest.mark.parametrize(
    "file, rank, notation",
    [
        (file, rank, f"{ascii_lowercase[file]}{rank + 1}")
        for file in range(8)
        for rank in range(8)
    ],
)
def test_to_algebraic_notation(file: int, rank: int, notation: str) -> None:
    """Test the reverse, so the square on the first file and first rank should be denoted as a1"""
    square = Square(file, rank)
    assert square.to_algebraic() == notation


@pytest.mark.parametrize(
    "notation",
    [
        "",  # empty
        "e",  # too short
        "e44",  # too long
        "i1",  # file beyond h
        "a0",  # rank below 1
        "a9",  # rank beyond 8
        "E2",  # files are lower case
        "11",  # no file letter
        "ee",  # no rank digit
    ],
)
def test_invalid_algebraic_notation(notation: str) -> None:
    assert Square.from_algebraic(notation) is None


@pytest.mark.parametrize("square", [Square(8, 0), Square(0, 8), Square(-1, 3), Square(3, -1)])
def test_out_of_bounds_to_algebraic(square: Square) -> None:
    """Squares off the board have no name"""
    assert square.to_algebraic() == ""


def test_square_within_bounds() -> None:
    """happy case: squares within the dimensions of the board"""
    for file in range(BOARD_DIMENSIONS[0]):
        for rank in range(BOARD_DIMENSIONS[1]):
            assert Square(file, rank).is_within_bounds()


def test_square_out_of_bounds() -> None:
    assert not Square(BOARD_DIMENSIONS[0], BOARD_DIMENSIONS[1]).is_within_bounds()
    assert not Square(-1, -1).is_within_bounds()


def test_offset() -> None:
    assert Square(3, 3).offset(1, -2) == Square(4, 1)
    assert not Square(0, 0).offset(-1, 0).is_within_bounds()
