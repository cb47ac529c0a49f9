"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Callable, Generator

import pytest
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from chesslogic.chess.board import Board
from chesslogic.chess.pieces import Piece
from chesslogic.chess.square import Square
from chesslogic.db.schema import Base

# Setup an in-memory SQLite database for testing
DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)


@pytest.fixture
def db_session_repo() -> Generator[Session, None, None]:
    """Connection to a test database. Tables are removed at teardown to make unit tests of repository independent of each other."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        Base.metadata.drop_all(bind=engine)
        db.close()


@pytest.fixture
def board_from_pieces() -> Callable[[dict[str, str]], Board]:
    """
    Call the inner function with a mapping of square name -> piece letter, ex. {"e1": "k", "e8": "K"}

    NOTE: lower case is a White piece, upper case a Black piece.
    """

    def _create_board(pieces: dict[str, str]) -> Board:
        board = Board.empty()
        for square_name, letter in pieces.items():
            square = Square.from_algebraic(square_name)
            assert square is not None
            board.place_piece(Piece.from_fen(letter), square)
        return board

    return _create_board


@pytest.fixture
def fen_from_pieces(
    board_from_pieces: Callable[[dict[str, str]], Board],
) -> Callable[..., str]:
    """Same as board_from_pieces, but returns a full position descriptor (White to move, no rights, by default)"""

    def _create_fen(pieces: dict[str, str], state: str = "w - - 0 1") -> str:
        return f"{board_from_pieces(pieces).to_fen()} {state}"

    return _create_fen
