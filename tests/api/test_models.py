from uuid import UUID, uuid4

import pytest

from chesslogic.api.models import CellResponse, CreateGameRequest, MoveRequest
from chesslogic.core.exceptions import InvalidRequestError
from chesslogic.core.shared_types import Color, PieceType


@pytest.fixture
def mock_id() -> UUID:
    return uuid4()


# -- Validation - CreateGameRequest --
def test_valid_fen() -> None:
    """Test that CreateGameRequest accepts a valid FEN string."""

    valid_fen = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"
    request = CreateGameRequest(starting_fen=valid_fen)
    assert request.starting_fen == valid_fen


def test_fen_gets_stripped() -> None:
    valid_fen = "4K3/8/8/8/8/8/8/4k3 b - - 0 1"
    request = CreateGameRequest(starting_fen=f"  {valid_fen}\n")
    assert request.starting_fen == valid_fen


def test_starting_fen_is_optional() -> None:
    """Should be able to not supply a starting FEN, and validator just returns None."""
    assert CreateGameRequest().starting_fen is None
    assert CreateGameRequest(starting_fen=None).starting_fen is None


@pytest.mark.parametrize(
    "invalid_fen",
    [
        "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0",  # only 5 space-separated values
        "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1 extra",  # too many space-separated values
        "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNX w KQkq - 0 1",  # unknown piece letter
        "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkk - 0 1",  # repeated castling letter
        "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq e9 0 1",  # square off the board
        "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - x 1",  # counter is not a number
        "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq e3 0 1",  # en passant rank does not match the side to move
        "8/8/8/8/8/8/8/8 w - - 0 1",  # no kings
        "K7/8/8/8/8/8/8/4k2k w - - 0 1",  # two white kings
    ],
)
def test_invalid_fen(invalid_fen: str) -> None:
    with pytest.raises(InvalidRequestError):
        _ = CreateGameRequest(starting_fen=invalid_fen)


# -- Validation - MoveRequest --
def test_valid_move(mock_id: UUID) -> None:
    """Test that MoveRequest accepts two correctly written squares in algebraic notation."""
    request = MoveRequest(game_id=mock_id, move="e2e4")
    assert request.move == "e2e4"
    assert request.game_id == mock_id


@pytest.mark.parametrize(
    "move",
    [
        "nonsense",  # anything but two squares
        "e2",  # a single square
        "11e4",  # First character is not a letter
        "e2ee",  # fourth character is not a number
        "e2e9",  # off the board
        "i1a1",  # off the board
    ],
)
def test_invalid_move(mock_id: UUID, move: str) -> None:
    """Test that an exception is raised when using invalid square names."""
    with pytest.raises(InvalidRequestError):
        _ = MoveRequest(game_id=mock_id, move=move)


# -- Response models --
def test_empty_cell_response() -> None:
    cell = CellResponse(square="e4")
    assert cell.piece is None
    assert cell.color is None


def test_cell_response_serializes_to_plain_strings() -> None:
    cell = CellResponse(square="e1", piece=PieceType.KING, color=Color.WHITE)
    assert cell.model_dump(mode="json") == {"square": "e1", "piece": "king", "color": "white"}
