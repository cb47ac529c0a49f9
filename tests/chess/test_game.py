"""Unit tests for chesslogic/chess/game.py"""

import logging
import random
from typing import Callable
from unittest.mock import patch

import pytest

from chesslogic.chess.board import Board
from chesslogic.chess.executor import MoveExecutor
from chesslogic.chess.fen import STARTING_FEN, GameState
from chesslogic.chess.game import Game, render_board
from chesslogic.chess.pieces import Color, Piece, PieceType
from chesslogic.chess.square import Square
from chesslogic.core.exceptions import InvalidFENError, InvariantViolationError
from chesslogic.core.models import GameModel

FenFactory = Callable[..., str]


def sq(name: str) -> Square:
    square = Square.from_algebraic(name)
    assert square is not None
    return square


def play(game: Game, *moves: str) -> None:
    for move in moves:
        assert game.make_move(move), f"{move} should have been accepted"


@pytest.fixture
def game() -> Game:
    return Game.new_game()


# -- CREATION --
def test_new_game(game: Game) -> None:
    assert game.to_fen() == STARTING_FEN
    assert game.color_to_move == Color.WHITE
    assert len(game.legal_moves()) == 20
    assert game.history == []


def test_from_fen_keeps_descriptor(fen_from_pieces: FenFactory) -> None:
    fen = fen_from_pieces({"e1": "k", "e8": "K", "d4": "p"}, "b - - 12 40")
    assert Game.from_fen(fen).to_fen() == fen


@pytest.mark.parametrize(
    "fen",
    [
        "",
        "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq -",
        "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP w KQkq - 0 1",
        "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR x KQkq - 0 1",
        "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq e3 0 1",  # en passant behind own pawns
        "K7/8/8/8/8/8/8/4k2k w - - 0 1",  # two white kings
        "8/8/8/8/8/8/8/8 w - - 0 1",  # no kings
    ],
)
def test_from_invalid_fen(fen: str) -> None:
    with pytest.raises(InvalidFENError):
        Game.from_fen(fen)


# -- MOVES --
def test_first_move(game: Game) -> None:
    assert game.make_move("e2e4")
    assert game.color_to_move == Color.BLACK
    assert game.state.en_passant_square == sq("e3")
    assert game.state.half_move_clock == 0
    assert game.board.piece(sq("e4")) == Piece(PieceType.PAWN, Color.WHITE)
    assert game.board.piece(sq("e2")) is None
    assert [record.move.to_text() for record in game.history] == ["e2e4"]


@pytest.mark.parametrize("move_text", ["", "e2", "e2e9", "hello", "e2e4e5", "i2i4"])
def test_unreadable_move_is_rejected(game: Game, move_text: str) -> None:
    assert not game.make_move(move_text)
    assert game.to_fen() == STARTING_FEN


def test_move_with_surrounding_whitespace(game: Game) -> None:
    assert game.make_move(" g1f3 ")


@pytest.mark.parametrize("move_text", ["e2e5", "e7e5", "e1e2", "a1a3"])
def test_illegal_move_is_rejected(game: Game, move_text: str) -> None:
    assert not game.make_move(move_text)
    assert game.to_fen() == STARTING_FEN
    assert game.history == []


def test_move_into_check_is_rejected(fen_from_pieces: FenFactory) -> None:
    """The rook on e2 shields its own king from the rook on e8"""
    fen = fen_from_pieces({"e1": "k", "e2": "r", "e8": "R", "a8": "K"})
    game = Game.from_fen(fen)

    assert not game.make_move("e2d2")
    assert game.to_fen() == fen
    assert game.make_move("e2e8")


def test_rejection_is_logged(game: Game, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.INFO, logger="chesslogic.chess.game"):
        game.make_move("e2e5")
    assert "Rejected move 'e2e5'" in caplog.text


def test_impossible_state_is_logged_as_error(
    game: Game, caplog: pytest.LogCaptureFixture
) -> None:
    with patch.object(
        game.executor, "make_move", side_effect=InvariantViolationError("no king")
    ):
        with caplog.at_level(logging.INFO, logger="chesslogic.chess.game"):
            assert not game.make_move("e2e4")
    assert any(record.levelno == logging.ERROR for record in caplog.records)


def test_en_passant(game: Game) -> None:
    play(game, "e2e4", "a7a6", "e4e5", "d7d5")
    assert "e5d6" in game.legal_moves()

    play(game, "e5d6")
    assert game.board.piece(sq("d5")) is None
    assert game.board.piece(sq("d6")) == Piece(PieceType.PAWN, Color.WHITE)


def test_en_passant_square_cannot_take_own_pawn() -> None:
    """Even with a stray en passant square set, a pawn never steps diagonally onto an empty square next to its own pawn"""
    board = Board.from_fen(STARTING_FEN.split(" ")[0])
    game = Game(MoveExecutor(board, GameState(en_passant_square=sq("e3"))))

    assert "d2e3" not in game.legal_moves()
    assert "f2e3" not in game.legal_moves()
    assert not game.make_move("d2e3")
    assert game.board.piece(sq("e2")) == Piece(PieceType.PAWN, Color.WHITE)


def test_promotion(fen_from_pieces: FenFactory) -> None:
    game = Game.from_fen(fen_from_pieces({"a7": "p", "e1": "k", "h5": "K"}))
    play(game, "a7a8")
    assert game.board.piece(sq("a8")) == Piece(PieceType.QUEEN, Color.WHITE)


def test_checkmate_leaves_no_legal_moves(game: Game) -> None:
    play(game, "f2f3", "e7e5", "g2g4", "d8h4")
    assert game.legal_moves() == []
    assert not game.make_random_move()


def test_stalemate_leaves_no_legal_moves(fen_from_pieces: FenFactory) -> None:
    game = Game.from_fen(fen_from_pieces({"a1": "k", "b3": "Q", "h8": "K"}))
    assert game.legal_moves() == []
    assert not game.make_random_move(lambda n: 0)


# -- RANDOM MOVES --
def test_random_move_uses_selector(game: Game) -> None:
    options = game.legal_moves()
    assert game.make_random_move(lambda n: n - 1)
    assert game.history[0].move.to_text() == options[-1]


def test_random_move_selector_out_of_range(game: Game) -> None:
    assert not game.make_random_move(lambda n: n)
    assert not game.make_random_move(lambda n: -1)
    assert game.to_fen() == STARTING_FEN


def test_random_move_default_selector(game: Game) -> None:
    with patch("chesslogic.chess.game.random.randrange", return_value=0) as mock_randrange:
        assert game.make_random_move()
    mock_randrange.assert_called_once_with(20)
    assert len(game.history) == 1


def test_random_game_stays_consistent(game: Game) -> None:
    """Keep playing (seeded) random moves: every position along the way must be a valid one"""
    selector = random.Random(0).randrange
    for _ in range(40):
        if not game.make_random_move(selector):
            break
        assert game.board.cell_with_king(Color.WHITE).piece == Piece(PieceType.KING, Color.WHITE)
        assert game.board.cell_with_king(Color.BLACK).piece == Piece(PieceType.KING, Color.BLACK)
        assert Game.from_fen(game.to_fen()).to_fen() == game.to_fen()
        assert len(game.board.cells_of_color(Color.WHITE)) <= 16
        assert len(game.board.cells_of_color(Color.BLACK)) <= 16


# -- UNDO --
def test_undo(game: Game) -> None:
    play(game, "e2e4", "e7e5")
    assert game.undo()
    assert game.color_to_move == Color.BLACK
    assert game.state.en_passant_square == sq("e3")
    assert game.undo()
    assert game.to_fen() == STARTING_FEN
    assert not game.undo()


# -- DESCRIPTIONS --
def test_state_description_at_start(game: Game) -> None:
    description = game.state_description()
    assert "Turn #1. Turn owner: white. Rule of 50: 0" in description
    assert "Castling available:" in description
    for label in ["White king side", "White queen side", "Black king side", "Black queen side"]:
        assert f"  {label}: yes" in description
    assert "En passant target: -" in description
    assert f"Position: {STARTING_FEN}" in description


def test_state_description_after_moves(game: Game) -> None:
    play(game, "e2e4", "e7e5", "e1e2")
    description = game.state_description()
    assert "Turn #2. Turn owner: black. Rule of 50: 1" in description
    assert "  White king side: no" in description
    assert "  White queen side: no" in description
    assert "  Black king side: yes" in description
    assert "En passant target: -" in description


def test_castling_rights_are_permanent(game: Game) -> None:
    play(game, "e2e4", "e7e5", "e1e2", "a7a6", "e2e1")
    assert "  White king side: no" in game.state_description()


def test_board_cells_for_display(game: Game) -> None:
    cells = game.board_cells_for_display()
    assert len(cells) == 64
    assert cells[0] == (sq("a8"), Piece(PieceType.ROOK, Color.BLACK))
    assert cells[4] == (sq("e8"), Piece(PieceType.KING, Color.BLACK))
    assert cells[7] == (sq("h8"), Piece(PieceType.ROOK, Color.BLACK))
    assert cells[-1] == (sq("h1"), Piece(PieceType.ROOK, Color.WHITE))
    assert cells[28] == (sq("e5"), None)


def test_render_board(game: Game) -> None:
    lines = render_board(game).split("\n")
    assert lines[1] == "8 | R N B Q K B N R |"
    assert lines[2] == "7 | P P P P P P P P |"
    assert lines[5] == "4 | . . . . . . . . |"
    assert lines[8] == "1 | r n b q k b n r |"
    assert lines[-1] == "    a b c d e f g h"


# -- MODEL CONVERSION --
def test_model_roundtrip(game: Game) -> None:
    play(game, "e2e4", "d7d5", "e4d5")
    model = game.to_model()

    assert model.current_fen == game.to_fen()
    assert model.moves == ["e2e4", "d7d5", "e4d5"]
    assert model.history_fen[0] == STARTING_FEN

    rebuilt = Game.from_model(model)
    assert rebuilt.to_fen() == game.to_fen()
    assert rebuilt.history == game.history
    assert rebuilt.legal_moves() == game.legal_moves()
    assert rebuilt.history[-1].captured_piece == Piece(PieceType.PAWN, Color.BLACK)

    assert rebuilt.undo()
    assert rebuilt.board.piece(sq("d5")) == Piece(PieceType.PAWN, Color.BLACK)


def test_from_model_without_history() -> None:
    model = GameModel(current_fen=STARTING_FEN)
    game = Game.from_model(model)
    assert game.history == []
    assert game.to_model() == model
