"""Orchestration of communication from a front end to business logic and persistence layers (and the reverse direction)."""

import logging
from typing import Optional
from uuid import UUID

from chesslogic.api.models import (
    CellResponse,
    CreateGameRequest,
    DeleteGameRequest,
    GameResponse,
    GetGameRequest,
    LegalMovesRequest,
    LegalMovesResponse,
    MoveRequest,
    MoveResponse,
    RandomMoveRequest,
    UndoMoveRequest,
)
from chesslogic.chess.game import Game, MoveSelector
from chesslogic.core.exceptions import GameNotFoundError
from chesslogic.core.models import GameModel
from chesslogic.core.shared_types import Color, PieceType
from chesslogic.db.repository import GameRepository
from chesslogic.services.relay import MessageRelay, move_announcement

_LOGGER = logging.getLogger(__name__)


class ChessService:
    """Orchestration of layers for chess game."""

    def __init__(
        self, repository: GameRepository, relay: Optional[MessageRelay] = None
    ) -> None:
        self.repo = repository
        self.relay = relay

    def create_new_game(self, request: CreateGameRequest) -> GameResponse:
        """Start a game, from the standard starting position unless a descriptor is given."""
        new_game = (
            Game.from_fen(request.starting_fen)
            if request.starting_fen
            else Game.new_game()
        )

        # Store the GameModel in the repository
        stored_game, game_id = self.repo.create_game(new_game.to_model())
        _LOGGER.info("Created game %s from %s", game_id, stored_game.current_fen)
        return self._create_game_response(game_id, new_game)

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        """Retrieve current game state."""
        game = self._fetch_game(request.game_id)
        return self._create_game_response(request.game_id, game)

    def legal_moves(self, request: LegalMovesRequest) -> LegalMovesResponse:
        """retrieve set of legal moves for the player to move."""
        game = self._fetch_game(request.game_id)
        return LegalMovesResponse(
            game_id=request.game_id,
            color=Color[game.color_to_move.name],
            legal_moves=game.legal_moves(),
        )

    def make_move(self, request: MoveRequest) -> MoveResponse:
        """
        Make a move attempt.
        ----

        A rejected move is not an error here: the response says `accepted=False` and nothing gets stored.
        """
        game = self._fetch_game(request.game_id)
        accepted = game.make_move(request.move)
        return self._after_move_attempt(request.game_id, game, accepted)

    def make_random_move(
        self, request: RandomMoveRequest, selector: Optional[MoveSelector] = None
    ) -> MoveResponse:
        """Let the game pick one of the legal moves (selector can be injected for a predictable pick)."""
        game = self._fetch_game(request.game_id)
        accepted = game.make_random_move(selector)
        return self._after_move_attempt(request.game_id, game, accepted)

    def undo_move(self, request: UndoMoveRequest) -> MoveResponse:
        game = self._fetch_game(request.game_id)
        accepted = game.undo()
        if accepted:
            self.repo.update_game(request.game_id, game.to_model())
        return MoveResponse(
            accepted=accepted, game=self._create_game_response(request.game_id, game)
        )

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a Game record."""
        deleted = self.repo.delete_game(request.game_id)
        if deleted is None:
            raise GameNotFoundError(f"Game with {request.game_id=} not found.")
        _LOGGER.info("Deleted game %s", request.game_id)

    # -- Internal helpers --
    def _after_move_attempt(
        self, game_id: UUID, game: Game, accepted: bool
    ) -> MoveResponse:
        """Persist + announce an accepted move."""
        if accepted:
            self.repo.update_game(game_id, game.to_model())
            if self.relay is not None:
                last_move = game.history[-1].move.to_text()
                self.relay.send_message(move_announcement(last_move, game.to_fen()))
        return MoveResponse(
            accepted=accepted, game=self._create_game_response(game_id, game)
        )

    def _create_game_response(self, game_id: UUID, game: Game) -> GameResponse:
        """Convert a Game into a GameResponse (for game with given ID.)"""
        model = game.to_model()

        # Before the first turn gets played, the starting FEN equals the current FEN. Otherwise get it as first recorded FEN in history.
        starting_fen = (
            model.history_fen[0] if len(model.history_fen) > 0 else model.current_fen
        )
        return GameResponse(
            game_id=game_id,
            fen_state=model.current_fen,
            starting_state=starting_fen,
            color_to_move=Color[game.color_to_move.name],
            description=game.state_description(),
            move_history=model.moves,
            board=[
                CellResponse(
                    square=square.to_algebraic(),
                    piece=PieceType[piece.type.name] if piece else None,
                    color=Color[piece.color.name] if piece else None,
                )
                for square, piece in game.board_cells_for_display()
            ],
        )

    def _fetch_game(self, game_id: UUID) -> Game:
        """Attempt to find the game in the repository and raise error if it fails."""
        game_model: GameModel | None = self.repo.get_game(game_id)
        if game_model is None:
            raise GameNotFoundError(f"Game with {game_id=} not found.")
        return Game.from_model(game_model)
