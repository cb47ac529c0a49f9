"""Implementation of (Game)Repository using SQLAlchemy"""

import logging
from uuid import UUID, uuid4

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from chesslogic.core.exceptions import RepositoryError
from chesslogic.core.models import GameModel
from chesslogic.db.schema import DBGame

_LOGGER = logging.getLogger(__name__)


class SQLGameRepository:
    """
    Games stored in the `games` table.

    A record mirrors a GameModel: the current descriptor, the descriptor before every move and the move texts.
    Database failures are rolled back and surface as RepositoryError.
    """

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def get_game(self, game_id: UUID) -> GameModel | None:
        game_db = self._fetch_game(game_id)
        return self._to_model(game_db) if game_db else None

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Store new game and return the stored data + newly created game ID."""
        game_db = DBGame(id=uuid4())
        self._write_fields(game_db, game)
        self.db.add(game_db)
        self._commit(f"create game {game_db.id}")
        self.db.refresh(game_db)
        return self._to_model(game_db), game_db.id

    def update_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        """Overwrite the record with the game's latest state (None if there is no such record)."""
        game_db = self._fetch_game(game_id)
        if game_db is None:
            return None
        self._write_fields(game_db, game)
        self._commit(f"update game {game_id}")
        self.db.refresh(game_db)
        return self._to_model(game_db)

    def delete_game(self, game_id: UUID) -> GameModel | None:
        """Remove a game's record, returning what was stored."""
        game_db = self._fetch_game(game_id)
        if game_db is None:
            return None
        game_model = self._to_model(game_db)
        self.db.delete(game_db)
        self._commit(f"delete game {game_id}")
        return game_model

    # -- Internal helpers --
    def _fetch_game(self, game_id: UUID) -> DBGame | None:
        query = select(DBGame).where(DBGame.id == game_id)
        return self.db.scalar(query)

    def _commit(self, action: str) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as error:
            self.db.rollback()
            _LOGGER.error("Could not %s: %s", action, error)
            raise RepositoryError(f"Could not {action}.") from error

    @staticmethod
    def _write_fields(game_db: DBGame, game: GameModel) -> None:
        # NOTE: always assign new lists, in-place changes to a JSON column are not tracked
        game_db.current_fen = game.current_fen
        game_db.history_fen = list(game.history_fen)
        game_db.moves = list(game.moves)

    @staticmethod
    def _to_model(game_db: DBGame) -> GameModel:
        """Convert SQLAlchemy model to data transfer model."""
        return GameModel(
            current_fen=game_db.current_fen,
            history_fen=list(game_db.history_fen),
            moves=list(game_db.moves),
        )
