"""Orchestration of communication from API layer to business logic and storage layers (and the reverse direction)."""

import logging
from threading import Lock
from uuid import UUID

from src.api.models import (
    CreateGameRequest,
    DeleteGameRequest,
    GameResponse,
    GetGameRequest,
    MoveHistoryRequest,
    MoveHistoryResponse,
    MoveRequest,
    ResetGameRequest,
)
from src.api.notation import coordinate_from_notation, move_to_notation
from src.core.exceptions import MoveError, RepositoryError
from src.core.models import GameModel
from src.core.shared_types import Side, Status
from src.db.repository import GameRepository
from src.hnefatafl.game import GameState
from src.hnefatafl.rules import DEFAULT_RULESET, Move, Ruleset

logger = logging.getLogger(__name__)


class HnefataflService:
    """Orchestration of layers for Hnefatafl games.

    The engine itself makes no promise about concurrent callers. Moves on the same game are serialised here, one lock per game ID.
    """

    def __init__(
        self, repository: GameRepository, ruleset: Ruleset = DEFAULT_RULESET
    ) -> None:
        self.repo = repository
        self.ruleset = ruleset
        self._locks: dict[UUID, Lock] = {}
        self._locks_guard = Lock()

    # -- API routes logic ---
    def create_new_game(self, request: CreateGameRequest) -> GameResponse:
        """A player requested a new game, in the starting layout."""

        # Create a new GameState, and convert into GameModel
        new_game = GameState.new(self.ruleset).to_model()
        new_game.registered_players = self._players_from_request(request)

        # Store the GameModel in the repository
        stored_game, game_id = self.repo.create_game(new_game)
        logger.info("Created game %s", game_id)

        # Return a GameResponse
        return self._create_game_response(game_id, stored_game)

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        """
        Retrieve current game state.
        ----
        Used in "polling" loop by frontend to check when it is the player's turn for instance.
        """
        game_model = self._fetch_game(request.game_id)
        return self._create_game_response(request.game_id, game_model)

    def make_move(self, request: MoveRequest) -> GameResponse:
        """Make a move attempt. A rejected move leaves the stored game as it was and the MoveError propagates."""

        # Parse data in MoveRequest into engine coordinates
        move = Move(
            from_coord=coordinate_from_notation(request.from_square),
            to_coord=coordinate_from_notation(request.to_square),
        )

        with self._lock_for(request.game_id):
            # Retrieve persisted GameModel from repository
            stored_model = self._fetch_game(request.game_id)

            # Create a GameState from the retrieved GameModel
            state = GameState.from_model(stored_model, self.ruleset)

            # Attempt the move
            try:
                new_state = state.try_move(move)
            except MoveError as error:
                logger.warning(
                    "Rejected move %s in game %s: %s", move, request.game_id, error
                )
                raise

            # Capture updated state in GameModel (bookkeeping carries over)
            after_move = new_state.to_model()
            after_move.moves = [*stored_model.moves, move_to_notation(move)]
            after_move.registered_players = stored_model.registered_players

            # store in repository
            self.repo.update_game(request.game_id, after_move)

        if new_state.is_over():
            logger.info(
                "Game %s finished: %s", request.game_id, after_move.status
            )

        # Return a GameResponse
        return self._create_game_response(request.game_id, after_move)

    def move_history(self, request: MoveHistoryRequest) -> MoveHistoryResponse:
        """The moves played so far, in tile notation"""
        game_model = self._fetch_game(request.game_id)
        return MoveHistoryResponse(game_id=request.game_id, moves=game_model.moves)

    def reset_game(self, request: ResetGameRequest) -> GameResponse:
        """Put the pieces back in the starting layout. The registered players stay."""
        with self._lock_for(request.game_id):
            stored_model = self._fetch_game(request.game_id)
            fresh = GameState.new(self.ruleset).to_model()
            fresh.registered_players = stored_model.registered_players
            self.repo.update_game(request.game_id, fresh)
        logger.info("Reset game %s", request.game_id)
        return self._create_game_response(request.game_id, fresh)

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a Game record."""
        with self._lock_for(request.game_id):
            self.repo.delete_game(request.game_id)
        with self._locks_guard:
            self._locks.pop(request.game_id, None)
        logger.info("Deleted game %s", request.game_id)

    # -- Internal helpers --
    def _players_from_request(self, request: CreateGameRequest) -> dict[str, str]:
        players = {
            Side.ATTACKERS.value: request.attacker_name,
            Side.DEFENDERS.value: request.defender_name,
        }
        return {side: name for side, name in players.items() if name is not None}

    def _create_game_response(self, game_id: UUID, model: GameModel) -> GameResponse:
        """Convert info in GameModel to a GameResponse (for game with given ID.)"""
        status = Status(model.status)
        winner = {
            Status.DEFENDERS_WIN: Side.DEFENDERS,
            Status.ATTACKERS_WIN: Side.ATTACKERS,
        }.get(status)
        return GameResponse(
            game_id=game_id,
            players=model.registered_players,
            board=model.board,
            turn=Side(model.turn),
            status=status,
            winner=winner,
            move_history=model.moves,
        )

    def _fetch_game(self, game_id: UUID) -> GameModel:
        """Attempt to find the game in the repository and raise error if it fails."""
        game_model = self.repo.get_game(game_id)
        if game_model is None:
            raise RepositoryError(f"Game with {game_id=} not found.")
        return game_model

    def _lock_for(self, game_id: UUID) -> Lock:
        with self._locks_guard:
            return self._locks.setdefault(game_id, Lock())
