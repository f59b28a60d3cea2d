"""Unit tests for src/services/hnefatafl_service.py"""

from threading import Thread
from uuid import UUID, uuid4

import pytest

from src.core.exceptions import (
    HnefataflError,
    NotYourTurnError,
    PathBlockedError,
    RepositoryError,
)
from src.core.shared_types import Side, Status
from src.db.memory_repository import InMemoryGameRepository
from src.hnefatafl.board import Board
from src.hnefatafl.coordinate import Coordinate
from src.hnefatafl.game import GameState
from src.hnefatafl.pieces import PieceKind
from src.hnefatafl.pieces import Side as DomainSide
from src.hnefatafl.rules import Ruleset
from src.services.hnefatafl_service import (
    CreateGameRequest,
    DeleteGameRequest,
    GameResponse,
    GetGameRequest,
    HnefataflService,
    MoveHistoryRequest,
    MoveRequest,
    ResetGameRequest,
)


@pytest.fixture
def service(repository: InMemoryGameRepository) -> HnefataflService:
    return HnefataflService(repository)


def store_position(
    repository: InMemoryGameRepository, board: Board, turn: Side
) -> UUID:
    """Put a custom (in progress) position straight into the repository"""
    state = GameState.from_position(board, DomainSide[turn.name])
    _, game_id = repository.create_game(state.to_model())
    return game_id


# --- SERVICE - CREATE NEW GAME ----
def test_create_a_new_game(
    service: HnefataflService, repository: InMemoryGameRepository
) -> None:
    """Check that new game is created, stored in repo, and return has the appropriate information."""
    response = service.create_new_game(
        CreateGameRequest(attacker_name="Ragnar", defender_name="Lagertha")
    )

    # Check response structure
    assert isinstance(response, GameResponse)
    assert isinstance(response.game_id, UUID)

    # Check response data
    assert response.board == Board.initial().to_rows()
    assert response.turn == Side.ATTACKERS
    assert response.status == Status.IN_PROGRESS
    assert response.winner is None
    assert response.move_history == []
    assert response.players == {"attackers": "Ragnar", "defenders": "Lagertha"}

    # Check stored data
    stored_game = repository.get_game(response.game_id)
    assert stored_game is not None
    assert stored_game.board == Board.initial().to_rows()
    assert stored_game.status == Status.IN_PROGRESS


def test_create_game_without_players(service: HnefataflService) -> None:
    response = service.create_new_game(CreateGameRequest())
    assert response.players == {}


def test_create_game_with_custom_ruleset(repository: InMemoryGameRepository) -> None:
    service = HnefataflService(repository, Ruleset(first_side=DomainSide.DEFENDERS))
    response = service.create_new_game(CreateGameRequest())
    assert response.turn == Side.DEFENDERS


# --- SERVICE - GET GAME ----
def test_get_game_state(service: HnefataflService) -> None:
    created = service.create_new_game(CreateGameRequest())
    fetched = service.get_game_state(GetGameRequest(game_id=created.game_id))
    assert fetched == created


def test_get_unknown_game(service: HnefataflService) -> None:
    with pytest.raises(RepositoryError):
        service.get_game_state(GetGameRequest(game_id=uuid4()))


# --- SERVICE - MAKE MOVE ----
def test_make_move(service: HnefataflService) -> None:
    created = service.create_new_game(CreateGameRequest())
    response = service.make_move(
        MoveRequest(game_id=created.game_id, from_square="70", to_square="74")
    )
    assert response.board[7] == "....AD....A"
    assert response.turn == Side.DEFENDERS
    assert response.status == Status.IN_PROGRESS
    assert response.move_history == ["7074"]


def test_moves_are_recorded_in_order(service: HnefataflService) -> None:
    game_id = service.create_new_game(CreateGameRequest()).game_id
    service.make_move(MoveRequest(game_id=game_id, from_square="70", to_square="74"))
    service.make_move(MoveRequest(game_id=game_id, from_square="53", to_square="52"))

    history = service.move_history(MoveHistoryRequest(game_id=game_id))
    assert history.game_id == game_id
    assert history.moves == ["7074", "5352"]


def test_players_survive_a_move(service: HnefataflService) -> None:
    game_id = service.create_new_game(CreateGameRequest(attacker_name="Ragnar")).game_id
    response = service.make_move(
        MoveRequest(game_id=game_id, from_square="70", to_square="74")
    )
    assert response.players == {"attackers": "Ragnar"}


def test_illegal_move_is_propagated_and_not_stored(
    service: HnefataflService, repository: InMemoryGameRepository
) -> None:
    """Make sure service propagates the exceptions and the stored game stays as it was."""
    created = service.create_new_game(CreateGameRequest())
    stored_before = repository.get_game(created.game_id)

    with pytest.raises(PathBlockedError):
        service.make_move(
            MoveRequest(game_id=created.game_id, from_square="70", to_square="77")
        )
    with pytest.raises(NotYourTurnError):
        service.make_move(
            MoveRequest(game_id=created.game_id, from_square="53", to_square="52")
        )
    assert repository.get_game(created.game_id) == stored_before


def test_any_engine_error_is_a_hnefatafl_error(service: HnefataflService) -> None:
    """Test any top-level custom exception is raised (specific exception types are responsibility of other layers)"""
    created = service.create_new_game(CreateGameRequest())
    with pytest.raises(HnefataflError):
        service.make_move(
            MoveRequest(game_id=created.game_id, from_square="30", to_square="00")
        )


def test_move_on_unknown_game(service: HnefataflService) -> None:
    with pytest.raises(RepositoryError):
        service.make_move(MoveRequest(game_id=uuid4(), from_square="70", to_square="74"))


def test_winning_move(
    service: HnefataflService, repository: InMemoryGameRepository
) -> None:
    board = Board.empty()
    board.place(Coordinate(0, 5), PieceKind.KING)
    board.place(Coordinate(6, 6), PieceKind.ATTACKER)
    game_id = store_position(repository, board, Side.DEFENDERS)

    response = service.make_move(
        MoveRequest(game_id=game_id, from_square="05", to_square="0X")
    )
    assert response.status == Status.DEFENDERS_WIN
    assert response.winner == Side.DEFENDERS
    assert response.board[0] == "..........K"


def test_concurrent_moves_are_serialised(service: HnefataflService) -> None:
    """Two clients send the same opening move at once: exactly one of them gets it"""
    game_id = service.create_new_game(CreateGameRequest()).game_id
    outcomes: list[str] = []

    def send_move() -> None:
        try:
            service.make_move(
                MoveRequest(game_id=game_id, from_square="70", to_square="74")
            )
            outcomes.append("accepted")
        except HnefataflError:
            outcomes.append("rejected")

    threads = [Thread(target=send_move) for _ in range(2)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert sorted(outcomes) == ["accepted", "rejected"]
    history = service.move_history(MoveHistoryRequest(game_id=game_id))
    assert history.moves == ["7074"]


# --- SERVICE - RESET / DELETE ----
def test_reset_game(service: HnefataflService) -> None:
    game_id = service.create_new_game(CreateGameRequest(defender_name="Lagertha")).game_id
    service.make_move(MoveRequest(game_id=game_id, from_square="70", to_square="74"))

    response = service.reset_game(ResetGameRequest(game_id=game_id))
    assert response.board == Board.initial().to_rows()
    assert response.turn == Side.ATTACKERS
    assert response.move_history == []
    assert response.players == {"defenders": "Lagertha"}


def test_reset_unknown_game(service: HnefataflService) -> None:
    with pytest.raises(RepositoryError):
        service.reset_game(ResetGameRequest(game_id=uuid4()))


def test_delete_game(service: HnefataflService) -> None:
    game_id = service.create_new_game(CreateGameRequest()).game_id
    service.delete_game(DeleteGameRequest(game_id=game_id))
    with pytest.raises(RepositoryError):
        service.get_game_state(GetGameRequest(game_id=game_id))
