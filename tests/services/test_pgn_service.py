"""Unit tests for pgn/services/pgn_service.py"""

import logging
from typing import Generator
from uuid import UUID, uuid4

import pytest

from pgn.api.models import (
    DeleteGameRequest,
    GameResponse,
    GetGameRequest,
    ImportPgnRequest,
    PositionRequest,
    ReplayRequest,
)
from pgn.chess.fen import STARTING_FEN
from pgn.core.exceptions import (
    InvalidRequestError,
    MoveResolutionError,
    PgnSyntaxError,
    RepositoryError,
)
from pgn.core.models import GameModel
from pgn.core.shared_types import Color
from pgn.services.pgn_service import PgnService

# --- MOCK DEPENDENCIES ----
TWO_GAMES = """[Event "Opening practice"]
[White "Mocker M. Mockerson"]

1. e4 e5 2. Nf3 {develop} Nc6 1-0

[Event "Short draw"]

1. d4 d5 1/2-1/2
"""
AFTER_E4 = "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"
AFTER_NC6 = "r1bqkbnr/pppp1ppp/2n5/4p3/4P3/5N2/PPPP1PPP/RNBQKB1R w KQkq - 2 3"


class MockRepository:
    """Mock the GameRepository using a dictionary of game models."""

    def __init__(self) -> None:
        self._games: dict[UUID, GameModel] = {}

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Store new game and return the stored data + newly created game ID."""
        game_id = uuid4()
        self._games[game_id] = game
        return game, game_id

    def get_game(self, game_id: UUID) -> GameModel | None:
        """Get game by ID, if record exists."""
        return self._games.get(game_id)

    def list_games(self) -> list[tuple[UUID, GameModel]]:
        """All stored games, in insertion order."""
        return list(self._games.items())

    def delete_game(self, game_id: UUID) -> GameModel | None:
        """Remove a game's record."""
        return self._games.pop(game_id, None)

    def clear(self) -> None:
        """Clear the repository (useful in between tests)"""
        self._games.clear()


@pytest.fixture
def mock_repository() -> Generator[MockRepository, None, None]:
    """Ensures to clear the repository between tests"""
    repo = MockRepository()
    try:
        yield repo
    finally:
        repo.clear()


@pytest.fixture
def service(mock_repository: MockRepository) -> PgnService:
    return PgnService(mock_repository)


@pytest.fixture
def imported(service: PgnService) -> list[GameResponse]:
    return service.import_pgn(ImportPgnRequest(pgn_text=TWO_GAMES))


# --- SERVICE - IMPORT ----
def test_import_pgn(imported: list[GameResponse], mock_repository: MockRepository) -> None:
    """Every game is replayed and persisted, the response carries the full FEN history."""
    assert len(imported) == 2
    first, second = imported
    assert first.tags == {"Event": "Opening practice", "White": "Mocker M. Mockerson"}
    assert first.moves == ["e4", "e5", "Nf3", "Nc6"]
    assert first.result == "1-0"
    assert first.fens[0] == STARTING_FEN
    assert first.fens[1] == AFTER_E4
    assert first.fens[-1] == AFTER_NC6
    assert second.result == "1/2-1/2"

    stored = mock_repository.get_game(first.game_id)
    assert stored is not None
    assert stored.pgn.startswith('[Event "Opening practice"]')
    assert stored.pgn.endswith("Nc6 1-0")


def test_import_with_bad_move_stores_nothing(
    service: PgnService, mock_repository: MockRepository
) -> None:
    """One game that cannot be replayed and the whole import is rejected"""
    text = TWO_GAMES + "\n1. e4 e5 2. Ke3 *\n"
    with pytest.raises(MoveResolutionError) as exc_info:
        service.import_pgn(ImportPgnRequest(pgn_text=text))
    assert exc_info.value.ply == 2
    assert mock_repository.list_games() == []


def test_import_with_syntax_error(
    service: PgnService, mock_repository: MockRepository
) -> None:
    with pytest.raises(PgnSyntaxError):
        service.import_pgn(ImportPgnRequest(pgn_text="1. e4 (1. d4 *"))
    assert mock_repository.list_games() == []


# --- SERVICE - GET / LIST / DELETE ----
def test_get_game(service: PgnService, imported: list[GameResponse]) -> None:
    response = service.get_game(GetGameRequest(game_id=imported[1].game_id))
    assert response == imported[1]


def test_get_unknown_game(service: PgnService) -> None:
    with pytest.raises(RepositoryError, match="not found"):
        service.get_game(GetGameRequest(game_id=uuid4()))


def test_list_games(service: PgnService, imported: list[GameResponse]) -> None:
    assert service.list_games() == imported


def test_delete_game(service: PgnService, imported: list[GameResponse]) -> None:
    service.delete_game(DeleteGameRequest(game_id=imported[0].game_id))
    assert service.list_games() == imported[1:]
    with pytest.raises(RepositoryError):
        service.get_game(GetGameRequest(game_id=imported[0].game_id))


def test_delete_unknown_game(service: PgnService) -> None:
    with pytest.raises(RepositoryError, match="not found"):
        service.delete_game(DeleteGameRequest(game_id=uuid4()))


# --- SERVICE - POSITIONS ----
def test_get_starting_position(
    service: PgnService, imported: list[GameResponse]
) -> None:
    response = service.get_position(PositionRequest(game_id=imported[0].game_id, ply=0))
    assert response.fen == STARTING_FEN
    assert response.side_to_move == Color.WHITE
    assert response.ply == 0


def test_get_position_after_moves(
    service: PgnService, imported: list[GameResponse]
) -> None:
    response = service.get_position(PositionRequest(game_id=imported[0].game_id, ply=1))
    assert response.fen == AFTER_E4
    assert response.side_to_move == Color.BLACK

    last = service.get_position(PositionRequest(game_id=imported[0].game_id, ply=4))
    assert last.fen == AFTER_NC6


def test_get_position_past_the_end(
    service: PgnService, imported: list[GameResponse]
) -> None:
    with pytest.raises(InvalidRequestError, match="4 plies"):
        service.get_position(PositionRequest(game_id=imported[0].game_id, ply=5))


def test_get_position_unknown_game(service: PgnService) -> None:
    with pytest.raises(RepositoryError):
        service.get_position(PositionRequest(game_id=uuid4(), ply=0))


# --- SERVICE - REPLAY ----
def test_replay_from_start(
    service: PgnService, mock_repository: MockRepository
) -> None:
    response = service.replay(ReplayRequest(moves=["e4", "e5", "Nf3", "Nc6"]))
    assert response.fen == AFTER_NC6
    assert response.side_to_move == Color.WHITE
    assert response.ply == 4
    # nothing is stored
    assert mock_repository.list_games() == []


def test_replay_from_fen(service: PgnService) -> None:
    response = service.replay(
        ReplayRequest(
            starting_fen="r1bqkb1r/pp1p1ppp/2n1pn2/8/3NP3/2N5/PPP2PPP/R1BQKB1R w KQkq - 3 6",
            moves=["Ndb5"],
        )
    )
    assert response.fen == "r1bqkb1r/pp1p1ppp/2n1pn2/1N6/4P3/2N5/PPP2PPP/R1BQKB1R b KQkq - 4 6"
    assert response.side_to_move == Color.BLACK


def test_replay_without_moves(service: PgnService) -> None:
    response = service.replay(ReplayRequest(moves=[]))
    assert response.fen == STARTING_FEN
    assert response.ply == 0


def test_replay_with_bad_move(service: PgnService) -> None:
    with pytest.raises(MoveResolutionError):
        service.replay(ReplayRequest(moves=["e4", "e4"]))


def test_import_is_logged(service: PgnService, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.INFO, logger="pgn.services.pgn_service"):
        service.import_pgn(ImportPgnRequest(pgn_text=TWO_GAMES))
    assert "Imported 2 games" in caplog.text
