"""Unit tests for pgn/db/sql_repository.py"""

from uuid import uuid4

from sqlalchemy.orm import Session

from pgn.core.models import GameModel
from pgn.db.sql_repository import SQLGameRepository

START = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"
AFTER_E4 = "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"


def make_model(event: str = "Casual game") -> GameModel:
    return GameModel(
        tags={"Event": event, "White": "player_white", "Black": "player_black"},
        moves_san=["e4"],
        history_fen=[START, AFTER_E4],
        result="*",
        pgn=f'[Event "{event}"]\n\n1. e4 *',
    )


def test_create_game(db_session_repo: Session) -> None:
    """Conversion from a GameModel to DBGame for a new entry to the database."""
    model = make_model()
    repo = SQLGameRepository(db_session_repo)
    record_in_db, _ = repo.create_game(model)
    assert isinstance(record_in_db, GameModel)
    assert record_in_db == model


def test_get_game_by_id(db_session_repo: Session) -> None:
    """Create a game, then fetch it from db."""
    repo = SQLGameRepository(db_session_repo)
    expected_game, game_id = repo.create_game(make_model())
    game_found = repo.get_game(game_id)
    assert game_found == expected_game


def test_tag_order_survives_storage(db_session_repo: Session) -> None:
    repo = SQLGameRepository(db_session_repo)
    _, game_id = repo.create_game(make_model())
    game_found = repo.get_game(game_id)
    assert game_found is not None
    assert list(game_found.tags) == ["Event", "White", "Black"]


def test_get_unknown_game(db_session_repo: Session) -> None:
    """
    Should return None if ID does not match anything in database.

    NOTE with an empty database, any id is a valid test case.
    """
    repo = SQLGameRepository(db_session_repo)
    assert repo.get_game(uuid4()) is None

    # now with a stored game, but asking for the wrong ID
    repo.create_game(make_model())
    assert repo.get_game(uuid4()) is None


def test_list_games(db_session_repo: Session) -> None:
    repo = SQLGameRepository(db_session_repo)
    assert repo.list_games() == []

    _, first_id = repo.create_game(make_model("first"))
    _, second_id = repo.create_game(make_model("second"))
    listed = dict(repo.list_games())
    assert set(listed) == {first_id, second_id}
    assert listed[first_id].tags["Event"] == "first"
    assert listed[second_id].tags["Event"] == "second"


def test_games_visible_from_another_session(
    db_session_repo: Session, db_session_shared: Session
) -> None:
    _, game_id = SQLGameRepository(db_session_repo).create_game(make_model())
    assert SQLGameRepository(db_session_shared).get_game(game_id) == make_model()


def test_delete_game(db_session_repo: Session) -> None:
    """Record of the game should no longer exist after deletion"""
    repo = SQLGameRepository(db_session_repo)
    created_game, game_id = repo.create_game(make_model())
    deleted_game = repo.delete_game(game_id)

    # the correct game should be deleted
    assert deleted_game == created_game

    # The game should no longer be available in db
    assert repo.get_game(game_id) is None
    assert repo.list_games() == []


def test_attempt_deleting_unknown_game(db_session_repo: Session) -> None:
    """the delete_game() method should break early and return None"""
    repo = SQLGameRepository(db_session_repo)
    assert repo.delete_game(uuid4()) is None
