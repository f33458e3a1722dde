"""Protocol repository (the SQL implementation lives next door, tests use an in-memory one)"""

from typing import Protocol
from uuid import UUID

from pgn.core.models import GameModel


class GameRepository(Protocol):
    """Persistence layer orchestration"""

    def get_game(self, game_id: UUID) -> GameModel | None:
        """Get game by ID, if record exists."""
        ...

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Store new game and return the stored data + newly created game ID."""
        ...

    def list_games(self) -> list[tuple[UUID, GameModel]]:
        """All stored games, oldest first."""
        ...

    def delete_game(self, game_id: UUID) -> GameModel | None:
        """Remove a game's record."""
        ...
