"""Orchestration of communication from API models to the parser, the replay logic and the persistence layer (and the reverse direction)."""

import logging
from uuid import UUID

from pgn.api.models import (
    DeleteGameRequest,
    GameResponse,
    GetGameRequest,
    ImportPgnRequest,
    PositionRequest,
    PositionResponse,
    ReplayRequest,
)
from pgn.chess.fen import STARTING_FEN, position_from_fen, position_to_fen
from pgn.chess.game import Game
from pgn.chess.position import Position
from pgn.core.exceptions import InvalidRequestError, RepositoryError
from pgn.core.models import GameModel
from pgn.core.shared_types import Color
from pgn.db.repository import GameRepository
from pgn.parsing.parser import parse

logger = logging.getLogger(__name__)


class PgnService:
    """Orchestration of layers for PGN databases."""

    def __init__(self, repository: GameRepository) -> None:
        self.repo = repository

    # -- API logic ---
    def import_pgn(self, request: ImportPgnRequest) -> list[GameResponse]:
        """
        Parse a PGN database and store every game in it.
        ----
        All games are parsed AND replayed before the first one is stored: one bad game means nothing is imported.
        """
        models = [self._to_model(game) for game in parse(request.pgn_text)]

        responses = []
        for model in models:
            stored_game, game_id = self.repo.create_game(model)
            responses.append(self._create_game_response(game_id, stored_game))

        logger.info("Imported %d games", len(responses))
        return responses

    def get_game(self, request: GetGameRequest) -> GameResponse:
        game_model = self._fetch_game(request.game_id)
        return self._create_game_response(request.game_id, game_model)

    def list_games(self) -> list[GameResponse]:
        """Show all recorded games."""
        return [
            self._create_game_response(game_id, model)
            for game_id, model in self.repo.list_games()
        ]

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a Game record."""
        if self.repo.delete_game(request.game_id) is None:
            raise RepositoryError(f"Game with game_id={request.game_id} not found.")
        logger.info("Deleted game %s", request.game_id)

    def get_position(self, request: PositionRequest) -> PositionResponse:
        """Position of a stored game after `ply` moves (ply 0 is the starting position)."""
        game_model = self._fetch_game(request.game_id)
        if request.ply >= len(game_model.history_fen):
            raise InvalidRequestError(
                f"Game has {len(game_model.history_fen) - 1} plies, cannot show ply {request.ply}."
            )
        fen = game_model.history_fen[request.ply]
        return self._create_position_response(position_from_fen(fen), request.ply)

    def replay(self, request: ReplayRequest) -> PositionResponse:
        """Play the given moves from the given FEN (or the start). Nothing is stored."""
        position = position_from_fen(request.starting_fen or STARTING_FEN)
        for move in request.moves:
            position = position.move(move)
        return self._create_position_response(position, len(request.moves))

    # -- Internal helpers --
    def _to_model(self, game: Game) -> GameModel:
        """Replay the game and capture it in a GameModel. Move errors propagate to the caller."""
        return GameModel(
            tags=dict(game.tags),
            moves_san=game.notations,
            history_fen=game.fen_list(),
            result=game.result or "*",
            pgn=game.pgn or game.to_pgn(),
        )

    def _create_game_response(self, game_id: UUID, model: GameModel) -> GameResponse:
        """Convert info in GameModel to a GameResponse (for game with given ID.)"""
        return GameResponse(
            game_id=game_id,
            tags=model.tags,
            moves=model.moves_san,
            result=model.result,
            fens=model.history_fen,
        )

    def _create_position_response(
        self, position: Position, ply: int
    ) -> PositionResponse:
        return PositionResponse(
            fen=position_to_fen(position),
            side_to_move=Color[position.color_to_move.name],
            ply=ply,
        )

    def _fetch_game(self, game_id: UUID) -> GameModel:
        """Attempt to find the game in the repository and raise error if it fails."""
        game_model = self.repo.get_game(game_id)
        if game_model is None:
            raise RepositoryError(f"Game with game_id={game_id} not found.")
        return game_model
