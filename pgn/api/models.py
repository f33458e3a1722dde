"""Requests and Response models"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from pgn.core.exceptions import InvalidRequestError
from pgn.core.shared_types import Color

TagName = str
TagValue = str


# --- REQUEST MODELS ---
class ImportPgnRequest(BaseModel):
    pgn_text: str

    @field_validator("pgn_text")
    @classmethod
    def validate_pgn_text(cls, value: str) -> str:
        if not value.strip():
            raise InvalidRequestError("PGN text must not be empty.")
        return value


class GetGameRequest(BaseModel):
    game_id: UUID


class DeleteGameRequest(BaseModel):
    game_id: UUID


class PositionRequest(BaseModel):
    game_id: UUID
    ply: int

    @field_validator("ply")
    @classmethod
    def validate_ply(cls, value: int) -> int:
        if value < 0:
            raise InvalidRequestError(f"Ply must be 0 or more, not {value}.")
        return value


class ReplayRequest(BaseModel):
    starting_fen: Optional[str] = None
    moves: list[str]

    @field_validator("starting_fen")
    @classmethod
    def validate_starting_fen(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value

        parts = value.strip().split()
        if len(parts) != 6:
            raise InvalidRequestError(
                "FEN string must contain 6 space-separated parts."
            )
        return value


# --- RESPONSE MODELS ---
class GameResponse(BaseModel):
    game_id: UUID
    tags: dict[TagName, TagValue]
    moves: list[str]
    result: str
    fens: list[str]


class PositionResponse(BaseModel):
    fen: str
    side_to_move: Color
    ply: int
