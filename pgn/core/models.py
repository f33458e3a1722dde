"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Both the persistence layer (lower) and the service layer (higher) use the model defined here
(Decouples the data model specific to the DB layer or API layer from the parsed Game of the domain layer)
"""

from dataclasses import dataclass, field


@dataclass
class GameModel:
    """Transport-safe representation of a parsed and replayed game."""

    tags: dict[str, str]
    moves_san: list[str]
    history_fen: list[str]  # starting position first, then one FEN per ply
    result: str
    pgn: str = field(default="")
