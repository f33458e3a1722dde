"""
Type definitions used across layers
"""

from enum import StrEnum


class GameResult(StrEnum):
    """The four game termination markers of PGN movetext"""

    WHITE_WINS = "1-0"
    BLACK_WINS = "0-1"
    DRAW = "1/2-1/2"
    UNKNOWN = "*"


# --- NOTE the domain layer has its own Color enum (src of truth for move calculations). This one is for the boundary models.


class Color(StrEnum):
    WHITE = "white"
    BLACK = "black"
