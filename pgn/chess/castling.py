"""Helpers for implementing Castling rules. Need to be imported by multiple sources"""

from dataclasses import dataclass
from enum import Enum
from typing import Self

from pgn.chess.pieces import Color
from pgn.chess.square import Square


class CastlingDirection(Enum):
    """The four castling directions. Values represent their encodings in FEN string."""

    WHITE_KING_SIDE = "K"
    WHITE_QUEEN_SIDE = "Q"
    BLACK_KING_SIDE = "k"
    BLACK_QUEEN_SIDE = "q"


class CastlingSide(Enum):
    """What a SAN castling token says, before knowing who plays it"""

    KING_SIDE = "O-O"
    QUEEN_SIDE = "O-O-O"


# FEN always lists the rights in this order
CASTLING_ORDER: tuple[CastlingDirection, ...] = (
    CastlingDirection.WHITE_KING_SIDE,
    CastlingDirection.WHITE_QUEEN_SIDE,
    CastlingDirection.BLACK_KING_SIDE,
    CastlingDirection.BLACK_QUEEN_SIDE,
)

ALL_CASTLING_RIGHTS: frozenset[CastlingDirection] = frozenset(CastlingDirection)

CASTLING_BY_SIDE: dict[tuple[Color, CastlingSide], CastlingDirection] = {
    (Color.WHITE, CastlingSide.KING_SIDE): CastlingDirection.WHITE_KING_SIDE,
    (Color.WHITE, CastlingSide.QUEEN_SIDE): CastlingDirection.WHITE_QUEEN_SIDE,
    (Color.BLACK, CastlingSide.KING_SIDE): CastlingDirection.BLACK_KING_SIDE,
    (Color.BLACK, CastlingSide.QUEEN_SIDE): CastlingDirection.BLACK_QUEEN_SIDE,
}

RIGHTS_OF_COLOR: dict[Color, frozenset[CastlingDirection]] = {
    Color.WHITE: frozenset(
        {CastlingDirection.WHITE_KING_SIDE, CastlingDirection.WHITE_QUEEN_SIDE}
    ),
    Color.BLACK: frozenset(
        {CastlingDirection.BLACK_KING_SIDE, CastlingDirection.BLACK_QUEEN_SIDE}
    ),
}


@dataclass(frozen=True)
class CastlingSquares:
    """
    Where king and rook stand before and after castling.
    NOTE: while a right is still held, king and rook are known to be on their `_from` squares.
    """

    king_from: Square
    king_to: Square
    rook_from: Square
    rook_to: Square

    @classmethod
    def on_rank(cls, rank: int, king_to: str, rook_from: str, rook_to: str) -> Self:
        """Squares of one home rank (1 or 8), given by their file letters. The king always starts on the e-file."""
        squares = [
            Square.from_algebraic(f"{file}{rank}")
            for file in ("e", king_to, rook_from, rook_to)
        ]
        return cls(*squares)


CASTLING_RULES: dict[CastlingDirection, CastlingSquares] = {
    CastlingDirection.WHITE_KING_SIDE: CastlingSquares.on_rank(1, "g", "h", "f"),
    CastlingDirection.WHITE_QUEEN_SIDE: CastlingSquares.on_rank(1, "c", "a", "d"),
    CastlingDirection.BLACK_KING_SIDE: CastlingSquares.on_rank(8, "g", "h", "f"),
    CastlingDirection.BLACK_QUEEN_SIDE: CastlingSquares.on_rank(8, "c", "a", "d"),
}

# A rook leaving (or being captured on) its home square ends the matching right
ROOK_HOME_SQUARES: dict[Square, CastlingDirection] = {
    rule.rook_from: direction for direction, rule in CASTLING_RULES.items()
}


def castling_from_fen(castle_fen: str) -> frozenset[CastlingDirection]:
    """parse the part of the FEN string that encodes castling rights"""
    return frozenset(
        direction for direction in CastlingDirection if direction.value in castle_fen
    )


def castling_to_fen(castling_rights: frozenset[CastlingDirection]) -> str:
    """create the part of the FEN string that encodes castling rights"""
    castling_chars = "".join(
        [direction.value for direction in CASTLING_ORDER if direction in castling_rights]
    )
    return castling_chars or "-"
