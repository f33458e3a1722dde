"""Defines the types of chess pieces"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Self


class PieceType(Enum):
    PAWN = auto()
    KNIGHT = auto()
    BISHOP = auto()
    ROOK = auto()
    QUEEN = auto()
    KING = auto()


class Color(Enum):
    WHITE = auto()
    BLACK = auto()

    @property
    def opponent(self) -> "Color":
        return Color.BLACK if self == Color.WHITE else Color.WHITE


FEN_TO_PIECE: dict[str, PieceType] = {
    "p": PieceType.PAWN,
    "n": PieceType.KNIGHT,
    "b": PieceType.BISHOP,
    "r": PieceType.ROOK,
    "q": PieceType.QUEEN,
    "k": PieceType.KING,
}

PIECE_TO_FEN: dict[PieceType, str] = {value: key for key, value in FEN_TO_PIECE.items()}

# SAN never writes the pawn letter
SAN_TO_PIECE: dict[str, PieceType] = {
    "N": PieceType.KNIGHT,
    "B": PieceType.BISHOP,
    "R": PieceType.ROOK,
    "Q": PieceType.QUEEN,
    "K": PieceType.KING,
}

PIECE_TO_SAN: dict[PieceType, str] = {value: key for key, value in SAN_TO_PIECE.items()}

UNICODE_PIECES: dict[tuple[Color, PieceType], str] = {
    (Color.WHITE, PieceType.KING): "♔",
    (Color.WHITE, PieceType.QUEEN): "♕",
    (Color.WHITE, PieceType.ROOK): "♖",
    (Color.WHITE, PieceType.BISHOP): "♗",
    (Color.WHITE, PieceType.KNIGHT): "♘",
    (Color.WHITE, PieceType.PAWN): "♙",
    (Color.BLACK, PieceType.KING): "♚",
    (Color.BLACK, PieceType.QUEEN): "♛",
    (Color.BLACK, PieceType.ROOK): "♜",
    (Color.BLACK, PieceType.BISHOP): "♝",
    (Color.BLACK, PieceType.KNIGHT): "♞",
    (Color.BLACK, PieceType.PAWN): "♟",
}


@dataclass(frozen=True)
class Piece:
    type: PieceType
    color: Color

    @classmethod
    def from_fen(cls, character: str) -> Self:
        """Upper case letters are White, lower case Black. Raises KeyError for anything else."""
        return cls(
            FEN_TO_PIECE[character.lower()],
            Color.WHITE if character.isupper() else Color.BLACK,
        )

    def to_fen(self) -> str:
        letter = PIECE_TO_FEN[self.type]
        return letter.upper() if self.color == Color.WHITE else letter

    def to_unicode(self) -> str:
        return UNICODE_PIECES[(self.color, self.type)]

    def promote_to(self, new_type: PieceType) -> Self:
        """Pieces are immutable: promotion hands back a new piece of the same color"""
        return type(self)(new_type, self.color)
