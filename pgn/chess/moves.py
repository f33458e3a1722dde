"""
Decoding of a single move written in Standard Algebraic Notation (SAN).

Key idea: the decoded Move only knows what the text says (plus who is moving).
Which piece actually moves is worked out later against a board by the MoveCalculator.
"""

import re
from dataclasses import dataclass
from typing import Optional, Self

from pgn.chess.castling import CASTLING_BY_SIDE, CastlingDirection, CastlingSide
from pgn.chess.pieces import PIECE_TO_SAN, SAN_TO_PIECE, Color, Piece, PieceType
from pgn.chess.square import Square
from pgn.core.exceptions import MoveDecodeError

NULL_MOVE = "--"
CHECK = "+"
CHECKMATE = "#"

SAN_PATTERN = re.compile(
    r"""
    \A
    (?:
        (?P<castle>[O0]-[O0](?:-[O0])?)           # O-O, O-O-O (0-0 and 0-0-0 are accepted too)
      |
        (?P<piece>[KQRBN])?                       # absent piece means a pawn
        (?P<disambiguation>[a-h]?[1-8]?)          # file, rank or square of the origin
        (?P<capture>x)?
        (?P<destination>[a-h][1-8])
        (?:=(?P<promotion>[QRBN]))?
    )
    (?P<check>[+\#])?
    \Z
    """,
    re.VERBOSE,
)


@dataclass(frozen=True)
class Move:
    """
    Semantic fields of one SAN token
    ---

    * `piece` is None for castling (and for the null move)
    * `disambiguation` is None when the token carries no hint (never an empty string)
    * the color comes from the side to move, never from the letters in the text
    """

    san: str
    color: Color
    piece: Optional[PieceType] = None
    destination: Optional[Square] = None
    disambiguation: Optional[str] = None
    is_capture: bool = False
    promotion: Optional[PieceType] = None
    castle: Optional[CastlingSide] = None
    gives_check: bool = False
    gives_checkmate: bool = False
    is_null: bool = False

    @classmethod
    def from_san(cls, san: str, color: Color) -> Self:
        """
        Examples:
        * "e4"     : pawn to e4
        * "Raxe1"  : rook from the a-file captures on e1
        * "e8=Q#"  : pawn to e8, promotes to a queen, checkmate
        * "O-O-O+" : queen side castling with check
        * "--"     : null move (placeholder used inside variations)
        """
        if san == NULL_MOVE:
            return cls(san=san, color=color, is_null=True)

        match = SAN_PATTERN.match(san)
        if match is None:
            raise MoveDecodeError("Not a move in standard algebraic notation", san=san)

        check = match.group("check")
        gives_check = check == CHECK
        gives_checkmate = check == CHECKMATE

        castle_text = match.group("castle")
        if castle_text is not None:
            castle = CastlingSide(castle_text.replace("0", "O"))
            return cls(
                san=san,
                color=color,
                castle=castle,
                gives_check=gives_check,
                gives_checkmate=gives_checkmate,
            )

        piece_letter = match.group("piece")
        promotion_letter = match.group("promotion")
        return cls(
            san=san,
            color=color,
            piece=SAN_TO_PIECE[piece_letter] if piece_letter else PieceType.PAWN,
            destination=Square.from_algebraic(match.group("destination")),
            disambiguation=match.group("disambiguation") or None,
            is_capture=match.group("capture") is not None,
            promotion=SAN_TO_PIECE[promotion_letter] if promotion_letter else None,
            gives_check=gives_check,
            gives_checkmate=gives_checkmate,
        )

    @property
    def is_castle(self) -> bool:
        return self.castle is not None

    @property
    def is_pawn_move(self) -> bool:
        return self.piece == PieceType.PAWN

    @property
    def moving_piece(self) -> Optional[Piece]:
        """The piece as it stands on the board before moving (None for castling / null move)"""
        return Piece(self.piece, self.color) if self.piece is not None else None

    @property
    def placed_piece(self) -> Optional[Piece]:
        """The piece that ends up on the destination (the promotion piece if there is one)"""
        if self.piece is None:
            return None
        piece = Piece(self.piece, self.color)
        return piece.promote_to(self.promotion) if self.promotion else piece

    @property
    def castling_direction(self) -> Optional[CastlingDirection]:
        if self.castle is None:
            return None
        return CASTLING_BY_SIDE[(self.color, self.castle)]

    @property
    def symbol(self) -> Optional[str]:
        """
        Single letter of the moving piece, upper case for white and lower case for black.
        Castling moves report the king ('K') or queen ('Q') side instead.
        """
        if self.is_null:
            return None
        if self.castle is not None:
            letter = "K" if self.castle == CastlingSide.KING_SIDE else "Q"
        else:
            letter = PIECE_TO_SAN.get(self.piece, "P")
        return letter if self.color == Color.WHITE else letter.lower()

    def to_san(self) -> str:
        """Write the move back as canonical SAN (castling with letter O)"""
        if self.is_null:
            return NULL_MOVE

        suffix = CHECKMATE if self.gives_checkmate else CHECK if self.gives_check else ""
        if self.castle is not None:
            return f"{self.castle.value}{suffix}"

        piece_char = PIECE_TO_SAN.get(self.piece, "")
        hint = self.disambiguation or ""
        capture = "x" if self.is_capture else ""
        promotion = f"={PIECE_TO_SAN[self.promotion]}" if self.promotion else ""
        return f"{piece_char}{hint}{capture}{self.destination.to_algebraic()}{promotion}{suffix}"
