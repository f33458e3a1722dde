"""The board: which piece stands on which square"""

from dataclasses import dataclass, field
from typing import Mapping, Optional, Self

from pgn.chess.pieces import FEN_TO_PIECE, Piece
from pgn.chess.square import BOARD_DIMENSIONS, Square
from pgn.core.exceptions import FenFormatError

STARTING_BOARD_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"
# a run of empty squares within one rank, ASCII digits only
EMPTY_RUN_DIGITS = "12345678"

SquareLike = Square | str


def _as_square(square: SquareLike) -> Square:
    """Accept either a Square or its algebraic name"""
    return Square.from_algebraic(square) if isinstance(square, str) else square


@dataclass
class Board:
    """
    Mapping of occupied squares to the piece standing there. Empty squares are simply absent.

    ---
    NOTE: once a Board is attached to a Position it is never changed again.
    A successor board is always made by `duplicate()` followed by `change()`.
    """

    squares: dict[Square, Piece] = field(default_factory=dict)

    @classmethod
    def start(cls) -> Self:
        return cls.from_fen(STARTING_BOARD_FEN)

    @classmethod
    def from_fen(cls, fen_str: str) -> Self:
        """Construct a board using the first field of a FEN string.

        ex. standard starting position:
        rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR
        means:
        * black pieces are on the 8th rank, starting with rook on a8, knight on b8, etc.
        * pawns cover 7th rank entirely
        * ranks 6 through 3 have 8 consecutive empty squares
        * rank 2 are the white pawns (capital letters)
        * 1st rank are the white pieces. Again, left-to-right reads a1-h1.
        """
        num_files, num_ranks = BOARD_DIMENSIONS
        fen_by_ranks = fen_str.split("/")
        if len(fen_by_ranks) != num_ranks:
            raise FenFormatError(
                f"Board field must describe {num_ranks} ranks, found {len(fen_by_ranks)}: {fen_str!r}"
            )

        squares: dict[Square, Piece] = {}
        for rank_idx, fen_one_rank in enumerate(fen_by_ranks):
            # FEN string is read from top rank (8th) to bottom rank (1st)
            rank = num_ranks - 1 - rank_idx
            # ... but the first character is the a-file, so reads in normal direction
            file = 0
            for character in fen_one_rank:
                if character.lower() in FEN_TO_PIECE:
                    if file < num_files:
                        squares[Square(file, rank)] = Piece.from_fen(character)
                    file += 1
                elif character in EMPTY_RUN_DIGITS:
                    # A number denotes the amount of empty squares after each other
                    file += int(character)
                else:
                    raise FenFormatError(
                        f"Unexpected character {character!r} in rank {rank + 1}: {fen_str!r}"
                    )

            if file != num_files:
                raise FenFormatError(
                    f"Rank {rank + 1} describes {file} files instead of {num_files}: {fen_str!r}"
                )
        return cls(squares)

    def to_fen(self) -> str:
        """Ranks are separated by slashes in FEN string."""
        return "/".join(
            self._rank_to_fen(rank) for rank in range(BOARD_DIMENSIONS[1] - 1, -1, -1)
        )

    def _rank_to_fen(self, rank: int) -> str:
        """FEN string of a single rank"""
        fen_characters: list[str] = []
        empty_count = 0
        for file in range(BOARD_DIMENSIONS[0]):
            piece = self.at(Square(file, rank))

            if piece is not None:
                if empty_count > 0:
                    fen_characters.append(str(empty_count))
                    empty_count = 0
                fen_characters.append(piece.to_fen())
            else:
                empty_count += 1

        # if the entire rank is empty, then we still place this number in the string
        if empty_count > 0:
            fen_characters.append(str(empty_count))
        return "".join(fen_characters)

    def at(self, square: SquareLike) -> Optional[Piece]:
        return self.squares.get(_as_square(square))

    def set(self, square: SquareLike, piece: Optional[Piece]) -> None:
        """Place a piece on a square, or empty it when piece is None"""
        square = _as_square(square)
        if piece is None:
            self.squares.pop(square, None)
        else:
            self.squares[square] = piece

    def change(self, changes: Mapping[Square, Optional[Piece]]) -> Self:
        """Batch update (applied in order). Returns the board to allow chaining after `duplicate()`."""
        for square, piece in changes.items():
            self.set(square, piece)
        return self

    def duplicate(self) -> Self:
        """Independent copy. Pieces are immutable, so copying the mapping is enough."""
        return type(self)(dict(self.squares))

    def locate(self, piece: Piece) -> list[Square]:
        return [square for square, found in self.squares.items() if found == piece]

    def pretty(self) -> str:
        """Human readable diagram with unicode pieces. 8th rank on top, '_' for empty squares."""
        rows: list[str] = []
        for rank in range(BOARD_DIMENSIONS[1] - 1, -1, -1):
            row = [
                piece.to_unicode() if (piece := self.at(Square(file, rank))) else "_"
                for file in range(BOARD_DIMENSIONS[0])
            ]
            rows.append(" ".join(row))
        return "\n".join(rows)

    def __str__(self) -> str:
        return self.pretty()
