"""
A square on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass
from string import ascii_lowercase

from pgn.core.exceptions import InvalidSquareError

# Chess board is always 8x8.
BOARD_DIMENSIONS = (8, 8)
FILE_NAMES = ascii_lowercase[: BOARD_DIMENSIONS[0]]
RANK_NAMES = "".join(str(rank) for rank in range(1, BOARD_DIMENSIONS[1] + 1))


@dataclass(frozen=True)
class Square:
    """
    Zero-based coordinates: file 0 is the a-file, rank 0 is the 1st rank.

    NOTE: off-board coordinates are allowed (ray scans step off the board), but they cannot be written as text.
    """

    file: int
    rank: int

    @classmethod
    def from_algebraic(cls, sq: str) -> Square:
        """Algebraic notation: 'a1' - 'h8' get converted to (0,0) - (7,7)"""
        if len(sq) != 2 or sq[0] not in FILE_NAMES or sq[1] not in RANK_NAMES:
            raise InvalidSquareError(f"Cannot interpret {sq!r} as a square.")
        return cls(FILE_NAMES.index(sq[0]), RANK_NAMES.index(sq[1]))

    def to_algebraic(self) -> str:
        if not self.is_within_bounds():
            raise InvalidSquareError(
                f"Square (file={self.file}, rank={self.rank}) is not on the board."
            )
        return f"{FILE_NAMES[self.file]}{RANK_NAMES[self.rank]}"

    def is_within_bounds(self) -> bool:
        return (0 <= self.file < BOARD_DIMENSIONS[0]) and (
            0 <= self.rank < BOARD_DIMENSIONS[1]
        )

    def offset(self, df: int, dr: int) -> Square:
        """The square reached by stepping df files and dr ranks (may be off the board)"""
        return Square(self.file + df, self.rank + dr)

    def __str__(self) -> str:
        return self.to_algebraic()
