"""Unit tests for pgn/chess/square.py"""

from string import ascii_lowercase

import pytest

from pgn.chess.square import BOARD_DIMENSIONS, Square
from pgn.core.exceptions import InvalidSquareError


@pytest.mark.parametrize(
    "file, rank, notation",
    [
        (file, rank, f"{ascii_lowercase[file]}{rank + 1}")
        for file in range(8)
        for rank in range(8)
    ],
)
def test_creating_from_algebraic(file: int, rank: int, notation: str) -> None:
    """'a1' maps to file 0, rank 0 ... 'h8' to file 7, rank 7"""
    square = Square.from_algebraic(notation)
    assert square.file == file
    assert square.rank == rank


@pytest.mark.parametrize(
    "file, rank, notation",
    [
        (file, rank, f"{ascii_lowercase[file]}{rank + 1}")
        for file in range(8)
        for rank in range(8)
    ],
)
def test_to_algebraic_notation(file: int, rank: int, notation: str) -> None:
    """The reverse: the square on the first file and first rank is written as a1"""
    square = Square(file, rank)
    assert square.to_algebraic() == notation
    assert str(square) == notation


@pytest.mark.parametrize(
    "notation",
    [
        "i1",  # file beyond h
        "a9",  # rank beyond 8
        "a0",
        "A1",  # files are lower case
        "e",
        "e44",
        "",
    ],
)
def test_invalid_algebraic_notation(notation: str) -> None:
    """Anything outside a-h / 1-8 is not a square"""
    with pytest.raises(InvalidSquareError):
        Square.from_algebraic(notation)


def test_invalid_square_error_is_a_value_error() -> None:
    """Callers that only know about ValueError can still catch it"""
    with pytest.raises(ValueError):
        Square.from_algebraic("z9")


def test_square_within_bounds() -> None:
    """happy case: squares within the dimensions of the board"""
    for file in range(BOARD_DIMENSIONS[0]):
        for rank in range(BOARD_DIMENSIONS[1]):
            assert Square(file, rank).is_within_bounds()


@pytest.mark.parametrize(
    "file, rank",
    [(8, 0), (0, 8), (-1, 0), (0, -1), (8, 8), (-1, -1)],
)
def test_square_out_of_bounds(file: int, rank: int) -> None:
    square = Square(file, rank)
    assert not square.is_within_bounds()
    with pytest.raises(InvalidSquareError):
        square.to_algebraic()


def test_offset() -> None:
    """Stepping from a square may leave the board, that is up to the caller to check"""
    d4 = Square.from_algebraic("d4")
    assert d4.offset(1, 2) == Square.from_algebraic("e6")
    assert d4.offset(-3, -3) == Square.from_algebraic("a1")
    assert not d4.offset(-4, 0).is_within_bounds()


def test_squares_are_hashable_values() -> None:
    """Two squares with the same coordinates are the same key"""
    assert {Square(3, 3): "x"}[Square.from_algebraic("d4")] == "x"
