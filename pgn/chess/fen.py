"""
Forsyth-Edwards Notation: a single line of text describing a whole position.
---

FEN, or Forsyth-Edwards Notation, is a standard notation for describing a particular board position of a chess game.
The purpose of FEN is to provide all the necessary information to restart a game from a particular position.

<board position string> <active color> <castling rights> <en passant square> <# half move clock> <number turns played>

* The string to describe the board position is described in the Board class
* The active color is either "w" or "b"
* Castling rights are denoted as "k" for king-side or "q" for queen-side. Capital letters for the white pieces, small letters for the black pieces.
    In the starting position: KQkq (all rights available). Once all rights have been revoked a "-" is used instead.
* The en passant square is the square a pawn skipped over with a double step. If not available a "-" is used.
* The half move clock counts the number of moves made since the last pawn move or capture.
* The number of turns starts at 1 and increments after every move black makes.

ex) The standard starting position has a FEN
rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1
i.e. it is white to move, all castling options available, no en passant square, no half moves and we are in the first turn.
"""

from itertools import combinations

from pgn.chess.board import Board
from pgn.chess.castling import CASTLING_ORDER, castling_from_fen, castling_to_fen
from pgn.chess.pieces import Color
from pgn.chess.position import Position
from pgn.chess.square import FILE_NAMES, RANK_NAMES, Square
from pgn.core.exceptions import FenFormatError

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"
NUM_FEN_FIELDS = 6
# "-", then every subset of "KQkq" with its letters in FEN order
VALID_CASTLING_ENCODINGS: list[str] = ["-"] + [
    "".join(direction.value for direction in subset)
    for size in range(1, len(CASTLING_ORDER) + 1)
    for subset in combinations(CASTLING_ORDER, size)
]
COLOR_CODES: dict[str, Color] = {"w": Color.WHITE, "b": Color.BLACK}
COLOR_TO_CODE: dict[Color, str] = {value: key for key, value in COLOR_CODES.items()}


def is_valid_color_code(color: str) -> bool:
    return color in COLOR_CODES


def is_valid_castling_rights(castling: str) -> bool:
    """A valid castling encoding has either KQkq, KQk, etc. or a '-' if all rights have been revoked."""
    return castling in VALID_CASTLING_ENCODINGS


def is_valid_en_passant(en_passant: str) -> bool:
    """Valid en passant square encoding should be a square that exists on the board or a '-'"""
    return (en_passant == "-") or is_valid_square(en_passant)


def is_valid_square(square: str) -> bool:
    """Valid square should be a letter for the file + a number for the rank"""
    return len(square) == 2 and square[0] in FILE_NAMES and square[1] in RANK_NAMES


def is_valid_move_counter(counter: str, minimum: int = 0) -> bool:
    return counter.isascii() and counter.isdigit() and int(counter) >= minimum


def position_from_fen(fen: str) -> Position:
    """Decode a FEN string. Every malformed field raises FenFormatError naming the field."""
    parts = fen.split()
    if len(parts) != NUM_FEN_FIELDS:
        raise FenFormatError(
            f"FEN must have {NUM_FEN_FIELDS} space-separated fields, found {len(parts)}: {fen!r}"
        )

    (
        board_fen,
        active_color,
        castling_str,
        en_passant_algebraic,
        half_move_clock,
        num_turns,
    ) = parts

    board = Board.from_fen(board_fen)

    if not is_valid_color_code(active_color):
        raise FenFormatError(f"Active color must be 'w' or 'b', not {active_color!r}")

    if not is_valid_castling_rights(castling_str):
        raise FenFormatError(f"Cannot interpret castling rights {castling_str!r}")

    if not is_valid_en_passant(en_passant_algebraic):
        raise FenFormatError(
            f"En passant field must be a square or '-', not {en_passant_algebraic!r}"
        )

    if not is_valid_move_counter(half_move_clock):
        raise FenFormatError(f"Halfmove clock must be a number, not {half_move_clock!r}")

    # the fullmove number starts at 1
    if not is_valid_move_counter(num_turns, minimum=1):
        raise FenFormatError(
            f"Fullmove number must be a number of at least 1, not {num_turns!r}"
        )

    en_passant_square = (
        Square.from_algebraic(en_passant_algebraic)
        if en_passant_algebraic != "-"
        else None
    )
    return Position(
        board=board,
        color_to_move=COLOR_CODES[active_color],
        castling_rights=castling_from_fen(castling_str),
        en_passant_square=en_passant_square,
        halfmove_clock=int(half_move_clock),
        fullmove_number=int(num_turns),
    )


def position_to_fen(position: Position) -> str:
    """reverse operation: write a FEN from the given position"""
    active_color = COLOR_TO_CODE[position.color_to_move]
    castling_str = castling_to_fen(position.castling_rights)
    en_passant_algebraic = (
        position.en_passant_square.to_algebraic()
        if position.en_passant_square is not None
        else "-"
    )
    return (
        f"{position.board.to_fen()} {active_color} {castling_str} "
        f"{en_passant_algebraic} {position.halfmove_clock} {position.fullmove_number}"
    )


def is_valid_fen(fen: str) -> bool:
    """Check if given string follows proper FEN notation."""
    try:
        position_from_fen(fen)
    except FenFormatError:
        return False
    return True
