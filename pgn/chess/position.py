"""
Representation of a single position in the game. Everything that can be encoded in a FEN string.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Self

from pgn.chess.board import Board
from pgn.chess.castling import ALL_CASTLING_RIGHTS, CastlingDirection
from pgn.chess.move_calculator import MoveCalculator
from pgn.chess.moves import Move
from pgn.chess.pieces import Color
from pgn.chess.square import Square

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Position:
    """
    Immutable snapshot of the game after some number of plies.
    ----

    * board: the pieces on the board
    * color_to_move: the player who moves next
    * castling_rights: castling moves still available. The set only ever shrinks during a game.
    * en_passant_square: the square a pawn just skipped over with a double step (None otherwise)
    * halfmove_clock: halfmoves since the last pawn move or capture
    * fullmove_number: starts at 1 and increments after every move black makes

    `move()` never changes a Position: it hands back the next one, so a game's history can keep every position alive.
    """

    board: Board
    color_to_move: Color = Color.WHITE
    castling_rights: frozenset[CastlingDirection] = field(
        default=ALL_CASTLING_RIGHTS
    )
    en_passant_square: Optional[Square] = None
    halfmove_clock: int = 0
    fullmove_number: int = 1

    @classmethod
    def start(cls) -> Self:
        """The starting position of a chess game"""
        return cls(Board.start())

    def move(self, san: str) -> Self:
        """
        Make a move written in SAN

        ex) queens_pawn = Position.start().move("d4")
        """
        return self.apply(Move.from_san(san, self.color_to_move))

    def apply(self, move: Move) -> Self:
        """Make an already decoded move. The move must be decoded for the side to move."""
        if move.is_null:
            return self._pass_turn()

        calculator = MoveCalculator(self.board, move)

        castling_rights = self.castling_rights - calculator.castling_restrictions()
        halfmove_clock = (
            0 if calculator.resets_halfmove_clock() else self.halfmove_clock + 1
        )
        fullmove_number = self.fullmove_number + (
            1 if calculator.increments_fullmove() else 0
        )

        return type(self)(
            board=calculator.result_board(),
            color_to_move=self.color_to_move.opponent,
            castling_rights=castling_rights,
            en_passant_square=calculator.en_passant_square(),
            halfmove_clock=halfmove_clock,
            fullmove_number=fullmove_number,
        )

    def _pass_turn(self) -> Self:
        """
        The null move ('--'): nothing moves on the board, the turn and counters advance as after a quiet move.
        """
        logger.debug("Null move played at fullmove %d", self.fullmove_number)
        return type(self)(
            board=self.board.duplicate(),
            color_to_move=self.color_to_move.opponent,
            castling_rights=self.castling_rights,
            en_passant_square=None,
            halfmove_clock=self.halfmove_clock + 1,
            fullmove_number=self.fullmove_number
            + (1 if self.color_to_move == Color.BLACK else 0),
        )

    def __str__(self) -> str:
        return self.board.pretty()
