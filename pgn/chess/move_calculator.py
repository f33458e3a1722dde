"""
Move resolution
---

Given the board and a decoded SAN move, work out which piece moved and everything that changes because of it:
the squares on the board, castling rights, the en passant square and the move counters.

Key idea: scan BACKWARDS from the destination square, using the same geometry a piece would use to get there.
This avoids generating every legal move of the position: only pieces that could reach the destination are looked at.
"""

import logging
from typing import Optional

from pgn.chess.board import Board
from pgn.chess.castling import (
    CASTLING_RULES,
    RIGHTS_OF_COLOR,
    ROOK_HOME_SQUARES,
    CastlingDirection,
)
from pgn.chess.moves import Move
from pgn.chess.pieces import Color, Piece, PieceType
from pgn.chess.square import Square
from pgn.core.exceptions import MoveResolutionError

logger = logging.getLogger(__name__)

Vector = tuple[int, int]

DIAGONALS: list[Vector] = [(1, 1), (-1, 1), (-1, -1), (1, -1)]
STRAIGHTS: list[Vector] = [(-1, 0), (1, 0), (0, -1), (0, 1)]

# Pieces that keep moving along a direction until they hit something
SLIDING_DIRECTIONS: dict[PieceType, list[Vector]] = {
    PieceType.BISHOP: DIAGONALS,
    PieceType.ROOK: STRAIGHTS,
    PieceType.QUEEN: DIAGONALS + STRAIGHTS,
}

# Pieces that make a single step from a fixed set
STEPS: dict[PieceType, list[Vector]] = {
    PieceType.KING: [
        (-1, -1),
        (0, -1),
        (1, -1),
        (1, 0),
        (1, 1),
        (0, 1),
        (-1, 1),
        (-1, 0),
    ],
    PieceType.KNIGHT: [
        (-1, -2),
        (-1, 2),
        (1, -2),
        (1, 2),
        (-2, -1),
        (2, -1),
        (-2, 1),
        (2, 1),
    ],
}

# Which enemy sliders pin along which lines
PINNING_PIECES: list[tuple[list[Vector], frozenset[PieceType]]] = [
    (DIAGONALS, frozenset({PieceType.BISHOP, PieceType.QUEEN})),
    (STRAIGHTS, frozenset({PieceType.ROOK, PieceType.QUEEN})),
]

# White pawns move up the board (rank index grows), black pawns move down
PAWN_FORWARD: dict[Color, int] = {Color.WHITE: 1, Color.BLACK: -1}
# Landing rank (zero-based) of a double step: 4th rank for white, 5th for black
DOUBLE_STEP_RANK: dict[Color, int] = {Color.WHITE: 3, Color.BLACK: 4}
# Zero-based 2nd and 7th rank. NOTE: both are rejected whichever color moves (see `_reject_pawn_start_rank`).
PAWN_START_RANKS: frozenset[int] = frozenset({1, 6})


def first_piece(
    board: Board, start: Square, direction: Vector
) -> tuple[Optional[Piece], Square]:
    """
    Raycasting
    ---

    Walk from `start` (exclusive) along `direction` until the first occupied square or the edge of the board.
    Returns the piece found (None when the edge was reached) and the square where the walk stopped.
    """
    df, dr = direction
    square = start.offset(df, dr)
    while square.is_within_bounds():
        piece = board.at(square)
        if piece is not None:
            return piece, square
        square = square.offset(df, dr)
    return None, square


class MoveCalculator:
    """
    Computes all of the ways a specific move changes the current board.

    ---
    The origin square is resolved on construction, so an impossible or ambiguous move fails immediately.
    """

    def __init__(self, board: Board, move: Move) -> None:
        self.board = board
        self.move = move
        self.origin: Optional[Square] = self._compute_origin()

    # --- RESULTING STATE ---
    def result_board(self) -> Board:
        """The board after the move is made (the original board is left untouched)"""
        return self.board.duplicate().change(self._changes())

    def castling_restrictions(self) -> frozenset[CastlingDirection]:
        """Castling rights that are no longer available after this move"""
        restrict: set[CastlingDirection] = set()
        move = self.move

        # castling, or any king move, ends both rights of that color
        if move.is_castle or move.piece == PieceType.KING:
            restrict |= RIGHTS_OF_COLOR[move.color]

        # a rook leaving its home square
        if move.piece == PieceType.ROOK and self.origin in ROOK_HOME_SQUARES:
            restrict.add(ROOK_HOME_SQUARES[self.origin])

        # a rook being taken on its home square
        if move.destination in ROOK_HOME_SQUARES:
            restrict.add(ROOK_HOME_SQUARES[move.destination])

        return frozenset(restrict)

    def en_passant_square(self) -> Optional[Square]:
        """The square passed over by a pawn double step. None after any other move."""
        if not self.move.is_pawn_move or self.origin is None:
            return None
        destination = self.move.destination
        if abs(self.origin.rank - destination.rank) != 2:
            return None
        return Square(self.origin.file, (self.origin.rank + destination.rank) // 2)

    def resets_halfmove_clock(self) -> bool:
        return self.move.is_capture or self.move.is_pawn_move

    def increments_fullmove(self) -> bool:
        return self.move.color == Color.BLACK

    def _changes(self) -> dict[Square, Optional[Piece]]:
        """Squares to update, in order. Later entries win."""
        direction = self.move.castling_direction
        if direction is not None:
            rule = CASTLING_RULES[direction]
            return {
                rule.king_from: None,
                rule.rook_from: None,
                rule.king_to: Piece(PieceType.KING, self.move.color),
                rule.rook_to: Piece(PieceType.ROOK, self.move.color),
            }

        changes: dict[Square, Optional[Piece]] = {self.origin: None}
        captured_en_passant = self._en_passant_capture()
        if captured_en_passant is not None:
            changes[captured_en_passant] = None
        changes[self.move.destination] = self.move.placed_piece
        return changes

    def _en_passant_capture(self) -> Optional[Square]:
        """
        A pawn capturing onto an empty square must be taking en passant.
        The captured pawn sits on the destination file, on the rank the capturing pawn came from.
        """
        move = self.move
        if not (move.is_pawn_move and move.is_capture):
            return None
        if self.board.at(move.destination) is not None:
            return None
        return Square(move.destination.file, self.origin.rank)

    # --- ORIGIN RESOLUTION ---
    def _compute_origin(self) -> Optional[Square]:
        """Using the current board and move, figure out where the piece came from."""
        if self.move.is_castle:
            self._check_castling_pieces()
            return None

        piece_type = self.move.piece
        if piece_type in SLIDING_DIRECTIONS:
            candidates = self._sliding_origins()
        elif piece_type in STEPS:
            candidates = self._step_origins(STEPS[piece_type])
        else:
            candidates = self._pawn_origins()

        if len(candidates) > 1:
            candidates = self._disambiguate(candidates)

        if not candidates:
            raise MoveResolutionError(
                "No piece can make this move", san=self.move.san
            )
        if len(candidates) > 1:
            names = ", ".join(square.to_algebraic() for square in candidates)
            raise MoveResolutionError(
                f"Ambiguous move, candidates on {names}", san=self.move.san
            )

        logger.debug("Resolved %s from %s", self.move.san, candidates[0])
        return candidates[0]

    def _sliding_origins(self) -> list[Square]:
        """
        From the destination square, move in each direction stopping at the first piece.
        That piece is a candidate if it is the moving piece. Only one candidate per direction.
        """
        mover = self.move.moving_piece
        candidates: list[Square] = []
        for direction in SLIDING_DIRECTIONS[self.move.piece]:
            piece, square = first_piece(self.board, self.move.destination, direction)
            if piece == mover:
                candidates.append(square)
        return candidates

    def _step_origins(self, steps: list[Vector]) -> list[Square]:
        """From the destination square, make each step. Keep the on-board squares holding the moving piece."""
        mover = self.move.moving_piece
        candidates: list[Square] = []
        for df, dr in steps:
            square = self.move.destination.offset(df, dr)
            if square.is_within_bounds() and self.board.at(square) == mover:
                candidates.append(square)
        return candidates

    def _pawn_origins(self) -> list[Square]:
        """
        Pawn steps are used backwards here: they point from the destination to where the pawn may have stood.
        """
        color = self.move.color
        behind = -PAWN_FORWARD[color]
        if self.move.is_capture:
            steps: list[Vector] = [(-1, behind), (1, behind)]
        else:
            steps = [(0, behind)]
            if self.move.destination.rank == DOUBLE_STEP_RANK[color]:
                steps.append((0, 2 * behind))
        return self._step_origins(steps)

    def _disambiguate(self, candidates: list[Square]) -> list[Square]:
        candidates = self._filter_by_san_hint(candidates)
        if len(candidates) <= 1:
            return candidates

        candidates = self._reject_pawn_start_rank(candidates)
        return self._reject_pinned(candidates)

    def _filter_by_san_hint(self, candidates: list[Square]) -> list[Square]:
        """Keep the candidates matching the file / rank / square written in the SAN"""
        hint = self.move.disambiguation
        if hint is None:
            return candidates
        return [square for square in candidates if _matches_hint(square, hint)]

    def _reject_pawn_start_rank(self, candidates: list[Square]) -> list[Square]:
        """
        A pawn can't move two squares if there is a pawn in front of it.
        NOTE: rejects both start ranks regardless of color. Harmless, as a pawn never moves back to its own start rank.
        """
        if not self.move.is_pawn_move or self.move.is_capture:
            return candidates
        return [square for square in candidates if square.rank not in PAWN_START_RANKS]

    def _reject_pinned(self, candidates: list[Square]) -> list[Square]:
        """
        A piece can't move if it would expose its own king (discovered check).

        From the king, look along every line. If the first piece seen is a candidate, and the next piece behind it
        is an enemy slider moving along that line, the candidate is pinned and cannot be the one that moved.
        """
        king_squares = self.board.locate(Piece(PieceType.KING, self.move.color))
        if not king_squares:
            return candidates
        king_square = king_squares[0]
        opponent = self.move.color.opponent

        pinned: set[Square] = set()
        for directions, attackers in PINNING_PIECES:
            for direction in directions:
                _, square = first_piece(self.board, king_square, direction)
                if square not in candidates:
                    continue
                attacker, _ = first_piece(self.board, square, direction)
                if (
                    attacker is not None
                    and attacker.color == opponent
                    and attacker.type in attackers
                ):
                    pinned.add(square)
        return [square for square in candidates if square not in pinned]

    def _check_castling_pieces(self) -> None:
        """King and rook must still be on their home squares"""
        rule = CASTLING_RULES[self.move.castling_direction]
        king = Piece(PieceType.KING, self.move.color)
        rook = Piece(PieceType.ROOK, self.move.color)
        if self.board.at(rule.king_from) != king or self.board.at(rule.rook_from) != rook:
            raise MoveResolutionError(
                "King and rook are not on their castling squares", san=self.move.san
            )


def _matches_hint(square: Square, hint: str) -> bool:
    """hint is a file ('d'), a rank ('4') or a full square ('d4')"""
    name = square.to_algebraic()
    if len(hint) == 2:
        return name == hint
    return hint in name
