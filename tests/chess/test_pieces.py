"""Unit tests for pgn/chess/pieces.py"""

from dataclasses import FrozenInstanceError

import pytest

from pgn.chess.pieces import (
    FEN_TO_PIECE,
    PIECE_TO_FEN,
    SAN_TO_PIECE,
    Color,
    Piece,
    PieceType,
)


@pytest.mark.parametrize("char", [char.upper() for char in FEN_TO_PIECE.keys()])
def test_creating_white_piece_from_fen(char: str) -> None:
    """Capital letters are used for white pieces"""
    piece = Piece.from_fen(char)
    assert piece.type == FEN_TO_PIECE[char.lower()]
    assert piece.color == Color.WHITE


@pytest.mark.parametrize("char", [char.lower() for char in FEN_TO_PIECE.keys()])
def test_creating_black_piece_from_fen(char: str) -> None:
    """Lower case letters are used for black pieces"""
    piece = Piece.from_fen(char)
    assert piece.type == FEN_TO_PIECE[char.lower()]
    assert piece.color == Color.BLACK


@pytest.mark.parametrize("piece_type", list(PieceType))
def test_pieces_to_fen(piece_type: PieceType) -> None:
    """Case of the FEN letter encodes the color"""
    assert Piece(piece_type, Color.WHITE).to_fen() == PIECE_TO_FEN[piece_type].upper()
    assert Piece(piece_type, Color.BLACK).to_fen() == PIECE_TO_FEN[piece_type].lower()


def test_pawn_has_no_san_letter() -> None:
    """SAN writes pieces with capitals only, and never a letter for pawns"""
    assert PieceType.PAWN not in SAN_TO_PIECE.values()
    assert all(letter.isupper() for letter in SAN_TO_PIECE)


@pytest.mark.parametrize("color", list(Color))
def test_promotion_to_queen(color: Color) -> None:
    """Promotion hands back a new piece with the same color, the pawn itself is untouched"""
    pawn = Piece(PieceType.PAWN, color)
    queen = pawn.promote_to(PieceType.QUEEN)
    assert queen == Piece(PieceType.QUEEN, color)
    assert pawn.type == PieceType.PAWN


def test_pieces_are_immutable() -> None:
    piece = Piece(PieceType.ROOK, Color.WHITE)
    with pytest.raises(FrozenInstanceError):
        piece.type = PieceType.QUEEN  # type: ignore[misc]


def test_opponent() -> None:
    assert Color.WHITE.opponent == Color.BLACK
    assert Color.BLACK.opponent == Color.WHITE


def test_unicode_symbols() -> None:
    assert Piece(PieceType.KING, Color.WHITE).to_unicode() == "♔"
    assert Piece(PieceType.PAWN, Color.BLACK).to_unicode() == "♟"
