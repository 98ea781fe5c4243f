"""Small helpers shared by the test modules (and conftest.py)"""

from typing import Callable

from src.chess.board import Board
from src.chess.game import ChessGame
from src.chess.pieces import Color, Piece, PieceType
from src.chess.square import Square

BoardBuilder = Callable[[dict[str, str]], Board]
GameBuilder = Callable[..., ChessGame]

PIECE_LETTERS: dict[str, PieceType] = {
    "p": PieceType.PAWN,
    "n": PieceType.KNIGHT,
    "b": PieceType.BISHOP,
    "r": PieceType.ROOK,
    "q": PieceType.QUEEN,
    "k": PieceType.KING,
}


def sq(name: str) -> Square:
    """Shorthand: squares written in tests are always valid"""
    square = Square.from_algebraic(name)
    assert square is not None
    return square


def piece_from_letter(letter: str, has_moved: bool = False) -> Piece:
    """upper case: White pieces, lower case: Black pieces"""
    color = Color.WHITE if letter.isupper() else Color.BLACK
    return Piece(PIECE_LETTERS[letter.lower()], color, has_moved)
