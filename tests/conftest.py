"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/helpers required for testing multiple layers.
"""

import pytest

from src.chess.board import Board
from src.chess.game import ChessGame
from src.chess.pieces import Color
from tests.helpers import BoardBuilder, GameBuilder, piece_from_letter, sq


@pytest.fixture
def build_board() -> BoardBuilder:
    """Call the inner function with {'e1': 'K', 'e8': 'k', ...} to get a board with just those pieces"""

    def _build(pieces: dict[str, str]) -> Board:
        board = Board.empty()
        for square_name, letter in pieces.items():
            board.place_piece(piece_from_letter(letter), sq(square_name))
        return board

    return _build


@pytest.fixture
def build_game(build_board: BoardBuilder) -> GameBuilder:
    """
    A game in a custom position.
    NOTE: there is no public way to set up a position (on purpose), so tests swap the board directly.
    """

    def _build(pieces: dict[str, str], turn: Color = Color.WHITE) -> ChessGame:
        game = ChessGame()
        game._board = build_board(pieces)
        game.turn = turn
        return game

    return _build


@pytest.fixture
def game() -> ChessGame:
    """Fresh game in the starting position"""
    return ChessGame()
