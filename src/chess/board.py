"""The Game board: the configuration of pieces on the 8x8 grid.

Only the engine (Game + its executor) is supposed to call `place_piece` / `remove_piece`.
Everybody else reads the board through `ChessGame.get_piece`.
"""

from dataclasses import dataclass
from typing import Optional, Self

from src.chess.pieces import (
    BACK_RANK,
    HOME_ROW,
    PAWN_START_ROW,
    Color,
    Piece,
    PieceType,
)
from src.chess.square import BOARD_DIMENSIONS, Square


def all_squares() -> list[Square]:
    """Row-major order: a1, b1, ..., h1, a2, ..., h8"""
    return [
        Square(column, row)
        for row in range(BOARD_DIMENSIONS[1])
        for column in range(BOARD_DIMENSIONS[0])
    ]


@dataclass
class Board:
    position: dict[Square, Optional[Piece]]

    @classmethod
    def empty(cls) -> Self:
        return cls({square: None for square in all_squares()})

    @classmethod
    def starting_position(cls) -> Self:
        """
        Standard setup:
        * white pieces on row 0 (rank 1), white pawns on row 1 (rank 2)
        * black pawns on row 6 (rank 7), black pieces on row 7 (rank 8)
        """
        board = cls.empty()
        for color in Color:
            for column, piece_type in enumerate(BACK_RANK):
                board.place_piece(
                    Piece(piece_type, color), Square(column, HOME_ROW[color])
                )
                board.place_piece(
                    Piece(PieceType.PAWN, color),
                    Square(column, PAWN_START_ROW[color]),
                )
        return board

    def piece(self, square: Square) -> Optional[Piece]:
        """Off-board squares simply hold nothing"""
        return self.position.get(square)

    def is_occupied(self, square: Square) -> bool:
        return self.piece(square) is not None

    def place_piece(self, piece: Optional[Piece], square: Square) -> None:
        self.position[square] = piece

    def remove_piece(self, square: Square) -> None:
        self.position[square] = None

    def clear(self) -> None:
        for square in self.position:
            self.position[square] = None

    def pieces(self) -> list[tuple[Square, Piece]]:
        """Occupied squares in row-major order"""
        occupied: list[tuple[Square, Piece]] = []
        for square in all_squares():
            piece = self.position[square]
            if piece is not None:
                occupied.append((square, piece))
        return occupied

    def locate_king(self, color: Color) -> Optional[Square]:
        """First king of this color, scanning row-major. None if there is no such king."""
        return next(
            (
                square
                for square, piece in self.pieces()
                if piece.type == PieceType.KING and piece.color == color
            ),
            None,
        )

    def count_pieces(self) -> int:
        return len(self.pieces())
