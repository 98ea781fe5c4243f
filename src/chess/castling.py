"""Helpers for implementing Castling rules. Need to be imported by multiple sources"""

from dataclasses import dataclass
from enum import Enum
from typing import Self

from src.chess.square import Square


class CastlingSide(Enum):
    """Values are the columns the rook starts on."""

    KING_SIDE = 7
    QUEEN_SIDE = 0

    @classmethod
    def from_king_move(cls, king_from: Square, king_to: Square) -> Self:
        """Tie-break: moving towards the h-file is king side, otherwise queen side."""
        return cls.KING_SIDE if king_to.column > king_from.column else cls.QUEEN_SIDE


# Where the rook lands after castling (column)
ROOK_DESTINATION_COLUMN: dict[CastlingSide, int] = {
    CastlingSide.KING_SIDE: 5,
    CastlingSide.QUEEN_SIDE: 3,
}


@dataclass(frozen=True)
class CastlingSquares:
    """
    Store the squares where king/rook start from/end up in by castling.
    NOTE: All four lie on the row the king starts on.
    """

    king_from: Square
    king_to: Square
    rook_from: Square
    rook_to: Square

    @classmethod
    def for_king_move(cls, king_from: Square, king_to: Square) -> Self:
        side = CastlingSide.from_king_move(king_from, king_to)
        row = king_from.row
        return cls(
            king_from=king_from,
            king_to=king_to,
            rook_from=Square(side.value, row),
            rook_to=Square(ROOK_DESTINATION_COLUMN[side], row),
        )

    @property
    def passed_square(self) -> Square:
        """The square the king skips over (midpoint column). It may not be attacked."""
        return Square((self.king_from.column + self.king_to.column) // 2, self.king_from.row)


def is_castling_move(king_from: Square, king_to: Square) -> bool:
    """A king covering two columns on its own row"""
    return (king_from.row == king_to.row) and (
        abs(king_to.column - king_from.column) == 2
    )
