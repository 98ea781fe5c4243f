"""Defines the types of chess pieces"""

from dataclasses import dataclass, replace
from enum import Enum, auto
from typing import Self


class PieceType(Enum):
    PAWN = auto()
    KNIGHT = auto()
    BISHOP = auto()
    ROOK = auto()
    QUEEN = auto()
    KING = auto()


class Color(Enum):
    WHITE = auto()
    BLACK = auto()

    def opposite(self) -> "Color":
        return Color.BLACK if self == Color.WHITE else Color.WHITE

    @property
    def forward(self) -> int:
        """Row direction the pawns of this color move in: White moves UP the board, Black moves DOWN"""
        return 1 if self == Color.WHITE else -1


# Standard back rank, from the a-file to the h-file
BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)

# (zero-indexed) rows the pieces / pawns of each color start on
HOME_ROW: dict[Color, int] = {Color.WHITE: 0, Color.BLACK: 7}
PAWN_START_ROW: dict[Color, int] = {Color.WHITE: 1, Color.BLACK: 6}


@dataclass(frozen=True)
class Piece:
    type: PieceType
    color: Color
    has_moved: bool = False

    def moved(self) -> Self:
        """A piece never changes in place: landing on a new square produces a copy that remembers it has moved."""
        return replace(self, has_moved=True)

    @property
    def name(self) -> str:
        return f"{self.color.name.lower()} {self.type.name.lower()}"
