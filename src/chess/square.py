"""
A square on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

# Chess board is always 8x8. Columns and rows are zero-indexed: (0, 0) is a1, (7, 7) is h8.
BOARD_DIMENSIONS = (8, 8)


@dataclass(frozen=True)
class Square:
    column: int
    row: int

    @classmethod
    def from_algebraic(cls, sq: str) -> Optional[Square]:
        """Algebraic notation: 'a1' - 'h8' get converted to (0,0) - (7,7).

        Anything else (wrong length, letters beyond 'h', digits beyond '8') gives None instead of raising.
        """
        if len(sq) != 2:
            return None
        square = cls(ord(sq[0]) - ord("a"), ord(sq[1]) - ord("1"))
        if not square.is_within_bounds():
            return None
        return square

    def to_algebraic(self) -> str:
        return f"{chr(self.column + ord('a'))}{chr(self.row + ord('1'))}"

    def is_within_bounds(self) -> bool:
        return (0 <= self.column < BOARD_DIMENSIONS[0]) and (
            0 <= self.row < BOARD_DIMENSIONS[1]
        )

    def offset(self, d_column: int, d_row: int) -> Square:
        """The square shifted by the given deltas (may fall off the board)"""
        return Square(self.column + d_column, self.row + d_row)

    def __str__(self) -> str:
        return self.to_algebraic()
