"""
Geometry/Base movement and attacking rules

Key idea: Use strategy pattern to define the attack geometry for each piece type.
These functions are pure: they don't know whose turn it is, nor whether the destination holds a friend or a foe.

Legality is checked later by legality.py / Game
"""

from dataclasses import dataclass, field
from typing import Callable, Optional, Protocol, Self

from src.chess.pieces import Color, Piece, PieceType
from src.chess.square import Square


class Board(Protocol):
    """Just the parts the geometry functions need"""

    def piece(self, square: Square) -> Optional[Piece]: ...
    def is_occupied(self, square: Square) -> bool: ...
    def place_piece(self, piece: Optional[Piece], square: Square) -> None: ...
    def pieces(self) -> list[tuple[Square, Piece]]: ...
    def locate_king(self, color: Color) -> Optional[Square]: ...


Vector = tuple[int, int]


@dataclass(frozen=True)
class Move:
    """basic definition of a move to be made"""

    from_square: Square
    to_square: Square

    @classmethod
    def from_uci(cls, uci: str) -> Optional[Self]:
        """
        Universal Chess Interface (without the promotion suffix, which is not supported):
        ---
        * "e2e4": move the piece that was on e2 to e4
        * "e1g1": the king castles king side

        Anything that is not exactly two valid squares gives None.
        """
        if len(uci) != 4:
            return None
        from_sq = Square.from_algebraic(uci[:2])
        to_sq = Square.from_algebraic(uci[2:])
        if from_sq is None or to_sq is None:
            return None
        return cls(from_sq, to_sq)

    def to_uci(self) -> str:
        """Convert into UCI notation"""
        return f"{self.from_square.to_algebraic()}{self.to_square.to_algebraic()}"

    @property
    def delta(self) -> Vector:
        return (
            self.to_square.column - self.from_square.column,
            self.to_square.row - self.from_square.row,
        )


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


# --- GEOMETRY ---
def path_clear(board: Board, from_square: Square, to_square: Square) -> bool:
    """
    Walk the straight line / diagonal strictly between the two squares (both endpoints excluded).

    NOTE: only meaningful when the squares are already known to be aligned.
    """
    step: Vector = (
        _sign(to_square.column - from_square.column),
        _sign(to_square.row - from_square.row),
    )
    current = from_square.offset(*step)
    while current != to_square:
        if board.is_occupied(current):
            return False
        current = current.offset(*step)
    return True


def is_straight(from_square: Square, to_square: Square) -> bool:
    """Same column or same row"""
    return (from_square.column == to_square.column) or (
        from_square.row == to_square.row
    )


def is_diagonal(from_square: Square, to_square: Square) -> bool:
    """|delta_column| = |delta_row|"""
    return abs(to_square.column - from_square.column) == abs(
        to_square.row - from_square.row
    )


def rook_geometry(board: Board, from_square: Square, to_square: Square) -> bool:
    """Rooks move either horizontally or vertically"""
    return is_straight(from_square, to_square) and path_clear(
        board, from_square, to_square
    )


def bishop_geometry(board: Board, from_square: Square, to_square: Square) -> bool:
    """Bishops move diagonally"""
    return is_diagonal(from_square, to_square) and path_clear(
        board, from_square, to_square
    )


def queen_geometry(board: Board, from_square: Square, to_square: Square) -> bool:
    """The Queen combines the rook and the bishop"""
    aligned = is_straight(from_square, to_square) or is_diagonal(
        from_square, to_square
    )
    return aligned and path_clear(board, from_square, to_square)


def knight_geometry(board: Board, from_square: Square, to_square: Square) -> bool:
    """Knights jump: (1, 2) or (2, 1) in any direction. Nothing can block them."""
    offsets = sorted(
        (
            abs(to_square.column - from_square.column),
            abs(to_square.row - from_square.row),
        )
    )
    return offsets == [1, 2]


def king_geometry(board: Board, from_square: Square, to_square: Square) -> bool:
    """A single step in any direction (Chebyshev distance 1)"""
    return (
        max(
            abs(to_square.column - from_square.column),
            abs(to_square.row - from_square.row),
        )
        <= 1
    )


def pawn_geometry(board: Board, from_square: Square, to_square: Square) -> bool:
    """Pawns attack differently than they move. Their attacks are checked by `pawn_attacks()` instead."""
    return False


def pawn_attacks(color: Color, from_square: Square, to_square: Square) -> bool:
    """
    A pawn attacks the two squares diagonally in front of it.

    NOTE: 'in front' depends on the color of the ATTACKING pawn, and holds whether or not the square is occupied.
    """
    return (abs(to_square.column - from_square.column) == 1) and (
        to_square.row - from_square.row == color.forward
    )


# -- STRATEGY PATTERN: ATTACK GEOMETRY ---
GeometryFn = Callable[[Board, Square, Square], bool]
ATTACK_GEOMETRY: dict[PieceType, GeometryFn] = {
    PieceType.PAWN: pawn_geometry,
    PieceType.KNIGHT: knight_geometry,
    PieceType.BISHOP: bishop_geometry,
    PieceType.ROOK: rook_geometry,
    PieceType.QUEEN: queen_geometry,
    PieceType.KING: king_geometry,
}


def attack_geometry(
    board: Board, piece: Piece, from_square: Square, to_square: Square
) -> bool:
    """Could the piece standing on from_square reach to_square? (never true for the square it stands on)"""
    if from_square == to_square:
        return False
    return ATTACK_GEOMETRY[piece.type](board, from_square, to_square)


# --- ATTACKS ---
def is_square_attacked(board: Board, square: Square, defender: Color) -> bool:
    """
    Could any piece of the defender's opponent reach this square?

    Whatever stands on the square itself is ignored: this is exactly the question asked for
    "is my king attacked" and for "does the king pass through an attacked square while castling".
    """
    attacker = defender.opposite()
    for from_square, piece in board.pieces():
        if piece.color != attacker:
            continue

        if piece.type == PieceType.PAWN:
            if pawn_attacks(attacker, from_square, square):
                return True
        elif attack_geometry(board, piece, from_square, square):
            return True
    return False


def is_king_in_check(board: Board, color: Color) -> bool:
    """No king on the board? Then nobody can check it."""
    king_square = board.locate_king(color)
    if king_square is None:
        return False
    return is_square_attacked(board, king_square, color)


# --- SPECULATIVE EXECUTION ---
@dataclass
class MoveSnapshot:
    """
    The content of every cell a move is about to touch, recorded before the move is applied.

    Restoring puts back the exact pieces (their has_moved flag included) on their exact squares.
    """

    cells: dict[Square, Optional[Piece]] = field(default_factory=dict)

    @classmethod
    def capture(cls, board: Board, squares: list[Square]) -> Self:
        return cls({square: board.piece(square) for square in squares})

    def restore(self, board: Board) -> None:
        for square, piece in self.cells.items():
            board.place_piece(piece, square)
