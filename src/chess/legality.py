"""
Move legality BEFORE self-check is considered.

Combines the pure geometry in moves.py with:
* turn ownership (you can only move your own pieces)
* no capturing your own pieces
* pawn special cases (pushes, double pushes, diagonal captures, en passant)
* king special cases (castling)

Whether the move leaves your own king in check is only known after making it. That is the Game's job.
"""

from typing import Callable, Optional

from src.chess.castling import CastlingSquares, is_castling_move
from src.chess.moves import (
    ATTACK_GEOMETRY,
    Board,
    is_king_in_check,
    is_square_attacked,
    king_geometry,
    path_clear,
)
from src.chess.pieces import PAWN_START_ROW, Color, Piece, PieceType
from src.chess.square import Square


def is_legal_move(
    board: Board,
    from_square: Square,
    to_square: Square,
    mover: Color,
    en_passant_target: Optional[Square] = None,
) -> bool:
    """
    Is the move allowed by the rules of the moving piece?
    ---

    Rejected right away when
    * either square is off the board
    * the piece would stay where it is
    * there is no piece to move, or it belongs to the opponent
    * the destination holds one of your own pieces
    """
    if not (from_square.is_within_bounds() and to_square.is_within_bounds()):
        return False
    if from_square == to_square:
        return False

    piece = board.piece(from_square)
    if piece is None or piece.color != mover:
        return False

    target = board.piece(to_square)
    if target is not None and target.color == piece.color:
        return False

    return MOVE_RULES[piece.type](board, piece, from_square, to_square, en_passant_target)


# --- MOVE RULES PER PIECE TYPE ---
def geometry_move(
    board: Board,
    piece: Piece,
    from_square: Square,
    to_square: Square,
    en_passant_target: Optional[Square],
) -> bool:
    """Rook, bishop, queen and knight move exactly the way they attack"""
    return ATTACK_GEOMETRY[piece.type](board, from_square, to_square)


def pawn_move(
    board: Board,
    piece: Piece,
    from_square: Square,
    to_square: Square,
    en_passant_target: Optional[Square],
) -> bool:
    """
    A pawn:
    - moves by a single square forward onto an empty square.
    - can move by two from its starting row, if both squares in front of it are empty
    - takes diagonally forward. Onto an empty square only when that square is the en passant target.
    """
    direction = piece.color.forward
    d_column = to_square.column - from_square.column
    d_row = to_square.row - from_square.row
    target = board.piece(to_square)

    # single push
    if d_column == 0 and d_row == direction:
        return target is None

    # double push
    if d_column == 0 and d_row == 2 * direction:
        skipped_square = from_square.offset(0, direction)
        return (
            from_square.row == PAWN_START_ROW[piece.color]
            and target is None
            and not board.is_occupied(skipped_square)
        )

    # diagonal capture
    if abs(d_column) == 1 and d_row == direction:
        if target is not None:
            # friendly pieces were already filtered out
            return True
        return en_passant_target is not None and to_square == en_passant_target

    return False


def king_move(
    board: Board,
    piece: Piece,
    from_square: Square,
    to_square: Square,
    en_passant_target: Optional[Square],
) -> bool:
    """The king steps to any adjacent square, or castles."""
    if king_geometry(board, from_square, to_square):
        return True
    if is_castling_move(from_square, to_square):
        return can_castle(board, piece, from_square, to_square)
    return False


def can_castle(board: Board, king: Piece, king_from: Square, king_to: Square) -> bool:
    """
    **you are allowed to castle if**

    * Your king has not moved yet.
    * You are not currently in check (you cannot castle out of check).
    * The rook on that side is still on its corner and has not moved.
    * All squares between king and rook are empty.
    * The square the king passes over is not under attack.

    (Landing in check is caught later, like for any other move.)
    """
    if king.has_moved:
        return False

    if is_king_in_check(board, king.color):
        return False

    squares = CastlingSquares.for_king_move(king_from, king_to)
    rook = board.piece(squares.rook_from)
    if (
        rook is None
        or rook.type != PieceType.ROOK
        or rook.color != king.color
        or rook.has_moved
    ):
        return False

    if not path_clear(board, king_from, squares.rook_from):
        return False

    return not is_square_attacked(board, squares.passed_square, king.color)


# -- STRATEGY PATTERN: MOVE RULES ---
MoveRuleFn = Callable[[Board, Piece, Square, Square, Optional[Square]], bool]
MOVE_RULES: dict[PieceType, MoveRuleFn] = {
    PieceType.PAWN: pawn_move,
    PieceType.KNIGHT: geometry_move,
    PieceType.BISHOP: geometry_move,
    PieceType.ROOK: geometry_move,
    PieceType.QUEEN: geometry_move,
    PieceType.KING: king_move,
}
