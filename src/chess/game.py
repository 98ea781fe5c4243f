"""
The ChessGame class is the entrypoint into the domain layer for the session layer.
It owns the authoritative board, decides whether a proposed move is legal, executes it and keeps track of
whose turn it is, whether that side is in check, the en passant target and the move history.

The only way to change a ChessGame from the outside is `make_move` (or `reset`).
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from src.chess.board import Board
from src.chess.castling import CastlingSquares
from src.chess.legality import is_legal_move
from src.chess.moves import Move, MoveSnapshot, is_king_in_check
from src.chess.pieces import Color, Piece, PieceType
from src.chess.square import Square
from src.core.models import GameSnapshot

logger = logging.getLogger(__name__)


@dataclass
class ChessGame:
    turn: Color = field(default=Color.WHITE, init=False)
    is_check: bool = field(default=False, init=False)
    # NOTE: declared, but never computed. Checkmate (and stalemate) detection is not part of this engine.
    is_checkmate: bool = field(default=False, init=False)
    en_passant_target: Optional[Square] = field(default=None, init=False)
    move_history: tuple[Move, ...] = field(default=(), init=False)
    _board: Board = field(default_factory=Board.empty, init=False, repr=False)

    def __post_init__(self) -> None:
        self.reset()

    # --- DOMAIN LAYER API CALLED BY SESSION / UI ---
    def reset(self) -> None:
        """Back to the standard starting position, white to move."""
        self._board = Board.starting_position()
        self.turn = Color.WHITE
        self.is_check = False
        self.is_checkmate = False
        self.en_passant_target = None
        self.move_history = ()

    def get_piece(self, square: Square) -> Optional[Piece]:
        """Read-only board query. Off-board squares hold nothing."""
        return self._board.piece(square)

    def make_move(self, from_square: Square, to_square: Square) -> bool:
        """
        Attempt to make a move for the side whose turn it is.
        -----

        1. check the move against the rules of the moving piece (no state change if that fails)
        2. apply it on the board, including the rook of a castling move and the pawn taken en passant
        3. if that leaves your own king in check, put every touched cell back and reject
        4. otherwise commit: en passant target, history, turn, check flag

        Returns True iff the move was legal and committed.
        """
        if not is_legal_move(
            self._board, from_square, to_square, self.turn, self.en_passant_target
        ):
            logger.debug("Rejected %s%s for %s", from_square, to_square, self.turn.name)
            return False

        move = Move(from_square, to_square)
        snapshot = self._apply_speculatively(move)

        if is_king_in_check(self._board, self.turn):
            snapshot.restore(self._board)
            logger.debug(
                "Rejected %s: leaves the %s king in check", move.to_uci(), self.turn.name
            )
            return False

        self._commit(move, snapshot)
        return True

    def make_move_uci(self, move_uci: str) -> bool:
        """Same as make_move, for a move written as 'e2e4'. Undecodable moves never reach the engine."""
        move = Move.from_uci(move_uci)
        if move is None:
            logger.debug("Discarded undecodable move %r", move_uci)
            return False
        return self.make_move(move.from_square, move.to_square)

    def to_snapshot(self) -> GameSnapshot:
        """Encode into a format the layers above use (UI, transport)"""
        return GameSnapshot(
            turn=self.turn.name.lower(),
            is_check=self.is_check,
            is_checkmate=self.is_checkmate,
            en_passant_target=(
                self.en_passant_target.to_algebraic()
                if self.en_passant_target is not None
                else None
            ),
            moves_uci=[move.to_uci() for move in self.move_history],
            pieces={
                square.to_algebraic(): piece.name
                for square, piece in self._board.pieces()
            },
        )

    # -- PRIVATE HELPERS ---
    def _is_castling(self, piece: Piece, move: Move) -> bool:
        return piece.type == PieceType.KING and abs(move.delta[0]) == 2

    def _is_en_passant(self, piece: Piece, move: Move) -> bool:
        """A pawn changing column onto an empty square can only be taking en passant (legality was checked before)"""
        return (
            piece.type == PieceType.PAWN
            and move.delta[0] != 0
            and not self._board.is_occupied(move.to_square)
        )

    def _apply_speculatively(self, move: Move) -> MoveSnapshot:
        """
        Update the position on the board, and return what was there before.
        ---

        NOTE for en passant: the pawn taken stands next to the moving pawn, in the column of the destination.
        NOTE for castling: the rook jumps over the king onto the square the king passed.
        """
        piece = self._board.piece(move.from_square)
        # for the typechecker: legality guarantees a piece here
        assert piece is not None

        touched = [move.from_square, move.to_square]
        en_passant_victim: Optional[Square] = None
        castling: Optional[CastlingSquares] = None

        if self._is_en_passant(piece, move):
            en_passant_victim = Square(move.to_square.column, move.from_square.row)
            touched.append(en_passant_victim)
        elif self._is_castling(piece, move):
            castling = CastlingSquares.for_king_move(move.from_square, move.to_square)
            touched.extend([castling.rook_from, castling.rook_to])

        snapshot = MoveSnapshot.capture(self._board, touched)

        self._board.remove_piece(move.from_square)
        self._board.place_piece(piece.moved(), move.to_square)

        if en_passant_victim is not None:
            self._board.remove_piece(en_passant_victim)

        if castling is not None:
            rook = self._board.piece(castling.rook_from)
            assert rook is not None
            self._board.remove_piece(castling.rook_from)
            self._board.place_piece(rook.moved(), castling.rook_to)

        return snapshot

    def _commit(self, move: Move, snapshot: MoveSnapshot) -> None:
        moved_piece = snapshot.cells[move.from_square]
        assert moved_piece is not None

        self.en_passant_target = self._determine_en_passant_target(moved_piece, move)
        self.move_history = (*self.move_history, move)
        self.turn = self.turn.opposite()
        # NOTE: computed for the side that is to move NOW
        self.is_check = is_king_in_check(self._board, self.turn)

        if self.is_check:
            logger.info("%s: %s is in check", move.to_uci(), self.turn.name)

    def _determine_en_passant_target(self, piece: Piece, move: Move) -> Optional[Square]:
        """The square a pawn skipped over by advancing two rows. Only usable on the very next move."""
        if piece.type != PieceType.PAWN or abs(move.delta[1]) != 2:
            return None
        return Square(
            move.from_square.column,
            (move.from_square.row + move.to_square.row) // 2,
        )
