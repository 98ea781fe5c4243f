"""Unit tests for /src/chess/moves.py"""

from unittest.mock import Mock, patch

import pytest

from src.chess.board import Board
from src.chess.moves import (
    ATTACK_GEOMETRY,
    Move,
    MoveSnapshot,
    attack_geometry,
    is_king_in_check,
    is_square_attacked,
    path_clear,
    pawn_attacks,
)
from src.chess.pieces import Color, Piece, PieceType
from tests.helpers import BoardBuilder, piece_from_letter, sq


# -- Move / UCI --
def test_move_from_uci() -> None:
    move = Move.from_uci("e2e4")
    assert move == Move(sq("e2"), sq("e4"))


def test_move_to_uci() -> None:
    assert Move(sq("g1"), sq("f3")).to_uci() == "g1f3"


@pytest.mark.parametrize(
    "uci",
    [
        "e2e",  # too short
        "e2e4q",  # promotion suffix is not supported
        "z2e4",  # undecodable origin
        "e2e9",  # undecodable destination
        "REQ_GAME",  # control message, not a move
        "",
    ],
)
def test_move_from_invalid_uci(uci: str) -> None:
    assert Move.from_uci(uci) is None


def test_move_delta() -> None:
    assert Move(sq("e2"), sq("d4")).delta == (-1, 2)


# -- path_clear --
@pytest.mark.parametrize(
    "from_name, to_name",
    [
        ("a1", "a8"),  # vertical
        ("a1", "h1"),  # horizontal
        ("a1", "h8"),  # diagonal
        ("h8", "a1"),  # diagonal, backwards
        ("d4", "d5"),  # adjacent: nothing in between
    ],
)
def test_path_clear_on_empty_board(from_name: str, to_name: str) -> None:
    board = Board.empty()
    assert path_clear(board, sq(from_name), sq(to_name))


def test_path_blocked(build_board: BoardBuilder) -> None:
    board = build_board({"d4": "p"})
    assert not path_clear(board, sq("a1"), sq("h8"))
    assert not path_clear(board, sq("d1"), sq("d8"))
    assert not path_clear(board, sq("a4"), sq("h4"))


def test_path_ignores_endpoints(build_board: BoardBuilder) -> None:
    """Pieces on the start or end square do not block the path"""
    board = build_board({"a1": "R", "a8": "r"})
    assert path_clear(board, sq("a1"), sq("a8"))


# -- attack geometry --
@pytest.mark.parametrize(
    "letter, from_name, to_name, expected",
    [
        ("R", "d4", "d8", True),
        ("R", "d4", "a4", True),
        ("R", "d4", "e5", False),
        ("B", "d4", "g7", True),
        ("B", "d4", "a1", True),
        ("B", "d4", "d5", False),
        ("Q", "d4", "d8", True),
        ("Q", "d4", "h8", True),
        ("Q", "d4", "e6", False),
        ("N", "d4", "e6", True),
        ("N", "d4", "f3", True),
        ("N", "d4", "d6", False),
        ("N", "d4", "f6", False),
        ("K", "d4", "e5", True),
        ("K", "d4", "d3", True),
        ("K", "d4", "d6", False),
        ("P", "d4", "e5", False),  # pawns are never answered by the geometry table
        ("P", "d4", "d5", False),
    ],
)
def test_attack_geometry_empty_board(
    letter: str, from_name: str, to_name: str, expected: bool
) -> None:
    board = Board.empty()
    piece = piece_from_letter(letter)
    assert attack_geometry(board, piece, sq(from_name), sq(to_name)) == expected


def test_attack_geometry_blocked_slider(build_board: BoardBuilder) -> None:
    board = build_board({"d4": "Q", "d6": "P", "f6": "p"})
    queen = piece_from_letter("Q")
    assert not attack_geometry(board, queen, sq("d4"), sq("d8"))
    assert not attack_geometry(board, queen, sq("d4"), sq("g7"))
    # the blocker itself can be reached
    assert attack_geometry(board, queen, sq("d4"), sq("d6"))
    assert attack_geometry(board, queen, sq("d4"), sq("f6"))


def test_knight_jumps_over_pieces() -> None:
    board = Board.starting_position()
    knight = piece_from_letter("N")
    assert attack_geometry(board, knight, sq("g1"), sq("f3"))


def test_attack_geometry_own_square() -> None:
    board = Board.empty()
    assert not attack_geometry(board, piece_from_letter("R"), sq("d4"), sq("d4"))


def test_attack_geometry_uses_strategy_table() -> None:
    """Check wiring: dispatch happens through ATTACK_GEOMETRY"""
    board = Board.empty()
    mock_rule = Mock(return_value=True)
    with patch.dict("src.chess.moves.ATTACK_GEOMETRY", {PieceType.ROOK: mock_rule}):
        assert attack_geometry(board, piece_from_letter("r"), sq("a1"), sq("b2"))
    mock_rule.assert_called_once_with(board, sq("a1"), sq("b2"))


def test_every_piece_type_has_a_geometry() -> None:
    assert set(ATTACK_GEOMETRY.keys()) == set(PieceType)


# -- pawn attacks --
@pytest.mark.parametrize(
    "color, from_name, to_name, expected",
    [
        (Color.WHITE, "e4", "d5", True),
        (Color.WHITE, "e4", "f5", True),
        (Color.WHITE, "e4", "e5", False),
        (Color.WHITE, "e4", "d3", False),  # backwards
        (Color.BLACK, "e5", "d4", True),
        (Color.BLACK, "e5", "f4", True),
        (Color.BLACK, "e5", "d6", False),  # backwards for black
    ],
)
def test_pawn_attacks(color: Color, from_name: str, to_name: str, expected: bool) -> None:
    assert pawn_attacks(color, sq(from_name), sq(to_name)) == expected


# -- is_square_attacked --
def test_square_attacked_by_pawn_of_attacking_color(build_board: BoardBuilder) -> None:
    """A black pawn on e5 attacks d4/f4 (down the board), not d6/f6"""
    board = build_board({"e5": "p"})
    assert is_square_attacked(board, sq("d4"), Color.WHITE)
    assert is_square_attacked(board, sq("f4"), Color.WHITE)
    assert not is_square_attacked(board, sq("d6"), Color.WHITE)
    assert not is_square_attacked(board, sq("e4"), Color.WHITE)


def test_square_attacked_ignores_own_pieces(build_board: BoardBuilder) -> None:
    """Only the opponent of the defender counts as attacker"""
    board = build_board({"a1": "R"})
    assert not is_square_attacked(board, sq("a8"), Color.WHITE)
    assert is_square_attacked(board, sq("a8"), Color.BLACK)


def test_square_attacked_regardless_of_occupant(build_board: BoardBuilder) -> None:
    """The defender's own piece on the square does not protect the square from being 'attacked'"""
    board = build_board({"a1": "r", "a8": "R"})
    assert is_square_attacked(board, sq("a8"), Color.WHITE)


def test_square_not_attacked_through_blocker(build_board: BoardBuilder) -> None:
    board = build_board({"a1": "r", "a4": "P"})
    assert not is_square_attacked(board, sq("a8"), Color.WHITE)


def test_starting_position_center_not_attacked() -> None:
    board = Board.starting_position()
    assert not is_square_attacked(board, sq("e4"), Color.WHITE)
    assert not is_square_attacked(board, sq("e5"), Color.BLACK)
    # pawns on the 2nd rank attack the 3rd rank
    assert is_square_attacked(board, sq("e3"), Color.BLACK)


# -- is_king_in_check --
def test_king_in_check(build_board: BoardBuilder) -> None:
    board = build_board({"e1": "K", "e8": "r", "a8": "k"})
    assert is_king_in_check(board, Color.WHITE)
    assert not is_king_in_check(board, Color.BLACK)


def test_king_not_in_check_starting_position() -> None:
    board = Board.starting_position()
    assert not is_king_in_check(board, Color.WHITE)
    assert not is_king_in_check(board, Color.BLACK)


def test_no_king_means_no_check(build_board: BoardBuilder) -> None:
    board = build_board({"e8": "r"})
    assert not is_king_in_check(board, Color.WHITE)


# -- MoveSnapshot --
def test_snapshot_restores_exact_pieces(build_board: BoardBuilder) -> None:
    board = build_board({"e1": "K"})
    moved_rook = Piece(PieceType.ROOK, Color.WHITE, has_moved=True)
    board.place_piece(moved_rook, sq("h1"))

    snapshot = MoveSnapshot.capture(board, [sq("e1"), sq("h1"), sq("f1")])
    board.clear()
    board.place_piece(piece_from_letter("q"), sq("f1"))

    snapshot.restore(board)
    assert board.piece(sq("e1")) == piece_from_letter("K")
    assert board.piece(sq("h1")) == moved_rook
    assert board.piece(sq("f1")) is None
