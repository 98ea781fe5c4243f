"""
Boundary layer data model(s).

These objects can be used to communicate with the session / UI.
(Decouples the data model of the engine from the information needed to send across boundaries)
"""

from dataclasses import dataclass
from typing import Optional

# Type aliases to make GameSnapshot easier to read
SquareName = str
PieceName = str


@dataclass
class GameSnapshot:
    """Transport-safe, read-only representation of a chess game, for whoever draws the board."""

    turn: str
    is_check: bool
    is_checkmate: bool
    en_passant_target: Optional[SquareName]
    moves_uci: list[str]
    pieces: dict[SquareName, PieceName]
