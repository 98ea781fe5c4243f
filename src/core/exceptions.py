"""
Custom exceptions used across layers.

NOTE: the chess engine itself never raises for an illegal move: make_move simply returns False.
These are for misuse of the layers around it.
"""


class GameError(Exception):
    """Base class for all errors raised by this application"""


class SessionStateError(GameError):
    """The session was asked to do something that makes no sense in its current state"""


class InvalidMessageError(GameError):
    """A packet / node update received from the mesh does not have the expected shape"""
