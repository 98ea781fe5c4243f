"""
Type definitions used across layers
"""

from enum import StrEnum


class SessionStatus(StrEnum):
    IDLE = "idle"
    INVITE_SENT = "invite sent"
    INVITE_RECEIVED = "invite received"
    IN_PROGRESS = "in progress"


class ControlMessage(StrEnum):
    """Reserved payloads that are not moves. Handled by the session, never by the engine."""

    REQUEST_GAME = "REQ_GAME"
    ACCEPT_GAME = "ACC_GAME"
