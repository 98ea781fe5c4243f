"""Packets exchanged over the mesh, and the events the session cares about"""

from dataclasses import dataclass
from typing import Optional, Union

from pydantic import BaseModel, field_validator

from src.chess.moves import Move
from src.core.config import DEFAULT_BROADCAST_DEST, DEFAULT_CHESS_PORT
from src.core.exceptions import InvalidMessageError
from src.core.shared_types import ControlMessage

NodeId = str
UNKNOWN_SENDER: NodeId = "Unknown"


# --- PACKET MODELS ---
class IncomingPacket(BaseModel):
    port: int
    payload: str
    sender: NodeId = UNKNOWN_SENDER

    @field_validator("payload", mode="before")
    @classmethod
    def decode_payload_bytes(cls, value: str | bytes) -> str:
        """Some radios hand over the payload as raw bytes"""
        if isinstance(value, bytes):
            return value.decode("utf-8", errors="replace")
        return value


class OutgoingPacket(BaseModel):
    payload: str
    port: int = DEFAULT_CHESS_PORT
    dest: NodeId = DEFAULT_BROADCAST_DEST


class NodeUpdate(BaseModel):
    node_id: NodeId
    long_name: Optional[str] = None
    short_name: Optional[str] = None

    @field_validator("node_id")
    @classmethod
    def validate_node_id(cls, value: str) -> str:
        if not value.strip():
            raise InvalidMessageError("A node update needs a node id.")
        return value


# --- EVENTS ---
@dataclass(frozen=True)
class InviteReceived:
    sender: NodeId


@dataclass(frozen=True)
class InviteAccepted:
    sender: NodeId


@dataclass(frozen=True)
class MoveReceived:
    sender: NodeId
    move: Move


MeshEvent = Union[InviteReceived, InviteAccepted, MoveReceived]


def decode_payload(payload: str, sender: NodeId = UNKNOWN_SENDER) -> Optional[MeshEvent]:
    """
    Interpret a chess payload.
    ---

    * "REQ_GAME": somebody invites you to a game
    * "ACC_GAME": somebody accepted your invite
    * "e2e4": a move (exactly 4 characters, both halves valid squares)

    Anything else gets None and is to be dropped.
    """
    if payload == ControlMessage.REQUEST_GAME:
        return InviteReceived(sender)
    if payload == ControlMessage.ACCEPT_GAME:
        return InviteAccepted(sender)

    move = Move.from_uci(payload)
    if move is None:
        return None
    return MoveReceived(sender, move)


def encode_move(move: Move) -> str:
    return move.to_uci()
