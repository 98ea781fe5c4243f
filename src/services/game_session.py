"""Orchestration of communication between the mesh, the chess engine and the player sitting at this device."""

import logging
from queue import Empty, Queue
from typing import Optional

from src.chess.game import ChessGame
from src.chess.moves import Move
from src.chess.square import Square
from src.core.config import MeshConfig
from src.core.exceptions import SessionStateError
from src.core.shared_types import ControlMessage, SessionStatus
from src.mesh.messages import (
    IncomingPacket,
    InviteAccepted,
    InviteReceived,
    MeshEvent,
    MoveReceived,
    NodeId,
    NodeUpdate,
    OutgoingPacket,
    decode_payload,
    encode_move,
)
from src.mesh.nodes import MeshNode, NodeRegistry
from src.mesh.transport import MeshTransport

logger = logging.getLogger(__name__)


class GameSession:
    """
    One game against one peer.
    ----

    Packets from the mesh may arrive on any thread: `receive` only decodes them and puts them in the inbox.
    The thread owning the session (the UI loop) applies them by calling `process_events`,
    so the ChessGame is only ever touched by that thread.
    """

    def __init__(
        self,
        transport: MeshTransport,
        config: Optional[MeshConfig] = None,
        game: Optional[ChessGame] = None,
        nodes: Optional[NodeRegistry] = None,
    ) -> None:
        self.transport = transport
        self.config = config if config is not None else MeshConfig()
        self.game = game if game is not None else ChessGame()
        self.nodes = nodes if nodes is not None else NodeRegistry()
        self.inbox: Queue[MeshEvent] = Queue()
        self.status = SessionStatus.IDLE
        self.opponent: Optional[NodeId] = None
        self.pending_invite_from: Optional[NodeId] = None

    # -- Inbound (mesh -> session) ---
    def receive(self, packet: IncomingPacket) -> Optional[MeshEvent]:
        """Decode a packet and queue the resulting event. Foreign ports and unreadable payloads are dropped."""
        if packet.port != self.config.chess_port:
            logger.debug("Ignoring packet on port %d", packet.port)
            return None

        event = decode_payload(packet.payload, packet.sender)
        if event is None:
            logger.warning(
                "Dropping unreadable payload %r from %s", packet.payload, packet.sender
            )
            return None

        self.inbox.put(event)
        return event

    def update_node(self, update: NodeUpdate) -> MeshNode:
        return self.nodes.update_node(update)

    def process_events(self) -> list[MeshEvent]:
        """Apply everything in the inbox, oldest first. Returns the events handled."""
        handled: list[MeshEvent] = []
        while True:
            try:
                event = self.inbox.get_nowait()
            except Empty:
                break
            self._handle(event)
            handled.append(event)
        return handled

    # -- Outbound (player -> session -> mesh) ---
    def invite(self, node_id: NodeId) -> None:
        """Ask a peer for a game"""
        self._send(ControlMessage.REQUEST_GAME.value, dest=node_id)
        self.opponent = node_id
        self._change_status(SessionStatus.INVITE_SENT)

    def accept_invite(self) -> None:
        """Accept the invite that came in last. Starts a fresh game."""
        if self.pending_invite_from is None:
            raise SessionStateError("There is no invite to accept.")

        inviter = self.pending_invite_from
        self._send(ControlMessage.ACCEPT_GAME.value, dest=inviter)
        self._start_game(inviter)

    def decline_invite(self) -> None:
        """Nothing is sent: the inviter simply never hears back."""
        self.pending_invite_from = None
        if self.status == SessionStatus.INVITE_RECEIVED:
            self._change_status(SessionStatus.IDLE)

    def play(self, from_square: Square, to_square: Square) -> bool:
        """
        Make a move on this device. Only a move the engine accepted gets sent to the peer.

        Unlike a plain broadcast of every move, the move goes to the opponent directly once one is known.
        Only without an opponent (no invite sent or accepted yet) is it broadcast.
        """
        if not self.game.make_move(from_square, to_square):
            return False

        move = Move(from_square, to_square)
        self._send(encode_move(move), dest=self.opponent or self.config.broadcast_dest)
        return True

    def play_uci(self, move_uci: str) -> bool:
        """Same as play, for a move typed in as 'e2e4'"""
        move = Move.from_uci(move_uci)
        if move is None:
            return False
        return self.play(move.from_square, move.to_square)

    # -- Internal helpers --
    def _handle(self, event: MeshEvent) -> None:
        if isinstance(event, InviteReceived):
            logger.info("Game invite from %s", event.sender)
            self.pending_invite_from = event.sender
            self._change_status(SessionStatus.INVITE_RECEIVED)
        elif isinstance(event, InviteAccepted):
            logger.info("%s accepted the game. White to move.", event.sender)
            self._start_game(event.sender)
        elif isinstance(event, MoveReceived):
            move = event.move
            if not self.game.make_move(move.from_square, move.to_square):
                logger.warning("Rejected move %s from %s", move.to_uci(), event.sender)

    def _start_game(self, opponent: NodeId) -> None:
        self.game.reset()
        self.opponent = opponent
        self.pending_invite_from = None
        self._change_status(SessionStatus.IN_PROGRESS)

    def _send(self, payload: str, dest: NodeId) -> None:
        self.transport.send(
            OutgoingPacket(payload=payload, port=self.config.chess_port, dest=dest)
        )

    def _change_status(self, new_status: SessionStatus) -> None:
        self.status = new_status
