"""Protocol transport (implemented by whatever radio / broadcast mechanism hosts the game)"""

from typing import Protocol

from src.mesh.messages import OutgoingPacket


class MeshTransport(Protocol):
    """Outbound side of the mesh"""

    def send(self, packet: OutgoingPacket) -> None:
        """Hand the packet over to the mesh. Delivery is not guaranteed."""
        ...


class OutboxTransport:
    """Keeps the packets in memory, in the order they were sent. The host (or a test) picks them up with drain()."""

    def __init__(self) -> None:
        self._outbox: list[OutgoingPacket] = []

    def send(self, packet: OutgoingPacket) -> None:
        self._outbox.append(packet)

    def drain(self) -> list[OutgoingPacket]:
        packets, self._outbox = self._outbox, []
        return packets
