"""The peers discovered on the mesh (the list you pick an opponent from)"""

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

from src.mesh.messages import NodeId, NodeUpdate

logger = logging.getLogger(__name__)

UNKNOWN_LONG_NAME = "Unknown"
UNKNOWN_SHORT_NAME = "?"


@dataclass(frozen=True)
class MeshNode:
    node_id: NodeId
    long_name: str
    short_name: str
    last_heard: float


class NodeRegistry:
    """Latest info per node id. Keeps the order in which nodes were first heard of."""

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._nodes: dict[NodeId, MeshNode] = {}
        self._clock = clock

    def update_node(self, update: NodeUpdate) -> MeshNode:
        """Insert a new node, or replace what we knew about it"""
        node = MeshNode(
            node_id=update.node_id,
            long_name=update.long_name or UNKNOWN_LONG_NAME,
            short_name=update.short_name or UNKNOWN_SHORT_NAME,
            last_heard=self._clock(),
        )
        if node.node_id not in self._nodes:
            logger.info("Discovered node %s (%s)", node.node_id, node.long_name)
        self._nodes[node.node_id] = node
        return node

    def get(self, node_id: NodeId) -> Optional[MeshNode]:
        return self._nodes.get(node_id)

    def nodes(self) -> list[MeshNode]:
        return list(self._nodes.values())

    def __len__(self) -> int:
        return len(self._nodes)
