"""Settings for talking to the mesh. Overridable through environment variables."""

import logging
import os
from dataclasses import dataclass
from typing import Self

# Application port the chess payloads travel on, and the destination meaning "everybody"
DEFAULT_CHESS_PORT = 256
DEFAULT_BROADCAST_DEST = "!ffffffff"
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class MeshConfig:
    chess_port: int = DEFAULT_CHESS_PORT
    broadcast_dest: str = DEFAULT_BROADCAST_DEST
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls) -> Self:
        return cls(
            chess_port=int(os.getenv("CHESS_MESH_PORT", str(DEFAULT_CHESS_PORT))),
            broadcast_dest=os.getenv("CHESS_MESH_BROADCAST", DEFAULT_BROADCAST_DEST),
            log_level=os.getenv("CHESS_MESH_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
        )


def configure_logging(config: MeshConfig) -> None:
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
