from __future__ import annotations
from dataclasses import dataclass, field

from masterstat.models import GameServerAddress
from masterstat.transport import msgtypes as mt
from masterstat.transport.framing import encode_response
from .faults import FaultConfig

@dataclass
class SimModel:
    servers: list[GameServerAddress] = field(default_factory=list)
    faults: FaultConfig = field(default_factory=FaultConfig)
    reset_count: int = 0
    request_count: int = 0

    def reset(self) -> None:
        self.servers = []
        self.faults = FaultConfig()
        self.request_count = 0
        self.reset_count += 1

    def set_servers(self, servers: list[GameServerAddress]) -> None:
        self.servers = list(servers)

    def handle(self, data: bytes) -> bytes:
        """Build the reply a QuakeWorld master would send for `data`."""
        self.request_count += 1
        if data.startswith(mt.REQ_SERVERS):
            return encode_response(self.servers)
        return mt.RESP_UNKNOWN + b"Unknown command\n"
