from __future__ import annotations
from dataclasses import dataclass
import random

CORRUPT_MODES = ("header", "truncate")

@dataclass
class FaultConfig:
    delay_ms: int = 0           # delay before responding
    drop_rate: float = 0.0      # 0.0..1.0
    corrupt_rate: float = 0.0   # 0.0..1.0
    corrupt_mode: str = "header"

    def should_drop(self) -> bool:
        return self.drop_rate > 0 and random.random() < self.drop_rate

    def should_corrupt(self) -> bool:
        return self.corrupt_rate > 0 and random.random() < self.corrupt_rate

    def corrupt(self, packet: bytes) -> bytes:
        """
        header: flip the first marker byte, client sees a foreign datagram
        truncate: cut the last record short, client sees a bad payload length
        """
        if self.corrupt_mode == "truncate":
            return packet[:-1]
        b = bytearray(packet)
        b[0] ^= 0xFF
        return bytes(b)

    def as_dict(self) -> dict:
        return {
            "delay_ms": self.delay_ms,
            "drop_rate": self.drop_rate,
            "corrupt_rate": self.corrupt_rate,
            "corrupt_mode": self.corrupt_mode,
        }
