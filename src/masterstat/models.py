from __future__ import annotations

import ipaddress
import struct
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Hashable, Iterable, Mapping, Union

from masterstat.errors import MasterQueryError

_RECORD_FMT = "!4sH"


@dataclass(frozen=True, order=True)
class GameServerAddress:
    ip: ipaddress.IPv4Address
    port: int

    def __post_init__(self):
        if not isinstance(self.ip, ipaddress.IPv4Address):
            object.__setattr__(self, "ip", ipaddress.IPv4Address(self.ip))
        if not (0 <= self.port <= 0xFFFF):
            raise ValueError(f"port out of range: {self.port}")

    def __str__(self) -> str:
        return f"{self.ip}:{self.port}"

    @classmethod
    def parse(cls, text: str) -> "GameServerAddress":
        host, sep, port = text.rpartition(":")
        if not sep:
            raise ValueError(f"expected ip:port, got {text!r}")
        return cls(ipaddress.IPv4Address(host), int(port))

    @classmethod
    def from_record(cls, record: bytes) -> "GameServerAddress":
        raw_ip, port = struct.unpack(_RECORD_FMT, record)
        return cls(ipaddress.IPv4Address(raw_ip), port)

    def to_record(self) -> bytes:
        return struct.pack(_RECORD_FMT, self.ip.packed, self.port)


Outcome = Union[tuple[GameServerAddress, ...], MasterQueryError]


@dataclass(frozen=True, eq=False)
class AggregateResult:
    """
    Outcome of querying several masters at once.

    Maps every distinct master the caller passed in, exactly as it was passed,
    to either the servers it returned (in the order the master sent them) or
    the error that query ended with.
    """
    outcomes: Mapping[Hashable, Outcome] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "outcomes", MappingProxyType(dict(self.outcomes)))

    def __len__(self) -> int:
        return len(self.outcomes)

    def __iter__(self):
        return iter(self.outcomes)

    def __getitem__(self, master) -> Outcome:
        return self.outcomes[master]

    def __contains__(self, master) -> bool:
        return master in self.outcomes

    @property
    def successes(self) -> dict[Hashable, tuple[GameServerAddress, ...]]:
        return {m: o for m, o in self.outcomes.items() if not isinstance(o, MasterQueryError)}

    @property
    def failures(self) -> dict[Hashable, MasterQueryError]:
        return {m: o for m, o in self.outcomes.items() if isinstance(o, MasterQueryError)}

    def server_addresses(self) -> list[GameServerAddress]:
        """Every server reported by any master, sorted and without duplicates."""
        return sorted_and_unique(a for servers in self.successes.values() for a in servers)


def sorted_and_unique(addresses: Iterable[GameServerAddress]) -> list[GameServerAddress]:
    return sorted(set(addresses))
