from __future__ import annotations

import logging
import socket
from dataclasses import dataclass

from masterstat.errors import (
    AddressResolutionError,
    QueryTimeoutError,
    ReceiveError,
    SendError,
)

log = logging.getLogger(__name__)

# Largest payload a UDP datagram can carry
RECV_BUF = 65535


@dataclass(frozen=True)
class MasterAddress:
    host: str
    port: int

    def __post_init__(self):
        if not self.host:
            raise AddressResolutionError("master host must not be empty")
        if isinstance(self.port, bool) or not isinstance(self.port, int) or not (0 < self.port <= 0xFFFF):
            raise AddressResolutionError(f"port out of range for {self.host}: {self.port!r}")

    def __str__(self) -> str:
        return f"{self.host}:{self.port}"

    @classmethod
    def parse(cls, text: str) -> "MasterAddress":
        host, sep, port = text.strip().rpartition(":")
        if not sep or not host:
            raise AddressResolutionError(f"expected host:port, got {text!r}")
        try:
            port_num = int(port)
        except ValueError:
            raise AddressResolutionError(f"invalid port in {text!r}") from None
        return cls(host, port_num)

    @classmethod
    def coerce(cls, value: "MasterAddress | str") -> "MasterAddress":
        if isinstance(value, MasterAddress):
            return value
        if isinstance(value, str):
            return cls.parse(value)
        raise AddressResolutionError(f"not a master address: {value!r}")

    def resolve(self) -> tuple[str, int]:
        """
        Resolve to an IPv4 socket address. Name lookup is not covered by the
        query timeout; a slow resolver delays the query by however long it takes.
        """
        try:
            infos = socket.getaddrinfo(self.host, self.port, socket.AF_INET, socket.SOCK_DGRAM)
        except (socket.gaierror, UnicodeError) as e:
            raise AddressResolutionError(f"could not resolve {self}: {e}") from e
        if not infos:
            raise AddressResolutionError(f"no IPv4 address for {self}")
        return infos[0][4]


class UdpClient:
    """One request datagram out, one response datagram back."""

    def __init__(self, address: MasterAddress, timeout_s: float | None = None):
        if timeout_s is not None and timeout_s < 0:
            raise ValueError("timeout_s must be >= 0 or None")
        self._address = address
        self._timeout_s = timeout_s

    def request_once(self, pkt: bytes, recv_buf: int = RECV_BUF) -> bytes:
        sockaddr = self._address.resolve()

        try:
            sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        except OSError as e:
            raise SendError(f"could not open socket for {self._address}: {e}") from e

        with sock:
            try:
                sock.bind(("0.0.0.0", 0))
                # connected: datagrams from anyone but the master are dropped by the OS
                sock.connect(sockaddr)
                sock.send(pkt)
            except OSError as e:
                raise SendError(f"send to {self._address} failed: {e}") from e
            log.debug("sent %d bytes to %s (%s:%d)", len(pkt), self._address, *sockaddr)

            sock.settimeout(self._timeout_s)
            try:
                data = sock.recv(recv_buf)
            except (socket.timeout, BlockingIOError) as e:
                raise QueryTimeoutError(
                    f"no response from {self._address} within {self._timeout_s}s"
                ) from e
            except OSError as e:
                raise ReceiveError(f"receive from {self._address} failed: {e}") from e

        log.debug("received %d bytes from %s", len(data), self._address)
        return data
