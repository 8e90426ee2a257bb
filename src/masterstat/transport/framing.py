from __future__ import annotations

from typing import Iterable

from masterstat.errors import InvalidResponseHeaderError, MalformedResponseError
from masterstat.models import GameServerAddress
from masterstat.transport import msgtypes as mt

_HDR_SIZE = len(mt.RESP_SERVERS)


def encode_request() -> bytes:
    return bytes(mt.REQ_SERVERS)


def encode_response(servers: Iterable[GameServerAddress]) -> bytes:
    return mt.RESP_SERVERS + b"".join(s.to_record() for s in servers)


def decode_response(packet: bytes) -> list[GameServerAddress]:
    if not packet.startswith(mt.RESP_SERVERS):
        raise InvalidResponseHeaderError(f"bad response header: {bytes(packet[:_HDR_SIZE])!r}")

    body = memoryview(packet)[_HDR_SIZE:]
    if len(body) % mt.RECORD_SIZE:
        raise MalformedResponseError(
            f"payload of {len(body)} bytes is not a multiple of {mt.RECORD_SIZE}"
        )

    return [
        GameServerAddress.from_record(body[i:i + mt.RECORD_SIZE])
        for i in range(0, len(body), mt.RECORD_SIZE)
    ]
