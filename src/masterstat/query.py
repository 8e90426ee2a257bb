from __future__ import annotations

import asyncio
import logging
from concurrent.futures import Executor, ThreadPoolExecutor
from typing import Hashable, Iterable

from masterstat.errors import MasterQueryError, NoMastersProvidedError
from masterstat.models import AggregateResult, GameServerAddress, Outcome
from masterstat.transport.framing import decode_response, encode_request
from masterstat.transport.udp import MasterAddress, UdpClient

log = logging.getLogger(__name__)


def query_single(master_address: MasterAddress | str, timeout_s: float | None = None) -> list[GameServerAddress]:
    """
    Get server addresses from a single master server.

    Blocks until the master answers, or for at most ``timeout_s`` seconds when
    given. Servers are returned in the order the master listed them.

        >>> query_single("master.quakeworld.nu:27000", timeout_s=2.0)
    """
    address = MasterAddress.coerce(master_address)
    response = UdpClient(address, timeout_s).request_once(encode_request())
    servers = decode_response(response)
    log.debug("%s listed %d servers", address, len(servers))
    return servers


async def _outcome(pool: Executor, master: Hashable, timeout_s: float | None) -> Outcome:
    loop = asyncio.get_running_loop()
    try:
        servers = await loop.run_in_executor(pool, query_single, master, timeout_s)
    except MasterQueryError as e:
        log.warning("query to %s failed: %s", master, e)
        return e
    return tuple(servers)


async def query_many(master_addresses: Iterable[MasterAddress | str], timeout_s: float | None = None) -> AggregateResult:
    """
    Get server addresses from many master servers in parallel.

    Every master gets its own socket and its own ``timeout_s`` countdown; one
    slow or broken master never affects the others. Failures are reported per
    master in the result instead of being raised.
    """
    if timeout_s is not None and timeout_s < 0:
        raise ValueError("timeout_s must be >= 0 or None")

    masters = list(dict.fromkeys(master_addresses))
    if not masters:
        raise NoMastersProvidedError("at least one master address is required")

    # one worker per master, never queued behind another master's timeout
    pool = ThreadPoolExecutor(max_workers=len(masters), thread_name_prefix="masterstat")
    try:
        outcomes = await asyncio.gather(*(_outcome(pool, m, timeout_s) for m in masters))
    finally:
        pool.shutdown(wait=False)
    result = AggregateResult(dict(zip(masters, outcomes)))

    log.info(
        "queried %d masters: %d ok, %d failed, %d unique servers",
        len(result), len(result.successes), len(result.failures), len(result.server_addresses()),
    )
    return result


def query_many_sync(master_addresses: Iterable[MasterAddress | str], timeout_s: float | None = None) -> AggregateResult:
    """Blocking form of :func:`query_many` for callers without an event loop."""
    return asyncio.run(query_many(master_addresses, timeout_s))
