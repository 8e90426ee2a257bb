"""Get server addresses from QuakeWorld master servers."""

from masterstat.config.settings import DEFAULT_MASTERS
from masterstat.errors import (
    AddressResolutionError,
    InvalidResponseHeaderError,
    MalformedResponseError,
    MasterQueryError,
    NoMastersProvidedError,
    QueryTimeoutError,
    ReceiveError,
    ResponseError,
    SendError,
)
from masterstat.models import AggregateResult, GameServerAddress, sorted_and_unique
from masterstat.query import query_many, query_many_sync, query_single
from masterstat.transport.udp import MasterAddress

__all__ = [
    "DEFAULT_MASTERS",
    "AddressResolutionError",
    "AggregateResult",
    "GameServerAddress",
    "InvalidResponseHeaderError",
    "MalformedResponseError",
    "MasterAddress",
    "MasterQueryError",
    "NoMastersProvidedError",
    "QueryTimeoutError",
    "ReceiveError",
    "ResponseError",
    "SendError",
    "query_many",
    "query_many_sync",
    "query_single",
    "sorted_and_unique",
]
