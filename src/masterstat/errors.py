from __future__ import annotations


class MasterQueryError(Exception):
    """Base class for every failure reported by a master server query."""


class AddressResolutionError(MasterQueryError):
    pass


class SendError(MasterQueryError):
    pass


class ReceiveError(MasterQueryError):
    pass


class QueryTimeoutError(MasterQueryError, TimeoutError):
    pass


class ResponseError(MasterQueryError):
    """The master answered, but not with a server list we can decode."""


class InvalidResponseHeaderError(ResponseError):
    pass


class MalformedResponseError(ResponseError):
    pass


class NoMastersProvidedError(MasterQueryError, ValueError):
    pass
