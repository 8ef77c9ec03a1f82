import enum
import typing

from .types import Headers


class Action(enum.Enum):
    FIND_ONE = "findOne"
    FIND = "find"
    INSERT_ONE = "insertOne"
    INSERT_MANY = "insertMany"
    UPDATE_ONE = "updateOne"
    UPDATE_MANY = "updateMany"
    REPLACE_ONE = "replaceOne"
    DELETE_ONE = "deleteOne"
    AGGREGATE = "aggregate"


class Response(typing.Protocol):
    status_code: int

    def read(self) -> bytes:
        """
        Returns the response body. A response body can be read only once.
        """
        ...  # pragma: nocover


class Transport(typing.Protocol):
    def perform(self, path: str, method: str, headers: Headers, body: bytes) -> Response:
        """
        Carries out a single HTTP exchange.

        Implementations raise :py:class:`mongo_dataapi.exceptions.TransportError` on
        network failures and non-2xx statuses.
        """
        ...  # pragma: nocover
