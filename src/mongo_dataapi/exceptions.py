import abc
import typing

from .types import JSONValue


class DataAPIError(Exception, metaclass=abc.ABCMeta):
    """
    The base class for every failure surfaced by :py:mod:`mongo_dataapi`.

    Each error carries the name of the action and the collection it was issued
    against, when they are known at the point of failure.
    """

    operation: typing.Optional[str]
    collection: typing.Optional[str]

    @property
    @abc.abstractmethod
    def message(self) -> str:
        ...  # pragma: nocover

    def _context(self) -> str:
        if self.operation is None and self.collection is None:
            return ""
        return f"{self.operation or '?'} on {self.collection or '?'}: "

    def __str__(self) -> str:
        return self._context() + self.message

    def __init__(
        self,
        operation: typing.Optional[str] = None,
        collection: typing.Optional[str] = None,
    ):
        super().__init__(operation, collection)
        self.operation = operation
        self.collection = collection


class SerializationError(DataAPIError):
    """
    Raised when a request envelope cannot be turned into its wire format.
    """

    field: typing.Optional[str]
    detail: str

    @property
    def message(self) -> str:
        if self.field is None:
            return f"failed to serialize request body ({self.detail})"
        return f'failed to serialize "{self.field}" ({self.detail})'

    def __init__(
        self,
        detail: str,
        field: typing.Optional[str] = None,
        operation: typing.Optional[str] = None,
        collection: typing.Optional[str] = None,
    ):
        super().__init__(operation, collection)
        self.detail = detail
        self.field = field


class TransportError(DataAPIError):
    """
    Raised by a transport when the request could not be carried out, or the server
    answered with a non-2xx status.
    """

    status_code: typing.Optional[int]
    detail: str
    body: typing.Optional[bytes]

    @property
    def message(self) -> str:
        if self.status_code is None:
            return f"request failed ({self.detail})"
        return f"server responded with status {self.status_code} ({self.detail})"

    def __init__(
        self,
        detail: str,
        status_code: typing.Optional[int] = None,
        body: typing.Optional[bytes] = None,
        operation: typing.Optional[str] = None,
        collection: typing.Optional[str] = None,
    ):
        super().__init__(operation, collection)
        self.detail = detail
        self.status_code = status_code
        self.body = body


class DecodeError(DataAPIError):
    """
    Raised when a response body does not match the expected envelope.

    :param payload: the decoded body, or the raw text when it isn't valid JSON.
    :param pointer: a JSON pointer to the offending node, e.g. ``/document``.
    """

    payload: JSONValue
    pointer: str
    detail: str

    @property
    def message(self) -> str:
        return f"{self.pointer}: {self.detail}"

    def __init__(
        self,
        payload: JSONValue,
        pointer: str,
        detail: str,
        operation: typing.Optional[str] = None,
        collection: typing.Optional[str] = None,
    ):
        super().__init__(operation, collection)
        self.payload = payload
        self.pointer = pointer
        self.detail = detail
