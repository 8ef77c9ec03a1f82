import logging
import typing

import httpx

from ...exceptions import TransportError
from ...types import Headers

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


class HTTPXResponse:
    """
    Adapts an :py:class:`httpx.Response` to :py:class:`mongo_dataapi.interfaces.Response`.
    """

    _response: httpx.Response
    _consumed: bool = False

    @property
    def status_code(self) -> int:
        return self._response.status_code

    @property
    def headers(self) -> httpx.Headers:
        return self._response.headers

    def read(self) -> bytes:
        if self._consumed:
            raise RuntimeError("response body has already been consumed")
        self._consumed = True
        return self._response.content

    def __init__(self, response: httpx.Response):
        self._response = response


class HTTPXTransport:
    """
    A :py:class:`mongo_dataapi.interfaces.Transport` backed by :py:class:`httpx.Client`.

    When no client is given, one is created and owned by the transport, and released
    by :py:meth:`close` or on leaving the ``with`` block. A client passed in is left
    open for its owner to close.

    :param Optional[httpx.Client] client: the client to send requests through.
    :param float timeout: the timeout for a client created by the transport.
    """

    _client: httpx.Client
    _owns_client: bool

    def perform(self, path: str, method: str, headers: Headers, body: bytes) -> HTTPXResponse:
        logger.debug("%s %s (%d bytes)", method, path, len(body))
        try:
            response = self._client.request(method, path, headers=dict(headers), content=body)
        except httpx.HTTPError as e:
            logger.debug("%s %s failed: %s", method, path, e)
            raise TransportError(f"{type(e).__name__}: {e}") from e

        logger.debug("%s %s -> %d", method, path, response.status_code)
        if not response.is_success:
            raise TransportError(
                response.reason_phrase or "unexpected status",
                status_code=response.status_code,
                body=response.content,
            )
        return HTTPXResponse(response)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "HTTPXTransport":
        return self

    def __exit__(self, *exc_info: typing.Any) -> None:
        self.close()

    def __init__(
        self, client: typing.Optional[httpx.Client] = None, timeout: float = DEFAULT_TIMEOUT
    ):
        if client is None:
            self._client = httpx.Client(timeout=timeout)
            self._owns_client = True
        else:
            self._client = client
            self._owns_client = False
