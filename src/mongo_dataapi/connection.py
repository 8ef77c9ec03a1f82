import dataclasses
import typing

from .types import Headers


@dataclasses.dataclass(frozen=True)
class ConnectionDescriptor:
    """
    :py:class:`ConnectionDescriptor` holds everything needed to address a Data API
    endpoint: where it lives, which database and data source (cluster) to talk to,
    and the credential to present.

    Instances are immutable and may be shared freely between concurrent calls.

    :param str base_address: the API root, e.g. ``https://data.mongodb-api.com/app/<app-id>/endpoint/data/v1``.
    :param str database: the name of the database.
    :param str data_source: the name of the cluster or data source backing the database.
    :param Optional[str] credential: the API key. ``None`` yields an empty ``api-key`` header.
    :param str content_type: a value for ``Content-Type``.
    :param str access_control_request_headers: a value for ``Access-Control-Request-Headers``.
    :param str accept: a value for ``Accept``.
    """

    base_address: str
    database: str
    data_source: str
    credential: typing.Optional[str] = None
    content_type: str = "application/json"
    access_control_request_headers: str = "*"
    accept: str = "application/json"

    def __post_init__(self) -> None:
        if not self.database:
            raise ValueError("database must not be empty")
        if not self.data_source:
            raise ValueError("data_source must not be empty")

    def action_url(self, name: str) -> str:
        return f"{self.base_address}/action/{name}"

    def headers(self) -> Headers:
        return {
            "Content-Type": self.content_type,
            "Access-Control-Request-Headers": self.access_control_request_headers,
            "Accept": self.accept,
            "api-key": self.credential if self.credential is not None else "",
        }
