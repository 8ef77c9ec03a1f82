from .builders import RequestBuilder  # noqa
from .client import DataAPIClient  # noqa
from .connection import ConnectionDescriptor  # noqa
from .deserializer import (  # noqa
    decode_document,
    decode_documents,
    unwrap_document,
    unwrap_documents,
)
from .exceptions import DataAPIError, DecodeError, SerializationError, TransportError  # noqa
from .interfaces import Action, Response, Transport  # noqa
from .models import DocumentEnvelope, DocumentsEnvelope, RequestDescriptor  # noqa
from .renderer import EnvelopeRenderer  # noqa
