from .transport import HTTPXResponse, HTTPXTransport  # noqa
