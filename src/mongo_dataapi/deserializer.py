"""
:py:mod:`mongo_dataapi.deserializer` recovers the caller's payload from the Data
API's response envelopes.

Unwrapping is a plain projection: the value under ``document`` or ``documents`` is
returned exactly as decoded. The optional ``shape`` argument only checks the
payload's type; it never converts it.
"""

import collections.abc
import json
import types
import typing

from .exceptions import DecodeError
from .interfaces import Response
from .models import DocumentEnvelope, DocumentsEnvelope
from .types import JSONObject, JSONValue
from .utils import quote_keys

T = typing.TypeVar("T")

Shape = typing.Union[type, typing.Tuple[type, ...], typing.Any]
Body = typing.Union[Response, bytes, bytearray, str]

_UNION_ORIGINS = tuple(
    o for o in (typing.Union, getattr(types, "UnionType", None)) if o is not None
)


def _classes_of(shape: Shape) -> typing.Tuple[type, ...]:
    """
    Reduces a shape to the plain classes :py:func:`isinstance` accepts, so that
    ``typing.List[dict]`` checks against ``list`` and ``typing.Union[dict, list]``
    against ``dict`` or ``list``. Item types are not checked.
    """
    if isinstance(shape, tuple):
        return tuple(c for s in shape for c in _classes_of(s))
    origin = typing.get_origin(shape)
    if origin in _UNION_ORIGINS:
        return _classes_of(typing.get_args(shape))
    if origin is not None:
        shape = origin
    if shape is None.__class__ or shape is None:
        return (None.__class__,)
    if not isinstance(shape, type):
        raise TypeError(f"{shape!r} cannot be used as a shape")
    return (shape,)


def _shape_repr(classes: typing.Tuple[type, ...]) -> str:
    return " or ".join(c.__name__ for c in classes)


def _project(
    key: str,
    envelope: typing.Any,
    shape: typing.Optional[Shape],
    nullable: bool,
    operation: typing.Optional[str],
    collection: typing.Optional[str],
) -> typing.Any:
    if isinstance(envelope, DocumentEnvelope) and key == "document":
        value = envelope.document
    elif isinstance(envelope, DocumentsEnvelope) and key == "documents":
        value = envelope.documents
    elif isinstance(envelope, collections.abc.Mapping):
        try:
            value = envelope[key]
        except KeyError:
            raise DecodeError(
                envelope,
                f"/{key}",
                f'value must have a property "{key}", found {quote_keys(envelope.keys())}',
                operation=operation,
                collection=collection,
            )
    else:
        raise DecodeError(
            envelope,
            "/",
            f"value has type {type(envelope).__name__} where an object is expected",
            operation=operation,
            collection=collection,
        )

    if shape is None or (value is None and nullable):
        return value

    classes = _classes_of(shape)
    if not isinstance(value, classes):
        raise DecodeError(
            envelope,
            f"/{key}",
            f"value has type {type(value).__name__} where {_shape_repr(classes)} expected",
            operation=operation,
            collection=collection,
        )
    return value


def unwrap_document(
    envelope: typing.Union[DocumentEnvelope[T], JSONObject],
    shape: typing.Optional[Shape] = None,
    *,
    operation: typing.Optional[str] = None,
    collection: typing.Optional[str] = None,
) -> T:
    """
    Returns the payload of a ``{"document": T}`` envelope.

    A ``null`` document is what ``findOne`` answers when nothing matches, so it is
    returned as ``None`` regardless of ``shape``.

    :param envelope: a :py:class:`DocumentEnvelope` or a decoded JSON object.
    :param shape: a type, a tuple of types, or a generic alias such as ``typing.List[dict]`` the payload must be an instance of. Only the outer type is checked.
    :raises DecodeError: when the envelope has no ``document`` or the payload has an unexpected type.
    """
    return typing.cast(T, _project("document", envelope, shape, True, operation, collection))


def unwrap_documents(
    envelope: typing.Union[DocumentsEnvelope[T], JSONObject],
    shape: typing.Optional[Shape] = None,
    *,
    operation: typing.Optional[str] = None,
    collection: typing.Optional[str] = None,
) -> T:
    """
    Returns the payload of a ``{"documents": T}`` envelope.

    :param envelope: a :py:class:`DocumentsEnvelope` or a decoded JSON object.
    :param shape: a type, a tuple of types, or a generic alias such as ``typing.List[dict]`` the payload must be an instance of. Only the outer type is checked.
    :raises DecodeError: when the envelope has no ``documents`` or the payload has an unexpected type.
    """
    return typing.cast(T, _project("documents", envelope, shape, False, operation, collection))


def decode_body(
    body: Body,
    *,
    operation: typing.Optional[str] = None,
    collection: typing.Optional[str] = None,
) -> JSONValue:
    """
    Parses a response body. A :py:class:`Response` is read exactly once.

    :raises DecodeError: when the body is not valid JSON.
    """
    if isinstance(body, (bytes, bytearray, str)):
        raw = body
    else:
        raw = body.read()
    try:
        return json.loads(raw)
    except (ValueError, UnicodeDecodeError) as e:
        text = raw if isinstance(raw, str) else bytes(raw).decode("utf-8", errors="replace")
        raise DecodeError(
            text,
            "/",
            f"failed to parse response body as JSON ({e})",
            operation=operation,
            collection=collection,
        ) from e


def decode_document(
    body: Body,
    shape: typing.Optional[Shape] = None,
    *,
    operation: typing.Optional[str] = None,
    collection: typing.Optional[str] = None,
) -> typing.Any:
    """
    Parses a response body and returns the payload of its ``{"document": T}`` envelope.
    """
    envelope = decode_body(body, operation=operation, collection=collection)
    return unwrap_document(
        typing.cast(JSONObject, envelope), shape, operation=operation, collection=collection
    )


def decode_documents(
    body: Body,
    shape: typing.Optional[Shape] = None,
    *,
    operation: typing.Optional[str] = None,
    collection: typing.Optional[str] = None,
) -> typing.Any:
    """
    Parses a response body and returns the payload of its ``{"documents": T}`` envelope.
    """
    envelope = decode_body(body, operation=operation, collection=collection)
    return unwrap_documents(
        typing.cast(JSONObject, envelope), shape, operation=operation, collection=collection
    )
