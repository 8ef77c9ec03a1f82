"""
Classes in :py:mod:`mongo_dataapi.models` are typed representations of the request
and response envelopes exchanged with the Data API.

Every request envelope names the ``collection``, ``database`` and ``dataSource`` it
targets. Operation-specific fields are declared with :py:func:`required` or
:py:func:`optional`; the renderer always emits the former and emits the latter only
when a value other than ``None`` is set. The payloads themselves (filters,
documents, pipelines and so on) are carried as-is and never inspected.
"""

import dataclasses
import typing

from .interfaces import Action
from .types import Headers

T = typing.TypeVar("T")
F = typing.TypeVar("F")
P = typing.TypeVar("P")
S = typing.TypeVar("S")
U = typing.TypeVar("U")
R = typing.TypeVar("R")


def required(wire_name: typing.Optional[str] = None) -> typing.Any:
    return dataclasses.field(metadata={"wire_name": wire_name, "optional": False})


def optional(
    wire_name: typing.Optional[str] = None, scalar: typing.Optional[type] = None
) -> typing.Any:
    """
    Declares a field that is left out of the wire format when unset.

    :param Optional[str] wire_name: the property name on the wire, if it differs from the field name.
    :param Optional[type] scalar: the exact scalar type a set value must have.
    """
    return dataclasses.field(
        default=None,
        metadata={"wire_name": wire_name, "optional": True, "scalar": scalar},
    )


@dataclasses.dataclass
class RequestEnvelope:
    """
    The base class for request envelopes.
    """

    collection: str = required()
    database: str = required()
    data_source: str = required("dataSource")


@dataclasses.dataclass
class FindOneRequest(RequestEnvelope, typing.Generic[F, P]):
    filter: typing.Optional[F] = optional()
    projection: typing.Optional[P] = optional()


@dataclasses.dataclass
class FindRequest(RequestEnvelope, typing.Generic[F, P, S]):
    filter: typing.Optional[F] = optional()
    projection: typing.Optional[P] = optional()
    sort: typing.Optional[S] = optional()
    limit: typing.Optional[int] = optional(scalar=int)
    skip: typing.Optional[int] = optional(scalar=int)


@dataclasses.dataclass
class InsertOneRequest(RequestEnvelope, typing.Generic[T]):
    document: T = required()


@dataclasses.dataclass
class InsertManyRequest(RequestEnvelope, typing.Generic[T]):
    documents: typing.Sequence[T] = required()


@dataclasses.dataclass
class UpdateRequest(RequestEnvelope, typing.Generic[F, U]):
    """
    The envelope shared by ``updateOne`` and ``updateMany``.
    """

    filter: F = required()
    update: U = required()
    upsert: typing.Optional[bool] = optional(scalar=bool)


@dataclasses.dataclass
class ReplaceRequest(RequestEnvelope, typing.Generic[F, R]):
    filter: F = required()
    replacement: R = required()
    upsert: typing.Optional[bool] = optional(scalar=bool)


@dataclasses.dataclass
class DeleteRequest(RequestEnvelope, typing.Generic[F]):
    filter: F = required()


@dataclasses.dataclass
class AggregateRequest(RequestEnvelope, typing.Generic[P]):
    pipeline: typing.Sequence[P] = required()


@dataclasses.dataclass(frozen=True)
class RequestDescriptor:
    """
    A transport-agnostic description of a single Data API call.

    :param Action action: the action being performed.
    :param str collection: the collection the action targets.
    :param str path: the absolute URL of the action endpoint.
    :param str method: always ``POST``; the Data API models reads as POST bodies too.
    :param Headers headers: the header set built from the connection descriptor.
    :param bytes body: the UTF-8 encoded JSON envelope.
    """

    action: Action
    collection: str
    path: str
    method: str
    headers: Headers
    body: bytes


@dataclasses.dataclass
class DocumentEnvelope(typing.Generic[T]):
    """
    ``{"document": T}``, as answered by ``findOne``.
    """

    document: T


@dataclasses.dataclass
class DocumentsEnvelope(typing.Generic[T]):
    """
    ``{"documents": T}``, as answered by ``find`` and ``aggregate``.
    """

    documents: T
