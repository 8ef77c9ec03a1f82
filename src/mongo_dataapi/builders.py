import collections.abc
import typing

from .connection import ConnectionDescriptor
from .exceptions import SerializationError
from .interfaces import Action
from .models import (
    AggregateRequest,
    DeleteRequest,
    FindOneRequest,
    FindRequest,
    InsertManyRequest,
    InsertOneRequest,
    ReplaceRequest,
    RequestDescriptor,
    RequestEnvelope,
    UpdateRequest,
)
from .renderer import EnvelopeRenderer

T = typing.TypeVar("T")


def as_sequence(
    action: Action, collection: str, field: str, value: typing.Any
) -> typing.Optional[typing.Sequence[typing.Any]]:
    """
    Passes sequences through untouched and drains any other iterator into a list.
    Strings, bytes and mappings are rejected rather than split into their items.
    """
    if value is None:
        return None
    if isinstance(value, (str, bytes, bytearray, collections.abc.Mapping)) or not isinstance(
        value, collections.abc.Iterable
    ):
        raise SerializationError(
            f"expected a sequence, got {type(value).__name__}",
            field=field,
            operation=action.value,
            collection=collection,
        )
    if isinstance(value, collections.abc.Sequence):
        return value
    return list(value)


class RequestBuilder:
    """
    :py:class:`RequestBuilder` produces a :py:class:`RequestDescriptor` for each Data
    API action. Builders hold no per-call state; one instance can serve any number
    of concurrent callers.

    Optional arguments default to ``None``, which means "absent": the corresponding
    property does not appear in the request body at all.
    """

    renderer: EnvelopeRenderer

    def build(
        self, action: Action, descriptor: ConnectionDescriptor, envelope: RequestEnvelope
    ) -> RequestDescriptor:
        return RequestDescriptor(
            action=action,
            collection=envelope.collection,
            path=descriptor.action_url(action.value),
            method="POST",
            headers=descriptor.headers(),
            body=self.renderer.encode(envelope, operation=action.value),
        )

    def find_one(
        self,
        descriptor: ConnectionDescriptor,
        collection: str,
        *,
        filter: typing.Optional[typing.Any] = None,
        projection: typing.Optional[typing.Any] = None,
    ) -> RequestDescriptor:
        return self.build(
            Action.FIND_ONE,
            descriptor,
            FindOneRequest(
                collection=collection,
                database=descriptor.database,
                data_source=descriptor.data_source,
                filter=filter,
                projection=projection,
            ),
        )

    def find(
        self,
        descriptor: ConnectionDescriptor,
        collection: str,
        *,
        filter: typing.Optional[typing.Any] = None,
        projection: typing.Optional[typing.Any] = None,
        sort: typing.Optional[typing.Any] = None,
        limit: typing.Optional[int] = None,
        skip: typing.Optional[int] = None,
    ) -> RequestDescriptor:
        return self.build(
            Action.FIND,
            descriptor,
            FindRequest(
                collection=collection,
                database=descriptor.database,
                data_source=descriptor.data_source,
                filter=filter,
                projection=projection,
                sort=sort,
                limit=limit,
                skip=skip,
            ),
        )

    def insert_one(
        self, descriptor: ConnectionDescriptor, collection: str, document: T
    ) -> RequestDescriptor:
        return self.build(
            Action.INSERT_ONE,
            descriptor,
            InsertOneRequest(
                collection=collection,
                database=descriptor.database,
                data_source=descriptor.data_source,
                document=document,
            ),
        )

    def insert_many(
        self, descriptor: ConnectionDescriptor, collection: str, documents: typing.Iterable[T]
    ) -> RequestDescriptor:
        return self.build(
            Action.INSERT_MANY,
            descriptor,
            InsertManyRequest(
                collection=collection,
                database=descriptor.database,
                data_source=descriptor.data_source,
                documents=as_sequence(Action.INSERT_MANY, collection, "documents", documents),
            ),
        )

    def _update(
        self,
        action: Action,
        descriptor: ConnectionDescriptor,
        collection: str,
        filter: typing.Any,
        update: typing.Any,
        upsert: typing.Optional[bool],
    ) -> RequestDescriptor:
        return self.build(
            action,
            descriptor,
            UpdateRequest(
                collection=collection,
                database=descriptor.database,
                data_source=descriptor.data_source,
                filter=filter,
                update=update,
                upsert=upsert,
            ),
        )

    def update_one(
        self,
        descriptor: ConnectionDescriptor,
        collection: str,
        filter: typing.Any,
        update: typing.Any,
        *,
        upsert: typing.Optional[bool] = None,
    ) -> RequestDescriptor:
        return self._update(Action.UPDATE_ONE, descriptor, collection, filter, update, upsert)

    def update_many(
        self,
        descriptor: ConnectionDescriptor,
        collection: str,
        filter: typing.Any,
        update: typing.Any,
        *,
        upsert: typing.Optional[bool] = None,
    ) -> RequestDescriptor:
        return self._update(Action.UPDATE_MANY, descriptor, collection, filter, update, upsert)

    def replace_one(
        self,
        descriptor: ConnectionDescriptor,
        collection: str,
        filter: typing.Any,
        replacement: typing.Any,
        *,
        upsert: typing.Optional[bool] = None,
    ) -> RequestDescriptor:
        return self.build(
            Action.REPLACE_ONE,
            descriptor,
            ReplaceRequest(
                collection=collection,
                database=descriptor.database,
                data_source=descriptor.data_source,
                filter=filter,
                replacement=replacement,
                upsert=upsert,
            ),
        )

    def delete_one(
        self, descriptor: ConnectionDescriptor, collection: str, filter: typing.Any
    ) -> RequestDescriptor:
        return self.build(
            Action.DELETE_ONE,
            descriptor,
            DeleteRequest(
                collection=collection,
                database=descriptor.database,
                data_source=descriptor.data_source,
                filter=filter,
            ),
        )

    def aggregate(
        self,
        descriptor: ConnectionDescriptor,
        collection: str,
        pipeline: typing.Iterable[typing.Any],
    ) -> RequestDescriptor:
        return self.build(
            Action.AGGREGATE,
            descriptor,
            AggregateRequest(
                collection=collection,
                database=descriptor.database,
                data_source=descriptor.data_source,
                pipeline=as_sequence(Action.AGGREGATE, collection, "pipeline", pipeline),
            ),
        )

    def __init__(self, renderer: typing.Optional[EnvelopeRenderer] = None):
        self.renderer = renderer if renderer is not None else EnvelopeRenderer()


_default_builder = RequestBuilder()

find_one = _default_builder.find_one
find = _default_builder.find
insert_one = _default_builder.insert_one
insert_many = _default_builder.insert_many
update_one = _default_builder.update_one
update_many = _default_builder.update_many
replace_one = _default_builder.replace_one
delete_one = _default_builder.delete_one
aggregate = _default_builder.aggregate
