"""
:py:mod:`mongo_dataapi.client` ties the request builder, a transport and the
response unwrapper together.

Synopsis
--------

.. code-block:: python

   from mongo_dataapi.client import DataAPIClient
   from mongo_dataapi.connection import ConnectionDescriptor
   from mongo_dataapi.implementations.httpx import HTTPXTransport

   descriptor = ConnectionDescriptor(
       base_address="https://data.mongodb-api.com/app/data-abcde/endpoint/data/v1",
       database="db",
       data_source="cluster0",
       credential="...",
   )

   with HTTPXTransport() as transport:
       client = DataAPIClient(transport)
       users = client.find_documents(descriptor, "users", filter={"status": "active"}, limit=10)

"""

import typing

from .builders import RequestBuilder
from .connection import ConnectionDescriptor
from .deserializer import Shape, decode_document, decode_documents
from .exceptions import TransportError
from .interfaces import Action, Response, Transport
from .models import RequestDescriptor


class DataAPIClient:
    """
    One method per Data API action. The plain methods return the transport's raw
    :py:class:`Response`; ``find_one_document``, ``find_documents`` and
    ``aggregate_documents`` additionally decode and unwrap the body.
    """

    transport: Transport
    builder: RequestBuilder

    def perform(self, request: RequestDescriptor) -> Response:
        try:
            return self.transport.perform(
                request.path, request.method, request.headers, request.body
            )
        except TransportError as e:
            if e.operation is None:
                e.operation = request.action.value
            if e.collection is None:
                e.collection = request.collection
            raise

    def find_one(
        self,
        descriptor: ConnectionDescriptor,
        collection: str,
        *,
        filter: typing.Optional[typing.Any] = None,
        projection: typing.Optional[typing.Any] = None,
    ) -> Response:
        return self.perform(
            self.builder.find_one(descriptor, collection, filter=filter, projection=projection)
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
    ) -> Response:
        return self.perform(
            self.builder.find(
                descriptor,
                collection,
                filter=filter,
                projection=projection,
                sort=sort,
                limit=limit,
                skip=skip,
            )
        )

    def insert_one(
        self, descriptor: ConnectionDescriptor, collection: str, document: typing.Any
    ) -> Response:
        return self.perform(self.builder.insert_one(descriptor, collection, document))

    def insert_many(
        self,
        descriptor: ConnectionDescriptor,
        collection: str,
        documents: typing.Iterable[typing.Any],
    ) -> Response:
        return self.perform(self.builder.insert_many(descriptor, collection, documents))

    def update_one(
        self,
        descriptor: ConnectionDescriptor,
        collection: str,
        filter: typing.Any,
        update: typing.Any,
        *,
        upsert: typing.Optional[bool] = None,
    ) -> Response:
        return self.perform(
            self.builder.update_one(descriptor, collection, filter, update, upsert=upsert)
        )

    def update_many(
        self,
        descriptor: ConnectionDescriptor,
        collection: str,
        filter: typing.Any,
        update: typing.Any,
        *,
        upsert: typing.Optional[bool] = None,
    ) -> Response:
        return self.perform(
            self.builder.update_many(descriptor, collection, filter, update, upsert=upsert)
        )

    def replace_one(
        self,
        descriptor: ConnectionDescriptor,
        collection: str,
        filter: typing.Any,
        replacement: typing.Any,
        *,
        upsert: typing.Optional[bool] = None,
    ) -> Response:
        return self.perform(
            self.builder.replace_one(descriptor, collection, filter, replacement, upsert=upsert)
        )

    def delete_one(
        self, descriptor: ConnectionDescriptor, collection: str, filter: typing.Any
    ) -> Response:
        return self.perform(self.builder.delete_one(descriptor, collection, filter))

    def aggregate(
        self,
        descriptor: ConnectionDescriptor,
        collection: str,
        pipeline: typing.Iterable[typing.Any],
    ) -> Response:
        return self.perform(self.builder.aggregate(descriptor, collection, pipeline))

    def find_one_document(
        self,
        descriptor: ConnectionDescriptor,
        collection: str,
        *,
        filter: typing.Optional[typing.Any] = None,
        projection: typing.Optional[typing.Any] = None,
        shape: typing.Optional[Shape] = None,
    ) -> typing.Any:
        """
        Performs ``findOne`` and returns the matched document, or ``None`` when nothing matched.
        """
        return decode_document(
            self.find_one(descriptor, collection, filter=filter, projection=projection),
            shape,
            operation=Action.FIND_ONE.value,
            collection=collection,
        )

    def find_documents(
        self,
        descriptor: ConnectionDescriptor,
        collection: str,
        *,
        filter: typing.Optional[typing.Any] = None,
        projection: typing.Optional[typing.Any] = None,
        sort: typing.Optional[typing.Any] = None,
        limit: typing.Optional[int] = None,
        skip: typing.Optional[int] = None,
        shape: typing.Optional[Shape] = list,
    ) -> typing.Any:
        return decode_documents(
            self.find(
                descriptor,
                collection,
                filter=filter,
                projection=projection,
                sort=sort,
                limit=limit,
                skip=skip,
            ),
            shape,
            operation=Action.FIND.value,
            collection=collection,
        )

    def aggregate_documents(
        self,
        descriptor: ConnectionDescriptor,
        collection: str,
        pipeline: typing.Iterable[typing.Any],
        *,
        shape: typing.Optional[Shape] = list,
    ) -> typing.Any:
        return decode_documents(
            self.aggregate(descriptor, collection, pipeline),
            shape,
            operation=Action.AGGREGATE.value,
            collection=collection,
        )

    def __init__(self, transport: Transport, builder: typing.Optional[RequestBuilder] = None):
        self.transport = transport
        self.builder = builder if builder is not None else RequestBuilder()
