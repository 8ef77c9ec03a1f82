"""
:py:mod:`mongo_dataapi.renderer` turns request envelopes into the JSON bodies the
Data API expects.

Synopsis
--------

.. code-block:: python

   from mongo_dataapi.models import FindRequest
   from mongo_dataapi.renderer import EnvelopeRenderer

   renderer = EnvelopeRenderer()

   body = renderer.encode(
       FindRequest(
           collection="users",
           database="db",
           data_source="cluster0",
           filter={"status": "active"},
           limit=10,
       ),
   )
   # b'{"collection": "users", "database": "db", "dataSource": "cluster0",
   #    "filter": {"status": "active"}, "limit": 10}'

"""

import base64
import dataclasses
import datetime
import decimal
import json
import typing
from collections import OrderedDict

from .exceptions import SerializationError
from .models import RequestEnvelope
from .types import JSONValue, MutableJSONObject

DefaultHook = typing.Callable[[typing.Any], JSONValue]


class EnvelopeRenderer:
    _default: typing.Optional[DefaultHook] = None
    _render_decimal_as_str: bool = True
    _sort_keys: bool = False

    def _render_datetime(self, value: typing.Any) -> JSONValue:
        return typing.cast(datetime.date, value).isoformat()

    def _render_decimal(self, value: typing.Any) -> JSONValue:
        _value = typing.cast(decimal.Decimal, value)
        return str(_value) if self._render_decimal_as_str else float(_value)

    def _render_bytes(self, value: typing.Any) -> JSONValue:
        return base64.b64encode(typing.cast(bytes, value)).decode("ascii")

    def _render_dataclass(self, value: typing.Any) -> JSONValue:
        return dataclasses.asdict(value)

    _supported_types: typing.ClassVar[typing.Dict[type, typing.Callable]] = {
        datetime.datetime: _render_datetime,
        datetime.date: _render_datetime,
        decimal.Decimal: _render_decimal,
        bytes: _render_bytes,
    }

    def _render_unknown(self, value: typing.Any) -> JSONValue:
        if self._default is not None:
            return self._default(value)

        r = self._supported_types.get(type(value))
        if r is not None:
            return r(self, value)

        if dataclasses.is_dataclass(value) and not isinstance(value, type):
            return self._render_dataclass(value)

        for type_, r in self._supported_types.items():
            if isinstance(value, type_):
                return r(self, value)

        raise TypeError(f"object of type {type(value).__name__} is not JSON serializable")

    def _dumps(self, value: typing.Any) -> str:
        return json.dumps(
            value,
            default=self._render_unknown,
            allow_nan=False,
            sort_keys=self._sort_keys,
        )

    def _check_scalar(
        self, envelope: RequestEnvelope, name: str, scalar: type, value: typing.Any
    ) -> None:
        # bool is an int subclass and is rejected for integer fields
        if type(value) is not scalar and not (
            isinstance(value, scalar) and not isinstance(value, bool)
        ):
            raise SerializationError(
                f"expected {scalar.__name__}, got {type(value).__name__}",
                field=name,
                collection=envelope.collection,
            )

    def __call__(self, envelope: RequestEnvelope) -> MutableJSONObject:
        """
        Renders the envelope into a JSON object whose values are the caller's
        payloads, untouched. Optional fields that are ``None`` are left out.
        """
        retval: MutableJSONObject = OrderedDict()
        for field in dataclasses.fields(envelope):
            value = getattr(envelope, field.name)
            if field.metadata.get("optional", False):
                if value is None:
                    continue
                scalar = field.metadata.get("scalar")
                if scalar is not None:
                    self._check_scalar(envelope, field.name, scalar, value)
            retval[field.metadata.get("wire_name") or field.name] = value
        return retval

    def encode(self, envelope: RequestEnvelope, operation: typing.Optional[str] = None) -> bytes:
        """
        Renders the envelope and serializes it to UTF-8 encoded JSON.

        :raises SerializationError: when a payload cannot be represented in JSON.
        """
        try:
            rendered = self(envelope)
        except SerializationError as e:
            if operation is not None:
                e.operation = operation
            raise

        try:
            return self._dumps(rendered).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise SerializationError(
                str(e),
                field=self._find_culprit(rendered),
                operation=operation,
                collection=envelope.collection,
            ) from e

    def _find_culprit(self, rendered: MutableJSONObject) -> typing.Optional[str]:
        for k, v in rendered.items():
            try:
                self._dumps(v)
            except (TypeError, ValueError):
                return k
        return None

    def __init__(
        self,
        default: typing.Optional[DefaultHook] = None,
        render_decimal_as_str: bool = True,
        sort_keys: bool = False,
    ):
        """
        :param Optional[Callable[[Any], JSONValue]] default: a hook that converts values the renderer cannot represent. When given, it replaces the built-in conversions.
        :param bool render_decimal_as_str: whether :py:class:`decimal.Decimal` is rendered as a string rather than a float.
        :param bool sort_keys: whether object keys are sorted in the output.
        """
        self._default = default
        self._render_decimal_as_str = render_decimal_as_str
        self._sort_keys = sort_keys
