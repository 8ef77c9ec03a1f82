import dataclasses
import datetime
import decimal
import json

import pytest

from ..exceptions import SerializationError
from ..models import FindOneRequest, FindRequest, InsertOneRequest, ReplaceRequest, UpdateRequest


@pytest.fixture
def target_class():
    from ..renderer import EnvelopeRenderer

    return EnvelopeRenderer


@dataclasses.dataclass
class User:
    name: str
    joined: datetime.date


def test_required_fields_only(target_class):
    target = target_class()

    result = target(FindOneRequest(collection="users", database="db", data_source="cluster0"))
    assert list(result.items()) == [
        ("collection", "users"),
        ("database", "db"),
        ("dataSource", "cluster0"),
    ]


def test_optional_fields_are_omitted(target_class):
    target = target_class()

    result = target(
        FindRequest(
            collection="users",
            database="db",
            data_source="cluster0",
            filter={"status": "active"},
            limit=10,
        )
    )
    assert result == {
        "collection": "users",
        "database": "db",
        "dataSource": "cluster0",
        "filter": {"status": "active"},
        "limit": 10,
    }
    assert "projection" not in result
    assert "sort" not in result
    assert "skip" not in result


def test_empty_payloads_are_kept(target_class):
    target = target_class()

    result = target(
        FindRequest(collection="users", database="db", data_source="cluster0", filter={}, skip=0)
    )
    assert result["filter"] == {}
    assert result["skip"] == 0

    result = target(
        UpdateRequest(
            collection="users", database="db", data_source="cluster0", filter={}, update={}
        )
    )
    assert result == {
        "collection": "users",
        "database": "db",
        "dataSource": "cluster0",
        "filter": {},
        "update": {},
    }


def test_payloads_are_passed_through(target_class):
    target = target_class()
    filter = {"a": {"$in": [1, 2]}}
    replacement = {"b": [{"c": None}]}

    result = target(
        ReplaceRequest(
            collection="c",
            database="db",
            data_source="cluster0",
            filter=filter,
            replacement=replacement,
            upsert=False,
        )
    )
    assert result["filter"] is filter
    assert result["replacement"] is replacement
    assert result["upsert"] is False


@pytest.mark.parametrize("limit", [True, "10", 1.5])
def test_limit_must_be_an_integer(target_class, limit):
    target = target_class()
    with pytest.raises(SerializationError) as e:
        target(FindRequest(collection="users", database="db", data_source="cluster0", limit=limit))
    assert e.value.field == "limit"
    assert e.value.collection == "users"


def test_upsert_must_be_a_boolean(target_class):
    target = target_class()
    with pytest.raises(SerializationError) as e:
        target(
            UpdateRequest(
                collection="users",
                database="db",
                data_source="cluster0",
                filter={},
                update={},
                upsert=1,
            )
        )
    assert e.value.field == "upsert"


def test_encode(target_class):
    target = target_class()

    body = target.encode(
        FindRequest(collection="users", database="db", data_source="cluster0", limit=10, skip=5),
        operation="find",
    )
    assert isinstance(body, bytes)
    assert json.loads(body) == {
        "collection": "users",
        "database": "db",
        "dataSource": "cluster0",
        "limit": 10,
        "skip": 5,
    }
    assert b'"limit": 10' in body
    assert b"null" not in body


def test_encode_extended_types(target_class):
    target = target_class()

    body = target.encode(
        InsertOneRequest(
            collection="users",
            database="db",
            data_source="cluster0",
            document={
                "user": User(name="alice", joined=datetime.date(2020, 1, 2)),
                "balance": decimal.Decimal("1.50"),
                "avatar": b"\x00\x01",
            },
        )
    )
    assert json.loads(body)["document"] == {
        "user": {"name": "alice", "joined": "2020-01-02"},
        "balance": "1.50",
        "avatar": "AAE=",
    }

    target = target_class(render_decimal_as_str=False)
    body = target.encode(
        InsertOneRequest(
            collection="users",
            database="db",
            data_source="cluster0",
            document={"balance": decimal.Decimal("1.5")},
        )
    )
    assert json.loads(body)["document"] == {"balance": 1.5}


def test_encode_with_default_hook(target_class):
    target = target_class(default=lambda v: sorted(v))

    body = target.encode(
        InsertOneRequest(
            collection="users", database="db", data_source="cluster0", document={"tags": {"b", "a"}}
        )
    )
    assert json.loads(body)["document"] == {"tags": ["a", "b"]}


def test_encode_sort_keys(target_class):
    target = target_class(sort_keys=True)

    body = target.encode(FindOneRequest(collection="users", database="db", data_source="cluster0"))
    assert list(json.loads(body)) == ["collection", "dataSource", "database"]


def test_unserializable_payload(target_class):
    target = target_class()

    with pytest.raises(SerializationError) as e:
        target.encode(
            InsertOneRequest(
                collection="users",
                database="db",
                data_source="cluster0",
                document={"x": object()},
            ),
            operation="insertOne",
        )
    assert e.value.field == "document"
    assert e.value.operation == "insertOne"
    assert e.value.collection == "users"
    assert isinstance(e.value.__cause__, TypeError)
    assert str(e.value).startswith('insertOne on users: failed to serialize "document"')


def test_nan_is_rejected(target_class):
    target = target_class()

    with pytest.raises(SerializationError) as e:
        target.encode(
            InsertOneRequest(
                collection="users",
                database="db",
                data_source="cluster0",
                document={"x": float("nan")},
            )
        )
    assert e.value.field == "document"
