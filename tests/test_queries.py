import json

import pytest

from batonkit.queries import (
    AccessQuery,
    AvuQuery,
    MetamodInput,
    MetamodOperation,
    MetaqueryInput,
    Operator,
    TimestampQuery,
)
from batonkit.records import AclLevel, Collection, DataObject


def test_metamod_operation_values():
    assert MetamodOperation("add") is MetamodOperation.ADD
    assert MetamodOperation("rm") is MetamodOperation.RM
    assert json.dumps(MetamodOperation.ADD.value) == '"add"'


def test_metamod_unknown_operation_rejected():
    with pytest.raises(ValueError):
        MetamodInput.from_json('{"collection":"/z","operation":"del"}')


def test_metamod_missing_operation_rejected():
    with pytest.raises(ValueError):
        MetamodInput.from_json('{"collection":"/z","avus":[]}')


def test_metamod_input_data_object_round_trip():
    text = '{"collection":"/z/home/u","data_object":"foo.txt","operation":"add","avus":[{"attribute":"a","value":"v","units":"u"}]}'
    record = MetamodInput.from_json(text)
    assert record.collection == "/z/home/u"
    assert record.data_object == "foo.txt"
    assert record.operation is MetamodOperation.ADD
    assert len(record.avus) == 1
    assert record.avus[0].attribute == "a"
    assert record.error is None
    assert record.to_json() == text


def test_metamod_input_collection_round_trip():
    text = '{"collection":"/z/home/u","operation":"rm","avus":[]}'
    record = MetamodInput.from_json(text)
    assert record.data_object is None
    assert record.operation is MetamodOperation.RM
    assert record.avus == []
    assert record.to_json() == text


def test_metamod_input_missing_avus_defaults_empty():
    record = MetamodInput.from_json('{"collection":"/z","operation":"add"}')
    assert record.avus == []
    assert record.to_json() == '{"collection":"/z","operation":"add","avus":[]}'


def test_metamod_input_target_data_object():
    record = MetamodInput(
        collection="/z/home/u", data_object="foo.txt", operation=MetamodOperation.ADD
    )
    target = record.target()
    assert isinstance(target, DataObject)
    assert target.collection == "/z/home/u"
    assert target.data_object == "foo.txt"
    assert target.avus is None
    assert target.access is None
    assert target.path() == "/z/home/u/foo.txt"


def test_metamod_input_target_collection():
    record = MetamodInput(collection="/z/home/u", operation=MetamodOperation.RM)
    target = record.target()
    assert isinstance(target, Collection)
    assert target.collection == "/z/home/u"


def test_metamod_input_with_error_annotation_round_trip():
    text = '{"collection":"/z/home/u","data_object":"foo.txt","operation":"add","avus":[],"error":{"code":-310000,"message":"USER_FILE_DOES_NOT_EXIST"}}'
    record = MetamodInput.from_json(text)
    assert record.error is not None
    assert record.error.code == -310000
    assert record.to_json() == text


@pytest.mark.parametrize(
    "literal, op",
    [
        ("=", Operator.EQUALS),
        ("like", Operator.LIKE),
        ("not like", Operator.NOT_LIKE),
        ("in", Operator.IN),
        (">", Operator.GREATER_THAN),
        ("n>", Operator.NUMERIC_GREATER_THAN),
        ("<", Operator.LESS_THAN),
        ("n<", Operator.NUMERIC_LESS_THAN),
        (">=", Operator.GREATER_THAN_OR_EQUAL),
        ("n>=", Operator.NUMERIC_GREATER_THAN_OR_EQUAL),
        ("<=", Operator.LESS_THAN_OR_EQUAL),
        ("n<=", Operator.NUMERIC_LESS_THAN_OR_EQUAL),
    ],
)
def test_operator_round_trip_all_variants(literal, op):
    text = json.dumps({"attribute": "a", "value": "v", "operator": literal})
    query = AvuQuery.from_json(text)
    assert query.operator is op
    assert json.loads(query.to_json())["operator"] == literal


def test_operator_default_is_equals():
    assert AvuQuery("a", "v").operator is Operator.EQUALS
    assert TimestampQuery().operator is Operator.EQUALS


def test_unknown_operator_rejected():
    with pytest.raises(ValueError):
        AvuQuery.from_json('{"attribute":"a","value":"v","operator":"~"}')


def test_avu_query_with_explicit_operator_round_trip():
    text = '{"attribute":"sample","value":"12*","operator":"like"}'
    query = AvuQuery.from_json(text)
    assert query.attribute == "sample"
    assert query.operator is Operator.LIKE
    assert query.to_json() == text


def test_avu_query_default_operator_is_equals():
    query = AvuQuery.from_json('{"attribute":"sample","value":"12345"}')
    assert query.operator is Operator.EQUALS
    assert query.to_json() == '{"attribute":"sample","value":"12345","operator":"="}'


def test_avu_query_with_units_round_trip():
    text = '{"attribute":"sample","value":"1","units":"id","operator":"n>"}'
    assert AvuQuery.from_json(text).to_json() == text


def test_avu_query_missing_value_rejected():
    with pytest.raises(ValueError):
        AvuQuery.from_json('{"attribute":"sample"}')


def test_timestamp_query_round_trip():
    text = '{"created":"2024-01-01T00:00:00","operator":">="}'
    query = TimestampQuery.from_json(text)
    assert query.created == "2024-01-01T00:00:00"
    assert query.modified is None
    assert query.operator is Operator.GREATER_THAN_OR_EQUAL
    assert query.to_json() == text


def test_access_query_with_zone_round_trip():
    text = '{"owner":"irods","level":"read","zone":"testZone"}'
    query = AccessQuery.from_json(text)
    assert query.owner == "irods"
    assert query.level is AclLevel.READ
    assert query.zone == "testZone"
    assert query.to_json() == text


def test_access_query_bad_level_rejected():
    with pytest.raises(ValueError):
        AccessQuery.from_json('{"owner":"irods","level":"admin"}')


def test_metaquery_input_full_round_trip():
    text = '{"avus":[{"attribute":"sample","value":"12345","operator":"="}],"timestamps":[{"created":"2024-01-01T00:00:00","operator":">="}],"access":[{"owner":"irods","level":"own"}],"collection":"/testZone/home/irods","zone":"testZone"}'
    query = MetaqueryInput.from_json(text)
    assert len(query.avus) == 1
    assert len(query.timestamps) == 1
    assert len(query.access) == 1
    assert query.collection == "/testZone/home/irods"
    assert query.to_json() == text


def test_metaquery_input_empty_round_trip():
    query = MetaqueryInput.from_json("{}")
    assert query.avus == []
    assert query.timestamps == []
    assert query.access == []
    assert query.collection is None
    assert query.zone is None
    assert query.to_json() == "{}"
    assert MetaqueryInput() == query


def test_metaquery_input_non_list_avus_rejected():
    with pytest.raises(ValueError):
        MetaqueryInput.from_json('{"avus":{"attribute":"a","value":"v"}}')


def test_metaquery_input_rejects_non_object():
    with pytest.raises(ValueError):
        MetaqueryInput.from_json("[]")