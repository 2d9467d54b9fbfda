"""
Unit tests for the attribute type dispatcher.
"""

import logging

import pytest

from orm_json_schema.infrastructure.schema import (
    AttributeDef,
    ColumnType,
    SchemaConfigurationError,
    attribute_schema,
    dispatch,
)
from orm_json_schema.infrastructure.schema.dispatcher import _RULES


def required(column_type, **kwargs):
    return attribute_schema(AttributeDef("col", column_type, allow_null=False, **kwargs))


@pytest.mark.unit
class TestRuleTable:
    """The rule table covers every known column type."""

    def test_every_column_type_has_a_rule(self):
        assert set(_RULES) == set(ColumnType)

    def test_string_tags_are_coerced(self):
        assert AttributeDef("col", "BigInt").column_type is ColumnType.BIGINT

    def test_unknown_tag_stays_raw(self):
        assert AttributeDef("col", "geometry").column_type == "geometry"


@pytest.mark.unit
class TestScalarTypes:
    """Tests for scalar column types."""

    def test_boolean(self):
        assert required(ColumnType.BOOLEAN) == {"type": "boolean"}

    def test_integer(self):
        assert required(ColumnType.INTEGER) == {"type": "integer", "format": "int32"}

    @pytest.mark.parametrize(
        "column_type", [ColumnType.TINYINT, ColumnType.SMALLINT, ColumnType.MEDIUMINT]
    )
    def test_small_integers_are_int32(self, column_type):
        assert required(column_type) == {"type": "integer", "format": "int32"}

    def test_bigint(self):
        assert required(ColumnType.BIGINT) == {"type": "integer", "format": "int64"}

    def test_float(self):
        assert required(ColumnType.FLOAT) == {"type": "number", "format": "float"}

    def test_double(self):
        assert required(ColumnType.DOUBLE) == {"type": "number", "format": "double"}

    @pytest.mark.parametrize(
        "column_type", [ColumnType.REAL, ColumnType.DECIMAL, ColumnType.NUMERIC]
    )
    def test_generic_numbers_have_no_format(self, column_type):
        assert required(column_type) == {"type": "number"}

    @pytest.mark.parametrize(
        "column_type,fmt",
        [
            (ColumnType.DATE, "date-time"),
            (ColumnType.DATEONLY, "date"),
            (ColumnType.TIME, "time"),
        ],
    )
    def test_calendar_types(self, column_type, fmt):
        assert required(column_type) == {"type": "string", "format": fmt}

    @pytest.mark.parametrize(
        "column_type", [ColumnType.UUID, ColumnType.UUIDV1, ColumnType.UUIDV4]
    )
    def test_uuid_types(self, column_type):
        assert required(column_type) == {"type": "string", "format": "uuid"}

    def test_blob_is_base64_string(self):
        assert required(ColumnType.BLOB) == {"type": "string", "contentEncoding": "base64"}

    def test_inet_is_ipv4_or_ipv6(self):
        assert required(ColumnType.INET) == {
            "type": "string",
            "anyOf": [{"format": "ipv4"}, {"format": "ipv6"}],
        }

    def test_nullable_inet_keeps_format_branches(self):
        schema = attribute_schema(AttributeDef("ip", ColumnType.INET))
        assert schema["type"] == ["string", "null"]
        assert schema["anyOf"] == [{"format": "ipv4"}, {"format": "ipv6"}]

    @pytest.mark.parametrize("column_type", [ColumnType.JSON, ColumnType.JSONB])
    def test_json_is_any(self, column_type):
        assert required(column_type) == {
            "type": ["object", "array", "boolean", "number", "string"]
        }

    def test_enum_copies_values(self):
        values = ["draft", "published"]
        schema = required(ColumnType.ENUM, enum_values=values)
        assert schema == {"type": "string", "enum": ["draft", "published"]}
        schema["enum"].append("deleted")
        assert values == ["draft", "published"]


@pytest.mark.unit
class TestTextTypes:
    """Tests for text-like column types and length aliases."""

    def test_string_without_length(self):
        assert required(ColumnType.STRING) == {"type": "string"}

    def test_string_with_length(self):
        assert required(ColumnType.STRING, length=100) == {"type": "string", "maxLength": 100}

    def test_nullable_string_with_tiny_alias(self):
        schema = attribute_schema(AttributeDef("title", "string", length="tiny"))
        assert schema == {"type": ["string", "null"], "maxLength": 255}

    @pytest.mark.parametrize(
        "alias,expected",
        [("tiny", 255), ("medium", 16777215), ("long", 4294967295)],
    )
    def test_text_size_classes(self, alias, expected):
        assert required(ColumnType.TEXT, length=alias)["maxLength"] == expected

    def test_char_with_length(self):
        assert required(ColumnType.CHAR, length=2)["maxLength"] == 2

    def test_zero_length_means_no_max_length(self):
        assert "maxLength" not in required(ColumnType.STRING, length=0)


@pytest.mark.unit
class TestNullability:
    """Nullability follows allow_null."""

    def test_integer_required(self):
        schema = attribute_schema(AttributeDef("id", ColumnType.INTEGER, allow_null=False))
        assert schema == {"type": "integer", "format": "int32"}

    def test_nullable_by_default(self):
        schema = attribute_schema(AttributeDef("age", ColumnType.INTEGER))
        assert schema["type"] == ["integer", "null"]

    @pytest.mark.parametrize("allow_null", [None, 0, ""])
    def test_only_explicit_false_is_non_nullable(self, allow_null):
        attribute = AttributeDef("age", ColumnType.INTEGER, allow_null=allow_null)
        assert attribute.allow_null is True
        assert attribute_schema(attribute)["type"] == ["integer", "null"]

    def test_dispatch_never_adds_null(self):
        assert dispatch(AttributeDef("age", ColumnType.INTEGER)) == {
            "type": "integer",
            "format": "int32",
        }


@pytest.mark.unit
class TestArrayType:
    """Tests for array attributes."""

    def test_items_use_inner_type(self):
        attr = AttributeDef(
            "scores",
            ColumnType.ARRAY,
            allow_null=False,
            inner_type=AttributeDef("scores", ColumnType.DOUBLE),
        )
        assert attribute_schema(attr) == {
            "type": "array",
            "items": {"type": "number", "format": "double"},
        }

    @pytest.mark.parametrize("outer_null", [True, False])
    def test_items_are_never_nullable(self, outer_null):
        attr = AttributeDef(
            "tags",
            ColumnType.ARRAY,
            allow_null=outer_null,
            inner_type=AttributeDef("tags", ColumnType.STRING, allow_null=True),
        )
        schema = attribute_schema(attr)
        assert schema["items"] == {"type": "string"}
        assert ("null" in schema["type"]) is outer_null

    def test_nested_arrays(self):
        attr = AttributeDef(
            "matrix",
            ColumnType.ARRAY,
            allow_null=False,
            inner_type=AttributeDef(
                "matrix",
                ColumnType.ARRAY,
                inner_type=AttributeDef("matrix", ColumnType.INTEGER),
            ),
        )
        assert attribute_schema(attr)["items"] == {
            "type": "array",
            "items": {"type": "integer", "format": "int32"},
        }

    def test_missing_inner_type_is_configuration_error(self):
        with pytest.raises(SchemaConfigurationError, match="inner type"):
            attribute_schema(AttributeDef("tags", ColumnType.ARRAY))


@pytest.mark.unit
class TestVirtualType:
    """Tests for computed attributes."""

    def test_without_return_type_is_string(self):
        attr = AttributeDef("label", ColumnType.VIRTUAL, allow_null=False)
        assert attribute_schema(attr) == {"type": "string"}

    def test_nullable_without_return_type(self):
        attr = AttributeDef("label", ColumnType.VIRTUAL)
        assert attribute_schema(attr) == {"type": ["string", "null"]}

    def test_return_type_matches_standalone_schema(self):
        returned = AttributeDef("x", ColumnType.BIGINT, allow_null=False)
        attr = AttributeDef("total", ColumnType.VIRTUAL, allow_null=False, return_type=returned)
        assert attribute_schema(attr) == attribute_schema(returned)

    def test_outer_nullability_wins_over_return_type(self):
        returned = AttributeDef("x", ColumnType.BIGINT, allow_null=False)
        attr = AttributeDef("total", ColumnType.VIRTUAL, allow_null=True, return_type=returned)
        assert attribute_schema(attr) == {"type": ["integer", "null"], "format": "int64"}

    def test_returning_array_without_inner_type_fails(self):
        attr = AttributeDef(
            "ids",
            ColumnType.VIRTUAL,
            return_type=AttributeDef("ids", ColumnType.ARRAY),
        )
        with pytest.raises(SchemaConfigurationError):
            attribute_schema(attr)


@pytest.mark.unit
class TestUnknownType:
    """Unknown column types degrade to the any fragment."""

    def test_unknown_tag_falls_back_to_any(self, caplog: pytest.LogCaptureFixture):
        caplog.set_level(logging.WARNING)
        schema = attribute_schema(AttributeDef("shape", "geometry", allow_null=False))
        assert schema == {"type": ["object", "array", "boolean", "number", "string"]}
        assert any("unsupported_column_type" in r.getMessage() for r in caplog.records)
        assert any("geometry" in r.getMessage() for r in caplog.records)

    def test_nullable_unknown_adds_null(self):
        schema = attribute_schema(AttributeDef("shape", "geometry"))
        assert schema["type"][-1] == "null"


@pytest.mark.unit
class TestAnnotations:
    """Description, example and default are carried into the schema."""

    def test_annotations(self):
        attr = AttributeDef(
            "title",
            ColumnType.STRING,
            allow_null=False,
            description="Headline",
            example="10 Shocking Things That Go Viral",
            default="Untitled",
        )
        assert attribute_schema(attr) == {
            "type": "string",
            "description": "Headline",
            "examples": ["10 Shocking Things That Go Viral"],
            "default": "Untitled",
        }

    def test_array_example(self):
        attr = AttributeDef(
            "tags",
            ColumnType.ARRAY,
            inner_type=AttributeDef("tags", ColumnType.STRING),
            example=["clickbait", "viral"],
        )
        assert attribute_schema(attr)["examples"] == [["clickbait", "viral"]]

    def test_falsy_example_is_kept(self):
        attr = AttributeDef("count", ColumnType.INTEGER, example=0)
        assert attribute_schema(attr)["examples"] == [0]
