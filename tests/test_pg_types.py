# ============================================================================
# TYPE MAPPING TESTS
# ============================================================================
# STATUS: Tests - PostgreSQL to TypeScript base type mapping
# PURPOSE: Verify scalar, array, enum and unknown type lookups
# CREATED: 19 OCT 2026
# ============================================================================
"""
Type Mapping Tests

Run with:
    pytest tests/test_pg_types.py -v
"""

import pytest

from schemats.core.schema.pg_types import (
    UNKNOWN_TYPE,
    date_string_alternative,
    is_unknown_type,
    ts_type_for_pg_type,
)


ENUMS = {"mood": ["happy", "sad"]}


class TestScalarTypes:
    @pytest.mark.parametrize("pg_type,expected", [
        ("text", "string"),
        ("varchar", "string"),
        ("uuid", "string"),
        ("int4", "number"),
        ("float8", "number"),
        ("int8", "db.Int8String"),
        ("numeric", "db.NumericString"),
        ("bool", "boolean"),
        ("jsonb", "db.JSONValue"),
        ("timestamptz", "Date"),
        ("date", "Date"),
        ("bytea", "Buffer"),
    ])
    def test_known_scalars(self, pg_type, expected):
        assert ts_type_for_pg_type(pg_type, {}) == expected

    def test_unknown_scalar(self):
        assert ts_type_for_pg_type("geometry", {}) == UNKNOWN_TYPE
        assert is_unknown_type(ts_type_for_pg_type("geometry", {}))


class TestArrayTypes:
    def test_array_of_known(self):
        assert ts_type_for_pg_type("_int4", {}) == "number[]"
        assert ts_type_for_pg_type("_timestamptz", {}) == "Date[]"

    def test_array_of_unknown(self):
        assert ts_type_for_pg_type("_geometry", {}) == UNKNOWN_TYPE


class TestEnumTypes:
    def test_enum(self):
        assert ts_type_for_pg_type("mood", ENUMS) == "mood"

    def test_enum_array(self):
        assert ts_type_for_pg_type("_mood", ENUMS) == "mood[]"

    def test_enum_from_other_schema_is_unknown(self):
        assert ts_type_for_pg_type("mood", {}) == UNKNOWN_TYPE


class TestDateStringAlternative:
    def test_date(self):
        assert date_string_alternative("Date") == "db.DateString"

    def test_date_array(self):
        assert date_string_alternative("Date[]") == "db.DateString[]"

    def test_non_temporal(self):
        assert date_string_alternative("string") is None
        assert date_string_alternative("c.PgMy_date") is None
