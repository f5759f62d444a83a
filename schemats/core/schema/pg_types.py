# ============================================================================
# POSTGRES TYPE MAPPING
# ============================================================================
# STATUS: Core - Base type mapping table
# PURPOSE: Map PostgreSQL udt names to TypeScript type expressions
# CREATED: 19 OCT 2026
# EXPORTS: TYPE_MAP, UNKNOWN_TYPE, ts_type_for_pg_type, is_unknown_type,
#          date_string_alternative
# ============================================================================
"""
PostgreSQL to TypeScript Type Mapping.

Pure lookup from a catalog type name (udt_name / typname) to the
TypeScript type that values of that type arrive as through node-postgres.
Array types use PostgreSQL's underscore-prefixed element name ("_int4").

Anything not in the table resolves to UNKNOWN_TYPE ("any"), which the
column classifier routes into the custom-type placeholder mechanism.

Usage:
    from schemats.core.schema.pg_types import ts_type_for_pg_type

    ts_type_for_pg_type("int4", {})        # 'number'
    ts_type_for_pg_type("_timestamptz", {})  # 'Date[]'
    ts_type_for_pg_type("mood", {"mood": ["happy", "sad"]})  # 'mood'
"""

from typing import Dict, Optional

from schemats.core.contracts import EnumData


UNKNOWN_TYPE = "any"
DATE_TYPE = "Date"
DATE_STRING_TYPE = "db.DateString"


# ============================================================================
# TYPE MAPPING
# ============================================================================

TYPE_MAP: Dict[str, str] = {
    # Text-like
    'bpchar': 'string',
    'char': 'string',
    'varchar': 'string',
    'text': 'string',
    'citext': 'string',
    'name': 'string',
    'uuid': 'string',
    'inet': 'string',
    'cidr': 'string',
    'macaddr': 'string',
    'macaddr8': 'string',
    'bit': 'string',
    'varbit': 'string',
    'xml': 'string',
    'money': 'string',
    'tsvector': 'string',
    'tsquery': 'string',

    # Times without a calendar date stay strings
    'time': 'string',
    'timetz': 'string',
    'interval': 'string',

    # Numerics
    'int2': 'number',
    'int4': 'number',
    'float4': 'number',
    'float8': 'number',
    'oid': 'number',
    'int8': 'db.Int8String',
    'numeric': 'db.NumericString',

    # Other scalars
    'bool': 'boolean',
    'json': 'db.JSONValue',
    'jsonb': 'db.JSONValue',
    'bytea': 'Buffer',

    # Temporal
    'date': DATE_TYPE,
    'timestamp': DATE_TYPE,
    'timestamptz': DATE_TYPE,
}


def ts_type_for_pg_type(pg_type: str, enums: EnumData) -> str:
    """
    Map a PostgreSQL type name to a TypeScript type expression.

    Args:
        pg_type: Catalog type name, e.g. "varchar" or "_int4"
        enums: Enums known in the schema being processed

    Returns:
        TypeScript type expression, or UNKNOWN_TYPE if unrecognised
    """
    if pg_type in TYPE_MAP:
        return TYPE_MAP[pg_type]

    if pg_type in enums:
        return pg_type

    if pg_type.startswith('_'):
        element = pg_type[1:]
        if element in TYPE_MAP:
            return f"{TYPE_MAP[element]}[]"
        if element in enums:
            return f"{element}[]"

    return UNKNOWN_TYPE


def is_unknown_type(ts_type: str) -> bool:
    return ts_type == UNKNOWN_TYPE


def date_string_alternative(ts_type: str) -> Optional[str]:
    """
    Extra union member accepted for temporal values.

    Dates may be supplied as ISO strings as well as Date objects.
    """
    if ts_type == DATE_TYPE:
        return DATE_STRING_TYPE
    if ts_type == f"{DATE_TYPE}[]":
        return f"{DATE_STRING_TYPE}[]"
    return None


__all__ = [
    "TYPE_MAP",
    "UNKNOWN_TYPE",
    "DATE_TYPE",
    "DATE_STRING_TYPE",
    "ts_type_for_pg_type",
    "is_unknown_type",
    "date_string_alternative",
]
