# ============================================================================
# SCHEMA MODULE
# ============================================================================
# STATUS: Core - Schema-to-type compiler
# PURPOSE: Generate TypeScript declarations from PostgreSQL catalog facts
# CREATED: 19 OCT 2026
# ============================================================================

from schemats.core.schema.pg_types import (
    TYPE_MAP,
    UNKNOWN_TYPE,
    ts_type_for_pg_type,
)
from schemats.core.schema.naming import NameTransform, resolve_name_transform
from schemats.core.schema.custom_types import (
    CustomType,
    CustomTypeRegistry,
    CustomTypeCollisionError,
    CustomTypeConflictError,
)
from schemats.core.schema.classifier import (
    KnownBuiltin,
    UnknownBuiltin,
    KnownDomain,
    UnknownDomain,
    classify_column,
    resolve_column_type,
)
from schemats.core.schema.relation_types import RelationTypeBlock, synthesize_relation
from schemats.core.schema.cross_relation import cross_relation_types
from schemats.core.schema.enums import enum_types_for_enum_data
from schemats.core.schema.output import schema_block, schema_declarations

__all__ = [
    # Type mapping
    "TYPE_MAP",
    "UNKNOWN_TYPE",
    "ts_type_for_pg_type",
    # Naming
    "NameTransform",
    "resolve_name_transform",
    # Custom types
    "CustomType",
    "CustomTypeRegistry",
    "CustomTypeCollisionError",
    "CustomTypeConflictError",
    # Classification
    "KnownBuiltin",
    "UnknownBuiltin",
    "KnownDomain",
    "UnknownDomain",
    "classify_column",
    "resolve_column_type",
    # Synthesis
    "RelationTypeBlock",
    "synthesize_relation",
    "cross_relation_types",
    "enum_types_for_enum_data",
    "schema_block",
    "schema_declarations",
]
