# ============================================================================
# SCHEMA OUTPUT ASSEMBLY
# ============================================================================
# STATUS: Core - Final declaration file text
# PURPOSE: Header, version canary, per-schema blocks, cross-relation section
# CREATED: 19 OCT 2026
# EXPORTS: header, CANARY_VERSION, schema_block, schema_declarations
# ============================================================================
"""
Assembles the generated `schema.d.ts` text:

    /* header */
    declare module 'zapatos/schema' {
      import type * as db from 'zapatos/db';
      import type * as c from 'zapatos/custom';   // only with custom types
      <version canary>
      /* === schema: public === */
      /* --- enums --- */ ...
      /* --- tables --- */ ...
      /* === cross-table types === */ ...
    }
"""

from typing import Sequence, Tuple

from schemats.__version__ import __version__
from schemats.core.contracts import EnumData, Relation
from schemats.core.schema.cross_relation import cross_relation_types
from schemats.core.schema.enums import enum_types_for_enum_data
from schemats.core.schema.relation_types import RelationTypeBlock
from schemats.core.schema.ts_utils import CUSTOM_MODULE, DB_MODULE, SCHEMA_MODULE, declare_module

# Must match SchemaVersionCanary['version'] in the runtime library
CANARY_VERSION = 101

VERSION_CANARY = f"""
// got a type error on schemaVersionCanary below? update by re-running schemats
export interface schemaVersionCanary extends db.SchemaVersionCanary {{ version: {CANARY_VERSION} }}
"""


def header() -> str:
    return f"""/*
** DON'T EDIT THIS FILE **
It's been generated by schemats {__version__}, and is liable to be overwritten
*/
"""


def schema_block(
    schema_name: str,
    enums: EnumData,
    blocks: Sequence[RelationTypeBlock],
) -> str:
    """One schema's enums and relation namespaces, in the given order."""
    return (
        f"\n/* === schema: {schema_name} === */\n"
        + "\n/* --- enums --- */\n"
        + enum_types_for_enum_data(enums)
        + "\n\n/* --- tables --- */\n"
        + "\n".join(block.render() for block in blocks)
    )


def schema_declarations(
    schema_blocks: Sequence[Tuple[str, str]],
    relations: Sequence[Relation],
    has_custom_types: bool,
) -> str:
    """
    Full schema declaration file.

    Args:
        schema_blocks: (schema name, rendered block) pairs, sorted by name
        relations: All relations of the run, sorted
        has_custom_types: Whether to import the custom types module
    """
    imports = f"\nimport type * as db from '{DB_MODULE}';\n"
    if has_custom_types:
        imports += f"import type * as c from '{CUSTOM_MODULE}';\n"

    body = (
        imports
        + VERSION_CANARY
        + "\n\n".join(text for _, text in schema_blocks)
        + "\n\n/* === cross-table types === */\n"
        + cross_relation_types(relations)
    )
    return header() + declare_module(SCHEMA_MODULE, body)


__all__ = [
    "CANARY_VERSION",
    "VERSION_CANARY",
    "header",
    "schema_block",
    "schema_declarations",
]
