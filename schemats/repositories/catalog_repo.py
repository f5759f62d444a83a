# ============================================================================
# CATALOG REPOSITORY
# ============================================================================
# STATUS: Repository - PostgreSQL catalog introspection
# PURPOSE: Relations, columns, unique indexes and enums of a schema
# CREATED: 19 OCT 2026
# ============================================================================
"""
Catalog Repository

Read-only queries against information_schema and pg_catalog. Every
method is one round trip and returns plain contracts; nothing is cached.

Query failures are logged and re-raised unchanged: a failed catalog
query aborts the whole run.
"""

import logging
from typing import Any, Dict, List

import psycopg
from psycopg.rows import dict_row
from psycopg_pool import AsyncConnectionPool

from schemats.core.contracts import ColumnFact, EnumData, Relation, RelationKind

logger = logging.getLogger(__name__)


# ============================================================================
# QUERIES
# ============================================================================

RELATIONS_QUERY = """
    SELECT
      "table_name" AS "name"
    , lower("table_name") AS "lname"
    , 'table'::text AS "kind"
    FROM "information_schema"."columns"
    WHERE "table_schema" = %(schema)s
    GROUP BY "table_name"
    UNION ALL
    SELECT
      pg_class.relname AS "name"
    , lower(pg_class.relname) AS "lname"
    , 'mview'::text AS "kind"
    FROM pg_catalog.pg_class
    INNER JOIN pg_catalog.pg_namespace ON pg_class.relnamespace = pg_namespace.oid
    WHERE pg_class.relkind = 'm' AND pg_namespace.nspname = %(schema)s
    GROUP BY pg_class.relname
    ORDER BY "lname", "name"
"""

TABLE_COLUMNS_QUERY = """
    SELECT
      "column_name" AS "name"
    , "is_nullable" = 'YES' AS "is_nullable"
    , "is_generated" = 'ALWAYS' OR "identity_generation" = 'ALWAYS' AS "is_generated"
    , "column_default" IS NOT NULL OR "identity_generation" = 'BY DEFAULT' AS "has_default"
    , "udt_name" AS "base_type_name"
    , "domain_name" AS "domain_name"
    FROM "information_schema"."columns"
    WHERE "table_name" = %(relation)s AND "table_schema" = %(schema)s
    ORDER BY "ordinal_position"
"""

# Materialized views can't be written to, so every column reports as
# generated and the Insertable/Updatable roles come out empty. Domain
# columns resolve to (base type, domain) as information_schema reports them.
MVIEW_COLUMNS_QUERY = """
    SELECT
      a.attname AS "name"
    , NOT a.attnotnull AS "is_nullable"
    , true AS "is_generated"
    , false AS "has_default"
    , CASE WHEN t.typtype = 'd' THEN bt.typname ELSE t.typname END AS "base_type_name"
    , CASE WHEN t.typtype = 'd' THEN t.typname END AS "domain_name"
    FROM pg_catalog.pg_class c
    INNER JOIN pg_catalog.pg_attribute a ON c.oid = a.attrelid
    INNER JOIN pg_catalog.pg_namespace n ON c.relnamespace = n.oid
    INNER JOIN pg_catalog.pg_type t ON a.atttypid = t.oid
    LEFT JOIN pg_catalog.pg_type bt ON bt.oid = t.typbasetype
    WHERE c.relkind = 'm' AND a.attnum >= 1 AND NOT a.attisdropped
      AND c.relname = %(relation)s AND n.nspname = %(schema)s
    ORDER BY a.attnum
"""

UNIQUE_INDEXES_QUERY = """
    SELECT i."indexname" AS "name"
    FROM "pg_indexes" i
    JOIN "pg_namespace" n ON n."nspname" = i."schemaname"
    JOIN "pg_class" c ON c."relname" = i."indexname" AND c."relnamespace" = n."oid"
    JOIN "pg_index" idx ON idx."indexrelid" = c."oid" AND idx."indisunique"
    WHERE i."tablename" = %(relation)s AND i."schemaname" = %(schema)s
    ORDER BY c."oid"
"""

ENUMS_QUERY = """
    SELECT t.typname AS "name", e.enumlabel AS "value"
    FROM pg_catalog.pg_type t
    JOIN pg_catalog.pg_enum e ON t.oid = e.enumtypid
    JOIN pg_catalog.pg_namespace n ON n.oid = t.typnamespace
    WHERE n.nspname = %(schema)s
    ORDER BY t.typname ASC, e.enumsortorder ASC
"""


class CatalogRepository:
    """Catalog queries for one run, sharing the run's pool."""

    def __init__(self, pool: AsyncConnectionPool):
        self.pool = pool

    async def _fetch_all(self, query: str, params: Dict[str, Any]) -> List[Dict[str, Any]]:
        """Execute query and fetch all rows as dicts."""
        try:
            async with self.pool.connection() as conn:
                conn.row_factory = dict_row
                cur = await conn.execute(query, params)
                return await cur.fetchall()
        except psycopg.Error as e:
            logger.error(f"Catalog query failed ({params}): {e}")
            raise

    async def list_relations(self, schema_name: str) -> List[Relation]:
        """Tables, views and materialized views, ordered case-insensitively."""
        rows = await self._fetch_all(RELATIONS_QUERY, {"schema": schema_name})
        relations = [Relation(name=row["name"], kind=RelationKind(row["kind"])) for row in rows]
        logger.debug(f"Schema {schema_name}: {len(relations)} relations")
        return relations

    async def list_columns(self, relation: Relation, schema_name: str) -> List[ColumnFact]:
        """Columns of one relation in ordinal order."""
        query = MVIEW_COLUMNS_QUERY if relation.is_materialized_view else TABLE_COLUMNS_QUERY
        rows = await self._fetch_all(query, {"relation": relation.name, "schema": schema_name})
        return [self._row_to_column(row) for row in rows]

    async def list_unique_indexes(self, relation: Relation, schema_name: str) -> List[str]:
        """Unique index names; materialized views have none tracked."""
        if relation.is_materialized_view:
            return []
        rows = await self._fetch_all(
            UNIQUE_INDEXES_QUERY, {"relation": relation.name, "schema": schema_name}
        )
        return [row["name"] for row in rows]

    async def list_enums(self, schema_name: str) -> EnumData:
        """Enum name -> labels in declaration order."""
        rows = await self._fetch_all(ENUMS_QUERY, {"schema": schema_name})
        enums: EnumData = {}
        for row in rows:
            enums.setdefault(row["name"], []).append(row["value"])
        return enums

    def _row_to_column(self, row: Dict[str, Any]) -> ColumnFact:
        """Convert a catalog row to a ColumnFact."""
        return ColumnFact(
            name=row["name"],
            is_nullable=bool(row["is_nullable"]),
            is_generated=bool(row["is_generated"]),
            has_default=bool(row["has_default"]),
            base_type_name=row["base_type_name"],
            domain_name=row.get("domain_name"),
        )


__all__ = ["CatalogRepository"]
