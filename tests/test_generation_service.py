# ============================================================================
# GENERATION SERVICE TESTS
# ============================================================================
# STATUS: Tests - End-to-end pipeline over a fake catalog
# PURPOSE: Verify filtering, ordering, custom type merge and failure paths
# CREATED: 19 OCT 2026
# ============================================================================
"""
SchemaTypeGenerator Tests

The catalog is replaced by an in-memory fake with the same async
interface as CatalogRepository. No database required.

Run with:
    pytest tests/test_generation_service.py -v
"""

import asyncio
import pytest
from unittest.mock import MagicMock, patch

import psycopg

from schemats.core.config.settings import GeneratorConfig, SchemaRules
from schemats.core.contracts import ColumnFact, Relation, RelationKind
from schemats.core.schema.custom_types import CustomTypeConflictError
from schemats.services.generation_service import (
    DuplicateRelationError,
    SchemaTypeGenerator,
    check_unique_relations,
    filter_relations,
    gather_all,
    generate_for_config,
)


# ============================================================================
# HELPERS
# ============================================================================

class FakeCatalog:
    """In-memory catalog keyed by schema name."""

    def __init__(self, schemas, fail_on=None):
        self.schemas = schemas
        self.fail_on = fail_on
        self.calls = []

    def _schema(self, schema_name):
        return self.schemas.get(schema_name, {})

    async def list_relations(self, schema_name):
        self.calls.append(("list_relations", schema_name))
        return list(self._schema(schema_name).get("relations", []))

    async def list_enums(self, schema_name):
        self.calls.append(("list_enums", schema_name))
        return dict(self._schema(schema_name).get("enums", {}))

    async def list_columns(self, relation, schema_name):
        self.calls.append(("list_columns", schema_name, relation.name))
        if self.fail_on == relation.name:
            raise psycopg.OperationalError("server closed the connection unexpectedly")
        return list(self._schema(schema_name).get("columns", {}).get(relation.name, []))

    async def list_unique_indexes(self, relation, schema_name):
        self.calls.append(("list_unique_indexes", schema_name, relation.name))
        if relation.is_materialized_view:
            return []
        return list(self._schema(schema_name).get("indexes", {}).get(relation.name, []))


def _text(name, **flags):
    return ColumnFact(name=name, base_type_name="text", **flags)


def _generate(schemas, catalog_data, fail_on=None, **config_kwargs):
    config = GeneratorConfig(schemas=schemas, **config_kwargs)
    catalog = FakeCatalog(catalog_data, fail_on=fail_on)
    result = asyncio.run(SchemaTypeGenerator(config, catalog).generate())
    return result, catalog


PUBLIC = {
    "relations": [Relation(name="users"), Relation(name="posts")],
    "enums": {"mood": ["happy", "sad"]},
    "columns": {
        "users": [
            ColumnFact(name="id", base_type_name="int4", is_generated=True),
            _text("email", is_nullable=True),
            ColumnFact(name="settings", base_type_name="jsonb", domain_name="validated_json"),
        ],
        "posts": [
            ColumnFact(name="id", base_type_name="int4", is_generated=True),
            ColumnFact(name="status", base_type_name="mood"),
        ],
    },
    "indexes": {"users": ["users_pkey", "users_email_key"], "posts": ["posts_pkey"]},
}


# ============================================================================
# HELPER FUNCTIONS
# ============================================================================

class TestFilterRelations:
    def test_sorted_case_insensitively(self):
        relations = [Relation(name="beta"), Relation(name="Alpha"), Relation(name="alpha2")]
        result = filter_relations(relations, SchemaRules())
        assert [relation.name for relation in result] == ["Alpha", "alpha2", "beta"]

    def test_exclusion_precedence(self):
        relations = [Relation(name="a"), Relation(name="b")]
        result = filter_relations(relations, SchemaRules(include=["a", "b"], exclude=["a"]))
        assert [relation.name for relation in result] == ["b"]


class TestCheckUniqueRelations:
    def test_table_and_mview_share_name(self):
        relations = [
            Relation(name="stats"),
            Relation(name="stats", kind=RelationKind.MATERIALIZED_VIEW),
        ]
        with pytest.raises(DuplicateRelationError) as exc_info:
            check_unique_relations({"public": relations})
        assert exc_info.value.relation_name == "stats"
        assert exc_info.value.locations == ["public.stats (table)", "public.stats (mview)"]

    def test_same_name_across_schemas(self):
        with pytest.raises(DuplicateRelationError) as exc_info:
            check_unique_relations({
                "public": [Relation(name="events")],
                "audit": [Relation(name="events")],
            })
        assert exc_info.value.locations == ["audit.events (table)", "public.events (table)"]

    def test_names_clashing_as_namespace_identifiers(self):
        with pytest.raises(DuplicateRelationError) as exc_info:
            check_unique_relations({
                "public": [Relation(name="user-logs"), Relation(name="user_logs")],
            })
        assert exc_info.value.relation_name == "user_logs"
        assert exc_info.value.locations == [
            "public.user-logs (table)",
            "public.user_logs (table)",
        ]

    def test_unique_names_pass(self):
        check_unique_relations({"public": [Relation(name="a")], "audit": [Relation(name="b")]})


class TestGatherAll:
    def test_results_in_argument_order(self):
        async def value(v, delay):
            await asyncio.sleep(delay)
            return v

        async def run():
            return await gather_all(value("a", 0.01), value("b", 0))

        assert asyncio.run(run()) == ["a", "b"]

    def test_failure_cancels_outstanding(self):
        cancelled = []

        async def slow():
            try:
                await asyncio.sleep(10)
            except asyncio.CancelledError:
                cancelled.append(True)
                raise

        async def fail():
            await asyncio.sleep(0)
            raise RuntimeError("boom")

        async def run():
            await gather_all(slow(), fail())

        with pytest.raises(RuntimeError, match="boom"):
            asyncio.run(run())
        assert cancelled == [True]


# ============================================================================
# PIPELINE
# ============================================================================

class TestGenerate:
    def test_full_output(self):
        result, _ = _generate({"public": SchemaRules()}, {"public": PUBLIC})

        assert [relation.name for relation in result.relations] == ["posts", "users"]
        assert result.custom_types.identifiers() == ["PgValidated_json"]
        assert "  import type * as c from 'zapatos/custom';" in result.ts
        assert "  export type mood = 'happy' | 'sad';" in result.ts
        assert "    export type UniqueIndex = 'users_pkey' | 'users_email_key';" in result.ts
        assert "      status: mood;" in result.ts
        assert "      settings: c.PgValidated_json;" in result.ts
        assert "  export type Table = posts.Table | users.Table;" in result.ts
        assert result.ts.index("export namespace posts") < result.ts.index("export namespace users")

    def test_output_is_deterministic(self):
        first, _ = _generate({"public": SchemaRules()}, {"public": PUBLIC})
        second, _ = _generate({"public": SchemaRules()}, {"public": PUBLIC})
        assert first.ts == second.ts

    def test_schema_blocks_sorted_by_name(self):
        catalog = {
            "public": {"relations": [Relation(name="users")]},
            "audit": {"relations": [Relation(name="events")]},
        }
        result, _ = _generate({"public": SchemaRules(), "audit": SchemaRules()}, catalog)

        assert result.ts.index("schema: audit") < result.ts.index("schema: public")
        assert "  export type Table = events.Table | users.Table;" in result.ts

    def test_relations_sorted_case_insensitively(self):
        catalog = {"public": {"relations": [
            Relation(name="beta"), Relation(name="Alpha"), Relation(name="alpha2"),
        ]}}
        result, _ = _generate({"public": SchemaRules()}, catalog)

        assert "  export type Table = Alpha.Table | alpha2.Table | beta.Table;" in result.ts

    def test_include_and_exclude(self):
        result, catalog = _generate(
            {"public": SchemaRules(include=["users", "posts"], exclude=["users"])},
            {"public": PUBLIC},
        )

        assert [relation.name for relation in result.relations] == ["posts"]
        assert ("list_columns", "public", "users") not in catalog.calls
        assert len(result.custom_types) == 0
        assert "zapatos/custom" not in result.ts

    def test_exclude_all_skips_relation_listing(self):
        result, catalog = _generate({"public": SchemaRules(exclude="*")}, {"public": PUBLIC})

        assert ("list_relations", "public") not in catalog.calls
        assert ("list_enums", "public") in catalog.calls
        assert result.relations == []
        assert "  export type mood = 'happy' | 'sad';" in result.ts
        assert "  export type Table = any;" in result.ts

    def test_empty_schema(self):
        result, _ = _generate({"public": SchemaRules()}, {"public": {}})

        assert result.relations == []
        assert "  export type AllTables = [];" in result.ts
        assert "  export type SelectableForTable<T extends Table> = any;" in result.ts

    def test_materialized_view(self):
        catalog = {"public": {
            "relations": [Relation(name="stats", kind=RelationKind.MATERIALIZED_VIEW)],
            "columns": {"stats": [ColumnFact(name="total", base_type_name="int8", is_generated=True)]},
        }}
        result, _ = _generate({"public": SchemaRules()}, catalog)

        assert "  export type AllMaterializedViews = [stats.Table];" in result.ts
        assert "  export type AllTables = [];" in result.ts
        assert "    export type UniqueIndex = never;" in result.ts


class TestCustomTypeMerge:
    def test_shared_domain_registered_once(self):
        domain_column = ColumnFact(name="meta", base_type_name="jsonb", domain_name="validated_json")
        catalog = {"public": {
            "relations": [Relation(name="a"), Relation(name="b")],
            "columns": {"a": [domain_column], "b": [domain_column]},
        }}
        result, _ = _generate({"public": SchemaRules()}, catalog)

        assert len(result.custom_types) == 1
        assert list(result.custom_type_sources) == ["PgValidated_json"]

    def test_materialized_view_over_domain_column(self):
        catalog = {"public": {
            "relations": [
                Relation(name="users"),
                Relation(name="user_emails", kind=RelationKind.MATERIALIZED_VIEW),
            ],
            "columns": {
                "users": [ColumnFact(name="email", base_type_name="text", domain_name="email_address")],
                "user_emails": [ColumnFact(
                    name="email",
                    base_type_name="text",
                    domain_name="email_address",
                    is_generated=True,
                )],
            },
        }}
        result, _ = _generate({"public": SchemaRules()}, catalog)

        assert result.custom_types.identifiers() == ["PgEmail_address"]
        assert result.custom_types.get("PgEmail_address").placeholder == "string"
        assert result.ts.count("      email: c.PgEmail_address;") == 2

    def test_same_domain_different_base_types_conflicts(self):
        catalog = {
            "public": {
                "relations": [Relation(name="a")],
                "columns": {"a": [ColumnFact(name="code", base_type_name="text", domain_name="code")]},
            },
            "audit": {
                "relations": [Relation(name="b")],
                "columns": {"b": [ColumnFact(name="code", base_type_name="int4", domain_name="code")]},
            },
        }
        with pytest.raises(CustomTypeConflictError):
            _generate({"public": SchemaRules(), "audit": SchemaRules()}, catalog)


class TestFailures:
    def test_duplicate_across_schemas(self):
        catalog = {
            "public": {"relations": [Relation(name="events")]},
            "audit": {"relations": [Relation(name="events")]},
        }
        with pytest.raises(DuplicateRelationError):
            _generate({"public": SchemaRules(), "audit": SchemaRules()}, catalog)

    def test_query_failure_propagates(self):
        with pytest.raises(psycopg.OperationalError):
            _generate({"public": SchemaRules()}, {"public": PUBLIC}, fail_on="users")


# ============================================================================
# POOL LIFECYCLE
# ============================================================================

class TestGenerateForConfig:
    def test_pool_scoped_to_run(self):
        config = GeneratorConfig(db="postgresql://app@db.local/app")
        pool = MagicMock()
        fake = FakeCatalog({"public": PUBLIC})

        with patch("schemats.services.generation_service.DatabasePool") as pool_cls, \
             patch("schemats.services.generation_service.CatalogRepository", return_value=fake) as repo_cls:
            pool_cls.return_value.__aenter__.return_value = pool

            result = asyncio.run(generate_for_config(config))

        pool_cls.assert_called_once_with("postgresql://app@db.local/app", min_size=1, max_size=4)
        repo_cls.assert_called_once_with(pool)
        pool_cls.return_value.__aexit__.assert_awaited_once()
        assert [relation.name for relation in result.relations] == ["posts", "users"]

    def test_pool_closed_on_failure(self):
        config = GeneratorConfig(db="postgresql://app@db.local/app")
        fake = FakeCatalog({"public": PUBLIC}, fail_on="posts")

        with patch("schemats.services.generation_service.DatabasePool") as pool_cls, \
             patch("schemats.services.generation_service.CatalogRepository", return_value=fake):
            pool_cls.return_value.__aenter__.return_value = MagicMock()

            with pytest.raises(psycopg.OperationalError):
                asyncio.run(generate_for_config(config))

        pool_cls.return_value.__aexit__.assert_awaited_once()
