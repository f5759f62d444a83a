# ============================================================================
# GENERATION SERVICE
# ============================================================================
# STATUS: Core - Generation pipeline
# PURPOSE: Introspect configured schemas and assemble the declaration text
# CREATED: 19 OCT 2026
# ============================================================================
"""
Generation Service

Runs one generation over every configured schema:

1. Per schema (concurrently): list relations and enums, filter the
   relations by the schema rules, sort them by name.
2. Per relation (concurrently): fetch columns and unique indexes,
   synthesize the relation's type block.
3. Sequentially, once everything has returned: merge each relation's
   custom type findings into one registry, check relation names are
   unique, assemble the output text.

The catalog queries are the only suspension points. The first failure
cancels the outstanding queries and propagates to the caller; there is
no partial result.

Usage:
    from schemats.services import generate_for_config

    result = await generate_for_config(config)
    print(result.ts)
"""

import asyncio
from dataclasses import dataclass, field
from itertools import chain
from typing import Any, Awaitable, Dict, Iterable, List

from schemats.core.config.settings import GeneratorConfig, SchemaRules
from schemats.core.contracts import EnumData, Relation
from schemats.core.logging import ComponentType, get_logger, log_checkpoint, log_context
from schemats.core.schema.custom_types import CustomTypeRegistry
from schemats.core.schema.output import schema_block, schema_declarations
from schemats.core.schema.relation_types import RelationTypeBlock, synthesize_relation
from schemats.core.schema.ts_utils import ts_identifier
from schemats.repositories.catalog_repo import CatalogRepository
from schemats.repositories.database import DatabasePool, resolve_connection_string

logger = get_logger(__name__, ComponentType.SERVICE)


class DuplicateRelationError(Exception):
    """Raised when two relations of a run share a name."""

    def __init__(self, relation_name: str, locations: List[str]):
        self.relation_name = relation_name
        self.locations = locations
        super().__init__(
            f"Relation name {relation_name!r} is not unique: {', '.join(locations)}"
        )


# ============================================================================
# RESULTS
# ============================================================================

@dataclass
class SchemaData:
    """Everything generated for one schema."""
    schema_name: str
    relations: List[Relation] = field(default_factory=list)
    enums: EnumData = field(default_factory=dict)
    blocks: List[RelationTypeBlock] = field(default_factory=list)

    def render(self) -> str:
        return schema_block(self.schema_name, self.enums, self.blocks)


@dataclass
class GenerationResult:
    """Output of a completed run."""
    ts: str
    relations: List[Relation]
    custom_types: CustomTypeRegistry

    @property
    def custom_type_sources(self) -> Dict[str, str]:
        """Identifier -> placeholder declaration file content."""
        return self.custom_types.placeholder_sources()


# ============================================================================
# HELPERS
# ============================================================================

def filter_relations(relations: Iterable[Relation], rules: SchemaRules) -> List[Relation]:
    """Apply include/exclude rules and sort by name."""
    allowed = [relation for relation in relations if rules.allows(relation.name)]
    return sorted(allowed, key=Relation.sort_key)


def check_unique_relations(relations_by_schema: Dict[str, List[Relation]]) -> None:
    """
    Reject repeated relation names.

    Every relation becomes a top-level namespace in the output, so two
    relations with the same namespace identifier cannot both be emitted:
    a table and a materialized view called `x` in one schema, `x` in two
    schemas, or `user-logs` next to `user_logs`.
    """
    seen: Dict[str, List[str]] = {}
    for schema_name in sorted(relations_by_schema):
        for relation in relations_by_schema[schema_name]:
            seen.setdefault(ts_identifier(relation.name), []).append(
                f"{schema_name}.{relation.name} ({relation.kind.value})"
            )
    for name, locations in seen.items():
        if len(locations) > 1:
            raise DuplicateRelationError(name, locations)


async def gather_all(*aws: Awaitable[Any]) -> List[Any]:
    """
    Await concurrently; on the first failure cancel the rest and re-raise.
    """
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


# ============================================================================
# GENERATOR
# ============================================================================

class SchemaTypeGenerator:
    """Generates the declaration text for all configured schemas."""

    def __init__(self, config: GeneratorConfig, catalog: CatalogRepository):
        self.config = config
        self.catalog = catalog

    async def generate(self) -> GenerationResult:
        """
        Run the whole pipeline.

        Raises:
            psycopg.Error: A catalog query failed
            DuplicateRelationError: Relation names collide
            CustomTypeCollisionError / CustomTypeConflictError
        """
        schema_names = sorted(self.config.schemas)
        logger.info(f"Generating types for schemas: {', '.join(schema_names) or '(none)'}")

        schema_data: List[SchemaData] = await gather_all(
            *(self._schema_data(name, self.config.schemas[name]) for name in schema_names)
        )

        registry = CustomTypeRegistry()
        for data in schema_data:
            for block in data.blocks:
                registry.merge(block.custom_types)

        all_relations = sorted(
            chain.from_iterable(data.relations for data in schema_data),
            key=Relation.sort_key,
        )
        check_unique_relations({data.schema_name: data.relations for data in schema_data})

        ts = schema_declarations(
            [(data.schema_name, data.render()) for data in schema_data],
            all_relations,
            has_custom_types=len(registry) > 0,
        )

        log_checkpoint(
            "run_completed",
            {"relations": len(all_relations), "custom_types": len(registry)},
        )
        return GenerationResult(ts=ts, relations=all_relations, custom_types=registry)

    async def _schema_data(self, schema_name: str, rules: SchemaRules) -> SchemaData:
        with log_context(schema=schema_name, operation="introspect_schema"):
            if rules.excludes_everything:
                # exclude "*" takes precedence; relations are not even listed
                relations: List[Relation] = []
                enums = await self.catalog.list_enums(schema_name)
            else:
                listed, enums = await gather_all(
                    self.catalog.list_relations(schema_name),
                    self.catalog.list_enums(schema_name),
                )
                relations = filter_relations(listed, rules)
                check_unique_relations({schema_name: relations})

            blocks: List[RelationTypeBlock] = await gather_all(
                *(self._relation_block(relation, schema_name, enums) for relation in relations)
            )

            log_checkpoint(
                "schema_introspected",
                {"relations": len(relations), "enums": len(enums)},
            )
            return SchemaData(
                schema_name=schema_name,
                relations=relations,
                enums=enums,
                blocks=blocks,
            )

    async def _relation_block(
        self,
        relation: Relation,
        schema_name: str,
        enums: EnumData,
    ) -> RelationTypeBlock:
        with log_context(relation=relation.name):
            columns, unique_indexes = await gather_all(
                self.catalog.list_columns(relation, schema_name),
                self.catalog.list_unique_indexes(relation, schema_name),
            )
            logger.debug(f"Fetched {len(columns)} columns, {len(unique_indexes)} unique indexes")
            return synthesize_relation(
                relation, schema_name, columns, unique_indexes, enums, self.config
            )


async def generate_for_config(config: GeneratorConfig) -> GenerationResult:
    """
    Generate declarations using a pool opened for this run only.

    The pool is closed after the last query, on success and on failure.
    """
    conninfo = resolve_connection_string(config.db)
    async with DatabasePool(
        conninfo,
        min_size=config.pool_min_size,
        max_size=config.pool_max_size,
    ) as pool:
        generator = SchemaTypeGenerator(config, CatalogRepository(pool))
        return await generator.generate()


__all__ = [
    "DuplicateRelationError",
    "SchemaData",
    "GenerationResult",
    "SchemaTypeGenerator",
    "filter_relations",
    "check_unique_relations",
    "gather_all",
    "generate_for_config",
]
