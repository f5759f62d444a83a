# ============================================================================
# RELATION TYPE SYNTHESIZER
# ============================================================================
# STATUS: Core - Per-relation type declarations
# PURPOSE: Build Selectable/Whereable/Insertable/Updatable for one relation
# CREATED: 19 OCT 2026
# EXPORTS: RelationTypeBlock, synthesize_relation
# DEPENDENCIES: schemats.core.schema.classifier
# ============================================================================
"""
Relation Type Synthesizer.

Folds the column classifier over one relation's columns (in catalog
order) and produces a RelationTypeBlock that renders as a TypeScript
namespace:

    export namespace users {
      export type Table = 'users';
      export interface Selectable { ... }    // rows as read
      export interface Whereable { ... }     // filter conditions
      export interface Insertable { ... }    // INSERT values
      export interface Updatable { ... }     // UPDATE values
      export interface JSONSelectable extends ...
      export type UniqueIndex = 'users_pkey' | 'users_email_key';
      export type Column = keyof Selectable;
      export type OnlyCols<T extends readonly Column[]> = ...;
      export type SQLExpression = ...;
      export type SQL = SQLExpression | SQLExpression[];
    }

Role rules per column:
- Selectable, Whereable: always
- Insertable: unless generated or excluded by column options; optional
  when nullable, defaulted, or marked optional
- Updatable: unless generated or excluded; always optional

The namespace name is the relation name made into a TS identifier
("user-logs" -> user_logs); Table keeps the exact catalog name.
"""

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Sequence, Tuple

from schemats.core.contracts import ColumnFact, EnumData, Relation
from schemats.core.schema.classifier import resolve_column_type
from schemats.core.schema.custom_types import CustomType, CustomTypeRegistry
from schemats.core.schema.pg_types import date_string_alternative
from schemats.core.schema.ts_utils import ts_identifier, ts_key, ts_literal, union

if TYPE_CHECKING:
    from schemats.core.config.settings import GeneratorConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RelationTypeBlock:
    """
    Synthesized declarations for one relation.

    Field tuples hold complete property declarations in catalog column
    order. custom_types are this relation's local findings in identifier
    order, to be merged into the run-wide registry by the caller.
    """
    relation: Relation
    schema_name: str
    selectables: Tuple[str, ...] = ()
    whereables: Tuple[str, ...] = ()
    insertables: Tuple[str, ...] = ()
    updatables: Tuple[str, ...] = ()
    unique_indexes: Tuple[str, ...] = ()
    custom_types: Tuple[CustomType, ...] = field(default_factory=tuple)

    @property
    def name(self) -> str:
        return self.relation.name

    def render(self) -> str:
        """TypeScript namespace text for this relation."""
        unique_index = union(ts_literal(index) for index in self.unique_indexes)
        lines = [
            f"export namespace {ts_identifier(self.name)} {{",
            f"  export type Table = {ts_literal(self.name)};",
            _interface("Selectable", self.selectables),
            _interface("Whereable", self.whereables),
            _interface("Insertable", self.insertables),
            _interface("Updatable", self.updatables),
            "  export interface JSONSelectable extends db.JSONSelectableFromSelectable<Selectable> { }",
            f"  export type UniqueIndex = {unique_index};",
            "  export type Column = keyof Selectable;",
            "  export type OnlyCols<T extends readonly Column[]> = Pick<Selectable, T[number]>;",
            "  export type SQLExpression = Table | db.ColumnNames<Updatable | (keyof Updatable)[]>"
            " | db.ColumnValues<Updatable> | Whereable | Column | db.ParentColumn | db.GenericSQLExpression;",
            "  export type SQL = SQLExpression | SQLExpression[];",
            "}",
        ]
        return "\n" + "\n".join(lines)


def _interface(name: str, fields: Sequence[str]) -> str:
    if not fields:
        return f"  export interface {name} {{ }}"
    body = "\n".join(f"    {declaration}" for declaration in fields)
    return f"  export interface {name} {{\n{body}\n  }}"


def synthesize_relation(
    relation: Relation,
    schema_name: str,
    columns: Sequence[ColumnFact],
    unique_indexes: Sequence[str],
    enums: EnumData,
    config: "GeneratorConfig",
) -> RelationTypeBlock:
    """
    Build the type block for one relation from its catalog facts.

    Args:
        relation: The table or materialized view
        schema_name: Schema the relation lives in
        columns: Column facts in catalog order
        unique_indexes: Unique index names in catalog order
        enums: Enums of the schema
        config: Column options and naming strategy

    Returns:
        RelationTypeBlock with local custom type findings
    """
    selectables: List[str] = []
    whereables: List[str] = []
    insertables: List[str] = []
    updatables: List[str] = []
    custom_types = CustomTypeRegistry()

    for column in columns:
        classification = resolve_column_type(
            column, enums, config.custom_types_transform, custom_types
        )

        ts_type = classification.type_expression
        key = ts_key(column.name)
        option = config.column_option(relation.name, column.name)

        is_insertable = not column.is_generated and not (option and option.insert_excluded)
        is_updatable = not column.is_generated and not (option and option.update_excluded)
        insertably_optional = (
            column.is_nullable or column.has_default or bool(option and option.insert_optional)
        )

        date_string = date_string_alternative(ts_type)
        or_date_string = f" | {date_string}" if date_string else ""
        or_null = " | null" if column.is_nullable else ""
        or_default = " | db.DefaultType" if column.is_nullable or column.has_default else ""

        selectables.append(f"{key}: {ts_type}{or_null};")

        basic_whereable = (
            f"{ts_type} | db.Parameter<{ts_type}>{or_date_string}"
            " | db.SQLFragment | db.ParentColumn"
        )
        whereables.append(
            f"{key}?: {basic_whereable} | db.SQLFragment<any, {basic_whereable}>;"
        )

        basic_insertable = (
            f"{ts_type} | db.Parameter<{ts_type}>{or_date_string}{or_null}{or_default}"
            " | db.SQLFragment"
        )
        if is_insertable:
            optional_mark = "?" if insertably_optional else ""
            insertables.append(f"{key}{optional_mark}: {basic_insertable};")
        if is_updatable:
            updatables.append(
                f"{key}?: {basic_insertable} | db.SQLFragment<any, {basic_insertable}>;"
            )

    logger.debug(
        f"Synthesized {schema_name}.{relation.name}: {len(selectables)} columns, "
        f"{len(unique_indexes)} unique indexes, {len(custom_types.identifiers())} custom types"
    )

    return RelationTypeBlock(
        relation=relation,
        schema_name=schema_name,
        selectables=tuple(selectables),
        whereables=tuple(whereables),
        insertables=tuple(insertables),
        updatables=tuple(updatables),
        unique_indexes=tuple(unique_indexes),
        custom_types=tuple(custom_types),
    )


__all__ = ["RelationTypeBlock", "synthesize_relation"]
