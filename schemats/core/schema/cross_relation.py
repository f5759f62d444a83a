# ============================================================================
# CROSS-RELATION AGGREGATOR
# ============================================================================
# STATUS: Core - Whole-schema union and lookup types
# PURPOSE: Emit unions over all relations and per-role lookup types
# CREATED: 19 OCT 2026
# EXPORTS: cross_relation_types, ROLES
# ============================================================================
"""
Cross-Relation Aggregator.

Given every relation of the run (already filtered and sorted), emits:

    export type Table = users.Table | posts.Table;
    export type Selectable = users.Selectable | posts.Selectable;
    ... (Whereable, Insertable, Updatable, UniqueIndex, Column, SQL)
    export type AllTables = [users.Table, posts.Table];
    export type AllMaterializedViews = [];
    export type SelectableForTable<T extends Table> = {
      users: users.Selectable;
      posts: posts.Selectable;
    }[T];
    ... (one lookup per role)

With no relations every union and lookup is `any` rather than `never`,
so generic code indexed by Table still compiles.
"""

from typing import Callable, List, Sequence

from schemats.core.contracts import Relation, RelationKind
from schemats.core.schema.ts_utils import ts_identifier, ts_key, union

ROLES = (
    "Selectable",
    "Whereable",
    "Insertable",
    "Updatable",
    "UniqueIndex",
    "Column",
    "SQL",
)

EMPTY_COMMENT = (
    "\n// `never` rather than `any` types would be more accurate in this no-tables case,"
    " but they stop generic table-indexed types compiling\n"
)


def _mapped_union(relations: Sequence[Relation], fn: Callable[[str], str]) -> str:
    return union((fn(ts_identifier(relation.name)) for relation in relations), empty="any")


def _tuple(relations: Sequence[Relation], kind: RelationKind) -> str:
    members = [
        f"{ts_identifier(relation.name)}.Table" for relation in relations if relation.kind == kind
    ]
    return "[" + ", ".join(members) + "]"


def _lookup(relations: Sequence[Relation], role: str) -> str:
    if not relations:
        body = "any"
    else:
        entries = "".join(
            f"\n  {ts_key(relation.name)}: {ts_identifier(relation.name)}.{role};"
            for relation in relations
        )
        body = "{" + entries + "\n}[T]"
    return f"\nexport type {role}ForTable<T extends Table> = {body};\n"


def cross_relation_types(relations: Sequence[Relation]) -> str:
    """
    Render the cross-relation section.

    Args:
        relations: All relations of the run, in output order

    Returns:
        TypeScript declarations text
    """
    lines: List[str] = []
    if not relations:
        lines.append(EMPTY_COMMENT)

    lines.append(f"\nexport type Table = {_mapped_union(relations, lambda name: f'{name}.Table')};")
    for role in ROLES:
        lines.append(
            f"export type {role} = {_mapped_union(relations, lambda name: f'{name}.{role}')};"
        )
    lines.append(f"export type AllTables = {_tuple(relations, RelationKind.TABLE)};")
    lines.append(
        f"export type AllMaterializedViews = {_tuple(relations, RelationKind.MATERIALIZED_VIEW)};"
    )
    lines.append("")

    return "\n".join(lines) + "".join(_lookup(relations, role) for role in ROLES)


__all__ = ["cross_relation_types", "ROLES"]
