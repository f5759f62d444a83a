# ============================================================================
# BASE CONTRACTS & ENUMS
# ============================================================================
# STATUS: Foundation - Catalog facts shared across the compiler
# PURPOSE: Define relation kinds and the row shapes read from the catalog
# CREATED: 19 OCT 2026
# EXPORTS: RelationKind, Relation, ColumnFact, EnumData
# DEPENDENCIES: enum, pydantic
# ============================================================================
"""
Base contracts for the schema-to-type compiler.

These are the facts that cross the boundary between the catalog
queries (PostgreSQL) and the type synthesis (pure Python):
- Relation: a table or materialized view in one schema
- ColumnFact: one column's nullability, generation, default and types
- EnumData: enum type name -> ordered labels

All contracts are frozen; a catalog snapshot is never mutated during a run.
"""

from enum import Enum
from typing import Dict, List, Optional
from pydantic import BaseModel, Field


# ============================================================================
# RELATION KINDS
# ============================================================================

class RelationKind(str, Enum):
    """
    Kinds of relation introspected.

    Plain views and foreign tables are listed by information_schema
    alongside base tables and are treated as TABLE.
    """
    TABLE = "table"
    MATERIALIZED_VIEW = "mview"


# ============================================================================
# CATALOG FACTS
# ============================================================================

class Relation(BaseModel):
    """
    A table or materialized view, identified by name within its schema.
    """
    name: str = Field(..., description="Relation name as stored in the catalog")
    kind: RelationKind = Field(default=RelationKind.TABLE)

    model_config = {"frozen": True}

    @property
    def is_materialized_view(self) -> bool:
        return self.kind == RelationKind.MATERIALIZED_VIEW

    def sort_key(self):
        """Case-insensitive name first, exact name as tie-breaker."""
        return (self.name.casefold(), self.name)


class ColumnFact(BaseModel):
    """
    One column of a relation, as reported by the catalog.

    base_type_name is the catalog's udt name (e.g. "int4", "_text");
    domain_name is set only when the column is declared via a domain.
    """
    name: str
    is_nullable: bool = False
    is_generated: bool = False
    has_default: bool = False
    base_type_name: str
    domain_name: Optional[str] = None

    model_config = {"frozen": True}


# Enum type name -> labels in catalog sort order
EnumData = Dict[str, List[str]]


__all__ = [
    "RelationKind",
    "Relation",
    "ColumnFact",
    "EnumData",
]
