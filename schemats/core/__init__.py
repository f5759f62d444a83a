# ============================================================================
# CORE MODULE
# ============================================================================
# STATUS: Core module initialization
# PURPOSE: Export catalog contracts
# CREATED: 19 OCT 2026
# ============================================================================

from schemats.core.contracts import RelationKind, Relation, ColumnFact, EnumData

__all__ = [
    "RelationKind",
    "Relation",
    "ColumnFact",
    "EnumData",
]
