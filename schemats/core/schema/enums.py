# ============================================================================
# ENUM TYPES
# ============================================================================
# STATUS: Core - Enum declarations
# PURPOSE: Render PostgreSQL enums as TS literal unions and tuples
# CREATED: 19 OCT 2026
# ============================================================================
"""
Enum type rendering.

    export type mood = 'happy' | 'sad';
    export namespace every {
      export type mood = ['happy', 'sad'];
    }
"""

from schemats.core.contracts import EnumData
from schemats.core.schema.ts_utils import ts_literal, union


def enum_types_for_enum_data(enums: EnumData) -> str:
    """Declarations for every enum, in enum name order."""
    parts = []
    for name in sorted(enums):
        labels = [ts_literal(label) for label in enums[name]]
        parts.append(
            f"\nexport type {name} = {union(labels)};"
            f"\nexport namespace every {{"
            f"\n  export type {name} = [{', '.join(labels)}];"
            f"\n}}"
        )
    return "".join(parts)


__all__ = ["enum_types_for_enum_data"]
