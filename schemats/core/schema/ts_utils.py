# ============================================================================
# TYPESCRIPT TEXT UTILITIES
# ============================================================================
# STATUS: Core - DRY helpers for declaration text
# PURPOSE: Literals, property keys, module wrappers, unions
# CREATED: 19 OCT 2026
# EXPORTS: ts_literal, ts_key, ts_identifier, declare_module, union, SCHEMA_MODULE,
#          DB_MODULE, CUSTOM_MODULE
# ============================================================================
"""
TypeScript Text Utilities.

Small string builders shared by the relation, enum, custom-type and
output renderers. No renderer concatenates raw catalog names into quotes
itself; everything passes through ts_literal / ts_key / ts_identifier.
"""

import re
from typing import Iterable

SCHEMA_MODULE = "zapatos/schema"
DB_MODULE = "zapatos/db"
CUSTOM_MODULE = "zapatos/custom"

_IDENTIFIER = re.compile(r'[A-Za-z_$][A-Za-z0-9_$]*')
_LINE_START = re.compile(r'^(?=[ \t]*\S)', re.MULTILINE)
_NON_IDENTIFIER_CHAR = re.compile(r'[^A-Za-z0-9_$]')


def ts_literal(value: str) -> str:
    """Single-quoted TS string literal."""
    escaped = value.replace('\\', '\\\\').replace("'", "\\'").replace('\n', '\\n')
    return f"'{escaped}'"


def ts_key(name: str) -> str:
    """Property key, quoted only when it is not a plain identifier."""
    if _IDENTIFIER.fullmatch(name):
        return name
    return ts_literal(name)


def ts_identifier(name: str) -> str:
    """
    Namespace identifier for a relation name.

    Characters outside [A-Za-z0-9_$] become underscores, and a leading digit
    gets an underscore prefix ("user-logs" -> user_logs, "2fa" -> _2fa).
    """
    if _IDENTIFIER.fullmatch(name):
        return name
    identifier = _NON_IDENTIFIER_CHAR.sub('_', name)
    if not identifier or identifier[0].isdigit():
        identifier = '_' + identifier
    return identifier


def union(members: Iterable[str], empty: str = "never") -> str:
    """Join members with ' | ', or return `empty` when there are none."""
    members = list(members)
    if not members:
        return empty
    return " | ".join(members)


def declare_module(module: str, declarations: str) -> str:
    """
    Wrap declarations in `declare module '...' { }`.

    Non-blank lines are indented by two spaces.
    """
    indented = _LINE_START.sub('  ', declarations)
    return f"\ndeclare module {ts_literal(module)} {{\n{indented}\n}}\n"


__all__ = [
    "SCHEMA_MODULE",
    "DB_MODULE",
    "CUSTOM_MODULE",
    "ts_literal",
    "ts_key",
    "ts_identifier",
    "union",
    "declare_module",
]
