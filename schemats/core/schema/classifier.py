# ============================================================================
# COLUMN CLASSIFIER
# ============================================================================
# STATUS: Core - Column type derivation
# PURPOSE: Classify a column into one of four type-derivation cases
# CREATED: 19 OCT 2026
# EXPORTS: KnownBuiltin, UnknownBuiltin, KnownDomain, UnknownDomain,
#          ColumnClassification, classify_column, resolve_column_type
# ============================================================================
"""
Column Classifier.

Every column lands in exactly one of four cases, decided by whether it
is declared via a domain and whether its base type is in the mapping
table:

    domain   base type   case             resulting type
    ------   ---------   --------------   -------------------------------
    no       known       KnownBuiltin     mapped type, used directly
    no       unknown     UnknownBuiltin   c.<base type>, placeholder any
    yes      known       KnownDomain      c.<domain>, placeholder = mapped
    yes      unknown     UnknownDomain    c.<domain>, placeholder any

Enum columns (and arrays of enums) count as known base types. Arrays of
domains or custom types become their own custom types ("_my_domain").

Classification never fails: unsupported types degrade to placeholders.
"""

from dataclasses import dataclass
from typing import Optional, Union

from schemats.core.contracts import ColumnFact, EnumData
from schemats.core.schema.custom_types import CustomType, CustomTypeRegistry
from schemats.core.schema.naming import NameTransform
from schemats.core.schema.pg_types import UNKNOWN_TYPE, is_unknown_type, ts_type_for_pg_type


# ============================================================================
# CLASSIFICATION CASES
# ============================================================================

@dataclass(frozen=True)
class KnownBuiltin:
    """Case 1: no domain, mapped base type."""
    ts_type: str

    @property
    def type_expression(self) -> str:
        return self.ts_type

    @property
    def custom_type(self) -> Optional[CustomType]:
        return None


@dataclass(frozen=True)
class _CustomTypeCase:
    custom_type: CustomType

    @property
    def type_expression(self) -> str:
        return self.custom_type.reference

    @property
    def identifier(self) -> str:
        return self.custom_type.identifier

    @property
    def placeholder(self) -> str:
        return self.custom_type.placeholder


@dataclass(frozen=True)
class UnknownBuiltin(_CustomTypeCase):
    """Case 2: no domain, unmapped base type."""
    base_type_name: str


@dataclass(frozen=True)
class KnownDomain(_CustomTypeCase):
    """Case 3: domain over a mapped base type."""
    domain_name: str
    base_type_name: str


@dataclass(frozen=True)
class UnknownDomain(_CustomTypeCase):
    """Case 4: domain over an unmapped base type."""
    domain_name: str
    base_type_name: str


ColumnClassification = Union[KnownBuiltin, UnknownBuiltin, KnownDomain, UnknownDomain]


# ============================================================================
# CLASSIFICATION
# ============================================================================

def classify_column(
    column: ColumnFact,
    enums: EnumData,
    name_transform: NameTransform,
) -> ColumnClassification:
    """
    Classify one column without touching any registry.

    Args:
        column: Catalog facts for the column
        enums: Enums of the column's schema
        name_transform: Configured custom type naming strategy

    Returns:
        One of KnownBuiltin, UnknownBuiltin, KnownDomain, UnknownDomain
    """
    mapped = ts_type_for_pg_type(column.base_type_name, enums)
    known = not is_unknown_type(mapped)

    if column.domain_name is None and known:
        return KnownBuiltin(ts_type=mapped)

    raw_name = column.domain_name if column.domain_name is not None else column.base_type_name
    custom_type = CustomType(
        identifier=name_transform(raw_name),
        raw_name=raw_name,
        placeholder=mapped if known else UNKNOWN_TYPE,
    )

    if column.domain_name is None:
        return UnknownBuiltin(custom_type=custom_type, base_type_name=column.base_type_name)
    if known:
        return KnownDomain(
            custom_type=custom_type,
            domain_name=column.domain_name,
            base_type_name=column.base_type_name,
        )
    return UnknownDomain(
        custom_type=custom_type,
        domain_name=column.domain_name,
        base_type_name=column.base_type_name,
    )


def resolve_column_type(
    column: ColumnFact,
    enums: EnumData,
    name_transform: NameTransform,
    registry: CustomTypeRegistry,
) -> ColumnClassification:
    """Classify a column and register any custom type it needs."""
    classification = classify_column(column, enums, name_transform)
    if classification.custom_type is not None:
        registry.register(classification.custom_type)
    return classification


__all__ = [
    "KnownBuiltin",
    "UnknownBuiltin",
    "KnownDomain",
    "UnknownDomain",
    "ColumnClassification",
    "classify_column",
    "resolve_column_type",
]
