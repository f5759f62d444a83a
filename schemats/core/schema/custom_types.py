# ============================================================================
# CUSTOM TYPE REGISTRY
# ============================================================================
# STATUS: Core - Accumulates custom type and domain placeholders
# PURPOSE: Keyed, conflict-checked map of identifier -> placeholder type
# CREATED: 19 OCT 2026
# EXPORTS: CustomType, CustomTypeRegistry, CustomTypeCollisionError,
#          CustomTypeConflictError
# ============================================================================
"""
Custom Type Registry.

Columns whose type is a domain, or whose base type is not in the mapping
table, are typed as `c.<Identifier>` and need a placeholder declaration
in the `zapatos/custom` module. The registry collects those identifiers.

Each relation builds its own local registry while it is synthesized; the
pipeline folds them into one run-wide registry afterwards, in sorted
relation order. Registration is idempotent for identical entries, and
fails loudly otherwise:

- CustomTypeCollisionError: two different raw names produced the same
  identifier under the configured naming strategy.
- CustomTypeConflictError: one raw name was registered with two different
  placeholder types (e.g. same-named domains over different base types in
  two schemas).
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional

from schemats.core.schema.ts_utils import CUSTOM_MODULE, DB_MODULE, declare_module

logger = logging.getLogger(__name__)

CUSTOM_TYPE_HEADER = """/*
** Please edit this file as needed **
It's been generated by schemats as a custom type definition placeholder, and won't be overwritten
*/
"""


# ============================================================================
# EXCEPTIONS
# ============================================================================

class CustomTypeError(Exception):
    """Base exception for custom type registration."""

    def __init__(self, message: str, identifier: str):
        self.identifier = identifier
        super().__init__(message)


class CustomTypeCollisionError(CustomTypeError):
    """Two raw names map to the same identifier."""

    def __init__(self, identifier: str, existing_raw: str, new_raw: str):
        self.existing_raw = existing_raw
        self.new_raw = new_raw
        super().__init__(
            f"Custom types {existing_raw!r} and {new_raw!r} both map to identifier "
            f"{identifier!r}; choose a different customTypesTransform",
            identifier,
        )


class CustomTypeConflictError(CustomTypeError):
    """One raw name registered with two different placeholder types."""

    def __init__(self, identifier: str, existing_placeholder: str, new_placeholder: str):
        self.existing_placeholder = existing_placeholder
        self.new_placeholder = new_placeholder
        super().__init__(
            f"Custom type {identifier!r} registered with conflicting placeholder types "
            f"{existing_placeholder!r} and {new_placeholder!r}",
            identifier,
        )


# ============================================================================
# REGISTRY
# ============================================================================

@dataclass(frozen=True)
class CustomType:
    """One placeholder declaration to emit."""
    identifier: str
    raw_name: str
    placeholder: str

    @property
    def reference(self) -> str:
        """Type expression used in schema declarations."""
        return f"c.{self.identifier}"

    def source(self) -> str:
        """Placeholder file content for this type."""
        imports = f"import type * as db from '{DB_MODULE}';\n" if "db." in self.placeholder else ""
        body = (
            imports
            + f"export type {self.identifier} = {self.placeholder};"
            + "  // replace with your custom type or interface as desired"
        )
        return CUSTOM_TYPE_HEADER + declare_module(CUSTOM_MODULE, body)


class CustomTypeRegistry:
    """Identifier -> CustomType map with collision checks."""

    def __init__(self):
        self._types: Dict[str, CustomType] = {}

    def register(self, custom_type: CustomType) -> None:
        """
        Add a custom type.

        Raises:
            CustomTypeCollisionError: identifier taken by another raw name
            CustomTypeConflictError: same raw name, different placeholder
        """
        existing = self._types.get(custom_type.identifier)
        if existing is None:
            self._types[custom_type.identifier] = custom_type
            logger.debug(
                f"Registered custom type {custom_type.identifier} "
                f"(from {custom_type.raw_name}, placeholder {custom_type.placeholder})"
            )
            return

        if existing.raw_name != custom_type.raw_name:
            raise CustomTypeCollisionError(
                custom_type.identifier, existing.raw_name, custom_type.raw_name
            )
        if existing.placeholder != custom_type.placeholder:
            raise CustomTypeConflictError(
                custom_type.identifier, existing.placeholder, custom_type.placeholder
            )

    def merge(self, custom_types) -> None:
        """Register every entry of another registry or iterable, in order."""
        for custom_type in custom_types:
            self.register(custom_type)

    def get(self, identifier: str) -> Optional[CustomType]:
        return self._types.get(identifier)

    def __contains__(self, identifier: str) -> bool:
        return identifier in self._types

    def __len__(self) -> int:
        return len(self._types)

    def __iter__(self) -> Iterator[CustomType]:
        """Entries in identifier order."""
        return iter([self._types[key] for key in sorted(self._types)])

    def identifiers(self) -> List[str]:
        return sorted(self._types)

    def placeholder_sources(self) -> Dict[str, str]:
        """Identifier -> placeholder file content."""
        return {custom_type.identifier: custom_type.source() for custom_type in self}


__all__ = [
    "CustomType",
    "CustomTypeRegistry",
    "CustomTypeError",
    "CustomTypeCollisionError",
    "CustomTypeConflictError",
    "CUSTOM_TYPE_HEADER",
]
