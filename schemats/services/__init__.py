# ============================================================================
# SERVICES MODULE
# ============================================================================
# STATUS: Core - Pipeline layer
# PURPOSE: Generation run and file output
# CREATED: 19 OCT 2026
# ============================================================================
"""
Services Module

Coordinates the catalog repository, the schema compiler and the output
writer.

Usage:
    from schemats.services import generate_for_config, write_output

    result = await generate_for_config(config)
    write_output(result, config)
"""

from .generation_service import (
    DuplicateRelationError,
    GenerationResult,
    SchemaTypeGenerator,
    generate_for_config,
)
from .output_writer import WriteResult, write_output

__all__ = [
    "DuplicateRelationError",
    "GenerationResult",
    "SchemaTypeGenerator",
    "generate_for_config",
    "WriteResult",
    "write_output",
]
