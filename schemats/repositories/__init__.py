# ============================================================================
# REPOSITORIES MODULE
# ============================================================================
# STATUS: Repository layer
# PURPOSE: Database pool and catalog queries
# CREATED: 19 OCT 2026
# ============================================================================

from .database import DatabasePool, get_connection_string, resolve_connection_string
from .catalog_repo import CatalogRepository

__all__ = [
    "DatabasePool",
    "get_connection_string",
    "resolve_connection_string",
    "CatalogRepository",
]
