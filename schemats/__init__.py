# ============================================================================
# SCHEMATS PACKAGE
# ============================================================================
# STATUS: Package initialization
# PURPOSE: PostgreSQL catalog to TypeScript schema declaration generator
# CREATED: 19 OCT 2026
# ============================================================================

from schemats.__version__ import __version__

__all__ = ["__version__"]
