# ============================================================================
# CONFIGURATION MODULE
# ============================================================================
# STATUS: Core - Configuration
# PURPOSE: Centralized configuration management
# CREATED: 19 OCT 2026
# ============================================================================
"""
Configuration Module

Provides the generator configuration models and file loader.
"""

from schemats.core.config.settings import (
    ALL,
    ConfigError,
    SchemaRules,
    ColumnOption,
    GeneratorConfig,
    load_config,
)

__all__ = [
    "ALL",
    "ConfigError",
    "SchemaRules",
    "ColumnOption",
    "GeneratorConfig",
    "load_config",
]
