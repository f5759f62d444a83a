# ============================================================================
# SCHEMATS COMMAND LINE
# ============================================================================
# PURPOSE: Generate TypeScript schema declarations from a live database
# USAGE:
#   schemats                          # Generate using ./schemats.yaml
#   schemats --config db.json         # Use another config file
#   schemats --dry-run                # Print schema.d.ts, write nothing
# ============================================================================

import argparse
import asyncio
import sys
from typing import List, Optional

import psycopg
from pydantic import ValidationError

from schemats.__version__ import __version__
from schemats.core.config import ConfigError, load_config
from schemats.core.logging import ComponentType, configure_logging, get_logger
from schemats.core.schema.custom_types import CustomTypeError
from schemats.services import DuplicateRelationError, generate_for_config, write_output

logger = get_logger("schemats.cli", ComponentType.CLI)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schemats",
        description="Generate TypeScript declarations from a PostgreSQL schema",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  schemats                           # Generate using ./schemats.yaml
  schemats --config zapatosconfig.json
  schemats --dry-run                 # Print schema declarations only
  schemats --out-dir src --verbose

Environment Variables:
  SCHEMATS_CONFIG       Config file path (default: ./schemats.yaml)
  DATABASE_URL          Full PostgreSQL connection string
  POSTGRES_HOST         Database host (default: localhost)
  POSTGRES_DB           Database name (default: postgres)
  POSTGRES_USER         Database user (default: postgres)
  POSTGRES_PASSWORD     Database password
  POSTGRES_PORT         Database port (default: 5432)
  POSTGRES_SSLMODE      SSL mode (default: prefer)
  LOG_FORMAT            'json' for structured logs
        """
    )
    parser.add_argument(
        "--config", "-c",
        type=str,
        help="YAML or JSON config file"
    )
    parser.add_argument(
        "--connection",
        type=str,
        help="PostgreSQL connection string (overrides config and environment)"
    )
    parser.add_argument(
        "--out-dir",
        type=str,
        help="Output directory (overrides config)"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the schema declarations to stdout without writing files"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging"
    )
    parser.add_argument(
        "--log-format",
        choices=["human", "json"],
        default="human",
        help="Log output format"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    configure_logging(
        level="DEBUG" if args.verbose else "INFO",
        json_output=args.log_format == "json",
    )

    try:
        config = load_config(
            args.config,
            overrides={"db": args.connection, "out_dir": args.out_dir},
        )
    except (ConfigError, ValidationError, ValueError) as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    try:
        result = asyncio.run(generate_for_config(config))
    except psycopg.Error as e:
        logger.error(f"Catalog query failed: {e}")
        return 1
    except (DuplicateRelationError, CustomTypeError) as e:
        logger.error(str(e))
        return 1

    if args.dry_run:
        sys.stdout.write(result.ts)
        logger.info(
            f"Dry run: {len(result.relations)} relations, "
            f"{len(result.custom_types)} custom types (nothing written)"
        )
        return 0

    outcome = write_output(result, config)
    logger.info(
        f"Wrote {outcome.schema_path} "
        f"({len(result.relations)} relations, {len(result.custom_types)} custom types, "
        f"{len(outcome.skipped)} existing placeholders kept)"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
