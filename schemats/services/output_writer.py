# ============================================================================
# OUTPUT WRITER
# ============================================================================
# STATUS: Service - Declaration file output
# PURPOSE: Write schema declarations and custom type placeholders to disk
# CREATED: 19 OCT 2026
# ============================================================================
"""
Output Writer

Layout under the configured out_dir:

    zapatos/
      schema.d.ts          always rewritten
      .eslintrc.json       always rewritten (ignore generated files)
      custom/              only when custom types exist
        index.d.ts         always rewritten
        PgMy_domain.d.ts   written once, never overwritten

Placeholder files are meant to be edited by hand, so an existing file is
left alone on every later run.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from schemats.core.config.settings import GeneratorConfig
from schemats.core.schema.output import header
from schemats.core.schema.ts_utils import CUSTOM_MODULE
from schemats.services.generation_service import GenerationResult

logger = logging.getLogger(__name__)

FOLDER_NAME = "zapatos"
CUSTOM_FOLDER_NAME = "custom"
ESLINTRC_NAME = ".eslintrc.json"
ESLINTRC_CONTENT = '{\n  "ignorePatterns": [\n    "*"\n  ]\n}\n'


@dataclass
class WriteResult:
    """Paths touched by a write."""
    schema_path: Path
    written: List[Path] = field(default_factory=list)
    skipped: List[Path] = field(default_factory=list)


def custom_types_index_content() -> str:
    return (
        header()
        + "\n// this empty declaration appears to fix relative imports in other custom type files\n"
        + f"declare module '{CUSTOM_MODULE}' {{ }}\n"
    )


def _write(path: Path, content: str) -> None:
    with open(path, "w", encoding="utf-8", newline="\n") as f:
        f.write(content)


def write_output(result: GenerationResult, config: GeneratorConfig) -> WriteResult:
    """
    Write a completed generation to disk.

    Args:
        result: Output of SchemaTypeGenerator.generate()
        config: Supplies out_dir and out_ext

    Returns:
        WriteResult listing written and preserved files
    """
    folder = Path(config.out_dir) / FOLDER_NAME
    schema_path = folder / f"schema{config.out_ext}"
    outcome = WriteResult(schema_path=schema_path)

    logger.info(f"(Re)creating schema folder: {folder}")
    folder.mkdir(parents=True, exist_ok=True)

    logger.info(f"Writing generated schema: {schema_path}")
    _write(schema_path, result.ts)
    outcome.written.append(schema_path)

    eslintrc_path = folder / ESLINTRC_NAME
    _write(eslintrc_path, ESLINTRC_CONTENT)
    outcome.written.append(eslintrc_path)

    sources = result.custom_type_sources
    if not sources:
        return outcome

    custom_folder = folder / CUSTOM_FOLDER_NAME
    custom_folder.mkdir(parents=True, exist_ok=True)

    for identifier, content in sources.items():
        path = custom_folder / f"{identifier}{config.out_ext}"
        if path.exists():
            logger.info(f"Custom type or domain declaration file already exists: {path}")
            outcome.skipped.append(path)
            continue
        logger.warning(f"Writing new custom type or domain placeholder file: {path}")
        _write(path, content)
        outcome.written.append(path)

    index_path = custom_folder / f"index{config.out_ext}"
    _write(index_path, custom_types_index_content())
    outcome.written.append(index_path)

    return outcome


__all__ = ["WriteResult", "write_output", "custom_types_index_content"]
